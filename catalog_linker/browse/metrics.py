"""
Prometheus Metrics — browse layer observability.

Exposes counters and histograms for:
- Stage latency (annotate / rank / browse)
- Entity links emitted by annotation
- Search results returned per query

Usage
-----
    from catalog_linker.browse.metrics import timed_stage, record_entity_links

    with timed_stage("annotate"):
        blocks = annotator.annotate(text, exclude_id)

    record_entity_links(3)
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram


# ---------------------------------------------------------------------------
# Metric definitions
# ---------------------------------------------------------------------------

# Processing latency per stage (seconds).
STAGE_LATENCY: Histogram = Histogram(
    "catalog_stage_processing_seconds",
    "Processing time per catalog stage in seconds",
    ["stage_name"],
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
)

# Entity links produced by the annotator.
ENTITY_LINKS: Counter = Counter(
    "catalog_entity_links_total",
    "Entity links emitted while annotating record text",
)

# Records returned by ranked searches.
SEARCH_RESULTS: Histogram = Histogram(
    "catalog_search_results",
    "Number of records returned per ranked query",
    buckets=(0, 1, 5, 10, 25, 50, 100, 250),
)

# Output documents rejected by schema validation.
OUTPUT_VALIDATION_ERRORS: Counter = Counter(
    "catalog_output_validation_errors_total",
    "Output documents that failed schema validation",
    ["document"],
)


# ---------------------------------------------------------------------------
# Convenience helpers
# ---------------------------------------------------------------------------

def record_entity_links(count: int) -> None:
    """Add *count* emitted entity links."""
    if count > 0:
        ENTITY_LINKS.inc(count)


def record_search_results(count: int) -> None:
    """Observe the result size of one ranked query."""
    SEARCH_RESULTS.observe(count)


def record_output_validation_error(document: str) -> None:
    OUTPUT_VALIDATION_ERRORS.labels(document=document).inc()


@contextmanager
def timed_stage(stage_name: str) -> Generator[None, None, None]:
    """
    Context manager that records stage processing latency.

    Usage::

        with timed_stage("rank"):
            ranked = rank(records, query)
    """
    with STAGE_LATENCY.labels(stage_name=stage_name).time():
        yield

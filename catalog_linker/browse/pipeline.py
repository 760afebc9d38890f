"""
Browse Pipeline — main entry point for list and detail views.

browse_catalog:
    1. Library restriction (optional)
    2. Facet filters
    3. Ranked free-text search
    4. Starred / regular partition
    5. Output build + schema validation

render_record_detail:
    1. Annotate every block field (paragraphs / lists / spacers)
       and split semicolon fields (Benefits) into one bullet list
    2. Link every inline reference field
    3. Output build + schema validation

Both engines stay pure; this layer owns logging, metrics and validation.
"""
import logging
import re
import time
from typing import Dict, Iterable, List, Optional, Sequence

from catalog_linker.annotation.entity_linker import count_links
from catalog_linker.annotation.pipeline import Annotator
from catalog_linker.browse.filters import CatalogFilters, apply_filters
from catalog_linker.browse.metrics import (
    record_entity_links,
    record_search_results,
    timed_stage,
)
from catalog_linker.browse.output_builder import (
    build_detail_output,
    build_record_summary,
    build_search_output,
)
from catalog_linker.browse.starred_store import partition_starred
from catalog_linker.browse.validation import ensure_valid
from catalog_linker.config.constants import (
    ANNOTATED_FIELDS,
    FIELD_ID,
    FIELD_LIBRARY,
    INLINE_LINKED_FIELDS,
    LIBRARY_TOOLS,
    SEMICOLON_LIST_FIELDS,
    SEMICOLON_LIST_SEPARATOR,
)
from catalog_linker.config.schemas import DETAIL_OUTPUT_SCHEMA, SEARCH_OUTPUT_SCHEMA
from catalog_linker.models.record import Record, field_value
from catalog_linker.models.segment import Block, BulletList, Paragraph, Segment
from catalog_linker.search.ranker import rank_scored
from catalog_linker.search.relevance_scorer import RelevanceScorer, normalize_query

logger = logging.getLogger(__name__)


def browse_catalog(
    records: Sequence[Record],
    query: str = "",
    filters: Optional[CatalogFilters] = None,
    starred_ids: Iterable[str] = (),
    library: Optional[str] = None,
    scorer: Optional[RelevanceScorer] = None,
) -> dict:
    """
    Filter, rank and group records for a list view.

    Args:
        records: Full catalog (already loaded).
        query: Raw search box content; empty means browse all.
        filters: Selected facets (None = no facet filtering).
        starred_ids: Ids the user starred; those records are listed first.
        library: "Activities" | "Tools" | None.
        scorer: Optional custom relevance scorer.

    Returns:
        Search document conforming to SEARCH_OUTPUT_SCHEMA.
    """
    start = time.monotonic()

    pool = list(records)
    if library is not None:
        pool = [r for r in pool if field_value(r, FIELD_LIBRARY) == library]
    total = len(pool)

    if filters is not None:
        pool = apply_filters(pool, filters)

    has_query = bool(normalize_query(query))
    with timed_stage("rank"):
        scored = rank_scored(pool, query, scorer)
    record_search_results(len(scored))

    scores = {id(s.record): s.score for s in scored} if has_query else {}
    starred_set = set(starred_ids)
    starred, regular = partition_starred([s.record for s in scored], starred_set)

    def _summary(record: Record, is_starred: bool):
        return build_record_summary(record, starred=is_starred, score=scores.get(id(record)))

    output = build_search_output(
        query=query.strip(),
        total=total,
        starred=[_summary(r, True) for r in starred],
        results=[_summary(r, False) for r in regular],
    )

    logger.info(
        "browse(query='%s', library=%s): %d/%d matched (%d starred) in %.1f ms",
        query.strip(),
        library or "all",
        output["matched"],
        total,
        len(starred),
        (time.monotonic() - start) * 1000,
    )
    return ensure_valid(output, SEARCH_OUTPUT_SCHEMA, "search")


def _block_link_count(blocks: List[Block]) -> int:
    count = 0
    for block in blocks:
        if isinstance(block, Paragraph):
            count += count_links(block.segments)
        elif isinstance(block, BulletList):
            count += sum(count_links(item) for item in block.items)
    return count


def render_record_detail(
    record: Record,
    records: Sequence[Record],
    annotator: Optional[Annotator] = None,
) -> dict:
    """
    Annotate every text field of ``record`` against the catalog.

    Args:
        record: The record being displayed (excluded from its own links).
        records: Catalog records that may be linked to.
        annotator: Shared facade for this render cycle; built if omitted.

    Returns:
        Detail document conforming to DETAIL_OUTPUT_SCHEMA. Empty fields
        are omitted.
    """
    annotator = annotator or Annotator(records)
    record_id = field_value(record, FIELD_ID)

    blocks: Dict[str, List[Block]] = {}
    inline: Dict[str, List[Segment]] = {}
    links = 0

    with timed_stage("annotate"):
        for name in ANNOTATED_FIELDS:
            value = field_value(record, name)
            if value:
                blocks[name] = annotator.annotate(value, exclude_id=record_id)
                links += _block_link_count(blocks[name])

        for name in SEMICOLON_LIST_FIELDS:
            parts = [p.strip() for p in re.split(SEMICOLON_LIST_SEPARATOR, field_value(record, name))]
            items = tuple(
                tuple(annotator.link_inline(part, exclude_id=record_id)) for part in parts if part
            )
            if items:
                blocks[name] = [BulletList(items)]
                links += _block_link_count(blocks[name])

        for name in INLINE_LINKED_FIELDS:
            value = field_value(record, name)
            if value:
                inline[name] = annotator.link_inline(value, exclude_id=record_id)
                links += count_links(inline[name])

    record_entity_links(links)
    logger.info(
        "detail(id=%s): %d block fields, %d inline fields, %d entity links",
        record_id,
        len(blocks),
        len(inline),
        links,
    )

    output = build_detail_output(record, blocks, inline)
    return ensure_valid(output, DETAIL_OUTPUT_SCHEMA, "detail")


def linkable_records(record: Record, records: Sequence[Record]) -> List[Record]:
    """
    Records a detail view of ``record`` may link to.

    Tool pages link to other tools only. Activity pages link to both
    activities and tools.
    """
    if field_value(record, FIELD_LIBRARY) == LIBRARY_TOOLS:
        return [r for r in records if field_value(r, FIELD_LIBRARY) == LIBRARY_TOOLS]
    return list(records)


def find_record(records: Sequence[Record], record_id: str) -> Optional[Record]:
    for record in records:
        if field_value(record, FIELD_ID) == record_id:
            return record
    return None

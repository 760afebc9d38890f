"""
Ranker — reorders records by relevance to a free-text query.

Empty or whitespace queries are the browse-all case: the input order is
returned unchanged. Otherwise records scoring 0 are dropped and the rest
are sorted by score descending, then numeric id ascending. The sort is
stable, so equal (score, id) pairs keep their input order.
"""
import logging
from typing import List, Optional, Sequence

from catalog_linker.models.record import Record, ScoredRecord, numeric_id
from catalog_linker.search.relevance_scorer import (
    RelevanceScorer,
    normalize_query,
    relevance_scorer,
)

logger = logging.getLogger(__name__)


def rank_scored(
    records: Sequence[Record],
    query: str,
    scorer: Optional[RelevanceScorer] = None,
) -> List[ScoredRecord]:
    """Scored, ordered matches for a non-empty query (with signals)."""
    q = normalize_query(query)
    if not q:
        return [ScoredRecord(record, 0) for record in records]

    scorer = scorer or relevance_scorer
    scored = scorer.score_records(records, q)
    scored.sort(key=lambda s: (-s.score, numeric_id(s.record)))

    logger.debug("rank('%s'): %d/%d records matched", q, len(scored), len(records))
    return scored


def rank(
    records: Sequence[Record],
    query: Optional[str],
    scorer: Optional[RelevanceScorer] = None,
) -> List[Record]:
    """
    Rank records for a query.

    Args:
        records: Catalog records.
        query: Raw user query.
        scorer: Optional custom scorer (defaults to the module scorer).

    Returns:
        Matching records, most relevant first. Identity for empty queries.
    """
    if not normalize_query(query):
        return list(records)
    return [s.record for s in rank_scored(records, query or "", scorer)]

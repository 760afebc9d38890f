"""
Relevance Scoring — tiered, additive substring scorer.

Computes a record's relevance to a query by combining:
- Name tier (exact > prefix > substring, at most one applies)
- Aliases substring
- Short description substring
- Long-form field substrings (one bonus per matching field)

Weights are configurable; the defaults reproduce the catalog's ranking.
"""
from typing import Dict, Iterable, List, Optional

from catalog_linker.config.constants import (
    DEFAULT_WEIGHTS,
    FIELD_ALIASES,
    FIELD_CODE_NAME,
    FIELD_DISPLAY_NAME,
    FIELD_SHORT_DESCRIPTION,
    LONG_FORM_SEARCH_FIELDS,
)
from catalog_linker.models.record import Record, ScoredRecord, field_value


def normalize_query(query: Optional[str]) -> str:
    return (query or "").strip().lower()


class RelevanceScorer:
    """
    Additive relevance scorer with configurable tier weights.

    Name tiers are mutually exclusive and checked in priority order;
    every other tier adds independently.
    """

    def __init__(
        self,
        weights: Optional[Dict[str, int]] = None,
        long_form_fields: Optional[List[str]] = None,
    ):
        self.weights = weights if weights is not None else DEFAULT_WEIGHTS.copy()
        self.long_form_fields = (
            long_form_fields if long_form_fields is not None else list(LONG_FORM_SEARCH_FIELDS)
        )

    def score(self, record: Record, query: str) -> dict:
        """
        Score one record against an already normalized query.

        Args:
            record: Catalog record.
            query: Lower-cased, trimmed query (see normalize_query).

        Returns:
            {
                "score": int,
                "signals": List[str],
            }
        """
        score = 0
        signals: List[str] = []

        display = field_value(record, FIELD_DISPLAY_NAME).lower()
        code = field_value(record, FIELD_CODE_NAME).lower()

        # 1. Name tier
        if display == query or code == query:
            score += self.weights["name_exact"]
            signals.append("name_exact")
        elif display.startswith(query) or code.startswith(query):
            score += self.weights["name_prefix"]
            signals.append("name_prefix")
        elif query in display or query in code:
            score += self.weights["name_substring"]
            signals.append("name_substring")

        # 2. Aliases
        if query in field_value(record, FIELD_ALIASES).lower():
            score += self.weights["aliases"]
            signals.append("aliases")

        # 3. Short description
        if query in field_value(record, FIELD_SHORT_DESCRIPTION).lower():
            score += self.weights["short_description"]
            signals.append("short_description")

        # 4. Long-form fields
        for name in self.long_form_fields:
            if query in field_value(record, name).lower():
                score += self.weights["long_form"]
                signals.append(f"long_form:{name}")

        return {"score": score, "signals": signals}

    def score_records(self, records: Iterable[Record], query: str) -> List[ScoredRecord]:
        """Score every record; zero-score records are dropped."""
        scored: List[ScoredRecord] = []
        for record in records:
            result = self.score(record, query)
            if result["score"] > 0:
                scored.append(ScoredRecord(record, result["score"], result["signals"]))
        return scored


# Module-level default scorer instance
relevance_scorer = RelevanceScorer()

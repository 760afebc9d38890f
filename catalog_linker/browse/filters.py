"""
Facet Filters — pillar / phase / parent skill for activities,
pricing / technical rating / platform for tools.

Multi-value cells (phases, parent skills, platforms) are split on their
separators before matching; every facet left empty does not filter.
"""
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from catalog_linker.config.constants import (
    FIELD_PARENT_SKILLS,
    FIELD_PHASES,
    FIELD_PILLAR,
    FIELD_PLATFORM,
    FIELD_PRICING,
    FIELD_TECHNICAL_RATING,
    MULTI_VALUE_SEPARATORS,
)
from catalog_linker.models.record import Record, field_value


def split_multi_value(value: str, field_name: str) -> List[str]:
    """Split a cell into trimmed, non-empty values (single-value fields → [value])."""
    separator = MULTI_VALUE_SEPARATORS.get(field_name)
    if separator is None:
        value = value.strip()
        return [value] if value else []
    return [part.strip() for part in re.split(separator, value) if part.strip()]


def unique_options(records: Iterable[Record], field_name: str) -> List[str]:
    """Sorted distinct values of a facet across records."""
    values = set()
    for record in records:
        values.update(split_multi_value(field_value(record, field_name), field_name))
    return sorted(values)


@dataclass
class CatalogFilters:
    """Selected facet values; empty strings / lists mean "any"."""

    pillar: str = ""
    phase: str = ""
    parent_skill: str = ""
    pricing: str = ""
    technical_rating: str = ""
    platforms: List[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not any(
            (self.pillar, self.phase, self.parent_skill, self.pricing, self.technical_rating, self.platforms)
        )

    def matches(self, record: Record) -> bool:
        if self.pillar and field_value(record, FIELD_PILLAR) != self.pillar:
            return False
        if self.pricing and field_value(record, FIELD_PRICING) != self.pricing:
            return False
        if self.technical_rating and field_value(record, FIELD_TECHNICAL_RATING) != self.technical_rating:
            return False
        if self.phase and self.phase not in split_multi_value(field_value(record, FIELD_PHASES), FIELD_PHASES):
            return False
        if self.parent_skill and self.parent_skill not in split_multi_value(
            field_value(record, FIELD_PARENT_SKILLS), FIELD_PARENT_SKILLS
        ):
            return False
        if self.platforms:
            available = split_multi_value(field_value(record, FIELD_PLATFORM), FIELD_PLATFORM)
            if not any(p in available for p in self.platforms):
                return False
        return True


def apply_filters(records: Sequence[Record], filters: CatalogFilters) -> List[Record]:
    """Keep records matching every selected facet, preserving order."""
    if filters.is_empty():
        return list(records)
    return [r for r in records if filters.matches(r)]

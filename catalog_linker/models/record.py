"""
Record helpers — a catalog record is a flat mapping of field name → string.

Absent fields read as the empty string; malformed ids sort as 0.
"""
import re
from dataclasses import dataclass, field
from typing import List, Mapping

from catalog_linker.config.constants import (
    FIELD_CODE_NAME,
    FIELD_DISPLAY_NAME,
    FIELD_ID,
    FIELD_LIBRARY,
    LIBRARY_TOOLS,
)

Record = Mapping[str, str]

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def field_value(record: Record, name: str) -> str:
    value = record.get(name)
    return value if isinstance(value, str) else ""


def display_name(record: Record) -> str:
    """Canonical label: Display Name, falling back to code name."""
    return field_value(record, FIELD_DISPLAY_NAME) or field_value(record, FIELD_CODE_NAME)


def numeric_id(record: Record) -> int:
    """Leading integer of the id field; 0 when missing or non-numeric."""
    match = _LEADING_INT.match(field_value(record, FIELD_ID))
    return int(match.group(1)) if match else 0


def is_tool(record: Record) -> bool:
    return field_value(record, FIELD_LIBRARY) == LIBRARY_TOOLS


def detail_path(record: Record) -> str:
    """Route of the detail view for a record."""
    prefix = "tool" if is_tool(record) else "activity"
    return f"/{prefix}/{field_value(record, FIELD_ID)}"


@dataclass
class ScoredRecord:
    """A record paired with its relevance score (transient, ranking only)."""

    record: Record
    score: int
    signals: List[str] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"ScoredRecord('{display_name(self.record)}', {self.score})"

"""
Annotated text model — inline segments and the blocks that hold them.

Inline segments of one line never overlap; concatenating their ``text``
reproduces the line exactly.
"""
from dataclasses import dataclass, field
from typing import Tuple, Union

from catalog_linker.config.constants import FIELD_ID, FIELD_LIBRARY
from catalog_linker.models.record import Record, detail_path, display_name, field_value


@dataclass(frozen=True)
class PlainText:
    """Literal text, rendered as-is."""

    text: str


@dataclass(frozen=True)
class EntityLink:
    """Reference to another catalog record, as matched in the text."""

    record: Record = field(compare=False, repr=False)
    text: str
    record_id: str = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "record_id", field_value(self.record, FIELD_ID))

    @property
    def library(self) -> str:
        return field_value(self.record, FIELD_LIBRARY)

    @property
    def href(self) -> str:
        return detail_path(self.record)

    def __repr__(self) -> str:
        return f"EntityLink('{self.text}' → '{display_name(self.record)}')"


@dataclass(frozen=True)
class ExternalLink:
    """http(s) URL; label and target are the literal matched text."""

    url: str

    @property
    def text(self) -> str:
        return self.url


Segment = Union[PlainText, EntityLink, ExternalLink]


@dataclass(frozen=True)
class Paragraph:
    segments: Tuple[Segment, ...]

    @property
    def text(self) -> str:
        return "".join(s.text for s in self.segments)


@dataclass(frozen=True)
class BulletList:
    """Single-level bullet list; one segment tuple per item."""

    items: Tuple[Tuple[Segment, ...], ...]


@dataclass(frozen=True)
class Spacer:
    """Blank line between paragraphs."""


Block = Union[Paragraph, BulletList, Spacer]


def segments_text(segments) -> str:
    """Concatenate the literal text of a segment sequence."""
    return "".join(s.text for s in segments)

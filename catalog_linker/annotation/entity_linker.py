"""
Entity Linker — whole-word, case-insensitive linking of known names.

Candidates are applied longest first. Each candidate scans only the
fragments that are still plain text, so a longer name that already
claimed a span can never be split by a shorter one. Shorter names are
still tried inside the plain pieces left around earlier links.

A match must not touch a word character on either side. This boundary
rule applies before length priority: "Go" never matches inside "Google".
"""
import re
from typing import List, Sequence

from catalog_linker.annotation.entity_index import EntityIndex
from catalog_linker.models.segment import EntityLink, PlainText, Segment


def compile_name_pattern(name: str) -> "re.Pattern[str]":
    """Whole-word, case-insensitive pattern for a literal entity name."""
    return re.compile(rf"(?<!\w){re.escape(name)}(?!\w)", re.IGNORECASE)


def _split_fragment(fragment: PlainText, pattern: "re.Pattern[str]", record) -> List[Segment]:
    pieces: List[Segment] = []
    text = fragment.text
    pos = 0

    for match in pattern.finditer(text):
        if match.start() > pos:
            pieces.append(PlainText(text[pos : match.start()]))
        pieces.append(EntityLink(record=record, text=match.group(0)))
        pos = match.end()

    if not pieces:
        return [fragment]

    if pos < len(text):
        pieces.append(PlainText(text[pos:]))
    return pieces


def link_entities(text: str, index: EntityIndex) -> List[Segment]:
    """
    Replace every known entity name in ``text`` with an EntityLink.

    Args:
        text: A single line or list item (never spans line breaks).
        index: Entity index for this pass.

    Returns:
        Ordered segments; their concatenated text equals ``text``.
    """
    if not text:
        return []

    segments: List[Segment] = [PlainText(text)]
    if not index.candidates:
        return segments

    for name in index.candidates:
        pattern = compile_name_pattern(name)
        record = index.by_name[name]

        next_segments: List[Segment] = []
        for segment in segments:
            if isinstance(segment, PlainText):
                next_segments.extend(_split_fragment(segment, pattern, record))
            else:
                next_segments.append(segment)
        segments = next_segments

    return segments


def count_links(segments: Sequence[Segment]) -> int:
    return sum(1 for s in segments if isinstance(s, EntityLink))

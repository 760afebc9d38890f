"""
Block Splitter — minimal markdown-lite segmentation of free text.

Only three block kinds exist: paragraphs, single-level bullet lists and
blank-line spacers. No nesting, headings or emphasis.

    - a line whose trimmed form starts with "- " or "* " is a list item
      (marker stripped); consecutive items form one list
    - any other non-blank line is a paragraph (kept untrimmed)
    - a blank line is a spacer, except before any other block
"""
from typing import Iterator, List, Tuple, Union

from catalog_linker.config.constants import LIST_MARKERS

PARAGRAPH = "paragraph"
BULLET_LIST = "list"
SPACER = "spacer"

RawBlock = Tuple[str, Union[str, List[str], None]]


def split_blocks(text: str) -> Iterator[RawBlock]:
    """
    Lazily split ``text`` into raw blocks.

    Yields:
        (PARAGRAPH, line) | (BULLET_LIST, [item, ...]) | (SPACER, None)
    """
    if not text:
        return

    pending_items: List[str] = []
    emitted = 0

    for line in text.split("\n"):
        trimmed = line.strip()

        if trimmed.startswith(LIST_MARKERS):
            pending_items.append(trimmed[2:])
            continue

        if pending_items:
            yield BULLET_LIST, pending_items
            emitted += 1
            pending_items = []

        if trimmed:
            yield PARAGRAPH, line
            emitted += 1
        elif emitted:
            yield SPACER, None
            emitted += 1

    if pending_items:
        yield BULLET_LIST, pending_items

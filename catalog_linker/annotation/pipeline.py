"""
Annotation Pipeline — free text → linked blocks.

Pipeline:
    1. Build the entity index (exclusions applied once)
    2. Split text into paragraphs / bullet lists / spacers
    3. Entity pass per line (longest name first, whole-word, case-insensitive)
    4. URL pass on fragments still plain

Every displayed text field goes through the same ``annotate`` call; the
``Annotator`` facade only adds index memoization for one record list.
"""
import logging
from functools import lru_cache
from typing import Iterable, Iterator, List, Optional, Sequence

from catalog_linker.annotation.block_splitter import (
    BULLET_LIST,
    PARAGRAPH,
    split_blocks,
)
from catalog_linker.annotation.entity_index import EntityIndex, build_entity_index
from catalog_linker.annotation.entity_linker import link_entities
from catalog_linker.annotation.url_linker import link_urls
from catalog_linker.config import settings
from catalog_linker.models.record import Record
from catalog_linker.models.segment import (
    Block,
    BulletList,
    Paragraph,
    Segment,
    Spacer,
)

logger = logging.getLogger(__name__)


def link_line(line: str, index: EntityIndex) -> List[Segment]:
    """Entity pass then URL pass on a single line."""
    return link_urls(link_entities(line, index))


def iter_blocks(text: Optional[str], index: EntityIndex) -> Iterator[Block]:
    """Lazily yield annotated blocks for ``text`` against a prebuilt index."""
    for kind, payload in split_blocks(text or ""):
        if kind == PARAGRAPH:
            yield Paragraph(tuple(link_line(payload, index)))
        elif kind == BULLET_LIST:
            yield BulletList(tuple(tuple(link_line(item, index)) for item in payload))
        else:
            yield Spacer()


def annotate(
    text: Optional[str],
    known_entities: Iterable[Record],
    exclude_id: Optional[str] = None,
) -> List[Block]:
    """
    Annotate free text with links to other catalog records.

    Args:
        text: Free-form field content. Empty or None yields [].
        known_entities: Records that may be referenced by name.
        exclude_id: id of the record being displayed (never linked to itself).

    Returns:
        Ordered blocks (Paragraph | BulletList | Spacer).
    """
    if not text:
        return []
    index = build_entity_index(known_entities, exclude_id)
    return list(iter_blocks(text, index))


def link_inline(
    text: Optional[str],
    known_entities: Iterable[Record],
    exclude_id: Optional[str] = None,
) -> List[Segment]:
    """
    Inline variant for short reference fields: no block splitting.

    The whole value is linked as one line, so the concatenated segment
    text equals ``text``.
    """
    if not text:
        return []
    index = build_entity_index(known_entities, exclude_id)
    return link_line(text, index)


class Annotator:
    """
    Annotation facade bound to one record list (one render cycle).

    The entity index depends only on (records, exclude_id); it is memoized
    per exclude_id for the lifetime of this instance. Output is identical
    to the module-level ``annotate`` / ``link_inline``.
    """

    def __init__(self, records: Sequence[Record], cache_size: Optional[int] = None):
        self.records = tuple(records)
        size = settings.ANNOTATOR_INDEX_CACHE_SIZE if cache_size is None else cache_size
        self._index_for = lru_cache(maxsize=size)(self._build_index)

    def _build_index(self, exclude_id: Optional[str]) -> EntityIndex:
        index = build_entity_index(self.records, exclude_id)
        if index.collisions:
            logger.debug("Unreachable entity names (collisions): %s", sorted(set(index.collisions)))
        return index

    def index(self, exclude_id: Optional[str] = None) -> EntityIndex:
        return self._index_for(exclude_id)

    def annotate(self, text: Optional[str], exclude_id: Optional[str] = None) -> List[Block]:
        if not text:
            return []
        return list(iter_blocks(text, self.index(exclude_id)))

    def link_inline(self, text: Optional[str], exclude_id: Optional[str] = None) -> List[Segment]:
        if not text:
            return []
        return link_line(text, self.index(exclude_id))

    def cache_info(self):
        return self._index_for.cache_info()

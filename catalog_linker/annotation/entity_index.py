"""
Entity Index — lower-cased display name → record, plus the match candidates.

Built fresh for every annotation call (or once per exclude id by the
memoizing Annotator). Exclusions are applied here, never per match:
    - the record being rendered (no self-links)
    - records named "other" (placeholder, not an entity)
    - records without a display name

Name collisions after lower-casing keep the LAST record seen. The losing
records are reported in ``collisions`` so callers can surface them.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from catalog_linker.config.constants import FIELD_ID, PLACEHOLDER_NAME
from catalog_linker.models.record import Record, display_name, field_value

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntityIndex:
    """Lookup map and longest-first candidate names for one annotation pass."""

    by_name: Dict[str, Record]
    candidates: List[str]
    collisions: List[str] = field(default_factory=list)

    def lookup(self, name: str) -> Optional[Record]:
        return self.by_name.get(name.lower())

    def __len__(self) -> int:
        return len(self.by_name)


def build_entity_index(
    known_entities: Iterable[Record],
    exclude_id: Optional[str] = None,
) -> EntityIndex:
    """
    Build the entity index for one annotation pass.

    Args:
        known_entities: Catalog records that may be linked to.
        exclude_id: id of the record currently displayed (never linked).

    Returns:
        EntityIndex whose candidates are sorted by descending length.
        Equal lengths keep first-seen order.
    """
    by_name: Dict[str, Record] = {}
    collisions: List[str] = []

    for record in known_entities or ():
        name = display_name(record)
        if not name:
            continue
        if exclude_id is not None and field_value(record, FIELD_ID) == exclude_id:
            continue

        key = name.lower()
        if key == PLACEHOLDER_NAME:
            continue

        if key in by_name:
            logger.debug(
                "Entity name collision on '%s': id=%s replaces id=%s",
                key,
                field_value(record, FIELD_ID),
                field_value(by_name[key], FIELD_ID),
            )
            collisions.append(key)
        by_name[key] = record

    # Length of the display name, not of its lower-cased key
    candidates = sorted(by_name, key=lambda k: len(display_name(by_name[k])), reverse=True)
    logger.debug("Entity index built: %d names (exclude_id=%s)", len(candidates), exclude_id)

    return EntityIndex(by_name=by_name, candidates=candidates, collisions=collisions)

"""
Starred Store — the user's starred record ids, persisted in Redis.

The ids live as one JSON list under a single key. Any client exposing
``get`` / ``set`` works (redis.Redis, or an in-memory stub in tests).
A missing key or an unreadable payload reads as "nothing starred".
"""
from __future__ import annotations

import json
import logging
from typing import Any, Iterable, List, Sequence, Tuple

import redis

from catalog_linker.config import settings
from catalog_linker.config.constants import FIELD_ID
from catalog_linker.models.record import Record, field_value

logger = logging.getLogger(__name__)


class StarredStore:
    """Starred ids kept under one Redis key."""

    def __init__(self, redis_client: Any, key: str | None = None) -> None:
        self.redis_client = redis_client
        self.key = key or settings.STARRED_STORAGE_KEY

    @classmethod
    def from_url(cls, url: str | None = None, key: str | None = None) -> "StarredStore":
        client = redis.Redis.from_url(url or settings.REDIS_URL, decode_responses=True)
        return cls(client, key)

    def starred_ids(self) -> List[str]:
        raw = self.redis_client.get(self.key)
        if raw is None:
            return []

        try:
            parsed = json.loads(raw)
        except (TypeError, ValueError) as e:
            logger.warning("Starred payload under '%s' is not JSON: %s", self.key, e)
            return []

        if not isinstance(parsed, list):
            logger.warning("Starred payload under '%s' is not a list, ignoring", self.key)
            return []
        return [str(item) for item in parsed]

    def is_starred(self, record_id: str) -> bool:
        return record_id in self.starred_ids()

    def toggle(self, record_id: str) -> bool:
        """Star or unstar ``record_id``. Returns the new starred state."""
        ids = self.starred_ids()
        if record_id in ids:
            ids = [i for i in ids if i != record_id]
            starred = False
        else:
            ids.append(record_id)
            starred = True

        self.redis_client.set(self.key, json.dumps(ids))
        logger.debug("toggle(%s) → starred=%s (%d total)", record_id, starred, len(ids))
        return starred


def partition_starred(
    records: Sequence[Record],
    starred_ids: Iterable[str],
) -> Tuple[List[Record], List[Record]]:
    """Split records into (starred, regular), each keeping input order."""
    wanted = set(starred_ids)
    starred = [r for r in records if field_value(r, FIELD_ID) in wanted]
    regular = [r for r in records if field_value(r, FIELD_ID) not in wanted]
    return starred, regular

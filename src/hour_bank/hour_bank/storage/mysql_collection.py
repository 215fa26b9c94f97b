from __future__ import annotations

import json
import logging
from typing import Any, Callable, Generic, List, Optional, Sequence, TypeVar

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone

logger = logging.getLogger(__name__)

T = TypeVar("T")


class MySQLCollection(Generic[T]):
    """A whole collection stored as one JSON document row in ``collections``."""

    def __init__(
        self,
        conn_factory: DatabaseConnection,
        name: str,
        *,
        encode: Callable[[T], dict],
        decode: Callable[[Any], Optional[T]],
    ):
        self._conn_factory = conn_factory
        self._name = name
        self._encode = encode
        self._decode = decode

    def get(self) -> List[T]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT payload FROM collections WHERE name=%s", (self._name,))
            row = fetchone(cur)
        if not row:
            return []

        try:
            raw_items = json.loads(row["payload"])
        except (TypeError, ValueError):
            logger.warning("collection %s holds unreadable JSON, treating as empty", self._name)
            return []
        if not isinstance(raw_items, list):
            return []

        items: List[T] = []
        for raw in raw_items:
            item = self._decode(raw)
            if item is None:
                logger.warning("dropping undecodable %s entry: %r", self._name, raw)
                continue
            items.append(item)
        return items

    def put(self, items: Sequence[T]) -> None:
        payload = json.dumps([self._encode(i) for i in items], ensure_ascii=False)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO collections(name, payload)
                VALUES(%s, %s)
                ON DUPLICATE KEY UPDATE payload=VALUES(payload)
                """,
                (self._name, payload),
            )

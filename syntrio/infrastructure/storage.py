# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Key-value storage adapters."""

from __future__ import annotations

import json
from typing import Any

from sqlalchemy.orm import Session, sessionmaker

from syntrio.application.interfaces import KeyValueStore
from syntrio.infrastructure.db.models import KeyValueEntry
from syntrio.infrastructure.db.session import session_scope
from syntrio.shared.errors import StorageError
from syntrio.shared.logging import logger


class InMemoryKeyValueStore(KeyValueStore):
    """Volatile storage for tests and throwaway hosts."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})
        self.writes = 0

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value
        self.writes += 1

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._items)


class SqlAlchemyKeyValueStore(KeyValueStore):
    """Durable storage in a single key-value table."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def get_item(self, key: str) -> str | None:
        with session_scope(self._session_factory) as session:
            row = session.get(KeyValueEntry, key)
            return row.value if row else None

    def set_item(self, key: str, value: str) -> None:
        try:
            with session_scope(self._session_factory) as session:
                row = session.get(KeyValueEntry, key)
                if row is None:
                    session.add(KeyValueEntry(key=key, value=value))
                else:
                    row.value = value
        except Exception as exc:
            raise StorageError(f"Failed to save {key}", key=key) from exc
        logger.debug(f"storage: write key={key} size={len(value)}")

    def remove_item(self, key: str) -> None:
        with session_scope(self._session_factory) as session:
            session.query(KeyValueEntry).filter(KeyValueEntry.key == key).delete()
        logger.debug(f"storage: remove key={key}")


def read_json(store: KeyValueStore, key: str) -> Any | None:
    """Return the decoded value, or None when missing; corrupt values are dropped."""

    raw = store.get_item(key)
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except (TypeError, ValueError):
        logger.warning(f"storage: malformed json key={key}, clearing")
        store.remove_item(key)
        return None


def write_json(store: KeyValueStore, key: str, value: Any) -> None:
    store.set_item(key, json.dumps(value, ensure_ascii=False))


__all__ = [
    "InMemoryKeyValueStore",
    "SqlAlchemyKeyValueStore",
    "read_json",
    "write_json",
]

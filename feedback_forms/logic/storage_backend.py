"""Key-value storage backends for the form store.

A backend stores opaque text payloads under named keys. ``InMemoryBackend``
is used by tests and throwaway runs; ``SqlKeyValueBackend`` keeps one row per
key in the ``kv_store`` table and is single-writer (no row locking).
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Dict, Mapping, Optional, Protocol

from sqlalchemy import text as sql_text
from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)


class KeyValueBackend(Protocol):
    name: str

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def set_many(self, items: Mapping[str, str]) -> None: ...


class InMemoryBackend:
    name = "memory"

    def __init__(self, initial: Optional[Mapping[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def set_many(self, items: Mapping[str, str]) -> None:
        self._data.update(items)


_UPSERT_SQL = """
INSERT INTO kv_store (store_key, payload, updated_at)
VALUES (:key, :payload, :updated_at)
ON CONFLICT (store_key) DO UPDATE
SET payload = excluded.payload, updated_at = excluded.updated_at
"""


def _utc_now() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


class SqlKeyValueBackend:
    """Backend over the ``kv_store`` table created by the migrations runner."""

    name = "sql"

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get(self, key: str) -> Optional[str]:
        with self._engine.connect() as conn:
            row = conn.execute(
                sql_text("SELECT payload FROM kv_store WHERE store_key = :key"),
                {"key": key},
            ).fetchone()
        return None if row is None else str(row[0])

    def set(self, key: str, value: str) -> None:
        self.set_many({key: value})

    def set_many(self, items: Mapping[str, str]) -> None:
        """Write all items in one transaction."""
        updated_at = _utc_now()
        try:
            with self._engine.begin() as conn:
                for key, payload in items.items():
                    conn.execute(
                        sql_text(_UPSERT_SQL),
                        {"key": key, "payload": payload, "updated_at": updated_at},
                    )
        except Exception:
            logger.error("kv_store_write_failed keys=%s", sorted(items), exc_info=True)
            raise


__all__ = ["KeyValueBackend", "InMemoryBackend", "SqlKeyValueBackend"]

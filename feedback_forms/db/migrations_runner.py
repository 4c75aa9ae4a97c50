"""Lightweight SQL migrations runner.

Applies .sql files in lexical order from `feedback_forms/db/migrations/`.
Applied filenames are journaled in the `schema_migrations` table of the same
database, so a fresh database (including SQLite in-memory) always gets the
full schema and an existing one is never migrated twice.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

from sqlalchemy import text as sql_text
from sqlalchemy.engine import Connection, Engine

logger = logging.getLogger(__name__)

DEFAULT_MIGRATIONS_DIR = Path(__file__).resolve().parent / "migrations"

_JOURNAL_DDL = """
CREATE TABLE IF NOT EXISTS schema_migrations (
    filename TEXT PRIMARY KEY,
    applied_at TEXT NOT NULL
)
"""


def _iter_sql_files(root: Path) -> Iterable[Path]:
    for p in sorted(root.glob("*.sql")):
        if "rollback" in p.name.lower():
            continue
        yield p


def _statements(sql: str) -> Iterable[str]:
    """Split a script on ';' after dropping comment lines and empty segments."""
    body = "\n".join(ln for ln in sql.splitlines() if not ln.strip().startswith("--"))
    for chunk in body.split(";"):
        stmt = chunk.strip()
        if stmt:
            yield stmt


def _applied(conn: Connection) -> set[str]:
    rows = conn.execute(sql_text("SELECT filename FROM schema_migrations")).fetchall()
    return {str(r[0]) for r in rows}


def apply_migrations(engine: Engine, migrations_dir: str | os.PathLike[str] | None = None) -> list[str]:
    """Apply pending migrations and return the filenames applied."""
    root = Path(migrations_dir) if migrations_dir is not None else DEFAULT_MIGRATIONS_DIR
    if not root.exists():  # pragma: no cover - optional
        logger.warning("migrations_dir_missing path=%s", root)
        return []

    newly_applied: list[str] = []
    with engine.begin() as conn:
        conn.execute(sql_text(_JOURNAL_DDL))
        done = _applied(conn)
        for sql_path in _iter_sql_files(root):
            fname = sql_path.name
            if fname in done:
                continue
            for stmt in _statements(sql_path.read_text(encoding="utf-8")):
                conn.exec_driver_sql(stmt)
            conn.execute(
                sql_text("INSERT INTO schema_migrations (filename, applied_at) VALUES (:f, :at)"),
                {
                    "f": fname,
                    # ISO-8601 UTC without fractional seconds
                    "at": datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z"),
                },
            )
            newly_applied.append(fname)
    if newly_applied:
        logger.info("migrations_applied files=%s", newly_applied)
    return newly_applied


__all__ = ["apply_migrations", "DEFAULT_MIGRATIONS_DIR"]

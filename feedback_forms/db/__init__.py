"""Database bootstrap utilities.

Engine construction and the SQL migrations runner that creates the
key-value table. Route handlers never touch this package directly.
"""

from feedback_forms.db.base import dispose_engine, get_engine
from feedback_forms.db.migrations_runner import apply_migrations

__all__ = [
    "get_engine",
    "dispose_engine",
    "apply_migrations",
]

"""Database module."""

from vidtube.db.database import Database, get_db

__all__ = [
    "Database",
    "get_db",
]

"""Storage layer for shopkeep application."""

from shopkeep.database.base import Storage, StorageKey
from shopkeep.database.factories import create_sqlite_storage

__all__ = ["Storage", "StorageKey", "create_sqlite_storage"]

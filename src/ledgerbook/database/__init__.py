"""Database layer for ledgerbook application."""

from ledgerbook.database.base import Database
from ledgerbook.database.factories import create_memory_database, create_sqlite_database

__all__ = ["Database", "create_memory_database", "create_sqlite_database"]

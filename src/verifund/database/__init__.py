"""Ledger store layer for verifund."""

from verifund.database.base import Database
from verifund.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]

"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from verifund.database.sqlalchemy_db import SQLAlchemyDatabase


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    A file-backed SQLite ledger suits a single host. Multiple processes are
    safe only because allocation writes use compare-and-swap updates;
    heavy concurrent use should point ``SQLAlchemyDatabase`` at a server
    database instead.

    Args:
        database_path: Path to SQLite database file. If None, checks VERIFUND_DB_PATH
            environment variable, then defaults to ~/.verifund/verifund.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get("VERIFUND_DB_PATH")

    if database_path is None:
        home = Path.home()
        db_dir = home / ".verifund"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "verifund.db")

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyDatabase(database_url)

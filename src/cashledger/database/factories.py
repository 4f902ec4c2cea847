"""Record store factory functions."""

import os
from pathlib import Path
from typing import Optional, Union

from cashledger.database.sqlalchemy_db import SQLAlchemyRecordStore

DB_PATH_ENV_VAR = "CASHLEDGER_DB_PATH"
DEFAULT_DB_FILE = Path(".cashledger") / "ledger.db"


def resolve_database_path(database_path: Optional[Union[str, Path]] = None) -> Path:
    """Pick the ledger file: explicit path, then $CASHLEDGER_DB_PATH, then ~/.cashledger/ledger.db.

    ``~`` is expanded. The directory of the default location is created on
    demand; explicit locations are used as given.
    """
    chosen = database_path or os.environ.get(DB_PATH_ENV_VAR)
    if chosen:
        return Path(chosen).expanduser()

    default = Path.home() / DEFAULT_DB_FILE
    default.parent.mkdir(parents=True, exist_ok=True)
    return default


def create_sqlite_store(database_path: Optional[Union[str, Path]] = None) -> SQLAlchemyRecordStore:
    """Create a SQLite-backed record store at the resolved location."""
    return SQLAlchemyRecordStore(f"sqlite:///{resolve_database_path(database_path)}")

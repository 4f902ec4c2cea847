"""Persistence layer for cashledger."""

from cashledger.database.base import RecordStore
from cashledger.database.factories import create_sqlite_store

__all__ = ["RecordStore", "create_sqlite_store"]

"""Abstract record store interface."""

from abc import ABC, abstractmethod
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from cashledger.domain.entities import ConfigEntry, Transaction


class RecordStore(ABC):
    """Durable storage of transactions (keyed by ``id``) and config entries
    (keyed by ``key``).

    Every operation raises ``StorageError`` when the backing engine is
    unavailable or rejects the operation.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the store."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the store."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize storage schema (create tables)."""
        pass

    # Transaction operations
    @abstractmethod
    def put(self, transaction: Transaction) -> None:
        """Insert or replace the transaction with the same id."""
        pass

    @abstractmethod
    def get(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by id."""
        pass

    @abstractmethod
    def get_all(self) -> list[Transaction]:
        """Return every stored transaction. No ordering is guaranteed."""
        pass

    @abstractmethod
    def delete(self, transaction_id: str) -> None:
        """Remove the transaction if present. Unknown ids are ignored."""
        pass

    # Config operations
    @abstractmethod
    def get_config(self, key: str) -> Optional[ConfigEntry]:
        """Get config entry by key."""
        pass

    @abstractmethod
    def set_config(self, entry: ConfigEntry) -> None:
        """Insert or replace the config entry with the same key."""
        pass

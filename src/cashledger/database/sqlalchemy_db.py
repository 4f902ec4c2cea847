"""Generic SQLAlchemy record store implementation."""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from cashledger.database.base import RecordStore
from cashledger.database.models import (
    Base,
    Config,
    Transaction,
    create_db_engine,
    create_session_factory,
)
from cashledger.database.mappers import (
    config_to_domain,
    config_to_orm,
    transaction_to_domain,
    transaction_to_orm,
)
from cashledger.domain.entities import (
    ConfigEntry as DomainConfigEntry,
    Transaction as DomainTransaction,
)
from cashledger.domain.errors import StorageError

logger = logging.getLogger(__name__)


class SQLAlchemyRecordStore(RecordStore):
    """SQLAlchemy-based implementation of the RecordStore interface.

    Reads refresh loaded rows so changes written through another store
    on the same database are visible.
    """

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy record store.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
        """
        self.database_url = database_url
        self.engine = create_db_engine(database_url)
        self.session_factory = create_session_factory(self.engine)
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    @contextmanager
    def _storage_operation(self, action: str) -> Iterator[Session]:
        """Yield the session, converting engine failures and undecodable rows to StorageError."""
        session = self._get_session()
        try:
            yield session
        except SQLAlchemyError as e:
            session.rollback()
            logger.error("Storage failure while trying to %s: %s", action, e)
            raise StorageError(f"Could not {action}: {e}") from e
        except (ValueError, ArithmeticError) as e:
            # A stored value no longer decodes to its column type
            session.rollback()
            logger.error("Corrupted record while trying to %s: %s", action, e)
            raise StorageError(f"Could not {action}: corrupted record ({e})") from e

    def connect(self) -> None:
        """Connect to the store."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the store."""
        if self._session is not None:
            self._session.close()
            self._session = None
        self.engine.dispose()

    def initialize_schema(self) -> None:
        """Create the transactions and config tables if missing."""
        try:
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            logger.error("Could not initialize schema at %s: %s", self.database_url, e)
            raise StorageError(f"Could not open record store: {e}") from e

    # Transaction operations
    def put(self, transaction: DomainTransaction) -> None:
        """Insert or replace the transaction with the same id."""
        with self._storage_operation("save transaction") as session:
            session.merge(transaction_to_orm(transaction))
            session.commit()
        logger.debug("Stored transaction %s", transaction.id)

    def get(self, transaction_id: str) -> Optional[DomainTransaction]:
        """Get transaction by id."""
        with self._storage_operation("read transaction") as session:
            txn = session.get(Transaction, transaction_id, populate_existing=True)
            if txn is None:
                return None
            return transaction_to_domain(txn)

    def get_all(self) -> list[DomainTransaction]:
        """Return every stored transaction."""
        with self._storage_operation("read transactions") as session:
            transactions = session.query(Transaction).populate_existing().all()
            return [transaction_to_domain(txn) for txn in transactions]

    def delete(self, transaction_id: str) -> None:
        """Remove the transaction if present."""
        with self._storage_operation("delete transaction") as session:
            deleted = (
                session.query(Transaction)
                .filter(Transaction.id == transaction_id)
                .delete(synchronize_session="fetch")
            )
            session.commit()
        logger.debug("Deleted transaction %s (%d row(s))", transaction_id, deleted)

    # Config operations
    def get_config(self, key: str) -> Optional[DomainConfigEntry]:
        """Get config entry by key."""
        with self._storage_operation("read configuration") as session:
            entry = session.get(Config, key, populate_existing=True)
            if entry is None:
                return None
            return config_to_domain(entry)

    def set_config(self, entry: DomainConfigEntry) -> None:
        """Insert or replace the config entry with the same key."""
        with self._storage_operation("save configuration") as session:
            session.merge(config_to_orm(entry))
            session.commit()
        logger.debug("Stored config entry %s", entry.key)

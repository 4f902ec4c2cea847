"""SQLAlchemy models for the cashledger record store."""

from decimal import Decimal
from typing import Optional
from sqlalchemy import (
    Column,
    String,
    Date,
    create_engine,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.types import TypeDecorator

Base = declarative_base()


class DecimalText(TypeDecorator):
    """Stores a Decimal as its exact text form.

    SQLite has no native decimal type; going through REAL would round.
    """

    impl = String
    cache_ok = True

    def process_bind_param(self, value: Optional[Decimal], dialect) -> Optional[str]:
        if value is None:
            return None
        return str(value)

    def process_result_value(self, value: Optional[str], dialect) -> Optional[Decimal]:
        if value is None:
            return None
        return Decimal(value)


class Transaction(Base):
    """Transaction model.

    Column names follow the persisted layout (camelCase for the
    multi-word fields); secondary indexes are lookup-only, never unique.
    """

    __tablename__ = "transactions"

    id = Column(String, primary_key=True)
    date = Column(Date, nullable=False, index=True)
    time = Column(String, nullable=False, index=True)
    kind = Column(String, nullable=False, index=True)
    payment_mode = Column("paymentMode", String, nullable=False, index=True)
    amount = Column(DecimalText, nullable=False)
    counterparty = Column(String, nullable=False, index=True)
    remarks = Column(String, nullable=False, index=True)
    reference_id = Column("referenceId", String, nullable=True, index=True)


class Config(Base):
    """Application setting keyed by name."""

    __tablename__ = "config"

    key = Column(String, primary_key=True)
    value = Column(String, nullable=False)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory bound to ``engine``."""
    return sessionmaker(bind=engine)


def create_db_engine(database_url: str) -> Engine:
    """Create the engine for ``database_url`` without touching the database."""
    return create_engine(database_url, echo=False)

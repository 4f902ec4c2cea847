"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic so ORM rows never leave the
database package.
"""

from cashledger.domain import entities as domain
from cashledger.database.models import (
    Config as ORMConfig,
    Transaction as ORMTransaction,
)


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        date=orm_transaction.date,
        time=orm_transaction.time,
        amount=orm_transaction.amount,
        kind=domain.TransactionKind(orm_transaction.kind),
        payment_mode=domain.PaymentMode(orm_transaction.payment_mode),
        counterparty=orm_transaction.counterparty,
        remarks=orm_transaction.remarks,
        reference_id=orm_transaction.reference_id,
    )


def transaction_to_orm(transaction: domain.Transaction) -> ORMTransaction:
    """Convert domain Transaction entity to a detached SQLAlchemy model."""
    return ORMTransaction(
        id=transaction.id,
        date=transaction.date,
        time=transaction.time,
        amount=transaction.amount,
        kind=transaction.kind.value,
        payment_mode=transaction.payment_mode.value,
        counterparty=transaction.counterparty,
        remarks=transaction.remarks,
        reference_id=transaction.reference_id,
    )


def config_to_domain(orm_config: ORMConfig) -> domain.ConfigEntry:
    """Convert SQLAlchemy Config model to domain ConfigEntry."""
    return domain.ConfigEntry(key=orm_config.key, value=orm_config.value)


def config_to_orm(entry: domain.ConfigEntry) -> ORMConfig:
    """Convert domain ConfigEntry to a detached SQLAlchemy model."""
    return ORMConfig(key=entry.key, value=entry.value)

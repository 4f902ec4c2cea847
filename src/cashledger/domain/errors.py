"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested transaction does not exist."""


class AuthError(DomainError):
    """Access gate refused the supplied secret or no session is open."""


class StorageError(RuntimeError):
    """The underlying record store is unavailable or rejected an operation.

    Not retried within the triggering action. After one of these the
    in-memory working set may no longer match the store.
    """


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction '{transaction_id}' not found"


def missing_field(field_name: str) -> str:
    """Return message for a required field left empty."""
    return f"{field_name} is required"


def reference_required() -> str:
    """Return message for online payments without a reference ID."""
    return "Reference ID is required for online payments"


def no_secret_set() -> str:
    """Return message when the gate has no stored secret yet."""
    return "No password has been set"

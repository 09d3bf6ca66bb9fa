"""Shared domain error messages and error types."""

from typing import Iterable, Optional


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for callers that only care about bad input.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class InvalidReferenceError(ValidationError):
    """A category, account or payee is missing or belongs to another company."""


class NotFoundError(DomainError):
    """Requested staged or confirmed transaction does not exist."""


class ConflictError(DomainError):
    """Batch request that was partially processed or submitted twice."""

    def __init__(self, message: str, missing_ids: Iterable[int] = ()):
        super().__init__(message)
        self.missing_ids = tuple(missing_ids)


class NoTransactionsError(DomainError):
    """Resync requested for a company with no confirmed transactions."""


class BalanceError(RuntimeError):
    """Journal lines for one transaction do not balance.

    This is an internal invariant failure, not a user error, so it is kept
    outside the DomainError hierarchy.
    """

    def __init__(self, transaction_id: Optional[int], debit_total, credit_total):
        super().__init__(
            f"Unbalanced journal for transaction {transaction_id}: "
            f"debits {debit_total} != credits {credit_total}"
        )
        self.transaction_id = transaction_id
        self.debit_total = debit_total
        self.credit_total = credit_total


class PersistenceError(RuntimeError):
    """A write inside an atomic unit failed and was rolled back."""


def account_not_found(account_id: int, company_id: str) -> str:
    """Return message for a missing chart-of-accounts entry."""
    return f"Account {account_id} not found in company '{company_id}'"


def payee_not_found(payee_id: int, company_id: str) -> str:
    """Return message for a missing payee."""
    return f"Payee {payee_id} not found in company '{company_id}'"


def staged_transaction_not_found(imported_id: int) -> str:
    """Return message for a staging row that is absent or already moved."""
    return f"Staged transaction {imported_id} not found or already moved"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for a missing confirmed transaction."""
    return f"Transaction {transaction_id} not found"


def missing_ids_message(prefix: str, missing_ids: Iterable[int]) -> str:
    """Return message listing ids that could not be found."""
    return f"{prefix}: {', '.join(str(i) for i in missing_ids)}"

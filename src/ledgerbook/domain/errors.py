"""Shared domain error messages and error types."""

from decimal import Decimal


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class DuplicateCodeError(ConflictError):
    """Account code already held by another account."""


class HasChildrenError(DependencyError):
    """Account deletion blocked by child accounts."""


class ReferencedByTransactionsError(DependencyError):
    """Account deletion blocked by transaction entries."""


class CycleError(ValidationError):
    """Parent assignment would make an account its own ancestor."""


class UnbalancedError(ValidationError):
    """Debit and credit totals of a transaction differ."""

    def __init__(self, total_debits: Decimal, total_credits: Decimal):
        self.total_debits = total_debits
        self.total_credits = total_credits
        super().__init__(unbalanced_transaction(total_debits, total_credits))


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def account_code_not_found(code: str) -> str:
    """Return message for missing account by code."""
    return f"Account with code '{code}' not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def duplicate_account_code(code: str) -> str:
    """Return message for account code uniqueness violations."""
    return f"Account with code {code} already exists"


def account_has_children(account_id: int, child_count: int) -> str:
    """Return message when account has child accounts."""
    return (
        f"Cannot delete account {account_id}: it has {child_count} "
        f"child account{'s' if child_count != 1 else ''}. "
        "Please delete child accounts first."
    )


def account_referenced(account_id: int, entry_count: int) -> str:
    """Return message when account is used by transaction entries."""
    return (
        f"Cannot delete account {account_id}: it is used by {entry_count} "
        f"transaction entr{'ies' if entry_count != 1 else 'y'}. "
        "You can deactivate it instead."
    )


def parent_cycle(account_id: int, parent_id: int) -> str:
    """Return message when a parent assignment would create a cycle."""
    return f"Account {parent_id} cannot be the parent of account {account_id}: it would create a cycle"


def unbalanced_transaction(total_debits: Decimal, total_credits: Decimal) -> str:
    """Return message for transactions whose debits and credits differ."""
    return (
        "Transaction must be balanced (debits must equal credits): "
        f"debits {total_debits:,.2f}, credits {total_credits:,.2f}"
    )

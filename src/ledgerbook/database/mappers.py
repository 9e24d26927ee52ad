"""Mapper functions to convert SQLAlchemy models into domain entities.

This layer isolates the conversion logic so the domain stays independent of
the table layout.
"""

from ledgerbook.domain import entities as domain
from ledgerbook.database.models import (
    Account as ORMAccount,
    Transaction as ORMTransaction,
    TransactionEntry as ORMTransactionEntry,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        code=orm_account.code,
        name=orm_account.name,
        type=orm_account.type,
        parent_id=orm_account.parent_id,
        is_active=orm_account.is_active,
        description=orm_account.description,
        created_at=orm_account.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        date=orm_transaction.date,
        description=orm_transaction.description,
        reference=orm_transaction.reference,
        total_amount=orm_transaction.total_amount,
        is_balanced=orm_transaction.is_balanced,
        created_at=orm_transaction.created_at,
    )


def entry_to_domain(orm_entry: ORMTransactionEntry) -> domain.TransactionEntry:
    """Convert SQLAlchemy TransactionEntry model to domain TransactionEntry entity."""
    return domain.TransactionEntry(
        id=orm_entry.id,
        transaction_id=orm_entry.transaction_id,
        account_id=orm_entry.account_id,
        amount=orm_entry.amount,
        type=orm_entry.type,
        description=orm_entry.description,
    )

"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerbook.domain.entities import (
    Account,
    EntryInput,
    Transaction,
    TransactionEntry,
)


class Database(ABC):
    """Abstract storage interface for ledgerbook.

    Implementations must apply each method as a single unit of work: a
    multi-step write such as replacing a transaction's entries is either fully
    visible or not visible at all.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self,
        code: str,
        name: str,
        account_type: str,
        parent_id: Optional[int] = None,
        description: Optional[str] = None,
    ) -> int:
        """Create an active account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def get_account_by_code(self, code: str) -> Optional[Account]:
        """Get account by code."""
        pass

    @abstractmethod
    def list_accounts(
        self, account_type: Optional[str] = None, active_only: bool = False
    ) -> list[Account]:
        """List accounts ordered by code, optionally filtered by type or active flag."""
        pass

    @abstractmethod
    def list_child_accounts(self, parent_id: int) -> list[Account]:
        """List accounts whose parent is ``parent_id``."""
        pass

    @abstractmethod
    def update_account(
        self,
        account_id: int,
        name: Optional[str] = None,
        code: Optional[str] = None,
        parent_id: Optional[int] = None,
        description: Optional[str] = None,
        update_parent: bool = False,
    ) -> None:
        """Patch account fields. Fields passed as None are left unchanged.

        Args:
            update_parent: If True, write ``parent_id`` even when it is None
        """
        pass

    @abstractmethod
    def set_account_active(self, account_id: int, is_active: bool) -> None:
        """Set the active flag of an account."""
        pass

    @abstractmethod
    def delete_account(self, account_id: int) -> None:
        """Delete an account."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        date: date,
        total_amount: Decimal,
        is_balanced: bool,
        entries: list[EntryInput],
        description: Optional[str] = None,
        reference: Optional[str] = None,
    ) -> int:
        """Create a transaction together with its entries. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transaction]:
        """List transactions ordered by date, with optional inclusive date bounds."""
        pass

    @abstractmethod
    def replace_transaction(
        self,
        transaction_id: int,
        date: date,
        total_amount: Decimal,
        is_balanced: bool,
        entries: list[EntryInput],
        description: Optional[str] = None,
        reference: Optional[str] = None,
    ) -> None:
        """Overwrite a transaction's fields and replace its whole entry set."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction and all of its entries."""
        pass

    # Entry operations
    @abstractmethod
    def list_entries(
        self,
        transaction_id: Optional[int] = None,
        account_id: Optional[int] = None,
    ) -> list[TransactionEntry]:
        """List transaction entries, optionally filtered by owning transaction or account."""
        pass

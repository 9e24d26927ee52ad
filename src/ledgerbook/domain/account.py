"""Account domain service."""

import logging
from typing import Optional

from ledgerbook.database.base import Database
from ledgerbook.domain.entities import (
    ACCOUNT_TYPES,
    ASSET,
    EQUITY,
    LIABILITY,
    Account as AccountEntity,
    AccountNode,
    AccountStats,
)
from ledgerbook.domain.errors import (
    CycleError,
    DuplicateCodeError,
    HasChildrenError,
    NotFoundError,
    ReferencedByTransactionsError,
    ValidationError,
    account_has_children,
    account_not_found,
    account_referenced,
    duplicate_account_code,
    parent_cycle,
)
from ledgerbook.domain.hierarchy import available_parents, flatten_hierarchy
from ledgerbook.domain.integrity import (
    has_children,
    is_referenced_by_entries,
    would_create_cycle,
)

logger = logging.getLogger(__name__)


class AccountService:
    """Service for managing the chart of accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(
        self,
        name: str,
        code: str,
        account_type: str,
        parent_id: Optional[int] = None,
        description: Optional[str] = None,
    ) -> int:
        """Create a new active account.

        Args:
            name: Display name
            code: Account code, unique across all accounts
            account_type: One of 'asset', 'liability', 'equity'
            parent_id: Optional parent account ID
            description: Optional description

        Returns:
            Account ID

        Raises:
            ValidationError: If name, code or type is invalid
            DuplicateCodeError: If another account already uses the code
            NotFoundError: If the parent account doesn't exist
        """
        if not name or not name.strip():
            raise ValidationError("Account name is required")
        if not code or not code.strip():
            raise ValidationError("Account code is required")
        if account_type not in ACCOUNT_TYPES:
            raise ValidationError(
                f"Invalid account type '{account_type}'. Expected one of: {', '.join(ACCOUNT_TYPES)}"
            )

        if self.db.get_account_by_code(code) is not None:
            logger.warning("Rejected account creation: code %s already in use", code)
            raise DuplicateCodeError(duplicate_account_code(code))

        if parent_id is not None and self.db.get_account(parent_id) is None:
            raise NotFoundError(account_not_found(parent_id))

        account_id = self.db.create_account(
            code=code,
            name=name,
            account_type=account_type,
            parent_id=parent_id,
            description=description,
        )
        logger.info("Created account %s (%s) with ID %d", code, name, account_id)
        return account_id

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def get_account_by_code(self, code: str) -> Optional[AccountEntity]:
        """Get account by code."""
        return self.db.get_account_by_code(code)

    def list_accounts(self) -> list[AccountEntity]:
        """List all accounts, ordered by code."""
        return self.db.list_accounts()

    def list_accounts_by_type(self, account_type: str) -> list[AccountEntity]:
        """List accounts of one type.

        Raises:
            ValidationError: If the account type is unknown
        """
        if account_type not in ACCOUNT_TYPES:
            raise ValidationError(f"Invalid account type '{account_type}'")
        return self.db.list_accounts(account_type=account_type)

    def list_active_accounts(self) -> list[AccountEntity]:
        """List accounts that are not deactivated."""
        return self.db.list_accounts(active_only=True)

    def update_account(
        self,
        account_id: int,
        name: Optional[str] = None,
        code: Optional[str] = None,
        parent_id: Optional[int] = None,
        description: Optional[str] = None,
        clear_parent: bool = False,
    ) -> None:
        """Apply a partial update to an account.

        Fields left as None are unchanged. The account type and active flag
        cannot be changed here; use toggle_active to deactivate an account.

        Args:
            account_id: Account ID to update
            name: Optional new name
            code: Optional new code
            parent_id: Optional new parent account ID
            description: Optional new description
            clear_parent: If True, detach the account to a root (parent_id must be None)

        Raises:
            NotFoundError: If the account or the new parent doesn't exist
            DuplicateCodeError: If another account already uses the code
            CycleError: If the new parent is the account itself or a descendant
        """
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))

        if name is not None and not name.strip():
            raise ValidationError("Account name cannot be empty")

        if code is not None:
            if not code.strip():
                raise ValidationError("Account code cannot be empty")
            existing = self.db.get_account_by_code(code)
            if existing is not None and existing.id != account_id:
                logger.warning("Rejected account update: code %s already in use", code)
                raise DuplicateCodeError(duplicate_account_code(code))

        if clear_parent:
            if parent_id is not None:
                raise ValidationError("Cannot set both parent_id and clear_parent")
        elif parent_id is not None:
            if self.db.get_account(parent_id) is None:
                raise NotFoundError(account_not_found(parent_id))
            if would_create_cycle(account_id, parent_id, self.db.list_accounts()):
                logger.warning(
                    "Rejected parent %d for account %d: cycle", parent_id, account_id
                )
                raise CycleError(parent_cycle(account_id, parent_id))

        self.db.update_account(
            account_id=account_id,
            name=name,
            code=code,
            parent_id=parent_id,
            description=description,
            update_parent=clear_parent,
        )
        logger.info("Updated account %d", account_id)

    def delete_account(self, account_id: int) -> None:
        """Permanently delete an account.

        Only childless accounts that no transaction entry posts to can be
        deleted; deactivate the others instead.

        Raises:
            NotFoundError: If the account doesn't exist
            HasChildrenError: If other accounts have this account as parent
            ReferencedByTransactionsError: If transaction entries use the account
        """
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

        children = self.db.list_child_accounts(account_id)
        if has_children(account_id, children):
            logger.warning("Rejected deletion of account %d: has children", account_id)
            raise HasChildrenError(account_has_children(account_id, len(children)))

        entries = self.db.list_entries(account_id=account_id)
        if is_referenced_by_entries(account_id, entries):
            logger.warning("Rejected deletion of account %d: referenced by entries", account_id)
            raise ReferencedByTransactionsError(account_referenced(account_id, len(entries)))

        self.db.delete_account(account_id)
        logger.info("Deleted account %d", account_id)

    def toggle_active(self, account_id: int) -> int:
        """Flip the active flag of an account.

        Returns:
            Account ID

        Raises:
            NotFoundError: If the account doesn't exist
        """
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))

        self.db.set_account_active(account_id, not account.is_active)
        logger.info(
            "Account %d is now %s", account_id, "inactive" if account.is_active else "active"
        )
        return account_id

    def get_hierarchy(self, accounts: Optional[list[AccountEntity]] = None) -> list[AccountNode]:
        """Get accounts in hierarchical display order with their depth.

        Args:
            accounts: Optional subset to arrange; defaults to all accounts
        """
        if accounts is None:
            accounts = self.db.list_accounts()
        return flatten_hierarchy(accounts)

    def get_available_parents(self, account_id: Optional[int] = None) -> list[AccountEntity]:
        """List accounts that can be chosen as parent of ``account_id``.

        Excludes the account itself and its descendants. With no account ID
        (creating a new account) every account is returned.
        """
        return available_parents(account_id, self.db.list_accounts())

    def search_accounts(
        self, term: str = "", account_type: Optional[str] = None
    ) -> list[AccountEntity]:
        """Find accounts whose name or code contains ``term`` (case-insensitive)."""
        needle = term.lower()
        return [
            account
            for account in self.db.list_accounts()
            if (needle in account.name.lower() or needle in account.code.lower())
            and (account_type is None or account.type == account_type)
        ]

    def get_stats(self) -> AccountStats:
        """Count accounts in total, active ones and per type."""
        accounts = self.db.list_accounts()
        return AccountStats(
            total=len(accounts),
            active=sum(1 for acc in accounts if acc.is_active),
            assets=sum(1 for acc in accounts if acc.type == ASSET),
            liabilities=sum(1 for acc in accounts if acc.type == LIABILITY),
            equity=sum(1 for acc in accounts if acc.type == EQUITY),
        )

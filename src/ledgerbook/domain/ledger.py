"""Ledger domain service: journal transactions and account balances."""

import logging
from collections import defaultdict
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable, Optional, Union

from ledgerbook.database.base import Database
from ledgerbook.domain.entities import (
    CREDIT,
    DEBIT,
    ENTRY_TYPES,
    EntryInput,
    Transaction as TransactionEntity,
    TransactionEntry,
    TransactionStats,
    TransactionWithEntries,
)
from ledgerbook.domain.errors import (
    NotFoundError,
    UnbalancedError,
    ValidationError,
    account_not_found,
    transaction_not_found,
)

logger = logging.getLogger(__name__)

# Absolute, not relative to the transaction size. Absorbs rounding of
# currency-like sums only; large amounts can still be misclassified.
BALANCE_TOLERANCE = Decimal("0.01")

ZERO = Decimal("0")

# Stored amounts have two decimal places.
CENT = Decimal("0.01")


def _to_decimal(value: Union[Decimal, int, float, str]) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def compute_totals(entries: Iterable[Union[EntryInput, TransactionEntry]]) -> tuple[Decimal, Decimal]:
    """Sum debit and credit amounts separately.

    Returns:
        Tuple of (total_debits, total_credits)
    """
    total_debits = ZERO
    total_credits = ZERO
    for entry in entries:
        if entry.type == DEBIT:
            total_debits += _to_decimal(entry.amount)
        elif entry.type == CREDIT:
            total_credits += _to_decimal(entry.amount)
    return total_debits, total_credits


def is_balanced(total_debits: Decimal, total_credits: Decimal) -> bool:
    """Return True if debits and credits agree within BALANCE_TOLERANCE."""
    return abs(total_debits - total_credits) < BALANCE_TOLERANCE


def compute_balance(entries: Iterable[TransactionEntry]) -> Decimal:
    """Fold entries into a signed balance, debits positive and credits negative."""
    balance = ZERO
    for entry in entries:
        if entry.type == DEBIT:
            balance += _to_decimal(entry.amount)
        else:
            balance -= _to_decimal(entry.amount)
    return balance


class LedgerService:
    """Service for managing journal transactions."""

    def __init__(self, db: Database):
        """Initialize ledger service.

        Args:
            db: Database instance
        """
        self.db = db

    def _validate_entries(self, entries: list[EntryInput]) -> tuple[Decimal, Decimal]:
        """Check an entry set and return its debit and credit totals.

        Raises:
            ValidationError: If the entry set is empty or an entry is malformed
            NotFoundError: If an entry references an unknown account
            UnbalancedError: If debits and credits differ
        """
        if not entries:
            raise ValidationError("A transaction needs at least one entry")

        known_account_ids = {account.id for account in self.db.list_accounts()}
        for entry in entries:
            if entry.type not in ENTRY_TYPES:
                raise ValidationError(
                    f"Invalid entry type '{entry.type}'. Expected 'debit' or 'credit'"
                )
            if _to_decimal(entry.amount) < 0:
                raise ValidationError(f"Entry amount cannot be negative: {entry.amount}")
            if entry.account_id not in known_account_ids:
                raise NotFoundError(account_not_found(entry.account_id))

        total_debits, total_credits = compute_totals(entries)
        if not is_balanced(total_debits, total_credits):
            logger.warning(
                "Rejected unbalanced transaction: debits %s, credits %s",
                total_debits,
                total_credits,
            )
            raise UnbalancedError(total_debits, total_credits)
        return total_debits, total_credits

    @staticmethod
    def _normalize(entries: list[EntryInput]) -> list[EntryInput]:
        """Round entry amounts to cents, the precision they are stored with.

        Raises:
            ValidationError: If an amount is not a finite number
        """
        normalized = []
        for entry in entries:
            try:
                amount = _to_decimal(entry.amount)
            except InvalidOperation:
                raise ValidationError(f"Invalid entry amount: {entry.amount}") from None
            if not amount.is_finite():
                raise ValidationError(f"Entry amount must be a finite number: {entry.amount}")
            try:
                amount = amount.quantize(CENT, rounding=ROUND_HALF_UP)
            except InvalidOperation:
                raise ValidationError(f"Entry amount is too large: {entry.amount}") from None
            normalized.append(
                EntryInput(
                    account_id=entry.account_id,
                    amount=amount,
                    type=entry.type,
                    description=entry.description,
                )
            )
        return normalized

    def create_transaction(
        self,
        date: date,
        entries: list[EntryInput],
        description: Optional[str] = None,
        reference: Optional[str] = None,
    ) -> int:
        """Create a balanced transaction with its entries.

        Args:
            date: Transaction date
            entries: Debit and credit lines
            description: Optional description
            reference: Optional reference (invoice number, check number, etc.)

        Returns:
            Transaction ID

        Raises:
            UnbalancedError: If debits and credits differ by 0.01 or more
            ValidationError: If the entries are malformed
            NotFoundError: If an entry references an unknown account
        """
        entries = self._normalize(entries)
        total_debits, _ = self._validate_entries(entries)

        transaction_id = self.db.create_transaction(
            date=date,
            total_amount=total_debits,
            is_balanced=True,
            entries=entries,
            description=description,
            reference=reference,
        )
        logger.info(
            "Created transaction %d on %s with %d entries totalling %s",
            transaction_id,
            date,
            len(entries),
            total_debits,
        )
        return transaction_id

    def update_transaction(
        self,
        transaction_id: int,
        date: date,
        entries: list[EntryInput],
        description: Optional[str] = None,
        reference: Optional[str] = None,
    ) -> None:
        """Overwrite a transaction and replace its entire entry set.

        Existing entries are discarded; the new ones get fresh IDs.

        Raises:
            NotFoundError: If the transaction or a referenced account doesn't exist
            UnbalancedError: If debits and credits differ by 0.01 or more
            ValidationError: If the entries are malformed
        """
        if self.db.get_transaction(transaction_id) is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        entries = self._normalize(entries)
        total_debits, _ = self._validate_entries(entries)

        self.db.replace_transaction(
            transaction_id=transaction_id,
            date=date,
            total_amount=total_debits,
            is_balanced=True,
            entries=entries,
            description=description,
            reference=reference,
        )
        logger.info("Updated transaction %d with %d entries", transaction_id, len(entries))

    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction together with its entries.

        Raises:
            NotFoundError: If the transaction doesn't exist
        """
        if self.db.get_transaction(transaction_id) is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        self.db.delete_transaction(transaction_id)
        logger.info("Deleted transaction %d", transaction_id)

    def get_transaction(self, transaction_id: int) -> Optional[TransactionWithEntries]:
        """Get a transaction joined with its entries, or None if not found."""
        transaction = self.db.get_transaction(transaction_id)
        if transaction is None:
            return None
        return TransactionWithEntries(
            transaction=transaction,
            entries=self.db.list_entries(transaction_id=transaction_id),
        )

    def list_transactions(self) -> list[TransactionEntity]:
        """List all transactions without their entries."""
        return self.db.list_transactions()

    def _attach_entries(
        self, transactions: list[TransactionEntity]
    ) -> list[TransactionWithEntries]:
        entries_by_transaction: dict[int, list[TransactionEntry]] = defaultdict(list)
        wanted = {txn.id for txn in transactions}
        for entry in self.db.list_entries():
            if entry.transaction_id in wanted:
                entries_by_transaction[entry.transaction_id].append(entry)
        return [
            TransactionWithEntries(transaction=txn, entries=entries_by_transaction.get(txn.id, []))
            for txn in transactions
        ]

    def list_transactions_with_entries(self) -> list[TransactionWithEntries]:
        """List all transactions, each joined with its entries."""
        return self._attach_entries(self.db.list_transactions())

    def list_transactions_by_date_range(
        self, start_date: date, end_date: date
    ) -> list[TransactionWithEntries]:
        """List transactions dated within [start_date, end_date], joined with entries."""
        transactions = self.db.list_transactions(start_date=start_date, end_date=end_date)
        return self._attach_entries(transactions)

    def compute_account_balance(
        self, account_id: int, as_of_date: Optional[date] = None
    ) -> Decimal:
        """Compute the signed balance of an account from its entries.

        Debits add to the balance and credits subtract from it, whatever the
        account type.

        Args:
            account_id: Account ID
            as_of_date: If given, ignore transactions dated after this day

        Returns:
            Balance (zero when the account has no entries)
        """
        entries = self.db.list_entries(account_id=account_id)
        if as_of_date is not None:
            included = {
                txn.id for txn in self.db.list_transactions(end_date=as_of_date)
            }
            entries = [entry for entry in entries if entry.transaction_id in included]

        balance = compute_balance(entries)
        logger.debug(
            "Balance of account %d as of %s: %s over %d entries",
            account_id,
            as_of_date or "now",
            balance,
            len(entries),
        )
        return balance

    def search_transactions(
        self, term: str = "", entry_type: Optional[str] = None
    ) -> list[TransactionWithEntries]:
        """Find transactions whose description, reference or any entry description contains ``term``.

        Args:
            term: Case-insensitive text to look for (empty matches everything)
            entry_type: If given, keep only transactions with at least one entry of this type

        Raises:
            ValidationError: If entry_type is not 'debit' or 'credit'
        """
        if entry_type is not None and entry_type not in ENTRY_TYPES:
            raise ValidationError(
                f"Invalid entry type '{entry_type}'. Expected 'debit' or 'credit'"
            )

        needle = term.lower()
        result = []
        for item in self.list_transactions_with_entries():
            txn = item.transaction
            texts = [txn.description, txn.reference] + [e.description for e in item.entries]
            if needle and not any(text and needle in text.lower() for text in texts):
                continue
            if entry_type is not None and not any(e.type == entry_type for e in item.entries):
                continue
            result.append(item)
        return result

    def get_stats(self, today: Optional[date] = None) -> TransactionStats:
        """Count transactions, sum their totals and count those dated this month.

        Args:
            today: Reference day for the current month (defaults to date.today())
        """
        if today is None:
            today = date.today()
        transactions = self.db.list_transactions()
        return TransactionStats(
            total=len(transactions),
            total_amount=sum((_to_decimal(txn.total_amount) for txn in transactions), ZERO),
            this_month=sum(
                1
                for txn in transactions
                if txn.date.year == today.year and txn.date.month == today.month
            ),
        )

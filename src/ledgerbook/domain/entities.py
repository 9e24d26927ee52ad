"""Domain model entities for ledgerbook.

These are pure data classes representing bookkeeping concepts, independent of
the database schema. Services and the CLI only ever see these types; the
storage layer converts its rows into them through the mappers.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

ASSET = "asset"
LIABILITY = "liability"
EQUITY = "equity"

ACCOUNT_TYPES = (ASSET, LIABILITY, EQUITY)

# Display order of root accounts in the chart of accounts.
ACCOUNT_TYPE_RANK = {ASSET: 0, LIABILITY: 1, EQUITY: 2}

DEBIT = "debit"
CREDIT = "credit"

ENTRY_TYPES = (DEBIT, CREDIT)


@dataclass(frozen=True)
class Account:
    """Ledger account in the chart of accounts."""

    id: int
    code: str
    name: str
    type: str
    parent_id: Optional[int]
    is_active: bool
    description: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Journal transaction header.

    ``total_amount`` and ``is_balanced`` are cached from the entry set at the
    last save.
    """

    id: int
    date: date
    description: Optional[str]
    reference: Optional[str]
    total_amount: Decimal
    is_balanced: bool
    created_at: datetime


@dataclass(frozen=True)
class TransactionEntry:
    """Single debit or credit line owned by a transaction."""

    id: int
    transaction_id: int
    account_id: int
    amount: Decimal
    type: str
    description: Optional[str]


@dataclass(frozen=True)
class EntryInput:
    """Entry as supplied by a caller, before it is persisted."""

    account_id: int
    amount: Decimal
    type: str
    description: Optional[str] = None


@dataclass(frozen=True)
class TransactionWithEntries:
    """Transaction joined with its full entry set."""

    transaction: Transaction
    entries: list[TransactionEntry] = field(default_factory=list)

    @property
    def id(self) -> int:
        return self.transaction.id

    @property
    def date(self) -> date:
        return self.transaction.date


@dataclass(frozen=True)
class AccountNode:
    """Account positioned in the flattened hierarchy."""

    account: Account
    level: int


@dataclass(frozen=True)
class AccountStats:
    """Counts over the chart of accounts."""

    total: int
    active: int
    assets: int
    liabilities: int
    equity: int


@dataclass(frozen=True)
class TransactionStats:
    """Aggregates over the journal."""

    total: int
    total_amount: Decimal
    this_month: int

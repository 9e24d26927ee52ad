"""Shared pytest fixtures for ledgerbook tests."""

import os
import tempfile
from datetime import date, datetime, UTC
from decimal import Decimal

import pytest

from ledgerbook.database.factories import create_sqlite_database
from ledgerbook.domain.account import AccountService
from ledgerbook.domain.entities import Account, EntryInput
from ledgerbook.domain.ledger import LedgerService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def ledger_service(temp_db):
    """Create a LedgerService with a temporary database."""
    return LedgerService(temp_db)


@pytest.fixture
def sample_accounts(account_service):
    """Create a small chart of accounts and return the IDs keyed by code."""
    caixa = account_service.create_account(name="Caixa", code="1000", account_type="asset")
    banco = account_service.create_account(
        name="Banco", code="1100", account_type="asset", parent_id=caixa
    )
    fornecedores = account_service.create_account(
        name="Fornecedores", code="3000", account_type="liability"
    )
    capital = account_service.create_account(name="Capital", code="5000", account_type="equity")
    return {"1000": caixa, "1100": banco, "3000": fornecedores, "5000": capital}


@pytest.fixture
def make_entry():
    """Build EntryInput values with Decimal amounts."""

    def _make(account_id: int, amount, entry_type: str, description=None) -> EntryInput:
        return EntryInput(
            account_id=account_id,
            amount=Decimal(str(amount)),
            type=entry_type,
            description=description,
        )

    return _make


@pytest.fixture
def make_account():
    """Build Account entities without touching the database."""

    def _make(account_id: int, code: str, account_type: str = "asset", parent_id=None) -> Account:
        return Account(
            id=account_id,
            code=code,
            name=f"Account {code}",
            type=account_type,
            parent_id=parent_id,
            is_active=True,
            description=None,
            created_at=datetime.now(UTC),
        )

    return _make


@pytest.fixture
def caixa_ledger(ledger_service, sample_accounts, make_entry):
    """Post three transactions touching account 1000 (Caixa)."""
    caixa = sample_accounts["1000"]
    capital = sample_accounts["5000"]
    ledger_service.create_transaction(
        date=date(2024, 1, 5),
        entries=[make_entry(caixa, 1000, "debit"), make_entry(capital, 1000, "credit")],
        description="Capital inicial",
    )
    ledger_service.create_transaction(
        date=date(2024, 1, 10),
        entries=[make_entry(capital, 200, "debit"), make_entry(caixa, 200, "credit")],
        description="Retirada",
    )
    ledger_service.create_transaction(
        date=date(2024, 2, 1),
        entries=[make_entry(caixa, 50, "debit"), make_entry(capital, 50, "credit")],
        description="Aporte",
    )
    return caixa


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()

"""Tests for AccountService (chart of accounts rules)."""

from datetime import date

import pytest

from ledgerbook.domain.errors import (
    CycleError,
    DomainError,
    DuplicateCodeError,
    HasChildrenError,
    NotFoundError,
    ReferencedByTransactionsError,
    ValidationError,
)


class TestCreateAccount:
    """Tests for account creation."""

    def test_create_account_is_active(self, account_service):
        account_id = account_service.create_account(
            name="Caixa", code="1000", account_type="asset", description="Dinheiro em espécie"
        )
        account = account_service.get_account(account_id)
        assert account.code == "1000"
        assert account.name == "Caixa"
        assert account.type == "asset"
        assert account.parent_id is None
        assert account.is_active is True
        assert account.description == "Dinheiro em espécie"

    def test_create_duplicate_code(self, account_service):
        account_service.create_account(name="Caixa", code="1000", account_type="asset")
        with pytest.raises(DuplicateCodeError, match="1000 already exists"):
            account_service.create_account(name="Outra", code="1000", account_type="equity")
        assert len(account_service.list_accounts()) == 1

    def test_duplicate_code_is_value_error(self, account_service):
        account_service.create_account(name="Caixa", code="1000", account_type="asset")
        with pytest.raises(ValueError):
            account_service.create_account(name="Caixa", code="1000", account_type="asset")

    def test_create_invalid_type(self, account_service):
        with pytest.raises(ValidationError):
            account_service.create_account(name="Receita", code="4000", account_type="revenue")

    def test_create_with_unknown_parent(self, account_service):
        with pytest.raises(NotFoundError):
            account_service.create_account(
                name="Banco", code="1100", account_type="asset", parent_id=999
            )

    def test_create_requires_code(self, account_service):
        with pytest.raises(ValidationError):
            account_service.create_account(name="Caixa", code="  ", account_type="asset")


class TestListAccounts:
    """Tests for account listing."""

    def test_list_all(self, account_service, sample_accounts):
        codes = [acc.code for acc in account_service.list_accounts()]
        assert codes == ["1000", "1100", "3000", "5000"]

    def test_list_by_type(self, account_service, sample_accounts):
        assets = account_service.list_accounts_by_type("asset")
        assert {acc.code for acc in assets} == {"1000", "1100"}
        assert [acc.code for acc in account_service.list_accounts_by_type("equity")] == ["5000"]

    def test_list_active(self, account_service, sample_accounts):
        account_service.toggle_active(sample_accounts["3000"])
        active = account_service.list_active_accounts()
        assert "3000" not in {acc.code for acc in active}
        assert len(active) == 3

    def test_search_by_name_or_code(self, account_service, sample_accounts):
        assert [a.code for a in account_service.search_accounts("banc")] == ["1100"]
        assert [a.code for a in account_service.search_accounts("30")] == ["3000"]
        assert len(account_service.search_accounts("")) == 4
        assert [a.code for a in account_service.search_accounts("", account_type="liability")] == ["3000"]

    def test_stats(self, account_service, sample_accounts):
        account_service.toggle_active(sample_accounts["5000"])
        stats = account_service.get_stats()
        assert stats.total == 4
        assert stats.active == 3
        assert stats.assets == 2
        assert stats.liabilities == 1
        assert stats.equity == 1


class TestUpdateAccount:
    """Tests for partial account updates."""

    def test_partial_update_keeps_other_fields(self, account_service, sample_accounts):
        account_service.update_account(sample_accounts["1100"], name="Banco do Brasil")
        account = account_service.get_account(sample_accounts["1100"])
        assert account.name == "Banco do Brasil"
        assert account.code == "1100"
        assert account.parent_id == sample_accounts["1000"]
        assert account.type == "asset"

    def test_update_code_to_duplicate(self, account_service, sample_accounts):
        with pytest.raises(DuplicateCodeError):
            account_service.update_account(sample_accounts["1100"], code="3000")
        assert account_service.get_account(sample_accounts["1100"]).code == "1100"

    def test_update_code_to_own_code(self, account_service, sample_accounts):
        account_service.update_account(sample_accounts["1100"], code="1100", name="Banco")
        assert account_service.get_account(sample_accounts["1100"]).code == "1100"

    def test_update_unknown_account(self, account_service):
        with pytest.raises(NotFoundError):
            account_service.update_account(42, name="Nada")

    def test_update_parent(self, account_service, sample_accounts):
        account_service.update_account(sample_accounts["5000"], parent_id=sample_accounts["3000"])
        assert account_service.get_account(sample_accounts["5000"]).parent_id == sample_accounts["3000"]

    def test_update_parent_to_descendant_rejected(self, account_service, sample_accounts):
        with pytest.raises(CycleError):
            account_service.update_account(sample_accounts["1000"], parent_id=sample_accounts["1100"])
        assert account_service.get_account(sample_accounts["1000"]).parent_id is None

    def test_update_parent_to_self_rejected(self, account_service, sample_accounts):
        with pytest.raises(CycleError):
            account_service.update_account(sample_accounts["1000"], parent_id=sample_accounts["1000"])

    def test_clear_parent(self, account_service, sample_accounts):
        account_service.update_account(sample_accounts["1100"], clear_parent=True)
        assert account_service.get_account(sample_accounts["1100"]).parent_id is None

    def test_clear_parent_conflicts_with_parent(self, account_service, sample_accounts):
        with pytest.raises(ValidationError):
            account_service.update_account(
                sample_accounts["1100"], parent_id=sample_accounts["3000"], clear_parent=True
            )


class TestDeleteAccount:
    """Tests for account deletion guards."""

    def test_delete_unused_account(self, account_service, sample_accounts):
        account_service.delete_account(sample_accounts["3000"])
        assert account_service.get_account(sample_accounts["3000"]) is None

    def test_delete_with_children(self, account_service, sample_accounts):
        with pytest.raises(HasChildrenError, match="child account"):
            account_service.delete_account(sample_accounts["1000"])
        assert account_service.get_account(sample_accounts["1000"]) is not None

    def test_delete_referenced_by_entries(
        self, account_service, ledger_service, sample_accounts, make_entry
    ):
        ledger_service.create_transaction(
            date=date(2024, 1, 5),
            entries=[
                make_entry(sample_accounts["1100"], 100, "debit"),
                make_entry(sample_accounts["3000"], 100, "credit"),
            ],
        )
        with pytest.raises(ReferencedByTransactionsError, match="deactivate"):
            account_service.delete_account(sample_accounts["3000"])
        assert account_service.get_account(sample_accounts["3000"]) is not None

    def test_delete_after_transaction_removed(
        self, account_service, ledger_service, sample_accounts, make_entry
    ):
        txn_id = ledger_service.create_transaction(
            date=date(2024, 1, 5),
            entries=[
                make_entry(sample_accounts["1100"], 100, "debit"),
                make_entry(sample_accounts["3000"], 100, "credit"),
            ],
        )
        ledger_service.delete_transaction(txn_id)
        account_service.delete_account(sample_accounts["3000"])
        assert account_service.get_account(sample_accounts["3000"]) is None

    def test_delete_unknown_account(self, account_service):
        with pytest.raises(NotFoundError):
            account_service.delete_account(123)

    def test_guard_errors_are_domain_errors(self, account_service, sample_accounts):
        with pytest.raises(DomainError):
            account_service.delete_account(sample_accounts["1000"])


class TestToggleActive:
    """Tests for soft-disabling accounts."""

    def test_toggle_flips_flag(self, account_service, sample_accounts):
        account_id = sample_accounts["1000"]
        assert account_service.toggle_active(account_id) == account_id
        assert account_service.get_account(account_id).is_active is False
        account_service.toggle_active(account_id)
        assert account_service.get_account(account_id).is_active is True

    def test_toggle_unknown_account(self, account_service):
        with pytest.raises(NotFoundError):
            account_service.toggle_active(77)


class TestHierarchy:
    """Tests for hierarchy exposed through the service."""

    def test_get_hierarchy(self, account_service, sample_accounts):
        nodes = account_service.get_hierarchy()
        assert [(n.account.code, n.level) for n in nodes] == [
            ("1000", 0),
            ("1100", 1),
            ("3000", 0),
            ("5000", 0),
        ]

    def test_get_available_parents(self, account_service, sample_accounts):
        parents = account_service.get_available_parents(sample_accounts["1000"])
        assert {acc.code for acc in parents} == {"3000", "5000"}
        assert len(account_service.get_available_parents()) == 4

"""Tests for transaction and balance commands."""

from ledgerbook.cli.main import cli


def _invoke(cli_runner, temp_db, *args, **kwargs):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], **kwargs)


def _create(cli_runner, temp_db, day, *entries, description=None):
    args = ["transaction", "create", "--date", day]
    for entry in entries:
        args += ["--entry", entry]
    if description:
        args += ["--description", description]
    return _invoke(cli_runner, temp_db, *args)


def test_transaction_create(cli_runner, temp_db, sample_accounts):
    """Test recording a balanced transaction."""
    result = _create(cli_runner, temp_db, "2024-01-05", "1000:debit:500", "3000:credit:500", description="Compra")

    assert result.exit_code == 0
    assert "Created transaction 1" in result.output
    assert "total 500.00" in result.output


def test_transaction_create_unbalanced(cli_runner, temp_db, sample_accounts):
    """Test unbalanced transactions are rejected and not saved."""
    result = _create(cli_runner, temp_db, "2024-01-05", "1000:debit:500", "3000:credit:400")

    assert result.exit_code == 1
    assert "must be balanced" in result.output

    result = _invoke(cli_runner, temp_db, "transaction", "list")
    assert "No transactions found" in result.output


def test_transaction_create_bad_entry(cli_runner, temp_db, sample_accounts):
    """Test malformed entries are reported."""
    result = _create(cli_runner, temp_db, "2024-01-05", "1000-debit-500")

    assert result.exit_code == 1
    assert "Invalid entry" in result.output


def test_transaction_create_unknown_account(cli_runner, temp_db, sample_accounts):
    """Test entries must reference existing accounts."""
    result = _create(cli_runner, temp_db, "2024-01-05", "1000:debit:5", "8888:credit:5")

    assert result.exit_code == 1
    assert "not found" in result.output


def test_transaction_create_bad_date(cli_runner, temp_db, sample_accounts):
    """Test invalid dates are reported."""
    result = _create(cli_runner, temp_db, "someday", "1000:debit:5", "3000:credit:5")

    assert result.exit_code == 1
    assert "Invalid date" in result.output


def test_transaction_list_and_show(cli_runner, temp_db, sample_accounts):
    """Test listing with entries and showing one transaction."""
    _create(cli_runner, temp_db, "2024-01-05", "1000:debit:500:Entrada", "3000:credit:500", description="Compra")
    _create(cli_runner, temp_db, "2024-02-10", "5000:debit:20", "1000:credit:20", description="Retirada")

    result = _invoke(cli_runner, temp_db, "transaction", "list", "--verbose")
    assert result.exit_code == 0
    assert "Found 2 transaction(s)" in result.output
    assert "1000 - Caixa" in result.output
    assert "Entrada" in result.output

    result = _invoke(cli_runner, temp_db, "transaction", "list", "--start-date", "2024-02-01", "--end-date", "2024-02-28")
    assert "Found 1 transaction(s)" in result.output
    assert "Retirada" in result.output

    result = _invoke(cli_runner, temp_db, "transaction", "list", "--search", "compra")
    assert "Found 1 transaction(s)" in result.output

    result = _invoke(cli_runner, temp_db, "transaction", "show", "2")
    assert result.exit_code == 0
    assert "5000 - Capital" in result.output


def test_transaction_list_period_conflict(cli_runner, temp_db):
    """Test --period cannot be combined with explicit dates."""
    result = _invoke(cli_runner, temp_db, "transaction", "list", "--period", "this-month", "--start-date", "2024-01-01")

    assert result.exit_code == 1
    assert "cannot be combined" in result.output


def test_transaction_update_replaces_entries(cli_runner, temp_db, sample_accounts):
    """Test updating a transaction rewrites its entries."""
    _create(cli_runner, temp_db, "2024-01-05", "1000:debit:500", "3000:credit:500")

    result = _invoke(
        cli_runner, temp_db, "transaction", "update", "1", "--date", "2024-01-06",
        "--entry", "1100:debit:600", "--entry", "5000:credit:600",
    )
    assert result.exit_code == 0
    assert "Updated transaction 1" in result.output

    result = _invoke(cli_runner, temp_db, "balance", "1000")
    assert "0.00" in result.output
    result = _invoke(cli_runner, temp_db, "balance", "1100")
    assert "600.00" in result.output


def test_transaction_update_unknown(cli_runner, temp_db, sample_accounts):
    """Test updating a missing transaction fails."""
    result = _invoke(
        cli_runner, temp_db, "transaction", "update", "42", "--date", "2024-01-06",
        "--entry", "1100:debit:1", "--entry", "5000:credit:1",
    )
    assert result.exit_code == 1
    assert "not found" in result.output


def test_transaction_delete(cli_runner, temp_db, sample_accounts):
    """Test deleting a transaction frees its accounts for deletion."""
    _create(cli_runner, temp_db, "2024-01-05", "1100:debit:10", "3000:credit:10")

    result = _invoke(cli_runner, temp_db, "account", "delete", "3000", "--yes")
    assert result.exit_code == 1
    assert "deactivate" in result.output

    result = _invoke(cli_runner, temp_db, "transaction", "delete", "1", input="y\n")
    assert result.exit_code == 0
    assert "Deleted transaction 1" in result.output

    result = _invoke(cli_runner, temp_db, "account", "delete", "3000", "--yes")
    assert result.exit_code == 0


def test_transaction_delete_unknown(cli_runner, temp_db):
    """Test deleting a missing transaction fails."""
    result = _invoke(cli_runner, temp_db, "transaction", "delete", "7", "--yes")

    assert result.exit_code == 1
    assert "Transaction 7 not found" in result.output


def test_transaction_stats(cli_runner, temp_db, sample_accounts):
    """Test transaction statistics."""
    _create(cli_runner, temp_db, "2024-01-05", "1000:debit:500", "3000:credit:500")
    _create(cli_runner, temp_db, "2024-01-06", "1000:debit:25.50", "3000:credit:25.50")

    result = _invoke(cli_runner, temp_db, "transaction", "stats")
    assert result.exit_code == 0
    assert "Transactions: 2" in result.output
    assert "Total amount: 525.50" in result.output


def test_balance_as_of(cli_runner, temp_db, sample_accounts):
    """Test the balance command with and without a cut-off date."""
    _create(cli_runner, temp_db, "2024-01-05", "1000:debit:1000", "5000:credit:1000")
    _create(cli_runner, temp_db, "2024-01-10", "5000:debit:200", "1000:credit:200")
    _create(cli_runner, temp_db, "2024-02-01", "1000:debit:50", "5000:credit:50")

    result = _invoke(cli_runner, temp_db, "balance", "1000")
    assert result.exit_code == 0
    assert "Balance of 1000 - Caixa: 850.00" in result.output

    result = _invoke(cli_runner, temp_db, "balance", "1000", "--as-of", "2024-01-31")
    assert "Balance of 1000 - Caixa as of 2024-01-31: 800.00" in result.output

    result = _invoke(cli_runner, temp_db, "balance", "5000")
    assert "-850.00" in result.output


def test_transaction_list_by_entry_type(cli_runner, temp_db, sample_accounts):
    """Test --type keeps transactions with an entry of that type."""
    _create(cli_runner, temp_db, "2024-01-05", "1000:debit:500", "3000:credit:500", description="Compra")
    _create(cli_runner, temp_db, "2024-01-06", "1100:debit:0", description="Abertura")

    result = _invoke(cli_runner, temp_db, "transaction", "list", "--type", "credit")
    assert result.exit_code == 0
    assert "Found 1 transaction(s)" in result.output
    assert "Compra" in result.output
    assert "Abertura" not in result.output

    result = _invoke(
        cli_runner, temp_db, "transaction", "list", "--type", "debit", "--start-date", "2024-01-06", "--end-date", "2024-01-31"
    )
    assert "Found 1 transaction(s)" in result.output
    assert "Abertura" in result.output


def test_transaction_list_rejects_unknown_entry_type(cli_runner, temp_db):
    """Test click rejects entry types other than debit and credit."""
    result = _invoke(cli_runner, temp_db, "transaction", "list", "--type", "transfer")
    assert result.exit_code != 0


def test_transaction_show_unknown(cli_runner, temp_db):
    """Test showing a missing transaction fails."""
    result = _invoke(cli_runner, temp_db, "transaction", "show", "3")

    assert result.exit_code == 1
    assert "Error: Transaction 3 not found" in result.output


def test_transaction_create_sub_cent_unbalanced(cli_runner, temp_db, sample_accounts):
    """Test amounts are rounded to cents before the balance check."""
    result = _create(
        cli_runner, temp_db, "2024-01-05", "1000:debit:0.333", "1100:debit:0.333", "5000:debit:0.334", "3000:credit:1"
    )

    assert result.exit_code == 1
    assert "must be balanced" in result.output

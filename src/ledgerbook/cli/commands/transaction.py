"""Transaction management commands."""

import click
from datetime import date
from ledgerbook.cli.account_resolution import resolve_account_or_exit
from ledgerbook.cli.date_filters import parse_date_or_exit, resolve_cli_date_range
from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.domain.account import AccountService
from ledgerbook.domain.entities import DEBIT, ENTRY_TYPES, EntryInput, TransactionWithEntries
from ledgerbook.domain.errors import DomainError, NotFoundError, transaction_not_found
from ledgerbook.domain.ledger import LedgerService
from ledgerbook.utils.date_parser import PERIODS
from ledgerbook.utils.entry_parser import parse_entry

ENTRY_HELP = (
    "Entry as ACCOUNT:debit|credit:AMOUNT[:DESCRIPTION]; ACCOUNT is a code or ID. "
    "Repeat for each line."
)


def _build_entries(ctx, account_service: AccountService, specs: tuple[str, ...]) -> list[EntryInput]:
    """Parse --entry options and resolve their accounts, exiting on error."""
    entries = []
    for spec in specs:
        try:
            parsed = parse_entry(spec)
        except ValueError as e:
            handle_domain_error(ctx, e)
        entries.append(
            EntryInput(
                account_id=resolve_account_or_exit(ctx, account_service, parsed.account),
                amount=parsed.amount,
                type=parsed.type,
                description=parsed.description,
            )
        )
    return entries


def _echo_transaction(item: TransactionWithEntries, accounts: dict[int, str], verbose: bool) -> None:
    txn = item.transaction
    description = (txn.description or "")[:40]
    reference = txn.reference or ""
    click.echo(
        f"{txn.id:<6} {str(txn.date):<12} {txn.total_amount:>14,.2f} {reference:<12} {description:<40}"
    )
    if verbose:
        for entry in item.entries:
            debit = f"{entry.amount:,.2f}" if entry.type == DEBIT else ""
            credit = f"{entry.amount:,.2f}" if entry.type != DEBIT else ""
            account_label = accounts.get(entry.account_id, f"#{entry.account_id} (missing)")
            click.echo(
                f"{'':<6} {account_label:<30} {debit:>14} {credit:>14}  {entry.description or ''}"
            )


def _within(
    items: list[TransactionWithEntries], start: date | None, end: date | None
) -> list[TransactionWithEntries]:
    return [
        item
        for item in items
        if (start is None or item.date >= start) and (end is None or item.date <= end)
    ]


@click.group()
def transaction_group():
    """Manage journal transactions."""
    pass


@transaction_group.command("create")
@click.option("--date", "date_str", required=True, help="Transaction date (YYYY-MM-DD or relative like 'today')")
@click.option("--entry", "entries", multiple=True, required=True, help=ENTRY_HELP)
@click.option("--description", help="Transaction description")
@click.option("--reference", help="Reference (invoice number, check number, ...)")
@click.pass_context
def create_transaction(
    ctx, date_str: str, entries: tuple[str, ...], description: str | None, reference: str | None
) -> None:
    """Record a balanced transaction.

    The debit and credit totals must match.

    Examples:
        ledgerbook transaction create --date 2024-01-05 \\
            --entry 1000:debit:500 --entry 3000:credit:500 --description "Loan"
    """
    db = ctx.obj["db"]
    service = LedgerService(db)
    account_service = AccountService(db)

    txn_date = parse_date_or_exit(ctx, date_str)
    entry_inputs = _build_entries(ctx, account_service, entries)

    try:
        transaction_id = service.create_transaction(
            date=txn_date,
            entries=entry_inputs,
            description=description,
            reference=reference,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    txn = service.get_transaction(transaction_id).transaction
    click.echo(f"Created transaction {transaction_id} ({txn.date}, total {txn.total_amount:,.2f})")


@transaction_group.command("update")
@click.argument("transaction_id", type=int)
@click.option("--date", "date_str", required=True, help="Transaction date")
@click.option("--entry", "entries", multiple=True, required=True, help=ENTRY_HELP)
@click.option("--description", help="Transaction description")
@click.option("--reference", help="Reference")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: int,
    date_str: str,
    entries: tuple[str, ...],
    description: str | None,
    reference: str | None,
) -> None:
    """Rewrite a transaction.

    All existing entries are replaced by the given ones.

    Examples:
        ledgerbook transaction update 1 --date 2024-01-06 \\
            --entry 1000:debit:600 --entry 3000:credit:600
    """
    db = ctx.obj["db"]
    service = LedgerService(db)
    account_service = AccountService(db)

    txn_date = parse_date_or_exit(ctx, date_str)
    entry_inputs = _build_entries(ctx, account_service, entries)

    try:
        service.update_transaction(
            transaction_id=transaction_id,
            date=txn_date,
            entries=entry_inputs,
            description=description,
            reference=reference,
        )
        click.echo(f"Updated transaction {transaction_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@transaction_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option("--period", type=click.Choice(PERIODS), help="Named period instead of explicit dates")
@click.option("--search", help="Match description, reference or entry description")
@click.option(
    "--type",
    "entry_type",
    type=click.Choice(ENTRY_TYPES),
    help="Only transactions with at least one entry of this type",
)
@click.option("--verbose", "-v", is_flag=True, help="Show the entries of each transaction")
@click.pass_context
def list_transactions(
    ctx,
    start_date: str | None,
    end_date: str | None,
    period: str | None,
    search: str | None,
    entry_type: str | None,
    verbose: bool,
) -> None:
    """View transactions with optional filters."""
    db = ctx.obj["db"]
    service = LedgerService(db)
    account_service = AccountService(db)

    start, end = resolve_cli_date_range(ctx, start_date=start_date, end_date=end_date, period=period)

    if search or entry_type:
        items = _within(service.search_transactions(search or "", entry_type=entry_type), start, end)
    elif start is not None and end is not None:
        items = service.list_transactions_by_date_range(start, end)
    else:
        items = _within(service.list_transactions_with_entries(), start, end)

    if not items:
        click.echo("No transactions found.")
        return

    accounts = {acc.id: f"{acc.code} - {acc.name}" for acc in account_service.list_accounts()}

    click.echo(f"\nFound {len(items)} transaction(s):")
    click.echo("-" * 90)
    click.echo(f"{'ID':<6} {'Date':<12} {'Total':>14} {'Reference':<12} {'Description':<40}")
    click.echo("-" * 90)
    for item in items:
        _echo_transaction(item, accounts, verbose)

    total = sum(item.transaction.total_amount for item in items)
    click.echo("-" * 90)
    click.echo(f"{'TOTAL':<6} {'':<12} {total:>14,.2f} | Count: {len(items)}")


@transaction_group.command("show")
@click.argument("transaction_id", type=int)
@click.pass_context
def show_transaction(ctx, transaction_id: int) -> None:
    """Show a transaction with its entries."""
    db = ctx.obj["db"]
    service = LedgerService(db)

    item = service.get_transaction(transaction_id)
    if item is None:
        handle_domain_error(ctx, NotFoundError(transaction_not_found(transaction_id)))

    accounts = {acc.id: f"{acc.code} - {acc.name}" for acc in AccountService(db).list_accounts()}
    _echo_transaction(item, accounts, verbose=True)


@transaction_group.command("stats")
@click.pass_context
def transaction_stats(ctx) -> None:
    """Show transaction count, total amount and this month's count."""
    db = ctx.obj["db"]
    stats = LedgerService(db).get_stats(today=date.today())

    click.echo(f"Transactions: {stats.total}")
    click.echo(f"Total amount: {stats.total_amount:,.2f}")
    click.echo(f"This month:   {stats.this_month}")


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: int, yes: bool) -> None:
    """Delete a transaction and its entries.

    Examples:
        ledgerbook transaction delete 1
    """
    db = ctx.obj["db"]
    service = LedgerService(db)

    if service.get_transaction(transaction_id) is None:
        handle_domain_error(ctx, NotFoundError(transaction_not_found(transaction_id)))

    if not yes and not click.confirm(f"Are you sure you want to delete transaction {transaction_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_transaction(transaction_id)
        click.echo(f"Deleted transaction {transaction_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")

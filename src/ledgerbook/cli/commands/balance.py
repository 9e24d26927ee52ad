"""Account balance command."""

import click
from ledgerbook.cli.account_resolution import resolve_account_or_exit
from ledgerbook.cli.date_filters import parse_date_or_exit
from ledgerbook.domain.account import AccountService
from ledgerbook.domain.ledger import LedgerService


@click.command("balance")
@click.argument("account", metavar="ACCOUNT")
@click.option("--as-of", help="Only count transactions dated on or before this day")
@click.pass_context
def balance(ctx, account: str, as_of: str | None) -> None:
    """Show the balance of an account.

    Debits add to the balance and credits subtract from it.

    Examples:
        ledgerbook balance 1000
        ledgerbook balance 1000 --as-of 2024-01-31
    """
    db = ctx.obj["db"]
    account_service = AccountService(db)
    ledger_service = LedgerService(db)

    account_id = resolve_account_or_exit(ctx, account_service, account)
    as_of_date = parse_date_or_exit(ctx, as_of, "as-of date") if as_of else None

    acc = account_service.get_account(account_id)
    amount = ledger_service.compute_account_balance(account_id, as_of_date=as_of_date)
    suffix = f" as of {as_of_date}" if as_of_date else ""
    click.echo(f"Balance of {acc.code} - {acc.name}{suffix}: {amount:,.2f}")


def register_commands(cli: click.Group) -> None:
    """Register balance command with main CLI."""
    cli.add_command(balance)

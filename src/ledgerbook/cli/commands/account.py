"""Account management commands."""

import click
from ledgerbook.cli.account_resolution import resolve_account_or_exit
from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.domain.account import AccountService
from ledgerbook.domain.entities import ACCOUNT_TYPES
from ledgerbook.domain.errors import DomainError


def _format_account_line(acc, level: int = 0) -> str:
    indent = "  " * level
    status = "" if acc.is_active else " [inactive]"
    label = f"{indent}{acc.code} - {acc.name}"
    return f"ID: {acc.id:3d} | {label:40s} | {acc.type:9s}{status}"


@click.group()
def account_group():
    """Manage the chart of accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--code", required=True, help="Unique account code (e.g., 1000)")
@click.option(
    "--type",
    "account_type",
    required=True,
    type=click.Choice(ACCOUNT_TYPES),
    help="Account type",
)
@click.option("--parent", help="Parent account code or ID")
@click.option("--description", help="Account description")
@click.pass_context
def create_account(
    ctx, name: str, code: str, account_type: str, parent: str | None, description: str | None
):
    """Create a new account.

    Examples:
        ledgerbook account create "Caixa" --code 1000 --type asset
        ledgerbook account create "Banco" --code 1100 --type asset --parent 1000
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    parent_id = None
    if parent is not None:
        parent_id = resolve_account_or_exit(ctx, service, parent)

    try:
        account_id = service.create_account(
            name=name,
            code=code,
            account_type=account_type,
            parent_id=parent_id,
            description=description,
        )
        click.echo(f"Created account {code} '{name}' (ID: {account_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@account_group.command("list")
@click.option("--type", "account_type", type=click.Choice(ACCOUNT_TYPES), help="Only this account type")
@click.option("--active", "active_only", is_flag=True, help="Only active accounts")
@click.option("--search", help="Match account name or code (case-insensitive)")
@click.pass_context
def list_accounts(ctx, account_type: str | None, active_only: bool, search: str | None):
    """List accounts in chart-of-accounts order.

    Child accounts are indented below their parent.
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    accounts = service.search_accounts(search or "", account_type=account_type)
    if active_only:
        accounts = [acc for acc in accounts if acc.is_active]

    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 70)
    for node in service.get_hierarchy(accounts):
        click.echo(_format_account_line(node.account, node.level))

    stats = service.get_stats()
    click.echo("-" * 70)
    click.echo(f"Showing {len(accounts)} of {stats.total} accounts")


@account_group.command("stats")
@click.pass_context
def account_stats(ctx):
    """Show account counts by status and type."""
    db = ctx.obj["db"]
    stats = AccountService(db).get_stats()

    click.echo(f"Total:       {stats.total}")
    click.echo(f"Active:      {stats.active}")
    click.echo(f"Assets:      {stats.assets}")
    click.echo(f"Liabilities: {stats.liabilities}")
    click.echo(f"Equity:      {stats.equity}")


@account_group.command("update")
@click.argument("account", metavar="ACCOUNT")
@click.option("--name", help="New account name")
@click.option("--code", help="New account code")
@click.option("--parent", help="New parent account code or ID")
@click.option("--no-parent", is_flag=True, help="Make the account a root account")
@click.option("--description", help="New description")
@click.pass_context
def update_account(
    ctx,
    account: str,
    name: str | None,
    code: str | None,
    parent: str | None,
    no_parent: bool,
    description: str | None,
) -> None:
    """Update an account.

    ACCOUNT can be an account code or ID. Only the given fields change; the
    account type cannot be changed.

    Examples:
        ledgerbook account update 1000 --name "Caixa Geral"
        ledgerbook account update 1100 --parent 1000
        ledgerbook account update 1100 --no-parent
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    if parent is not None and no_parent:
        handle_domain_error(ctx, ValueError("--parent and --no-parent cannot be combined"))

    account_id = resolve_account_or_exit(ctx, service, account)
    parent_id = resolve_account_or_exit(ctx, service, parent) if parent is not None else None

    try:
        service.update_account(
            account_id=account_id,
            name=name,
            code=code,
            parent_id=parent_id,
            description=description,
            clear_parent=no_parent,
        )
        click.echo(f"Updated account {account_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@account_group.command("toggle")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def toggle_account(ctx, account: str) -> None:
    """Activate or deactivate an account.

    Deactivate accounts that are used by transactions instead of deleting them.
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    account_id = resolve_account_or_exit(ctx, service, account)
    try:
        service.toggle_active(account_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    acc = service.get_account(account_id)
    click.echo(f"Account {acc.code} is now {'active' if acc.is_active else 'inactive'}")


@account_group.command("parents")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def list_parents(ctx, account: str) -> None:
    """List the accounts that ACCOUNT can be moved under."""
    db = ctx.obj["db"]
    service = AccountService(db)

    account_id = resolve_account_or_exit(ctx, service, account)
    candidates = service.get_available_parents(account_id)
    if not candidates:
        click.echo("No available parent accounts.")
        return
    for acc in candidates:
        click.echo(f"{acc.code} - {acc.name}")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an account.

    ACCOUNT can be an account code or ID.

    The account can only be deleted if it has no child accounts and no
    transaction entries. Use 'account toggle' to deactivate it instead.

    Examples:
        ledgerbook account delete 1000
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    account_id = resolve_account_or_exit(ctx, service, account)
    account_obj = service.get_account(account_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete account {account_obj.code} '{account_obj.name}'?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(account_id)
        click.echo(f"Deleted account {account_obj.code} '{account_obj.name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")

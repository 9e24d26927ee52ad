"""Utility for resolving account codes to IDs."""

from ledgerbook.domain.account import AccountService
from ledgerbook.domain.errors import NotFoundError


def resolve_account(account_service: AccountService, account: str | int) -> int:
    """Resolve an account code or ID to an account ID.

    Codes take precedence, since codes such as "1000" look like IDs. A value
    prefixed with '#' ("#3") is always treated as an ID.

    Args:
        account_service: AccountService instance
        account: Account code (str) or ID (int, numeric string or '#'-prefixed)

    Returns:
        Account ID

    Raises:
        NotFoundError: If no account matches
    """
    if isinstance(account, int):
        if account_service.get_account(account) is None:
            raise NotFoundError(f"Account ID {account} not found")
        return account

    text = account.strip()
    if not text.startswith("#"):
        by_code = account_service.get_account_by_code(text)
        if by_code is not None:
            return by_code.id

    try:
        account_id = int(text.lstrip("#"))
    except ValueError:
        raise NotFoundError(f"Account '{account}' not found")

    if account_service.get_account(account_id) is None:
        raise NotFoundError(f"Account '{account}' not found")
    return account_id

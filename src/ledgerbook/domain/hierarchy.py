"""Chart of accounts hierarchy derivation."""

from typing import Iterable, Optional

from ledgerbook.domain.entities import ACCOUNT_TYPE_RANK, Account, AccountNode
from ledgerbook.domain.integrity import children_index, descendant_ids


def _root_sort_key(account: Account) -> tuple[int, str]:
    return (ACCOUNT_TYPE_RANK.get(account.type, len(ACCOUNT_TYPE_RANK)), account.code)


def _code_sort_key(account: Account) -> str:
    return account.code


def flatten_hierarchy(accounts: Iterable[Account]) -> list[AccountNode]:
    """Flatten the account forest into display order.

    Roots are accounts without a parent, or whose parent is not in the given
    set. Roots are ordered by account type (asset, liability, equity) and then
    code; children are ordered by code. Each parent is immediately followed by
    its entire subtree.

    Args:
        accounts: Accounts to arrange

    Returns:
        List of account nodes annotated with their depth
    """
    accounts = list(accounts)
    known_ids = {account.id for account in accounts}
    index = children_index(accounts)

    roots = [
        account
        for account in accounts
        if account.parent_id is None or account.parent_id not in known_ids
    ]
    roots.sort(key=_root_sort_key)

    result: list[AccountNode] = []
    visited: set[int] = set()
    stack = [(root, 0) for root in reversed(roots)]
    while stack:
        account, level = stack.pop()
        if account.id in visited:
            continue
        visited.add(account.id)
        result.append(AccountNode(account=account, level=level))
        children = sorted(index.get(account.id, ()), key=_code_sort_key)
        stack.extend((child, level + 1) for child in reversed(children))
    return result


def available_parents(account_id: Optional[int], accounts: Iterable[Account]) -> list[Account]:
    """List the accounts that may become the parent of ``account_id``.

    When editing an account, the account itself and all of its descendants are
    excluded. When creating one (``account_id`` is None) every account is a
    candidate.
    """
    accounts = list(accounts)
    if account_id is None:
        return accounts
    excluded = descendant_ids(account_id, accounts)
    excluded.add(account_id)
    return [account for account in accounts if account.id not in excluded]

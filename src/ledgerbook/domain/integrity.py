"""Integrity guard predicates.

Pure functions over in-memory collections. Services evaluate them against a
snapshot taken from storage before any write is issued.
"""

from collections import defaultdict
from typing import Iterable, Optional

from ledgerbook.domain.entities import Account, TransactionEntry


def children_index(accounts: Iterable[Account]) -> dict[Optional[int], list[Account]]:
    """Group accounts by their parent ID."""
    index: dict[Optional[int], list[Account]] = defaultdict(list)
    for account in accounts:
        index[account.parent_id].append(account)
    return index


def has_children(account_id: int, accounts: Iterable[Account]) -> bool:
    """Return True if any account declares ``account_id`` as its parent."""
    return any(account.parent_id == account_id for account in accounts)


def is_referenced_by_entries(account_id: int, entries: Iterable[TransactionEntry]) -> bool:
    """Return True if any transaction entry posts to ``account_id``."""
    return any(entry.account_id == account_id for entry in entries)


def descendant_ids(account_id: int, accounts: Iterable[Account]) -> set[int]:
    """Get IDs of all transitive descendants of an account.

    The account itself is not included unless the stored data already
    contains a cycle through it.
    """
    index = children_index(accounts)
    result: set[int] = set()
    pending = [account_id]
    while pending:
        current = pending.pop()
        for child in index.get(current, ()):
            if child.id not in result:
                result.add(child.id)
                pending.append(child.id)
    return result


def would_create_cycle(
    account_id: int, candidate_parent_id: int, accounts: Iterable[Account]
) -> bool:
    """Return True if making ``candidate_parent_id`` the parent of ``account_id`` creates a cycle.

    That is the case exactly when the candidate is the account itself or one
    of its descendants.
    """
    if candidate_parent_id == account_id:
        return True
    return candidate_parent_id in descendant_ids(account_id, accounts)

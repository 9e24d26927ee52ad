"""Parsing of transaction entry specifications given on the command line."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ledgerbook.domain.entities import ENTRY_TYPES
from ledgerbook.utils.amount_parser import parse_amount


@dataclass(frozen=True)
class EntrySpec:
    """Entry with the account still unresolved."""

    account: str
    type: str
    amount: Decimal
    description: Optional[str] = None


def parse_entry(spec: str) -> EntrySpec:
    """Parse ``ACCOUNT:TYPE:AMOUNT[:DESCRIPTION]``.

    ACCOUNT is an account code or ID, TYPE is ``debit`` or ``credit`` (``d`` and
    ``c`` are accepted). The description may itself contain colons.

    Raises:
        ValueError: If the specification is malformed
    """
    parts = spec.split(":", 3)
    if len(parts) < 3:
        raise ValueError(f"Invalid entry '{spec}'. Expected ACCOUNT:debit|credit:AMOUNT[:DESCRIPTION]")

    account, entry_type, amount = (part.strip() for part in parts[:3])
    if not account:
        raise ValueError(f"Invalid entry '{spec}': missing account")

    entry_type = entry_type.lower()
    entry_type = {"d": "debit", "c": "credit"}.get(entry_type, entry_type)
    if entry_type not in ENTRY_TYPES:
        raise ValueError(f"Invalid entry '{spec}': type must be 'debit' or 'credit'")

    description = parts[3].strip() if len(parts) == 4 and parts[3].strip() else None
    return EntrySpec(
        account=account,
        type=entry_type,
        amount=parse_amount(amount),
        description=description,
    )

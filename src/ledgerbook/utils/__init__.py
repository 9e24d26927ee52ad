"""Utility functions for ledgerbook."""

from ledgerbook.utils.date_parser import parse_date, get_date_range
from ledgerbook.utils.amount_parser import parse_amount
from ledgerbook.utils.entry_parser import parse_entry

__all__ = ["parse_date", "get_date_range", "parse_amount", "parse_entry"]

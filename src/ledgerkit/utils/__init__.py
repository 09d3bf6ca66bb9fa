"""Utility functions for ledgerkit."""

from ledgerkit.utils.date_parser import get_date_range, parse_date
from ledgerkit.utils.account_resolver import resolve_account

__all__ = ["parse_date", "get_date_range", "resolve_account"]

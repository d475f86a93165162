"""
GS1 Date Helpers

Conversions between the GS1 YYMMDD expiry encoding and the MM/DD/YYYY form
used in decoded records and DSCSA exports.

All two-digit years are read as 20YY. There is no century pivot.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional


DATE_FORMAT = "%m/%d/%Y"

NUMERIC = frozenset('0123456789')


def is_numeric(value: str) -> bool:
    """True for a non-empty string of ASCII digits only."""
    return bool(value) and all(c in NUMERIC for c in value)


def format_expiration(value: Optional[str]) -> Optional[str]:
    """
    Convert a YYMMDD expiry value to MM/DD/YYYY.

    Month and day are not range checked, so "991399" becomes "13/99/2099".

    Args:
        value: Raw AI(17) data

    Returns:
        The formatted date, or None if the value is missing, not exactly
        6 characters long, or not all digits
    """
    if not value or len(value) != 6 or not is_numeric(value):
        return None

    yy = int(value[0:2])
    mm = int(value[2:4])
    dd = int(value[4:6])
    year = 2000 + yy

    return f"{mm:02d}/{dd:02d}/{year:04d}"


def parse_expiration(value: Optional[str]) -> Optional[date]:
    """Parse an MM/DD/YYYY date, returning None when it is not a real date."""
    if not value:
        return None
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        return None


def expiration_to_yymmdd(value: Optional[str]) -> Optional[str]:
    """
    Convert an MM/DD/YYYY date back to YYMMDD.

    Only the textual layout is checked, matching format_expiration, so any
    value that format_expiration produced converts back unchanged.
    """
    if not value:
        return None
    parts = value.split("/")
    if len(parts) != 3:
        return None
    mm, dd, yyyy = parts
    if len(mm) != 2 or len(dd) != 2 or len(yyyy) != 4:
        return None
    if not (is_numeric(mm) and is_numeric(dd) and is_numeric(yyyy)):
        return None
    year = int(yyyy)
    if year < 2000 or year > 2099:
        return None
    return f"{year - 2000:02d}{mm}{dd}"

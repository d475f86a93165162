"""
Date helpers for GS1 decoder.
"""

from .validators import (
    format_expiration,
    parse_expiration,
    expiration_to_yymmdd,
    is_numeric,
    DATE_FORMAT,
    NUMERIC,
)

__all__ = [
    "format_expiration",
    "parse_expiration",
    "expiration_to_yymmdd",
    "is_numeric",
    "DATE_FORMAT",
    "NUMERIC",
]

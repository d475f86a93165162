"""
Utility helpers for the scan workbench UI.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional

from dateutil.relativedelta import relativedelta

from gs1_decoder.validators import parse_expiration


def expiry_status(expiration: Optional[str], near_months: int, today: Optional[date] = None) -> str:
    """
    Returns: Valid, Near Expiry, Expired, Unknown
    """
    expiry = parse_expiration(expiration)
    if not expiry:
        return "Unknown"
    today = today or date.today()
    if expiry < today:
        return "Expired"
    threshold = today + relativedelta(months=near_months)
    if expiry <= threshold:
        return "Near Expiry"
    return "Valid"


def safe_get(data: Dict[str, Any], key: str, default: str = "") -> str:
    value = data.get(key, default)
    if value is None:
        return default
    return str(value)

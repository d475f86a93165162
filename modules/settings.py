"""
Application settings persistence.
"""

from __future__ import annotations

from typing import Any, Dict

import streamlit as st

from .storage import get_setting, set_setting


DEFAULT_SETTINGS: Dict[str, Any] = {
    "near_expiry_months": 6,
    "direct_purchase": "yes",
    "default_transaction_date_today": True,
    "auto_lookup_product": True,
}


@st.cache_data(ttl=300)
def load_settings() -> Dict[str, Any]:
    settings = {}
    for key, default in DEFAULT_SETTINGS.items():
        settings[key] = get_setting(key, default)
    return settings


def save_settings(updates: Dict[str, Any]) -> None:
    for key, value in updates.items():
        set_setting(key, value)
    load_settings.clear()

"""
Trading partner to GLN mappings.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

from . import storage


logger = logging.getLogger(__name__)


class PartnerManager:
    """
    In-memory view of the partner registry, grouped by role.

    The view is reloaded from storage after every write.
    """

    def __init__(self):
        self.partners: Dict[str, List[Dict[str, Any]]] = {}
        self.loaded = False

    def load_partners(self) -> Dict[str, List[Dict[str, Any]]]:
        try:
            rows = storage.list_partners()
        except Exception:
            logger.exception("Error loading partners")
            raise

        grouped: Dict[str, List[Dict[str, Any]]] = {}
        for row in rows:
            grouped.setdefault(row["role"], []).append(
                {"id": row.get("id"), "name": row.get("name"), "gln": row.get("gln")}
            )
        self.partners = grouped
        self.loaded = True
        return self.partners

    def add_partner(self, role: str, name: str, gln: str) -> None:
        """
        Add or update a partner mapping.

        Args:
            role: One of sold_by, sold_to, ship_from, ship_to
            name: Partner name
            gln: Partner GLN
        """
        try:
            storage.upsert_partner(role, name, gln)
        except Exception:
            logger.exception("Error adding partner %s", name)
            raise
        self.load_partners()

    def remove_partner(self, role: str, index: int) -> bool:
        """Remove the partner at ``index`` in the role's list. False if there is none."""
        partner = self.get_partner_by_index(role, index)
        if not partner or not partner.get("id"):
            return False
        try:
            storage.delete_partner(partner["id"])
        except Exception:
            logger.exception("Error removing partner %s", partner["id"])
            raise
        self.load_partners()
        return True

    def list_partners(
        self, role: Optional[str] = None
    ) -> Union[List[Dict[str, Any]], Dict[str, List[Dict[str, Any]]]]:
        if role:
            return self.partners.get(role, [])
        return self.partners

    def get_partner_by_index(self, role: str, index: int) -> Optional[Dict[str, Any]]:
        partners = self.partners.get(role, [])
        if 0 <= index < len(partners):
            return partners[index]
        return None

    def get_roles(self) -> List[str]:
        return list(self.partners.keys())

"""
Product registry keyed by GTIN.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from pymongo.errors import PyMongoError

from . import storage


logger = logging.getLogger(__name__)

SEARCH_FIELDS = ("gtin", "ndc", "product_description", "proprietary_name", "manufacturer")


def _to_product(row: Dict[str, Any]) -> Dict[str, Any]:
    return {key: row.get(key) or "" for key in storage.PRODUCT_FIELDS}


class ProductManager:
    """In-memory view of the product registry, newest first."""

    def __init__(self):
        self.products: List[Dict[str, Any]] = []
        self.loaded = False

    def load_products(self) -> List[Dict[str, Any]]:
        try:
            rows = storage.list_products()
        except Exception:
            logger.exception("Error loading products")
            raise
        self.products = [_to_product(row) for row in rows]
        self.loaded = True
        return self.products

    def add_product(
        self,
        gtin: str,
        ndc: str = "",
        product_description: str = "",
        proprietary_name: str = "",
        strength: str = "",
        dosage_form: str = "",
        container_size: str = "",
        manufacturer: str = "",
    ) -> None:
        """Add or update the product mapping for a GTIN."""
        product = {
            "gtin": gtin,
            "ndc": ndc,
            "product_description": product_description,
            "proprietary_name": proprietary_name,
            "strength": strength,
            "dosage_form": dosage_form,
            "container_size": container_size,
            "manufacturer": manufacturer,
        }
        try:
            storage.upsert_product(product)
        except Exception:
            logger.exception("Error adding product %s", gtin)
            raise
        self.load_products()

    def remove_product(self, index: int) -> bool:
        product = self.get_product_by_index(index)
        if product is None:
            return False
        return self.remove_product_by_gtin(product["gtin"])

    def remove_product_by_gtin(self, gtin: str) -> bool:
        try:
            storage.delete_product(gtin)
        except Exception:
            logger.exception("Error removing product %s", gtin)
            raise
        self.load_products()
        return True

    def list_products(self) -> List[Dict[str, Any]]:
        return self.products

    def get_product_by_index(self, index: int) -> Optional[Dict[str, Any]]:
        if 0 <= index < len(self.products):
            return self.products[index]
        return None

    def get_product_by_gtin(self, gtin: str) -> Optional[Dict[str, Any]]:
        """
        Fetch a single product from storage.

        Storage errors are logged and reported as not found.
        """
        try:
            row = storage.get_product(gtin)
        except (PyMongoError, OSError, ValueError):
            logger.exception("Error fetching product %s", gtin)
            return None
        return _to_product(row) if row else None

    def search_products(self, query: Optional[str]) -> List[Dict[str, Any]]:
        """Case-insensitive substring search over identifiers, names and manufacturer."""
        if not query:
            return self.products
        needle = query.lower()
        return [
            product
            for product in self.products
            if any(needle in str(product.get(key) or "").lower() for key in SEARCH_FIELDS)
        ]

"""
Scan pipeline: decode a scanned barcode and enrich it from the product registry.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

from gs1_decoder import decode

from .products import ProductManager


logger = logging.getLogger(__name__)


def parse_scan(
    scan_text: str,
    lookup: bool = True,
    products: Optional[ProductManager] = None,
) -> Tuple[bool, Dict[str, Any], str]:
    """
    Decode a scan string and merge the matching product record.

    Returns:
        (success, data, error_message)
    """
    if not scan_text or not scan_text.strip():
        return False, {}, "Empty scan input"

    record = decode(scan_text)
    if record.is_empty:
        return False, {}, "No GS1 fields found in scan"

    data: Dict[str, Any] = record.to_dict()
    data["raw"] = scan_text.strip()

    if lookup and record.gtin:
        manager = products or ProductManager()
        product = manager.get_product_by_gtin(record.gtin)
        if product:
            for key, value in product.items():
                if key != "gtin":
                    data[key] = value
        else:
            logger.info("GTIN %s not in product registry", record.gtin)
            data["_lookup_error"] = f"GTIN not found in product registry: {record.gtin}"

    return True, data, ""

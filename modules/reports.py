"""
DSCSA transaction CSV export.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

from .config import EXPORTS_DIR


DSCSA_HEADERS = [
    "Transaction Date",
    "Shipment Date",
    "PO Number",
    "Del Document Number",
    "Direct Purchase",
    "NDC",
    "GTIN",
    "Serial Number",
    "Lot",
    "Lot Expiry Date",
    "Product Description",
    "Proprietary Name",
    "Dosage Form",
    "Strength",
    "Container Size",
    "Manufacturer Name",
    "Sold By Name",
    "Sold By GLN",
    "Sold To Name",
    "Sold To GLN",
    "Ship From Name",
    "Ship From GLN",
    "Ship To Name",
    "Ship To GLN",
]

# Header -> scanned item key
ITEM_COLUMNS = {
    "NDC": "ndc",
    "GTIN": "gtin",
    "Serial Number": "serial",
    "Lot": "lot",
    "Lot Expiry Date": "expiration",
    "Product Description": "product_description",
    "Proprietary Name": "proprietary_name",
    "Dosage Form": "dosage_form",
    "Strength": "strength",
    "Container Size": "container_size",
    "Manufacturer Name": "manufacturer",
}

# Header -> transaction metadata key
METADATA_COLUMNS = {
    "Transaction Date": "transaction_date",
    "Shipment Date": "shipment_date",
    "PO Number": "po_number",
    "Del Document Number": "del_document_number",
    "Direct Purchase": "direct_purchase",
    "Sold By Name": "sold_by_name",
    "Sold By GLN": "sold_by_gln",
    "Sold To Name": "sold_to_name",
    "Sold To GLN": "sold_to_gln",
    "Ship From Name": "ship_from_name",
    "Ship From GLN": "ship_from_gln",
    "Ship To Name": "ship_to_name",
    "Ship To GLN": "ship_to_gln",
}


def _text(value: Any) -> str:
    if value is None or value == "":
        return ""
    return str(value)


def build_dscsa_rows(items: List[Dict[str, Any]], metadata: Dict[str, Any]) -> List[Dict[str, str]]:
    """One DSCSA row per scanned item, with the transaction metadata repeated on each."""
    rows = []
    for item in items:
        row = {}
        for header in DSCSA_HEADERS:
            if header in ITEM_COLUMNS:
                row[header] = _text(item.get(ITEM_COLUMNS[header]))
            else:
                row[header] = _text(metadata.get(METADATA_COLUMNS[header]))
        if not row["Direct Purchase"]:
            row["Direct Purchase"] = "yes"
        rows.append(row)
    return rows


def to_dataframe(items: List[Dict[str, Any]], metadata: Dict[str, Any]) -> pd.DataFrame:
    return pd.DataFrame(build_dscsa_rows(items, metadata), columns=DSCSA_HEADERS, dtype=str)


def generate_dscsa_csv(items: List[Dict[str, Any]], metadata: Dict[str, Any]) -> str:
    """
    Render scanned items as DSCSA import CSV.

    Fields containing a comma, quote, newline or carriage return are quoted.
    Rows are joined with "\\n" and there is no trailing newline.
    """
    df = to_dataframe(items, metadata)
    content = df.to_csv(index=False, lineterminator="\n")
    if content.endswith("\n"):
        content = content[:-1]
    return content


def generate_filename(po_number: str) -> str:
    """Export filename for a PO number, e.g. "PO 12/3" -> "PO_12-3_dscsa.csv"."""
    if not po_number:
        po_number = "NO_PO"
    clean = re.sub(r"[/\\]", "-", po_number)
    clean = re.sub(r"\s+", "_", clean)
    return f"{clean}_dscsa.csv"


def ensure_exports_dir() -> None:
    EXPORTS_DIR.mkdir(parents=True, exist_ok=True)


def export_csv(content: str, filename: str) -> Path:
    ensure_exports_dir()
    path = EXPORTS_DIR / filename
    path.write_text(content, encoding="utf-8")
    return path

"""
JSON Formatter for GS1 decoder

Provides clean output for decoded records:
- Human-readable field names for display and export
- Only the fields that were found (absent fields are omitted)
- Re-encoding of a record back to a GS1 element string
"""

from __future__ import annotations

import json
from typing import Dict, Optional

from ..core.decoder import DecodedRecord, decode
from ..validators.validators import expiration_to_yymmdd


# Record attribute to human-readable name, matching the DSCSA export headers
FIELD_LABELS = {
    "gtin": "GTIN",
    "lot": "Lot",
    "serial": "Serial Number",
    "expiration": "Lot Expiry Date",
}

# Fixed-length AIs first so that variable-length data is last or followed by a tag
ENCODE_ORDER = (
    ("01", "gtin"),
    ("17", "expiration"),
    ("10", "lot"),
    ("21", "serial"),
)


def record_to_dict(record: DecodedRecord, labels: bool = False) -> Dict[str, str]:
    """
    Convert a record to a plain dict.

    Args:
        record: Decoded record
        labels: Use human-readable names instead of attribute names

    Returns:
        Dict with only the fields that were found
    """
    output = record.to_dict()
    if not labels:
        return output
    return {FIELD_LABELS[key]: value for key, value in output.items()}


def decode_to_dict(barcode: Optional[str], labels: bool = False) -> Dict[str, str]:
    """Decode a barcode and return its fields as a dict."""
    return record_to_dict(decode(barcode), labels=labels)


def decode_to_json(
    barcode: Optional[str],
    labels: bool = False,
    indent: Optional[int] = 2,
) -> str:
    """
    Decode a barcode and return its fields as a JSON string.

    Example:
        >>> print(decode_to_json("0100312345678906211234", indent=None))
        {"gtin": "00312345678906", "serial": "1234"}
    """
    return json.dumps(decode_to_dict(barcode, labels=labels), indent=indent, ensure_ascii=False)


def encode_gs1(record: DecodedRecord, bracketed: bool = True) -> str:
    """
    Encode a record back into a GS1 element string.

    An expiration that cannot be expressed as YYMMDD is left out.

    Args:
        record: Record to encode
        bracketed: Emit "(AI)value" groups instead of a positional string

    Returns:
        GS1 element string, empty if the record has no fields
    """
    parts = []
    for tag, attribute in ENCODE_ORDER:
        value = getattr(record, attribute)
        if value is None:
            continue
        if attribute == "expiration":
            value = expiration_to_yymmdd(value)
            if value is None:
                continue
        parts.append(f"({tag}){value}" if bracketed else f"{tag}{value}")
    return "".join(parts)

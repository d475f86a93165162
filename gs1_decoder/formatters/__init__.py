"""
Output formatters for GS1 decoder.
"""

from .json_formatter import (
    record_to_dict,
    decode_to_dict,
    decode_to_json,
    encode_gs1,
    FIELD_LABELS,
)

__all__ = [
    "record_to_dict",
    "decode_to_dict",
    "decode_to_json",
    "encode_gs1",
    "FIELD_LABELS",
]

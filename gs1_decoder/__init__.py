"""
GS1 Product Identifier Decoder

Decodes GTIN, Lot, Serial and Expiration from GS1 element strings found on
pharmaceutical packaging (GS1 DataMatrix, GS1-128), in either bracketed
"(AI)value" form or the undelimited positional form scanners emit.
"""

from .core.ai_registry import (
    AIDefinition,
    FieldName,
    AI_REGISTRY,
    MATCH_ORDER,
    build_match_order,
)
from .core.decoder import (
    GS1Decoder,
    DecodedRecord,
    decode,
    decode_bracketed,
    decode_positional,
)
from .validators.validators import format_expiration
from .formatters.json_formatter import (
    record_to_dict,
    decode_to_dict,
    decode_to_json,
    encode_gs1,
)

__version__ = "1.0.0"
__all__ = [
    "AIDefinition",
    "FieldName",
    "AI_REGISTRY",
    "MATCH_ORDER",
    "build_match_order",
    "GS1Decoder",
    "DecodedRecord",
    "decode",
    "decode_bracketed",
    "decode_positional",
    "format_expiration",
    "record_to_dict",
    "decode_to_dict",
    "decode_to_json",
    "encode_gs1",
]

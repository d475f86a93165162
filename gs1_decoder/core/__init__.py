"""
Core decoding modules for GS1 decoder.
"""

from .ai_registry import (
    AIDefinition,
    FieldName,
    AI_REGISTRY,
    MATCH_ORDER,
    build_match_order,
    match_tag_at,
)
from .decoder import (
    GS1Decoder,
    DecodedRecord,
    decode,
    decode_bracketed,
    decode_positional,
)

__all__ = [
    "AIDefinition",
    "FieldName",
    "AI_REGISTRY",
    "MATCH_ORDER",
    "build_match_order",
    "match_tag_at",
    "GS1Decoder",
    "DecodedRecord",
    "decode",
    "decode_bracketed",
    "decode_positional",
]

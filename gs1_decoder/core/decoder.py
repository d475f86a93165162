"""
GS1 Product Identifier Decoder

Extracts GTIN, Lot, Serial and Expiration from a GS1 element string as
read from pharmaceutical packaging.

Two input formats are accepted:
- Bracketed: "(01)00312345678906(17)251231(10)ABC123"
- Positional: "0100312345678906172512311021ABC123" (no delimiters)

Key rules:
- Any "(" in the trimmed input selects the bracketed decoder
- Variable-length data ends where the next recognized tag starts, or at the
  end of input
- Bad input never raises; it yields a record with fewer fields
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

from .ai_registry import (
    AIDefinition,
    FieldName,
    MATCH_ORDER,
    match_tag_at,
    starts_with_tag,
)
from ..validators.validators import format_expiration


logger = logging.getLogger(__name__)

DecodedElement = Tuple[AIDefinition, str]


@dataclass
class DecodedRecord:
    """
    Fields decoded from one barcode.

    None means the AI was not found. An empty string means the AI was found
    with no data after it.
    """
    gtin: Optional[str] = None
    lot: Optional[str] = None
    serial: Optional[str] = None
    expiration: Optional[str] = None  # MM/DD/YYYY

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, name) is None for name in RECORD_FIELDS.values())

    def to_dict(self) -> Dict[str, str]:
        """Return only the fields that were found."""
        output: Dict[str, str] = {}
        for name in RECORD_FIELDS.values():
            value = getattr(self, name)
            if value is not None:
                output[name] = value
        return output


# Record attribute for each field. Weight is recognized but not kept.
RECORD_FIELDS: Dict[FieldName, str] = {
    FieldName.GTIN: "gtin",
    FieldName.LOT: "lot",
    FieldName.SERIAL: "serial",
    FieldName.EXPIRATION: "expiration",
}


def _build_bracketed_pattern(definition: AIDefinition) -> re.Pattern:
    tag = re.escape(definition.tag)
    if definition.length is not None:
        return re.compile(r"\(%s\)([\x00-\x7F]{%d})" % (tag, definition.length))
    return re.compile(r"\(%s\)([\x00-\x7F]+?)(?=\(|\Z)" % tag)


class GS1Decoder:
    """
    Decoder over a fixed AI match order.

    Holds no per-call state, so one instance can be shared between threads.
    """

    def __init__(self, match_order: Tuple[AIDefinition, ...] = MATCH_ORDER):
        self.match_order = match_order
        self._patterns: List[Tuple[AIDefinition, re.Pattern]] = [
            (definition, _build_bracketed_pattern(definition))
            for definition in match_order
        ]

    def iter_bracketed_elements(self, text: str) -> Iterator[DecodedElement]:
        """
        Yield (definition, value) for every AI found in bracketed input.

        Each AI is searched for independently across the whole string; the
        first occurrence wins and overlapping spans are not checked.
        """
        for definition, pattern in self._patterns:
            match = pattern.search(text)
            if match:
                yield definition, match.group(1).strip()

    def iter_positional_elements(self, text: str) -> Iterator[DecodedElement]:
        """
        Yield (definition, value) pairs scanning undelimited input left to right.

        Characters that do not start a known tag are skipped one at a time.
        """
        pos = 0
        length = len(text)

        while pos < length:
            definition = match_tag_at(text, pos, self.match_order)
            if definition is None:
                pos += 1
                continue

            pos += len(definition.tag)

            if definition.length is not None:
                # Slicing clamps at the end, so truncated input yields a short value
                end = min(pos + definition.length, length)
            else:
                end = pos
                while end < length and not starts_with_tag(text, end, self.match_order):
                    end += 1

            yield definition, text[pos:end]
            pos = end

    def decode_bracketed(self, text: str) -> DecodedRecord:
        return _build_record(self.iter_bracketed_elements(text))

    def decode_positional(self, text: str) -> DecodedRecord:
        return _build_record(self.iter_positional_elements(text))

    def decode(self, barcode: Optional[str]) -> DecodedRecord:
        """
        Decode a barcode string into a DecodedRecord.

        Args:
            barcode: Raw scanner text, bracketed or positional

        Returns:
            DecodedRecord; all fields are None for empty input
        """
        if not barcode:
            return DecodedRecord()

        text = barcode.strip()
        if not text:
            return DecodedRecord()

        if "(" in text:
            logger.debug("Decoding bracketed GS1 input %r", text)
            return self.decode_bracketed(text)

        logger.debug("Decoding positional GS1 input %r", text)
        return self.decode_positional(text)


def _build_record(elements: Iterator[DecodedElement]) -> DecodedRecord:
    record = DecodedRecord()
    for definition, value in elements:
        attribute = RECORD_FIELDS.get(definition.field_name)
        if attribute is None:
            continue
        if definition.field_name == FieldName.EXPIRATION:
            setattr(record, attribute, format_expiration(value))
        else:
            setattr(record, attribute, value)
    return record


_DEFAULT_DECODER = GS1Decoder()


def decode(barcode: Optional[str]) -> DecodedRecord:
    """
    Decode a GS1 barcode string.

    This is the main entry point.

    Example:
        >>> decode("(01)00312345678906(17)251231(10)LOT42(21)SN99").to_dict()
        {'gtin': '00312345678906', 'lot': 'LOT42', 'serial': 'SN99', 'expiration': '12/31/2025'}
    """
    return _DEFAULT_DECODER.decode(barcode)


def decode_bracketed(text: str) -> DecodedRecord:
    return _DEFAULT_DECODER.decode_bracketed(text)


def decode_positional(text: str) -> DecodedRecord:
    return _DEFAULT_DECODER.decode_positional(text)

"""
AI Registry for the GS1 decoder

Defines the fixed set of GS1 Application Identifiers this decoder recognizes
and the longest-tag-first order in which they are matched.

Key rule:
- A shorter tag must never be tested before a longer tag at the same offset,
  otherwise a 2-digit tag can be matched as a false prefix of a 3-digit one
  and the rest of the element string is mis-segmented.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Tuple


class FieldName(str, Enum):
    """Semantic field an AI populates."""
    GTIN = "GTIN"
    LOT = "Lot"
    SERIAL = "Serial"
    EXPIRATION = "Expiration"
    WEIGHT = "Weight"


@dataclass(frozen=True)
class AIDefinition:
    """
    A single registry entry.

    Attributes:
        tag: The Application Identifier code (1-4 digits)
        field_name: Field the AI's data is stored into
        length: Fixed data length, or None for variable-length data that runs
                until the next recognized tag or the end of input
    """
    tag: str
    field_name: FieldName
    length: Optional[int] = None

    @property
    def is_variable(self) -> bool:
        return self.length is None


# Registration order is significant: it breaks ties between equal-length tags.
AI_REGISTRY: Tuple[AIDefinition, ...] = (
    AIDefinition("01", FieldName.GTIN, 14),
    AIDefinition("10", FieldName.LOT),
    AIDefinition("17", FieldName.EXPIRATION, 6),
    AIDefinition("21", FieldName.SERIAL),
    AIDefinition("310", FieldName.WEIGHT, 6),
    AIDefinition("320", FieldName.WEIGHT, 6),
)


def build_match_order(
    registry: Iterable[AIDefinition] = AI_REGISTRY,
) -> Tuple[AIDefinition, ...]:
    """
    Build the tag matching order for a registry.

    Entries are sorted by tag length, longest first. ``sorted`` is stable, so
    tags of equal length keep their registration order.

    Raises:
        ValueError: if the registry contains the same tag twice
    """
    entries = tuple(registry)
    seen = set()
    for entry in entries:
        if entry.tag in seen:
            raise ValueError(f"Duplicate AI tag in registry: {entry.tag}")
        seen.add(entry.tag)
    return tuple(sorted(entries, key=lambda entry: len(entry.tag), reverse=True))


MATCH_ORDER: Tuple[AIDefinition, ...] = build_match_order()


def match_tag_at(
    text: str,
    pos: int,
    order: Tuple[AIDefinition, ...] = MATCH_ORDER,
) -> Optional[AIDefinition]:
    """Return the first AI in match order whose tag starts at ``pos``."""
    for definition in order:
        if text.startswith(definition.tag, pos):
            return definition
    return None


def starts_with_tag(
    text: str,
    pos: int,
    order: Tuple[AIDefinition, ...] = MATCH_ORDER,
) -> bool:
    """True if any registered tag begins at ``pos``."""
    return match_tag_at(text, pos, order) is not None

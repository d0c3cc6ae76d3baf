#!/usr/bin/env python3
"""
Translation unit model and key naming helpers.

A record with identifier ``I`` and translatable field ``F`` maps to exactly one
translation unit whose id is the synthesized key ``I_F``. The flattener, the
reconstructor and the consolidator all share the helpers in this module so the
naming convention lives in one place.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Optional

KEY_SEPARATOR = "_"

# 8-4-4-4-12 hex digits, hex case-insensitive, hyphens literal
UUID_PATTERN = r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"

# Order matters: '&' first so later entities are not escaped twice
_XML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
)


@dataclass
class TranslationUnit:
    """
    One translatable string and its translation.

    Attributes:
        id: Synthesized key (identifier + "_" + field name)
        source: Source language text
        target: Target language text (empty until translated)
        note: Optional annotation for translators
    """
    id: str
    source: str
    target: str = ""
    note: Optional[str] = None

    def __post_init__(self):
        """Ensure id is string."""
        self.id = str(self.id)


def synthesize_key(identifier: str, field_name: str) -> str:
    """Build the unit id for one field of one record."""
    return f"{identifier}{KEY_SEPARATOR}{field_name}"


def compile_key_pattern(fields: Iterable[str]) -> re.Pattern:
    """
    Compile the regex that recognizes keys produced by synthesize_key.

    Only identifiers with the canonical UUID shape are recognized, and the
    field name must be one of ``fields``.

    Args:
        fields: Field names allowed after the separator

    Returns:
        Pattern with groups (identifier, field)
    """
    alternatives = "|".join(re.escape(f) for f in fields)
    return re.compile(rf"^({UUID_PATTERN}){re.escape(KEY_SEPARATOR)}({alternatives})$")


def escape_xml(text: Optional[str]) -> str:
    """
    Escape the five XML metacharacters.

    Total over its input: None and "" give "", text without metacharacters
    comes back unchanged.
    """
    if not text:
        return ""
    for char, entity in _XML_ESCAPES:
        text = text.replace(char, entity)
    return text

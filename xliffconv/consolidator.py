#!/usr/bin/env python3
"""
Consolidate a source JSON array and a target JSON array into one XLIFF 1.2
document.

Records are paired by identifier, the source array drives iteration, and every
translatable field of a matched pair becomes one ``trans-unit`` with source,
target and a note. No conversion engine is involved; the XML is emitted
directly.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from .config import DEFAULT_IDENTIFIER_FIELD, DEFAULT_SOURCE_LANG, DEFAULT_TARGET_LANG
from .errors import ValidationError
from .units import TranslationUnit, escape_xml, synthesize_key

logger = logging.getLogger(__name__)

XLIFF_12_NAMESPACE = "urn:oasis:names:tc:xliff:document:1.2"
TOOL_ID = "json-consolidation-to-xliff"
TOOL_NAME = "JSON Consolidation to XLIFF Converter"
TOOL_VERSION = "1.0.0"


@dataclass
class ConsolidationResult:
    """Units emitted by consolidate() plus what was skipped."""
    units: list[TranslationUnit] = field(default_factory=list)
    fields: list[str] = field(default_factory=list)
    missing_targets: list[str] = field(default_factory=list)
    source_count: int = 0
    target_count: int = 0


def _has_text(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def detect_translatable_fields(
    records: Sequence[dict[str, Any]],
    identifier_field: str = DEFAULT_IDENTIFIER_FIELD,
) -> list[str]:
    """
    Derive the translatable fields from the first record with an identifier.

    Every other field of that record holding non-blank text counts. The result
    is applied to all records, so fields that only appear later are not seen.

    Raises:
        ValidationError: No record carries an identifier
    """
    first = next((r for r in records if r.get(identifier_field)), None)
    if first is None:
        raise ValidationError(
            f"No valid source items found with {identifier_field} field",
            suggestion=f"Every source record needs a non-empty '{identifier_field}'",
        )
    return [key for key, value in first.items() if key != identifier_field and _has_text(value)]


def consolidate(
    source_records: Sequence[dict[str, Any]],
    target_records: Sequence[dict[str, Any]],
    identifier_field: str = DEFAULT_IDENTIFIER_FIELD,
    translatable_fields: Optional[Sequence[str]] = None,
) -> ConsolidationResult:
    """
    Pair source and target records and build translation units.

    Args:
        source_records: Records in the source language
        target_records: Records in the target language
        identifier_field: Field pairing the two arrays
        translatable_fields: Explicit field list; auto-detected when None

    Returns:
        ConsolidationResult with units in emission order
    """
    targets = {}
    for record in target_records:
        identifier = record.get(identifier_field)
        if identifier:
            targets[identifier] = record

    detected = detect_translatable_fields(source_records, identifier_field)
    fields = list(translatable_fields) if translatable_fields is not None else detected
    logger.info("Translatable fields: %s", ", ".join(fields))

    result = ConsolidationResult(
        fields=fields,
        source_count=len(source_records),
        target_count=len(target_records),
    )

    for source in source_records:
        identifier = source.get(identifier_field)
        if not identifier:
            continue

        target = targets.get(identifier)
        if target is None:
            logger.warning("No target translation found for UUID: %s", identifier)
            result.missing_targets.append(str(identifier))
            continue

        for field_name in fields:
            source_text = source.get(field_name)
            if not _has_text(source_text):
                continue

            target_text = target.get(field_name)
            result.units.append(TranslationUnit(
                id=synthesize_key(identifier, field_name),
                source=source_text,
                target=target_text if isinstance(target_text, str) else "",
                note=f"{field_name} for UUID: {identifier}",
            ))

    return result


def render_xliff(
    units: Sequence[TranslationUnit],
    source_lang: str = DEFAULT_SOURCE_LANG,
    target_lang: str = DEFAULT_TARGET_LANG,
) -> str:
    """
    Serialize units into the XLIFF 1.2 document skeleton.

    Args:
        units: Units in the order they should appear
        source_lang: source-language attribute
        target_lang: target-language attribute

    Returns:
        Complete XLIFF document
    """
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<xliff version="1.2" xmlns="{XLIFF_12_NAMESPACE}">',
        f'  <file original="consolidated_data" source-language="{escape_xml(source_lang)}" '
        f'target-language="{escape_xml(target_lang)}" datatype="plaintext">',
        '    <header>',
        f'      <tool tool-id="{TOOL_ID}" tool-name="{TOOL_NAME}" tool-version="{TOOL_VERSION}"/>',
        '    </header>',
        '    <body>',
    ]

    for unit in units:
        lines.append(f'    <trans-unit id="{escape_xml(unit.id)}">')
        lines.append(f'      <source>{escape_xml(unit.source)}</source>')
        lines.append(f'      <target>{escape_xml(unit.target)}</target>')
        if unit.note is not None:
            lines.append(f'      <note>{escape_xml(unit.note)}</note>')
        lines.append('    </trans-unit>')

    lines.extend([
        '    </body>',
        '  </file>',
        '</xliff>',
    ])
    return '\n'.join(lines)

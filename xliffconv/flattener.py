#!/usr/bin/env python3
"""
Record flattener.

Turns ``[{uuid, title, body}, ...]`` into the flat key/value mappings a
conversion engine consumes: one mapping of source texts and one of empty
target texts, both keyed ``<uuid>_<field>``.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence

from .config import DEFAULT_FIELDS, DEFAULT_IDENTIFIER_FIELD
from .units import synthesize_key

logger = logging.getLogger(__name__)


@dataclass
class FlattenResult:
    """Source and target mappings plus counts."""
    source: dict[str, str] = field(default_factory=dict)
    target: dict[str, str] = field(default_factory=dict)
    record_count: int = 0
    skipped: int = 0


def flatten_records(
    records: Iterable[dict[str, Any]],
    fields: Sequence[str] = DEFAULT_FIELDS,
    identifier_field: str = DEFAULT_IDENTIFIER_FIELD,
) -> FlattenResult:
    """
    Flatten records into source/target mappings.

    A record is used only when its identifier and every expected field have a
    value; other records are skipped without a warning.

    Args:
        records: Record dicts in input order
        fields: Field names to extract from each record
        identifier_field: Name of the identifier field

    Returns:
        FlattenResult with insertion order following the input order
    """
    result = FlattenResult()

    for index, record in enumerate(records):
        identifier = record.get(identifier_field)
        if not identifier or not all(record.get(f) for f in fields):
            logger.debug("Skipping record %d: missing %s or one of %s", index, identifier_field, list(fields))
            result.skipped += 1
            continue

        for field_name in fields:
            key = synthesize_key(identifier, field_name)
            result.source[key] = record[field_name]
            result.target[key] = ""
        result.record_count += 1

    return result

#!/usr/bin/env python3
"""
Unit reconstructor: the inverse of the flattener.

Groups ``<uuid>_<field>`` keys of a flat mapping back into records. When not a
single key in the whole mapping has that shape, the mapping was not produced
by the flattener and every key becomes its own record instead. The decision is
global: a mapping where some keys match and others do not keeps only the
matching ones.
"""

import time
from typing import Any, Callable, Sequence

from .config import DEFAULT_FIELDS, DEFAULT_IDENTIFIER_FIELD
from .units import compile_key_pattern, synthesize_key

FALLBACK_KEY_FIELD = "title"
FALLBACK_VALUE_FIELD = "body"


def reconstruct_records(
    flat: dict[str, Any],
    fields: Sequence[str] = DEFAULT_FIELDS,
    identifier_field: str = DEFAULT_IDENTIFIER_FIELD,
    clock: Callable[[], float] = time.time,
) -> list[dict[str, Any]]:
    """
    Rebuild the record array from a flat mapping.

    Args:
        flat: Synthesized key -> text, in engine output order
        fields: Field names that may follow the identifier
        identifier_field: Name of the identifier field in output records
        clock: Returns seconds since the epoch; used for generated identifiers

    Returns:
        Records in first-occurrence order of each identifier
    """
    pattern = compile_key_pattern(fields)

    matches = []
    for key in flat:
        match = pattern.match(key)
        if match:
            matches.append(match.group(1))

    if not matches:
        return _fallback_records(flat, identifier_field, clock)

    records = []
    seen = set()
    for identifier in matches:
        if identifier in seen:
            continue
        seen.add(identifier)

        record = {}
        for field_name in fields:
            record[field_name] = flat.get(synthesize_key(identifier, field_name)) or ""
        record[identifier_field] = identifier
        records.append(record)

    return records


def _fallback_records(
    flat: dict[str, Any],
    identifier_field: str,
    clock: Callable[[], float],
) -> list[dict[str, Any]]:
    """One record per key: the key as title, the value as body."""
    stamp = int(clock() * 1000)
    return [
        {
            FALLBACK_KEY_FIELD: key,
            FALLBACK_VALUE_FIELD: value,
            identifier_field: f"generated-{stamp}-{index}",
        }
        for index, (key, value) in enumerate(flat.items())
    ]

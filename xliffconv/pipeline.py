#!/usr/bin/env python3
"""
The three conversion pipelines.

Each pipeline reads its whole input, validates it before anything is
written, runs the pure transform (and the engine where one is involved),
writes the output once and returns a status dictionary for the CLI.

    json_to_xliff      records -> flattener -> engine -> XLIFF 2.0
    xliff_to_json      XLIFF -> engine -> reconstructor -> records
    consolidate_files  source + target records -> consolidator -> XLIFF 1.2
"""

import json
import logging
import shutil
from pathlib import Path
from typing import Any, Optional

from .config import ConversionConfig
from .consolidator import consolidate, render_xliff
from .engines import ConversionEngine, EngineRegistry
from .errors import InputNotFoundError, ValidationError
from .flattener import flatten_records
from .reconstructor import reconstruct_records

logger = logging.getLogger(__name__)


def _require_file(path: Path, label: str) -> None:
    if not path.exists():
        raise InputNotFoundError(
            f"{label} file '{path}' does not exist.",
            suggestion="Make sure the file paths are correct and files exist.",
        )


def load_records(path: str, label: str = "Input") -> list[dict[str, Any]]:
    """
    Read a JSON file that must hold an array of objects.

    Args:
        path: JSON file path
        label: Role of the file in messages ("Source", "Target", ...)

    Returns:
        The parsed records
    """
    json_path = Path(path)
    _require_file(json_path, label)
    logger.info("Reading %s JSON from: %s", label.lower(), json_path)

    try:
        data = json.loads(json_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValidationError(
            f"{label} JSON file is not valid JSON: {e.msg} at line {e.lineno}",
            suggestion="Make sure the JSON files contain valid JSON data.",
        )

    if not isinstance(data, list):
        raise ValidationError(f"{label} JSON file must contain an array of objects.")

    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise ValidationError(
                f"{label} JSON file must contain an array of objects "
                f"(item {index} is {type(item).__name__})."
            )

    return data


def _resolve_engine(config: ConversionConfig, engine: Optional[ConversionEngine]) -> ConversionEngine:
    if engine is not None:
        return engine
    return EngineRegistry.get_engine(config.engine, **config.options_for())


def _prepare_output(path: str) -> Path:
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    return output_path


def _languages(config: ConversionConfig) -> dict:
    return {"source": config.source_lang, "target": config.target_lang}


def json_to_xliff(
    input_file: str,
    output_file: str,
    config: ConversionConfig = ConversionConfig(),
    engine: Optional[ConversionEngine] = None,
) -> dict:
    """
    Convert a record array to XLIFF through the configured engine.

    Returns:
        Status dictionary with output path and stats
    """
    records = load_records(input_file)
    flat = flatten_records(records, config.fields, config.identifier_field)
    logger.info("Converting %d translation units...", len(flat.source))

    engine = _resolve_engine(config, engine)
    output_path = _prepare_output(output_file)

    generated = engine.to_xliff(
        flat.source,
        flat.target,
        config.source_lang,
        config.target_lang,
        workdir=output_path.parent,
    )
    shutil.move(str(generated), str(output_path))

    return {
        "status": "ok",
        "output_file": str(output_path),
        "engine": engine.name,
        "stats": {
            "items": len(records),
            "converted_items": flat.record_count,
            "skipped_items": flat.skipped,
            "translation_units": len(flat.source),
        },
        "languages": _languages(config),
        "summary": f"Converted {len(records)} items ({len(flat.source)} translation units) to {output_path.name}",
    }


def xliff_to_json(
    input_file: str,
    output_file: str,
    config: ConversionConfig = ConversionConfig(),
    engine: Optional[ConversionEngine] = None,
) -> dict:
    """
    Convert an XLIFF file back to the record array through the configured engine.

    Returns:
        Status dictionary with output path and stats
    """
    xliff_path = Path(input_file)
    _require_file(xliff_path, "Input")
    logger.info("Reading XLIFF from: %s", xliff_path)

    engine = _resolve_engine(config, engine)
    flat = engine.from_xliff(xliff_path, config.source_lang, config.target_lang)
    logger.info("Converting %d translation units back to JSON structure...", len(flat))

    records = reconstruct_records(flat, config.fields, config.identifier_field)

    output_path = _prepare_output(output_file)
    output_path.write_text(json.dumps(records, indent=2, ensure_ascii=False), encoding="utf-8")

    return {
        "status": "ok",
        "output_file": str(output_path),
        "engine": engine.name,
        "stats": {
            "translation_units": len(flat),
            "items": len(records),
        },
        "languages": _languages(config),
        "summary": f"Converted {len(flat)} translation units to {len(records)} items in {output_path.name}",
    }


def consolidate_files(
    source_file: str,
    target_file: str,
    output_file: str,
    config: ConversionConfig = ConversionConfig(),
) -> dict:
    """
    Merge a source and a target record array into one bilingual XLIFF 1.2 file.

    Returns:
        Status dictionary with output path, stats, detected fields and warnings
    """
    source_records = load_records(source_file, "Source")
    target_records = load_records(target_file, "Target")
    logger.info("Source data contains %d items", len(source_records))
    logger.info("Target data contains %d items", len(target_records))

    result = consolidate(
        source_records,
        target_records,
        identifier_field=config.identifier_field,
        translatable_fields=config.translatable_fields,
    )
    content = render_xliff(result.units, config.source_lang, config.target_lang)

    output_path = _prepare_output(output_file)
    output_path.write_text(content, encoding="utf-8")

    return {
        "status": "ok",
        "output_file": str(output_path),
        "fields": result.fields,
        "stats": {
            "source_items": result.source_count,
            "target_items": result.target_count,
            "translation_units": len(result.units),
            "missing_targets": len(result.missing_targets),
        },
        "warnings": [
            f"No target translation found for UUID: {identifier}"
            for identifier in result.missing_targets
        ],
        "languages": _languages(config),
        "summary": (
            f"Generated {len(result.units)} translation units from {result.source_count} source items "
            f"({len(result.fields)} translatable field(s) per item)"
        ),
    }

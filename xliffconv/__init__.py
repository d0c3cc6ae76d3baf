"""
xliffconv - JSON <-> XLIFF converter for record-based localization content

Converts arrays of records ({uuid, title, body, ...}) to XLIFF and back, and
consolidates separately maintained source/target arrays into one bilingual
XLIFF 1.2 document.

Quick start:
    xliffconv to-xliff source.json source.xliff en ko
    xliffconv to-json translated.xliff translated.json en ko
    xliffconv consolidate source.json target.json consolidated.xliff
"""

__version__ = "1.0.0"

from .config import ConversionConfig, load_config
from .consolidator import ConsolidationResult, consolidate, detect_translatable_fields, render_xliff
from .errors import (
    ConfigError,
    ConversionError,
    EngineError,
    InputNotFoundError,
    UsageError,
    ValidationError,
)
from .flattener import FlattenResult, flatten_records
from .reconstructor import reconstruct_records
from .units import TranslationUnit, escape_xml, synthesize_key

__all__ = [
    "ConversionConfig",
    "load_config",
    "ConsolidationResult",
    "consolidate",
    "detect_translatable_fields",
    "render_xliff",
    "ConfigError",
    "ConversionError",
    "EngineError",
    "InputNotFoundError",
    "UsageError",
    "ValidationError",
    "FlattenResult",
    "flatten_records",
    "reconstruct_records",
    "TranslationUnit",
    "escape_xml",
    "synthesize_key",
]

#!/usr/bin/env python3
"""
Conversion engines for the flatten (JSON -> XLIFF) and reconstruct
(XLIFF -> JSON) pipelines.

Available engines:
- json2xliff: Node.js @leading-works/json2xliff CLI run as a subprocess
- builtin: in-process XLIFF 2.0 writer/reader
"""

from .base import ConversionEngine, EngineRegistry
from .builtin import BuiltinEngine
from .json2xliff import Json2XliffEngine

# Register engines (first registered is listed first)
EngineRegistry.register(Json2XliffEngine)
EngineRegistry.register(BuiltinEngine)

__all__ = [
    'ConversionEngine',
    'EngineRegistry',
    'BuiltinEngine',
    'Json2XliffEngine',
]

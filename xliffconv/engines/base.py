#!/usr/bin/env python3
"""
Base classes for conversion engines.

ConversionEngine is the narrow interface the flatten and reconstruct
pipelines talk to: flat mappings in, XLIFF file out, and back. Keeping it
narrow means the record mapping logic never knows whether a subprocess, an
in-process writer or a test stub did the transcoding.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from ..errors import ConfigError

logger = logging.getLogger(__name__)


class ConversionEngine(ABC):
    """
    Abstract base class for JSON <-> XLIFF transcoding engines.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Engine name used in configuration and on the command line."""
        pass

    @property
    def description(self) -> str:
        """One-line description for `xliffconv engines`."""
        return ""

    @abstractmethod
    def to_xliff(
        self,
        source_map: dict[str, str],
        target_map: dict[str, str],
        src_lang: str,
        tgt_lang: str,
        workdir: Path,
    ) -> Path:
        """
        Convert flat source/target mappings to an XLIFF file.

        Args:
            source_map: Unit id -> source text
            target_map: Unit id -> target text
            src_lang: Source language code
            tgt_lang: Target language code
            workdir: Directory the engine may use for intermediate files

        Returns:
            Path of the generated XLIFF file (the caller moves it into place)
        """
        pass

    @abstractmethod
    def from_xliff(self, xliff_path: Path, src_lang: str, tgt_lang: str) -> dict[str, str]:
        """
        Convert an XLIFF file back to a flat mapping.

        Args:
            xliff_path: Input XLIFF file
            src_lang: Source language code
            tgt_lang: Target language code

        Returns:
            Unit id -> target text, in document order
        """
        pass


def write_flat_json(path: Path, mapping: dict[str, Any]) -> None:
    """Write a flat mapping as pretty-printed UTF-8 JSON."""
    path.write_text(json.dumps(mapping, indent=2, ensure_ascii=False), encoding="utf-8")


def remove_quietly(*paths: Path) -> None:
    """Delete intermediate files, warning instead of raising on failure."""
    for path in paths:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Could not clean up temporary file %s: %s", path, e)


class EngineRegistry:
    """Registry of available conversion engines."""

    _engines: dict[str, type[ConversionEngine]] = {}

    @classmethod
    def register(cls, engine_class: type[ConversionEngine]) -> None:
        """Register an engine class."""
        engine = engine_class()
        cls._engines[engine.name.lower()] = engine_class

    @classmethod
    def get_engine(cls, name: str, **options: Any) -> ConversionEngine:
        """Get engine instance by name, passing options to its constructor."""
        name_lower = name.lower()
        if name_lower not in cls._engines:
            available = ', '.join(cls._engines.keys())
            raise ConfigError(f"Unknown engine: {name}. Available: {available}")
        try:
            return cls._engines[name_lower](**options)
        except TypeError as e:
            raise ConfigError(f"Invalid options for engine '{name}': {e}")

    @classmethod
    def list_engines(cls) -> list[dict[str, str]]:
        """List all registered engines."""
        result = []
        for name, engine_class in cls._engines.items():
            engine = engine_class()
            result.append({
                'name': engine.name,
                'description': engine.description,
            })
        return result

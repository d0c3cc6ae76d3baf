#!/usr/bin/env python3
"""
Engine backed by the ``@leading-works/json2xliff`` Node.js CLI.

The CLI takes two flat JSON files and writes its result into its own package
directory under a name derived from the input base name, the tag and the
target language. This engine writes the intermediate files, runs the CLI
synchronously and predicts the output file name so it can be picked up.

    forward:  <package_dir>/<stem(srcJson)>_<tag>_<tgtLang>.xlf
    reverse:  <package_dir>/<basename(xliff)>_<tag>_<tgtLang>.json
"""

import json
import logging
import subprocess
import uuid
from pathlib import Path
from typing import Optional

from ..errors import EngineError, ValidationError
from .base import ConversionEngine, remove_quietly, write_flat_json

logger = logging.getLogger(__name__)

DEFAULT_PACKAGE_DIR = "node_modules/@leading-works/json2xliff"
DEFAULT_TAG = "v1.0.0"


class Json2XliffEngine(ConversionEngine):
    """
    Subprocess wrapper around json2xliff.

    Args:
        node: Node.js executable
        package_dir: Directory holding the json2xliff index.js; a relative path
            is resolved against the current working directory, not this package
        tag: Version tag passed to the CLI (part of the output name)
        timeout: Seconds to wait for the CLI; None waits forever
    """

    def __init__(
        self,
        node: str = "node",
        package_dir: str = DEFAULT_PACKAGE_DIR,
        tag: str = DEFAULT_TAG,
        timeout: Optional[float] = None,
    ):
        self.node = node
        self.package_dir = Path(package_dir)
        self.tag = tag
        self.timeout = timeout

    @property
    def name(self) -> str:
        return "json2xliff"

    @property
    def description(self) -> str:
        return "Node.js @leading-works/json2xliff CLI (subprocess)"

    @property
    def script(self) -> Path:
        return self.package_dir / "index.js"

    def xliff_output_path(self, source_json: Path, tgt_lang: str) -> Path:
        """Where the CLI writes the XLIFF generated from ``source_json``."""
        return self.package_dir / f"{Path(source_json).stem}_{self.tag}_{tgt_lang}.xlf"

    def json_output_path(self, xliff_path: Path, tgt_lang: str) -> Path:
        """Where the CLI writes the flat JSON extracted from ``xliff_path``."""
        return self.package_dir / f"{Path(xliff_path).name}_{self.tag}_{tgt_lang}.json"

    def to_xliff(
        self,
        source_map: dict[str, str],
        target_map: dict[str, str],
        src_lang: str,
        tgt_lang: str,
        workdir: Path,
    ) -> Path:
        token = uuid.uuid4().hex
        temp_source = Path(workdir) / f"temp_source_{token}.json"
        temp_target = Path(workdir) / f"temp_target_{token}.json"

        try:
            write_flat_json(temp_source, source_map)
            write_flat_json(temp_target, target_map)

            self._run([
                "--srcLang", src_lang,
                "--trgLang", tgt_lang,
                "--srcJson", str(temp_source),
                "--trgJson", str(temp_target),
                "--tag", self.tag,
            ])

            generated = self.xliff_output_path(temp_source, tgt_lang)
            if not generated.exists():
                raise EngineError(
                    f"Generated XLIFF file not found at: {generated}",
                    details={"available_files": self._candidates(lambda p: "temp" in p.name or p.suffix == ".xlf")},
                )
            return generated
        finally:
            remove_quietly(temp_source, temp_target)

    def from_xliff(self, xliff_path: Path, src_lang: str, tgt_lang: str) -> dict[str, str]:
        generated = self.json_output_path(xliff_path, tgt_lang)
        # A stale file from an earlier run would be mistaken for fresh output
        remove_quietly(generated)

        self._run([
            "--srcLang", src_lang,
            "--trgLang", tgt_lang,
            "--xliff", str(xliff_path),
            "--tag", self.tag,
        ])

        if not generated.exists():
            raise EngineError(
                f"Generated JSON file not found at: {generated}",
                details={"available_files": self._candidates(lambda p: p.suffix == ".json")},
            )

        try:
            flat = json.loads(generated.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise EngineError(f"Engine produced invalid JSON: {e}")
        finally:
            remove_quietly(generated)

        if not isinstance(flat, dict):
            raise ValidationError("Engine output must be a flat JSON object")
        return flat

    def _run(self, args: list[str]) -> None:
        if not self.script.is_file():
            raise EngineError(
                f"json2xliff not found at {self.script.resolve()}",
                suggestion=(
                    "package_dir is resolved against the current working directory: run from the "
                    "directory holding node_modules, set engine_options.json2xliff.package_dir to an "
                    "absolute path, or use --engine builtin"
                ),
            )

        cmd = [self.node, str(self.script), *args]
        logger.info("Running conversion...")
        logger.debug("Engine command: %s", " ".join(cmd))

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise EngineError(
                f"Cannot run engine: {e}",
                suggestion="Install Node.js and run `npm install @leading-works/json2xliff`, or use --engine builtin",
            )
        except subprocess.TimeoutExpired:
            raise EngineError(f"Engine did not finish within {self.timeout} seconds")

        if result.returncode != 0:
            raise EngineError(
                f"Engine exited with status {result.returncode}",
                suggestion="Make sure to install dependencies first: npm install",
                details={"stderr": result.stderr.strip(), "stdout": result.stdout.strip()},
            )

    def _candidates(self, predicate) -> list[str]:
        """List files in the package directory for diagnostics."""
        if not self.package_dir.is_dir():
            return []
        return sorted(p.name for p in self.package_dir.iterdir() if predicate(p))

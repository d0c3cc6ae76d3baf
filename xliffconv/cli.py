#!/usr/bin/env python3
"""
xliffconv - JSON <-> XLIFF converter for record-based localization content

Commands:
    to-xliff     - Convert a JSON record array to XLIFF 2.0 (via engine)
    to-json      - Convert an XLIFF file back to a JSON record array (via engine)
    consolidate  - Merge source + target JSON arrays into one XLIFF 1.2 file
    engines      - List available conversion engines

Example Workflow:
    1. xliffconv to-xliff microsteps_source.json out/microsteps.xliff en ko
       -> XLIFF with one unit per title/body, empty targets

    2. [Translators fill in the targets]

    3. xliffconv to-json out/microsteps_translated.xliff out/microsteps_ko.json en ko
       -> [{"title": ..., "body": ..., "uuid": ...}, ...]

    Or, when source and target JSON already exist side by side:
    xliffconv consolidate source.json target.json consolidated.xliff
"""

import argparse
import json
import logging
import sys
from typing import Optional, Sequence

from .config import load_config
from .engines import EngineRegistry
from .errors import ConversionError, UsageError
from .pipeline import consolidate_files, json_to_xliff, xliff_to_json

PROG = "xliffconv"

logger = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors as exit status 1."""

    def error(self, message):
        self.print_usage(sys.stderr)
        _print_error(UsageError(f"Invalid arguments: {message}", suggestion=f"Run '{self.prog} --help'"))
        sys.exit(1)


def _print_error(error: ConversionError) -> None:
    print(json.dumps(error.to_dict(), indent=2, ensure_ascii=False), file=sys.stderr)


def _config_from_args(args):
    """Load the config file (if any) and apply command-line overrides."""
    config = load_config(args.config).with_overrides(
        source_lang=args.source_lang,
        target_lang=args.target_lang,
        identifier_field=args.identifier_field,
        fields=getattr(args, "fields", None),
        engine=getattr(args, "engine", None),
    )
    logger.debug("Effective config: %s", json.dumps(config.to_dict(), ensure_ascii=False))
    return config


def cmd_to_xliff(args) -> dict:
    """Convert JSON records to XLIFF."""
    config = _config_from_args(args)
    return json_to_xliff(args.input, args.output, config)


def cmd_to_json(args) -> dict:
    """Convert XLIFF back to JSON records."""
    config = _config_from_args(args)
    return xliff_to_json(args.input, args.output, config)


def cmd_consolidate(args) -> dict:
    """Consolidate source and target JSON into XLIFF 1.2."""
    config = _config_from_args(args)
    if args.translatable_fields:
        config = config.with_overrides(translatable_fields=args.translatable_fields)
    return consolidate_files(args.source, args.target, args.output, config)


def cmd_engines(args) -> dict:
    """List conversion engines."""
    engines = EngineRegistry.list_engines()
    return {
        "status": "ok",
        "engines": engines,
        "summary": f"{len(engines)} engines available: {', '.join(e['name'] for e in engines)}",
    }


def _add_common_arguments(parser: argparse.ArgumentParser, engine_pipeline: bool = True) -> None:
    # Optional positionals: language codes must come before any option
    parser.add_argument("source_lang", nargs="?", help="Source language code (default: en); place before options")
    parser.add_argument("target_lang", nargs="?", help="Target language code (default: ko); place before options")
    parser.add_argument("--config", "-c", help="YAML config file")
    parser.add_argument("--identifier-field", help="Record identifier field (default: uuid)")
    if engine_pipeline:
        parser.add_argument("--fields", help="Comma-separated record fields (default: title,body)")
        parser.add_argument(
            "--engine", "-e",
            help="Conversion engine: json2xliff (default; expects node_modules/@leading-works/json2xliff "
                 "under the current directory) or builtin",
        )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog=PROG,
        description="xliffconv - JSON <-> XLIFF converter for record-based localization content",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Input JSON:
  A top-level array of objects, each with a "uuid" and the fields to translate:
  [{"uuid": "0d9f4c8e-...", "title": "Hello", "body": "World"}]

Examples:
  xliffconv to-xliff input.json output.xliff
  xliffconv to-xliff input.json output.xliff en ko --engine builtin
  xliffconv to-json translated.xliff translated.json en ko
  xliffconv consolidate source.json target.json consolidated.xliff
  xliffconv consolidate source.json target.json out.xliff en ja --translatable-fields title,summary
  xliffconv engines

Language codes follow the file paths directly, before any option.
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands", parser_class=_ArgumentParser)

    to_xliff_parser = subparsers.add_parser("to-xliff", help="Convert JSON records to XLIFF")
    to_xliff_parser.add_argument("input", help="Input JSON file (array of objects)")
    to_xliff_parser.add_argument("output", help="Output XLIFF file")
    _add_common_arguments(to_xliff_parser)

    to_json_parser = subparsers.add_parser("to-json", help="Convert XLIFF back to JSON records")
    to_json_parser.add_argument("input", help="Input XLIFF file")
    to_json_parser.add_argument("output", help="Output JSON file")
    _add_common_arguments(to_json_parser)

    consolidate_parser = subparsers.add_parser("consolidate", help="Merge source + target JSON into XLIFF 1.2")
    consolidate_parser.add_argument("source", help="Source language JSON file")
    consolidate_parser.add_argument("target", help="Target language JSON file")
    consolidate_parser.add_argument("output", help="Output XLIFF file")
    _add_common_arguments(consolidate_parser, engine_pipeline=False)
    consolidate_parser.add_argument(
        "--translatable-fields",
        help="Comma-separated fields to consolidate (default: auto-detect from first source item)",
    )

    subparsers.add_parser("engines", help="List conversion engines")

    return parser


COMMANDS = {
    "to-xliff": cmd_to_xliff,
    "to-json": cmd_to_json,
    "consolidate": cmd_consolidate,
    "engines": cmd_engines,
}


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "verbose", False) else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        result = COMMANDS[args.command](args)
        print(json.dumps(result, indent=2, ensure_ascii=False))
    except ConversionError as e:
        _print_error(e)
        sys.exit(1)
    except OSError as e:
        print(json.dumps({
            "status": "error",
            "error": str(e),
            "error_type": type(e).__name__,
        }), file=sys.stderr)
        sys.exit(1)


def json_to_xliff_main() -> None:
    """Entry point: json-to-xliff <input.json> <output.xliff> [sourceLang] [targetLang]"""
    main(["to-xliff", *sys.argv[1:]])


def xliff_to_json_main() -> None:
    """Entry point: xliff-to-json <input.xliff> <output.json> [sourceLang] [targetLang]"""
    main(["to-json", *sys.argv[1:]])


def consolidate_main() -> None:
    """Entry point: json-consolidation-to-xliff <source.json> <target.json> <output.xliff> [sourceLang] [targetLang]"""
    main(["consolidate", *sys.argv[1:]])


if __name__ == "__main__":
    main()

"""
NIBRS CLI — Command-line interface for mapping, validation and XML export.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from nibrs import __version__
from nibrs.codec.xml import build_nibrs_xml, xml_filename
from nibrs.core.logging import configure_logging, get_logger, LogChannel
from nibrs.ir.serialization import load_payload, to_json
from nibrs.mapping.mapper import map_descriptive_to_nibrs
from nibrs.output.errors import ErrorResponseBuilder, StandardErrorResponse
from nibrs.validation.validator import validate_nibrs_payload

log = get_logger(LogChannel.SYSTEM)

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_BAD_INPUT = 2


def main() -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="nibrs",
        description="Map incident extracts to NIBRS records, validate them, export XML",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__} (NIBRS 4.0 XML)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    map_parser = subparsers.add_parser("map", help="Map an extract to a NIBRS record")
    map_parser.add_argument("input", help="Extract JSON file, or - for stdin")

    validate_parser = subparsers.add_parser("validate", help="Validate a NIBRS record")
    validate_parser.add_argument("input", help="Record JSON file, or - for stdin")

    xml_parser = subparsers.add_parser("xml", help="Map, validate and serialize an extract to XML")
    xml_parser.add_argument("input", help="Extract JSON file, or - for stdin")

    for sub in (map_parser, validate_parser, xml_parser):
        sub.add_argument(
            "--output", "-o",
            type=str,
            default=None,
            help="Output file (default: stdout). For xml, a directory gets NIBRS_<incident>.xml",
        )
        sub.add_argument(
            "--log-level",
            type=str,
            choices=["silent", "info", "verbose", "debug"],
            default=None,
            help="Log verbosity level (default: info, or NIBRS_LOG_LEVEL env var)",
        )
        sub.add_argument(
            "--log-format",
            type=str,
            choices=["console", "json"],
            default=None,
            help="Log output format (default: console, or NIBRS_LOG_FORMAT env var)",
        )
        sub.add_argument(
            "--log-channel",
            type=str,
            default=None,
            help="Comma-separated log channels to show (pipeline,mapping,extract,validation,codec,system). Default: all",
        )

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return EXIT_OK

    _configure_logging(args)

    try:
        payload = _read_json(args.input)
    except (OSError, json.JSONDecodeError) as e:
        log.error("input_unreadable", input=args.input, error=str(e))
        _write(args.output, _error_json(ErrorResponseBuilder.from_generic_error(e, status_code=400)))
        return EXIT_BAD_INPUT

    commands = {
        "map": run_map,
        "validate": run_validate,
        "xml": run_xml,
    }
    return commands[args.command](payload, args)


def _configure_logging(args: argparse.Namespace) -> None:
    channels = None
    if args.log_channel:
        channels = [ch.strip() for ch in args.log_channel.split(",")]

    configure_logging(
        level=args.log_level,
        format=args.log_format,
        channels=channels,
        force=True,
    )


def _read_json(source: str) -> Any:
    if source == "-":
        return json.loads(sys.stdin.read())
    return load_payload(source)


def _write(output: str, text: str) -> None:
    if output:
        Path(output).write_text(text)
    else:
        print(text)


def _error_json(response: StandardErrorResponse) -> str:
    return response.model_dump_json(indent=2, exclude_none=True)


# ============================================================================
# Commands
# ============================================================================

def run_map(payload: Any, args: argparse.Namespace) -> int:
    """Map an extract; print the record or the error response."""
    try:
        outcome = map_descriptive_to_nibrs(payload)
    except ValidationError as e:
        _write(args.output, _error_json(ErrorResponseBuilder.from_schema_validation(e)))
        return EXIT_BAD_INPUT

    if not outcome.ok:
        _write(args.output, _error_json(ErrorResponseBuilder.from_mapping_failure(outcome)))
        return EXIT_REJECTED

    _write(args.output, to_json(outcome.segments))
    return EXIT_OK


def run_validate(payload: Any, args: argparse.Namespace) -> int:
    """Validate a record; print a summary or the error response."""
    result = validate_nibrs_payload(payload)
    if not result.ok:
        _write(args.output, _error_json(ErrorResponseBuilder.from_validation_result(result)))
        return EXIT_REJECTED

    summary = {
        "ok": True,
        "warnings": result.warnings,
        "missing_fields": result.missing_fields,
    }
    _write(args.output, json.dumps(summary, indent=2))
    return EXIT_OK


def run_xml(payload: Any, args: argparse.Namespace) -> int:
    """Map and validate an extract, then serialize it to NIBRS XML."""
    try:
        outcome = map_descriptive_to_nibrs(payload)
    except ValidationError as e:
        _write(args.output, _error_json(ErrorResponseBuilder.from_schema_validation(e)))
        return EXIT_BAD_INPUT

    if not outcome.ok:
        _write(args.output, _error_json(ErrorResponseBuilder.from_mapping_failure(outcome)))
        return EXIT_REJECTED

    result = validate_nibrs_payload(outcome.segments)
    if not result.ok:
        _write(args.output, _error_json(ErrorResponseBuilder.from_validation_result(result)))
        return EXIT_REJECTED

    xml = build_nibrs_xml(result.data)
    output = args.output
    if output and Path(output).is_dir():
        output = str(Path(output) / xml_filename(result.data))
    _write(output, xml)

    for warning in result.warnings:
        log.warning("validation_warning", message=warning)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())

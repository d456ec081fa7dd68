"""
W++ CLI — parse, format, merge, trim and validate W++ documents.

Commands:
  wpp parse     - Parse a W++ file and print the document as JSON
  wpp format    - Re-render a document in normal, line or compact mode
  wpp merge     - Merge two documents (second into first)
  wpp trim      - Drop nodes that have no name
  wpp validate  - Round-trip a document through its canonical form

Inputs ending in .json are read as JSON documents, "-" reads stdin,
anything else is parsed as W++ text.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from wpp.grammar import MODES

_JSON_SUFFIX = ".json"


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )


def _fail(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def _read_input(path: str, max_size: int) -> str:
    """Read text from a file path, or stdin for "-"."""
    from wpp.reader import WPPReader

    if path == "-":
        text = sys.stdin.read()
        if len(text.encode("utf-8")) > max_size:
            _fail(f"Input exceeds maximum {max_size} bytes")
        return text
    if not Path(path).is_file():
        _fail(f"File not found: {path}")
    return WPPReader.read_text(path, max_size)


def _load_document(path: str, config: dict[str, Any]) -> list:
    """Load a document from W++ text or its JSON form."""
    from wpp.document import document_from_dicts
    from wpp.reader import WPPReader

    text = _read_input(path, config["max_input_size"])
    if path.endswith(_JSON_SUFFIX):
        return document_from_dicts(json.loads(text))
    return WPPReader.parse(text)


def _emit_document(document: list, args: argparse.Namespace) -> None:
    """Print a document as W++, or write it to --output."""
    from wpp.writer import WPPWriter

    mode = args.mode or args.settings["mode"]
    output = getattr(args, "output", None)
    if output:
        nbytes = WPPWriter.write(document, output, mode)
        print(f"Wrote {len(document)} node(s) -> {output} ({nbytes} bytes)")
        return
    print(WPPWriter.serialize(document, mode))


def _emit_json(data: Any, args: argparse.Namespace) -> None:
    print(json.dumps(data, indent=args.settings["json_indent"], ensure_ascii=False))


def cmd_parse(args: argparse.Namespace) -> None:
    """Parse W++ text and print the document (or extended block) as JSON."""
    from wpp.document import document_to_dicts
    from wpp.reader import WPPReader

    text = _read_input(args.path, args.settings["max_input_size"])
    if args.extended:
        _emit_json(WPPReader.parse_extended(text).to_dict(), args)
    else:
        _emit_json(document_to_dicts(WPPReader.parse(text)), args)


def cmd_format(args: argparse.Namespace) -> None:
    """Re-render a document as W++."""
    _emit_document(_load_document(args.path, args.settings), args)


def cmd_merge(args: argparse.Namespace) -> None:
    """Merge the second document into the first."""
    from wpp.merge import merge

    first = _load_document(args.first, args.settings)
    second = _load_document(args.second, args.settings)
    _emit_document(merge(first, second), args)


def cmd_trim(args: argparse.Namespace) -> None:
    """Drop nameless nodes."""
    from wpp.merge import trim

    _emit_document(trim(_load_document(args.path, args.settings)), args)


def cmd_validate(args: argparse.Namespace) -> None:
    """Round-trip a document and report whether it survives unchanged."""
    from wpp.merge import validate

    document = _load_document(args.path, args.settings)
    result = validate(document)
    if result != document:
        print(f"FAIL: {args.path} does not round-trip through canonical form")
        sys.exit(1)
    print(f"OK: {args.path} ({len(result)} node(s))")


def _add_output_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--mode", choices=sorted(MODES),
        help="Output mode (default: from config, normally 'normal')",
    )
    parser.add_argument("-o", "--output", help="Write to file instead of stdout")


def build_parser() -> argparse.ArgumentParser:
    from wpp import __version__

    parser = argparse.ArgumentParser(
        prog="wpp",
        description="W++ — parse, format, merge and trim W++ entity notation.",
    )
    parser.add_argument("--version", action="version", version=f"wpp {__version__}")
    parser.add_argument("--config", help="Path to TOML config (or set WPP_CONFIG)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command")

    # parse
    p_parse = sub.add_parser("parse", help="Parse W++ and print JSON")
    p_parse.add_argument("path", help="W++ file, or - for stdin")
    p_parse.add_argument(
        "--extended", action="store_true",
        help="Extract W++ blocks from free text and keep the rest as appendix",
    )

    # format
    p_format = sub.add_parser("format", help="Re-render a document as W++")
    p_format.add_argument("path", help="W++ or .json file, or - for stdin")
    _add_output_args(p_format)

    # merge
    p_merge = sub.add_parser("merge", help="Merge the second document into the first")
    p_merge.add_argument("first", help="Document receiving the merge")
    p_merge.add_argument("second", help="Document merged in")
    _add_output_args(p_merge)

    # trim
    p_trim = sub.add_parser("trim", help="Drop nodes without a name")
    p_trim.add_argument("path", help="W++ or .json file, or - for stdin")
    _add_output_args(p_trim)

    # validate
    p_validate = sub.add_parser("validate", help="Round-trip through canonical form")
    p_validate.add_argument("path", help="W++ or .json file, or - for stdin")

    return parser


def main(argv: list[str] | None = None) -> None:
    from wpp.config import load_config
    from wpp.errors import WPPError

    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        print("W++ — entity notation toolkit")
        print()
        print("Usage:")
        print("  wpp parse character.wpp [--extended]")
        print("  wpp format character.wpp --mode compact")
        print("  wpp merge base.wpp extra.wpp -o merged.wpp")
        print("  wpp trim character.json")
        print("  wpp validate character.wpp")
        print()
        print("Run 'wpp <command> --help' for details on any command.")
        sys.exit(0)

    args.settings = load_config(args.config)
    _setup_logging("DEBUG" if args.verbose else args.settings["log_level"])

    commands = {
        "parse": cmd_parse,
        "format": cmd_format,
        "merge": cmd_merge,
        "trim": cmd_trim,
        "validate": cmd_validate,
    }

    try:
        commands[args.command](args)
    except WPPError as e:
        _fail(str(e))
    except json.JSONDecodeError as e:
        _fail(f"Invalid JSON document: {e}")
    except (ValueError, OSError) as e:
        _fail(str(e))


if __name__ == "__main__":
    main()

"""
pleadings - command line front end.

Usage:
  pleadings <command> [options]

Commands:
  parse    Extracted filing text -> JSON (caption, bodyStartIndex, document).
  caption  Caption JSON -> rendered two-column caption text.
  export   Document JSON -> .docx or .pdf.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

from pydantic import ValidationError

from pleadings import __version__
from pleadings.core.config import Settings, formatting_rules_from_settings, get_settings
from pleadings.core.errors import PleadingsError
from pleadings.core.logging_config import get_logger, setup_logging
from pleadings.models.caption import CaptionData
from pleadings.services.caption_renderer import render_caption
from pleadings.services.export import EXPORTERS, export
from pleadings.services.field_options import DEFAULT_OPTION_SETS
from pleadings.services.filing_import import import_filing, split_pages

logger = get_logger(__name__)


def _read_text(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _read_json(path: str) -> Any:
    return json.loads(_read_text(path))


def _write_text(path: Optional[str], content: str) -> None:
    if not path or path == "-":
        sys.stdout.write(content)
        return
    Path(path).write_text(content, encoding="utf-8")


# =============================================================================
# Commands
# =============================================================================

def cmd_parse(args: argparse.Namespace, settings: Settings) -> int:
    # pdftotext separates pages with form feeds
    lines = split_pages(_read_text(args.input).split("\f"))
    filing = import_filing(lines, caption_column=settings.caption_column)
    _write_text(args.output, json.dumps(filing.to_dict(), indent=2) + "\n")
    return 0


def cmd_caption(args: argparse.Namespace, settings: Settings) -> int:
    data = _read_json(args.input)
    # Accept the output of ``parse`` as well as a bare caption object
    if isinstance(data, dict) and "caption" in data:
        data = data["caption"]
    if not data:
        raise PleadingsError("Input holds no caption", error_code="no_caption")
    lines = render_caption(CaptionData.from_dict(data), settings.caption_column)
    _write_text(args.output, "\n".join(lines) + "\n")
    return 0


def cmd_export(args: argparse.Namespace, settings: Settings) -> int:
    data = _read_json(args.input)
    if isinstance(data, dict) and "document" in data:
        data = data["document"]

    output = Path(args.output)
    fmt = args.format or output.suffix.lstrip(".").lower()
    title = args.title or output.stem

    rules = formatting_rules_from_settings(settings)
    payload = export(fmt, data, title, rules, DEFAULT_OPTION_SETS)
    output.write_bytes(payload)
    logger.info("Wrote %s", output, extra={"export_format": fmt, "size_bytes": len(payload)})
    return 0


# =============================================================================
# Parser
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pleadings",
        description="Court filing import and export.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"pleadings {__version__}")
    parser.add_argument("--log-level", help="Override PLEADINGS_LOG_LEVEL")

    subparsers = parser.add_subparsers(title="commands", metavar="<command>", dest="command")
    subparsers.required = True

    parse = subparsers.add_parser("parse", help="Parse extracted filing text into JSON")
    parse.add_argument("input", help="Text file, one extracted line per line ('-' for stdin)")
    parse.add_argument("-o", "--output", help="JSON output file (default: stdout)")
    parse.set_defaults(func=cmd_parse)

    caption = subparsers.add_parser("caption", help="Render caption JSON as caption text")
    caption.add_argument("input", help="Caption JSON or parse output ('-' for stdin)")
    caption.add_argument("-o", "--output", help="Text output file (default: stdout)")
    caption.set_defaults(func=cmd_caption)

    export_cmd = subparsers.add_parser("export", help="Export a document tree to .docx or .pdf")
    export_cmd.add_argument("input", help="Document JSON or parse output ('-' for stdin)")
    export_cmd.add_argument("-o", "--output", required=True, help="Output file")
    export_cmd.add_argument("--format", choices=sorted(EXPORTERS), help="Defaults to the output suffix")
    export_cmd.add_argument("--title", help="Document title (default: output file name)")
    export_cmd.set_defaults(func=cmd_export)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(
        level=args.log_level or settings.log_level,
        json_format=settings.log_json,
        log_file=settings.log_file,
    )

    try:
        return args.func(args, settings)
    except PleadingsError as exc:
        logger.debug("Command failed", extra={"command": args.command, "error_code": exc.error_code})
        print(f"error: {exc.message}", file=sys.stderr)
        return 1
    except ValidationError as exc:
        print(f"error: invalid document: {exc.errors()[0]['msg']}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

"""
Command-line interface.

    requiredeps lib/index.js lib/util.js --require-async --pretty

Prints {"results": [...], "errors": [...]} as JSON and exits with status 1
when any file could not be read or parsed.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from . import __version__
from .config import load_parse_options
from .dependency.parser import RequireDependencyParser
from .models import ParseError, ParseOptions

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="requiredeps",
        description="List the require() dependencies of JavaScript files as JSON.",
    )
    p.add_argument("files", nargs="+", type=Path, help="JavaScript files to parse.")
    p.add_argument(
        "--config-dir",
        type=Path,
        default=Path.cwd(),
        help="Directory holding requiredeps.{json,yaml,yml} (default: current directory).",
    )
    for name in ParseOptions.option_names():
        p.add_argument(
            "--" + name.replace("_", "-"),
            dest=name,
            action=argparse.BooleanOptionalAction,
            default=None,
            help=f"Override the '{name}' option.",
        )
    p.add_argument("--pretty", action="store_true", help="Pretty-print JSON with indentation.")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p.parse_args(argv)


def _resolve_options(args: argparse.Namespace) -> ParseOptions:
    overrides = {name: getattr(args, name) for name in ParseOptions.option_names()}
    return load_parse_options(args.config_dir).merged(overrides)


def run(files: list[Path], options: ParseOptions) -> dict[str, Any]:
    """Parse ``files`` and build the JSON report."""
    parser = RequireDependencyParser(options)
    report: dict[str, Any] = {"results": [], "errors": []}

    for file_path in files:
        try:
            result = parser.parse_file(file_path)
        except ParseError as e:
            logger.error("%s", e.message)
            report["errors"].append(e.to_dict())
            continue
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Cannot read %s: %s", file_path, e)
            report["errors"].append(
                {"code": "ERROR_READ_FILE", "message": str(e), "data": {"path": str(file_path)}}
            )
            continue
        report["results"].append(result.to_dict())

    return report


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        options = _resolve_options(args)
    except ValueError as e:
        logger.error("%s", e)
        return 2

    report = run(args.files, options)
    print(json.dumps(report, indent=2 if args.pretty else None))
    return 1 if report["errors"] else 0

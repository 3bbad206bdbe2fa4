"""
parsediag command-line interface.

Usage:
    parsediag check config.yaml              # Parse a file, show the error
    parsediag check data.json --color never
    parsediag render notes.txt --line 2 --column 19 --message "bad value"
"""

import argparse
import json
import logging
import sys
import tomllib
from pathlib import Path
from typing import Any, Callable, Optional

import yaml

from parsediag import __version__
from parsediag.config import (
    DEFAULT_CONTEXT_CHARACTERS,
    DEFAULT_CONTEXT_LINES,
    ColorMode,
    RenderConfig,
)
from parsediag.errors import ParseErrorReport
from parsediag.segment import Segmentation

logger = logging.getLogger("parsediag")

LOADERS: dict[str, Callable[[str], Any]] = {
    "json": json.loads,
    "yaml": yaml.safe_load,
    "toml": tomllib.loads,
}

SUFFIXES = {
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".toml": "toml",
}


def _non_negative(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative number, got {value}")
    return number


def _positive(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a number >= 1, got {value}")
    return number


def _add_render_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("input", type=Path, help="File to read")
    parser.add_argument(
        "--color",
        choices=[mode.value for mode in ColorMode],
        default=ColorMode.ENVIRONMENT.value,
        help="When to use colors (default: auto)",
    )
    parser.add_argument(
        "-C",
        "--context-lines",
        type=_non_negative,
        default=DEFAULT_CONTEXT_LINES,
        help=f"Lines shown around the error (default: {DEFAULT_CONTEXT_LINES})",
    )
    parser.add_argument(
        "--context-characters",
        type=_non_negative,
        default=DEFAULT_CONTEXT_CHARACTERS,
        help=(
            "Characters shown around the error on long lines "
            f"(default: {DEFAULT_CONTEXT_CHARACTERS})"
        ),
    )
    parser.add_argument(
        "--no-contextualize",
        action="store_true",
        help="Only show the error line, without context lines or shortening",
    )
    parser.add_argument(
        "--code-points",
        action="store_true",
        help="Shorten long lines by code point instead of grapheme cluster",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="parsediag",
        description="Show parse errors in the context of the source text",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default="warning",
        help="Logging level (default: warning)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    check_parser = subparsers.add_parser(
        "check",
        help="Parse a JSON, YAML or TOML file and report the first error",
    )
    _add_render_options(check_parser)
    check_parser.add_argument(
        "-f",
        "--format",
        choices=["auto", *LOADERS],
        default="auto",
        help="Input format (default: guessed from the file suffix)",
    )

    render_parser = subparsers.add_parser(
        "render",
        help="Render a message at a given position of a file",
    )
    _add_render_options(render_parser)
    render_parser.add_argument("-m", "--message", required=True, help="Error message")
    render_parser.add_argument("-l", "--line", type=_positive, help="1-indexed error line")
    render_parser.add_argument(
        "-c",
        "--column",
        type=_non_negative,
        help="Characters on the line before the error",
    )

    return parser


def build_config(args: argparse.Namespace) -> RenderConfig:
    """Translate parsed options into a RenderConfig for stderr."""
    config = RenderConfig(
        context_lines=args.context_lines,
        context_characters=args.context_characters,
        contextualize=not args.no_contextualize,
        segmentation=Segmentation.CODE_POINT if args.code_points else Segmentation.GRAPHEME,
    )
    return config.with_color_mode(ColorMode(args.color), sys.stderr)


def detect_format(path: Path, requested: str) -> Optional[str]:
    if requested != "auto":
        return requested
    return SUFFIXES.get(path.suffix.lower())


def _read(path: Path) -> Optional[str]:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        print(f"Error: File not found: {path}", file=sys.stderr)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: Cannot read {path}: {e}", file=sys.stderr)
    return None


def _report(report: ParseErrorReport, config: RenderConfig) -> None:
    print(f"Error: {report.render(config)}", end="", file=sys.stderr)


def cmd_check(args: argparse.Namespace) -> int:
    """Parse a file and render the error, if any."""
    fmt = detect_format(args.input, args.format)
    if fmt is None:
        print(
            f"Error: Cannot guess the format of {args.input}, use --format",
            file=sys.stderr,
        )
        return 2

    source = _read(args.input)
    if source is None:
        return 2

    config = build_config(args)
    logger.debug("checking %s as %s", args.input, fmt)
    try:
        LOADERS[fmt](source)
    except (json.JSONDecodeError, yaml.YAMLError, tomllib.TOMLDecodeError) as e:
        report = ParseErrorReport.from_error(source, e)
        logger.info("%s: parse error at %s", args.input, report.position)
        _report(report, config)
        return 1

    print(f"{args.input}: ok")
    return 0


def cmd_render(args: argparse.Namespace) -> int:
    """Render a caller-supplied message at a position."""
    source = _read(args.input)
    if source is None:
        return 2

    report = ParseErrorReport(source, args.message, args.line, args.column)
    _report(report, build_config(args))
    return 1


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    command_handlers = {
        "check": cmd_check,
        "render": cmd_render,
    }

    handler = command_handlers.get(args.command)
    if handler:
        return handler(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())

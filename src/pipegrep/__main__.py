"""Main entry point for the PipeGrep command-line interface."""

import argparse
import logging
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import regex
import yaml

from . import __version__, adapter, paths
from .config import configure, load_settings
from .logging_utils import setup_logging
from .types import MatchData

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NO_MATCH = 1
EXIT_ERROR = 2

COMMANDS = ("grep", "grepl", "sub", "gsub", "regexpr", "gregexpr", "regexec")


def _common_parser() -> argparse.ArgumentParser:
    """Options shared by every subcommand."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-i", "--ignore-case", action="store_true", help="Match case-insensitively.")
    common.add_argument("-F", "--fixed", action="store_true", help="Match the pattern as literal text.")
    common.add_argument("--use-bytes", action="store_true", help="Match byte-by-byte; positions count bytes.")
    common.add_argument("--config", type=Path, default=None, help="Path to a settings YAML file.")
    common.add_argument("--debug", action="store_true", help="Enable debug level logging.")
    common.add_argument("--log-file", type=Path, default=None, help="Write detailed logs to this file.")
    return common


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command-line arguments for the PipeGrep CLI.

    Returns:
        argparse.Namespace: An object containing the parsed command-line arguments.

    """
    parser = argparse.ArgumentParser(prog="pipegrep", description="Vectorised grep, sub and regexpr over input lines.")
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"PipeGrep {__version__}",
        help="Show the version number and exit.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True, help="Available commands")
    common = _common_parser()

    for command in COMMANDS:
        sub_parser = subparsers.add_parser(command, parents=[common], help=f"Apply {command} to each input line.")
        sub_parser.add_argument("pattern", help="The pattern to match.")
        if command in {"sub", "gsub"}:
            sub_parser.add_argument("replacement", help="The replacement text; \\1-\\9 refer to groups.")
        sub_parser.add_argument("files", nargs="*", default=[], help="Input files (default: stdin).")
        if command != "regexec":
            sub_parser.add_argument("-P", "--perl", action="store_true", help="Use Perl-compatible syntax.")
        if command == "grep":
            sub_parser.add_argument("-v", "--invert", action="store_true", help="Select non-matching lines.")
            sub_parser.add_argument("--value", action="store_true", help="Print lines instead of line numbers.")

    return parser.parse_args(argv)


def _read_lines(files: list[str], *, use_bytes: bool = False) -> list[str] | list[bytes]:
    """
    Read every input line, without line terminators, from files or stdin.

    With `use_bytes` the lines are returned undecoded, so input in any
    encoding can be matched byte-by-byte.
    """
    if use_bytes:
        raw: list[bytes] = []
        for name in files or ["-"]:
            if name == "-":
                raw.extend(line.rstrip(b"\r\n") for line in sys.stdin.buffer)
            else:
                raw.extend(Path(name).read_bytes().splitlines())
        return raw

    lines: list[str] = []
    for name in files or ["-"]:
        if name == "-":
            lines.extend(line.rstrip("\r\n") for line in sys.stdin)
        else:
            lines.extend(Path(name).read_text(encoding="utf-8").splitlines())
    return lines


def _write_row(row: Any) -> None:  # noqa: ANN401
    """Print one result row; bytes rows are written to stdout unchanged."""
    if isinstance(row, bytes):
        sys.stdout.flush()
        sys.stdout.buffer.write(row + b"\n")
        sys.stdout.buffer.flush()
    else:
        print(row)


def _load_settings(config_path: Path | None) -> bool:
    """
    Activate the settings file given on the command line or discovered nearby.

    Returns:
        True on success (including when there is no settings file), False otherwise.

    """
    try:
        path = config_path or paths.find_config_file()
        if path is None:
            logger.debug("No settings file found; using defaults.")
            return True
        logger.info("Loading settings from: %s", path)
        configure(load_settings(path))
    except (FileNotFoundError, ValueError, yaml.YAMLError):
        logger.exception("Could not load the settings file.")
        return False
    return True


def _format_positions(data: MatchData) -> str:
    return " ".join(f"{start}:{length}" for start, length in zip(data.start, data.match_length))


def _run_command(args: argparse.Namespace, lines: list[str] | list[bytes]) -> tuple[Iterable[Any], int]:
    """Apply the selected function to `lines` and return printable rows and the exit status."""
    flags = {"ignore_case": args.ignore_case, "fixed": args.fixed, "use_bytes": args.use_bytes}
    if args.command != "regexec":
        flags["perl"] = args.perl

    if args.command == "grep":
        selected = adapter.grep(lines, args.pattern, value=args.value, invert=args.invert, **flags)
        return selected, EXIT_OK if selected else EXIT_NO_MATCH
    if args.command == "grepl":
        return adapter.grepl(lines, args.pattern, **flags), EXIT_OK
    if args.command == "sub":
        return adapter.sub(lines, args.pattern, args.replacement, **flags), EXIT_OK
    if args.command == "gsub":
        return adapter.gsub(lines, args.pattern, args.replacement, **flags), EXIT_OK
    if args.command == "regexpr":
        data = adapter.regexpr(lines, args.pattern, **flags)
        return (f"{start}:{length}" for start, length in zip(data.start, data.match_length)), EXIT_OK
    if args.command == "gregexpr":
        return (_format_positions(data) for data in adapter.gregexpr(lines, args.pattern, **flags)), EXIT_OK
    return (_format_positions(data) for data in adapter.regexec(lines, args.pattern, **flags)), EXIT_OK


def main(argv: list[str] | None = None) -> None:
    """
    Run the main entry point for the PipeGrep command-line interface.

    Parses the arguments, loads settings, reads the input lines, applies the
    selected function and prints one result per line. Exits with 0 on success,
    1 when `grep` selects nothing and 2 on errors.
    """
    args = _parse_args(argv)
    setup_logging(version=__version__, debug=args.debug, log_file=args.log_file)

    if not _load_settings(args.config):
        sys.exit(EXIT_ERROR)

    try:
        lines = _read_lines(args.files, use_bytes=args.use_bytes)
        rows, status = _run_command(args, lines)
        for row in rows:
            _write_row(row)
    except regex.error:
        logger.exception("Invalid pattern: %r", args.pattern)
        sys.exit(EXIT_ERROR)
    except (OSError, UnicodeDecodeError):
        logger.exception("Could not read input")
        sys.exit(EXIT_ERROR)

    sys.exit(status)


if __name__ == "__main__":
    main()

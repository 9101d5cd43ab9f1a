# Copyright 2026 restfile Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the restfile command-line interface."""

import argparse
import logging
import sys
from pathlib import Path

from restfile.config import ConfigError, RestfileConfig, find_config
from restfile.model import RequestFile
from restfile.parser import RequestFileError, has_valid_extension, parse_file

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the restfile CLI."""
    parser = argparse.ArgumentParser(
        prog="restfile",
        description="restfile: parser and checker for .http/.rest request files",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Check request files for parse errors",
        description="Parse request files and report their diagnostics.",
    )
    check_parser.add_argument(
        "paths",
        nargs="*",
        default=["."],
        help="Request files or directories to search for them (default: current directory)",
    )
    check_parser.add_argument(
        "--strict",
        action="store_true",
        help="Also fail when a request has warnings",
    )
    check_parser.add_argument(
        "--no-color",
        action="store_true",
        help="Do not colorize diagnostics",
    )

    # dump subcommand
    dump_parser = subparsers.add_parser(
        "dump",
        help="Print the parsed requests of a file as JSON",
        description="Parse a request file and print the result as JSON.",
    )
    dump_parser.add_argument("file", help="Request file to parse")

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    try:
        config = find_config(Path.cwd())
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.command == "check":
        return _cmd_check(args, config)
    if args.command == "dump":
        return _cmd_dump(args)
    return 0


def _cmd_check(args: argparse.Namespace, config: RestfileConfig) -> int:
    """Handle the check subcommand."""
    has_errors = False
    files: list[Path] = []
    for raw_path in args.paths:
        path = Path(raw_path)
        if path.is_dir():
            files.extend(_discover_request_files(path, config.file_extensions))
        elif path.exists():
            files.append(path)
        else:
            print(f"Error: '{path}' does not exist.", file=sys.stderr)
            has_errors = True

    if not files:
        print("No request files found.")
        return 1 if has_errors else 0

    color = config.color and not args.no_color
    print(f"Checking {len(files)} request file(s)...")
    for path in files:
        try:
            result = parse_file(
                path,
                emit_diagnostics=True,
                sink=lambda rendered, path=path: print(f"{path}:\n{rendered}", file=sys.stderr),
                separator_width=config.separator_width,
                color=color,
            )
        except RequestFileError as exc:
            print(f"Error: {exc.diagnostic.message}", file=sys.stderr)
            has_errors = True
            continue

        warnings = _count_warnings(result)
        print(f"{path}: {len(result.requests)} request(s), {len(result.failures)} failure(s), {warnings} warning(s)")
        if result.has_errors or (args.strict and warnings):
            has_errors = True

    if has_errors:
        return 1

    print("No issues found.")
    return 0


def _cmd_dump(args: argparse.Namespace) -> int:
    """Handle the dump subcommand."""
    try:
        result = parse_file(args.file, emit_diagnostics=False)
    except RequestFileError as exc:
        print(f"Error: {exc.diagnostic.message}", file=sys.stderr)
        return 1
    print(result.model_dump_json(indent=2))
    return 0


def _discover_request_files(directory: Path, extensions: list[str]) -> list[Path]:
    """Return all request files below *directory*, sorted by path."""
    found = sorted(f for f in directory.rglob("*") if f.is_file() and has_valid_extension(f, extensions))
    logger.debug("Found %d request file(s) under %s", len(found), directory)
    return found


def _count_warnings(result: RequestFile) -> int:
    return sum(len(request.warnings) for request in result.requests)

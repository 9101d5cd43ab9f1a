#!/usr/bin/env python3
# Copyright 2026 restfile Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run all CI checks locally: format, lint, type check, tests, smoke test, and build."""

import argparse
import subprocess
import sys
import time
from pathlib import Path

from yachalk import chalk

# ###############
# Public Interface
# ###############

STEPS: list[tuple[str, list[str]]] = [
    ("Format check", ["uv", "run", "ruff", "format", "--check", "src/", "tests/", "tools/"]),
    ("Lint", ["uv", "run", "ruff", "check", "src/", "tests/", "tools/"]),
    ("Type check", ["uv", "run", "ty", "check", "src/"]),
    ("Tests", ["uv", "run", "pytest", "--cov=restfile", "--cov-report=term-missing"]),
    ("Smoke test", ["uv", "run", "restfile", "check", "--strict", "tests/data"]),
    ("Build", ["uv", "build"]),
]


def main() -> int:
    """Run the selected CI steps and report a colored summary."""
    parser = argparse.ArgumentParser(description="Run the restfile CI steps locally.")
    parser.add_argument(
        "--only",
        action="append",
        metavar="STEP",
        help="Run only the named step (repeatable), e.g. --only Tests",
    )
    args = parser.parse_args()

    steps = [(name, cmd) for name, cmd in STEPS if not args.only or name in args.only]
    if not steps:
        print(chalk.red(f"No CI step named {', '.join(args.only)}"), file=sys.stderr)
        return 2

    results: list[tuple[str, bool, float]] = []
    for name, cmd in steps:
        _print_banner(name)
        start = time.monotonic()
        proc = subprocess.run(cmd, cwd=_REPO_ROOT)
        results.append((name, proc.returncode == 0, time.monotonic() - start))

    _print_banner("  Summary")
    for name, passed, elapsed in results:
        status = "PASS" if passed else "FAIL"
        paint = chalk.green if passed else chalk.red
        print(paint(f"  {status}  {name} ({elapsed:.1f}s)"))

    print()
    return 0 if all(passed for _, passed, _ in results) else 1


# ################
# Implementation
# ################

_REPO_ROOT = Path(__file__).resolve().parent.parent


def _print_banner(title: str) -> None:
    sep = chalk.blue("=" * 60)
    print(f"\n{sep}")
    print(chalk.blue(title))
    print(sep)


if __name__ == "__main__":
    sys.exit(main())

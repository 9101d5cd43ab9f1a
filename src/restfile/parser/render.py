# Copyright 2026 restfile Contributors
# SPDX-License-Identifier: Apache-2.0

"""Human-readable rendering of parse diagnostics."""

from collections.abc import Iterable

from yachalk import chalk

from restfile.model.diagnostics import Diagnostic
from restfile.parser.scanner import Scanner

# ###############
# Public Interface
# ###############

DEFAULT_SEPARATOR_WIDTH = 50


def format_diagnostic(source: str, diagnostic: Diagnostic, color: bool = False) -> str:
    """Render one diagnostic with its ``line:column`` position and a source excerpt."""
    label = "Error" if diagnostic.is_fatal else "Warning"
    if color:
        label = chalk.red.bold(label) if diagnostic.is_fatal else chalk.yellow.bold(label)

    lines = [f"{label}: {diagnostic.message}"]
    if diagnostic.start is not None:
        context = Scanner(source).error_context(diagnostic.start, diagnostic.end)
        lines.append(f"Position: {context.line}:{context.column}")
        lines.append(chalk.dim(context.context) if color else context.context)
    return "\n".join(lines)


def format_diagnostics(
    source: str,
    diagnostics: Iterable[Diagnostic],
    separator_width: int = DEFAULT_SEPARATOR_WIDTH,
    color: bool = False,
) -> str:
    """Render diagnostics joined by a visual separator line."""
    separator = "-" * separator_width
    return f"\n{separator}\n".join(format_diagnostic(source, diagnostic, color) for diagnostic in diagnostics)

# Copyright 2026 restfile Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for diagnostic rendering."""

from restfile.model.diagnostics import Diagnostic, DiagnosticKind
from restfile.parser.render import format_diagnostic, format_diagnostics

_SOURCE = "GET /a\nbad header\n"


def _header_error() -> Diagnostic:
    return Diagnostic(kind=DiagnosticKind.INVALID_HEADER_FIELD, details="bad header", start=7, end=17)


def test_fatal_diagnostic_is_rendered_as_error() -> None:
    rendered = format_diagnostic(_SOURCE, _header_error())
    lines = rendered.splitlines()
    assert lines[0] == "Error: Invalid header field, expected 'key: value': bad header"
    assert lines[1] == "Position: 2:1"
    assert lines[2].endswith("| bad header")
    assert lines[3].endswith("| ^^^^^^^^^^")


def test_non_fatal_diagnostic_is_rendered_as_warning() -> None:
    diagnostic = Diagnostic(kind=DiagnosticKind.INVALID_HTTP_VERSION, details="HTTP/x", start=0, end=6)
    assert format_diagnostic(_SOURCE, diagnostic).startswith("Warning: ")


def test_diagnostic_without_position_has_no_excerpt() -> None:
    diagnostic = Diagnostic(kind=DiagnosticKind.COULD_NOT_READ_REQUEST_FILE, details="missing.http")
    assert format_diagnostic(_SOURCE, diagnostic) == "Error: Could not read request file: missing.http"


def test_diagnostics_are_joined_by_separator() -> None:
    first = Diagnostic(kind=DiagnosticKind.MISSING_REQUEST_TARGET_LINE, start=0)
    rendered = format_diagnostics(_SOURCE, [first, _header_error()], separator_width=10)
    assert "\n----------\n" in rendered
    assert rendered.count("Position:") == 2


def test_colored_rendering_keeps_message() -> None:
    rendered = format_diagnostic(_SOURCE, _header_error(), color=True)
    assert "Invalid header field" in rendered
    assert "Position: 2:1" in rendered

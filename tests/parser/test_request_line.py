# Copyright 2026 restfile Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for request-line parsing."""

import pytest

from restfile.model.diagnostics import Diagnostic, DiagnosticKind
from restfile.model.entities import RequestLine
from restfile.model.types import (
    AbsoluteTarget,
    AsteriskTarget,
    Defaulted,
    Explicit,
    HttpVersion,
    RelativeTarget,
)
from restfile.parser.errors import ParseError
from restfile.parser.request_line import parse_request_line
from restfile.parser.scanner import Scanner

# ###############
# Test Helpers
# ###############


def _parse(source: str) -> tuple[RequestLine, list[Diagnostic]]:
    return parse_request_line(Scanner(source))


# ###############
# Shapes
# ###############


class TestShapes:
    def test_target_only(self) -> None:
        line, warnings = _parse("https://example.com")
        assert line.target == AbsoluteTarget(uri="https://example.com")
        assert isinstance(line.method, Defaulted)
        assert isinstance(line.http_version, Defaulted)
        assert line.effective_method == "GET"
        assert line.effective_http_version == HttpVersion(major=1, minor=1)
        assert warnings == []

    def test_method_and_target(self) -> None:
        line, _ = _parse("POST /api/users")
        assert line.method == Explicit[str](value="POST")
        assert line.target == RelativeTarget(uri="/api/users")
        assert isinstance(line.http_version, Defaulted)

    def test_method_target_and_version(self) -> None:
        line, warnings = _parse("GET https://example.com HTTP/2.0")
        assert line.effective_http_version == HttpVersion(major=2, minor=0)
        assert isinstance(line.http_version, Explicit)
        assert warnings == []

    def test_asterisk_target(self) -> None:
        line, _ = _parse("OPTIONS *")
        assert line.target == AsteriskTarget()

    def test_surrounding_whitespace_is_ignored(self) -> None:
        line, _ = _parse("GET    /path   HTTP/1.0  \n")
        assert line.target == RelativeTarget(uri="/path")
        assert line.effective_http_version == HttpVersion(major=1, minor=0)

    def test_custom_method_is_kept_verbatim(self) -> None:
        line, _ = _parse("PURGE /cache")
        assert line.effective_method == "PURGE"
        assert line.is_custom_method

    def test_standard_method_is_not_custom(self) -> None:
        line, _ = _parse("DELETE /x")
        assert not line.is_custom_method

    def test_consumes_only_its_line(self) -> None:
        scanner = Scanner("GET /a\nAccept: */*\n")
        parse_request_line(scanner)
        assert scanner.peek_line() == "Accept: */*"


# ###############
# Continuation Lines
# ###############


class TestContinuationLines:
    def test_indented_lines_are_concatenated(self) -> None:
        split, _ = _parse("GET https://example.com/api\n    /users\n    ?page=1\n")
        joined, _ = _parse("GET https://example.com/api/users?page=1\n")
        assert split == joined

    def test_continuation_stops_at_unindented_line(self) -> None:
        scanner = Scanner("GET /a\n  /b\nAccept: */*\n")
        line, _ = parse_request_line(scanner)
        assert line.target == RelativeTarget(uri="/a/b")
        assert scanner.peek_line() == "Accept: */*"

    def test_continuation_stops_at_indented_separator(self) -> None:
        scanner = Scanner("GET /a\n   ### next\n")
        line, _ = parse_request_line(scanner)
        assert line.target == RelativeTarget(uri="/a")
        assert scanner.peek_line() == "   ### next"

    def test_continuation_stops_at_blank_line(self) -> None:
        scanner = Scanner("GET /a\n\n  /b\n")
        line, _ = parse_request_line(scanner)
        assert line.target == RelativeTarget(uri="/a")

    def test_continuation_stops_at_whitespace_only_line(self) -> None:
        scanner = Scanner("GET /a\n   \n  /b\n")
        line, _ = parse_request_line(scanner)
        assert line.target == RelativeTarget(uri="/a")
        assert scanner.peek_line() == "   "


# ###############
# Diagnostics
# ###############


class TestDiagnostics:
    def test_invalid_http_version_is_a_warning(self) -> None:
        line, warnings = _parse("GET /a HTTP/x")
        assert isinstance(line.http_version, Defaulted)
        assert [w.kind for w in warnings] == [DiagnosticKind.INVALID_HTTP_VERSION]
        assert warnings[0].details == "HTTP/x"
        assert not warnings[0].is_fatal

    def test_too_many_elements_is_a_warning(self) -> None:
        line, warnings = _parse("GET /a HTTP/1.1 extra more")
        assert line.effective_http_version == HttpVersion(major=1, minor=1)
        assert [w.kind for w in warnings] == [DiagnosticKind.TOO_MANY_ELEMENTS_ON_REQUEST_LINE]
        assert warnings[0].details == "extra,more"

    def test_empty_line_is_fatal(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            _parse("   \n")
        assert exc_info.value.diagnostic.kind == DiagnosticKind.MISSING_REQUEST_TARGET_LINE

    def test_header_like_line_is_fatal(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            _parse("Content-Type: application/json\n")
        diagnostic = exc_info.value.diagnostic
        assert diagnostic.kind == DiagnosticKind.MISSING_REQUEST_TARGET_LINE
        assert diagnostic.start == 0
        assert diagnostic.end == len("Content-Type: application/json")

    def test_host_port_target_is_not_header_like(self) -> None:
        line, _ = _parse("localhost:8080/api")
        assert line.target == AbsoluteTarget(uri="localhost:8080/api")

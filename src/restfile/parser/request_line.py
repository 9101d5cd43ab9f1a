# Copyright 2026 restfile Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parser for ``[method WS] target [WS HTTP-version]`` request lines."""

from restfile.model.diagnostics import Diagnostic, DiagnosticKind
from restfile.model.entities import RequestLine
from restfile.model.types import Defaulted, Explicit, HttpVersion, classify_target
from restfile.parser.directives import is_separator_line
from restfile.parser.errors import ParseError
from restfile.parser.scanner import WS_CHARS, Scanner

# ###############
# Public Interface
# ###############


def parse_request_line(scanner: Scanner) -> tuple[RequestLine, list[Diagnostic]]:
    """Parse a request line, folding indented continuation lines into it.

    Every line after the first that starts with whitespace is trimmed and
    appended without a separator, so a long URL can be split across lines.

    Returns:
        The request line and any non-fatal diagnostics (bad HTTP version,
        surplus elements).

    Raises:
        ParseError: If the line is empty or looks like a header instead.
    """
    start = scanner.cursor
    line = scanner.get_line_and_advance() or ""
    while (
        (continuation := scanner.peek_line())
        and continuation[0] in WS_CHARS
        and continuation.strip()
        and not is_separator_line(continuation)
    ):
        line += continuation.strip()
        scanner.skip_to_next_line()
    end = _span_end(scanner, start)

    tokens = line.split()
    if not tokens:
        raise ParseError.at(DiagnosticKind.MISSING_REQUEST_TARGET_LINE, start)
    # A 'key: value' line where a request line should be: a request line without
    # target followed by headers. Never guess a method from it.
    if len(tokens) >= 2 and ":" in tokens[0]:
        raise ParseError.at(
            DiagnosticKind.MISSING_REQUEST_TARGET_LINE,
            start,
            end,
            details=f"found header-like line {line.strip()!r}",
        )

    warnings: list[Diagnostic] = []
    if len(tokens) == 1:
        return RequestLine(target=classify_target(tokens[0])), warnings

    method, target = tokens[0], tokens[1]
    request_line = RequestLine(target=classify_target(target), method=Explicit[str](value=method))
    if len(tokens) == 2:
        return request_line, warnings

    http_version: Explicit[HttpVersion] | Defaulted
    try:
        http_version = Explicit[HttpVersion](value=HttpVersion.parse(tokens[2]))
    except ValueError:
        http_version = Defaulted()
        warnings.append(
            Diagnostic(kind=DiagnosticKind.INVALID_HTTP_VERSION, details=tokens[2], start=start, end=end)
        )
    if len(tokens) > 3:
        warnings.append(
            Diagnostic(
                kind=DiagnosticKind.TOO_MANY_ELEMENTS_ON_REQUEST_LINE,
                details=",".join(tokens[3:]),
                start=start,
                end=end,
            )
        )
    return request_line.model_copy(update={"http_version": http_version}), warnings


# ################
# Implementation
# ################


def _span_end(scanner: Scanner, start: int) -> int:
    """Return the offset just before the terminator of the last consumed line."""
    end = scanner.cursor
    source = scanner.source
    while end > start and source[end - 1] in "\r\n":
        end -= 1
    return end

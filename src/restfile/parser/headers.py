# Copyright 2026 restfile Contributors
# SPDX-License-Identifier: Apache-2.0

"""Header section parser, shared by requests and multipart parts."""

import re

from restfile.model.diagnostics import DiagnosticKind
from restfile.model.types import Header
from restfile.parser.directives import is_separator_line
from restfile.parser.errors import ParseError
from restfile.parser.scanner import Scanner

# ###############
# Public Interface
# ###############


def parse_headers(scanner: Scanner) -> list[Header]:
    """Parse ``key: value`` lines up to the blank line that ends the section.

    The section also ends at the end of input, at a request separator, and
    before a response handler or redirect line. The blank line itself is not
    consumed. Headers keep their order and duplicates.

    Raises:
        ParseError: On a line that is not a valid header field.
    """
    headers: list[Header] = []
    while True:
        line = scanner.peek_line()
        if line is None or not line.strip() or is_separator_line(line) or line.startswith(">"):
            return headers

        start = scanner.cursor
        scanner.skip_to_next_line()
        match = _HEADER_FIELD.fullmatch(line)
        if match is None or not match.group(1).strip():
            raise ParseError.at(
                DiagnosticKind.INVALID_HEADER_FIELD,
                start,
                start + len(line),
                details=line,
            )
        headers.append(Header(key=match.group(1).strip(), value=match.group(2).strip()))


def find_header(headers: list[Header], key: str) -> Header | None:
    """Return the first header named *key* (case-insensitive), or None."""
    lowered = key.lower()
    return next((header for header in headers if header.key.lower() == lowered), None)


# ################
# Implementation
# ################

# Key is everything up to the first colon; the value may contain further colons.
_HEADER_FIELD = re.compile(r"([^:]+):(.*)")

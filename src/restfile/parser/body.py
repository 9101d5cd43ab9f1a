# Copyright 2026 restfile Contributors
# SPDX-License-Identifier: Apache-2.0

"""Body parser: raw, URL-encoded, and multipart/form-data bodies.

The body kind is chosen from the request's ``Content-Type`` header:

* ``multipart/form-data...`` parses boundary-delimited parts,
* ``application/x-www-form-urlencoded`` splits the next line into pairs,
* anything else (or no header) reads the raw text up to the next request
  separator, response handler (``>``), or redirect (``>>``).
"""

import re
import string

from restfile.model.diagnostics import Diagnostic, DiagnosticKind
from restfile.model.types import (
    Body,
    DataSource,
    DispositionField,
    FileReference,
    Header,
    InlineData,
    Multipart,
    MultipartBody,
    NoBody,
    RawBody,
    UrlEncodedBody,
    UrlEncodedParam,
)
from restfile.parser.directives import is_separator_line
from restfile.parser.errors import ParseError
from restfile.parser.headers import find_header, parse_headers
from restfile.parser.scanner import Position, Scanner

# ###############
# Public Interface
# ###############

DEFAULT_MULTIPART_BOUNDARY = "--boundary--"

MULTIPART_FORM_DATA = "multipart/form-data"
FORM_URLENCODED = "application/x-www-form-urlencoded"


def parse_body(scanner: Scanner, headers: list[Header], diagnostics: list[Diagnostic]) -> Body:
    """Parse the body section that follows the headers.

    Non-fatal problems (a defaulted or invalid multipart boundary, an unnamed
    part) are appended to *diagnostics*.

    Raises:
        ParseError: On a malformed multipart body.
    """
    content_type_header = find_header(headers, "Content-Type")
    content_type = content_type_header.value if content_type_header is not None else None

    if content_type is not None and content_type.startswith(MULTIPART_FORM_DATA):
        return _parse_multipart_body(scanner, content_type, diagnostics)
    if content_type == FORM_URLENCODED:
        return _parse_urlencoded_body(scanner)

    body = _parse_raw_body(scanner)
    # A typed but empty body is distinct from having no body section at all.
    if content_type is not None and isinstance(body, NoBody):
        return RawBody(data=InlineData(text=""))
    return body


def extract_boundary(content_type: str) -> str | None:
    """Return the (unquoted) ``boundary=`` parameter of a Content-Type value, if any."""
    match = _BOUNDARY_PARAM.search(content_type)
    if match is None:
        return None
    quoted, bare = match.group(1), match.group(2)
    return quoted if quoted is not None else bare.strip()


def validate_boundary(boundary: str) -> Diagnostic | None:
    """Check *boundary* against RFC 2046 section 5.1.1.

    Returns a diagnostic for the first violation (length 1..70, restricted
    alphabet without spaces), or None if the boundary is valid.
    """
    if not 1 <= len(boundary) <= _MAX_BOUNDARY_LENGTH:
        return Diagnostic(kind=DiagnosticKind.INVALID_MULTIPART_BOUNDARY_LENGTH, details=f"{len(boundary)}")
    for char in boundary:
        if char not in _BOUNDARY_CHARS:
            return Diagnostic(kind=DiagnosticKind.INVALID_MULTIPART_BOUNDARY_CHARACTER, details=repr(char))
    return None


# ################
# Implementation
# ################

_MAX_BOUNDARY_LENGTH = 70

_BOUNDARY_CHARS = frozenset(string.ascii_letters + string.digits + "'()+_,-./:=?")

_BOUNDARY_PARAM = re.compile(r';\s*boundary\s*=\s*(?:"([^"]*)"|([^;]+))')


# ------------------------------------------------------------------
# Raw bodies
# ------------------------------------------------------------------


def _parse_raw_body(scanner: Scanner) -> Body:
    """Read lines up to a separator, response handler, or redirect line.

    A single blank line directly before the terminating line is not part of
    the body: serializers emit it for readability. A body that really ends
    in a blank line loses it.
    """
    if scanner.is_done():
        return NoBody()

    start = scanner.get_pos()
    previous: Position | None = None
    previous_blank = False
    while (line := scanner.peek_line()) is not None:
        if is_separator_line(line) or line.startswith(">"):
            if previous is not None and previous_blank:
                scanner.set_pos(previous)
            break
        previous = scanner.get_pos()
        previous_blank = not line.strip()
        scanner.skip_to_next_line()

    text = scanner.get_from_to(start, max(start, scanner.get_pos()))
    stripped = text.strip()
    if stripped.startswith("<") and stripped[1:].strip() and _is_file_reference(stripped):
        return RawBody(data=FileReference(path=stripped[1:].strip()))
    text = text.rstrip("\r\n")
    if not text:
        return NoBody()
    return RawBody(data=InlineData(text=text))


def _is_file_reference(text: str) -> bool:
    """Return True for a single ``< path`` line; markup such as ``<a>...</a>`` stays inline."""
    return "\n" not in text and not text.endswith(">")


# ------------------------------------------------------------------
# URL-encoded bodies
# ------------------------------------------------------------------


def _parse_urlencoded_body(scanner: Scanner) -> UrlEncodedBody:
    """Split the next line on '&' and '=' into ordered key/value pairs."""
    line = scanner.peek_line()
    if line is None or is_separator_line(line) or line.startswith(">"):
        return UrlEncodedBody()
    scanner.skip_to_next_line()

    params: list[UrlEncodedParam] = []
    for pair in line.strip().split("&"):
        if not pair:
            continue
        key, _, value = pair.partition("=")
        params.append(UrlEncodedParam(key=key, value=value))
    return UrlEncodedBody(params=params)


# ------------------------------------------------------------------
# Multipart bodies
# ------------------------------------------------------------------


def _parse_multipart_body(scanner: Scanner, content_type: str, diagnostics: list[Diagnostic]) -> MultipartBody:
    """Parse ``--boundary`` delimited parts up to the ``--boundary--`` end line."""
    position = scanner.cursor
    boundary = extract_boundary(content_type)
    if boundary is None:
        boundary = DEFAULT_MULTIPART_BOUNDARY
        diagnostics.append(
            Diagnostic(
                kind=DiagnosticKind.MISSING_MULTIPART_HEADER_BOUNDARY_DEFINITION,
                details=DEFAULT_MULTIPART_BOUNDARY,
                start=position,
            )
        )
    boundary_error = validate_boundary(boundary)
    if boundary_error is not None:
        diagnostics.append(boundary_error.model_copy(update={"start": position}))

    next_boundary = f"--{boundary}"
    end_boundary = f"--{boundary}--"

    scanner.skip_empty_lines()
    parts: list[Multipart] = []
    while True:
        parts.append(_parse_multipart_part(scanner, boundary, diagnostics))
        line = scanner.peek_line()
        if line is not None and line.rstrip() == end_boundary:
            scanner.skip_to_next_line()
            break
        if line is not None and line.rstrip() == next_boundary:
            continue
        raise ParseError.at(
            DiagnosticKind.MISSING_MULTIPART_BOUNDARY,
            scanner.cursor,
            details=f"expected '{next_boundary}' or '{end_boundary}'",
        )
    return MultipartBody(boundary=boundary, parts=parts)


def _parse_multipart_part(scanner: Scanner, boundary: str, diagnostics: list[Diagnostic]) -> Multipart:
    """Parse one part: boundary line, headers, blank line, then a file reference or text."""
    boundary_line = f"--{boundary}"
    end_line = f"--{boundary}--"

    line = scanner.peek_line()
    if line is None or line.rstrip() != boundary_line:
        raise ParseError.at(
            DiagnosticKind.MISSING_MULTIPART_STARTING_BOUNDARY,
            scanner.cursor,
            details=f"expected '{boundary_line}'",
        )
    scanner.skip_to_next_line()

    headers_start = scanner.cursor
    try:
        part_headers = parse_headers(scanner)
    except ParseError as exc:
        raise ParseError.at(
            DiagnosticKind.INVALID_SINGLE_MULTIPART_HEADERS,
            exc.diagnostic.start,
            exc.diagnostic.end,
            details=exc.diagnostic.message,
        ) from exc
    headers_end = scanner.cursor

    disposition, other_headers = _parse_disposition(part_headers, headers_start, headers_end)
    if not disposition.name:
        listed = ", ".join(str(header) for header in other_headers)
        diagnostics.append(
            Diagnostic(
                kind=DiagnosticKind.SINGLE_MULTIPART_NAME_MISSING,
                details=f"[{listed}]",
                start=headers_start,
                end=headers_end,
            )
        )

    line = scanner.peek_line()
    if line is None or line.strip():
        raise ParseError.at(DiagnosticKind.SINGLE_MULTIPART_MISSING_EMPTY_LINE, scanner.cursor)
    scanner.skip_to_next_line()

    return Multipart(
        disposition=disposition,
        headers=other_headers,
        data=_parse_part_data(scanner, boundary_line, end_line),
    )


def _parse_part_data(scanner: Scanner, boundary_line: str, end_line: str) -> DataSource:
    """Read a part's ``< path`` line or its text up to the next boundary line."""
    line = scanner.peek_line()
    if line is None:
        raise ParseError.at(DiagnosticKind.MULTIPART_SHOULD_BE_ENDED_WITH_BOUNDARY, scanner.cursor, details=end_line)

    if line.startswith("<"):
        scanner.skip_to_next_line()
        return FileReference(path=line.strip()[1:].strip())

    text = ""
    while True:
        line = scanner.peek_line()
        if line is None or is_separator_line(line):
            raise ParseError.at(
                DiagnosticKind.MULTIPART_SHOULD_BE_ENDED_WITH_BOUNDARY,
                scanner.cursor,
                details=end_line,
            )
        if line.rstrip() in (boundary_line, end_line):
            return InlineData(text=text)
        scanner.skip_to_next_line()
        text += line
        following = scanner.peek_line()
        if following is None or not following.startswith(boundary_line):
            text += "\n"


def _parse_disposition(
    headers: list[Header], start: int, end: int
) -> tuple[DispositionField, list[Header]]:
    """Split off the leading ``Content-Disposition: form-data; ...`` header and parse it."""
    if not headers:
        raise ParseError.at(DiagnosticKind.MISSING_SINGLE_MULTIPART_CONTENT_DISPOSITION_HEADER, start, end)
    first, rest = headers[0], headers[1:]
    if first.key.lower() != "content-disposition":
        raise ParseError.at(DiagnosticKind.WRONG_MULTIPART_CONTENT_DISPOSITION_HEADER, start, end, details=first.key)

    entries = first.value.split(";")
    disposition_type = entries[0].strip()
    if disposition_type != "form-data":
        # Other disposition types exist for e-mail, but not for HTTP forms.
        raise ParseError.at(
            DiagnosticKind.INVALID_MULTIPART_CONTENT_DISPOSITION_FORM_DATA,
            start,
            end,
            details=disposition_type,
        )

    fields: dict[str, str] = {}
    for entry in entries[1:]:
        if not entry.strip():
            continue
        key, separator, value = entry.partition("=")
        if not separator:
            raise ParseError.at(DiagnosticKind.MALFORMED_CONTENT_DISPOSITION_ENTRIES, start, end, details=entry.strip())
        fields[key.strip()] = _unquote(value.strip())

    disposition = DispositionField(
        name=fields.get("name", ""),
        filename=fields.get("filename"),
        filename_star=fields.get("filename*"),
    )
    return disposition, rest


def _unquote(value: str) -> str:
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value[1:-1]
    return value

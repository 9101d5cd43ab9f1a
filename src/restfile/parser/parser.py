# Copyright 2026 restfile Contributors
# SPDX-License-Identifier: Apache-2.0

"""Request file parser.

Parses text containing one or more requests separated by ``###`` lines into
a :class:`~restfile.model.RequestFile`. A malformed request never aborts the
file: its partial state and diagnostics are recorded and parsing resumes at
the next separator.
"""

import logging
import sys
from collections.abc import Callable, Iterable
from pathlib import Path

from restfile.model.diagnostics import Diagnostic, DiagnosticKind
from restfile.model.entities import CommentKind, ParseFailure, PartialRequest, Request, RequestFile
from restfile.model.types import NoBody
from restfile.parser.body import parse_body
from restfile.parser.directives import NameDirective, is_separator_line, parse_comment, parse_directive
from restfile.parser.errors import ParseError, RequestFileError
from restfile.parser.headers import parse_headers
from restfile.parser.redirect import parse_redirect
from restfile.parser.render import DEFAULT_SEPARATOR_WIDTH, format_diagnostics
from restfile.parser.request_line import parse_request_line
from restfile.parser.scanner import Scanner
from restfile.parser.scripts import parse_pre_request_script, parse_response_handler, substitute_placeholders

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

REST_FILE_EXTENSIONS: tuple[str, ...] = ("http", "rest")

DiagnosticsSink = Callable[[str], None]


def parse(
    text: str,
    emit_diagnostics: bool = False,
    sink: DiagnosticsSink | None = None,
    separator_width: int = DEFAULT_SEPARATOR_WIDTH,
    color: bool = False,
) -> RequestFile:
    """Parse request file text into successful requests and failure records.

    Args:
        text: The full content of a request file.
        emit_diagnostics: If True, render all diagnostics and pass them to *sink*.
        sink: Receives the rendered diagnostics; defaults to printing to stderr.
        separator_width: Width of the line separating rendered diagnostics.
        color: If True, colorize the rendered diagnostics.

    Returns:
        A RequestFile with requests and failures, each in source order.
    """
    scanner = Scanner(text)
    requests: list[Request] = []
    failures: list[ParseFailure] = []

    while True:
        scanner.skip_empty_lines_and_ws()
        if scanner.is_done():
            break

        result = parse_request(scanner)
        if isinstance(result, Request):
            logger.debug("Parsed request %r (%s)", result.name, result.request_line.target)
            requests.append(result)
        else:
            logger.debug("Request failed with %d diagnostic(s)", len(result.diagnostics))
            failures.append(result)

        scanner.skip_empty_lines_and_ws()
        _skip_to_separator(scanner)

    result_file = RequestFile(requests=requests, failures=failures)
    if emit_diagnostics and result_file.diagnostics:
        (sink or _print_to_stderr)(format_diagnostics(text, result_file.diagnostics, separator_width, color))
    return result_file


def parse_request(scanner: Scanner) -> Request | ParseFailure:
    """Parse a single request starting at the scanner's cursor.

    Parsing stops at the end of the request (a separator line or the end of
    input); the cursor is left there.

    Returns:
        The parsed Request, or a ParseFailure with the partial request and
        all diagnostics if any fatal problem occurred.
    """
    return _RequestParser(scanner).parse()


def has_valid_extension(path: str | Path, extensions: Iterable[str] = REST_FILE_EXTENSIONS) -> bool:
    """Return True if *path* ends in one of the request file *extensions* (without dot)."""
    suffix = Path(path).suffix
    return bool(suffix) and suffix[1:] in tuple(extensions)


def parse_file(
    path: str | Path,
    emit_diagnostics: bool = True,
    sink: DiagnosticsSink | None = None,
    separator_width: int = DEFAULT_SEPARATOR_WIDTH,
    color: bool = False,
) -> RequestFile:
    """Read and parse a request file.

    Raises:
        RequestFileError: If the file cannot be read.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise RequestFileError(str(path), str(exc)) from exc

    result = parse(text, emit_diagnostics=emit_diagnostics, sink=sink, separator_width=separator_width, color=color)
    extension = path.suffix[1:] if has_valid_extension(path) else None
    return result.model_copy(update={"path": str(path), "extension": extension})


# ################
# Implementation
# ################


def _print_to_stderr(message: str) -> None:
    print(message, file=sys.stderr)


def _skip_to_separator(scanner: Scanner) -> None:
    """Resynchronize: skip lines up to the next request separator."""
    skipped = 0
    while (line := scanner.peek_line()) is not None and not is_separator_line(line):
        scanner.skip_to_next_line()
        skipped += 1
    if skipped:
        logger.debug("Skipped %d line(s) up to offset %d to reach the next request", skipped, scanner.cursor)


class _RequestParser:
    """Runs the parse stages of one request, accumulating its diagnostics."""

    def __init__(self, scanner: Scanner) -> None:
        self._scanner = scanner
        self._partial = PartialRequest()
        self._diagnostics: list[Diagnostic] = []

    def parse(self) -> Request | ParseFailure:
        try:
            self._parse_stages()
        except ParseError as exc:
            self._diagnostics.append(exc.diagnostic)

        if any(diagnostic.is_fatal for diagnostic in self._diagnostics):
            return ParseFailure(partial_request=self._partial, diagnostics=self._diagnostics)

        self._promote_first_plain_comment()
        return self._partial.build(warnings=self._diagnostics)

    def _parse_stages(self) -> None:
        scanner = self._scanner
        partial = self._partial

        self._parse_preamble()
        self._promote_separator_comment()

        try:
            request_line, warnings = parse_request_line(scanner)
            self._diagnostics.extend(warnings)
            partial.request_line = substitute_placeholders(request_line, partial.pre_request_script)
        except ParseError as exc:
            # Keep going: headers and body still enrich the partial request.
            self._diagnostics.append(exc.diagnostic)

        if is_separator_line(scanner.peek_line()):
            if partial.request_line is not None:
                partial.headers = []
                partial.body = NoBody()
            return

        partial.headers = parse_headers(scanner)
        scanner.skip_empty_lines()
        partial.body = parse_body(scanner, partial.headers, self._diagnostics)
        partial.response_handler = parse_response_handler(scanner)
        partial.save_response = parse_redirect(scanner)
        scanner.skip_empty_lines()

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def _parse_preamble(self) -> None:
        """Consume pre-request scripts, meta-directives, and comments before the request line.

        Raises:
            ParseError: If the input ends before any request line.
        """
        scanner = self._scanner
        partial = self._partial
        while True:
            scanner.skip_empty_lines_and_ws()
            if scanner.peek() == "<":
                partial.pre_request_script = parse_pre_request_script(scanner)
                continue

            directive = parse_directive(scanner)
            if isinstance(directive, NameDirective):
                if directive.name:
                    partial.name = directive.name
                continue
            if directive is not None:
                partial.settings = partial.settings.with_entry(directive)
                continue

            comment = parse_comment(scanner)
            if comment is None:
                break
            partial.comments.append(comment)

        if scanner.is_done():
            raise ParseError.at(
                DiagnosticKind.MISSING_REQUEST_TARGET_LINE,
                scanner.cursor,
                details="only comments found",
            )

    def _promote_separator_comment(self) -> None:
        """Use the first ``###`` comment as the name if no ``@name`` directive was given."""
        partial = self._partial
        if partial.name is not None:
            return
        for index, comment in enumerate(partial.comments):
            if comment.kind == CommentKind.REQUEST_SEPARATOR:
                del partial.comments[index]
                name = comment.value.strip()
                if name:
                    partial.name = name
                return

    def _promote_first_plain_comment(self) -> None:
        """Use the first comment without '@' as the name of a still unnamed request."""
        partial = self._partial
        if partial.name is not None:
            return
        for index, comment in enumerate(partial.comments):
            name = comment.value.strip()
            if name and "@" not in name:
                del partial.comments[index]
                partial.name = name
                return

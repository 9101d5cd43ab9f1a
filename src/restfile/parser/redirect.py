# Copyright 2026 restfile Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parser for ``>> path`` and ``>>! path`` save-response redirects."""

from restfile.model.diagnostics import DiagnosticKind
from restfile.model.types import NewFileIfExists, RewriteFile, SaveResponse
from restfile.parser.errors import ParseError
from restfile.parser.scanner import Scanner

# ###############
# Public Interface
# ###############

REDIRECT_MARKER = ">>"


def parse_redirect(scanner: Scanner) -> SaveResponse | None:
    """Parse a redirect line.

    ``>> path`` saves the response to a new file if *path* already exists,
    ``>>! path`` overwrites it. Returns None if the next content is not a
    redirect.

    Raises:
        ParseError: If no output path follows the marker.
    """
    scanner.skip_empty_lines_and_ws()
    start = scanner.cursor
    if not scanner.match_str_forward(REDIRECT_MARKER):
        return None

    rewrite = scanner.take("!")
    path = scanner.get_line_and_advance()
    if path is None or not path.strip():
        raise ParseError.at(DiagnosticKind.MISSING_RESPONSE_OUTPUT_PATH, start, scanner.cursor)

    if rewrite:
        return RewriteFile(path=path.strip())
    return NewFileIfExists(path=path.strip())

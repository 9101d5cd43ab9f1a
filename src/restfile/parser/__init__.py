# Copyright 2026 restfile Contributors
# SPDX-License-Identifier: Apache-2.0

"""Scanner and parser for .http / .rest request files."""

from restfile.parser.errors import ParseError, RequestFileError
from restfile.parser.parser import REST_FILE_EXTENSIONS, has_valid_extension, parse, parse_file, parse_request
from restfile.parser.render import format_diagnostic, format_diagnostics
from restfile.parser.scanner import ErrorContext, Position, Scanner

__all__ = [
    "parse",
    "parse_file",
    "parse_request",
    "has_valid_extension",
    "REST_FILE_EXTENSIONS",
    "ParseError",
    "RequestFileError",
    "Scanner",
    "Position",
    "ErrorContext",
    "format_diagnostic",
    "format_diagnostics",
]

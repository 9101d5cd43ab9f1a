# Copyright 2026 restfile Contributors
# SPDX-License-Identifier: Apache-2.0

"""restfile: parser for .http / .rest request files."""

from restfile.model import Request, RequestFile
from restfile.parser import ParseError, RequestFileError, has_valid_extension, parse, parse_file, parse_request

__all__ = [
    "parse",
    "parse_file",
    "parse_request",
    "has_valid_extension",
    "ParseError",
    "RequestFileError",
    "Request",
    "RequestFile",
]

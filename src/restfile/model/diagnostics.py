# Copyright 2026 restfile Contributors
# SPDX-License-Identifier: Apache-2.0

"""Diagnostics produced while parsing a request file."""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict

# ###############
# Public Interface
# ###############


class DiagnosticKind(enum.Enum):
    """The closed set of problems the parser reports."""

    MISSING_REQUEST_TARGET_LINE = "MissingRequestTargetLine"
    TOO_MANY_ELEMENTS_ON_REQUEST_LINE = "TooManyElementsOnRequestLine"
    INVALID_HTTP_VERSION = "InvalidHttpVersion"
    INVALID_HEADER_FIELD = "InvalidHeaderField"
    MISSING_MULTIPART_HEADER_BOUNDARY_DEFINITION = "MissingMultipartHeaderBoundaryDefinition"
    INVALID_MULTIPART_BOUNDARY_LENGTH = "InvalidMultipartBoundaryLength"
    INVALID_MULTIPART_BOUNDARY_CHARACTER = "InvalidMultipartBoundaryCharacter"
    MISSING_MULTIPART_STARTING_BOUNDARY = "MissingMultipartStartingBoundary"
    MISSING_MULTIPART_BOUNDARY = "MissingMultipartBoundary"
    INVALID_SINGLE_MULTIPART_HEADERS = "InvalidSingleMultipartHeaders"
    MISSING_SINGLE_MULTIPART_CONTENT_DISPOSITION_HEADER = "MissingSingleMultipartContentDispositionHeader"
    WRONG_MULTIPART_CONTENT_DISPOSITION_HEADER = "WrongMultipartContentDispositionHeader"
    INVALID_MULTIPART_CONTENT_DISPOSITION_FORM_DATA = "InvalidMultipartContentDispositionFormData"
    MALFORMED_CONTENT_DISPOSITION_ENTRIES = "MalformedContentDispositionEntries"
    SINGLE_MULTIPART_NAME_MISSING = "SingleMultipartNameMissing"
    SINGLE_MULTIPART_MISSING_EMPTY_LINE = "SingleMultipartMissingEmptyLine"
    MULTIPART_SHOULD_BE_ENDED_WITH_BOUNDARY = "MultipartShouldBeEndedWithBoundary"
    MISSING_PRE_REQUEST_SCRIPT = "MissingPreRequestScript"
    MISSING_PRE_REQUEST_SCRIPT_CLOSE = "MissingPreRequestScriptClose"
    MISSING_RESPONSE_HANDLER = "MissingResponseHandler"
    MISSING_RESPONSE_HANDLER_CLOSE = "MissingResponseHandlerClose"
    MISSING_RESPONSE_OUTPUT_PATH = "MissingResponseOutputPath"
    COULD_NOT_READ_REQUEST_FILE = "CouldNotReadRequestFile"

    @property
    def message(self) -> str:
        """Return the fixed human-readable message for this kind."""
        return _MESSAGES[self]

    @property
    def is_fatal(self) -> bool:
        """Return True if a diagnostic of this kind aborts the current request."""
        return self not in _NON_FATAL


class Diagnostic(BaseModel):
    """A single parse problem with optional source offsets.

    Attributes:
        kind: What went wrong.
        details: Optional elaboration, e.g. the offending text.
        start: 0-based offset into the source where the problem starts.
        end: 0-based offset where the highlighted span ends (exclusive).
    """

    model_config = ConfigDict(frozen=True)

    kind: DiagnosticKind
    details: str | None = None
    start: int | None = None
    end: int | None = None

    @property
    def is_fatal(self) -> bool:
        return self.kind.is_fatal

    @property
    def message(self) -> str:
        """Return the kind's message, followed by the details if present."""
        if self.details:
            return f"{self.kind.message}: {self.details}"
        return self.kind.message

    def __str__(self) -> str:
        return self.message


# ################
# Implementation
# ################

_NON_FATAL: frozenset[DiagnosticKind] = frozenset(
    {
        DiagnosticKind.TOO_MANY_ELEMENTS_ON_REQUEST_LINE,
        DiagnosticKind.INVALID_HTTP_VERSION,
        DiagnosticKind.MISSING_MULTIPART_HEADER_BOUNDARY_DEFINITION,
        DiagnosticKind.INVALID_MULTIPART_BOUNDARY_LENGTH,
        DiagnosticKind.INVALID_MULTIPART_BOUNDARY_CHARACTER,
        DiagnosticKind.SINGLE_MULTIPART_NAME_MISSING,
    }
)

_MESSAGES: dict[DiagnosticKind, str] = {
    DiagnosticKind.MISSING_REQUEST_TARGET_LINE: "Expected a request line with at least a request target",
    DiagnosticKind.TOO_MANY_ELEMENTS_ON_REQUEST_LINE: (
        "Too many elements on the request line, expected '[method] target [HTTP-version]', extra elements"
    ),
    DiagnosticKind.INVALID_HTTP_VERSION: "Invalid HTTP version, expected 'HTTP/<major>.<minor>'",
    DiagnosticKind.INVALID_HEADER_FIELD: "Invalid header field, expected 'key: value'",
    DiagnosticKind.MISSING_MULTIPART_HEADER_BOUNDARY_DEFINITION: (
        "Content-Type 'multipart/form-data' has no boundary definition, using the default boundary"
    ),
    DiagnosticKind.INVALID_MULTIPART_BOUNDARY_LENGTH: "Multipart boundary must be between 1 and 70 characters long",
    DiagnosticKind.INVALID_MULTIPART_BOUNDARY_CHARACTER: "Multipart boundary contains an invalid character",
    DiagnosticKind.MISSING_MULTIPART_STARTING_BOUNDARY: "Multipart part must start with a boundary line",
    DiagnosticKind.MISSING_MULTIPART_BOUNDARY: "Expected either a next boundary or the end boundary after a part",
    DiagnosticKind.INVALID_SINGLE_MULTIPART_HEADERS: "Invalid headers in multipart part",
    DiagnosticKind.MISSING_SINGLE_MULTIPART_CONTENT_DISPOSITION_HEADER: (
        "Multipart part has no headers, expected a 'Content-Disposition' header"
    ),
    DiagnosticKind.WRONG_MULTIPART_CONTENT_DISPOSITION_HEADER: (
        "First header of a multipart part must be 'Content-Disposition', found"
    ),
    DiagnosticKind.INVALID_MULTIPART_CONTENT_DISPOSITION_FORM_DATA: (
        "Content-Disposition of a multipart part must be 'form-data', found"
    ),
    DiagnosticKind.MALFORMED_CONTENT_DISPOSITION_ENTRIES: (
        "Malformed Content-Disposition entry, expected 'key=value'"
    ),
    DiagnosticKind.SINGLE_MULTIPART_NAME_MISSING: "Multipart part has an empty 'name', part headers",
    DiagnosticKind.SINGLE_MULTIPART_MISSING_EMPTY_LINE: (
        "Multipart part headers must be followed by an empty line"
    ),
    DiagnosticKind.MULTIPART_SHOULD_BE_ENDED_WITH_BOUNDARY: "Multipart body must be ended with the boundary",
    DiagnosticKind.MISSING_PRE_REQUEST_SCRIPT: (
        "Expected a '{% ... %}' script block or a script file path after '<'"
    ),
    DiagnosticKind.MISSING_PRE_REQUEST_SCRIPT_CLOSE: "Pre-request script block is missing its closing '%}'",
    DiagnosticKind.MISSING_RESPONSE_HANDLER: (
        "Expected a '{% ... %}' script block or a script file path after '>'"
    ),
    DiagnosticKind.MISSING_RESPONSE_HANDLER_CLOSE: "Response handler block is missing its closing '%}'",
    DiagnosticKind.MISSING_RESPONSE_OUTPUT_PATH: "Expected an output path after '>>' or '>>!'",
    DiagnosticKind.COULD_NOT_READ_REQUEST_FILE: "Could not read request file",
}

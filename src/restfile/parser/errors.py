# Copyright 2026 restfile Contributors
# SPDX-License-Identifier: Apache-2.0

"""Exceptions raised by the request file parser."""

from restfile.model.diagnostics import Diagnostic, DiagnosticKind

# ###############
# Public Interface
# ###############


class ParseError(Exception):
    """Raised by a sub-parser on a fatal problem in the current request.

    The driver catches it, records the diagnostic, and resumes at the next
    request separator.

    Attributes:
        diagnostic: The fatal diagnostic describing the problem.
    """

    def __init__(self, diagnostic: Diagnostic) -> None:
        super().__init__(diagnostic.message)
        self.diagnostic = diagnostic

    @classmethod
    def at(
        cls,
        kind: DiagnosticKind,
        start: int | None,
        end: int | None = None,
        details: str | None = None,
    ) -> "ParseError":
        """Build a ParseError for *kind* located at ``start..end``."""
        return cls(Diagnostic(kind=kind, details=details, start=start, end=end))


class RequestFileError(Exception):
    """Raised when a request file cannot be read.

    Attributes:
        diagnostic: A ``CouldNotReadRequestFile`` diagnostic naming the path.
    """

    def __init__(self, path: str, reason: str) -> None:
        self.diagnostic = Diagnostic(kind=DiagnosticKind.COULD_NOT_READ_REQUEST_FILE, details=f"{path}: {reason}")
        super().__init__(self.diagnostic.message)

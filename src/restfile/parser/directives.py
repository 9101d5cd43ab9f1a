# Copyright 2026 restfile Contributors
# SPDX-License-Identifier: Apache-2.0

"""Comment lines and the meta-directives embedded in them.

Three comment dialects are recognised: the request separator ``###``, ``//``
and ``#``. A ``//`` or ``#`` comment may instead carry a meta-directive:
``@name = <value>``, ``@no-cookie-jar``, ``@no-redirect`` or ``@no-log``.
"""

import re
from dataclasses import dataclass

from restfile.model.entities import Comment, CommentKind, SettingsEntry
from restfile.parser.scanner import Scanner

# ###############
# Public Interface
# ###############

REQUEST_SEPARATOR = CommentKind.REQUEST_SEPARATOR.value


@dataclass(frozen=True)
class NameDirective:
    """An ``@name=`` directive. An empty name means the line is dropped."""

    name: str


Directive = NameDirective | SettingsEntry


def is_separator_line(line: str | None) -> bool:
    """Return True if *line* is a (possibly indented) request separator."""
    return line is not None and line.lstrip().startswith(REQUEST_SEPARATOR)


def parse_directive(scanner: Scanner) -> Directive | None:
    """Try to parse the current line as a meta-directive.

    Speculative: the line is consumed only when it is a directive; otherwise
    the cursor is restored and None is returned so the caller can treat the
    line as a plain comment.
    """
    start = scanner.get_pos()
    scanner.skip_ws()
    line = scanner.peek_line()
    if line is None:
        scanner.set_pos(start)
        return None

    line_scanner = Scanner(line)
    line_scanner.skip_ws()
    if line_scanner.match_str_forward(REQUEST_SEPARATOR) or not (
        line_scanner.match_str_forward(CommentKind.DOUBLE_SLASH.value)
        or line_scanner.match_str_forward(CommentKind.SINGLE_TAG.value)
    ):
        scanner.set_pos(start)
        return None

    directive = _parse_directive_body(line_scanner)
    if directive is None:
        scanner.set_pos(start)
        return None
    scanner.skip_to_next_line()
    return directive


def parse_comment(scanner: Scanner) -> Comment | None:
    """Parse a comment line of any dialect.

    Blank lines and indentation before the comment are consumed even when no
    comment follows; the marker and the comment line only on success.
    """
    scanner.skip_empty_lines_and_ws()
    for kind in _COMMENT_KINDS:
        if scanner.match_str_forward(kind.value):
            scanner.skip_ws()
            value = scanner.get_line_and_advance() or ""
            return Comment(value=value, kind=kind)
    return None


# ################
# Implementation
# ################

# Longest marker first: '###' must not be read as a '#' comment.
_COMMENT_KINDS = (CommentKind.REQUEST_SEPARATOR, CommentKind.DOUBLE_SLASH, CommentKind.SINGLE_TAG)

_NAME_DIRECTIVE = re.compile(r"\s*@name\s*=\s*(.*)")

_SETTINGS_DIRECTIVES: dict[str, SettingsEntry] = {entry.value: entry for entry in SettingsEntry}


def _parse_directive_body(line_scanner: Scanner) -> Directive | None:
    """Parse what follows a '//' or '#' marker."""
    captures = line_scanner.match_regex_forward(_NAME_DIRECTIVE)
    if captures is not None:
        return NameDirective(name=captures[0].strip())
    rest = line_scanner.peek_line() or ""
    return _SETTINGS_DIRECTIVES.get(rest.strip())

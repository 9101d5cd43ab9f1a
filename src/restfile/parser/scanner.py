# Copyright 2026 restfile Contributors
# SPDX-License-Identifier: Apache-2.0

"""Line-oriented read head over request file text.

Every sub-parser works on a shared :class:`Scanner`. All matching is anchored
at the cursor; backtracking is explicit through :meth:`Scanner.get_pos` and
:meth:`Scanner.set_pos`.
"""

import re
from dataclasses import dataclass

# ###############
# Public Interface
# ###############

WS_CHARS = " \t"


@dataclass(frozen=True, order=True)
class Position:
    """A snapshot of the scanner cursor. Positions are ordered by offset."""

    cursor: int


@dataclass(frozen=True)
class ErrorContext:
    """Human-oriented location of a source offset.

    Attributes:
        line: 1-based line number.
        column: 1-based column number.
        context: Source excerpt with the offending span underlined.
    """

    line: int
    column: int
    context: str


class Scanner:
    """Cursor over a text with lookahead, anchored matching, and snapshot/restore."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0

    @property
    def source(self) -> str:
        return self._source

    @property
    def cursor(self) -> int:
        """Return the current 0-based offset."""
        return self._pos

    def is_done(self) -> bool:
        """Return True if all input has been consumed."""
        return self._pos >= len(self._source)

    # ------------------------------------------------------------------
    # Snapshot / restore
    # ------------------------------------------------------------------

    def get_pos(self) -> Position:
        return Position(self._pos)

    def set_pos(self, pos: Position) -> None:
        """Restore the cursor to a snapshot taken with :meth:`get_pos`."""
        self._pos = min(max(pos.cursor, 0), len(self._source))

    def get_from_to(self, start: Position, end: Position) -> str:
        """Return the source text between two snapshots."""
        return self._source[start.cursor : end.cursor]

    # ------------------------------------------------------------------
    # Lookahead
    # ------------------------------------------------------------------

    def peek(self) -> str | None:
        """Return the current character without consuming it, or None at end of input."""
        if self.is_done():
            return None
        return self._source[self._pos]

    def peek_n(self, n: int) -> str | None:
        """Return the next *n* characters, or None if fewer remain."""
        if self._pos + n > len(self._source):
            return None
        return self._source[self._pos : self._pos + n]

    def peek_line(self) -> str | None:
        """Return the rest of the current line without its terminator, or None at end of input."""
        if self.is_done():
            return None
        return _strip_cr(self._source[self._pos : self._line_end()])

    # ------------------------------------------------------------------
    # Consumption
    # ------------------------------------------------------------------

    def take(self, char: str) -> bool:
        """Consume *char* if it is the current character."""
        if self.peek() == char:
            self._pos += 1
            return True
        return False

    def get_line_and_advance(self) -> str | None:
        """Consume the rest of the current line including its terminator and return it.

        Returns None at end of input.
        """
        if self.is_done():
            return None
        end = self._line_end()
        line = self._source[self._pos : end]
        self._pos = min(end + 1, len(self._source))
        return _strip_cr(line)

    def skip_to_next_line(self) -> None:
        self.get_line_and_advance()

    def skip_ws(self) -> None:
        """Skip horizontal whitespace on the current line."""
        while self._pos < len(self._source) and self._source[self._pos] in WS_CHARS:
            self._pos += 1

    def skip_empty_lines(self) -> None:
        """Skip lines (or the rest of the current line) consisting only of whitespace."""
        while (line := self.peek_line()) is not None and not line.strip():
            self.skip_to_next_line()

    def skip_empty_lines_and_ws(self) -> None:
        self.skip_empty_lines()
        self.skip_ws()

    def match_str_forward(self, text: str) -> bool:
        """Consume *text* if the input continues with it; nothing is consumed otherwise."""
        if self._source.startswith(text, self._pos):
            self._pos += len(text)
            return True
        return False

    def match_regex_forward(self, pattern: re.Pattern[str]) -> tuple[str, ...] | None:
        """Match *pattern* anchored at the cursor.

        On success the matched span is consumed and the capture groups are
        returned (unmatched optional groups as ``""``). On failure nothing is
        consumed and None is returned.
        """
        match = pattern.match(self._source, self._pos)
        if match is None:
            return None
        self._pos = match.end()
        return tuple(group or "" for group in match.groups())

    def seek_return(self, delimiter: str) -> str | None:
        """Consume through the next *delimiter* and return the text before it.

        Returns None, consuming nothing, if the delimiter does not occur before
        the end of input.
        """
        index = self._source.find(delimiter, self._pos)
        if index < 0:
            return None
        text = self._source[self._pos : index]
        self._pos = index + len(delimiter)
        return text

    # ------------------------------------------------------------------
    # Error context
    # ------------------------------------------------------------------

    def error_context(self, start: int, end: int | None = None) -> ErrorContext:
        """Compute line, column, and an underlined excerpt for a source span."""
        start = min(max(start, 0), len(self._source))
        line_start = self._source.rfind("\n", 0, start) + 1
        line_number = self._source.count("\n", 0, start) + 1
        column = start - line_start + 1

        if end is None or end <= start:
            end = start + 1
        end = min(end, len(self._source))

        excerpt: list[str] = []
        width = len(str(line_number + _MAX_CONTEXT_LINES))
        offset = line_start
        for index in range(_MAX_CONTEXT_LINES):
            line_end = self._source.find("\n", offset)
            if line_end < 0:
                line_end = len(self._source)
            text = _strip_cr(self._source[offset:line_end])
            excerpt.append(f"{line_number + index:>{width}} | {text}")
            if index == 0:
                underline_end = max(min(end, line_end), start + 1)
                marker = " " * (start - line_start) + "^" * (underline_end - start)
                excerpt.append(f"{'':>{width}} | {marker}")
            offset = line_end + 1
            if offset >= end or offset > len(self._source):
                break
        return ErrorContext(line=line_number, column=column, context="\n".join(excerpt))

    # ------------------------------------------------------------------
    # Low-level helpers
    # ------------------------------------------------------------------

    def _line_end(self) -> int:
        """Return the offset of the current line's newline, or the end of input."""
        index = self._source.find("\n", self._pos)
        return len(self._source) if index < 0 else index


# ################
# Implementation
# ################

_MAX_CONTEXT_LINES = 5


def _strip_cr(line: str) -> str:
    return line[:-1] if line.endswith("\r") else line

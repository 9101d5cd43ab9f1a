# Copyright 2026 restfile Contributors
# SPDX-License-Identifier: Apache-2.0

"""Pre-request scripts, response handlers, and target placeholder substitution.

Scripts are never evaluated. A ``{% ... %}`` block is captured as opaque
text; anything else after the marker is a path to a script file.
"""

import re

from restfile.model.diagnostics import DiagnosticKind
from restfile.model.entities import RequestLine
from restfile.model.types import AbsoluteTarget, InlineScript, Script, ScriptFile
from restfile.parser.directives import is_separator_line
from restfile.parser.errors import ParseError
from restfile.parser.scanner import Scanner

# ###############
# Public Interface
# ###############

SCRIPT_OPEN = "{%"


def parse_pre_request_script(scanner: Scanner) -> Script | None:
    """Parse ``< {% ... %}`` or ``< path/to/script.js`` before the request line.

    Returns None, consuming nothing, if the current character is not ``<``.

    Raises:
        ParseError: If the block is not closed or no script path follows.
    """
    start = scanner.cursor
    if not scanner.take("<"):
        return None
    scanner.skip_ws()
    if scanner.match_str_forward(SCRIPT_OPEN):
        return InlineScript(text=_parse_script_block(scanner, start, DiagnosticKind.MISSING_PRE_REQUEST_SCRIPT_CLOSE))

    path = scanner.get_line_and_advance()
    if path is None or not path.strip():
        raise ParseError.at(DiagnosticKind.MISSING_PRE_REQUEST_SCRIPT, start, scanner.cursor)
    return ScriptFile(path=path.strip())


def parse_response_handler(scanner: Scanner) -> Script | None:
    """Parse ``> {% ... %}`` or ``> path/to/handler.js`` after the body.

    Blank lines before the marker and between the marker and the handler
    are consumed. Returns None if the next content does not start with a
    single ``>`` (``>>`` is a redirect).

    Raises:
        ParseError: If the block is not closed or no handler path follows.
    """
    scanner.skip_empty_lines_and_ws()
    if scanner.peek() != ">" or scanner.peek_n(2) == ">>":
        return None

    start = scanner.cursor
    scanner.take(">")
    scanner.skip_empty_lines_and_ws()
    if scanner.match_str_forward(SCRIPT_OPEN):
        return InlineScript(text=_parse_script_block(scanner, start, DiagnosticKind.MISSING_RESPONSE_HANDLER_CLOSE))

    line = scanner.peek_line()
    if line is not None and (is_separator_line(line) or line.startswith(">")):
        raise ParseError.at(DiagnosticKind.MISSING_RESPONSE_HANDLER, start, scanner.cursor)
    path = scanner.get_line_and_advance()
    if path is None or not path.strip():
        raise ParseError.at(DiagnosticKind.MISSING_RESPONSE_HANDLER, start, scanner.cursor)
    return ScriptFile(path=path.strip())


def substitute_placeholders(request_line: RequestLine, script: Script | None) -> RequestLine:
    """Resolve ``{{name}}`` placeholders in an absolute target from a pre-request script.

    Only inline scripts are inspected, and only the call shape
    ``request.variables.set("key", "value")`` is recognised; the first value
    set for a key wins. Unknown placeholders are left untouched. This is a
    narrow compatibility shim, not a script evaluator.
    """
    if not isinstance(script, InlineScript) or not isinstance(request_line.target, AbsoluteTarget):
        return request_line
    if _VARIABLE_SET_CALL not in script.text:
        return request_line

    variables: dict[str, str] = {}
    for key, value in _VARIABLE_SET.findall(script.text):
        variables.setdefault(key, value)
    if not variables:
        return request_line

    uri = _PLACEHOLDER.sub(lambda match: variables.get(match.group(1), match.group(0)), request_line.target.uri)
    return request_line.model_copy(update={"target": AbsoluteTarget(uri=uri)})


# ################
# Implementation
# ################

_SCRIPT_CLOSE = re.compile(r"(.*)%}")

_VARIABLE_SET_CALL = "request.variables.set"

_VARIABLE_SET = re.compile(r'request\.variables\.set\("(\w+)", "(\w+)"')

_PLACEHOLDER = re.compile(r"\{\{(\w+)\}\}")


def _parse_script_block(scanner: Scanner, start: int, missing_close: DiagnosticKind) -> str:
    """Collect lines verbatim up to the line containing ``%}``.

    Text before ``%}`` on the closing line is kept, the rest of that line is
    discarded. Lines are joined with newlines.
    """
    lines: list[str] = []
    while True:
        captures = scanner.match_regex_forward(_SCRIPT_CLOSE)
        if captures is not None:
            lines.append(captures[0])
            scanner.skip_to_next_line()
            return "\n".join(lines)
        line = scanner.get_line_and_advance()
        if line is None:
            raise ParseError.at(missing_close, start, scanner.cursor)
        lines.append(line)

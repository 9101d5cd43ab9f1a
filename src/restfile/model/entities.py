# Copyright 2026 restfile Contributors
# SPDX-License-Identifier: Apache-2.0

"""Request-level entities of the restfile document model."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

from restfile.model.diagnostics import Diagnostic
from restfile.model.types import (
    DEFAULT_HTTP_VERSION,
    DEFAULT_METHOD,
    KNOWN_METHODS,
    Body,
    Defaulted,
    Explicit,
    Header,
    HttpVersion,
    NoBody,
    RequestTarget,
    SaveResponse,
    Script,
)

# ###############
# Public Interface
# ###############


class CommentKind(Enum):
    """Comment dialects, named by their leading marker."""

    REQUEST_SEPARATOR = "###"
    DOUBLE_SLASH = "//"
    SINGLE_TAG = "#"


class Comment(BaseModel):
    """A comment line attached to a request."""

    model_config = ConfigDict(frozen=True)

    value: str
    kind: CommentKind


class SettingsEntry(Enum):
    """Meta-directives that switch a request setting on."""

    NO_COOKIE_JAR = "@no-cookie-jar"
    NO_REDIRECT = "@no-redirect"
    NO_LOG = "@no-log"


class RequestSettings(BaseModel):
    """Per-request settings. ``None`` means the directive did not appear."""

    model_config = ConfigDict(frozen=True)

    no_cookie_jar: bool | None = None
    no_redirect: bool | None = None
    no_log: bool | None = None

    def with_entry(self, entry: SettingsEntry) -> RequestSettings:
        """Return a copy with the setting named by *entry* switched on."""
        return self.model_copy(update={_SETTING_FIELDS[entry]: True})


class RequestLine(BaseModel):
    """``[method] target [HTTP-version]`` with explicit-or-default method and version."""

    model_config = ConfigDict(frozen=True)

    target: RequestTarget
    method: Explicit[str] | Defaulted = _Field(default_factory=Defaulted, discriminator="kind")
    http_version: Explicit[HttpVersion] | Defaulted = _Field(default_factory=Defaulted, discriminator="kind")

    @property
    def effective_method(self) -> str:
        if isinstance(self.method, Explicit):
            return self.method.value
        return DEFAULT_METHOD

    @property
    def effective_http_version(self) -> HttpVersion:
        if isinstance(self.http_version, Explicit):
            return self.http_version.value
        return DEFAULT_HTTP_VERSION

    @property
    def is_custom_method(self) -> bool:
        """Return True if an explicit method is not one of the standard HTTP methods."""
        return isinstance(self.method, Explicit) and self.method.value not in KNOWN_METHODS


class Request(BaseModel):
    """A fully parsed request.

    ``warnings`` holds non-fatal diagnostics (e.g. a defaulted multipart
    boundary). A request with any fatal diagnostic is never built; it is
    reported as a :class:`ParseFailure` instead.
    """

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    comments: list[Comment] = _Field(default_factory=list)
    settings: RequestSettings = _Field(default_factory=RequestSettings)
    pre_request_script: Script | None = None
    request_line: RequestLine
    headers: list[Header] = _Field(default_factory=list)
    body: Body = _Field(default_factory=NoBody)
    response_handler: Script | None = None
    save_response: SaveResponse | None = None
    warnings: list[Diagnostic] = _Field(default_factory=list)

    def comment_text(self) -> str | None:
        """Return all comment values joined by newlines, or None without comments."""
        if not self.comments:
            return None
        return "\n".join(comment.value for comment in self.comments)

    def header_values(self, key: str) -> list[str]:
        """Return the values of all headers named *key* (case-insensitive), in order."""
        lowered = key.lower()
        return [header.value for header in self.headers if header.key.lower() == lowered]


class PartialRequest(BaseModel):
    """In-progress request: every field of :class:`Request` populated incrementally.

    The parser fills fields stage by stage; on a fatal problem the partial
    state is reported as-is. :meth:`build` converts it to an immutable
    :class:`Request` once the required request line is present.
    """

    name: str | None = None
    comments: list[Comment] = _Field(default_factory=list)
    settings: RequestSettings = _Field(default_factory=RequestSettings)
    pre_request_script: Script | None = None
    request_line: RequestLine | None = None
    headers: list[Header] | None = None
    body: Body | None = None
    response_handler: Script | None = None
    save_response: SaveResponse | None = None

    def build(self, warnings: list[Diagnostic] | None = None) -> Request:
        """Return the completed request.

        Raises:
            ValueError: If no request line has been parsed.
        """
        if self.request_line is None:
            raise ValueError("Cannot build a request without a request line")
        return Request(
            name=self.name,
            comments=list(self.comments),
            settings=self.settings,
            pre_request_script=self.pre_request_script,
            request_line=self.request_line,
            headers=list(self.headers or []),
            body=self.body if self.body is not None else NoBody(),
            response_handler=self.response_handler,
            save_response=self.save_response,
            warnings=list(warnings or []),
        )


class ParseFailure(BaseModel):
    """A request that could not be parsed: best-effort partial state plus all diagnostics."""

    model_config = ConfigDict(frozen=True)

    partial_request: PartialRequest
    diagnostics: list[Diagnostic] = _Field(default_factory=list)


class RequestFile(BaseModel):
    """The parsed contents of a request file.

    Attributes:
        requests: Successfully parsed requests in source order.
        failures: Requests that failed to parse, in source order.
        path: Source path when parsed from a file.
        extension: ``"http"`` or ``"rest"`` when parsed from a file with one of those extensions.
    """

    model_config = ConfigDict(frozen=True)

    requests: list[Request] = _Field(default_factory=list)
    failures: list[ParseFailure] = _Field(default_factory=list)
    path: str | None = None
    extension: str | None = None

    @property
    def has_errors(self) -> bool:
        return len(self.failures) > 0

    @property
    def diagnostics(self) -> list[Diagnostic]:
        """Return every diagnostic, from failures and from successful requests' warnings."""
        result: list[Diagnostic] = []
        for failure in self.failures:
            result.extend(failure.diagnostics)
        for request in self.requests:
            result.extend(request.warnings)
        return sorted(result, key=lambda d: d.start if d.start is not None else -1)


# ################
# Implementation
# ################

_SETTING_FIELDS: dict[SettingsEntry, str] = {
    SettingsEntry.NO_COOKIE_JAR: "no_cookie_jar",
    SettingsEntry.NO_REDIRECT: "no_redirect",
    SettingsEntry.NO_LOG: "no_log",
}

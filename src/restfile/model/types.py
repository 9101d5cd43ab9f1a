# Copyright 2026 restfile Contributors
# SPDX-License-Identifier: Apache-2.0

"""Value types for the restfile document model (targets, headers, bodies, scripts)."""

from __future__ import annotations

import re
from typing import Annotated, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############

T = TypeVar("T")

DEFAULT_METHOD = "GET"

KNOWN_METHODS: frozenset[str] = frozenset(
    {"GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS", "CONNECT", "TRACE"}
)


class Explicit(BaseModel, Generic[T]):
    """A value the user wrote explicitly in the request file."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["explicit"] = "explicit"
    value: T


class Defaulted(BaseModel):
    """Marks a value that was omitted and falls back to its default."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["default"] = "default"


class HttpVersion(BaseModel):
    """An HTTP protocol version such as ``HTTP/1.1``."""

    model_config = ConfigDict(frozen=True)

    major: int
    minor: int

    @classmethod
    def parse(cls, text: str) -> HttpVersion:
        """Parse ``HTTP/<digits>.<digits>``.

        Raises:
            ValueError: If *text* is not a valid version token.
        """
        match = _HTTP_VERSION.fullmatch(text)
        if match is None:
            raise ValueError(f"Invalid HTTP version {text!r}")
        return cls(major=int(match.group(1)), minor=int(match.group(2)))

    def __str__(self) -> str:
        return f"HTTP/{self.major}.{self.minor}"


DEFAULT_HTTP_VERSION = HttpVersion(major=1, minor=1)


class AbsoluteTarget(BaseModel):
    """A target carrying a scheme or host, e.g. ``https://example.com/api``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["absolute"] = "absolute"
    uri: str

    def has_scheme(self) -> bool:
        return _SCHEME.match(self.uri) is not None

    def __str__(self) -> str:
        return self.uri


class RelativeTarget(BaseModel):
    """An origin-relative target such as ``/api/v1/users?id=1``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["relative"] = "relative"
    uri: str

    def has_scheme(self) -> bool:
        return False

    def __str__(self) -> str:
        return self.uri


class AsteriskTarget(BaseModel):
    """The ``*`` target (server-wide OPTIONS requests)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["asterisk"] = "asterisk"

    def has_scheme(self) -> bool:
        return False

    def __str__(self) -> str:
        return "*"


RequestTarget = Annotated[AbsoluteTarget | RelativeTarget | AsteriskTarget, _Field(discriminator="kind")]


def classify_target(text: str) -> AbsoluteTarget | RelativeTarget | AsteriskTarget:
    """Classify a raw request-target token.

    ``*`` is the asterisk form, a leading ``/`` is origin-relative, and everything
    else (a scheme, a bare ``host[:port][/path]``, or an unresolved placeholder
    such as ``{{base_url}}/path``) is treated as absolute.
    """
    if text == "*":
        return AsteriskTarget()
    if text.startswith("/"):
        return RelativeTarget(uri=text)
    return AbsoluteTarget(uri=text)


class Header(BaseModel):
    """A single ``key: value`` header field. Order and duplicates are significant."""

    model_config = ConfigDict(frozen=True)

    key: str
    value: str

    def __str__(self) -> str:
        return f"{self.key}: {self.value}"


class InlineData(BaseModel):
    """Body content written directly in the request file."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["inline"] = "inline"
    text: str


class FileReference(BaseModel):
    """Body content referenced with ``< path``; resolved by the sender, never here."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["file"] = "file"
    path: str


DataSource = Annotated[InlineData | FileReference, _Field(discriminator="kind")]


class UrlEncodedParam(BaseModel):
    """One ``key=value`` pair of a URL-encoded form body."""

    model_config = ConfigDict(frozen=True)

    key: str
    value: str


class DispositionField(BaseModel):
    """Parameters of a multipart part's ``Content-Disposition: form-data`` header."""

    model_config = ConfigDict(frozen=True)

    name: str
    filename: str | None = None
    filename_star: str | None = None


class Multipart(BaseModel):
    """A single boundary-delimited part of a multipart body."""

    model_config = ConfigDict(frozen=True)

    disposition: DispositionField
    headers: list[Header] = _Field(default_factory=list)
    data: DataSource


class NoBody(BaseModel):
    """The request has no body section."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["none"] = "none"


class RawBody(BaseModel):
    """A body taken verbatim (or from a referenced file)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["raw"] = "raw"
    data: DataSource


class UrlEncodedBody(BaseModel):
    """An ``application/x-www-form-urlencoded`` body."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["urlencoded"] = "urlencoded"
    params: list[UrlEncodedParam] = _Field(default_factory=list)


class MultipartBody(BaseModel):
    """A ``multipart/form-data`` body."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["multipart"] = "multipart"
    boundary: str
    parts: list[Multipart] = _Field(default_factory=list)


Body = Annotated[NoBody | RawBody | UrlEncodedBody | MultipartBody, _Field(discriminator="kind")]


class InlineScript(BaseModel):
    """Script text captured from a ``{% ... %}`` block."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["script"] = "script"
    text: str

    def __str__(self) -> str:
        return self.text


class ScriptFile(BaseModel):
    """A script given as a path to a file."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["file"] = "file"
    path: str

    def __str__(self) -> str:
        return self.path


Script = Annotated[InlineScript | ScriptFile, _Field(discriminator="kind")]


class RewriteFile(BaseModel):
    """``>>! path``: save the response, overwriting an existing file."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["rewrite"] = "rewrite"
    path: str


class NewFileIfExists(BaseModel):
    """``>> path``: save the response, creating a new file if the path exists."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["new-file"] = "new-file"
    path: str


SaveResponse = Annotated[RewriteFile | NewFileIfExists, _Field(discriminator="kind")]


# ################
# Implementation
# ################

_HTTP_VERSION = re.compile(r"HTTP/(\d+)\.(\d+)")

_SCHEME = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*://")

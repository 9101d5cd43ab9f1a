# Copyright 2026 restfile Contributors
# SPDX-License-Identifier: Apache-2.0

"""Document model for parsed request files (requests, bodies, diagnostics)."""

from restfile.model.diagnostics import Diagnostic, DiagnosticKind
from restfile.model.entities import (
    Comment,
    CommentKind,
    ParseFailure,
    PartialRequest,
    Request,
    RequestFile,
    RequestLine,
    RequestSettings,
    SettingsEntry,
)
from restfile.model.types import (
    DEFAULT_HTTP_VERSION,
    DEFAULT_METHOD,
    AbsoluteTarget,
    AsteriskTarget,
    Body,
    DataSource,
    Defaulted,
    DispositionField,
    Explicit,
    FileReference,
    Header,
    HttpVersion,
    InlineData,
    InlineScript,
    Multipart,
    MultipartBody,
    NewFileIfExists,
    NoBody,
    RawBody,
    RelativeTarget,
    RequestTarget,
    RewriteFile,
    SaveResponse,
    Script,
    ScriptFile,
    UrlEncodedBody,
    UrlEncodedParam,
    classify_target,
)

__all__ = [
    # Values
    "DEFAULT_HTTP_VERSION",
    "DEFAULT_METHOD",
    "Explicit",
    "Defaulted",
    "HttpVersion",
    "AbsoluteTarget",
    "RelativeTarget",
    "AsteriskTarget",
    "RequestTarget",
    "classify_target",
    "Header",
    "InlineData",
    "FileReference",
    "DataSource",
    "UrlEncodedParam",
    "DispositionField",
    "Multipart",
    "NoBody",
    "RawBody",
    "UrlEncodedBody",
    "MultipartBody",
    "Body",
    "InlineScript",
    "ScriptFile",
    "Script",
    "RewriteFile",
    "NewFileIfExists",
    "SaveResponse",
    # Entities
    "CommentKind",
    "Comment",
    "SettingsEntry",
    "RequestSettings",
    "RequestLine",
    "Request",
    "PartialRequest",
    "ParseFailure",
    "RequestFile",
    # Diagnostics
    "Diagnostic",
    "DiagnosticKind",
]

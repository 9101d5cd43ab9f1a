# Copyright 2026 restfile Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the restfile document model."""

import pydantic
import pytest

from restfile.model import (
    AbsoluteTarget,
    AsteriskTarget,
    Comment,
    CommentKind,
    Defaulted,
    Diagnostic,
    DiagnosticKind,
    Explicit,
    Header,
    HttpVersion,
    NoBody,
    PartialRequest,
    RelativeTarget,
    Request,
    RequestFile,
    RequestLine,
    RequestSettings,
    SettingsEntry,
    classify_target,
)

# ###############
# Value Types
# ###############


class TestHttpVersion:
    def test_parse(self) -> None:
        assert HttpVersion.parse("HTTP/2.0") == HttpVersion(major=2, minor=0)

    @pytest.mark.parametrize("text", ["HTTP/1", "http/1.1", "HTTP/1.1x", "1.1", ""])
    def test_parse_invalid(self, text: str) -> None:
        with pytest.raises(ValueError):
            HttpVersion.parse(text)

    def test_str(self) -> None:
        assert str(HttpVersion(major=1, minor=1)) == "HTTP/1.1"


class TestTargets:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("*", AsteriskTarget()),
            ("/api?x=1", RelativeTarget(uri="/api?x=1")),
            ("https://example.com", AbsoluteTarget(uri="https://example.com")),
            ("example.com:8080/x", AbsoluteTarget(uri="example.com:8080/x")),
            ("{{base}}/x", AbsoluteTarget(uri="{{base}}/x")),
        ],
    )
    def test_classify_target(self, text: str, expected: object) -> None:
        assert classify_target(text) == expected

    def test_has_scheme(self) -> None:
        assert AbsoluteTarget(uri="https://example.com").has_scheme()
        assert not AbsoluteTarget(uri="example.com").has_scheme()
        assert not RelativeTarget(uri="/x").has_scheme()
        assert not AsteriskTarget().has_scheme()

    def test_str(self) -> None:
        assert str(AsteriskTarget()) == "*"
        assert str(RelativeTarget(uri="/x")) == "/x"


def test_header_str() -> None:
    assert str(Header(key="Accept", value="*/*")) == "Accept: */*"


# ###############
# Request Line
# ###############


class TestRequestLine:
    def test_defaults(self) -> None:
        line = RequestLine(target=RelativeTarget(uri="/"))
        assert line.method == Defaulted()
        assert line.http_version == Defaulted()
        assert line.effective_method == "GET"
        assert line.effective_http_version == HttpVersion(major=1, minor=1)
        assert not line.is_custom_method

    def test_explicit_values(self) -> None:
        line = RequestLine(
            target=RelativeTarget(uri="/"),
            method=Explicit[str](value="GET"),
            http_version=Explicit[HttpVersion](value=HttpVersion(major=1, minor=1)),
        )
        assert line.effective_method == "GET"
        # Explicitly written values stay distinguishable from defaults of the same value.
        assert line != RequestLine(target=RelativeTarget(uri="/"))

    def test_is_frozen(self) -> None:
        line = RequestLine(target=RelativeTarget(uri="/"))
        with pytest.raises(pydantic.ValidationError):
            line.target = RelativeTarget(uri="/other")  # type: ignore[misc]


# ###############
# Settings
# ###############


class TestRequestSettings:
    def test_defaults_are_unset(self) -> None:
        settings = RequestSettings()
        assert settings.no_cookie_jar is None
        assert settings.no_redirect is None
        assert settings.no_log is None

    def test_with_entry(self) -> None:
        settings = RequestSettings().with_entry(SettingsEntry.NO_LOG).with_entry(SettingsEntry.NO_COOKIE_JAR)
        assert settings == RequestSettings(no_log=True, no_cookie_jar=True)


# ###############
# Requests
# ###############


class TestRequest:
    def test_comment_text(self) -> None:
        request = Request(
            request_line=RequestLine(target=RelativeTarget(uri="/")),
            comments=[
                Comment(value="first", kind=CommentKind.SINGLE_TAG),
                Comment(value="second", kind=CommentKind.DOUBLE_SLASH),
            ],
        )
        assert request.comment_text() == "first\nsecond"

    def test_comment_text_without_comments(self) -> None:
        assert Request(request_line=RequestLine(target=RelativeTarget(uri="/"))).comment_text() is None

    def test_header_values(self) -> None:
        request = Request(
            request_line=RequestLine(target=RelativeTarget(uri="/")),
            headers=[
                Header(key="Cookie", value="a"),
                Header(key="Accept", value="*/*"),
                Header(key="cookie", value="b"),
            ],
        )
        assert request.header_values("COOKIE") == ["a", "b"]


class TestPartialRequest:
    def test_build_requires_request_line(self) -> None:
        with pytest.raises(ValueError):
            PartialRequest(name="x").build()

    def test_build_fills_defaults(self) -> None:
        partial = PartialRequest(request_line=RequestLine(target=AsteriskTarget()))
        request = partial.build()
        assert request.headers == []
        assert request.body == NoBody()
        assert request.warnings == []

    def test_build_copies_warnings(self) -> None:
        warning = Diagnostic(kind=DiagnosticKind.INVALID_HTTP_VERSION, details="HTTP/x")
        request = PartialRequest(request_line=RequestLine(target=AsteriskTarget())).build(warnings=[warning])
        assert request.warnings == [warning]

    def test_partial_is_mutable(self) -> None:
        partial = PartialRequest()
        partial.name = "late"
        assert partial.name == "late"


# ###############
# Diagnostics
# ###############


class TestDiagnostics:
    @pytest.mark.parametrize(
        "kind",
        [
            DiagnosticKind.TOO_MANY_ELEMENTS_ON_REQUEST_LINE,
            DiagnosticKind.INVALID_HTTP_VERSION,
            DiagnosticKind.MISSING_MULTIPART_HEADER_BOUNDARY_DEFINITION,
            DiagnosticKind.INVALID_MULTIPART_BOUNDARY_LENGTH,
            DiagnosticKind.INVALID_MULTIPART_BOUNDARY_CHARACTER,
            DiagnosticKind.SINGLE_MULTIPART_NAME_MISSING,
        ],
    )
    def test_non_fatal_kinds(self, kind: DiagnosticKind) -> None:
        assert not kind.is_fatal

    def test_other_kinds_are_fatal(self) -> None:
        assert DiagnosticKind.INVALID_HEADER_FIELD.is_fatal
        assert DiagnosticKind.MISSING_MULTIPART_BOUNDARY.is_fatal

    def test_every_kind_has_a_message(self) -> None:
        for kind in DiagnosticKind:
            assert kind.message

    def test_message_with_details(self) -> None:
        diagnostic = Diagnostic(kind=DiagnosticKind.INVALID_HEADER_FIELD, details="oops")
        assert diagnostic.message == "Invalid header field, expected 'key: value': oops"
        assert str(diagnostic) == diagnostic.message

    def test_message_without_details(self) -> None:
        diagnostic = Diagnostic(kind=DiagnosticKind.MISSING_REQUEST_TARGET_LINE)
        assert diagnostic.message == DiagnosticKind.MISSING_REQUEST_TARGET_LINE.message


# ###############
# Request Files
# ###############


class TestRequestFile:
    def test_empty(self) -> None:
        result = RequestFile()
        assert not result.has_errors
        assert result.diagnostics == []
        assert result.path is None
        assert result.extension is None

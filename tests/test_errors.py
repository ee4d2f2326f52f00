"""Unit tests for xmlquery.errors -- error codes, model and exceptions."""

from __future__ import annotations

import pytest

from xmlquery.errors import (
    ErrorCode,
    InvalidPathExpressionError,
    InvalidTagNameError,
    MalformedDocumentError,
    QueryError,
    RepresentationError,
    UnsupportedNamespaceSelectionError,
    XMLQueryException,
)


class TestErrorCodeValues:
    """All ErrorCode values should equal their names."""

    def test_all_values_equal_names(self):
        for code in ErrorCode:
            assert code.value == code.name

    def test_all_codes_are_fatal(self):
        for code in ErrorCode:
            assert code.name.startswith("E_")

    def test_members_are_strings(self):
        for code in ErrorCode:
            assert isinstance(code, str)


class TestQueryError:
    def test_location_fields_default_to_none(self):
        err = QueryError(code=ErrorCode.E_MALFORMED_DOCUMENT, message="bad")
        assert err.line is None
        assert err.column is None
        assert err.fragment is None
        assert err.recoverable is False

    def test_code_accepts_string_value(self):
        err = QueryError(code="E_INVALID_TAG_NAME", message="bad")
        assert err.code is ErrorCode.E_INVALID_TAG_NAME


class TestExceptions:
    @pytest.mark.parametrize(
        ("exc_type", "code"),
        [
            (MalformedDocumentError, ErrorCode.E_MALFORMED_DOCUMENT),
            (InvalidTagNameError, ErrorCode.E_INVALID_TAG_NAME),
            (InvalidPathExpressionError, ErrorCode.E_INVALID_PATH_EXPRESSION),
            (UnsupportedNamespaceSelectionError, ErrorCode.E_UNSUPPORTED_NAMESPACE_SELECTION),
            (RepresentationError, ErrorCode.E_REPRESENTATION_MISMATCH),
        ],
    )
    def test_subclass_sets_code(self, exc_type, code):
        exc = exc_type("boom")
        assert isinstance(exc, XMLQueryException)
        assert exc.code is code
        assert exc.error.code is code

    def test_properties_delegate_to_model(self):
        exc = MalformedDocumentError(
            "mismatch",
            stage="parse",
            classification="tag_name_mismatch",
            fragment="<x>this</xml>",
            line=1,
            column=14,
        )
        assert str(exc) == "mismatch"
        assert exc.message == "mismatch"
        assert exc.stage == "parse"
        assert exc.classification == "tag_name_mismatch"
        assert exc.fragment == "<x>this</xml>"
        assert exc.line == 1
        assert exc.column == 14
        assert exc.recoverable is False

    def test_raisable(self):
        with pytest.raises(XMLQueryException):
            raise InvalidTagNameError("bad tag", fragment="1bag")

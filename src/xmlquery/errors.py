"""Error codes, structured error model and raisable exceptions for xmlquery.

``ErrorCode`` lists every failure the query layer can signal.  ``QueryError``
is the Pydantic data model describing one failure; ``XMLQueryException`` and
its subclasses wrap it so failures can be raised and caught.

None of these failures are transient.  Malformed documents, invalid tag
names and invalid path expressions are caller-input problems and unwind the
whole call.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class ErrorCode(str, Enum):
    """Error codes for the query layer.

    Values equal their names so they are stable strings suitable for
    metrics and alerting.  ``E_`` prefix = fatal.
    """

    # Parse
    E_MALFORMED_DOCUMENT = "E_MALFORMED_DOCUMENT"

    # Query
    E_INVALID_TAG_NAME = "E_INVALID_TAG_NAME"
    E_INVALID_PATH_EXPRESSION = "E_INVALID_PATH_EXPRESSION"

    # Extraction
    E_UNSUPPORTED_NAMESPACE_SELECTION = "E_UNSUPPORTED_NAMESPACE_SELECTION"

    # Tag normalization
    E_REPRESENTATION_MISMATCH = "E_REPRESENTATION_MISMATCH"


class QueryError(BaseModel):
    """Structured error with code, message, and source location.

    ``classification`` is the engine's symbolic failure class (for example
    ``tag_name_mismatch``), ``fragment`` the offending token or source line.
    """

    code: ErrorCode
    message: str
    stage: str | None = None
    recoverable: bool = False
    classification: str | None = None
    fragment: str | None = None
    line: int | None = None
    column: int | None = None


class XMLQueryException(Exception):
    """Raisable exception wrapping a ``QueryError`` data model.

    Carries the structured ``QueryError`` as the ``.error`` attribute.
    Subclasses fix the ``code``; pass the remaining ``QueryError`` fields
    as keyword arguments.
    """

    error_code: ErrorCode

    def __init__(self, message: str, **kwargs: object) -> None:
        kwargs.setdefault("code", self.error_code)
        self.error = QueryError(message=message, **kwargs)  # type: ignore[arg-type]
        super().__init__(self.error.message)

    @property
    def code(self) -> ErrorCode:
        return self.error.code

    @property
    def message(self) -> str:
        return self.error.message

    @property
    def stage(self) -> str | None:
        return self.error.stage

    @property
    def recoverable(self) -> bool:
        return self.error.recoverable

    @property
    def classification(self) -> str | None:
        return self.error.classification

    @property
    def fragment(self) -> str | None:
        return self.error.fragment

    @property
    def line(self) -> int | None:
        return self.error.line

    @property
    def column(self) -> int | None:
        return self.error.column


class MalformedDocumentError(XMLQueryException):
    """The parser rejected the document as ill-formed or DTD-invalid."""

    error_code = ErrorCode.E_MALFORMED_DOCUMENT


class InvalidTagNameError(XMLQueryException):
    """A bare tag is not usable as an element name."""

    error_code = ErrorCode.E_INVALID_TAG_NAME


class InvalidPathExpressionError(XMLQueryException):
    """The path engine rejected an expression."""

    error_code = ErrorCode.E_INVALID_PATH_EXPRESSION


class UnsupportedNamespaceSelectionError(XMLQueryException):
    """A query selected namespace nodes where values were expected."""

    error_code = ErrorCode.E_UNSUPPORTED_NAMESPACE_SELECTION


class RepresentationError(XMLQueryException):
    """A tag sequence mixes representations, or a tag has no representation."""

    error_code = ErrorCode.E_REPRESENTATION_MISMATCH

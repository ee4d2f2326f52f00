"""Collaborator protocols for xmlquery.

Defines the two structural-subtyping interfaces the query layer delegates
to: document parsing and path evaluation.  Both protocols are
``@runtime_checkable`` so callers can optionally verify conformance with
``isinstance`` checks.  :mod:`xmlquery.engine` provides the lxml-backed
implementations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from xmlquery.models import Element, Node, ParseDiagnostic


@runtime_checkable
class DocumentParser(Protocol):
    """Interface for XML parsers."""

    def parse_document(self, raw: bytes) -> tuple[Element, list[ParseDiagnostic]]:
        """Parse *raw* into its root element plus non-fatal diagnostics.

        Must raise ``MalformedDocumentError`` on ill-formed or DTD-invalid
        input.
        """
        ...


@runtime_checkable
class PathEvaluator(Protocol):
    """Interface for path-query engines."""

    def evaluate_path(self, node: Element, expression: bytes) -> list[Node]:
        """Return the nodes matching *expression* in document order.

        Must support descendant matching (including ``//*[name()='tag']``),
        root-anchored child paths and ``text()`` selection.  Must raise
        ``InvalidPathExpressionError`` on malformed expressions.
        """
        ...

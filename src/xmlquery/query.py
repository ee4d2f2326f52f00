"""Query evaluation over parsed documents.

:class:`QueryEvaluator` sits between the public operations and the path
engine.  A bare tag is checked against the parser (wrapped as a synthetic
``<tag></tag>`` document) and expanded to an unanchored search for elements
with that qualified name; a full path expression is handed to the engine
verbatim.
"""

from __future__ import annotations

import logging

from xmlquery.errors import InvalidTagNameError, MalformedDocumentError
from xmlquery.models import Element, Node
from xmlquery.protocols import DocumentParser, PathEvaluator

logger = logging.getLogger("xmlquery")

# Characters that make an expression a path rather than a bare tag.
# A single ':' between a prefix and a local name is allowed.
PATH_METACHARACTERS = frozenset(b"/[]()@*|=!<>$,'\" \t\r\n")

# Bound to a tag's prefix in the synthetic document so prefixed tags parse.
_TAG_CHECK_NAMESPACE = b"urn:xmlquery:tag-check"


def is_bare_tag(expression: bytes) -> bool:
    """Return True if *expression* contains no path syntax."""
    if not expression or any(byte in PATH_METACHARACTERS for byte in expression):
        return False
    prefix, colon, local = expression.partition(b":")
    return not colon or (bool(prefix) and bool(local) and b":" not in local)


def expand_tag(tag: bytes) -> bytes:
    """Expand a bare tag into a search for the element at any depth.

    Elements are matched on their qualified name as written in the
    document, so ``bag`` also finds ``<bag>`` inside a default namespace
    and ``ns:bag`` finds ``<ns:bag>`` whatever ``ns`` is bound to.
    """
    return b"//*[name()='" + tag + b"']"


class QueryEvaluator:
    """Resolve tags and path expressions to document nodes.

    Parameters
    ----------
    parser:
        Parser used for the synthetic tag check.
    path_evaluator:
        Engine the expanded or verbatim expressions are delegated to.
    """

    def __init__(self, parser: DocumentParser, path_evaluator: PathEvaluator) -> None:
        self._parser = parser
        self._path_evaluator = path_evaluator

    def evaluate(self, document: Element, expression: bytes) -> list[Node]:
        """Dispatch on the expression form.

        Bare tags are validated and expanded; anything else is treated as
        a full path expression.
        """
        if is_bare_tag(expression):
            return self.evaluate_tag(document, expression)
        return self.evaluate_path(document, expression)

    def evaluate_tag(self, document: Element, tag: bytes) -> list[Node]:
        """Validate *tag* and search the whole document for it.

        Raises
        ------
        InvalidTagNameError
            If *tag* is not usable as an element name.
        """
        self.validate_tag(tag)
        return self.evaluate_path(document, expand_tag(tag))

    def evaluate_path(self, document: Element, expression: bytes) -> list[Node]:
        """Run *expression* through the path engine unmodified."""
        nodes = self._path_evaluator.evaluate_path(document, expression)
        logger.debug(
            "xmlquery | stage=query | expression=%r | matches=%d",
            expression,
            len(nodes),
        )
        return nodes

    def validate_tag(self, tag: bytes) -> None:
        """Check that *tag* parses as the name of a synthetic element.

        A prefixed tag gets a placeholder binding for its prefix, since the
        tag is checked apart from the document that declares it.

        Raises
        ------
        InvalidTagNameError
            Carrying the offending tag and the position of the failure
            inside the synthetic document.
        """
        prefix, colon, _ = tag.partition(b":")
        declaration = b""
        if colon and prefix != b"xml":
            declaration = b" xmlns:" + prefix + b'="' + _TAG_CHECK_NAMESPACE + b'"'
        synthetic = b"<" + tag + declaration + b"></" + tag + b">"

        try:
            self._parser.parse_document(synthetic)
        except MalformedDocumentError as exc:
            text = tag.decode("utf-8", errors="replace")
            logger.debug(
                "xmlquery | stage=query | tag_rejected | class=%s",
                exc.classification,
            )
            raise InvalidTagNameError(
                f"Invalid tag name {text!r}: {exc.message}",
                stage="query",
                classification=exc.classification,
                fragment=text,
                line=exc.line,
                column=exc.column,
            ) from exc

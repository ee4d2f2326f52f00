"""Public query operations.

:class:`XMLQuery` composes a :class:`DocumentParser` and a
:class:`PathEvaluator` (lxml by default) and exposes the four operations:

1. ``parse`` -- raw document text to a node tree.
2. ``get`` -- bare-tag lookup; absence and "found without text" both
   yield ``[]``.
3. ``xpath`` -- full path expression; ``None`` when nothing matched, ``[]``
   when the matches hold no direct text.
4. ``to_map`` -- nested projection over a list of tags.

The module-level functions delegate to a shared default instance.  A value
returned by any operation uses the representation (``bytes``, ``str`` or
:class:`~xmlquery.tags.Symbol`) of the tag or expression passed in.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Union

from xmlquery.config import XMLQueryConfig
from xmlquery.engine import LxmlDocumentParser, LxmlPathEvaluator
from xmlquery.errors import MalformedDocumentError
from xmlquery.extractor import extract_values, extract_values_or_none
from xmlquery.models import Element, NodeKind, Text
from xmlquery.projector import MapProjector
from xmlquery.protocols import DocumentParser, PathEvaluator
from xmlquery.query import QueryEvaluator
from xmlquery.tags import TagLike, normalize, to_canonical

logger = logging.getLogger("xmlquery")

XMLSource = Union[bytes, str, Element]


class XMLQuery:
    """Entry point for parsing, lookups and projections.

    Parameters
    ----------
    parser:
        Document parser.  Uses :class:`LxmlDocumentParser` when *None*.
    path_evaluator:
        Path engine.  Uses :class:`LxmlPathEvaluator` when *None*.
    config:
        Configuration for the default parser.  Uses defaults when *None*.
    """

    def __init__(
        self,
        parser: DocumentParser | None = None,
        path_evaluator: PathEvaluator | None = None,
        config: XMLQueryConfig | None = None,
    ) -> None:
        self._config = config or XMLQueryConfig()
        self._parser = parser or LxmlDocumentParser(self._config)
        self._evaluator = QueryEvaluator(
            self._parser, path_evaluator or LxmlPathEvaluator()
        )
        self._projector = MapProjector(self._evaluator)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def parse(self, xml: XMLSource) -> Element:
        """Parse *xml* into its root element.

        An already-parsed element is returned as is.

        Raises
        ------
        MalformedDocumentError
            If the document is ill-formed or fails DTD validation.
        """
        if isinstance(xml, Element):
            return xml
        try:
            element, _ = self._parser.parse_document(to_canonical(xml))
        except MalformedDocumentError as exc:
            self._log_parse_failure(exc)
            raise
        return element

    def get(self, xml: XMLSource, tag: TagLike) -> list[TagLike]:
        """Return the text values of every element named *tag*.

        Raises
        ------
        InvalidTagNameError
            If *tag* is not a valid element name (path syntax included).
        """
        normalized = normalize(tag)
        if normalized.is_sequence:
            raise TypeError("get() expects a single tag, not a sequence of tags")

        document = self.parse(xml)
        nodes = self._evaluator.evaluate_tag(document, normalized.canonical[0])
        return extract_values(nodes, normalized.representation)

    def xpath(self, xml: XMLSource, expression: TagLike) -> list[TagLike] | None:
        """Return the values selected by *expression*, or None if nothing matched.

        Raises
        ------
        InvalidPathExpressionError
            If the engine rejects *expression*.
        UnsupportedNamespaceSelectionError
            If *expression* selects namespace nodes.
        """
        normalized = normalize(expression)
        if normalized.is_sequence:
            raise TypeError("xpath() expects a single expression")

        document = self.parse(xml)
        nodes = self._evaluator.evaluate_path(document, normalized.canonical[0])
        return extract_values_or_none(nodes, normalized.representation)

    def to_map(
        self, xml: XMLSource, tags: TagLike | Sequence[TagLike]
    ) -> dict[TagLike, Any]:
        """Project the document onto *tags*; see :class:`MapProjector`."""
        return self._projector.project(self.parse(xml), tags)

    def _log_parse_failure(self, exc: MalformedDocumentError) -> None:
        if self._config.log_sample_data:
            logger.error(
                "xmlquery | stage=parse | class=%s | line=%s | column=%s | fragment=%r",
                exc.classification,
                exc.line,
                exc.column,
                exc.fragment,
            )
        else:
            logger.error(
                "xmlquery | stage=parse | class=%s | line=%s | column=%s",
                exc.classification,
                exc.line,
                exc.column,
            )


def content(element: Element) -> Text:
    """Return the single text node held by *element*.

    Raises
    ------
    ValueError
        If *element* does not contain exactly one node, or that node is
        not text.
    """
    if len(element.content) != 1 or element.content[0].kind != NodeKind.TEXT:
        raise ValueError(
            f"Element {element.name!r} does not hold exactly one text node "
            f"({len(element.content)} content nodes)"
        )
    return element.content[0]


_default = XMLQuery()


def parse(xml: XMLSource) -> Element:
    """Parse *xml* with the default lxml engine."""
    return _default.parse(xml)


def get(xml: XMLSource, tag: TagLike) -> list[TagLike]:
    return _default.get(xml, tag)


def xpath(xml: XMLSource, expression: TagLike) -> list[TagLike] | None:
    return _default.xpath(xml, expression)


def to_map(xml: XMLSource, tags: TagLike | Sequence[TagLike]) -> dict[TagLike, Any]:
    return _default.to_map(xml, tags)

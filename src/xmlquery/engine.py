"""lxml-backed document parser and path evaluator.

Provides the default implementations of the :class:`DocumentParser` and
:class:`PathEvaluator` protocols:

1. :class:`LxmlDocumentParser` checks well-formedness with libxml2,
   re-parses with DTD validation when the document carries a DTD, and
   converts the lxml tree into immutable :mod:`xmlquery.models` nodes.
2. :class:`LxmlPathEvaluator` rebuilds an lxml tree from a node model,
   evaluates an XPath 1.0 expression on it, and converts the results back.
"""

from __future__ import annotations

import logging
import math
import os

from lxml import etree

from xmlquery.config import XMLQueryConfig
from xmlquery.errors import InvalidPathExpressionError, MalformedDocumentError
from xmlquery.models import Element, Namespace, Node, NodeKind, ParseDiagnostic, Text

logger = logging.getLogger("xmlquery")

_XML_LANG = "{http://www.w3.org/XML/1998/namespace}lang"
_FRAGMENT_WIDTH = 120


class LxmlDocumentParser:
    """Parse raw XML bytes into a node tree using lxml.

    Parameters
    ----------
    config:
        Parser options.  Uses defaults when *None*.
    """

    def __init__(self, config: XMLQueryConfig | None = None) -> None:
        self._config = config or XMLQueryConfig()

    def parse_document(self, raw: bytes) -> tuple[Element, list[ParseDiagnostic]]:
        """Parse *raw* and return the root element plus diagnostics.

        Raises
        ------
        MalformedDocumentError
            If *raw* is empty, ill-formed, or fails DTD validation.
        """
        if not raw.strip():
            raise self._fail(
                "Document is empty",
                classification="document_empty",
                fragment="",
                line=1,
                column=1,
            )

        base = self._config.base_path or os.getcwd()
        parser = self._make_parser(dtd_validation=False)
        root = self._parse(raw, parser, base)

        if self._config.validate_dtd and _declares_dtd(root.getroottree().docinfo):
            parser = self._make_parser(dtd_validation=True)
            root = self._parse(raw, parser, base)

        diagnostics = [
            ParseDiagnostic(
                level=entry.level_name.lower(),
                classification=_classify(entry.type_name),
                message=entry.message,
                line=entry.line,
                column=entry.column,
            )
            for entry in parser.error_log
        ]
        element = element_from_lxml(root, position=1, language="", default_base=".")
        logger.debug(
            "xmlquery | stage=parse | root=%s | diagnostics=%d",
            element.name,
            len(diagnostics),
        )
        return element, diagnostics

    def _make_parser(self, dtd_validation: bool) -> etree.XMLParser:
        config = self._config
        return etree.XMLParser(
            remove_blank_text=config.remove_blank_text,
            resolve_entities=config.resolve_entities,
            no_network=config.no_network,
            huge_tree=config.huge_tree,
            load_dtd=dtd_validation,
            dtd_validation=dtd_validation,
        )

    def _parse(self, raw: bytes, parser: etree.XMLParser, base: str) -> etree._Element:
        try:
            return etree.fromstring(raw, parser, base_url=base)
        except etree.XMLSyntaxError as exc:
            entry = exc.error_log.last_error if exc.error_log else None
            line, column = exc.position
            raise self._fail(
                exc.msg or str(exc),
                classification=_classify(entry.type_name) if entry else "syntax_error",
                fragment=_source_line(raw, line),
                line=line,
                column=column,
            ) from exc

    def _fail(
        self,
        message: str,
        classification: str,
        fragment: str,
        line: int | None,
        column: int | None,
    ) -> MalformedDocumentError:
        if self._config.log_sample_data:
            logger.debug(
                "xmlquery | stage=parse | class=%s | line=%s | column=%s | fragment=%r",
                classification,
                line,
                column,
                fragment,
            )
        else:
            logger.debug(
                "xmlquery | stage=parse | class=%s | line=%s | column=%s",
                classification,
                line,
                column,
            )
        return MalformedDocumentError(
            message,
            stage="parse",
            classification=classification,
            fragment=fragment,
            line=line,
            column=column,
        )


class LxmlPathEvaluator:
    """Evaluate XPath 1.0 expressions against a node tree using lxml.

    Prefixes declared anywhere in the tree are registered with the XPath
    context, so ``//ns:item`` matches the element written as ``ns:item``.
    """

    def evaluate_path(self, node: Element, expression: bytes) -> list[Node]:
        """Return the nodes matching *expression* in document order.

        Raises
        ------
        InvalidPathExpressionError
            If the expression is not valid UTF-8 or lxml rejects it.
        """
        try:
            text = expression.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidPathExpressionError(
                f"Path expression is not valid UTF-8: {exc}",
                stage="query",
                classification="invalid_encoding",
                fragment=repr(expression),
            ) from exc

        tree = etree.ElementTree(element_to_lxml(node))
        try:
            result = tree.xpath(
                text, namespaces=_prefix_map(node), smart_strings=False
            )
        except etree.XPathError as exc:
            raise InvalidPathExpressionError(
                f"Invalid path expression {text!r}: {exc}",
                stage="query",
                classification=str(exc).strip().lower().replace(" ", "_"),
                fragment=text,
            ) from exc

        return _nodes_from_result(result, node.xml_base)


# ----------------------------------------------------------------------
# lxml <-> model conversion
# ----------------------------------------------------------------------


def element_from_lxml(
    el: etree._Element,
    position: int,
    language: str,
    default_base: str,
) -> Element:
    """Convert an lxml element and its subtree into an :class:`Element`.

    Comments, processing instructions and entity references are dropped;
    the text around them is kept in document order.
    """
    language = el.get(_XML_LANG, language)
    parent = el.getparent()
    inherited = parent.nsmap if parent is not None else {}
    declared = {
        prefix or "": uri
        for prefix, uri in el.nsmap.items()
        if inherited.get(prefix) != uri
    }

    content: list[Node] = []
    if el.text:
        content.append(Text(value=el.text))
    child_position = 0
    for child in el:
        if isinstance(child.tag, str):
            child_position += 1
            content.append(
                element_from_lxml(child, child_position, language, default_base)
            )
        if child.tail:
            content.append(Text(value=child.tail))

    qname = etree.QName(el)
    return Element(
        name=f"{el.prefix}:{qname.localname}" if el.prefix else qname.localname,
        namespace_uri=qname.namespace,
        nsmap=declared,
        attributes=dict(el.attrib),
        content=content,
        position=position,
        language=language,
        xml_base=_normalize_base(el.base) if el.base else default_base,
    )


def element_to_lxml(
    element: Element, parent: etree._Element | None = None
) -> etree._Element:
    """Build an lxml element (attached to *parent* when given) from *element*."""
    nsmap = {prefix or None: uri for prefix, uri in element.nsmap.items()}
    if element.namespace_uri:
        tag = etree.QName(element.namespace_uri, element.local_name).text
    else:
        tag = element.local_name

    if parent is None:
        el = etree.Element(tag, nsmap=nsmap or None)
    else:
        el = etree.SubElement(parent, tag, nsmap=nsmap or None)
    for key, value in element.attributes.items():
        el.set(key, value)

    last: etree._Element | None = None
    for node in element.content:
        if node.kind == NodeKind.ELEMENT:
            last = element_to_lxml(node, el)
        elif node.kind == NodeKind.TEXT:
            if last is None:
                el.text = (el.text or "") + node.value
            else:
                last.tail = (last.tail or "") + node.value
    return el


def _nodes_from_result(result: object, default_base: str) -> list[Node]:
    """Convert an lxml XPath result into model nodes."""
    if isinstance(result, bool):
        return [Text(value="true" if result else "false")]
    if isinstance(result, float):
        return [Text(value=_format_number(result))]
    if isinstance(result, str):
        return [Text(value=result)]

    nodes: list[Node] = []
    for item in result:  # type: ignore[attr-defined]
        if isinstance(item, etree._Element):
            # comments and processing instructions are not data
            if isinstance(item.tag, str):
                nodes.append(
                    element_from_lxml(
                        item,
                        position=_sibling_position(item),
                        language=_inherited_language(item),
                        default_base=default_base,
                    )
                )
        elif isinstance(item, tuple):
            prefix, uri = item
            nodes.append(Namespace(prefix=prefix, uri=uri))
        else:
            nodes.append(Text(value=str(item)))
    return nodes


def _prefix_map(element: Element) -> dict[str, str]:
    """Collect prefix declarations in the tree; the first declaration wins."""
    prefixes: dict[str, str] = {}
    stack = [element]
    while stack:
        current = stack.pop()
        for prefix, uri in current.nsmap.items():
            if prefix:
                prefixes.setdefault(prefix, uri)
        stack.extend(reversed(current.children()))
    return prefixes


def _declares_dtd(docinfo: etree.DocInfo) -> bool:
    """True when the DOCTYPE declares elements or references an external DTD.

    A bare ``<!DOCTYPE root>``, or an internal subset holding only entity
    declarations, has no content model to validate against.
    """
    if docinfo.system_url:
        return True
    dtd = docinfo.internalDTD
    return dtd is not None and any(True for _ in dtd.iterelements())


def _sibling_position(el: etree._Element) -> int:
    return 1 + sum(
        1 for sibling in el.itersiblings(preceding=True) if isinstance(sibling.tag, str)
    )


def _inherited_language(el: etree._Element) -> str:
    for ancestor in el.iterancestors():
        language = ancestor.get(_XML_LANG)
        if language is not None:
            return language
    return ""


def _normalize_base(base: str) -> str:
    """Replace a base path equal to the working directory with ``"."``."""
    cwd = os.getcwd()
    if base.rstrip("/") == cwd.rstrip("/"):
        return "."
    return base


def _classify(type_name: str) -> str:
    """``ERR_TAG_NAME_MISMATCH`` -> ``tag_name_mismatch``."""
    return type_name.lower().removeprefix("err_")


def _format_number(value: float) -> str:
    """Render an XPath number the way XPath ``string()`` does."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer():
        return str(int(value))
    return repr(value)


def _source_line(raw: bytes, line: int | None) -> str:
    lines = raw.splitlines()
    if not line or line > len(lines):
        return ""
    return lines[line - 1].decode("utf-8", errors="replace").strip()[:_FRAGMENT_WIDTH]

"""Shared test fixtures for xmlquery tests."""

from __future__ import annotations

import re
from pathlib import Path

import pytest

from xmlquery.api import XMLQuery
from xmlquery.config import XMLQueryConfig
from xmlquery.errors import InvalidPathExpressionError, MalformedDocumentError
from xmlquery.models import Element, Node, ParseDiagnostic, Text

# ── In-memory collaborators satisfying the protocols ─────────────────

_NAME = re.compile(rb"[A-Za-z_][A-Za-z0-9_.-]*")
_SYNTHETIC = re.compile(rb"<(.*)></(.*)>", re.DOTALL)
_DESCENDANT = re.compile(
    rb"//(?:\*\[name\(\)='([A-Za-z_][A-Za-z0-9_.:-]*)'\]|([A-Za-z_][A-Za-z0-9_.-]*))"
    rb"(/text\(\))?"
)


class FakeParser:
    """Parser returning pre-built trees for known documents.

    Synthetic ``<tag></tag>`` documents are accepted when the tag is a
    simple name.
    """

    def __init__(self, documents: dict[bytes, Element] | None = None) -> None:
        self.documents = documents or {}
        self.calls: list[bytes] = []

    def parse_document(self, raw: bytes) -> tuple[Element, list[ParseDiagnostic]]:
        self.calls.append(raw)
        if raw in self.documents:
            return self.documents[raw], []
        match = _SYNTHETIC.fullmatch(raw)
        if match and match.group(1) == match.group(2) and _NAME.fullmatch(match.group(1)):
            return Element(name=match.group(1).decode()), []
        raise MalformedDocumentError(
            "fake parser rejected document",
            stage="parse",
            classification="invalid_name",
            fragment=raw.decode("utf-8", errors="replace"),
            line=1,
            column=2,
        )


class FakePathEvaluator:
    """Evaluator supporting descendant searches by name, optionally ``/text()``.

    Accepts ``//name``, ``//*[name()='name']`` and either followed by
    ``/text()``.
    """

    def __init__(self) -> None:
        self.expressions: list[bytes] = []

    def evaluate_path(self, node: Element, expression: bytes) -> list[Node]:
        self.expressions.append(expression)
        match = _DESCENDANT.fullmatch(expression)
        if not match:
            raise InvalidPathExpressionError(
                f"unsupported expression {expression!r}", stage="query"
            )
        name = (match.group(1) or match.group(2)).decode()
        elements = [el for el in _walk(node) if el.name == name]
        if match.group(3):
            return [child for el in elements for child in el.content if child.kind == "text"]
        return elements


def _walk(element: Element):
    yield element
    for child in element.children():
        yield from _walk(child)


# ── Fixtures ─────────────────────────────────────────────────────────


@pytest.fixture
def default_config() -> XMLQueryConfig:
    """Return a default XMLQueryConfig."""
    return XMLQueryConfig()


@pytest.fixture
def query() -> XMLQuery:
    """Return an XMLQuery backed by the lxml engine."""
    return XMLQuery()


@pytest.fixture
def fun_tree() -> Element:
    """Model of ``<fun><bag>cat</bag><house>dog</house></fun>`` built by hand."""
    return Element(
        name="fun",
        content=[
            Element(name="bag", position=1, content=[Text(value="cat")]),
            Element(name="house", position=2, content=[Text(value="dog")]),
        ],
    )


@pytest.fixture
def fake_parser(fun_tree: Element) -> FakeParser:
    return FakeParser({b"<fun/>": fun_tree})


@pytest.fixture
def fake_evaluator() -> FakePathEvaluator:
    return FakePathEvaluator()


@pytest.fixture
def fake_query(fake_parser: FakeParser, fake_evaluator: FakePathEvaluator) -> XMLQuery:
    """Return an XMLQuery wired to the in-memory collaborators."""
    return XMLQuery(parser=fake_parser, path_evaluator=fake_evaluator)


@pytest.fixture
def sample_xml_nested() -> str:
    """Pretty-printed XML with a container nested in a container."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<library>
    <name>Central</name>
    <book>
        <title>Dune</title>
        <author>Herbert</author>
    </book>
</library>"""


@pytest.fixture
def sample_xml_namespaced() -> str:
    """XML with namespace declarations."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<root xmlns:ns="http://example.com/ns" xmlns="http://example.com/default">
    <ns:item>Namespaced item</ns:item>
</root>"""


@pytest.fixture
def tmp_config_file(tmp_path: Path):
    """Factory fixture writing a config file and returning its path."""

    def _write(content: str, filename: str) -> str:
        file_path = tmp_path / filename
        file_path.write_text(content, encoding="utf-8")
        return str(file_path)

    return _write

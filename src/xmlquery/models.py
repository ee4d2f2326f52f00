"""Document node models for the query layer.

A parsed document is a tree of frozen Pydantic models forming a closed,
discriminated union on the ``kind`` field:

- :class:`Element` -- a named element with ordered ``content``.
- :class:`Text` -- a character-data leaf.
- :class:`Namespace` -- a namespace binding selected through the namespace
  axis; it carries no extractable value.

Every variant implements ``extract()`` so callers never dispatch on the node
kind themselves.  Nodes are never mutated after parsing; queries build new
output values.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from xmlquery.errors import UnsupportedNamespaceSelectionError


class NodeKind(str, Enum):
    """Discriminator values of the node variants."""

    ELEMENT = "element"
    TEXT = "text"
    NAMESPACE = "namespace"


class TextType(str, Enum):
    """Origin of a text node: plain character data or a CDATA section."""

    TEXT = "text"
    CDATA = "cdata"


class Text(BaseModel):
    """Character data inside an element."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    value: str
    type: TextType = TextType.TEXT

    def extract(self) -> list[str]:
        """A text node is already a leaf."""
        return [self.value]


class Namespace(BaseModel):
    """A namespace binding (``prefix`` is ``None`` for the default namespace)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["namespace"] = "namespace"
    prefix: str | None = None
    uri: str

    def extract(self) -> list[str]:
        raise UnsupportedNamespaceSelectionError(
            f"Query selected namespace node {self.prefix or '(default)'}={self.uri}; "
            "namespace nodes carry no value",
            stage="extract",
            fragment=self.uri,
        )


Node = Annotated[Union["Element", Text, Namespace], Field(discriminator="kind")]


class Element(BaseModel):
    """An XML element.

    ``name`` is the qualified name as written in the source (``prefix:local``
    when prefixed).  ``nsmap`` holds only the namespace declarations made on
    this element, with the default namespace keyed by ``""``.  ``position``
    is the 1-based index among sibling elements.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["element"] = "element"
    name: str
    namespace_uri: str | None = None
    nsmap: dict[str, str] = {}
    attributes: dict[str, str] = {}
    content: list[Node] = []
    position: int = 1
    language: str = ""
    xml_base: str = "."

    @property
    def local_name(self) -> str:
        return self.name.rpartition(":")[2]

    @property
    def prefix(self) -> str | None:
        prefix, sep, _ = self.name.rpartition(":")
        return prefix if sep else None

    def children(self) -> list[Element]:
        """Return the direct element children in document order."""
        return [node for node in self.content if node.kind == NodeKind.ELEMENT]

    def extract(self) -> list[str]:
        """Return the values of the direct text children in document order.

        Child elements contribute nothing; an element holding only other
        elements extracts to an empty list.
        """
        return [node.value for node in self.content if node.kind == NodeKind.TEXT]


Element.model_rebuild()

# A parsed document is represented by its root element.
Document = Element


class ParseDiagnostic(BaseModel):
    """A non-fatal message reported by the parser."""

    level: str
    classification: str
    message: str
    line: int | None = None
    column: int | None = None

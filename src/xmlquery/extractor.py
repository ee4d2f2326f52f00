"""Value extraction from matched nodes.

Turns the node sequence returned by a query into a flat list of leaf values
rendered in the caller's representation.  Each node extracts itself:
text nodes yield their value, elements yield the values of their direct
text children, namespace nodes raise ``UnsupportedNamespaceSelectionError``.
"""

from __future__ import annotations

from collections.abc import Sequence

from xmlquery.models import Node
from xmlquery.tags import Representation, TagLike, from_canonical


def extract_values(
    nodes: Sequence[Node],
    representation: Representation = Representation.TEXT,
) -> list[TagLike]:
    """Extract leaf values from *nodes* in document order.

    An empty match and a match without text both yield ``[]``.
    """
    values: list[TagLike] = []
    for node in nodes:
        values.extend(from_canonical(raw, representation) for raw in node.extract())
    return values


def extract_values_or_none(
    nodes: Sequence[Node],
    representation: Representation = Representation.TEXT,
) -> list[TagLike] | None:
    """Like :func:`extract_values`, but ``None`` when nothing matched."""
    if not nodes:
        return None
    return extract_values(nodes, representation)

"""Projection of a document into a nested mapping.

For every requested tag, :class:`MapProjector` runs an unanchored search
for elements of that name and maps the tag to:

- ``None`` when the tag does not occur in the document,
- the first extracted value when the matches hold text,
- a nested mapping over the first match's child elements when they hold
  no direct text.

Keys and leaf values use the representation the tags were supplied in,
all the way down the nesting.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from xmlquery.extractor import extract_values, extract_values_or_none
from xmlquery.models import Element, NodeKind
from xmlquery.query import QueryEvaluator
from xmlquery.tags import NormalizedTags, Representation, TagLike, from_canonical, normalize


class MapProjector:
    """Build projection maps on top of a :class:`QueryEvaluator`."""

    def __init__(self, evaluator: QueryEvaluator) -> None:
        self._evaluator = evaluator

    def project(
        self,
        document: Element,
        tags: TagLike | Sequence[TagLike],
    ) -> dict[TagLike, Any]:
        """Project *document* onto *tags*.

        Duplicate tags are tolerated; the first occurrence decides the
        entry.  Each tag is validated before it is searched for.
        """
        normalized: NormalizedTags = normalize(tags)
        representation = normalized.representation
        projection: dict[TagLike, Any] = {}

        for raw in normalized.canonical:
            key = normalized.restore(raw)
            if key in projection:
                continue

            nodes = self._evaluator.evaluate_tag(document, raw)
            values = extract_values_or_none(nodes, representation)
            if values is None:
                projection[key] = None
            elif values:
                projection[key] = values[0]
            else:
                container = next(
                    node for node in nodes if node.kind == NodeKind.ELEMENT
                )
                projection[key] = self._project_children(container, representation)

        return projection

    def _project_children(
        self, element: Element, representation: Representation
    ) -> dict[TagLike, Any]:
        children = element.children()
        projection: dict[TagLike, Any] = {}

        for name in dict.fromkeys(child.name for child in children):
            matches = [child for child in children if child.name == name]
            values = extract_values(matches, representation)
            key = from_canonical(name, representation)
            if values:
                projection[key] = values[0]
            else:
                projection[key] = self._project_children(matches[0], representation)

        return projection

"""Tag representations and conversion to the canonical byte form.

A tag (or a path expression) may be supplied as ``bytes``, ``str`` or
:class:`Symbol`.  Queries run on the canonical UTF-8 ``bytes`` form; the
original :class:`Representation` is remembered so values and keys can be
handed back in the caller's representation.
"""

from __future__ import annotations

import sys
from collections.abc import Iterable, Sequence
from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict

from xmlquery.errors import RepresentationError

_ENCODING = "utf-8"


class Symbol(str):
    """Interned, atom-like text key.

    Compares equal to the plain ``str`` with the same characters but keeps
    its own type, so results can be told apart from text-string results.
    """

    __slots__ = ()

    def __new__(cls, value: str | bytes) -> Symbol:
        if isinstance(value, (bytes, bytearray)):
            value = bytes(value).decode(_ENCODING)
        return super().__new__(cls, sys.intern(str(value)))

    def __repr__(self) -> str:
        return f":{str(self)}"


TagLike = Union[bytes, str, Symbol]


class Representation(str, Enum):
    """The three interchangeable textual representations of a tag."""

    BYTES = "bytes"
    TEXT = "text"
    SYMBOL = "symbol"

    @classmethod
    def of(cls, value: object) -> Representation:
        """Detect the representation of *value*.

        ``Symbol`` is checked before ``str`` since it subclasses it.
        """
        if isinstance(value, Symbol):
            return cls.SYMBOL
        if isinstance(value, (bytes, bytearray)):
            return cls.BYTES
        if isinstance(value, str):
            return cls.TEXT
        raise RepresentationError(
            f"Unsupported tag type {type(value).__name__}; "
            "expected bytes, str or Symbol",
            stage="normalize",
        )


def to_canonical(tag: TagLike) -> bytes:
    """Convert *tag* to the canonical UTF-8 byte form."""
    if isinstance(tag, (bytes, bytearray)):
        return bytes(tag)
    if isinstance(tag, str):
        return tag.encode(_ENCODING)
    raise RepresentationError(
        f"Unsupported tag type {type(tag).__name__}; expected bytes, str or Symbol",
        stage="normalize",
    )


def from_canonical(raw: bytes | str, representation: Representation) -> TagLike:
    """Render *raw* (canonical bytes or parsed text) in *representation*."""
    if representation is Representation.BYTES:
        return raw if isinstance(raw, bytes) else raw.encode(_ENCODING)
    text = raw.decode(_ENCODING) if isinstance(raw, bytes) else str(raw)
    if representation is Representation.SYMBOL:
        return Symbol(text)
    return text


def convert(tag: TagLike, representation: Representation) -> TagLike:
    """Convert *tag* from its own representation to *representation*."""
    return from_canonical(to_canonical(tag), representation)


class NormalizedTags(BaseModel):
    """One tag or an ordered tag sequence in canonical form."""

    model_config = ConfigDict(frozen=True)

    canonical: list[bytes]
    representation: Representation
    is_sequence: bool

    def restore(self, raw: bytes | str) -> TagLike:
        """Render *raw* in the representation the tags were supplied in."""
        return from_canonical(raw, self.representation)

    def restore_all(self, values: Sequence[bytes | str]) -> list[TagLike]:
        return [self.restore(value) for value in values]


def normalize(tag_or_tags: TagLike | Sequence[TagLike]) -> NormalizedTags:
    """Convert a tag or a tag sequence to canonical form.

    Every element of a sequence must share the representation of its first
    element.  An empty sequence normalizes to the text representation.

    Raises
    ------
    RepresentationError
        If a sequence mixes representations or contains a value that is
        not a tag.
    """
    if isinstance(tag_or_tags, (bytes, bytearray, str)):
        representation = Representation.of(tag_or_tags)
        return NormalizedTags(
            canonical=[to_canonical(tag_or_tags)],
            representation=representation,
            is_sequence=False,
        )

    if not isinstance(tag_or_tags, Iterable):
        Representation.of(tag_or_tags)

    tags = list(tag_or_tags)
    if not tags:
        return NormalizedTags(
            canonical=[], representation=Representation.TEXT, is_sequence=True
        )

    representation = Representation.of(tags[0])
    for index, tag in enumerate(tags):
        if Representation.of(tag) is not representation:
            raise RepresentationError(
                f"Tag at index {index} is {Representation.of(tag).value}, "
                f"expected {representation.value} like the first tag",
                stage="normalize",
                fragment=repr(tag),
            )

    return NormalizedTags(
        canonical=[to_canonical(tag) for tag in tags],
        representation=representation,
        is_sequence=True,
    )

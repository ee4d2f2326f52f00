"""Unit tests for xmlquery.tags -- representations and normalization."""

from __future__ import annotations

import pytest

from xmlquery.errors import ErrorCode, RepresentationError
from xmlquery.tags import (
    Representation,
    Symbol,
    convert,
    from_canonical,
    normalize,
    to_canonical,
)


class TestSymbol:
    def test_equals_plain_text(self):
        assert Symbol("bag") == "bag"

    def test_keeps_its_type(self):
        assert type(Symbol("bag")) is Symbol

    def test_repr(self):
        assert repr(Symbol("bag")) == ":bag"

    def test_from_bytes(self):
        assert Symbol(b"bag") == "bag"

    def test_usable_as_dict_key(self):
        assert {Symbol("bag"): 1}["bag"] == 1


class TestRepresentationOf:
    def test_bytes(self):
        assert Representation.of(b"bag") is Representation.BYTES

    def test_bytearray(self):
        assert Representation.of(bytearray(b"bag")) is Representation.BYTES

    def test_text(self):
        assert Representation.of("bag") is Representation.TEXT

    def test_symbol_before_text(self):
        assert Representation.of(Symbol("bag")) is Representation.SYMBOL

    def test_other_types_rejected(self):
        with pytest.raises(RepresentationError):
            Representation.of(42)


class TestCanonical:
    def test_text_to_bytes(self):
        assert to_canonical("bäg") == "bäg".encode("utf-8")

    def test_bytes_unchanged(self):
        assert to_canonical(b"bag") == b"bag"

    def test_from_canonical_each_representation(self):
        assert from_canonical(b"cat", Representation.BYTES) == b"cat"
        assert from_canonical(b"cat", Representation.TEXT) == "cat"
        assert type(from_canonical(b"cat", Representation.SYMBOL)) is Symbol

    def test_from_parsed_text(self):
        assert from_canonical("cat", Representation.BYTES) == b"cat"
        assert type(from_canonical("cat", Representation.TEXT)) is str


class TestRoundTrip:
    """Converting to any representation and back yields the same tag."""

    @pytest.mark.parametrize("tag", [b"bag", "bag", Symbol("bag")])
    @pytest.mark.parametrize("target", list(Representation))
    def test_round_trip(self, tag, target):
        original = Representation.of(tag)
        restored = convert(convert(tag, target), original)
        assert restored == tag
        assert type(restored) is type(tag)


class TestNormalize:
    def test_single_text_tag(self):
        normalized = normalize("bag")
        assert normalized.canonical == [b"bag"]
        assert normalized.representation is Representation.TEXT
        assert normalized.is_sequence is False

    def test_single_bytes_tag(self):
        normalized = normalize(b"bag")
        assert normalized.representation is Representation.BYTES
        assert normalized.is_sequence is False

    def test_sequence(self):
        normalized = normalize(["bag", "house"])
        assert normalized.canonical == [b"bag", b"house"]
        assert normalized.is_sequence is True

    def test_symbol_sequence(self):
        normalized = normalize([Symbol("bag"), Symbol("house")])
        assert normalized.representation is Representation.SYMBOL
        assert normalized.restore_all(normalized.canonical) == [Symbol("bag"), Symbol("house")]

    def test_empty_sequence(self):
        normalized = normalize([])
        assert normalized.canonical == []
        assert normalized.representation is Representation.TEXT

    def test_mixed_sequence_rejected(self):
        with pytest.raises(RepresentationError) as exc_info:
            normalize(["bag", b"house"])
        assert exc_info.value.code == ErrorCode.E_REPRESENTATION_MISMATCH
        assert "index 1" in exc_info.value.message

    def test_text_and_symbol_do_not_mix(self):
        with pytest.raises(RepresentationError):
            normalize([Symbol("bag"), "house"])

    def test_non_tag_rejected(self):
        with pytest.raises(RepresentationError):
            normalize(42)

    def test_restore(self):
        assert normalize(b"bag").restore("cat") == b"cat"

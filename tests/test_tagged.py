"""Unit tests for jobfolders.asn1.tagged — (tag, value) pair records."""

import pytest

from jobfolders.asn1.elements import (
    Element,
    boolean_element,
    octet_string_element,
    sequence_element,
    string_sequence_element,
)
from jobfolders.asn1.tagged import decode_string_list, decode_tagged_pairs, encode_tagged_pairs
from jobfolders.engine.errors import ElementCodecError


class TestEncodeTaggedPairs:
    def test_alternates_tag_and_value(self):
        seq = encode_tagged_pairs([("a", boolean_element(True)), ("b", octet_string_element("x"))])
        children = seq.decode_as_sequence()
        assert len(children) == 4
        assert children[0].decode_as_string() == "a"
        assert children[1] == boolean_element(True)
        assert children[2].decode_as_string() == "b"
        assert children[3].decode_as_string() == "x"

    def test_no_pairs(self):
        assert encode_tagged_pairs([]).encode() == b"\x30\x00"


class TestDecodeTaggedPairs:
    def _collect(self, elements):
        seen = {}
        handlers = {
            "flag": lambda v: seen.__setitem__("flag", v.decode_as_boolean()),
            "text": lambda v: seen.__setitem__("text", v.decode_as_string()),
        }
        decode_tagged_pairs(elements, handlers)
        return seen

    def test_dispatches_in_any_order(self):
        elements = encode_tagged_pairs([
            ("text", octet_string_element("hello")),
            ("flag", boolean_element(True)),
        ]).decode_as_sequence()
        assert self._collect(elements) == {"flag": True, "text": "hello"}

    def test_unknown_tags_ignored(self):
        elements = encode_tagged_pairs([
            ("future_field", sequence_element([])),
            ("flag", boolean_element(False)),
        ]).decode_as_sequence()
        assert self._collect(elements) == {"flag": False}

    def test_odd_element_count(self):
        elements = [octet_string_element("flag"), boolean_element(True), octet_string_element("text")]
        with pytest.raises(ElementCodecError, match="3 elements"):
            self._collect(elements)

    def test_tag_must_be_octet_string(self):
        elements = [boolean_element(True), boolean_element(True)]
        with pytest.raises(ElementCodecError):
            self._collect(elements)

    def test_handler_errors_propagate(self):
        elements = [octet_string_element("flag"), octet_string_element("not a bool")]
        with pytest.raises(ElementCodecError):
            self._collect(elements)


class TestDecodeStringList:
    def test_round_trip(self):
        element = Element.decode(string_sequence_element(["b", "a"]).encode())
        assert decode_string_list(element) == ["b", "a"]

    def test_empty(self):
        assert decode_string_list(sequence_element([])) == []

    def test_non_string_child(self):
        with pytest.raises(ElementCodecError):
            decode_string_list(sequence_element([boolean_element(True)]))

"""
Element Codec — BER-style type-length-value encoding for folder records.

Only the three element types the folder format needs are supported:

    BOOLEAN       0x01   one value byte; 0x00 is false, anything else true
    OCTET STRING  0x04   raw bytes (text is UTF-8)
    SEQUENCE      0x30   concatenated encoded child elements

Lengths use the short form below 128 and the long form (0x80 | n, then n
big-endian bytes, n at most 4) otherwise, for readers and writers alike.
Multi-byte type identifiers are rejected. Decoding depends only on the
input bytes.

Usage:
    from jobfolders.asn1 import Element, octet_string_element, sequence_element

    raw = sequence_element([octet_string_element("name"), boolean_element(True)]).encode()
    children = Element.decode(raw).decode_as_sequence()
"""

from __future__ import annotations

from typing import Iterable, List, Tuple, Union

from jobfolders.engine.errors import ElementCodecError

BOOLEAN_TYPE = 0x01
OCTET_STRING_TYPE = 0x04
SEQUENCE_TYPE = 0x30

TYPE_NAMES = {
    BOOLEAN_TYPE: "BOOLEAN",
    OCTET_STRING_TYPE: "OCTET STRING",
    SEQUENCE_TYPE: "SEQUENCE",
}

MAX_LENGTH_BYTES = 4


def _type_name(element_type: int) -> str:
    return TYPE_NAMES.get(element_type, f"0x{element_type:02x}")


def encode_length(length: int) -> bytes:
    """Encode a value length in short or long form."""
    if length < 0:
        raise ValueError(f"length must not be negative, got {length}")
    if length < 0x80:
        return bytes([length])

    body = length.to_bytes((length.bit_length() + 7) // 8, "big")
    if len(body) > MAX_LENGTH_BYTES:
        raise ValueError(f"length {length} does not fit in {MAX_LENGTH_BYTES} bytes")
    return bytes([0x80 | len(body)]) + body


def decode_length(data: bytes, offset: int, max_length_bytes: int) -> Tuple[int, int]:
    """
    Decode the length starting at ``data[offset]``.

    Returns:
        (length, offset of the first value byte)
    """
    if offset >= len(data):
        raise ElementCodecError("No length byte after the element type")

    first = data[offset]
    offset += 1
    if first < 0x80:
        return first, offset

    num_bytes = first & 0x7F
    if num_bytes == 0:
        # A bare 0x80 has always been read as 128 by this format's readers.
        return 128, offset
    if num_bytes > max_length_bytes:
        raise ElementCodecError(
            f"Length encoded in {num_bytes} bytes, at most {max_length_bytes} supported"
        )
    if offset + num_bytes > len(data):
        raise ElementCodecError(
            f"Length is encoded in {num_bytes} bytes, but only "
            f"{len(data) - offset} bytes remain"
        )
    length = int.from_bytes(data[offset:offset + num_bytes], "big")
    return length, offset + num_bytes


class Element:
    """A single decoded or to-be-encoded TLV element."""

    __slots__ = ("type", "value")

    def __init__(self, element_type: int, value: bytes = b""):
        self.type = element_type
        self.value = bytes(value) if value else b""

    def encode(self) -> bytes:
        return bytes([self.type]) + encode_length(len(self.value)) + self.value

    @classmethod
    def decode(cls, data: bytes, max_length_bytes: int = MAX_LENGTH_BYTES) -> "Element":
        """
        Decode exactly one element that spans all of ``data``.

        Raises:
            ElementCodecError: empty, truncated or trailing input.
        """
        if not data:
            raise ElementCodecError("No data to decode")

        element, end = cls._decode_at(data, 0, max_length_bytes)
        if end != len(data):
            raise ElementCodecError(
                f"Expected {end} bytes for one element, but {len(data)} bytes exist"
            )
        return element

    @classmethod
    def _decode_at(cls, data: bytes, offset: int, max_length_bytes: int) -> Tuple["Element", int]:
        if len(data) - offset < 2:
            raise ElementCodecError("Not enough data to make a valid element")

        element_type = data[offset]
        if element_type & 0x1F == 0x1F:
            raise ElementCodecError(
                "Multibyte type detected (not supported)", element_type=element_type
            )

        length, start = decode_length(data, offset + 1, max_length_bytes)
        end = start + length
        if end > len(data):
            raise ElementCodecError(
                f"Expected a value of {length} bytes, but {len(data) - start} bytes exist",
                element_type=element_type,
            )
        return cls(element_type, data[start:end]), end

    # -- shape-checked accessors ------------------------------------------

    def _expect(self, element_type: int) -> None:
        if self.type != element_type:
            raise ElementCodecError(
                f"Expected {_type_name(element_type)} element, found {_type_name(self.type)}",
                element_type=self.type,
            )

    def decode_as_boolean(self) -> bool:
        self._expect(BOOLEAN_TYPE)
        if len(self.value) != 1:
            raise ElementCodecError(
                f"BOOLEAN value must be 1 byte, found {len(self.value)}",
                element_type=self.type,
            )
        return self.value[0] != 0x00

    def decode_as_octet_string(self) -> bytes:
        self._expect(OCTET_STRING_TYPE)
        return self.value

    def decode_as_string(self) -> str:
        raw = self.decode_as_octet_string()
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ElementCodecError(f"OCTET STRING is not valid UTF-8: {e}") from e

    def decode_as_sequence(self, max_length_bytes: int = MAX_LENGTH_BYTES) -> List["Element"]:
        self._expect(SEQUENCE_TYPE)
        return decode_elements(self.value, max_length_bytes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Element):
            return NotImplemented
        return self.type == other.type and self.value == other.value

    def __hash__(self) -> int:
        return hash((self.type, self.value))

    def __repr__(self) -> str:
        return f"Element({_type_name(self.type)}, {len(self.value)} bytes)"


def decode_elements(data: bytes, max_length_bytes: int = MAX_LENGTH_BYTES) -> List[Element]:
    """Decode a run of concatenated elements (the body of a sequence)."""
    elements: List[Element] = []
    offset = 0
    while offset < len(data):
        element, offset = Element._decode_at(data, offset, max_length_bytes)
        elements.append(element)
    return elements


# ---------------------------------------------------------------------------
# Element builders
# ---------------------------------------------------------------------------

def boolean_element(value: bool) -> Element:
    return Element(BOOLEAN_TYPE, b"\xff" if value else b"\x00")


def octet_string_element(value: Union[str, bytes, None]) -> Element:
    """None is written as an empty octet string."""
    if value is None:
        return Element(OCTET_STRING_TYPE)
    if isinstance(value, str):
        value = value.encode("utf-8")
    return Element(OCTET_STRING_TYPE, value)


def sequence_element(elements: Iterable[Element]) -> Element:
    return Element(SEQUENCE_TYPE, b"".join(e.encode() for e in elements))


def string_sequence_element(values: Iterable[str]) -> Element:
    return sequence_element(octet_string_element(v) for v in values)


def describe_bytes(data: object, preview: int = 16) -> str:
    """Short human-readable description of an encoded input for error messages."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        return f"<{type(data).__name__}, not bytes>"
    raw = bytes(data)
    head = raw[:preview].hex(" ")
    suffix = " ..." if len(raw) > preview else ""
    return f"<{len(raw)} bytes: {head}{suffix}>"

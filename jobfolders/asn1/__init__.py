"""Element codec — BER-style TLV encoding used by folder and permission records."""

from jobfolders.asn1.elements import (
    BOOLEAN_TYPE,
    OCTET_STRING_TYPE,
    SEQUENCE_TYPE,
    Element,
    boolean_element,
    decode_elements,
    describe_bytes,
    octet_string_element,
    sequence_element,
    string_sequence_element,
)

__all__ = [
    "BOOLEAN_TYPE",
    "OCTET_STRING_TYPE",
    "SEQUENCE_TYPE",
    "Element",
    "boolean_element",
    "decode_elements",
    "describe_bytes",
    "octet_string_element",
    "sequence_element",
    "string_sequence_element",
]

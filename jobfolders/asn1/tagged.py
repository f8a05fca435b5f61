"""
Tagged records — sequences of (tag name, value) element pairs.

Folder and permission records are both written as one SEQUENCE whose
children alternate between an OCTET STRING tag name and the value element
for that tag. Readers match tags through a handler mapping, so pair order
does not matter and tags a reader does not know are skipped.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Tuple

from jobfolders.asn1.elements import Element, octet_string_element, sequence_element
from jobfolders.engine.errors import ElementCodecError

logger = logging.getLogger("jobfolders.asn1.tagged")

TagHandler = Callable[[Element], None]


def encode_tagged_pairs(pairs: Iterable[Tuple[str, Element]]) -> Element:
    """Build the outer SEQUENCE for ``(tag, value)`` pairs, in the given order."""
    children: List[Element] = []
    for tag, value in pairs:
        children.append(octet_string_element(tag))
        children.append(value)
    return sequence_element(children)


def decode_tagged_pairs(elements: List[Element], handlers: Dict[str, TagHandler]) -> None:
    """
    Dispatch each ``(tag, value)`` pair to ``handlers[tag]``.

    Unknown tags are ignored. A trailing tag without a value raises
    ElementCodecError, as does a tag that is not an OCTET STRING.
    """
    if len(elements) % 2 != 0:
        raise ElementCodecError(
            f"Tagged sequence has {len(elements)} elements; "
            f"the last tag has no value"
        )

    for i in range(0, len(elements), 2):
        tag = elements[i].decode_as_string()
        handler = handlers.get(tag)
        if handler is None:
            logger.debug("Ignoring unknown tag %r", tag)
            continue
        handler(elements[i + 1])


def decode_string_list(element: Element) -> List[str]:
    """Decode a SEQUENCE of OCTET STRINGs into a list of str."""
    return [child.decode_as_string() for child in element.decode_as_sequence()]

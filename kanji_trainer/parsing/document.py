"""Decoder for the character document.

The document is XML in which every ``kanji`` element holds one child per
character. Each character child carries a ``name`` attribute and holds one
child per stroke whose ``d`` attribute is the raw path string::

    <kanji>
      <g name="ichi one">
        <path d="M11.5,51.5c10,0,20,0,30,0"/>
      </g>
    </kanji>

Namespaced tags (``{http://...}kanji``) are matched on their local name.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import Iterator, List

from ..domain.character import Character
from ..errors import DecodeError

logger = logging.getLogger(__name__)

CHARACTER_CONTAINER_TAG = 'kanji'
NAME_ATTRIBUTE = 'name'
PATH_ATTRIBUTE = 'd'


def _local_name(tag) -> str:
    if not isinstance(tag, str):
        return ''
    return tag.rsplit('}', 1)[-1]


def _iter_containers(root: ET.Element) -> Iterator[ET.Element]:
    for elem in root.iter():
        if _local_name(elem.tag) == CHARACTER_CONTAINER_TAG:
            yield elem


def _decode_group(group: ET.Element, position: int) -> Character:
    name = group.get(NAME_ATTRIBUTE)
    if name is None:
        raise DecodeError(DecodeError.MALFORMED,
                          f"stroke group #{position} <{_local_name(group.tag)}> has no "
                          f"'{NAME_ATTRIBUTE}' attribute")

    strokes = {}
    for stroke_no, leaf in enumerate(group, start=1):
        d = leaf.get(PATH_ATTRIBUTE)
        if d is None:
            raise DecodeError(DecodeError.MALFORMED,
                              f"stroke {stroke_no} of '{name}' has no "
                              f"'{PATH_ATTRIBUTE}' attribute")
        strokes[stroke_no] = d

    if not strokes:
        raise DecodeError(DecodeError.MALFORMED, f"character '{name}' has no strokes")
    return Character(name=name, strokes=strokes)


def decode_document(text: str) -> List[Character]:
    """Decode document text into characters in document order.

    Args:
        text: Full text of the character document.

    Returns:
        One Character per stroke group, with strokes numbered from 1 in
        the order they appear.

    Raises:
        DecodeError: If the text is empty, is not well-formed XML, a group
            has no strokes, or a group or stroke lacks its required
            attribute.

    Example:
        >>> chars = decode_document('<kanji><g name="one"><path d="M0,0"/></g></kanji>')
        >>> chars[0].strokes[1]
        'M0,0'
    """
    if text is None or not text.strip():
        raise DecodeError(DecodeError.EMPTY_SOURCE, "document text is empty")

    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise DecodeError(DecodeError.MALFORMED, f"not well-formed XML ({e})") from e

    characters = []
    for container in _iter_containers(root):
        for group in container:
            characters.append(_decode_group(group, len(characters) + 1))

    if not characters:
        logger.warning("Document contains no <%s> character groups", CHARACTER_CONTAINER_TAG)
    logger.debug("Decoded %d characters", len(characters))
    return characters

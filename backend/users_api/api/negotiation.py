"""Content negotiation and serialization for API responses.

JSON is the default representation; XML is produced when the ``Accept`` header
prefers it. Requests accepting neither are refused with 406.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any
from xml.etree import ElementTree as ET

from flask import current_app, request

from users_api.core.errors import NotAcceptable

JSON_MIMETYPE = "application/json"
XML_MIMETYPES = ("application/xml", "text/xml")
SUPPORTED_MIMETYPES = [JSON_MIMETYPE, *XML_MIMETYPES]

# Code points outside the XML 1.0 Char production
_XML_INVALID_CHARS = re.compile("[^\x09\x0A\x0D\x20-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]")


def negotiate_mimetype() -> str:
    """Pick the response media type for the current request.

    :returns: One of :data:`SUPPORTED_MIMETYPES`.
    :rtype: str
    :raises NotAcceptable: If the ``Accept`` header matches none of them.
    """
    accept = request.accept_mimetypes
    if not accept:
        return JSON_MIMETYPE
    best = accept.best_match(SUPPORTED_MIMETYPES)
    if best is None:
        raise NotAcceptable(SUPPORTED_MIMETYPES)
    return best


def is_xml(mimetype: str) -> bool:
    return mimetype in XML_MIMETYPES


def _append(parent: ET.Element, tag: str, value: Any, item_tag: str) -> None:
    child = ET.SubElement(parent, tag)
    _fill(child, value, item_tag)


def _fill(element: ET.Element, value: Any, item_tag: str) -> None:
    if isinstance(value, Mapping):
        for key, item in value.items():
            _append(element, str(key), item, item_tag)
    elif isinstance(value, (list, tuple)):
        for item in value:
            _append(element, item_tag, item, item_tag)
    elif value is None:
        element.set("nil", "true")
    else:
        element.text = _XML_INVALID_CHARS.sub("", str(value))


def to_xml(payload: Any, *, root: str, item_tag: str) -> str:
    """Serialize plain data (mappings, lists, scalars) into an XML document.

    :param payload: Data to serialize.
    :type payload: Any
    :param root: Tag of the document element.
    :type root: str
    :param item_tag: Tag used for list members.
    :type item_tag: str
    :returns: XML document with declaration.
    :rtype: str
    """
    element = ET.Element(root)
    _fill(element, payload, item_tag)
    return ET.tostring(element, encoding="unicode", xml_declaration=True)


def serialize(payload: Any, mimetype: str, *, root: str, item_tag: str) -> str:
    """Render ``payload`` in the negotiated media type."""
    if is_xml(mimetype):
        return to_xml(payload, root=root, item_tag=item_tag)
    return current_app.json.dumps(payload)


__all__ = [
    "JSON_MIMETYPE",
    "SUPPORTED_MIMETYPES",
    "XML_MIMETYPES",
    "is_xml",
    "negotiate_mimetype",
    "serialize",
    "to_xml",
]

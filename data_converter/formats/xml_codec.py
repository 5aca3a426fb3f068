"""XML codec — element tree ⇄ IR with attribute/text/array disambiguation.

WHY: XML has three kinds of content (attributes, text, child elements)
and no native arrays, while the IR only has objects, arrays and
scalars. This codec defines the one mapping between the two so that
XML→JSON→XML conversions are predictable.

HOW: Parsing uses xml.etree.ElementTree for well-formedness and the
element tree, then walks the tree:
  attribute name="v"        → "@name": "v"
  leaf without attributes   → trimmed text, or null when empty
  leaf with attributes      → {"@...": ..., "#text": text}
  repeated child tag        → second occurrence promotes to an array
  root element <r>          → {"r": ...}
Serialization is the inverse, written directly as text with escaping.

RULES:
- Not well-formed input → ParseError(MALFORMED_XML)
- Comments, processing instructions and namespace URIs are dropped
- Text mixed with child elements is dropped
- Promotion to array is by tag presence, in document order
- Null values emit no element; arrays repeat the element per item
- An element with no text and no children self-closes
- Element and attribute names must be valid XML names
- &, < and > are escaped in text; attribute values also escape "
- Characters outside XML 1.0 (e.g. U+0001) raise SerializeError(UNSUPPORTED_SHAPE)
- No XML declaration; compact output unless xml_indent is set
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from typing import Dict, List, Optional, Tuple
from xml.sax.saxutils import escape

from data_converter.core.errors import ErrorKind, ParseError, SerializeError
from data_converter.core.ir import (
    Array,
    Null,
    Object,
    String,
    Value,
    is_scalar,
    text_form,
)
from data_converter.formats.base import BaseCodec, DataFormat

logger = logging.getLogger(__name__)

ATTRIBUTE_PREFIX = "@"
TEXT_KEY = "#text"

# Letters or underscore first, then letters, digits, "_", "-" or ".".
# Colons are left out: prefixed names would need namespace declarations.
_NAME_RE = re.compile(r"[^\W\d][\w.\-]*")

# Characters outside the XML 1.0 Char production cannot appear even escaped.
_INVALID_CHAR_RE = re.compile(r"[^\t\n\r\x20-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]")

_ATTRIBUTE_ENTITIES = {'"': "&quot;"}


def _local_name(tag: str) -> str:
    """Strip the ``{namespace-uri}`` prefix ElementTree puts on tags."""
    if tag.startswith("{"):
        return tag.rsplit("}", 1)[1]
    return tag


def element_to_value(element: ET.Element) -> Value:
    """Convert one element (and its subtree) to an IR value."""
    fields: Dict[str, Value] = {}
    for name, attr_value in element.attrib.items():
        fields[ATTRIBUTE_PREFIX + _local_name(name)] = String(attr_value)

    children = list(element)
    if not children:
        text = (element.text or "").strip()
        if not fields:
            return String(text) if text else Null()
        if text:
            fields[TEXT_KEY] = String(text)
        return Object(fields)

    for child in children:
        key = _local_name(child.tag)
        value = element_to_value(child)
        if key not in fields:
            fields[key] = value
            continue
        existing = fields[key]
        # element_to_value never returns an Array, so an Array here is a promoted entry
        if isinstance(existing, Array):
            existing.items.append(value)
        else:
            logger.debug("Promoting repeated <%s> to an array", key)
            fields[key] = Array([existing, value])
    return Object(fields)


def reindent_xml(xml_text: str, indent: int) -> str:
    """Re-indent compact XML, one top-level element per line group.

    WHY: Serialized output may hold several top-level elements (a
    top-level object with many keys, or an array), which ElementTree
    cannot parse as one document.

    HOW: Wrap the fragment in a throwaway root, indent each top-level
    child on its own, and join them with newlines.

    Raises:
        SerializeError: ``xml_text`` is not a well-formed fragment.
    """
    if not xml_text:
        return xml_text
    try:
        wrapper = ET.fromstring("<root>{}</root>".format(xml_text))
    except ET.ParseError as exc:
        raise SerializeError(
            "Cannot indent XML output: {}".format(exc),
            ErrorKind.UNSUPPORTED_SHAPE,
            DataFormat.XML.value,
        ) from exc
    space = " " * indent
    parts = []
    for child in wrapper:
        child.tail = None
        ET.indent(child, space=space)
        parts.append(ET.tostring(child, encoding="unicode"))
    return "\n".join(parts)


class XMLCodec(BaseCodec):
    """XML ⇄ IR."""

    format = DataFormat.XML

    @property
    def name(self) -> str:
        return "XML"

    @property
    def media_type(self) -> str:
        return "application/xml"

    @property
    def extensions(self) -> Tuple[str, ...]:
        return (".xml",)

    # -- parse ---------------------------------------------------------------

    def parse(self, text: str) -> Value:
        stripped = self._require_content(text)
        try:
            root = ET.fromstring(stripped)
        except ET.ParseError as exc:
            raise ParseError(
                "Invalid XML: {}".format(exc),
                ErrorKind.MALFORMED_XML,
                self.format.value,
            ) from exc
        with self._parse_guard():
            return Object({_local_name(root.tag): element_to_value(root)})

    # -- serialize -----------------------------------------------------------

    def serialize(self, value: Value) -> str:
        with self._serialize_guard():
            xml_text = self._render_top(value)
            indent = self.options.xml_indent
            if indent:
                return reindent_xml(xml_text, indent)
            return xml_text

    def _shape_error(self, message: str) -> SerializeError:
        return SerializeError(message, ErrorKind.UNSUPPORTED_SHAPE, self.format.value)

    def _check_name(self, name: str, what: str = "element") -> None:
        if not _NAME_RE.fullmatch(name):
            raise self._shape_error(
                "{!r} is not a valid XML {} name.".format(name, what)
            )

    def _escape(self, text: str, entities: Optional[Dict[str, str]] = None) -> str:
        invalid = _INVALID_CHAR_RE.search(text)
        if invalid:
            raise self._shape_error(
                "Character U+{:04X} cannot be written in XML 1.0.".format(ord(invalid.group()))
            )
        return escape(text, entities or {})

    def _render_top(self, value: Value) -> str:
        """Render a value that has no element name of its own."""
        if isinstance(value, Object):
            return "".join(self._render(item, key) for key, item in value.fields.items())
        if isinstance(value, Array):
            return "".join(self._render_top(item) for item in value.items)
        if isinstance(value, Null):
            return ""
        raise self._shape_error(
            "XML output needs an object at the top level, got {}.".format(value.type_name)
        )

    def _render(self, value: Value, name: str) -> str:
        if isinstance(value, Null):
            return ""
        self._check_name(name)
        if is_scalar(value):
            return "<{0}>{1}</{0}>".format(name, self._escape(text_form(value)))
        if isinstance(value, Array):
            return "".join(self._render(item, name) for item in value.items)
        return self._render_object(value, name)

    def _render_object(self, value: Object, name: str) -> str:
        attributes: List[str] = []
        children: List[Tuple[str, Value]] = []
        text: Optional[str] = None

        for key, item in value.fields.items():
            if key.startswith(ATTRIBUTE_PREFIX):
                attr_name = key[len(ATTRIBUTE_PREFIX):]
                self._check_name(attr_name, "attribute")
                attributes.append(' {}="{}"'.format(
                    attr_name, self._escape(text_form(item), _ATTRIBUTE_ENTITIES),
                ))
            elif key == TEXT_KEY:
                text = text_form(item) or None
            else:
                children.append((key, item))

        open_tag = "<{}{}".format(name, "".join(attributes))
        if text is None and not children:
            return open_tag + "/>"

        body = self._escape(text) if text is not None else ""
        body += "".join(self._render(item, key) for key, item in children)
        return "{}>{}</{}>".format(open_tag, body, name)

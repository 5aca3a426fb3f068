"""Prettify and minify helpers for JSON and XML text.

WHY: Besides converting between formats, users often only want to
re-indent or compact a JSON or XML document. Reusing the codecs keeps
error reporting identical to conversion (same ParseError kinds and
messages) and keeps JSON number digits intact.

HOW: JSON goes through the JSON codec: parse to IR, serialize with the
requested indent. XML is parsed with ElementTree for validation and
re-indented with ET.indent; minifying XML removes whitespace between
tags once the document is known to be well-formed.

RULES:
- Whitespace-only input returns ""
- JSON errors → ParseError(SYNTAX); XML errors → ParseError(MALFORMED_XML)
- Documents nested deeper than the interpreter stack → ParseError(UNSUPPORTED_VALUE)
- XML minify only collapses whitespace between a ">" and the next "<"
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET

from data_converter.core.errors import ErrorKind, ParseError
from data_converter.formats.base import CodecOptions
from data_converter.formats.json_codec import JSONCodec

_BETWEEN_TAGS_RE = re.compile(r">\s+<")


def prettify_json(text: str, indent: int = 2) -> str:
    if not text.strip():
        return ""
    value = JSONCodec().parse(text)
    return JSONCodec(CodecOptions(json_indent=indent)).serialize(value)


def minify_json(text: str) -> str:
    if not text.strip():
        return ""
    value = JSONCodec().parse(text)
    return JSONCodec(CodecOptions(json_indent=0)).serialize(value)


def _parse_xml(text: str) -> ET.Element:
    try:
        return ET.fromstring(text)
    except ET.ParseError as exc:
        raise ParseError(
            "Invalid XML: {}".format(exc),
            ErrorKind.MALFORMED_XML,
            "xml",
        ) from exc


def prettify_xml(text: str, indent: int = 2) -> str:
    """Re-indent an XML document.

    The XML declaration, comments and processing instructions are not
    kept; ElementTree does not retain them.
    """
    stripped = text.strip()
    if not stripped:
        return ""
    root = _parse_xml(stripped)
    try:
        ET.indent(root, space=" " * indent)
        return ET.tostring(root, encoding="unicode")
    except RecursionError as exc:
        raise ParseError(
            "XML input is nested too deeply to indent.",
            ErrorKind.UNSUPPORTED_VALUE,
            "xml",
        ) from exc


def minify_xml(text: str) -> str:
    stripped = text.strip()
    if not stripped:
        return ""
    _parse_xml(stripped)
    return _BETWEEN_TAGS_RE.sub("><", stripped)

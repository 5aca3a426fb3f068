"""Data Converter — structural conversion between JSON, XML, CSV and YAML.

WHY: The four formats model data very differently: JSON and YAML are
key/value trees, XML mixes elements, attributes and text, and CSV is a
flat table. Converting any of them into any other needs one shared
representation and explicit rules for the cases that do not map cleanly.

HOW: Two-stage pipeline — parse (format codec → canonical IR value) and
serialize (IR value → format codec). The orchestrator in
``core.converter`` picks the codec pair and stops at the first error.

RULES:
- Every codec produces and consumes the same IR (``core.ir``)
- Adding a format = one new codec module registered in ``formats.CODECS``
- Conversions are pure: no I/O, no shared state between calls
"""

from data_converter.core.converter import convert, parse, serialize
from data_converter.core.errors import (
    ConversionError,
    ErrorKind,
    ParseError,
    SerializeError,
)
from data_converter.formats.base import CodecOptions, DataFormat

__version__ = "0.1.0"

__all__ = [
    "CodecOptions",
    "ConversionError",
    "DataFormat",
    "ErrorKind",
    "ParseError",
    "SerializeError",
    "convert",
    "parse",
    "serialize",
]

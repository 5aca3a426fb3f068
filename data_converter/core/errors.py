"""Typed conversion errors shared by every codec and the orchestrator.

WHY: Callers (CLI, HTTP API, library users) need to tell a malformed
input apart from an output shape the target format cannot express,
without parsing exception strings. Each codec wraps its library's own
exception type (json.JSONDecodeError, yaml.YAMLError, ET.ParseError)
into one of these.

HOW: ErrorKind enumerates the failure categories. ConversionError is
the base exception; ParseError and SerializeError mark the stage that
failed. All three carry the kind and the format key involved.

RULES:
- str(error) is always a human-readable message
- format is the lowercase format key ("json", "csv", ...) or None
- Library exceptions are chained with ``raise ... from exc``
- EMPTY_INPUT from the CSV parser is resolved to an empty array and
  never raised; the other parsers raise it for whitespace-only text
"""

from __future__ import annotations

import enum
from typing import Optional


class ErrorKind(str, enum.Enum):
    """Failure categories surfaced across the conversion boundary.

    RULES:
    - syntax: malformed JSON or YAML
    - malformed_xml: XML that is not well-formed
    - empty_input: nothing but whitespace to parse
    - unsupported_shape: the value cannot be expressed in the target format
    - unsupported_value: a parsed native value has no IR counterpart
    - unsupported_format: unknown format name
    """

    SYNTAX = "syntax"
    MALFORMED_XML = "malformed_xml"
    EMPTY_INPUT = "empty_input"
    UNSUPPORTED_SHAPE = "unsupported_shape"
    UNSUPPORTED_VALUE = "unsupported_value"
    UNSUPPORTED_FORMAT = "unsupported_format"


class ConversionError(Exception):
    """Base class for every failure raised by the converter."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind,
        format: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.format = format

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return "{}(kind={!r}, format={!r}, message={!r})".format(
            type(self).__name__, self.kind.value, self.format, self.message,
        )


class ParseError(ConversionError):
    """Input text could not be turned into an IR value."""


class SerializeError(ConversionError):
    """An IR value could not be written in the requested format."""

"""Abstract base codec, format identifiers and codec options.

WHY: The orchestrator, CLI and HTTP API all need to treat the four
formats the same way: parse text into the IR, serialize the IR back
into text. This base class enforces that interface so callers can work
with any codec generically.

HOW: BaseCodec is an ABC with ``name``, ``media_type`` and
``extensions`` properties plus ``parse()`` and ``serialize()``.
DataFormat is the closed set of format keys. CodecOptions bundles the
output-style settings, defaulting to the values in ``config``.

RULES:
- parse() returns an IR value or raises ParseError, never RecursionError
- serialize() returns text or raises SerializeError
- Codecs hold no state besides their options; one instance may be
  reused for any number of calls
- To add a format: subclass BaseCodec, add a DataFormat member and
  register it in CODECS in formats/__init__.py
"""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from data_converter import config
from data_converter.core.errors import ErrorKind, ParseError, SerializeError
from data_converter.core.ir import Value


class DataFormat(str, enum.Enum):
    """Supported data formats.

    Inherits from str so values serialize cleanly to JSON and compare
    equal to their plain-string keys.
    """

    JSON = "json"
    XML = "xml"
    CSV = "csv"
    YAML = "yaml"

    @property
    def label(self) -> str:
        return self.value.upper()


@dataclass
class CodecOptions:
    """Output-style options passed to every codec.

    Attributes:
        json_indent: Spaces per JSON indent level; 0 or None for compact output.
        yaml_indent: Spaces per YAML indent level.
        csv_quoting: "always" quotes every CSV field, "minimal" only those
                     containing a comma, quote or line break.
        xml_indent: Spaces per XML indent level; None for compact output.
    """

    json_indent: Optional[int] = config.DEFAULT_JSON_INDENT
    yaml_indent: Optional[int] = config.DEFAULT_YAML_INDENT
    csv_quoting: str = config.DEFAULT_CSV_QUOTING
    xml_indent: Optional[int] = config.DEFAULT_XML_INDENT

    def __post_init__(self) -> None:
        if self.csv_quoting not in config.CSV_QUOTING_MODES:
            raise ValueError(
                "csv_quoting must be one of {}, got '{}'.".format(
                    ", ".join(config.CSV_QUOTING_MODES), self.csv_quoting
                )
            )


class BaseCodec(ABC):
    """Abstract base for all format codecs.

    To add a new format:
    1. Create a new module in formats/
    2. Subclass BaseCodec
    3. Implement the properties plus parse() and serialize()
    4. Register it in CODECS in formats/__init__.py
    """

    format: DataFormat

    def __init__(self, options: Optional[CodecOptions] = None) -> None:
        self.options = options or CodecOptions()

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'JSON'."""

    @property
    @abstractmethod
    def media_type(self) -> str:
        """MIME type of serialized output, e.g. 'application/json'."""

    @property
    @abstractmethod
    def extensions(self) -> Tuple[str, ...]:
        """File extensions for this format, lowercase with dot."""

    @abstractmethod
    def parse(self, text: str) -> Value:
        """Parse text into an IR value.

        Raises:
            ParseError: The text is not valid for this format.
        """

    @abstractmethod
    def serialize(self, value: Value) -> str:
        """Serialize an IR value into text.

        Raises:
            SerializeError: The value has a shape this format cannot express.
        """

    def _require_content(self, text: str) -> str:
        """Return stripped text, or raise EMPTY_INPUT for blank input."""
        stripped = text.strip()
        if not stripped:
            raise ParseError(
                "{} input is empty.".format(self.name),
                ErrorKind.EMPTY_INPUT,
                self.format.value,
            )
        return stripped

    @contextmanager
    def _parse_guard(self) -> Iterator[None]:
        """Report input nested deeper than the interpreter stack as ParseError."""
        try:
            yield
        except RecursionError as exc:
            raise ParseError(
                "{} input is nested too deeply to convert.".format(self.name),
                ErrorKind.UNSUPPORTED_VALUE,
                self.format.value,
            ) from exc

    @contextmanager
    def _serialize_guard(self) -> Iterator[None]:
        """Report a value nested deeper than the interpreter stack as SerializeError."""
        try:
            yield
        except RecursionError as exc:
            raise SerializeError(
                "Value is nested too deeply to write as {}.".format(self.name),
                ErrorKind.UNSUPPORTED_SHAPE,
                self.format.value,
            ) from exc

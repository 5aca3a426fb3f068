"""Conversion orchestrator: format lookup and parse → serialize.

WHY: Every entry point (library call, CLI, HTTP API) performs the same
two steps — parse the input with one codec, serialize the result with
another — and must stop at the first failure without returning partial
output. Centralising it here keeps the surfaces thin.

HOW: resolve_format turns a user-supplied name into a DataFormat,
get_codec instantiates the registered codec with the caller's options,
and convert chains parse and serialize. Any ConversionError propagates
unchanged to the caller.

RULES:
- convert is pure: no I/O, no state kept between calls
- Whitespace-only input converts to "" without invoking a codec
- A bare object headed for CSV is wrapped in a one-element array
- Unknown format names raise ConversionError(UNSUPPORTED_FORMAT)
- Format names are case-insensitive; "yml" is accepted for YAML
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from data_converter.core.errors import ConversionError, ErrorKind
from data_converter.core.ir import Array, Object, Value
from data_converter.formats import CODECS
from data_converter.formats.base import BaseCodec, CodecOptions, DataFormat

logger = logging.getLogger(__name__)

FormatLike = Union[DataFormat, str]

_FORMAT_ALIASES = {"yml": DataFormat.YAML}


def resolve_format(fmt: FormatLike) -> DataFormat:
    """Look up a DataFormat by name.

    Args:
        fmt: A DataFormat, or a name such as "JSON", "csv" or "yml".

    Returns:
        The matching DataFormat.

    Raises:
        ConversionError: The name does not match any supported format.
    """
    if isinstance(fmt, DataFormat):
        return fmt
    key = str(fmt).strip().lower()
    if key in _FORMAT_ALIASES:
        return _FORMAT_ALIASES[key]
    try:
        return DataFormat(key)
    except ValueError:
        available = ", ".join(sorted(f.value for f in DataFormat))
        raise ConversionError(
            "Unknown format '{}'. Available formats: {}".format(fmt, available),
            ErrorKind.UNSUPPORTED_FORMAT,
        ) from None


def detect_format(path: Union[str, Path]) -> Optional[DataFormat]:
    """Guess a file's format from its extension, or None if unknown."""
    suffix = Path(path).suffix.lower()
    if not suffix:
        return None
    for fmt, codec_cls in CODECS.items():
        if suffix in codec_cls().extensions:
            return fmt
    return None


def get_codec(fmt: FormatLike, options: Optional[CodecOptions] = None) -> BaseCodec:
    """Instantiate the registered codec for a format."""
    return CODECS[resolve_format(fmt)](options)


def parse(text: str, fmt: FormatLike, options: Optional[CodecOptions] = None) -> Value:
    """Parse text in the given format into an IR value."""
    return get_codec(fmt, options).parse(text)


def serialize(value: Value, fmt: FormatLike, options: Optional[CodecOptions] = None) -> str:
    """Serialize an IR value into the given format."""
    return get_codec(fmt, options).serialize(value)


def convert(
    text: str,
    from_format: FormatLike,
    to_format: FormatLike,
    options: Optional[CodecOptions] = None,
) -> str:
    """Convert text from one format to another.

    WHY: This is the single entry point of the engine. Surfaces supply
    the text and the two format names and present either the returned
    text or the raised error.

    HOW: Resolve both formats up front (so a bad target name fails before
    any parsing), parse with the source codec, coerce a bare object to a
    one-row array when the target is CSV, then serialize with the target
    codec.

    Args:
        text: Input document.
        from_format: Format of ``text``.
        to_format: Format to produce.
        options: Output style options; defaults come from config.

    Returns:
        The converted document, or "" for whitespace-only input.

    Raises:
        ParseError: ``text`` is not valid ``from_format``.
        SerializeError: The parsed value cannot be expressed in ``to_format``.
        ConversionError: A format name is unknown.
    """
    source = resolve_format(from_format)
    target = resolve_format(to_format)

    if not text.strip():
        logger.debug("Empty input; nothing to convert")
        return ""

    try:
        value = parse(text, source, options)
        if target is DataFormat.CSV and isinstance(value, Object):
            value = Array([value])
        output = serialize(value, target, options)
    except ConversionError as exc:
        logger.debug(
            "Conversion %s -> %s failed (%s): %s",
            source.label, target.label, exc.kind.value, exc,
        )
        raise

    logger.debug(
        "Converted %s -> %s (%d chars in, %d chars out)",
        source.label, target.label, len(text), len(output),
    )
    return output

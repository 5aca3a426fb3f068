"""Canonical intermediate value model shared by all codecs.

WHY: JSON, YAML, XML and CSV each have their own native shapes. Rather
than converting every format directly into every other (twelve paths),
each codec parses into this one value model and serializes out of it
(four parsers + four serializers).

HOW: Six dataclasses form a closed tagged union:
  Null    — absence of a value
  Bool    — true / false
  Number  — decimal-preserving number (stored as Decimal)
  String  — text
  Array   — ordered list of values
  Object  — ordered mapping of string keys to values

Two bridges connect the IR to plain Python data, as produced and
consumed by simplejson and PyYAML:
  from_native — dict/list/str/... → IR
  to_native   — IR → dict/list/str/...

RULES:
- A value is exactly one variant; no implicit coercion between them
- Object keys are unique; insertion order is preserved
- Number stores a Decimal; ints and floats are converted on construction
- bool is checked before int (bool is an int subclass in Python)
- text_form() is the single definition of a value's "natural text"
"""

from __future__ import annotations

import datetime
import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, ClassVar, Dict, List, Optional, Set, Union

import simplejson

from data_converter.core.errors import ErrorKind, ParseError


@dataclass
class Null:
    """The null value (JSON null, YAML ~, empty XML leaf)."""

    type_name: ClassVar[str] = "null"


@dataclass
class Bool:
    value: bool

    type_name: ClassVar[str] = "boolean"


@dataclass
class Number:
    """A number that keeps its decimal digits.

    WHY: Converting JSON to CSV or XML writes numbers as text. Going
    through float would turn ``0.10`` into ``0.1`` and lose digits of
    large integers, so the IR keeps a Decimal.

    RULES:
    - int, float and str inputs are converted to Decimal on construction
    - Only finite numbers are valid; from_native maps NaN/Infinity to Null
    """

    value: Decimal

    type_name: ClassVar[str] = "number"

    def __post_init__(self) -> None:
        if isinstance(self.value, bool):
            raise TypeError("Number does not accept bool; use Bool")
        if not isinstance(self.value, Decimal):
            self.value = Decimal(repr(self.value) if isinstance(self.value, float) else str(self.value))


@dataclass
class String:
    value: str

    type_name: ClassVar[str] = "string"


@dataclass
class Array:
    items: List["Value"] = field(default_factory=list)

    type_name: ClassVar[str] = "array"


@dataclass
class Object:
    fields: Dict[str, "Value"] = field(default_factory=dict)

    type_name: ClassVar[str] = "object"


Value = Union[Null, Bool, Number, String, Array, Object]

SCALAR_TYPES = (Null, Bool, Number, String)


def is_scalar(value: Value) -> bool:
    return isinstance(value, SCALAR_TYPES)


# ---------------------------------------------------------------------------
# Native Python bridges
# ---------------------------------------------------------------------------


def from_native(obj: Any, format: Optional[str] = None) -> Value:
    """Build an IR value from plain Python data.

    WHY: The JSON decoder and PyYAML both return nested dicts, lists and
    scalars. This is the one place those are mapped onto the IR, so the
    JSON and YAML codecs stay thin.

    HOW: Recursive type dispatch. Dates and datetimes (YAML timestamps)
    become ISO-8601 strings. Non-finite floats (YAML ``.nan``/``.inf``)
    become Null, the way a JSON serializer would render them. Containers
    on the current path are tracked by id, so a YAML alias that refers
    to one of its own ancestors is reported instead of recursing forever.

    RULES:
    - bool before int
    - dict keys are converted with their text form (YAML allows non-string keys)
    - Unsupported types (e.g. bytes from ``!!binary``) raise
      ParseError(UNSUPPORTED_VALUE)
    - A container that contains itself raises ParseError(UNSUPPORTED_VALUE);
      the same container reached twice without a cycle is fine

    Args:
        obj: Python value to convert.
        format: Format key used in the error message, if any.

    Returns:
        The equivalent IR value.
    """
    return _from_native(obj, format, set())


def _from_native(obj: Any, format: Optional[str], active: Set[int]) -> Value:
    if obj is None:
        return Null()
    if isinstance(obj, bool):
        return Bool(obj)
    if isinstance(obj, int):
        return Number(Decimal(obj))
    if isinstance(obj, float):
        if not math.isfinite(obj):
            return Null()
        return Number(Decimal(repr(obj)))
    if isinstance(obj, Decimal):
        if not obj.is_finite():
            return Null()
        return Number(obj)
    if isinstance(obj, str):
        return String(obj)
    if isinstance(obj, (list, tuple, dict)):
        if id(obj) in active:
            raise ParseError(
                "Self-referencing {} cannot be converted".format(
                    "mapping" if isinstance(obj, dict) else "sequence"
                ),
                ErrorKind.UNSUPPORTED_VALUE,
                format,
            )
        active.add(id(obj))
        try:
            if isinstance(obj, dict):
                fields: Dict[str, Value] = {}
                for key, item in obj.items():
                    fields[_key_text(key, format)] = _from_native(item, format, active)
                return Object(fields)
            return Array([_from_native(item, format, active) for item in obj])
        finally:
            active.discard(id(obj))
    if isinstance(obj, (datetime.datetime, datetime.date, datetime.time)):
        return String(obj.isoformat())
    raise ParseError(
        "Unsupported value of type '{}'".format(type(obj).__name__),
        ErrorKind.UNSUPPORTED_VALUE,
        format,
    )


def _key_text(key: Any, format: Optional[str]) -> str:
    if isinstance(key, str):
        return key
    if key is None:
        return "null"
    return text_form(from_native(key, format))


def to_native(value: Value) -> Any:
    """Convert an IR value back to plain Python data.

    RULES:
    - Numbers written without fraction or exponent become int (exact, any size)
    - Every other number stays a Decimal, so ``0.10`` and ``1.0`` keep
      their digits; the JSON and YAML writers both accept Decimal
    - Objects become dicts with the same key order
    """
    if isinstance(value, Null):
        return None
    if isinstance(value, Bool):
        return value.value
    if isinstance(value, Number):
        if value.value.as_tuple().exponent == 0:
            return int(value.value)
        return value.value
    if isinstance(value, String):
        return value.value
    if isinstance(value, Array):
        return [to_native(item) for item in value.items]
    if isinstance(value, Object):
        return {key: to_native(item) for key, item in value.fields.items()}
    raise TypeError("Not an IR value: {!r}".format(value))


def dump_json(native: Any, indent: Optional[int] = None) -> str:
    """Write plain data as JSON, Decimals verbatim.

    ``indent`` of 0 or None gives compact output with no spaces.
    """
    if not indent:
        return simplejson.dumps(
            native, separators=(",", ":"), ensure_ascii=False, use_decimal=True,
        )
    return simplejson.dumps(native, indent=indent, ensure_ascii=False, use_decimal=True)


# Positive exponents up to this many digits are written out in full.
_MAX_EXPANDED_DIGITS = 21


def number_text(number: Decimal) -> str:
    """Decimal → text, keeping digits.

    Small positive exponents are expanded (``1E+2`` → ``100``); larger
    ones stay in scientific notation so ``1e999999`` never becomes a
    million-digit string.
    """
    if number.as_tuple().exponent > 0 and number.adjusted() < _MAX_EXPANDED_DIGITS:
        return str(int(number))
    return str(number)


def text_form(value: Value) -> str:
    """Return the natural text form of a value.

    Used wherever a value has to become a single piece of text: CSV
    cells, XML text and attribute values, and non-string Object keys.

    RULES:
    - Null → ""
    - Bool → "true" / "false"
    - Number → its decimal digits
    - String → unchanged
    - Array / Object → compact JSON text
    """
    if isinstance(value, Null):
        return ""
    if isinstance(value, Bool):
        return "true" if value.value else "false"
    if isinstance(value, Number):
        return number_text(value.value)
    if isinstance(value, String):
        return value.value
    return dump_json(to_native(value))

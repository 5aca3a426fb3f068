"""JSON codec — thin adapter over simplejson.

WHY: JSON already is a key/value tree, so the codec only has to bridge
decoded values and the IR, keep number digits intact in both
directions, and turn decoder exceptions into ParseError.

HOW: simplejson.loads with ``use_decimal=True`` so fractional numbers
keep their digits, then ir.from_native. Serialization goes through
ir.to_native and ir.dump_json, which writes Decimals verbatim
(``0.10`` stays ``0.10``, ``1.0`` stays ``1.0``).

RULES:
- NaN, Infinity and -Infinity literals are rejected (not valid JSON)
- Duplicate keys: last value wins, first key position is kept
- Indent comes from CodecOptions.json_indent; 0/None → compact
- Non-ASCII characters are written as-is (ensure_ascii=False)
- Output has no trailing newline
"""

from __future__ import annotations

from typing import Tuple

import simplejson

from data_converter.core.errors import ErrorKind, ParseError
from data_converter.core.ir import Value, dump_json, from_native, to_native
from data_converter.formats.base import BaseCodec, DataFormat


def _reject_constant(name: str) -> None:
    raise ValueError("{} is not valid JSON".format(name))


class JSONCodec(BaseCodec):
    """JSON ⇄ IR."""

    format = DataFormat.JSON

    @property
    def name(self) -> str:
        return "JSON"

    @property
    def media_type(self) -> str:
        return "application/json"

    @property
    def extensions(self) -> Tuple[str, ...]:
        return (".json",)

    def parse(self, text: str) -> Value:
        self._require_content(text)
        with self._parse_guard():
            try:
                native = simplejson.loads(text, use_decimal=True, parse_constant=_reject_constant)
            except simplejson.JSONDecodeError as exc:
                raise ParseError(
                    "Invalid JSON at line {}, column {}: {}".format(exc.lineno, exc.colno, exc.msg),
                    ErrorKind.SYNTAX,
                    self.format.value,
                ) from exc
            except ValueError as exc:
                raise ParseError(
                    "Invalid JSON: {}".format(exc),
                    ErrorKind.SYNTAX,
                    self.format.value,
                ) from exc
            return from_native(native, self.format.value)

    def serialize(self, value: Value) -> str:
        with self._serialize_guard():
            return dump_json(to_native(value), self.options.json_indent)

"""YAML codec — thin adapter over PyYAML.

WHY: YAML maps onto the same key/value tree as JSON; PyYAML's safe
loader and dumper do the heavy lifting and this module only bridges to
the IR.

HOW: A SafeLoader subclass reads floats as Decimal, then ir.from_native
builds the IR. On the way out, ir.to_native feeds a SafeDumper subclass
that writes Decimals as plain float scalars with their own digits.
PyYAML errors carry a problem mark that is turned into a line/column in
the ParseError message.

RULES:
- Only safe loader/dumper subclasses are used (no Python object tags)
- A single document per input; multi-document streams are a syntax error
- Timestamps become ISO-8601 strings, non-string keys become their text
- Float digits survive a YAML round trip (``0.10`` is not read as 0.1)
- Output is block style, keeps key order and writes unicode as-is
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Tuple

import yaml

from data_converter.core.errors import ErrorKind, ParseError
from data_converter.core.ir import Value, from_native, to_native
from data_converter.formats.base import BaseCodec, DataFormat

_FLOAT_TAG = "tag:yaml.org,2002:float"


class DecimalSafeLoader(yaml.SafeLoader):
    """SafeLoader that keeps the digits of float scalars."""


class DecimalSafeDumper(yaml.SafeDumper):
    """SafeDumper that writes Decimal values as float scalars."""


def _construct_decimal(loader: DecimalSafeLoader, node: yaml.ScalarNode):
    text = loader.construct_scalar(node)
    try:
        return Decimal(text.replace("_", ""))
    except InvalidOperation:
        # .inf, .nan and sexagesimal floats
        return loader.construct_yaml_float(node)


def _represent_decimal(dumper: DecimalSafeDumper, data: Decimal) -> yaml.ScalarNode:
    mantissa, marker, exponent = str(data).partition("E")
    # A float scalar needs a "." to resolve as a float without a tag
    if "." not in mantissa:
        mantissa += ".0"
    return dumper.represent_scalar(_FLOAT_TAG, mantissa + marker + exponent)


DecimalSafeLoader.add_constructor(_FLOAT_TAG, _construct_decimal)
DecimalSafeDumper.add_representer(Decimal, _represent_decimal)


def _describe_yaml_error(exc: yaml.YAMLError) -> str:
    mark = getattr(exc, "problem_mark", None)
    problem = getattr(exc, "problem", None) or str(exc)
    if mark is not None:
        return "Invalid YAML at line {}, column {}: {}".format(
            mark.line + 1, mark.column + 1, problem,
        )
    return "Invalid YAML: {}".format(problem)


class YAMLCodec(BaseCodec):
    """YAML ⇄ IR."""

    format = DataFormat.YAML

    @property
    def name(self) -> str:
        return "YAML"

    @property
    def media_type(self) -> str:
        return "application/yaml"

    @property
    def extensions(self) -> Tuple[str, ...]:
        return (".yaml", ".yml")

    def parse(self, text: str) -> Value:
        self._require_content(text)
        with self._parse_guard():
            try:
                native = yaml.load(text, Loader=DecimalSafeLoader)
            except yaml.YAMLError as exc:
                raise ParseError(
                    _describe_yaml_error(exc),
                    ErrorKind.SYNTAX,
                    self.format.value,
                ) from exc
            except ValueError as exc:
                # int() refuses integers longer than the interpreter's digit limit
                raise ParseError(
                    "Invalid YAML: {}".format(exc),
                    ErrorKind.SYNTAX,
                    self.format.value,
                ) from exc
            return from_native(native, self.format.value)

    def serialize(self, value: Value) -> str:
        with self._serialize_guard():
            return yaml.dump(
                to_native(value),
                Dumper=DecimalSafeDumper,
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True,
                indent=self.options.yaml_indent or None,
            )

"""Unit tests for the canonical IR and its native-Python bridges.

WHY: Every codec relies on from_native/to_native/text_form. A wrong
bool/int check or a lossy number conversion here would silently corrupt
every conversion path.

HOW: Direct calls with small hand-built values, grouped by helper.

RULES:
- No codec is used in this module
"""

import datetime
from decimal import Decimal

import pytest

from data_converter.core.errors import ErrorKind, ParseError
from data_converter.core.ir import (
    Array,
    Bool,
    Null,
    Number,
    Object,
    String,
    from_native,
    is_scalar,
    text_form,
    to_native,
)


class TestNumber:
    def test_int_and_decimal_compare_equal(self):
        assert Number(5) == Number(Decimal("5"))

    def test_float_uses_shortest_repr(self):
        assert Number(0.1).value == Decimal("0.1")

    def test_bool_rejected(self):
        with pytest.raises(TypeError):
            Number(True)


class TestFromNative:
    def test_bool_before_int(self):
        assert from_native(True) == Bool(True)
        assert from_native(1) == Number(1)

    def test_nested_structure(self):
        value = from_native({"a": [1, "x", None], "b": {"c": False}})
        assert value == Object({
            "a": Array([Number(1), String("x"), Null()]),
            "b": Object({"c": Bool(False)}),
        })

    def test_key_order_preserved(self):
        value = from_native({"z": 1, "a": 2, "m": 3})
        assert list(value.fields) == ["z", "a", "m"]

    def test_non_string_keys_use_text_form(self):
        value = from_native({1: "a", None: "b", False: "c", 2.5: "d"})
        assert list(value.fields) == ["1", "null", "false", "2.5"]

    def test_non_finite_floats_become_null(self):
        assert from_native(float("nan")) == Null()
        assert from_native(float("inf")) == Null()

    def test_dates_become_iso_strings(self):
        assert from_native(datetime.date(2024, 1, 2)) == String("2024-01-02")
        assert from_native(datetime.datetime(2024, 1, 2, 3, 4, 5)) == String("2024-01-02T03:04:05")

    def test_unsupported_type_raises(self):
        with pytest.raises(ParseError) as exc_info:
            from_native(b"raw", format="yaml")
        assert exc_info.value.kind is ErrorKind.UNSUPPORTED_VALUE
        assert exc_info.value.format == "yaml"
        assert "bytes" in str(exc_info.value)

    def test_self_referencing_list_raises(self):
        looped = []
        looped.append(looped)
        with pytest.raises(ParseError) as exc_info:
            from_native(looped, format="yaml")
        assert exc_info.value.kind is ErrorKind.UNSUPPORTED_VALUE
        assert exc_info.value.format == "yaml"

    def test_self_referencing_dict_raises(self):
        looped = {}
        looped["self"] = {"again": looped}
        with pytest.raises(ParseError) as exc_info:
            from_native(looped)
        assert exc_info.value.kind is ErrorKind.UNSUPPORTED_VALUE

    def test_shared_container_without_cycle_is_fine(self):
        shared = [1, 2]
        value = from_native({"a": shared, "b": shared})
        assert value.fields["a"] == value.fields["b"] == Array([Number(1), Number(2)])


class TestToNative:
    def test_integers_become_int(self):
        assert to_native(Number(2)) == 2
        assert isinstance(to_native(Number(2)), int)

    def test_large_integers_stay_exact(self):
        assert to_native(Number(Decimal("12345678901234567890"))) == 12345678901234567890

    def test_fractions_stay_decimal(self):
        native = to_native(Number(Decimal("0.10000000000000000001")))
        assert isinstance(native, Decimal)
        assert str(native) == "0.10000000000000000001"

    def test_trailing_zero_kept(self):
        assert str(to_native(Number(Decimal("2.0")))) == "2.0"

    def test_huge_exponent_not_expanded(self):
        native = to_native(Number(Decimal("1E+5000")))
        assert isinstance(native, Decimal)
        assert str(native) == "1E+5000"

    def test_round_trip(self, mixed_ir):
        assert from_native(to_native(mixed_ir)) == mixed_ir


class TestTextForm:
    def test_scalars(self):
        assert text_form(Null()) == ""
        assert text_form(Bool(True)) == "true"
        assert text_form(Bool(False)) == "false"
        assert text_form(String("x y")) == "x y"

    def test_number_keeps_digits(self):
        assert text_form(Number(Decimal("0.10"))) == "0.10"

    def test_number_expands_small_positive_exponent(self):
        assert text_form(Number(Decimal("1E+2"))) == "100"

    def test_number_keeps_large_exponent_scientific(self):
        assert text_form(Number(Decimal("1E+5000"))) == "1E+5000"
        assert text_form(Number(Decimal("1E+999999999"))) == "1E+999999999"

    def test_containers_as_compact_json(self):
        assert text_form(Object({"a": Number(1)})) == '{"a":1}'
        assert text_form(Array([Number(1), String("é")])) == '[1,"é"]'

    def test_container_numbers_keep_digits(self):
        assert text_form(Array([Number(Decimal("0.10")), Number(Decimal("1.0"))])) == "[0.10,1.0]"

    def test_is_scalar(self):
        assert is_scalar(String("x"))
        assert is_scalar(Null())
        assert not is_scalar(Array([]))
        assert not is_scalar(Object({}))

"""Unit tests for engines.runtime (JavaScript semantics used by generated code)."""

import logging
import math

import pytest

from livedemo.engines import runtime as rt


class TestConversions:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, "undefined"),
            (True, "true"),
            (3, "3"),
            (2.0, "2"),
            (0.5, "0.5"),
            (math.nan, "NaN"),
            (-math.inf, "-Infinity"),
            ([1, None, "a"], "1,,a"),
            ({"a": 1}, "[object Object]"),
        ],
    )
    def test_to_str(self, value: object, expected: str) -> None:
        assert rt.to_str(value) == expected

    def test_to_num(self) -> None:
        assert rt.to_num("42") == 42
        assert rt.to_num(" 1.5 ") == 1.5
        assert rt.to_num("") == 0
        assert rt.to_num("0x10") == 16
        assert rt.to_num(True) == 1
        assert math.isnan(rt.to_num("abc"))
        assert math.isnan(rt.to_num(None))

    def test_truthy(self) -> None:
        for falsy in (None, False, 0, 0.0, math.nan, ""):
            assert rt.truthy(falsy) is False
        for value in ("0", [], {}, -1, "false"):
            assert rt.truthy(value) is True


class TestOperators:
    def test_add_concatenates_with_strings(self) -> None:
        assert rt.add("a", 1) == "a1"
        assert rt.add(1, "2") == "12"
        assert rt.add("x", None) == "xundefined"

    def test_add_numbers(self) -> None:
        assert rt.add(1, 2) == 3
        assert math.isnan(rt.add(1, None))

    def test_division_by_zero(self) -> None:
        assert rt.div(1, 0) == math.inf
        assert math.isnan(rt.div(0, 0))

    def test_typeof(self) -> None:
        assert rt.typeof(None) == "undefined"
        assert rt.typeof(rt.JSMap()) == "object"
        assert rt.typeof(1) == "number"
        assert rt.typeof("s") == "string"
        assert rt.typeof(False) == "boolean"
        assert rt.typeof(lambda: 1) == "function"
        assert rt.typeof({}) == "object"
        assert rt.typeof(rt.MATH) == "object"

    def test_instanceof_array(self) -> None:
        assert rt.instanceof([], rt.ARRAY)
        assert not rt.instanceof({}, rt.ARRAY)

    def test_instanceof_non_callable(self) -> None:
        with pytest.raises(TypeError, match="instanceof"):
            rt.instanceof(1, 2)

    def test_has(self) -> None:
        assert rt.has({"a": 1}, "a")
        assert rt.has([1, 2], 1)
        assert not rt.has([1, 2], 5)
        with pytest.raises(TypeError):
            rt.has("text", "length")


class TestMemberAccess:
    def test_undefined_property_read(self) -> None:
        with pytest.raises(TypeError, match=r"Cannot read properties of undefined \(reading 'name'\)"):
            rt.js_getattr(None, "name")

    def test_missing_key_is_undefined(self) -> None:
        assert rt.js_getattr({"a": 1}, "b") is None
        assert rt.js_getitem([1, 2], 9) is None

    def test_array_length_and_methods(self) -> None:
        items = [3, 1, 2]
        assert rt.js_getattr(items, "length") == 3
        assert rt.js_getattr(items, "map")(lambda x, *extra: x * 2) == [6, 2, 4]
        assert rt.js_getattr(items, "join")("-") == "3-1-2"

    def test_string_methods(self) -> None:
        assert rt.js_getattr("hello", "charAt")(0) == "h"
        assert rt.js_getattr("hello", "slice")(1, -1) == "ell"
        assert rt.js_getattr("a,b", "split")(",") == ["a", "b"]

    def test_iterating_undefined(self) -> None:
        with pytest.raises(TypeError, match="undefined is not iterable"):
            rt.js_iter(None)

    def test_plain_object_not_iterable(self) -> None:
        with pytest.raises(TypeError):
            rt.js_iter({"a": 1})

    def test_put_extends_list(self) -> None:
        items: list = []
        rt.put(items, 2, "x")
        assert items == [None, None, "x"]

    def test_put_on_library_class_rejected(self) -> None:
        class Library:
            pass

        with pytest.raises(TypeError, match="read only class"):
            rt.put(Library, "x", 1)

    def test_source_key(self) -> None:
        assert rt.source_key("priv_count") == "#count"
        assert rt.source_key("u_hidden") == "_hidden"
        assert rt.source_key("S_el") == "$el"


class TestErrors:
    def test_name_error_message(self) -> None:
        assert rt.error_message(NameError("name 'foo' is not defined")) == "foo is not defined"

    def test_reserved_name_unmangled(self) -> None:
        assert rt.error_message(NameError("name 'print_' is not defined")) == "print is not defined"

    def test_recursion_message(self) -> None:
        assert rt.error_message(RecursionError()) == "Maximum call stack size exceeded"

    def test_none_not_callable(self) -> None:
        assert rt.error_message(TypeError("'NoneType' object is not callable")) == "undefined is not a function"

    def test_js_error_message(self) -> None:
        assert rt.error_message(rt.JSError("boom")) == "boom"
        assert rt.error_message(rt.JSThrown("plain")) == "plain"

    def test_caught_values(self) -> None:
        assert rt.caught(rt.JSThrown(42)) == 42
        caught = rt.caught(TypeError("bad"))
        assert isinstance(caught, rt.JSTypeError)
        assert caught.toString() == "TypeError: bad"

    def test_throwable(self) -> None:
        err = rt.JSError("x")
        assert rt.throwable(err) is err
        assert isinstance(rt.throwable("text"), rt.JSThrown)


class TestGlobals:
    def test_math(self) -> None:
        assert rt.MATH.round(2.5) == 3
        assert rt.MATH.round(-2.5) == -2
        assert rt.MATH.max() == -math.inf

    def test_json_stringify(self) -> None:
        assert rt.JSON_.stringify({"a": 1, "b": None}) == '{"a":1,"b":null}'
        assert rt.JSON_.stringify(None) is None

    def test_json_parse_error(self) -> None:
        with pytest.raises(rt.JSSyntaxError):
            rt.JSON_.parse("{bad")

    def test_parse_int(self) -> None:
        assert rt.parse_int("42px") == 42
        assert math.isnan(rt.parse_int("px"))

    def test_console_logs_with_extra(self, caplog: pytest.LogCaptureFixture) -> None:
        console = rt.make_console(extra={"demo_id": "d1"})
        with caplog.at_level(logging.INFO, logger=rt.CONSOLE_LOGGER):
            console.log("hello", {"a": 1})
        record = caplog.records[-1]
        assert record.getMessage() == 'hello {"a": 1}'
        assert record.demo_id == "d1"


class TestEquality:
    @pytest.mark.parametrize(
        ("left", "right", "expected"),
        [
            (1, 1.0, True),
            (1, True, False),
            ("a", "a", True),
            (None, None, True),
            (math.nan, math.nan, False),
        ],
    )
    def test_strict_eq(self, left: object, right: object, expected: bool) -> None:
        assert rt.strict_eq(left, right) is expected

    def test_strict_eq_objects_by_identity(self) -> None:
        items: list = []
        assert rt.strict_eq(items, items)
        assert not rt.strict_eq(items, [])
        assert not rt.strict_eq({}, {})

    @pytest.mark.parametrize(
        ("left", "right", "expected"),
        [
            (1, "1", True),
            (0, "", True),
            (True, 1, True),
            (False, "0", True),
            (None, 0, False),
            ([], "", True),
            ([1, 2], "1,2", True),
            ("a", "b", False),
        ],
    )
    def test_loose_eq(self, left: object, right: object, expected: bool) -> None:
        assert rt.loose_eq(left, right) is expected

    def test_logical_helpers_return_operands(self) -> None:
        items: list = []
        assert rt.logical_or(items, lambda: "fallback") is items
        assert rt.logical_or(math.nan, lambda: "fallback") == "fallback"
        assert rt.logical_and("", lambda: "never") == ""
        assert rt.logical_and({}, lambda: 2) == 2


class TestCollections:
    def test_map_keys_by_value_and_identity(self) -> None:
        m = rt.JSMap([["a", 1]])
        key: dict = {}
        m.set(key, "obj").set(math.nan, "nan")
        assert m.get("a") == 1
        assert m.get(key) == "obj"
        assert m.get({}) is None
        assert m.get(math.nan) == "nan"
        assert m.size == 3
        assert m.keys()[0] == "a"

    def test_map_true_and_one_are_distinct(self) -> None:
        m = rt.JSMap()
        m.set(1, "one").set(True, "yes")
        assert (m.get(1), m.get(True), m.size) == ("one", "yes", 2)

    def test_set_keeps_insertion_order(self) -> None:
        s = rt.JSSet(["b", "a", "b"])
        assert s.values() == ["b", "a"]
        assert not s.delete("z")
        assert s.delete("b")
        assert list(s) == ["a"]

    def test_date_from_epoch(self) -> None:
        d = rt.JSDate(0)
        assert d.toISOString() == "1970-01-01T00:00:00.000Z"
        assert d.getDay() == 4
        assert rt.to_num(d) == 0
        assert rt.JSON_.stringify({"at": d}) == '{"at":"1970-01-01T00:00:00.000Z"}'

    def test_invalid_date(self) -> None:
        d = rt.JSDate("not a date")
        assert math.isnan(d.getTime())
        assert d.toString() == "Invalid Date"
        with pytest.raises(rt.JSRangeError):
            d.toISOString()

    def test_globals_expose_collections(self) -> None:
        g = rt.js_globals(rt.make_console())
        assert g["Map"] is rt.JSMap
        assert g["Set"] is rt.JSSet
        assert g["Date"] is rt.JSDate

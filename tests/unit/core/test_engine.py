"""Unit tests for the iterative flattening engine."""
import json
import logging
from decimal import Decimal

import pytest

from jsonflatpy.config.options import FlattenOptions
from jsonflatpy.core.engine import ContainerCursor, FlattenEngine, flatten_value, is_map_shaped
from jsonflatpy.modes import FlattenMode
from jsonflatpy.source import parse_json


def flat(text, options=None):
    return flatten_value(parse_json(text), options)


class TestContainerCursor:
    """Test cursor iteration over objects and arrays."""

    def test_object_cursor_tracks_member_names(self):
        cursor = ContainerCursor({"x": 1, "y": 2})

        assert cursor.advance() == 1
        assert cursor.segment == "x"
        assert cursor.advance() == 2
        assert cursor.segment == "y"
        assert not cursor.has_next()

    def test_array_cursor_tracks_indexes(self):
        cursor = ContainerCursor(["a", "b"])

        assert cursor.has_next()
        cursor.advance()
        assert cursor.segment == 0
        cursor.advance()
        assert cursor.segment == 1
        assert not cursor.has_next()


class TestNormalMode:
    """Test flattening in NORMAL mode."""

    def test_nested_document(self, nested_json):
        result = flat(nested_json)

        assert result == {
            "a.b": Decimal("1"),
            "a.c": None,
            "a.d[0]": False,
            "a.d[1]": True,
            "e": "f",
            "g": Decimal("2.3"),
        }
        assert list(result) == ["a.b", "a.c", "a.d[0]", "a.d[1]", "e", "g"]

    def test_empty_root_object_emits_nothing(self):
        assert flat("{}") == {}

    def test_empty_root_array_is_stored_under_root(self):
        assert flat("[]") == {"root": []}

    def test_root_array(self):
        assert flat("[1,2,3]") == {"[0]": 1, "[1]": 2, "[2]": 3}

    @pytest.mark.parametrize("text,expected", [
        ("5", Decimal("5")),
        ('"text"', "text"),
        ("true", True),
        ("null", None),
    ])
    def test_bare_scalar_root(self, text, expected):
        result = flat(text)

        assert list(result) == ["root"]
        assert result["root"] == expected

    def test_nested_empty_containers_are_values(self):
        assert flat('{"a":{},"b":[],"c":{"d":[]}}') == {"a": {}, "b": [], "c.d": []}

    def test_empty_object_under_root_key_is_skipped(self):
        assert flat('{"root":{}}') == {}
        assert flat('{"root":{},"a":1}') == {"a": Decimal("1")}

    def test_root_member_in_kept_array_object_is_skipped(self, keep_arrays_options):
        result = flat('{"a":[{"root":{}},{"root":{},"b":2}]}', keep_arrays_options)

        assert result == {"a": [{}, {"b": Decimal("2")}]}

    def test_member_named_root_with_other_values_is_kept(self):
        assert flat('{"root":{"x":1}}') == {"root.x": Decimal("1")}
        assert flat('{"root":[]}') == {"root": []}

    def test_whitespace_name_is_fenced(self):
        assert flat('{"x y":1}') == {'[\\"x y\\"]': 1}

    def test_separator_in_name_is_fenced(self):
        result = flat('{"a.b":{"c":1}}')

        assert result == {'[\\"a.b\\"].c': 1}

    def test_arrays_of_arrays(self):
        assert flat('{"m":[[1,2],[3]]}') == {"m[0][0]": 1, "m[0][1]": 2, "m[1][0]": 3}

    def test_exact_decimals(self):
        result = flat('{"a":0.1000000000000000055511151231257827,"b":1E+400,"c":12345678901234567890123}')

        assert str(result["a"]) == "0.1000000000000000055511151231257827"
        assert str(result["b"]) == "1E+400"
        assert str(result["c"]) == "12345678901234567890123"

    def test_custom_characters(self):
        options = FlattenOptions(separator="/", left_bracket="(", right_bracket=")")

        assert flat('{"a":{"b":[1]}}', options) == {"a/b(0)": 1}

    def test_python_values(self):
        result = flatten_value({"a": 1.5, "b": True, "c": (1, 2)})

        assert result == {"a": Decimal("1.5"), "b": True, "c[0]": 1, "c[1]": 2}
        assert result["b"] is True


class TestKeepArraysMode:
    """Test flattening in KEEP_ARRAYS mode."""

    def test_root_array_is_kept_whole(self, keep_arrays_options):
        assert flat("[1,2,3]", keep_arrays_options) == {"root": [1, 2, 3]}

    def test_nested_document(self, nested_json, keep_arrays_options):
        result = flat(nested_json, keep_arrays_options)

        assert result == {
            "a.b": 1,
            "a.c": None,
            "a.d": [False, True],
            "e": "f",
            "g": Decimal("2.3"),
        }

    def test_object_in_array_is_flattened_independently(self, keep_arrays_options):
        result = flat('{"a":[{"b":1}]}', keep_arrays_options)

        assert result == {"a": [{"b": 1}]}

    def test_deep_objects_inside_arrays(self, keep_arrays_options):
        result = flat('{"a":[[1,{}],{"b":{"c":[3]}},[]]}', keep_arrays_options)

        assert result == {"a": [[1, {}], {"b.c": [3]}, []]}

    def test_empty_root_array(self, keep_arrays_options):
        assert flat("[]", keep_arrays_options) == {"root": []}

    def test_nested_flatten_inherits_characters(self):
        options = FlattenOptions(
            flatten_mode=FlattenMode.KEEP_ARRAYS, separator="/", left_bracket="<", right_bracket=">"
        )

        result = flat('{"a":[{"b":{"c":1},"x y":2}]}', options)

        assert result == {"a": [{"b/c": 1, '<\\"x y\\">': 2}]}


class TestFlattenProperties:
    """Properties that hold for every flatten pass."""

    def test_determinism(self, nested_json):
        first = flat(nested_json)
        second = flat(nested_json)

        assert first == second
        assert list(first.items()) == list(second.items())

    def test_member_order_is_preserved(self):
        result = flat('{"b":{"z":1,"y":2},"a":3,"c":[4]}')

        assert list(result) == ["b.z", "b.y", "a", "c[0]"]

    def test_modes_agree_without_arrays(self, keep_arrays_options):
        text = '{"a":{"b":{"c":"d"}},"e":null,"f":{}}'

        assert flat(text) == flat(text, keep_arrays_options)

    def test_keys_are_unique(self):
        text = '{"a":{"b":1},"a.b":2,"x":[{"y":1},{"y":2}]}'
        value = parse_json(text)

        result = flatten_value(value)

        assert len(result) == 4
        assert '[\\"a.b\\"]' in result

    def test_deep_nesting_does_not_recurse(self):
        depth = 20000
        value = "leaf"
        for _ in range(depth):
            value = {"k": value}

        result = flatten_value(value)

        assert list(result.values()) == ["leaf"]
        assert next(iter(result)).count(".") == depth - 1

    def test_deep_array_nesting(self):
        depth = 5000
        value = [1]
        for _ in range(depth):
            value = [value]

        result = flatten_value(value)

        assert next(iter(result)) == "[0]" * (depth + 1)


class TestFlattenEngine:
    """Test engine wiring and logging."""

    def test_engine_is_reusable(self):
        engine = FlattenEngine(FlattenOptions())

        assert engine.run({"a": 1}) == {"a": 1}
        assert engine.run({"b": 2}) == {"b": 2}

    def test_logs_flatten_pass(self, caplog):
        caplog.set_level(logging.DEBUG, logger="jsonflatpy")

        flatten_value({"a": {"b": 1}})

        records = [r for r in caplog.records if getattr(r, "operation", None) == "flatten_pass"]
        assert len(records) == 1
        assert records[0].entries == 1
        assert records[0].max_depth == 2
        assert records[0].mode == "normal"


class TestIsMapShaped:
    """Test the choice between rendering the mapping and the root value."""

    def test_object_source(self):
        assert is_map_shaped({}, {})

    def test_array_source_split_into_keys(self):
        assert is_map_shaped([1], {"[0]": 1})

    def test_array_source_stored_under_root(self):
        assert not is_map_shaped([], {"root": []})

    def test_scalar_source(self):
        assert not is_map_shaped(5, {"root": 5})

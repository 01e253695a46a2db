"""Unit tests for JSON rendering."""
from decimal import Decimal

import pytest

from jsonflatpy.core.renderer import JsonRenderer
from jsonflatpy.escaping import StringEscapePolicy, escape_json
from jsonflatpy.modes import PrintMode


@pytest.fixture
def renderer():
    return JsonRenderer(escape_json)


class TestJsonRenderer:
    """Test JsonRenderer.render."""

    @pytest.mark.parametrize("value,expected", [
        (None, "null"),
        (True, "true"),
        (False, "false"),
        (Decimal("2.3"), "2.3"),
        (Decimal("-0"), "-0"),
        (Decimal("1E+400"), "1E+400"),
        ("f", '"f"'),
        ([], "[]"),
        ({}, "{}"),
    ])
    def test_scalars_and_empty_containers(self, renderer, value, expected):
        assert renderer.render(value) == expected

    def test_minimal_mapping(self, renderer):
        value = {"a.b": Decimal("1"), "a.c": None, "e": "f"}

        assert renderer.render(value) == '{"a.b":1,"a.c":null,"e":"f"}'

    def test_string_values_are_escaped(self, renderer):
        assert renderer.render({"a": 'x"y\n'}) == '{"a":"x\\"y\\n"}'

    def test_keys_are_written_verbatim(self, renderer):
        assert renderer.render({'[\\"a.b\\"]': True}) == '{"[\\"a.b\\"]":true}'

    def test_escape_keys(self):
        renderer = JsonRenderer(escape_json, escape_keys=True)

        assert renderer.render({'a"b': 1}) == '{"a\\"b":1}'

    def test_regular_mode(self):
        renderer = JsonRenderer(escape_json, PrintMode.REGULAR)

        assert renderer.render({"a": 1, "b": [1, 2]}) == '{"a": 1, "b": [1, 2]}'

    def test_pretty_mode(self):
        renderer = JsonRenderer(escape_json, PrintMode.PRETTY)

        assert renderer.render({"a": 1, "b": [1, {}]}) == (
            '{\n'
            '  "a": 1,\n'
            '  "b": [\n'
            '    1,\n'
            '    {}\n'
            '  ]\n'
            '}'
        )

    def test_policy_translator(self):
        renderer = JsonRenderer(StringEscapePolicy.ALL.translator)

        assert renderer.render(["é/"]) == '["\\u00e9\\/"]'

    def test_unsupported_type(self, renderer):
        with pytest.raises(TypeError, match="Cannot render"):
            renderer.render({"a": object()})

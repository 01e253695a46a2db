"""Unit tests for string escape policies."""
import pytest

from jsonflatpy.escaping import (
    StringEscapePolicy,
    escape_all,
    escape_json,
    escape_json_and_slash,
    escape_json_and_unicode,
    resolve_translator,
)


class TestEscapeFunctions:
    """Test the built-in translate functions."""

    def test_json_specials(self):
        assert escape_json('"\\\b\f\n\r\t') == '\\"\\\\\\b\\f\\n\\r\\t'

    def test_other_control_characters(self):
        assert escape_json("\x00\x1f") == "\\u0000\\u001f"

    def test_default_keeps_slash_and_unicode(self):
        assert escape_json("a/é") == "a/é"

    def test_slash(self):
        assert escape_json_and_slash("a/b") == "a\\/b"
        assert escape_json_and_slash("é") == "é"

    def test_unicode(self):
        assert escape_json_and_unicode("é/") == "\\u00e9/"

    def test_astral_characters_use_surrogate_pairs(self):
        assert escape_json_and_unicode("\U0001F600") == "\\ud83d\\ude00"

    def test_all(self):
        assert escape_all('é/"') == '\\u00e9\\/\\"'

    def test_plain_text_unchanged(self):
        assert escape_all("plain text 123") == "plain text 123"


class TestStringEscapePolicy:
    """Test policy lookup."""

    @pytest.mark.parametrize("policy,expected", [
        (StringEscapePolicy.DEFAULT, "é/"),
        (StringEscapePolicy.ALL_BUT_UNICODE, "é\\/"),
        (StringEscapePolicy.ALL_BUT_SLASH, "\\u00e9/"),
        (StringEscapePolicy.ALL, "\\u00e9\\/"),
    ])
    def test_translate(self, policy, expected):
        assert policy.translate("é/") == expected

    def test_policies_from_names(self):
        assert StringEscapePolicy("all") is StringEscapePolicy.ALL

    def test_resolve_callable(self):
        assert resolve_translator(str.upper)("ab") == "AB"

    def test_resolve_policy(self):
        assert resolve_translator(StringEscapePolicy.DEFAULT) is escape_json

    def test_resolve_invalid(self):
        with pytest.raises(TypeError):
            resolve_translator(42)

"""String escape policies.

A policy translates a raw string into the form embedded between double quotes
in rendered JSON text and in flattened keys. Any ``Callable[[str], str]`` can be
used in place of the built-in :class:`StringEscapePolicy` members.
"""
import re
from enum import Enum
from typing import Callable, Union

Translator = Callable[[str], str]

_SHORT_ESCAPES = {
    '"': '\\"',
    '\\': '\\\\',
    '\b': '\\b',
    '\f': '\\f',
    '\n': '\\n',
    '\r': '\\r',
    '\t': '\\t',
}

_JSON_SPECIALS_RE = re.compile(r'["\\\x00-\x1f]')
_JSON_SPECIALS_AND_SLASH_RE = re.compile(r'["\\/\x00-\x1f]')
_JSON_SPECIALS_AND_UNICODE_RE = re.compile(r'["\\\x00-\x1f\x7f-\U0010ffff]')
_ALL_RE = re.compile(r'["\\/\x00-\x1f\x7f-\U0010ffff]')


def _unicode_escape(char: str) -> str:
    code = ord(char)
    if code > 0xFFFF:
        code -= 0x10000
        high = 0xD800 | (code >> 10)
        low = 0xDC00 | (code & 0x3FF)
        return f"\\u{high:04x}\\u{low:04x}"
    return f"\\u{code:04x}"


def _replace(match: "re.Match[str]") -> str:
    char = match.group(0)
    if char == '/':
        return '\\/'
    short = _SHORT_ESCAPES.get(char)
    if short is not None:
        return short
    return _unicode_escape(char)


def escape_json(value: str) -> str:
    """Escape quotes, backslashes and control characters."""
    return _JSON_SPECIALS_RE.sub(_replace, value)


def escape_json_and_slash(value: str) -> str:
    return _JSON_SPECIALS_AND_SLASH_RE.sub(_replace, value)


def escape_json_and_unicode(value: str) -> str:
    """Escape like :func:`escape_json` and also every non-ASCII character."""
    return _JSON_SPECIALS_AND_UNICODE_RE.sub(_replace, value)


def escape_all(value: str) -> str:
    return _ALL_RE.sub(_replace, value)


class StringEscapePolicy(str, Enum):
    """Built-in escape policies."""

    DEFAULT = "default"
    ALL_BUT_UNICODE = "all_but_unicode"
    ALL_BUT_SLASH = "all_but_slash"
    ALL = "all"

    @property
    def translator(self) -> Translator:
        return _TRANSLATORS[self]

    def translate(self, value: str) -> str:
        return _TRANSLATORS[self](value)


_TRANSLATORS = {
    StringEscapePolicy.DEFAULT: escape_json,
    StringEscapePolicy.ALL_BUT_UNICODE: escape_json_and_slash,
    StringEscapePolicy.ALL_BUT_SLASH: escape_json_and_unicode,
    StringEscapePolicy.ALL: escape_all,
}

EscapePolicy = Union[StringEscapePolicy, Translator]


def resolve_translator(policy: EscapePolicy) -> Translator:
    """Return the translate function for a built-in policy or a custom callable."""
    if isinstance(policy, StringEscapePolicy):
        return policy.translator
    if callable(policy):
        return policy
    raise TypeError(f"Escape policy must be a StringEscapePolicy or a callable, got {type(policy).__name__}")

"""Reconstruction of nested structures from flattened keys."""
import json
from typing import Any, Dict, List, Optional, TextIO, Union

from jsonflatpy.config.options import FlattenOptions
from jsonflatpy.core.key_encoder import ROOT, PathSegment
from jsonflatpy.escaping import escape_json
from jsonflatpy.exceptions import MalformedKeyError, PathConflictError
from jsonflatpy.source import is_object, parse_json

_QUOTE = '\\"'


def _unescape(key: str, raw: str, position: int) -> str:
    """Reverse the default escape policy for one name."""
    if "\\" not in raw:
        return raw
    try:
        return json.loads(f'"{raw}"')
    except ValueError as e:
        raise MalformedKeyError(key, position, f"invalid escape sequence in {raw!r}: {e}") from e


class KeySplitter:
    """Splits flattened keys back into path segments."""

    def __init__(self, options: FlattenOptions):
        self.separator = options.separator
        self.left_bracket = options.left_bracket
        self.right_bracket = options.right_bracket

    def split(self, key: str) -> List[PathSegment]:
        segments: List[PathSegment] = []
        position = 0
        length = len(key)

        while True:
            if key.startswith(self.left_bracket, position):
                if key.startswith(_QUOTE, position + 1):
                    name, position = self._read_fenced(key, position)
                    segments.append(name)
                else:
                    index, position = self._read_index(key, position)
                    segments.append(index)
            else:
                if segments and not key.startswith(self.separator, position):
                    raise MalformedKeyError(key, position, "expected separator or bracket")
                if segments:
                    position += 1
                name, position = self._read_name(key, position)
                segments.append(name)

            if position >= length:
                return segments

    def _read_name(self, key: str, start: int):
        end = start
        while end < len(key) and key[end] not in (self.separator, self.left_bracket):
            if key[end] == self.right_bracket:
                raise MalformedKeyError(key, end, "unbalanced closing bracket")
            end += 1
        return _unescape(key, key[start:end], start), end

    def _read_index(self, key: str, start: int):
        end = key.find(self.right_bracket, start + 1)
        if end == -1:
            raise MalformedKeyError(key, start, "unterminated index bracket")
        digits = key[start + 1:end]
        if not (digits.isascii() and digits.isdigit()):
            raise MalformedKeyError(key, start, f"index is not a non-negative integer: {digits!r}")
        return int(digits), end + 1

    def _read_fenced(self, key: str, start: int):
        terminator = _QUOTE + self.right_bracket
        content_start = start + 1 + len(_QUOTE)
        search_from = content_start
        while True:
            end = key.find(terminator, search_from)
            if end == -1:
                raise MalformedKeyError(key, start, "unterminated quoted name")
            after = end + len(terminator)
            # The fence only closes where a new segment or the key end follows
            if after == len(key) or key[after] in (self.separator, self.left_bracket):
                raw = key[content_start:end]
                return _unescape(key, raw, content_start), after
            search_from = end + 1


def split_key(key: str, options: Optional[FlattenOptions] = None) -> List[PathSegment]:
    """Split a flattened key into its named (``str``) and indexed (``int``) segments."""
    return KeySplitter(options or FlattenOptions()).split(key)


def _new_container(segment: PathSegment) -> Union[Dict[str, Any], List[Any]]:
    return [] if isinstance(segment, int) else {}


def _restore(value: Any, options: FlattenOptions) -> Any:
    """Unflatten mappings nested inside kept arrays."""
    if isinstance(value, list):
        return [_restore(item, options) for item in value]
    if isinstance(value, dict) and value:
        return unflatten(value, options)
    return value


def _assign(container: Any, segment: PathSegment, value: Any, key: str) -> None:
    if isinstance(segment, int):
        if not isinstance(container, list):
            raise PathConflictError(key, f"index [{segment}] applied to an object")
        if len(container) <= segment:
            container.extend([None] * (segment + 1 - len(container)))
        container[segment] = value
    else:
        if not isinstance(container, dict):
            raise PathConflictError(key, f"member {segment!r} applied to an array")
        container[segment] = value


def _descend(container: Any, segment: PathSegment, next_segment: PathSegment, key: str) -> Any:
    if isinstance(segment, int):
        existing = container[segment] if isinstance(container, list) and segment < len(container) else None
    else:
        existing = container.get(segment) if isinstance(container, dict) else None

    if existing is None:
        existing = _new_container(next_segment)
        _assign(container, segment, existing, key)
    elif not isinstance(existing, (dict, list)):
        raise PathConflictError(key, f"segment {segment!r} already holds a value")
    return existing


def unflatten(flattened: Dict[str, Any], options: Optional[FlattenOptions] = None) -> Any:
    """Rebuild a nested structure from a flattened mapping.

    A mapping whose only key is :data:`ROOT` yields that value directly, which is
    how bare scalars and whole kept arrays are stored.
    An object whose only member is named ``root``, such as ``{"root": 5}``,
    flattens to the same mapping and therefore unflattens to ``5``.

    Raises:
        MalformedKeyError: If a key cannot be split
        PathConflictError: If two keys describe incompatible structures
    """
    options = options or FlattenOptions()
    if not flattened:
        return {}
    if len(flattened) == 1 and ROOT in flattened:
        return _restore(flattened[ROOT], options)

    splitter = KeySplitter(options)
    result: Any = None
    for key, value in flattened.items():
        segments = splitter.split(key)
        if result is None:
            result = _new_container(segments[0])

        container = result
        for segment, next_segment in zip(segments, segments[1:]):
            container = _descend(container, segment, next_segment, key)
        _assign(container, segments[-1], _restore(value, options), key)

    return result


def _encode_decoded_keys(value: Any) -> Any:
    """Re-escape keys that were unescaped by decoding flattened JSON text."""
    if isinstance(value, dict):
        return {escape_json(key): _encode_decoded_keys(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_encode_decoded_keys(item) for item in value]
    return value


def unflatten_json(source: Union[str, TextIO], options: Optional[FlattenOptions] = None) -> Any:
    """Parse flattened JSON text and rebuild the nested document.

    Decoding the text unescapes every key once, so keys are escaped again before
    splitting. A source that is not an object is returned as parsed.
    """
    flattened = parse_json(source)
    if not is_object(flattened):
        return flattened
    return unflatten(_encode_decoded_keys(flattened), options)

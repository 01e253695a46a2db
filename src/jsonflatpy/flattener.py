"""JSON flattener facade.

:class:`JsonFlattener` flattens any nested JSON object or array into a
single-level mapping whose keys encode the position of each value, or into the
JSON text of that mapping.

For example::

    {"a": {"b": 1, "c": null, "d": [false, true]}, "e": "f", "g": 2.3}

flattens to::

    {"a.b": 1, "a.c": null, "a.d[0]": false, "a.d[1]": true, "e": "f", "g": 2.3}

A document that is not an object or array (or an array kept whole in
KEEP_ARRAYS mode) cannot be expressed as such a mapping; its value is stored
under the reserved key ``"root"`` and :meth:`JsonFlattener.flatten` renders the
value itself.
"""
from typing import Any, Dict, Optional

from jsonflatpy.config.options import FlattenOptions
from jsonflatpy.core.coercer import OutputValue
from jsonflatpy.core.engine import flatten_value, is_map_shaped
from jsonflatpy.core.key_encoder import ROOT
from jsonflatpy.core.renderer import JsonRenderer
from jsonflatpy.escaping import EscapePolicy
from jsonflatpy.logging_config import PerformanceTimer, get_flatten_logger
from jsonflatpy.modes import FlattenMode, PrintMode
from jsonflatpy.source import JsonSource, parse_json, type_name

logger = get_flatten_logger(__name__)

_UNPARSED = object()


class JsonFlattener:
    """Flattens one JSON document.

    The document is parsed when the flattener is created, so malformed input is
    reported immediately; use :meth:`lazy` to defer parsing to the first flatten.
    Configuration setters return ``self`` for chaining and discard any cached
    result.

    Args:
        json_source: JSON text or a readable text stream
        options: Initial flatten options
    """

    def __init__(self, json_source: JsonSource, options: Optional[FlattenOptions] = None):
        self._init(json_source, options)
        self._get_source()

    def _init(self, json_source: Any, options: Optional[FlattenOptions]) -> None:
        if not isinstance(json_source, str) and not hasattr(json_source, "read"):
            raise TypeError(
                f"json_source must be JSON text or a readable stream, got {type(json_source).__name__}"
            )
        self._json_source = json_source
        self._source: Any = _UNPARSED
        self._options = options or FlattenOptions()
        self._flattened: Optional[Dict[str, OutputValue]] = None

    @classmethod
    def lazy(cls, json_source: JsonSource, options: Optional[FlattenOptions] = None) -> "JsonFlattener":
        """Create a flattener without parsing the input yet.

        Malformed input is not detected until the first flatten.
        """
        flattener = cls.__new__(cls)
        flattener._init(json_source, options)
        return flattener

    @classmethod
    def from_value(cls, value: Any, options: Optional[FlattenOptions] = None) -> "JsonFlattener":
        """Create a flattener over an already-parsed value tree."""
        flattener = cls.__new__(cls)
        flattener._json_source = None
        flattener._source = value
        flattener._options = options or FlattenOptions()
        flattener._flattened = None
        return flattener

    def _get_source(self) -> Any:
        if self._source is _UNPARSED:
            self._source = parse_json(self._json_source)
            self._json_source = None
        return self._source

    @property
    def source(self) -> Any:
        """The parsed document."""
        return self._get_source()

    @property
    def options(self) -> FlattenOptions:
        return self._options

    def _reconfigure(self, **changes: Any) -> "JsonFlattener":
        # with_changes raises before anything is replaced
        self._options = self._options.with_changes(**changes)
        self._flattened = None
        return self

    def with_options(self, options: FlattenOptions) -> "JsonFlattener":
        self._options = options
        self._flattened = None
        return self

    def with_flatten_mode(self, flatten_mode: FlattenMode) -> "JsonFlattener":
        return self._reconfigure(flatten_mode=flatten_mode)

    def with_string_escape_policy(self, policy: EscapePolicy) -> "JsonFlattener":
        return self._reconfigure(escape_policy=policy)

    def with_separator(self, separator: str) -> "JsonFlattener":
        """Set the separator between named segments (default ``.``)."""
        return self._reconfigure(separator=separator)

    def with_left_and_right_brackets(self, left_bracket: str, right_bracket: str) -> "JsonFlattener":
        """Set the brackets around indexes and fenced names (default ``[`` and ``]``)."""
        return self._reconfigure(left_bracket=left_bracket, right_bracket=right_bracket)

    def with_print_mode(self, print_mode: PrintMode) -> "JsonFlattener":
        # The flattened mapping does not depend on layout, so the cache is kept
        self._options = self._options.with_changes(print_mode=print_mode)
        return self

    def flatten_as_map(self) -> Dict[str, OutputValue]:
        """Return the flattened document as an ordered mapping."""
        if self._flattened is not None:
            return self._flattened

        source = self._get_source()
        with PerformanceTimer(
            logger, "flatten",
            root_type=type_name(source),
            mode=self._options.flatten_mode.value
        ):
            self._flattened = flatten_value(source, self._options)
        return self._flattened

    def flatten(self) -> str:
        """Return the flattened document as JSON text."""
        flattened = self.flatten_as_map()
        renderer = JsonRenderer(self._options.translator, self._options.print_mode)

        if is_map_shaped(self._get_source(), flattened):
            return renderer.render(flattened)
        return renderer.render(flattened.get(ROOT))

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, JsonFlattener):
            return NotImplemented
        return self._get_source() == other._get_source()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"JsonFlattener(source={self._get_source()!r})"


def flatten(json_source: JsonSource, options: Optional[FlattenOptions] = None) -> str:
    """Flatten JSON text or a stream into flattened JSON text."""
    return JsonFlattener(json_source, options).flatten()


def flatten_as_map(json_source: JsonSource, options: Optional[FlattenOptions] = None) -> Dict[str, OutputValue]:
    """Flatten JSON text or a stream into an ordered mapping."""
    return JsonFlattener(json_source, options).flatten_as_map()

"""Rendering of output values into JSON text."""
from decimal import Decimal
from typing import Any, List

from jsonflatpy.escaping import Translator
from jsonflatpy.modes import PrintMode

INDENT = "  "


class JsonRenderer:
    """Renders flattened mappings, kept arrays and scalars as JSON text.

    String values are escaped with ``translator``. Mapping keys are written as
    they are because the key encoder has already escaped them; pass
    ``escape_keys=True`` for mappings with raw keys, such as unflattened output.
    """

    def __init__(
        self,
        translator: Translator,
        print_mode: PrintMode = PrintMode.MINIMAL,
        escape_keys: bool = False
    ):
        self.translator = translator
        self.print_mode = print_mode
        self.escape_keys = escape_keys

    def render(self, value: Any) -> str:
        parts: List[str] = []
        self._write(value, parts, 0)
        return "".join(parts)

    def _write(self, value: Any, parts: List[str], depth: int) -> None:
        if value is None:
            parts.append("null")
        elif value is True:
            parts.append("true")
        elif value is False:
            parts.append("false")
        elif isinstance(value, str):
            parts.append(f'"{self.translator(value)}"')
        elif isinstance(value, Decimal):
            parts.append(str(value))
        elif isinstance(value, (int, float)):
            parts.append(repr(value))
        elif isinstance(value, dict):
            self._write_container(
                [(self._key(key), item) for key, item in value.items()], "{", "}", parts, depth
            )
        elif isinstance(value, (list, tuple)):
            self._write_container([(None, item) for item in value], "[", "]", parts, depth)
        else:
            raise TypeError(f"Cannot render value of type {type(value).__name__}")

    def _write_container(self, entries, opener: str, closer: str, parts: List[str], depth: int) -> None:
        if not entries:
            parts.append(opener + closer)
            return

        pretty = self.print_mode is PrintMode.PRETTY
        item_separator = "," if self.print_mode is PrintMode.MINIMAL else ", "
        key_separator = ":" if self.print_mode is PrintMode.MINIMAL else ": "
        if pretty:
            item_separator = ","

        parts.append(opener)
        for position, (key, item) in enumerate(entries):
            if position:
                parts.append(item_separator)
            if pretty:
                parts.append("\n" + INDENT * (depth + 1))
            if key is not None:
                parts.append(key)
                parts.append(key_separator)
            self._write(item, parts, depth + 1)
        if pretty:
            parts.append("\n" + INDENT * depth)
        parts.append(closer)

    def _key(self, key: str) -> str:
        if self.escape_keys:
            return f'"{self.translator(key)}"'
        return f'"{key}"'

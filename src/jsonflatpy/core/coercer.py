"""Coercion of terminal nodes into output values."""
from decimal import Decimal
from typing import Any, Callable, Dict, List, Union

from jsonflatpy.config.options import FlattenOptions
from jsonflatpy.source import is_array, is_boolean, is_null, is_number, is_object, is_string, type_name

OutputValue = Union[None, bool, str, Decimal, List[Any], Dict[str, Any]]

NestedFlattener = Callable[[Any, FlattenOptions], Dict[str, OutputValue]]


def to_decimal(value: Any) -> Decimal:
    """Convert a number node to an exact :class:`Decimal`.

    Parsed documents already hold ``Decimal`` values. Python ``int`` and ``float``
    values are converted through their shortest text form, never through the
    binary float value.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


class ValueCoercer:
    """Converts a terminal node into an output value.

    Args:
        options: Options of the enclosing flatten pass
        nested_flattener: Used in KEEP_ARRAYS mode to flatten an object found
            inside a kept array as an independent mapping

    Nested objects are flattened with every option of the enclosing pass,
    custom brackets included, so keys inside kept arrays use the same brackets
    as the outer keys.
    """

    def __init__(self, options: FlattenOptions, nested_flattener: NestedFlattener):
        self.options = options
        self._nested_flattener = nested_flattener

    def coerce(self, node: Any) -> OutputValue:
        if is_boolean(node) or is_string(node):
            return node
        if is_number(node):
            return to_decimal(node)
        if is_null(node):
            return None
        if is_array(node):
            if not node:
                return []
            return self.coerce_array(node)
        if is_object(node):
            if not node:
                return {}
            return self._nested_flattener(node, self.options)
        raise TypeError(f"Cannot coerce value of type {type_name(node)}")

    def coerce_array(self, node: Any) -> List[OutputValue]:
        """Materialize a whole array, coercing each element."""
        return [self.coerce(element) for element in node]

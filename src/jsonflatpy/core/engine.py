"""Iterative flattening engine.

The traversal keeps an explicit stack of container cursors instead of recursing,
so native call-stack usage does not grow with the nesting depth of the input.
"""
import time
from typing import Any, Dict, Iterator, List, Optional

from jsonflatpy.config.options import FlattenOptions
from jsonflatpy.core.coercer import OutputValue, ValueCoercer
from jsonflatpy.core.key_encoder import ROOT, KeyEncoder, PathSegment
from jsonflatpy.logging_config import get_flatten_logger
from jsonflatpy.modes import FlattenMode
from jsonflatpy.source import is_array, is_object

logger = get_flatten_logger(__name__)


class ContainerCursor:
    """Position within the children of one object or array.

    ``segment`` is the member name or element index of the child most recently
    returned by :meth:`advance`.
    """

    __slots__ = ("_children", "_size", "_position", "_is_object", "segment")

    def __init__(self, container: Any):
        self._is_object = is_object(container)
        self._children: Iterator[Any] = iter(container.items() if self._is_object else container)
        self._size = len(container)
        self._position = 0
        self.segment: Optional[PathSegment] = None

    def has_next(self) -> bool:
        return self._position < self._size

    def advance(self) -> Any:
        """Move to the next child and return its value."""
        if self._is_object:
            self.segment, child = next(self._children)
        else:
            child = next(self._children)
            self.segment = self._position
        self._position += 1
        return child


class FlattenEngine:
    """Walks a value tree depth-first and emits ``(key, value)`` pairs."""

    def __init__(self, options: FlattenOptions):
        self.options = options
        self.keep_arrays = options.flatten_mode is FlattenMode.KEEP_ARRAYS
        self.key_encoder = KeyEncoder(options)
        self.coercer = ValueCoercer(options, nested_flattener=flatten_value)

    def run(self, root: Any) -> Dict[str, OutputValue]:
        """Flatten ``root`` into a new ordered mapping."""
        start_time = time.perf_counter()
        output: Dict[str, OutputValue] = {}
        stack: List[ContainerCursor] = []
        max_depth = 0

        self._reduce(root, stack, output)

        while stack:
            max_depth = max(max_depth, len(stack))
            deepest = stack[-1]
            if not deepest.has_next():
                stack.pop()
            else:
                self._reduce(deepest.advance(), stack, output)

        logger.log_flatten_pass(
            mode=self.options.flatten_mode.value,
            entries=len(output),
            max_depth=max_depth,
            duration=time.perf_counter() - start_time
        )
        return output

    def _current_key(self, stack: List[ContainerCursor]) -> str:
        return self.key_encoder.encode(cursor.segment for cursor in stack)

    def _reduce(self, node: Any, stack: List[ContainerCursor], output: Dict[str, OutputValue]) -> None:
        if is_object(node) and node:
            stack.append(ContainerCursor(node))
            return

        if is_array(node) and node:
            if self.keep_arrays:
                output[self._current_key(stack)] = self.coercer.coerce_array(node)
            else:
                stack.append(ContainerCursor(node))
            return

        value = self.coercer.coerce(node)
        key = self._current_key(stack)
        # An empty object under the reserved root key contributes no entry
        if key == ROOT and is_object(value) and not value:
            return
        output[key] = value


def flatten_value(value: Any, options: Optional[FlattenOptions] = None) -> Dict[str, OutputValue]:
    """Flatten an already-parsed value tree.

    Args:
        value: Root of the tree (``dict``, ``list`` or scalar)
        options: Flatten options; defaults are used when omitted

    Returns:
        Ordered mapping of flattened key to output value. A bare scalar or empty
        array at the root is stored under :data:`ROOT`.
    """
    return FlattenEngine(options or FlattenOptions()).run(value)


def is_map_shaped(source: Any, flattened: Dict[str, OutputValue]) -> bool:
    """Whether ``flattened`` should be rendered as an object rather than its root value."""
    return is_object(source) or (is_array(source) and ROOT not in flattened)

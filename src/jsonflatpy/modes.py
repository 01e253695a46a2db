"""Traversal and print modes."""
from enum import Enum


class FlattenMode(str, Enum):
    """How arrays are treated while flattening."""

    # Descend into every non-empty object and array
    NORMAL = "normal"
    # Descend into objects only; non-empty arrays are emitted whole
    KEEP_ARRAYS = "keep_arrays"


class PrintMode(str, Enum):
    """Layout of rendered JSON text."""

    MINIMAL = "minimal"
    REGULAR = "regular"
    PRETTY = "pretty"

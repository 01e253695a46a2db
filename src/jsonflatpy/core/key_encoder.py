"""Encoding of traversal paths into flattened keys."""
from typing import Iterable, Union

from jsonflatpy.config.options import FlattenOptions

ROOT = "root"

PathSegment = Union[str, int]


class KeyEncoder:
    """Builds the flattened key for a path of named and indexed segments.

    Indexed segments render as ``[0]``. Named segments are joined with the
    separator, unless the name contains the separator, a bracket or whitespace;
    those are fenced as ``[\\"a.b\\"]`` so the key still splits unambiguously.
    """

    def __init__(self, options: FlattenOptions):
        self.separator = options.separator
        self.left_bracket = options.left_bracket
        self.right_bracket = options.right_bracket
        self._translate = options.translator

    def needs_fencing(self, name: str) -> bool:
        if self.separator in name or self.left_bracket in name or self.right_bracket in name:
            return True
        return any(char.isspace() for char in name)

    def encode(self, path: Iterable[PathSegment]) -> str:
        """Return the key for ``path``, or :data:`ROOT` when the path is empty."""
        parts = []
        for segment in path:
            if isinstance(segment, int):
                parts.append(f"{self.left_bracket}{segment}{self.right_bracket}")
            elif self.needs_fencing(segment):
                parts.append(f'{self.left_bracket}\\"{self._translate(segment)}\\"{self.right_bracket}')
            else:
                if parts:
                    parts.append(self.separator)
                parts.append(self._translate(segment))

        if not parts:
            return ROOT
        return "".join(parts)

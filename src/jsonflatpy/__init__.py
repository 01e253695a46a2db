# jsonflatpy - Flatten nested JSON into single-level key/value mappings
from jsonflatpy.config import FlattenOptions
from jsonflatpy.core import ROOT, flatten_value, split_key, unflatten, unflatten_json
from jsonflatpy.escaping import StringEscapePolicy
from jsonflatpy.flattener import JsonFlattener, flatten, flatten_as_map
from jsonflatpy.modes import FlattenMode, PrintMode

__version__ = "0.1.0"

__all__ = [
    "ROOT",
    "FlattenMode",
    "FlattenOptions",
    "JsonFlattener",
    "PrintMode",
    "StringEscapePolicy",
    "flatten",
    "flatten_as_map",
    "flatten_value",
    "split_key",
    "unflatten",
    "unflatten_json",
]

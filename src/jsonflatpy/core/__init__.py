"""Flattening engine components."""
from jsonflatpy.core.coercer import ValueCoercer
from jsonflatpy.core.engine import FlattenEngine, flatten_value
from jsonflatpy.core.key_encoder import ROOT, KeyEncoder
from jsonflatpy.core.renderer import JsonRenderer
from jsonflatpy.core.unflattener import KeySplitter, split_key, unflatten, unflatten_json

__all__ = [
    "ROOT",
    "FlattenEngine",
    "JsonRenderer",
    "KeyEncoder",
    "KeySplitter",
    "ValueCoercer",
    "flatten_value",
    "split_key",
    "unflatten",
    "unflatten_json",
]

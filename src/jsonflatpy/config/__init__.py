"""Configuration management for flattening."""
from jsonflatpy.config.options import FlattenOptions, build_options
from jsonflatpy.config.loader import FlattenSettings, LoggingConfig

__all__ = [
    "FlattenOptions",
    "FlattenSettings",
    "LoggingConfig",
    "build_options",
]

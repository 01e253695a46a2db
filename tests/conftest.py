"""Test configuration for pytest."""
import logging

import pytest

from jsonflatpy.config.options import FlattenOptions
from jsonflatpy.modes import FlattenMode


@pytest.fixture
def nested_json():
    """Nested document used across the flattening tests."""
    return '{"a":{"b":1,"c":null,"d":[false,true]},"e":"f","g":2.3}'


@pytest.fixture
def keep_arrays_options():
    """Options for KEEP_ARRAYS mode with default characters."""
    return FlattenOptions(flatten_mode=FlattenMode.KEEP_ARRAYS)


@pytest.fixture(autouse=True)
def isolated_settings_env(monkeypatch, tmp_path):
    """Keep JSONFLATPY_* variables and stray .env files out of the tests."""
    import os

    for name in list(os.environ):
        if name.upper().startswith("JSONFLATPY_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo configure_logging calls made by the CLI and logging tests."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    package_logger = logging.getLogger("jsonflatpy")
    package_level = package_logger.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    package_logger.setLevel(package_level)

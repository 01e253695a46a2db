"""JSON source parsing and value classification.

Documents are parsed with the standard library ``json`` module into plain Python
containers: objects become ``dict`` (member order preserved), arrays ``list``,
and every number a :class:`decimal.Decimal` built from its literal text so no
binary floating-point rounding occurs.
"""
import json
import time
from decimal import Decimal
from typing import Any, TextIO, Union

from jsonflatpy.exceptions import DocumentTooDeepError, MalformedJsonError, SourceReadError
from jsonflatpy.logging_config import get_flatten_logger

logger = get_flatten_logger(__name__)

JsonSource = Union[str, TextIO]


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are not JSON
    raise ValueError(f"Invalid JSON constant: {name}")


def _decode(text: str) -> Any:
    return json.loads(
        text,
        parse_float=Decimal,
        parse_int=Decimal,
        parse_constant=_reject_constant,
    )


def parse_json(source: JsonSource) -> Any:
    """Parse JSON text or a readable text stream.

    Args:
        source: JSON text, or an object with a ``read()`` method returning text

    Returns:
        The parsed value tree

    Raises:
        MalformedJsonError: If the input is not valid JSON
        DocumentTooDeepError: If the input nests deeper than the decoder can follow
        SourceReadError: If reading the stream fails
    """
    if isinstance(source, str):
        source_name = "<string>"
        text = source
    else:
        source_name = getattr(source, "name", None) or "<stream>"
        try:
            text = source.read()
        except (OSError, UnicodeDecodeError) as e:
            raise SourceReadError(source_name=str(source_name), read_error=e) from e

    start_time = time.perf_counter()
    try:
        value = _decode(text)
    except json.JSONDecodeError as e:
        logger.log_source_parsing(
            source_name=str(source_name),
            success=False,
            duration=time.perf_counter() - start_time,
            error=str(e)
        )
        raise MalformedJsonError(e) from e
    except ValueError as e:
        decode_error = json.JSONDecodeError(str(e), text, 0)
        raise MalformedJsonError(decode_error) from e
    except RecursionError as e:
        logger.log_source_parsing(
            source_name=str(source_name),
            success=False,
            duration=time.perf_counter() - start_time,
            error=str(e)
        )
        raise DocumentTooDeepError(str(source_name), e) from e

    logger.log_source_parsing(
        source_name=str(source_name),
        success=True,
        duration=time.perf_counter() - start_time,
        root_type=type_name(value)
    )
    return value


def is_object(value: Any) -> bool:
    return isinstance(value, dict)


def is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def is_number(value: Any) -> bool:
    # bool is an int subclass
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def is_null(value: Any) -> bool:
    return value is None


def type_name(value: Any) -> str:
    """Map a parsed value to its JSON type name."""
    if is_null(value):
        return "null"
    if is_boolean(value):
        return "boolean"
    if is_number(value):
        return "number"
    if is_string(value):
        return "string"
    if is_array(value):
        return "array"
    if is_object(value):
        return "object"
    return type(value).__name__

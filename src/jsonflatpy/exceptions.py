"""Custom exceptions for jsonflatpy.

This module provides the exception hierarchy used by the parser, the flattening
engine and the configuration layer, enabling precise error handling and
user-friendly error messages.
"""

import json
import logging
from typing import Optional


class JsonFlatPyException(Exception):
    """Base exception for all jsonflatpy errors.

    Provides common functionality for error reporting and logging.
    """

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        suggestions: Optional[list[str]] = None,
        original_error: Optional[Exception] = None
    ):
        """Initialize jsonflatpy exception.

        Args:
            message: Main error message
            details: Additional technical details
            suggestions: List of suggested solutions
            original_error: Original exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.details = details
        self.suggestions = suggestions or []
        self.original_error = original_error

        # Log the error
        self._log_error()

    def _log_error(self) -> None:
        """Log the error with appropriate level."""
        logger = logging.getLogger(self.__class__.__module__)
        logger.error(f"{self.__class__.__name__}: {self.message}")
        if self.details:
            logger.debug(f"Details: {self.details}")
        if self.original_error:
            logger.debug(f"Original error: {self.original_error}")

    def get_user_message(self) -> str:
        """Get user-friendly error message with suggestions."""
        msg = self.message
        if self.suggestions:
            msg += "\n\nSuggestions:"
            for i, suggestion in enumerate(self.suggestions, 1):
                msg += f"\n  {i}. {suggestion}"
        return msg


# Source exceptions

class SourceException(JsonFlatPyException):
    """Base exception for errors raised while obtaining the JSON source."""
    pass


class MalformedJsonError(SourceException):
    """Raised when the supplied text or stream is not valid JSON."""

    def __init__(self, decode_error: json.JSONDecodeError):
        suggestions = [
            f"Check the JSON near line {decode_error.lineno}, column {decode_error.colno}",
            "Validate the document with a JSON linter",
            "Ensure the input is not truncated"
        ]

        super().__init__(
            message=f"Malformed JSON input: {decode_error.msg}",
            details=f"Parse error at char {decode_error.pos}: {decode_error}",
            suggestions=suggestions,
            original_error=decode_error
        )
        self.lineno = decode_error.lineno
        self.colno = decode_error.colno


class SourceReadError(SourceException):
    """Raised when the JSON stream cannot be read."""

    def __init__(self, source_name: str, read_error: Exception):
        suggestions = [
            f"Verify the source is readable: {source_name}",
            "Check file permissions and encoding"
        ]

        super().__init__(
            message=f"Failed to read JSON source: {source_name}",
            details=f"I/O error: {read_error}",
            suggestions=suggestions,
            original_error=read_error
        )
        self.source_name = source_name


class DocumentTooDeepError(SourceException):
    """Raised when the document nests deeper than the JSON decoder can follow."""

    def __init__(self, source_name: str, recursion_error: RecursionError):
        suggestions = [
            "Reduce the nesting depth of the document",
            "Raise the interpreter limit with sys.setrecursionlimit() before parsing"
        ]

        super().__init__(
            message=f"JSON source is nested too deeply to parse: {source_name}",
            details=f"Decoder error: {recursion_error}",
            suggestions=suggestions,
            original_error=recursion_error
        )
        self.source_name = source_name


# Configuration exceptions

class ConfigurationException(JsonFlatPyException):
    """Base exception for configuration errors."""
    pass


class InvalidConfigurationError(ConfigurationException):
    """Raised when configuration is invalid."""

    def __init__(
        self,
        config_key: str,
        config_value: object,
        validation_error: str,
        original_error: Optional[Exception] = None
    ):
        suggestions = [
            f"Check the value for '{config_key}'",
            "Separator and brackets must be three distinct single characters",
            "Whitespace and the double quote are not allowed as separator or brackets"
        ]

        super().__init__(
            message=f"Invalid configuration for '{config_key}': {config_value!r}",
            details=validation_error,
            suggestions=suggestions,
            original_error=original_error
        )
        self.config_key = config_key
        self.config_value = config_value


class ConfigurationFileError(ConfigurationException):
    """Raised when a settings file cannot be loaded."""

    def __init__(self, config_file: str, load_error: Exception):
        suggestions = [
            f"Verify the settings file exists: {config_file}",
            "Settings files must be JSON (.json) or YAML (.yaml, .yml)"
        ]

        super().__init__(
            message=f"Failed to load settings file: {config_file}",
            details=f"Load error: {load_error}",
            suggestions=suggestions,
            original_error=load_error
        )
        self.config_file = config_file


# Flattening exceptions

class FlattenException(JsonFlatPyException):
    """Base exception for flattening and unflattening errors."""
    pass


class MalformedKeyError(FlattenException):
    """Raised when a flattened key cannot be split back into path segments."""

    def __init__(self, key: str, position: int, reason: str):
        suggestions = [
            "Use the same separator and brackets that produced the key",
            "Keys produced with a non-default escape policy may not split cleanly"
        ]

        super().__init__(
            message=f"Cannot split flattened key {key!r} at position {position}",
            details=reason,
            suggestions=suggestions
        )
        self.key = key
        self.position = position


class PathConflictError(FlattenException):
    """Raised when two flattened keys describe incompatible structures."""

    def __init__(self, key: str, reason: str):
        super().__init__(
            message=f"Conflicting path for key {key!r}",
            details=reason,
            suggestions=["Check that the mapping was produced by a single flatten pass"]
        )
        self.key = key


# Utility functions for error handling

def handle_and_reraise(
    original_error: Exception,
    error_context: str,
    suggestions: Optional[list[str]] = None
) -> None:
    """Handle an error and re-raise as jsonflatpy exception.

    Args:
        original_error: The original exception
        error_context: Description of what was being attempted
        suggestions: Optional list of suggestions for fixing the error

    Raises:
        JsonFlatPyException: Re-raised as appropriate jsonflatpy exception
    """
    if isinstance(original_error, JsonFlatPyException):
        # Already a jsonflatpy exception, just re-raise
        raise original_error

    if isinstance(original_error, json.JSONDecodeError):
        exc = MalformedJsonError(original_error)
        if suggestions:
            exc.suggestions.extend(suggestions)
        raise exc from original_error
    elif isinstance(original_error, OSError):
        source_name = getattr(original_error, "filename", None) or error_context
        exc = SourceReadError(source_name=str(source_name), read_error=original_error)
        if suggestions:
            exc.suggestions.extend(suggestions)
        raise exc from original_error
    else:
        # Generic jsonflatpy exception
        raise JsonFlatPyException(
            message=f"Error in {error_context}: {original_error}",
            suggestions=suggestions,
            original_error=original_error
        ) from original_error

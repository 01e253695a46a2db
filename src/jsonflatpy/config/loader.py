"""Settings loader for the jsonflatpy command line."""
import json
from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from jsonflatpy.config.options import FlattenOptions, build_options
from jsonflatpy.escaping import StringEscapePolicy
from jsonflatpy.exceptions import ConfigurationFileError, InvalidConfigurationError
from jsonflatpy.modes import FlattenMode, PrintMode


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="WARNING")
    json_format: bool = Field(default=False)
    log_file: str | None = None

    @field_validator('level')
    @classmethod
    def validate_level(cls, v):
        """Validate the log level name."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of {sorted(allowed)}")
        return v.upper()


class FlattenSettings(BaseSettings):
    """Application settings.

    Values are read from keyword arguments, ``JSONFLATPY_*`` environment
    variables and a ``.env`` file, in that order of precedence.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="JSONFLATPY_",
        env_nested_delimiter="__",
    )

    flatten_mode: FlattenMode = Field(default=FlattenMode.NORMAL)
    escape_policy: StringEscapePolicy = Field(default=StringEscapePolicy.DEFAULT)
    separator: str = Field(default=".")
    left_bracket: str = Field(default="[")
    right_bracket: str = Field(default="]")
    print_mode: PrintMode = Field(default=PrintMode.MINIMAL)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_file(cls, config_file: str) -> "FlattenSettings":
        """Load settings from a JSON or YAML file.

        Args:
            config_file: Path to settings file

        Returns:
            FlattenSettings instance

        Raises:
            ConfigurationFileError: If the file cannot be read or parsed
            InvalidConfigurationError: If the file content is invalid
        """
        path = Path(config_file)
        try:
            with open(path, encoding="utf-8") as f:
                if path.suffix.lower() in (".yaml", ".yml"):
                    config_data = yaml.safe_load(f) or {}
                else:
                    config_data = json.load(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigurationFileError(config_file=config_file, load_error=e) from e

        if not isinstance(config_data, dict):
            raise ConfigurationFileError(
                config_file=config_file,
                load_error=ValueError("settings file must contain a mapping")
            )

        try:
            return cls(**cls._normalize(config_data))
        except ValidationError as e:
            raise InvalidConfigurationError(
                config_key=config_file,
                config_value=config_data,
                validation_error=str(e),
                original_error=e
            ) from e

    @staticmethod
    def _normalize(config_data: Dict[str, Any]) -> Dict[str, Any]:
        """Accept the ``brackets: "[]"`` shorthand and hyphenated keys."""
        normalized = {key.replace("-", "_"): value for key, value in config_data.items()}
        brackets = normalized.pop("brackets", None)
        if brackets is not None:
            if not isinstance(brackets, str) or len(brackets) != 2:
                raise InvalidConfigurationError(
                    config_key="brackets",
                    config_value=brackets,
                    validation_error="brackets must be a two-character string such as '[]'"
                )
            normalized["left_bracket"], normalized["right_bracket"] = brackets[0], brackets[1]
        return normalized

    def to_options(self, **overrides: Any) -> FlattenOptions:
        """Build :class:`FlattenOptions` from these settings.

        Args:
            **overrides: Option values that take precedence (``None`` values are ignored)
        """
        values = {
            "flatten_mode": self.flatten_mode,
            "escape_policy": self.escape_policy,
            "separator": self.separator,
            "left_bracket": self.left_bracket,
            "right_bracket": self.right_bracket,
            "print_mode": self.print_mode,
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return build_options(**values)

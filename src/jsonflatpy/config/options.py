"""Immutable flatten options."""
from typing import Any, Callable, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from jsonflatpy.escaping import StringEscapePolicy, Translator, resolve_translator
from jsonflatpy.exceptions import InvalidConfigurationError
from jsonflatpy.modes import FlattenMode, PrintMode

ILLEGAL_KEY_CHARS = '"'


class FlattenOptions(BaseModel):
    """Configuration for one flatten pass.

    Instances are frozen; use :meth:`with_changes` to derive a new validated copy.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    flatten_mode: FlattenMode = Field(default=FlattenMode.NORMAL)
    escape_policy: Union[StringEscapePolicy, Callable[[str], str]] = Field(default=StringEscapePolicy.DEFAULT)
    separator: str = Field(default=".")
    left_bracket: str = Field(default="[")
    right_bracket: str = Field(default="]")
    print_mode: PrintMode = Field(default=PrintMode.MINIMAL)

    @field_validator('separator', 'left_bracket', 'right_bracket')
    @classmethod
    def validate_key_char(cls, v: str, info) -> str:
        """Validate a structural key character."""
        if len(v) != 1:
            raise ValueError(f"{info.field_name} must be a single character, got {v!r}")
        if v.isspace() or v in ILLEGAL_KEY_CHARS:
            raise ValueError(f"{info.field_name} contains illegal character ({v!r})")
        return v

    @model_validator(mode='after')
    def validate_distinct_chars(self) -> 'FlattenOptions':
        """Separator and both brackets must be mutually distinct."""
        if self.left_bracket == self.right_bracket:
            raise ValueError("Both brackets cannot be the same")
        if self.separator in (self.left_bracket, self.right_bracket):
            raise ValueError(f"Separator ({self.separator!r}) is already used in brackets")
        return self

    @property
    def translator(self) -> Translator:
        return resolve_translator(self.escape_policy)

    def with_changes(self, **changes: Any) -> 'FlattenOptions':
        """Return a validated copy with ``changes`` applied.

        Raises:
            InvalidConfigurationError: If the resulting options are invalid;
                ``self`` is left untouched.
        """
        data = {name: getattr(self, name) for name in type(self).model_fields}
        data.update(changes)
        try:
            return type(self)(**data)
        except ValidationError as e:
            key = ", ".join(sorted(changes)) or "options"
            value = changes if len(changes) != 1 else next(iter(changes.values()))
            raise InvalidConfigurationError(
                config_key=key,
                config_value=value,
                validation_error=str(e),
                original_error=e
            ) from e


def build_options(**values: Any) -> FlattenOptions:
    """Create :class:`FlattenOptions`, raising :class:`InvalidConfigurationError` on failure."""
    return FlattenOptions().with_changes(**values)

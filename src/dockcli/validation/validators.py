"""
Validation functions for caller input and configuration values.
"""

import logging
from typing import Any, List, Optional

from .exceptions import ValidationError


def validate_positive_float(
    value: Any,
    min_value: float = 0.0,
    max_value: Optional[float] = None,
    field_name: str = "value",
    exclusive_min: bool = False
) -> float:
    """
    Validate that a value is a float within bounds.

    Args:
        value: Value to validate
        min_value: Minimum allowed value (inclusive unless exclusive_min)
        max_value: Maximum allowed value (inclusive), None for no limit
        field_name: Name of the field being validated
        exclusive_min: Reject values equal to min_value

    Returns:
        Validated float value

    Raises:
        ValidationError: If validation fails
    """
    if isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a valid number, got {value}",
            field_name=field_name,
            value=value
        )
    try:
        float_value = float(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid number, got {value}",
            field_name=field_name,
            value=value
        )
    if float_value < min_value or (exclusive_min and float_value == min_value):
        comparison = ">" if exclusive_min else ">="
        raise ValidationError(
            f"{field_name} must be {comparison} {min_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and float_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    return float_value


def validate_enum_choice(
    value: Any,
    choices: List[str],
    field_name: str = "value",
    case_sensitive: bool = True
) -> str:
    """
    Validate that a value is one of the allowed choices.

    Args:
        value: Value to validate
        choices: List of allowed choices
        field_name: Name of the field being validated
        case_sensitive: Whether the comparison should be case-sensitive

    Returns:
        The matching entry from choices

    Raises:
        ValidationError: If value is not in choices
    """
    str_value = str(value)

    if case_sensitive:
        if str_value not in choices:
            raise ValidationError(
                f"{field_name} must be one of {choices}, got {value}",
                field_name=field_name,
                value=value
            )
        return str_value

    lower_choices = [choice.lower() for choice in choices]
    lower_value = str_value.lower()
    if lower_value not in lower_choices:
        raise ValidationError(
            f"{field_name} must be one of {choices}, got {value}",
            field_name=field_name,
            value=value
        )
    return choices[lower_choices.index(lower_value)]


def validate_bool(value: Any, field_name: str = "value") -> bool:
    """Accept only real booleans; TOML gives us those already."""
    if not isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be true or false, got {value!r}",
            field_name=field_name,
            value=value
        )
    return value


def validate_executable(executable: Any, field_name: str = "executable") -> str:
    """
    Validate an executable name or path.

    The value is not resolved here; resolution through PATH happens when the
    process is spawned, and a missing executable surfaces as SpawnFailedError.

    Raises:
        ValidationError: If the value is empty or contains whitespace only
    """
    if not isinstance(executable, str) or not executable.strip():
        raise ValidationError(
            f"{field_name} must be a non-empty string, got {executable!r}",
            field_name=field_name,
            value=executable
        )
    if executable != executable.strip():
        raise ValidationError(
            f"{field_name} must not have surrounding whitespace: {executable!r}",
            field_name=field_name,
            value=executable
        )
    return executable


def validate_log_level(level: Any, field_name: str = "log_level") -> str:
    """Validate a logging level name and return it upper-cased."""
    return validate_enum_choice(
        level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        field_name=field_name,
        case_sensitive=False,
    )


def log_level_number(level: str) -> int:
    """Translate a validated level name into its logging constant."""
    return getattr(logging, validate_log_level(level))

"""Shared argument validation primitives."""

from typing import Any, Dict, List, Optional

from ..errors import ValidationError
from ..types import RULE_KEYS


class _Missing:
    """Marker for a key absent from the argument bag (distinct from None)."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


def is_plain_object(value: Any) -> bool:
    return isinstance(value, dict)


def require_string(value: Any, parameter: str) -> str:
    if value is MISSING or value is None:
        raise ValidationError(f"Missing required parameter: {parameter}")
    if not isinstance(value, str) or value.strip() == "":
        raise ValidationError(f"Invalid parameter: {parameter} must be a non-empty string")
    return value


def optional_string(value: Any, parameter: str) -> Optional[str]:
    if value is MISSING:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"Invalid parameter: {parameter} must be a string")
    return value


def optional_nullable_string(value: Any, parameter: str) -> Any:
    """Returns MISSING when absent, so callers can tell None from omission."""
    if value is MISSING or value is None:
        return value
    if not isinstance(value, str):
        raise ValidationError(f"Invalid parameter: {parameter} must be a string or null")
    return value


def optional_integer(value: Any, parameter: str) -> Optional[int]:
    if value is MISSING:
        return None
    # bool is an int subclass; JSON numbers like 2.0 still count as integers
    if isinstance(value, bool):
        raise ValidationError(f"Invalid parameter: {parameter} must be an integer")
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if not isinstance(value, int):
        raise ValidationError(f"Invalid parameter: {parameter} must be an integer")
    return value


def require_object(value: Any, parameter: str) -> Dict[str, Any]:
    if value is MISSING or value is None:
        raise ValidationError(f"Missing required parameter: {parameter}")
    if not is_plain_object(value):
        raise ValidationError(f"Invalid parameter: {parameter} must be an object")
    return value


def assert_object_array(value: Any, parameter: str) -> List[Dict[str, Any]]:
    if not isinstance(value, list) or any(not is_plain_object(item) for item in value):
        raise ValidationError(f"Invalid parameter: {parameter} must be an array of objects")
    return value


def assert_string_array(value: Any, parameter: str) -> List[str]:
    if not isinstance(value, list) or any(not isinstance(item, str) for item in value):
        raise ValidationError(f"Invalid parameter: {parameter} must be an array of strings")
    return value


def read_rule_values(source: Dict[str, Any]) -> Dict[str, Optional[str]]:
    """
    Collect the API rule values present in source.

    Presence, not value, decides inclusion: None and "" are both kept.
    """
    rules: Dict[str, Optional[str]] = {}
    for rule in RULE_KEYS:
        value = optional_nullable_string(source.get(rule, MISSING), rule)
        if value is not MISSING:
            rules[rule] = value
    return rules

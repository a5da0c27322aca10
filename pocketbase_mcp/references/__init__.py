"""Static reference documents returned by the meta tools."""

from .field_schema import get_field_schema_reference
from .rules import get_rules_reference

__all__ = ["get_field_schema_reference", "get_rules_reference"]

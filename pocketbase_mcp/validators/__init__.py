"""
Argument validators.

Each parse_* function turns the untyped argument bag of one tool call into
a validated dataclass from pocketbase_mcp.types, or raises ValidationError
before any request is made.
"""

from .auth import parse_auth_admin_args, parse_auth_user_args
from .collections import (
    parse_collection_name,
    parse_create_collection_args,
    parse_update_collection_args,
    parse_update_rules_args,
)
from .meta import parse_set_base_url_args
from .records import (
    parse_create_record_args,
    parse_delete_record_args,
    parse_file_url_args,
    parse_list_records_args,
    parse_update_record_args,
    parse_view_record_args,
)

__all__ = [
    "parse_auth_admin_args",
    "parse_auth_user_args",
    "parse_collection_name",
    "parse_create_collection_args",
    "parse_update_collection_args",
    "parse_update_rules_args",
    "parse_set_base_url_args",
    "parse_create_record_args",
    "parse_delete_record_args",
    "parse_file_url_args",
    "parse_list_records_args",
    "parse_update_record_args",
    "parse_view_record_args",
]

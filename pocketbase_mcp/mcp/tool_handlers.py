"""
Tool dispatch table.

Handlers are grouped by concern (session, collections, records, meta). Each
handler validates the raw argument bag first and only then calls the
facade, so malformed input never reaches PocketBase.
"""

from typing import Any, Awaitable, Callable, Dict, Optional

from ..api import PocketBaseApi
from ..errors import ValidationError
from ..references import get_field_schema_reference, get_rules_reference
from ..validators import (
    parse_auth_admin_args,
    parse_auth_user_args,
    parse_collection_name,
    parse_create_collection_args,
    parse_create_record_args,
    parse_delete_record_args,
    parse_file_url_args,
    parse_list_records_args,
    parse_set_base_url_args,
    parse_update_collection_args,
    parse_update_record_args,
    parse_update_rules_args,
    parse_view_record_args,
)
from .tool_definitions import TOOL_NAMES


ToolArgs = Dict[str, Any]
ToolHandler = Callable[[ToolArgs], Awaitable[Any]]


def create_auth_handlers(api: PocketBaseApi) -> Dict[str, ToolHandler]:
    async def auth_admin(args: ToolArgs) -> Any:
        return await api.auth_admin(parse_auth_admin_args(args))

    async def auth_user(args: ToolArgs) -> Any:
        return await api.auth_user(parse_auth_user_args(args))

    async def get_auth_status(args: ToolArgs) -> Any:
        return api.get_auth_status()

    async def logout(args: ToolArgs) -> Any:
        return api.logout()

    async def set_base_url(args: ToolArgs) -> Any:
        return api.set_base_url(parse_set_base_url_args(args).url)

    return {
        "auth_admin": auth_admin,
        "auth_user": auth_user,
        "get_auth_status": get_auth_status,
        "logout": logout,
        "set_base_url": set_base_url,
    }


def create_collection_handlers(api: PocketBaseApi) -> Dict[str, ToolHandler]:
    async def list_collections(args: ToolArgs) -> Any:
        return await api.list_collections()

    async def view_collection(args: ToolArgs) -> Any:
        return await api.view_collection(parse_collection_name(args))

    async def create_collection(args: ToolArgs) -> Any:
        return await api.create_collection(parse_create_collection_args(args))

    async def update_collection(args: ToolArgs) -> Any:
        parsed = parse_update_collection_args(args)
        return await api.update_collection(parsed.collection, parsed.data)

    async def delete_collection(args: ToolArgs) -> Any:
        return await api.delete_collection(parse_collection_name(args))

    async def truncate_collection(args: ToolArgs) -> Any:
        return await api.truncate_collection(parse_collection_name(args))

    async def update_collection_rules(args: ToolArgs) -> Any:
        return await api.update_collection_rules(parse_update_rules_args(args))

    return {
        "list_collections": list_collections,
        "view_collection": view_collection,
        "create_collection": create_collection,
        "update_collection": update_collection,
        "delete_collection": delete_collection,
        "truncate_collection": truncate_collection,
        "update_collection_rules": update_collection_rules,
    }


def create_record_handlers(api: PocketBaseApi) -> Dict[str, ToolHandler]:
    async def list_records(args: ToolArgs) -> Any:
        return await api.list_records(parse_list_records_args(args))

    async def view_record(args: ToolArgs) -> Any:
        return await api.view_record(parse_view_record_args(args))

    async def create_record(args: ToolArgs) -> Any:
        return await api.create_record(parse_create_record_args(args))

    async def update_record(args: ToolArgs) -> Any:
        return await api.update_record(parse_update_record_args(args))

    async def delete_record(args: ToolArgs) -> Any:
        parsed = parse_delete_record_args(args)
        return await api.delete_record(parsed.collection, parsed.id)

    async def get_file_url(args: ToolArgs) -> Any:
        return await api.get_file_url(parse_file_url_args(args))

    return {
        "list_records": list_records,
        "view_record": view_record,
        "create_record": create_record,
        "update_record": update_record,
        "delete_record": delete_record,
        "get_file_url": get_file_url,
    }


def create_meta_handlers(api: PocketBaseApi) -> Dict[str, ToolHandler]:
    async def health(args: ToolArgs) -> Any:
        return await api.health()

    async def field_schema_reference(args: ToolArgs) -> Any:
        return get_field_schema_reference()

    async def rules_reference(args: ToolArgs) -> Any:
        return get_rules_reference()

    return {
        "health": health,
        "get_field_schema_reference": field_schema_reference,
        "get_rules_reference": rules_reference,
    }


class ToolDispatcher:
    """
    Routes a tool name to its handler.

    The table is closed: it is built once from the handler groups and must
    cover every tool in the catalog, otherwise construction fails.
    """

    def __init__(self, api: PocketBaseApi):
        handlers: Dict[str, ToolHandler] = {}
        for group in (
            create_auth_handlers(api),
            create_collection_handlers(api),
            create_record_handlers(api),
            create_meta_handlers(api),
        ):
            handlers.update(group)

        missing = [name for name in TOOL_NAMES if name not in handlers]
        if missing:
            raise RuntimeError(f"Missing tool handlers: {', '.join(missing)}")

        self._handlers = handlers

    @property
    def tool_names(self):
        return list(self._handlers)

    async def dispatch(self, name: str, args: Optional[ToolArgs] = None) -> Any:
        """
        Run one tool call.

        Args:
            name: Tool name from the tools/call request
            args: Raw argument bag (None is treated as empty)

        Returns:
            The facade result, unchanged

        Raises:
            ValidationError: Unknown tool or invalid arguments
            ApiError, AuthError: Propagated from the HTTP client
        """
        handler = self._handlers.get(name)
        if handler is None:
            raise ValidationError(f"Unknown tool: {name}")
        return await handler(args or {})

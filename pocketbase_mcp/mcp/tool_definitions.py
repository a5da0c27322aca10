"""
Tool catalog advertised on tools/list.

Every entry carries the tool name, a description aimed at the calling model
and a JSON Schema for its arguments. The schemas are informational: the
server does not enforce them, the validators in pocketbase_mcp.validators do.
"""

from typing import Any, Dict, List

from mcp import types


_COLLECTION_PROPERTY = {
    "type": "string",
    "description": "Collection name or ID",
}

_RECORD_ID_PROPERTY = {
    "type": "string",
    "description": "Record ID",
}

_FIELD_ITEM = {
    "type": "object",
    "description": "Field definition object",
}

_INDEX_PROPERTY = {
    "type": "string",
    "description": "SQL CREATE INDEX statement",
}


def _nullable_string(description: str) -> Dict[str, Any]:
    return {"type": ["string", "null"], "description": description}


def _no_arguments() -> Dict[str, Any]:
    return {"type": "object", "properties": {}, "additionalProperties": False}


TOOL_DEFINITIONS: List[Dict[str, Any]] = [
    # Session
    {
        "name": "auth_admin",
        "description": (
            "Authenticate as a PocketBase superuser. The token is kept for all "
            "following tool calls."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "identity": {"type": "string", "description": "Superuser email"},
                "password": {"type": "string", "description": "Superuser password"},
            },
            "required": ["identity", "password"],
        },
    },
    {
        "name": "auth_user",
        "description": (
            "Authenticate as a record of an auth collection. The token is kept for "
            "all following tool calls."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "collection": {
                    "type": "string",
                    "description": "Auth collection name or ID (e.g., users)",
                },
                "identity": {"type": "string", "description": "Username or email"},
                "password": {"type": "string", "description": "Account password"},
            },
            "required": ["collection", "identity", "password"],
        },
    },
    {
        "name": "get_auth_status",
        "description": "Show whether a token is held, a redacted preview of it and the PocketBase URL",
        "inputSchema": _no_arguments(),
    },
    {
        "name": "logout",
        "description": "Forget the stored authentication token",
        "inputSchema": _no_arguments(),
    },
    {
        "name": "set_base_url",
        "description": (
            "Point the server at another PocketBase instance. The current token is "
            "kept; re-authenticate if the new instance needs it."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "url": {
                    "type": "string",
                    "description": "PocketBase base URL (e.g., http://127.0.0.1:8090)",
                },
            },
            "required": ["url"],
        },
    },
    # Meta
    {
        "name": "health",
        "description": "Check PocketBase server health status",
        "inputSchema": _no_arguments(),
    },
    {
        "name": "get_field_schema_reference",
        "description": (
            "Get PocketBase collection field schema reference. Call this before "
            "create_collection to see correct field syntax for all field types."
        ),
        "inputSchema": _no_arguments(),
    },
    {
        "name": "get_rules_reference",
        "description": (
            "Get API rules syntax reference. Call this BEFORE update_collection_rules "
            "to understand filter syntax, operators, modifiers, and macros."
        ),
        "inputSchema": _no_arguments(),
    },
    # Collections
    {
        "name": "list_collections",
        "description": "List all collections",
        "inputSchema": _no_arguments(),
    },
    {
        "name": "view_collection",
        "description": "View a collection by name or ID",
        "inputSchema": {
            "type": "object",
            "properties": {"collection": _COLLECTION_PROPERTY},
            "required": ["collection"],
        },
    },
    {
        "name": "create_collection",
        "description": (
            "Create a new collection. Call get_field_schema_reference first to see "
            "correct field syntax."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "name": {"type": "string", "description": "Collection name"},
                "type": {
                    "type": "string",
                    "description": "Collection type: base, auth, or view",
                    "enum": ["base", "auth", "view"],
                },
                "fields": {
                    "type": "array",
                    "description": "Array of field definitions",
                    "items": _FIELD_ITEM,
                },
                "listRule": _nullable_string('List API rule (null=disallow, ""=allow all)'),
                "viewRule": _nullable_string("View API rule"),
                "createRule": _nullable_string("Create API rule"),
                "updateRule": _nullable_string("Update API rule"),
                "deleteRule": _nullable_string("Delete API rule"),
                "indexes": {
                    "type": "array",
                    "description": "SQL index definitions",
                    "items": _INDEX_PROPERTY,
                },
            },
            "required": ["name", "fields"],
        },
    },
    {
        "name": "update_collection",
        "description": (
            "Update an existing collection. For schema changes (add/remove fields) you "
            "must send a valid payload. If updating fields, provide the full fields "
            "array (existing fields + your changes), not just the new field."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "collection": _COLLECTION_PROPERTY,
                "data": {
                    "type": "object",
                    "description": (
                        "Collection data to update. For schema changes, include fields as "
                        "a full array (existing + new/removed). If omitted, you may pass "
                        "update properties directly at the top-level (besides collection)."
                    ),
                },
                "fields": {
                    "type": "array",
                    "description": (
                        "Optional shorthand to update the collection fields (schema). "
                        "Must be the full fields array (existing + changes)."
                    ),
                    "items": _FIELD_ITEM,
                },
                "indexes": {
                    "type": "array",
                    "description": (
                        "Optional indexes definitions. Note that view collections may "
                        "not support indexes."
                    ),
                    "items": _INDEX_PROPERTY,
                },
                "listRule": _nullable_string('List API rule (null=disallow, ""=allow all)'),
                "viewRule": _nullable_string("View API rule"),
                "createRule": _nullable_string("Create API rule"),
                "updateRule": _nullable_string("Update API rule"),
                "deleteRule": _nullable_string("Delete API rule"),
            },
            "required": ["collection"],
        },
    },
    {
        "name": "delete_collection",
        "description": "Delete a collection",
        "inputSchema": {
            "type": "object",
            "properties": {"collection": _COLLECTION_PROPERTY},
            "required": ["collection"],
        },
    },
    {
        "name": "truncate_collection",
        "description": "Delete every record of a collection while keeping the collection itself",
        "inputSchema": {
            "type": "object",
            "properties": {"collection": _COLLECTION_PROPERTY},
            "required": ["collection"],
        },
    },
    {
        "name": "update_collection_rules",
        "description": (
            "Update collection API rules (access control). Call get_rules_reference "
            'first for syntax. Use null for admin-only, "" for public, or filter expression.'
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "collection": _COLLECTION_PROPERTY,
                "listRule": _nullable_string(
                    'Rule for listing records. null=admin only, ""=public, or filter expression'
                ),
                "viewRule": _nullable_string("Rule for viewing single record"),
                "createRule": _nullable_string("Rule for creating records"),
                "updateRule": _nullable_string("Rule for updating records"),
                "deleteRule": _nullable_string("Rule for deleting records"),
            },
            "required": ["collection"],
        },
    },
    # Records
    {
        "name": "list_records",
        "description": (
            "List records from a collection with optional filtering, sorting, and pagination"
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "collection": _COLLECTION_PROPERTY,
                "page": {"type": "integer", "description": "Page number (default: 1)"},
                "perPage": {
                    "type": "integer",
                    "description": "Records per page (default: 30, max: 500)",
                },
                "sort": {
                    "type": "string",
                    "description": "Sort field(s), prefix with - for DESC (e.g., -created,title)",
                },
                "filter": {
                    "type": "string",
                    "description": 'Filter expression (e.g., title~"test" && created>"2022-01-01")',
                },
                "expand": {
                    "type": "string",
                    "description": "Relations to expand (e.g., relField1,relField2.subRelField)",
                },
                "fields": {
                    "type": "string",
                    "description": "Comma-separated fields to return",
                },
            },
            "required": ["collection"],
        },
    },
    {
        "name": "view_record",
        "description": "View a single record by ID",
        "inputSchema": {
            "type": "object",
            "properties": {
                "collection": _COLLECTION_PROPERTY,
                "id": _RECORD_ID_PROPERTY,
                "expand": {"type": "string", "description": "Relations to expand"},
                "fields": {"type": "string", "description": "Comma-separated fields to return"},
            },
            "required": ["collection", "id"],
        },
    },
    {
        "name": "create_record",
        "description": "Create a new record in a collection",
        "inputSchema": {
            "type": "object",
            "properties": {
                "collection": _COLLECTION_PROPERTY,
                "data": {"type": "object", "description": "Record data (field values)"},
                "expand": {"type": "string", "description": "Relations to expand in response"},
            },
            "required": ["collection", "data"],
        },
    },
    {
        "name": "update_record",
        "description": "Update an existing record",
        "inputSchema": {
            "type": "object",
            "properties": {
                "collection": _COLLECTION_PROPERTY,
                "id": _RECORD_ID_PROPERTY,
                "data": {"type": "object", "description": "Record data to update"},
                "expand": {"type": "string", "description": "Relations to expand in response"},
            },
            "required": ["collection", "id", "data"],
        },
    },
    {
        "name": "delete_record",
        "description": "Delete a record",
        "inputSchema": {
            "type": "object",
            "properties": {
                "collection": _COLLECTION_PROPERTY,
                "id": _RECORD_ID_PROPERTY,
            },
            "required": ["collection", "id"],
        },
    },
    {
        "name": "get_file_url",
        "description": "Get download URLs for the files stored in a record's file field",
        "inputSchema": {
            "type": "object",
            "properties": {
                "collection": _COLLECTION_PROPERTY,
                "id": _RECORD_ID_PROPERTY,
                "field": {"type": "string", "description": "Name of the file field"},
                "thumb": {
                    "type": "string",
                    "description": "Thumbnail size for image files (e.g., 100x100)",
                },
            },
            "required": ["collection", "id", "field"],
        },
    },
]

TOOL_NAMES = tuple(definition["name"] for definition in TOOL_DEFINITIONS)


def get_tool_definitions() -> List[types.Tool]:
    """
    Build the MCP Tool objects for tools/list.

    Returns:
        One mcp.types.Tool per catalog entry, in catalog order
    """
    return [
        types.Tool(
            name=definition["name"],
            description=definition["description"],
            inputSchema=definition["inputSchema"],
        )
        for definition in TOOL_DEFINITIONS
    ]

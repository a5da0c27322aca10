"""
PocketBase API facade.

One method per PocketBase capability. Each method templates the path,
makes one call through HttpClient and applies light response shaping.
Arguments arrive already validated (see pocketbase_mcp.validators).
"""

import json
import logging
import re
from typing import Any, Dict, List, Optional
from urllib.parse import quote, unquote, urlencode

from .errors import ValidationError
from .http_client import SUPERUSER_AUTH_ENDPOINT, HttpClient
from .types import (
    RULE_KEYS,
    AuthAdminArgs,
    AuthUserArgs,
    CreateCollectionArgs,
    CreateRecordArgs,
    FileUrlArgs,
    ListRecordsArgs,
    UpdateRecordArgs,
    UpdateRulesArgs,
    ViewRecordArgs,
)


logger = logging.getLogger(__name__)

RESOURCE_URI_PREFIX = "pocketbase://collection/"
RESOURCE_URI_PATTERN = re.compile(r"^pocketbase://collection/(.+)$", re.DOTALL)
JSON_MIME_TYPE = "application/json"


def _encode(segment: str) -> str:
    return quote(segment, safe="")


def _collection_path(collection: str) -> str:
    return f"/api/collections/{_encode(collection)}"


def _records_path(collection: str, record_id: Optional[str] = None) -> str:
    path = f"{_collection_path(collection)}/records"
    if record_id is not None:
        path += f"/{_encode(record_id)}"
    return path


def _pick_query(source: Any, keys) -> Dict[str, Any]:
    query = {}
    for key in keys:
        value = getattr(source, key)
        if value is not None and value != "":
            query[key] = value
    return query


def get_token_preview(token: Optional[str]) -> Optional[str]:
    """
    Redacted form of a token for status output.

    Tokens up to 12 characters show their first 4 characters only; longer
    tokens show the first 8 and last 4.
    """
    if not token:
        return None
    if len(token) <= 12:
        return f"{token[:4]}..."
    return f"{token[:8]}...{token[-4:]}"


class PocketBaseApi:
    """Typed facade over the PocketBase REST API."""

    def __init__(self, http: HttpClient):
        self.http = http

    # Authentication and session

    async def _password_auth(self, endpoint: str, identity: str, password: str) -> Dict[str, Any]:
        result = await self.http.request(
            "POST",
            endpoint,
            {"identity": identity, "password": password},
            use_auth=False,
        )
        if not isinstance(result, dict):
            result = {}
        self.http.set_token(result.get("token"))
        return result

    async def auth_admin(self, args: AuthAdminArgs) -> Dict[str, Any]:
        result = await self._password_auth(SUPERUSER_AUTH_ENDPOINT, args.identity, args.password)
        logger.info("Authenticated as superuser")
        return {
            "authenticated": bool(result.get("token")),
            "mode": "admin",
            "tokenPreview": get_token_preview(self.http.get_token()),
            "record": result.get("record"),
        }

    async def auth_user(self, args: AuthUserArgs) -> Dict[str, Any]:
        result = await self._password_auth(
            f"{_collection_path(args.collection)}/auth-with-password",
            args.identity,
            args.password,
        )
        logger.info("Authenticated as user of collection %s", args.collection)
        return {
            "authenticated": bool(result.get("token")),
            "mode": "user",
            "collection": args.collection,
            "tokenPreview": get_token_preview(self.http.get_token()),
            "record": result.get("record"),
        }

    def get_auth_status(self) -> Dict[str, Any]:
        token = self.http.get_token()
        return {
            "authenticated": bool(token),
            "tokenPreview": get_token_preview(token),
            "baseUrl": self.http.get_base_url(),
        }

    def logout(self) -> Dict[str, Any]:
        self.http.clear_token()
        return {
            "message": "Authentication session cleared",
            "authenticated": False,
        }

    def set_base_url(self, url: str) -> Dict[str, Any]:
        # Token survives the URL change
        self.http.set_base_url(url)
        logger.info("PocketBase URL changed to %s", self.http.get_base_url())
        return {
            "message": "PocketBase URL updated. Re-authenticate if needed.",
            "baseUrl": self.http.get_base_url(),
            "authenticated": bool(self.http.get_token()),
        }

    # Collections

    async def health(self) -> Any:
        return await self.http.request("GET", "/api/health")

    async def list_collections(self) -> Dict[str, Any]:
        """List collections as compact summaries (field count, no rules)."""
        result = await self.http.request("GET", "/api/collections")
        if not isinstance(result, dict):
            result = {}

        items = []
        for col in result.get("items") or []:
            items.append({
                "id": col.get("id"),
                "name": col.get("name"),
                "type": col.get("type"),
                "fields": len(col.get("fields") or []),
                "system": col.get("system") or False,
            })

        return {
            "page": result.get("page"),
            "perPage": result.get("perPage"),
            "totalItems": result.get("totalItems"),
            "totalPages": result.get("totalPages"),
            "items": items,
        }

    async def view_collection(self, collection: str) -> Any:
        return await self.http.request("GET", _collection_path(collection))

    async def create_collection(self, args: CreateCollectionArgs) -> Any:
        payload: Dict[str, Any] = {
            "name": args.name,
            "type": args.type or "base",
            "fields": args.fields or [],
        }
        for rule in RULE_KEYS:
            if rule in args.rules:
                payload[rule] = args.rules[rule]
        if args.indexes:
            payload["indexes"] = args.indexes

        return await self.http.request("POST", "/api/collections", payload)

    async def update_collection(self, collection: str, data: Dict[str, Any]) -> Any:
        """
        PATCH a collection with data as given.

        Keys in data replace the stored value; a fields list must be the
        complete field array, not only the changed fields.
        """
        return await self.http.request("PATCH", _collection_path(collection), data)

    async def delete_collection(self, collection: str) -> Dict[str, Any]:
        await self.http.request("DELETE", _collection_path(collection))
        return {"message": "Collection deleted successfully"}

    async def truncate_collection(self, collection: str) -> Dict[str, Any]:
        await self.http.request("DELETE", f"{_collection_path(collection)}/truncate")
        return {"message": "Collection truncated successfully", "collection": collection}

    async def update_collection_rules(self, args: UpdateRulesArgs) -> Dict[str, Any]:
        payload = {rule: args.rules[rule] for rule in RULE_KEYS if rule in args.rules}

        if not payload:
            return {
                "message": "No rules specified to update",
                "collection": args.collection,
                "updatedRules": [],
                "currentRules": {},
            }

        result = await self.http.request("PATCH", _collection_path(args.collection), payload)
        if not isinstance(result, dict):
            result = {}

        return {
            "message": "Collection rules updated successfully",
            "collection": args.collection,
            "updatedRules": list(payload.keys()),
            "currentRules": {rule: result.get(rule) for rule in RULE_KEYS},
        }

    # Records

    async def list_records(self, args: ListRecordsArgs) -> Any:
        query = _pick_query(args, ("page", "perPage", "sort", "filter", "expand", "fields"))
        return await self.http.request("GET", _records_path(args.collection), None, query)

    async def view_record(self, args: ViewRecordArgs) -> Any:
        query = _pick_query(args, ("expand", "fields"))
        return await self.http.request("GET", _records_path(args.collection, args.id), None, query)

    async def create_record(self, args: CreateRecordArgs) -> Any:
        query = _pick_query(args, ("expand",))
        return await self.http.request("POST", _records_path(args.collection), args.data, query)

    async def update_record(self, args: UpdateRecordArgs) -> Any:
        query = _pick_query(args, ("expand",))
        return await self.http.request(
            "PATCH", _records_path(args.collection, args.id), args.data, query
        )

    async def delete_record(self, collection: str, record_id: str) -> Dict[str, Any]:
        await self.http.request("DELETE", _records_path(collection, record_id))
        return {"message": "Record deleted successfully"}

    async def get_file_url(self, args: FileUrlArgs) -> Dict[str, Any]:
        """
        Resolve download URLs for the files stored in a record's file field.

        The record is fetched once; URLs follow PocketBase's
        /api/files/<collection>/<record>/<filename> layout.
        """
        record = await self.http.request("GET", _records_path(args.collection, args.id))
        if not isinstance(record, dict):
            record = {}

        value = record.get(args.field)
        file_names: List[str] = []
        if isinstance(value, str) and value:
            file_names = [value]
        elif isinstance(value, list):
            file_names = [name for name in value if isinstance(name, str) and name]

        if not file_names:
            raise ValidationError(
                f"File field '{args.field}' not found or empty on record {args.id}"
            )

        collection_ref = record.get("collectionId") or args.collection
        suffix = f"?{urlencode({'thumb': args.thumb})}" if args.thumb else ""
        base = (
            f"{self.http.get_base_url()}/api/files/"
            f"{_encode(collection_ref)}/{_encode(args.id)}"
        )

        return {
            "collection": args.collection,
            "id": args.id,
            "field": args.field,
            "files": [
                {"fileName": name, "url": f"{base}/{_encode(name)}{suffix}"}
                for name in file_names
            ],
        }

    # Resources

    async def list_resources(self) -> List[Dict[str, Any]]:
        collections = await self.list_collections()
        return [
            {
                "uri": f"{RESOURCE_URI_PREFIX}{col['name']}",
                "name": col["name"],
                "description": f"Collection: {col['name']} (type: {col['type']})",
                "mimeType": JSON_MIME_TYPE,
            }
            for col in collections["items"]
        ]

    async def read_resource(self, uri: str) -> Dict[str, Any]:
        match = RESOURCE_URI_PATTERN.match(uri)
        if not match:
            raise ValidationError("Invalid resource URI")

        # Clients may hand back the percent-encoded form of the URI
        data = await self.view_collection(unquote(match.group(1)))
        return {
            "uri": uri,
            "mimeType": JSON_MIME_TYPE,
            "text": json.dumps(data, indent=2),
        }

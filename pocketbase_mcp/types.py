"""
Validated argument objects, one per tool family.

Validators in pocketbase_mcp.validators build these from the raw argument
bag of a tool call; the facade in pocketbase_mcp.api only ever sees them.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


RULE_KEYS = ("listRule", "viewRule", "createRule", "updateRule", "deleteRule")
COLLECTION_TYPES = ("base", "auth", "view")


@dataclass
class AuthAdminArgs:
    identity: str
    password: str


@dataclass
class AuthUserArgs:
    collection: str
    identity: str
    password: str


@dataclass
class SetBaseUrlArgs:
    url: str


@dataclass
class CreateCollectionArgs:
    """
    Arguments for create_collection.

    rules only holds the rule keys the caller actually sent, so an explicit
    None (superuser only) stays distinct from an omitted rule.
    """
    name: str
    fields: List[Dict[str, Any]]
    type: Optional[str] = None
    indexes: Optional[List[str]] = None
    rules: Dict[str, Optional[str]] = field(default_factory=dict)


@dataclass
class UpdateCollectionArgs:
    collection: str
    data: Dict[str, Any]


@dataclass
class UpdateRulesArgs:
    collection: str
    rules: Dict[str, Optional[str]] = field(default_factory=dict)


@dataclass
class ListRecordsArgs:
    collection: str
    page: Optional[int] = None
    perPage: Optional[int] = None
    sort: Optional[str] = None
    filter: Optional[str] = None
    expand: Optional[str] = None
    fields: Optional[str] = None


@dataclass
class ViewRecordArgs:
    collection: str
    id: str
    expand: Optional[str] = None
    fields: Optional[str] = None


@dataclass
class CreateRecordArgs:
    collection: str
    data: Dict[str, Any]
    expand: Optional[str] = None


@dataclass
class UpdateRecordArgs:
    collection: str
    id: str
    data: Dict[str, Any]
    expand: Optional[str] = None


@dataclass
class DeleteRecordArgs:
    collection: str
    id: str


@dataclass
class FileUrlArgs:
    collection: str
    id: str
    field: str
    thumb: Optional[str] = None

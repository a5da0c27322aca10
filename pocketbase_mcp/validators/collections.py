"""Validators for the collection tools."""

from typing import Any, Dict

from ..errors import ValidationError
from ..types import (
    COLLECTION_TYPES,
    RULE_KEYS,
    CreateCollectionArgs,
    UpdateCollectionArgs,
    UpdateRulesArgs,
)
from .common import (
    MISSING,
    assert_object_array,
    assert_string_array,
    optional_nullable_string,
    read_rule_values,
    require_object,
    require_string,
)


MERGEABLE_UPDATE_KEYS = ("fields", "indexes") + RULE_KEYS

EMPTY_UPDATE_MESSAGE = (
    "Missing update payload. Provide update properties under data or at top-level "
    "(besides collection). For schema changes, send fields as the full fields array "
    "(existing fields + your changes)."
)


def parse_collection_name(args: Dict[str, Any]) -> str:
    return require_string(args.get("collection", MISSING), "collection")


def parse_create_collection_args(args: Dict[str, Any]) -> CreateCollectionArgs:
    name = require_string(args.get("name", MISSING), "name")
    fields = assert_object_array(args.get("fields", MISSING), "fields")

    parsed = CreateCollectionArgs(name=name, fields=fields, rules=read_rule_values(args))

    collection_type = args.get("type", MISSING)
    if collection_type is not MISSING:
        if collection_type not in COLLECTION_TYPES:
            raise ValidationError("Invalid parameter: type must be one of base, auth, or view")
        parsed.type = collection_type

    indexes = args.get("indexes", MISSING)
    if indexes is not MISSING:
        parsed.indexes = assert_string_array(indexes, "indexes")

    return parsed


def parse_update_collection_args(args: Dict[str, Any]) -> UpdateCollectionArgs:
    """
    Build the PATCH payload for update_collection.

    Two shapes are accepted. With a nested data object, data is the payload
    and top-level fields/indexes/rules only fill keys data does not define.
    Without data, every top-level key except collection is the payload.
    """
    collection = parse_collection_name(args)

    nested = args.get("data", MISSING)
    if nested is MISSING:
        data = {key: value for key, value in args.items() if key != "collection"}
    else:
        data = dict(require_object(nested, "data"))
        for key in MERGEABLE_UPDATE_KEYS:
            if key in args and key not in data:
                data[key] = args[key]

    if not data:
        raise ValidationError(EMPTY_UPDATE_MESSAGE)

    if "fields" in data:
        assert_object_array(data["fields"], "fields")

    if "indexes" in data:
        assert_string_array(data["indexes"], "indexes")

    for rule in RULE_KEYS:
        if rule in data:
            optional_nullable_string(data[rule], rule)

    return UpdateCollectionArgs(collection=collection, data=data)


def parse_update_rules_args(args: Dict[str, Any]) -> UpdateRulesArgs:
    return UpdateRulesArgs(
        collection=parse_collection_name(args),
        rules=read_rule_values(args),
    )

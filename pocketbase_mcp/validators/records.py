"""Validators for the record tools."""

from typing import Any, Dict

from ..types import (
    CreateRecordArgs,
    DeleteRecordArgs,
    FileUrlArgs,
    ListRecordsArgs,
    UpdateRecordArgs,
    ViewRecordArgs,
)
from .common import MISSING, optional_integer, optional_string, require_object, require_string


def parse_list_records_args(args: Dict[str, Any]) -> ListRecordsArgs:
    parsed = ListRecordsArgs(
        collection=require_string(args.get("collection", MISSING), "collection"),
        page=optional_integer(args.get("page", MISSING), "page"),
        perPage=optional_integer(args.get("perPage", MISSING), "perPage"),
    )
    for key in ("sort", "filter", "expand", "fields"):
        setattr(parsed, key, optional_string(args.get(key, MISSING), key))
    return parsed


def parse_view_record_args(args: Dict[str, Any]) -> ViewRecordArgs:
    return ViewRecordArgs(
        collection=require_string(args.get("collection", MISSING), "collection"),
        id=require_string(args.get("id", MISSING), "id"),
        expand=optional_string(args.get("expand", MISSING), "expand"),
        fields=optional_string(args.get("fields", MISSING), "fields"),
    )


def parse_create_record_args(args: Dict[str, Any]) -> CreateRecordArgs:
    return CreateRecordArgs(
        collection=require_string(args.get("collection", MISSING), "collection"),
        data=require_object(args.get("data", MISSING), "data"),
        expand=optional_string(args.get("expand", MISSING), "expand"),
    )


def parse_update_record_args(args: Dict[str, Any]) -> UpdateRecordArgs:
    return UpdateRecordArgs(
        collection=require_string(args.get("collection", MISSING), "collection"),
        id=require_string(args.get("id", MISSING), "id"),
        data=require_object(args.get("data", MISSING), "data"),
        expand=optional_string(args.get("expand", MISSING), "expand"),
    )


def parse_delete_record_args(args: Dict[str, Any]) -> DeleteRecordArgs:
    return DeleteRecordArgs(
        collection=require_string(args.get("collection", MISSING), "collection"),
        id=require_string(args.get("id", MISSING), "id"),
    )


def parse_file_url_args(args: Dict[str, Any]) -> FileUrlArgs:
    return FileUrlArgs(
        collection=require_string(args.get("collection", MISSING), "collection"),
        id=require_string(args.get("id", MISSING), "id"),
        field=require_string(args.get("field", MISSING), "field"),
        thumb=optional_string(args.get("thumb", MISSING), "thumb"),
    )

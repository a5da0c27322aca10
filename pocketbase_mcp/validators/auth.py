"""Validators for the authentication tools."""

from typing import Any, Dict

from ..types import AuthAdminArgs, AuthUserArgs
from .common import MISSING, require_string


def parse_auth_admin_args(args: Dict[str, Any]) -> AuthAdminArgs:
    return AuthAdminArgs(
        identity=require_string(args.get("identity", MISSING), "identity"),
        password=require_string(args.get("password", MISSING), "password"),
    )


def parse_auth_user_args(args: Dict[str, Any]) -> AuthUserArgs:
    return AuthUserArgs(
        collection=require_string(args.get("collection", MISSING), "collection"),
        identity=require_string(args.get("identity", MISSING), "identity"),
        password=require_string(args.get("password", MISSING), "password"),
    )

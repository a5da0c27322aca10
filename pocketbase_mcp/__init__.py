"""
PocketBase MCP Server.

Exposes a PocketBase instance (collections, records, auth) as Model Context
Protocol tools and resources.
"""

from .api import PocketBaseApi
from .config import Settings, load_settings
from .errors import ApiError, AuthError, PocketBaseMCPError, ValidationError, serialize_error
from .http_client import HttpClient

__version__ = "0.1.0"

__all__ = [
    "PocketBaseApi",
    "HttpClient",
    "Settings",
    "load_settings",
    "PocketBaseMCPError",
    "ValidationError",
    "ApiError",
    "AuthError",
    "serialize_error",
]

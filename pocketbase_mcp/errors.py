"""
Error taxonomy for the PocketBase MCP server.

Every error that reaches the tool-call boundary is one of:
- ValidationError: malformed or missing tool arguments (never reaches PocketBase)
- AuthError: PocketBase answered 401 or 403
- ApiError: any other PocketBase HTTP error, or a transport failure
- internal_error: anything else, wrapped by serialize_error()
"""

from typing import Any, Dict, Optional


class PocketBaseMCPError(Exception):
    """Base class for errors raised by this package."""

    type: str = "error"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the error to its wire shape."""
        data: Dict[str, Any] = {"type": self.type, "message": self.message}
        if self.status_code is not None:
            data["statusCode"] = self.status_code
        if self.details is not None:
            data["details"] = self.details
        return data


class ValidationError(PocketBaseMCPError):
    """Raised when tool arguments fail validation."""

    type = "validation_error"


class ApiError(PocketBaseMCPError):
    """Raised for PocketBase HTTP errors and transport failures."""

    type = "api_error"


class AuthError(PocketBaseMCPError):
    """Raised when PocketBase rejects the request with 401 or 403."""

    type = "auth_error"


INTERNAL_ERROR_TYPE = "internal_error"


def serialize_error(error: BaseException) -> Dict[str, Any]:
    """
    Convert any exception into the structured error payload.

    Args:
        error: The exception raised while handling a tool call

    Returns:
        Dict with type, message and, when known, statusCode and details
    """
    if isinstance(error, PocketBaseMCPError):
        return error.to_dict()
    return {"type": INTERNAL_ERROR_TYPE, "message": str(error)}

"""
Tests for the error taxonomy and error serialization.
"""

import pytest
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pocketbase_mcp.errors import (
    ApiError,
    AuthError,
    PocketBaseMCPError,
    ValidationError,
    serialize_error,
)


class TestErrorTypes:
    """Each error class carries its own wire type."""

    def test_type_tags(self):
        assert ValidationError("x").type == "validation_error"
        assert ApiError("x").type == "api_error"
        assert AuthError("x").type == "auth_error"

    def test_errors_share_base_class(self):
        for cls in (ValidationError, ApiError, AuthError):
            assert issubclass(cls, PocketBaseMCPError)

    def test_message_is_exception_text(self):
        error = ApiError("boom", status_code=500)
        assert str(error) == "boom"
        assert error.message == "boom"
        assert error.status_code == 500


class TestSerializeError:
    """Tests for serialize_error()."""

    def test_minimal_error_has_no_optional_keys(self):
        assert serialize_error(ValidationError("Missing required parameter: name")) == {
            "type": "validation_error",
            "message": "Missing required parameter: name",
        }

    def test_status_code_and_details_included(self):
        error = AuthError(
            "The request requires valid record authorization token.",
            status_code=401,
            details={"method": "GET", "endpoint": "/api/collections", "response": None},
        )
        assert serialize_error(error) == {
            "type": "auth_error",
            "message": "The request requires valid record authorization token.",
            "statusCode": 401,
            "details": {"method": "GET", "endpoint": "/api/collections", "response": None},
        }

    def test_foreign_exception_becomes_internal_error(self):
        assert serialize_error(KeyError("items")) == {
            "type": "internal_error",
            "message": "'items'",
        }

    def test_runtime_error_message_kept(self):
        result = serialize_error(RuntimeError("unexpected"))
        assert result["type"] == "internal_error"
        assert result["message"] == "unexpected"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

"""
Tests for the MCP server and client.

This file contains three test suites:
1. Server core tests (PocketBaseMCPServer, result formatting)
2. Protocol tests that drive the SDK server through an in-memory MCP client
   session, with PocketBase replaced by an httpx.MockTransport
3. Integration tests against a running HTTP server, skipped when unavailable:
       python run_servers.py mcp --transport http --port 8080
"""

import pytest
import json
import os
import sys
from types import SimpleNamespace

import httpx
from mcp import types
from mcp.shared.exceptions import McpError
from mcp.shared.memory import create_connected_server_and_client_session

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pocketbase_mcp.config import Settings
from pocketbase_mcp.errors import ApiError, ValidationError
from pocketbase_mcp.mcp.mcp_client import MCPClient, MCPError, MCPToolError, parse_tool_result
from pocketbase_mcp.mcp.mcp_server import (
    PocketBaseMCPServer,
    create_server,
    format_tool_error,
    format_tool_result,
)
from pocketbase_mcp.mcp.tool_definitions import TOOL_NAMES


COLLECTIONS = {
    "page": 1,
    "perPage": 30,
    "totalItems": 1,
    "totalPages": 1,
    "items": [{"id": "c1", "name": "posts", "type": "base", "fields": [{"name": "title"}]}],
}


def find_error(exc, error_type=MCPToolError):
    if isinstance(exc, error_type):
        return exc
    for inner in getattr(exc, "exceptions", ()):
        found = find_error(inner, error_type)
        if found is not None:
            return found
    return None


class FakePocketBase:
    """Routes (method, path) pairs to canned JSON responses and records every request."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def add(self, method, path, payload=None, status_code=200):
        self.routes[(method, path)] = (status_code, payload)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        not_found = (404, {"message": "The requested resource wasn't found."})
        status_code, payload = self.routes.get((request.method, request.url.path), not_found)
        if payload is None:
            return httpx.Response(status_code)
        return httpx.Response(status_code, json=payload)


class TestResultFormatting:
    """Tests for turning handler results and errors into CallToolResult."""

    def test_format_tool_result(self):
        result = format_tool_result({"message": "ok"})

        assert result.isError is False
        assert result.content[0].type == "text"
        assert json.loads(result.content[0].text) == {"message": "ok"}
        assert result.content[0].text == json.dumps({"message": "ok"}, indent=2)

    def test_format_tool_error(self):
        result = format_tool_error(ApiError("Failed to create record.", status_code=400))

        assert result.isError is True
        assert json.loads(result.content[0].text) == {
            "error": {"type": "api_error", "message": "Failed to create record.", "statusCode": 400}
        }

    def test_format_foreign_error(self):
        result = format_tool_error(ZeroDivisionError("division by zero"))

        assert json.loads(result.content[0].text)["error"] == {
            "type": "internal_error",
            "message": "division by zero",
        }


class TestPocketBaseMCPServer:
    """Tests for the transport-independent server core."""

    @pytest.fixture(autouse=True)
    def setup(self):
        self.pocketbase = FakePocketBase()
        self.transport = httpx.MockTransport(self.pocketbase)

    def make_server(self, **kwargs):
        return PocketBaseMCPServer("http://pb.test", transport=self.transport, **kwargs)

    def test_from_settings(self):
        settings = Settings(url="http://pb.test/", token="tok", timeout=5.0)

        pb = PocketBaseMCPServer.from_settings(settings, transport=self.transport)

        assert pb.http.get_base_url() == "http://pb.test"
        assert pb.http.get_token() == "tok"

    def test_instances_do_not_share_sessions(self):
        first = self.make_server(token="one")
        second = self.make_server()

        first.http.set_base_url("http://elsewhere.test")

        assert second.http.get_base_url() == "http://pb.test"
        assert second.http.get_token() is None

    @pytest.mark.asyncio
    async def test_initialize_logs_in_with_credentials(self):
        self.pocketbase.add(
            "POST", "/api/collections/_superusers/auth-with-password", {"token": "su-token"}
        )
        pb = self.make_server(email="admin@example.com", password="secret")

        await pb.initialize()

        assert pb.http.get_token() == "su-token"

    @pytest.mark.asyncio
    async def test_initialize_skipped_with_token(self):
        pb = self.make_server(token="tok", email="admin@example.com", password="secret")

        await pb.initialize()

        assert self.pocketbase.requests == []
        assert pb.http.get_token() == "tok"

    @pytest.mark.asyncio
    async def test_initialize_failure_keeps_server_running(self):
        self.pocketbase.add(
            "POST",
            "/api/collections/_superusers/auth-with-password",
            {"message": "Failed to authenticate."},
            status_code=400,
        )
        pb = self.make_server(email="admin@example.com", password="wrong")

        await pb.initialize()

        assert pb.http.get_token() is None

    @pytest.mark.asyncio
    async def test_call_tool_delegates(self):
        self.pocketbase.add("GET", "/api/collections", COLLECTIONS)
        pb = self.make_server()

        result = await pb.call_tool("list_collections", {})

        assert result["items"][0] == {"id": "c1", "name": "posts", "type": "base", "fields": 1, "system": False}

    @pytest.mark.asyncio
    async def test_read_resource_validates_uri(self):
        pb = self.make_server()

        with pytest.raises(ValidationError):
            await pb.read_resource("invalid://uri")
        assert self.pocketbase.requests == []


class TestMCPProtocol:
    """
    Drive the SDK server end to end through an in-memory client session.
    Verifies tools/list, tools/call and resources/* as a client sees them.
    """

    @pytest.fixture(autouse=True)
    def setup(self):
        self.pocketbase = FakePocketBase()
        self.pb = PocketBaseMCPServer(
            "http://pb.test", transport=httpx.MockTransport(self.pocketbase)
        )
        self.server = create_server(self.pb)

    @pytest.mark.asyncio
    async def test_list_tools(self):
        async with create_connected_server_and_client_session(self.server) as client:
            result = await client.list_tools()

        assert [tool.name for tool in result.tools] == list(TOOL_NAMES)
        for tool in result.tools:
            assert tool.description
            assert tool.inputSchema["type"] == "object"

    @pytest.mark.asyncio
    async def test_call_tool_success(self):
        self.pocketbase.add("GET", "/api/health", {"code": 200, "message": "API is healthy."})

        async with create_connected_server_and_client_session(self.server) as client:
            result = await client.call_tool("health", {})

        assert result.isError is False
        assert json.loads(result.content[0].text) == {"code": 200, "message": "API is healthy."}

    @pytest.mark.asyncio
    async def test_call_tool_validation_error(self):
        async with create_connected_server_and_client_session(self.server) as client:
            result = await client.call_tool("list_records", {"collection": "posts", "page": "1"})

        assert result.isError is True
        assert json.loads(result.content[0].text) == {
            "error": {
                "type": "validation_error",
                "message": "Invalid parameter: page must be an integer",
            }
        }
        assert self.pocketbase.requests == []

    @pytest.mark.asyncio
    async def test_call_unknown_tool(self):
        async with create_connected_server_and_client_session(self.server) as client:
            result = await client.call_tool("drop_database", {})

        assert result.isError is True
        error = json.loads(result.content[0].text)["error"]
        assert error == {"type": "validation_error", "message": "Unknown tool: drop_database"}

    @pytest.mark.asyncio
    async def test_call_tool_auth_error(self):
        self.pocketbase.add(
            "GET", "/api/collections", {"message": "Only superusers can perform this action."}, 403
        )

        async with create_connected_server_and_client_session(self.server) as client:
            result = await client.call_tool("list_collections", {})

        assert result.isError is True
        error = json.loads(result.content[0].text)["error"]
        assert error["type"] == "auth_error"
        assert error["statusCode"] == 403
        assert error["message"] == "Only superusers can perform this action."

    @pytest.mark.asyncio
    async def test_list_resources(self):
        self.pocketbase.add("GET", "/api/collections", COLLECTIONS)

        async with create_connected_server_and_client_session(self.server) as client:
            result = await client.list_resources()

        assert len(result.resources) == 1
        resource = result.resources[0]
        assert str(resource.uri) == "pocketbase://collection/posts"
        assert resource.name == "posts"
        assert resource.description == "Collection: posts (type: base)"
        assert resource.mimeType == "application/json"

    @pytest.mark.asyncio
    async def test_read_resource(self):
        self.pocketbase.add("GET", "/api/collections/posts", {"id": "c1", "name": "posts"})

        async with create_connected_server_and_client_session(self.server) as client:
            result = await client.read_resource("pocketbase://collection/posts")

        content = result.contents[0]
        assert content.mimeType == "application/json"
        assert json.loads(content.text)["name"] == "posts"

    @pytest.mark.asyncio
    async def test_read_listed_resource_with_space_in_name(self):
        self.pocketbase.add("GET", "/api/collections", {
            "items": [{"id": "c2", "name": "my posts", "type": "base", "fields": []}],
        })
        self.pocketbase.add("GET", "/api/collections/my posts", {"id": "c2", "name": "my posts"})

        async with create_connected_server_and_client_session(self.server) as client:
            listed = await client.list_resources()
            result = await client.read_resource(listed.resources[0].uri)

        assert json.loads(result.contents[0].text)["name"] == "my posts"
        assert self.pocketbase.requests[-1].url.raw_path == b"/api/collections/my%20posts"

    @pytest.mark.asyncio
    async def test_read_resource_invalid_uri(self):
        async with create_connected_server_and_client_session(self.server) as client:
            with pytest.raises(McpError) as exc_info:
                await client.read_resource("invalid://uri")

        assert exc_info.value.error.message == "[validation_error] Invalid resource URI"
        assert exc_info.value.error.code == types.INVALID_PARAMS
        assert self.pocketbase.requests == []


class TestMCPClient:
    """Tests for the MCP client that need no running server."""

    def test_url_normalization(self):
        client = MCPClient(base_url="http://test:8080")
        assert client.url == "http://test:8080/mcp"
        assert client.base_url == "http://test:8080"

        client = MCPClient(base_url="http://test:8080/mcp/")
        assert client.url == "http://test:8080/mcp"

        # Tools cache should start empty
        assert client._tools_cache is None

    def test_parse_tool_result_json(self):
        result = format_tool_result({"id": "r1"})
        assert parse_tool_result("view_record", result) == {"id": "r1"}

    def test_parse_tool_result_plain_text(self):
        result = SimpleNamespace(
            isError=False, content=[types.TextContent(type="text", text="not json")]
        )
        assert parse_tool_result("health", result) == "not json"

    def test_parse_tool_result_error(self):
        result = format_tool_error(ValidationError("Missing required parameter: collection"))

        with pytest.raises(MCPToolError) as exc_info:
            parse_tool_result("list_records", result)

        error = exc_info.value
        assert error.tool_name == "list_records"
        assert error.message == "Missing required parameter: collection"
        assert error.error["type"] == "validation_error"


class TestMCPClientInMemory:
    """
    Drive MCPClient against the SDK server with its HTTP session replaced by
    an in-memory one.
    """

    @pytest.fixture(autouse=True)
    def setup(self):
        self.pocketbase = FakePocketBase()
        pb = PocketBaseMCPServer("http://pb.test", transport=httpx.MockTransport(self.pocketbase))
        server = create_server(pb)

        async def run_session(callback):
            async with create_connected_server_and_client_session(server) as session:
                return await callback(session)

        self.client = MCPClient(base_url="http://unused.test")
        self.client._run_session = run_session

    @pytest.mark.asyncio
    async def test_list_resources_async(self):
        self.pocketbase.add("GET", "/api/collections", COLLECTIONS)

        resources = await self.client.list_resources_async()

        assert resources == [{
            "uri": "pocketbase://collection/posts",
            "name": "posts",
            "description": "Collection: posts (type: base)",
            "mimeType": "application/json",
        }]

    @pytest.mark.asyncio
    async def test_read_resource_async_decodes_json(self):
        self.pocketbase.add("GET", "/api/collections/posts", {"id": "c1", "name": "posts"})

        result = await self.client.read_resource_async("pocketbase://collection/posts")

        assert result == {"id": "c1", "name": "posts"}

    @pytest.mark.asyncio
    async def test_read_resource_async_raises_mcp_error(self):
        with pytest.raises(Exception) as exc_info:
            await self.client.read_resource_async("invalid://uri")

        error = find_error(exc_info.value, MCPError)
        assert error is not None, f"MCPError not found in {exc_info.value!r}"
        assert error.code == types.INVALID_PARAMS
        assert error.message == "[validation_error] Invalid resource URI"
        assert self.pocketbase.requests == []

    def test_list_records_maps_per_page(self):
        self.pocketbase.add(
            "GET", "/api/collections/posts/records", {"page": 2, "perPage": 5, "items": []}
        )

        result = self.client.list_records("posts", page=2, per_page=5, filter='status = "active"')

        assert result["perPage"] == 5
        params = self.pocketbase.requests[0].url.params
        assert params["page"] == "2"
        assert params["perPage"] == "5"
        assert params["filter"] == 'status = "active"'
        assert "sort" not in params

    def test_record_wrappers(self):
        self.pocketbase.add("POST", "/api/collections/posts/records", {"id": "r1", "title": "Hi"})
        self.pocketbase.add("GET", "/api/collections/posts/records/r1", {"id": "r1", "title": "Hi"})
        self.pocketbase.add("PATCH", "/api/collections/posts/records/r1", {"id": "r1", "title": "Bye"})
        self.pocketbase.add("DELETE", "/api/collections/posts/records/r1", None, status_code=204)

        assert self.client.create_record("posts", {"title": "Hi"})["id"] == "r1"
        assert self.client.view_record("posts", "r1")["title"] == "Hi"
        assert self.client.update_record("posts", "r1", {"title": "Bye"})["title"] == "Bye"
        assert self.client.delete_record("posts", "r1") == {"message": "Record deleted successfully"}

        assert [request.method for request in self.pocketbase.requests] == [
            "POST", "GET", "PATCH", "DELETE",
        ]
        assert json.loads(self.pocketbase.requests[2].content) == {"title": "Bye"}

    def test_session_wrappers(self):
        self.pocketbase.add("GET", "/api/health", {"code": 200, "message": "API is healthy."})
        self.pocketbase.add(
            "POST", "/api/collections/_superusers/auth-with-password", {"token": "t" * 40}
        )
        self.pocketbase.add("GET", "/api/collections", COLLECTIONS)
        self.pocketbase.add("GET", "/api/collections/posts", {"id": "c1", "name": "posts"})

        assert self.client.health()["message"] == "API is healthy."
        assert self.client.auth_admin("admin@example.com", "secret")["authenticated"] is True
        assert self.client.get_auth_status()["authenticated"] is True
        assert self.client.list_collections()["items"][0]["name"] == "posts"
        assert self.client.view_collection("posts") == {"id": "c1", "name": "posts"}

        assert self.pocketbase.requests[-1].headers["Authorization"] == "t" * 40


class TestMCPClientIntegration:
    """
    Integration tests through a running MCP HTTP server.

    NOTE: These tests require the MCP HTTP server to be running:
        python run_servers.py mcp --transport http --port 8080
    """

    @pytest.fixture
    def client(self):
        """Create MCP client for testing."""
        return MCPClient(base_url=os.environ.get("MCP_SERVER_URL", "http://localhost:8080"))

    @pytest.mark.integration
    def test_list_tools(self, client):
        try:
            tools = client.list_tools(use_cache=False)
        except Exception as e:
            pytest.skip(f"MCP server not available: {e}")

        assert {tool["name"] for tool in tools} == set(TOOL_NAMES)

    @pytest.mark.integration
    def test_reference_tool(self, client):
        try:
            result = client.call_tool("get_rules_reference")
        except Exception as e:
            pytest.skip(f"MCP server not available: {e}")

        assert result["description"] == "PocketBase API Rules and Filters Reference"

    @pytest.mark.integration
    def test_unknown_tool_reports_error(self, client):
        try:
            client.list_tools(use_cache=False)
        except Exception as e:
            pytest.skip(f"MCP server not available: {e}")

        with pytest.raises(Exception) as exc_info:
            client.call_tool("nonexistent_tool", {})

        # The SDK task groups may wrap the MCPToolError in ExceptionGroups
        error = find_error(exc_info.value)
        assert error is not None, f"MCPToolError not found in {exc_info.value!r}"
        assert error.tool_name == "nonexistent_tool"
        assert error.message == "Unknown tool: nonexistent_tool"

    @pytest.mark.integration
    def test_invalid_resource_uri(self, client):
        try:
            client.list_tools(use_cache=False)
        except Exception as e:
            pytest.skip(f"MCP server not available: {e}")

        with pytest.raises(Exception) as exc_info:
            client.read_resource("invalid://uri")

        error = find_error(exc_info.value, MCPError)
        assert error is not None, f"MCPError not found in {exc_info.value!r}"
        assert error.code == types.INVALID_PARAMS

    @pytest.mark.integration
    def test_list_resources(self, client):
        try:
            resources = client.list_resources()
        except Exception as e:
            pytest.skip(f"MCP server or PocketBase not available: {e}")

        for resource in resources:
            assert resource["uri"].startswith("pocketbase://collection/")
            assert resource["mimeType"] == "application/json"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

"""
MCP client for driving a PocketBase MCP server over streamable HTTP.

Uses the official MCP Python SDK for session management. Each call opens
one MCP session, runs the request and closes it again, so the client holds
no connection state between calls.

Both async (*_async) and blocking variants are provided; the blocking ones
are convenient in scripts and integration tests.
"""

import asyncio
import concurrent.futures
import json
import os
from typing import Any, Dict, List, Optional

from mcp import ClientSession
from mcp.client.streamable_http import streamablehttp_client
from mcp.shared.exceptions import McpError


# Default MCP server URL - configurable via environment variable
DEFAULT_MCP_URL = os.environ.get("MCP_SERVER_URL", "http://localhost:8080/mcp")


class MCPError(Exception):
    """
    Exception raised when the MCP server returns a protocol-level error.
    These are JSON-RPC 2.0 errors, e.g. reading a malformed resource URI.
    """

    def __init__(self, error: Any):
        if isinstance(error, dict):
            self.code = error.get("code", -1)
            self.message = error.get("message", "Unknown error")
            self.data = error.get("data")
        else:
            self.code = getattr(error, "code", -1)
            self.message = getattr(error, "message", None) or str(error)
            self.data = getattr(error, "data", None)
        super().__init__(f"MCP Error {self.code}: {self.message}")


class MCPToolError(Exception):
    """
    Exception raised when a tool call fails (isError: true in the response).

    error holds the structured PocketBase error ({type, message, ...}) when
    the server sent one, else None.
    """

    def __init__(self, tool_name: str, message: str, error: Optional[Dict[str, Any]] = None):
        self.tool_name = tool_name
        self.message = message
        self.error = error
        super().__init__(f"Tool '{tool_name}' failed: {message}")


def _parse_text(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def parse_tool_result(tool_name: str, result: Any) -> Any:
    """
    Extract the payload of a CallToolResult.

    Args:
        tool_name: Tool that produced the result (used in error messages)
        result: The mcp.types.CallToolResult

    Returns:
        The decoded JSON payload of the first text content item

    Raises:
        MCPToolError: If the result is flagged isError
    """
    content = result.content
    text = None
    if content and hasattr(content[0], "text"):
        text = content[0].text

    if result.isError:
        payload = _parse_text(text) if text is not None else None
        error = payload.get("error") if isinstance(payload, dict) else None
        if isinstance(error, dict):
            raise MCPToolError(tool_name, error.get("message", "Tool execution failed"), error)
        raise MCPToolError(tool_name, text or "Tool execution failed")

    if text is not None:
        return _parse_text(text)
    if content:
        return content[0]
    return None


class MCPClient:
    """Client for the PocketBase MCP server using the streamable HTTP transport."""

    def __init__(self, base_url: str = DEFAULT_MCP_URL):
        """
        Initialize the MCP client.

        Args:
            base_url: URL of the MCP server endpoint; /mcp is appended if missing
        """
        self.url = base_url.rstrip("/")
        if not self.url.endswith("/mcp"):
            self.url = f"{self.url}/mcp"
        self._tools_cache: Optional[List[Dict[str, Any]]] = None

    @property
    def base_url(self) -> str:
        return self.url.rsplit("/mcp", 1)[0]

    async def _run_session(self, callback):
        """
        Run a callback within an MCP session.

        Args:
            callback: Async function that takes a ClientSession

        Returns:
            Result from the callback
        """
        async with streamablehttp_client(self.url) as (read_stream, write_stream, _):
            async with ClientSession(read_stream, write_stream) as session:
                await session.initialize()
                return await callback(session)

    def _run_sync(self, coro):
        """Run an async coroutine synchronously."""
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(coro)
        # Already inside an event loop: run on a separate thread
        with concurrent.futures.ThreadPoolExecutor() as pool:
            return pool.submit(asyncio.run, coro).result()

    async def list_tools_async(self) -> List[Dict[str, Any]]:
        async def get_tools(session: ClientSession):
            result = await session.list_tools()
            return [
                {
                    "name": tool.name,
                    "description": tool.description or "",
                    "inputSchema": tool.inputSchema,
                }
                for tool in result.tools
            ]
        return await self._run_session(get_tools)

    async def call_tool_async(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> Any:
        async def call(session: ClientSession):
            result = await session.call_tool(name, arguments or {})
            return parse_tool_result(name, result)
        return await self._run_session(call)

    async def list_resources_async(self) -> List[Dict[str, Any]]:
        async def get_resources(session: ClientSession):
            result = await session.list_resources()
            return [
                {
                    "uri": str(resource.uri),
                    "name": resource.name,
                    "description": resource.description,
                    "mimeType": resource.mimeType,
                }
                for resource in result.resources
            ]
        return await self._run_session(get_resources)

    async def read_resource_async(self, uri: str) -> Any:
        async def read(session: ClientSession):
            try:
                result = await session.read_resource(uri)
            except McpError as e:
                raise MCPError(e.error) from e
            contents = result.contents
            if contents and hasattr(contents[0], "text"):
                return _parse_text(contents[0].text)
            return None
        return await self._run_session(read)

    def list_tools(self, use_cache: bool = True) -> List[Dict[str, Any]]:
        """
        List available tools from the MCP server.

        Args:
            use_cache: Whether to use cached tools list

        Returns:
            List of tool definitions with name, description, and input schema
        """
        if use_cache and self._tools_cache is not None:
            return self._tools_cache

        tools = self._run_sync(self.list_tools_async())
        self._tools_cache = tools
        return tools

    def call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> Any:
        """
        Call a tool on the MCP server via tools/call method.

        Args:
            name: Name of the tool to call
            arguments: Arguments to pass to the tool

        Returns:
            The tool's result (parsed from content array)

        Raises:
            MCPToolError: If the tool execution failed (isError: true)
        """
        return self._run_sync(self.call_tool_async(name, arguments))

    def list_resources(self) -> List[Dict[str, Any]]:
        return self._run_sync(self.list_resources_async())

    def read_resource(self, uri: str) -> Any:
        """Read a pocketbase://collection/<name> resource and decode its JSON."""
        return self._run_sync(self.read_resource_async(uri))

    # Convenience methods for the PocketBase tools

    def health(self) -> Dict[str, Any]:
        return self.call_tool("health")

    def auth_admin(self, identity: str, password: str) -> Dict[str, Any]:
        return self.call_tool("auth_admin", {"identity": identity, "password": password})

    def get_auth_status(self) -> Dict[str, Any]:
        return self.call_tool("get_auth_status")

    def list_collections(self) -> Dict[str, Any]:
        return self.call_tool("list_collections")

    def view_collection(self, collection: str) -> Dict[str, Any]:
        return self.call_tool("view_collection", {"collection": collection})

    def list_records(
        self,
        collection: str,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
        sort: Optional[str] = None,
        filter: Optional[str] = None,
    ) -> Dict[str, Any]:
        """List records, forwarding only the options that are set."""
        args: Dict[str, Any] = {"collection": collection}
        if page is not None:
            args["page"] = page
        if per_page is not None:
            args["perPage"] = per_page
        if sort:
            args["sort"] = sort
        if filter:
            args["filter"] = filter
        return self.call_tool("list_records", args)

    def view_record(self, collection: str, record_id: str) -> Dict[str, Any]:
        return self.call_tool("view_record", {"collection": collection, "id": record_id})

    def create_record(self, collection: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.call_tool("create_record", {"collection": collection, "data": data})

    def update_record(self, collection: str, record_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.call_tool(
            "update_record", {"collection": collection, "id": record_id, "data": data}
        )

    def delete_record(self, collection: str, record_id: str) -> Dict[str, Any]:
        return self.call_tool("delete_record", {"collection": collection, "id": record_id})

"""
MCP server exposing the PocketBase REST API as tools and resources.

Built on the low-level server of the official MCP Python SDK so that tool
schemas are published verbatim and argument checking is left to our own
validators, which produce precise error messages.

Transports:
- stdio: for desktop assistants and other local MCP clients
- streamable HTTP: Starlette app served by uvicorn at /mcp
"""

import asyncio
import contextlib
import json
import logging
from collections.abc import AsyncIterator
from typing import Any, Dict, List, Optional

import httpx
from mcp import types
from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.shared.exceptions import McpError

from ..api import PocketBaseApi
from ..config import Settings
from ..errors import PocketBaseMCPError, serialize_error
from ..http_client import HttpClient
from .tool_definitions import get_tool_definitions
from .tool_handlers import ToolDispatcher


logger = logging.getLogger(__name__)

SERVER_NAME = "pocketbase-mcp-server"


class PocketBaseMCPServer:
    """
    Server core: one PocketBase session, one facade, one dispatch table.

    Independent of any MCP transport; create_server() wires it into the SDK.
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        email: Optional[str] = None,
        password: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the server core.

        Args:
            base_url: PocketBase base URL
            token: Pre-issued auth token (skips superuser login)
            email: Superuser email used by initialize() when no token is given
            password: Superuser password used by initialize()
            timeout: Request timeout in seconds (httpx default when None)
            transport: Optional httpx transport, used by tests
        """
        self.http = HttpClient(base_url, token=token, timeout=timeout, transport=transport)
        self.api = PocketBaseApi(self.http)
        self.dispatcher = ToolDispatcher(self.api)
        self._email = email
        self._password = password

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "PocketBaseMCPServer":
        return cls(
            settings.url,
            token=settings.token,
            email=settings.admin_email,
            password=settings.admin_password,
            timeout=settings.timeout,
            transport=transport,
        )

    async def initialize(self) -> None:
        """
        Log in as superuser when credentials are configured and no token is set.

        A failed login is logged and the server keeps running unauthenticated;
        the auth tools remain available to fix the session later.
        """
        if self.http.get_token() or not (self._email and self._password):
            return

        try:
            await self.http.authenticate(self._email, self._password)
            logger.info("Authenticated with PocketBase as superuser")
        except PocketBaseMCPError as e:
            logger.warning("Superuser authentication failed: %s", e.message)

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> Any:
        return await self.dispatcher.dispatch(name, arguments)

    async def list_resources(self) -> List[Dict[str, Any]]:
        return await self.api.list_resources()

    async def read_resource(self, uri: str) -> Dict[str, Any]:
        return await self.api.read_resource(uri)


def format_tool_result(result: Any) -> types.CallToolResult:
    """Wrap a handler result as a single JSON text content item."""
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=json.dumps(result, indent=2))],
    )


def format_tool_error(error: BaseException) -> types.CallToolResult:
    """Wrap any exception as an isError tool result carrying the serialized error."""
    payload = {"error": serialize_error(error)}
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=json.dumps(payload, indent=2))],
        isError=True,
    )


def create_server(pb: PocketBaseMCPServer) -> Server:
    """
    Build the MCP SDK server for a PocketBase server core.

    Args:
        pb: The server core handling tool calls and resources

    Returns:
        A low-level mcp Server with tools and resources handlers registered
    """
    server = Server(SERVER_NAME)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return get_tool_definitions()

    # Schema validation stays off: the validators own every argument error.
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: Optional[Dict[str, Any]]) -> types.CallToolResult:
        try:
            result = await pb.call_tool(name, arguments)
        except PocketBaseMCPError as e:
            logger.warning("Tool %s failed: [%s] %s", name, e.type, e.message)
            return format_tool_error(e)
        except Exception as e:
            logger.exception("Tool %s raised an unexpected error", name)
            return format_tool_error(e)
        return format_tool_result(result)

    @server.list_resources()
    async def list_resources() -> List[types.Resource]:
        try:
            resources = await pb.list_resources()
        except PocketBaseMCPError as e:
            logger.warning("Listing resources failed: [%s] %s", e.type, e.message)
            message = f"[{e.type}] {e.message}"
            raise McpError(types.ErrorData(code=types.INTERNAL_ERROR, message=message)) from e
        return [
            types.Resource(
                uri=resource["uri"],
                name=resource["name"],
                description=resource["description"],
                mimeType=resource["mimeType"],
            )
            for resource in resources
        ]

    @server.read_resource()
    async def read_resource(uri: Any) -> List[ReadResourceContents]:
        try:
            resource = await pb.read_resource(str(uri))
        except PocketBaseMCPError as e:
            logger.warning("Reading resource %s failed: [%s] %s", uri, e.type, e.message)
            code = types.INVALID_PARAMS if e.type == "validation_error" else types.INTERNAL_ERROR
            raise McpError(types.ErrorData(code=code, message=f"[{e.type}] {e.message}")) from e
        return [ReadResourceContents(content=resource["text"], mime_type=resource["mimeType"])]

    return server


async def serve_stdio(pb: PocketBaseMCPServer) -> None:
    """Serve one MCP session over stdin/stdout."""
    from mcp.server.stdio import stdio_server

    await pb.initialize()
    server = create_server(pb)
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def create_http_app(pb: PocketBaseMCPServer):
    """
    Build the Starlette app serving MCP over streamable HTTP at /mcp.

    The session manager task group lives for the app lifespan; the
    PocketBase superuser login runs once at startup.
    """
    from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
    from starlette.applications import Starlette
    from starlette.routing import Mount

    session_manager = StreamableHTTPSessionManager(
        app=create_server(pb),
        event_store=None,
        json_response=False,
        stateless=False,
    )

    async def handle_streamable_http(scope, receive, send) -> None:
        await session_manager.handle_request(scope, receive, send)

    @contextlib.asynccontextmanager
    async def lifespan(app) -> AsyncIterator[None]:
        await pb.initialize()
        async with session_manager.run():
            logger.info("Streamable HTTP session manager ready")
            yield

    return Starlette(
        debug=False,
        routes=[Mount("/mcp", app=handle_streamable_http)],
        lifespan=lifespan,
    )


def run_server(settings: Settings):
    """Run the MCP server with stdio transport (default for MCP)."""
    pb = PocketBaseMCPServer.from_settings(settings)
    logger.info("Serving PocketBase at %s over stdio", settings.url)
    asyncio.run(serve_stdio(pb))


def run_http_server(settings: Settings, host: str = "0.0.0.0", port: int = 8080):
    """Run the MCP server with streamable HTTP transport."""
    import uvicorn

    pb = PocketBaseMCPServer.from_settings(settings)
    logger.info("Serving PocketBase at %s on http://%s:%s/mcp", settings.url, host, port)
    uvicorn.run(create_http_app(pb), host=host, port=port, log_level=settings.log_level.lower())

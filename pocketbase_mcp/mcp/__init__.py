"""
MCP (Model Context Protocol) layer for PocketBase.

### MCP Server
Run over stdio (desktop assistants and other local MCP clients):
    python run_servers.py mcp

Run over streamable HTTP:
    python run_servers.py mcp --transport http --port 8080

The server implements:
- tools/list: every PocketBase tool with its JSON Schema
- tools/call: validated call, one PocketBase request, JSON text result
- resources/list and resources/read: one pocketbase://collection/<name>
  resource per collection

### MCP Client
Drive a running HTTP server through the protocol:
    from pocketbase_mcp.mcp import MCPClient

    client = MCPClient("http://localhost:8080/mcp")
    result = client.call_tool("list_records", {"collection": "posts"})
"""

from .mcp_server import (
    PocketBaseMCPServer,
    create_http_app,
    create_server,
    format_tool_error,
    format_tool_result,
    run_http_server,
    run_server,
)
from .mcp_client import MCPClient, MCPError, MCPToolError, DEFAULT_MCP_URL
from .tool_definitions import TOOL_DEFINITIONS, TOOL_NAMES, get_tool_definitions
from .tool_handlers import ToolDispatcher

__all__ = [
    # MCP Server
    "PocketBaseMCPServer",
    "create_http_app",
    "create_server",
    "format_tool_error",
    "format_tool_result",
    "run_http_server",
    "run_server",
    # Tools
    "TOOL_DEFINITIONS",
    "TOOL_NAMES",
    "get_tool_definitions",
    "ToolDispatcher",
    # MCP Client
    "MCPClient",
    "MCPError",
    "MCPToolError",
    "DEFAULT_MCP_URL",
]

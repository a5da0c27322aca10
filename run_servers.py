"""
Main entry point for running the PocketBase MCP server.

Commands:
- mcp: serve PocketBase as MCP tools over stdio or streamable HTTP

Logging always goes to stderr; with the stdio transport stdout carries the
MCP protocol stream.
"""

import argparse
import logging
import sys

from pocketbase_mcp.config import load_settings


logger = logging.getLogger("pocketbase_mcp")


def configure_logging(level: str):
    """Send all log output to stderr at the given level."""
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    # httpx logs every request URL at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def run_mcp_server(args: argparse.Namespace):
    """Run the MCP server."""
    from pocketbase_mcp.mcp.mcp_server import run_http_server, run_server

    try:
        settings = load_settings(
            url=args.url,
            token=args.token,
            admin_email=args.admin_email,
            admin_password=args.admin_password,
            timeout=args.timeout,
            log_level=args.log_level,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    configure_logging(settings.log_level)

    if args.transport == "stdio":
        logger.info("Starting MCP server with stdio transport")
        run_server(settings)
    elif args.transport == "http":
        logger.info("Starting MCP server with HTTP transport at http://%s:%s/mcp", args.host, args.port)
        run_http_server(settings, host=args.host, port=args.port)
    else:
        print(f"Unknown transport: {args.transport}. Use 'stdio' or 'http'", file=sys.stderr)
        sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run the PocketBase MCP server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run MCP server with stdio (for MCP clients like desktop assistants)
  python run_servers.py mcp --url http://127.0.0.1:8090

  # Run MCP server with HTTP transport, logging in as superuser
  python run_servers.py mcp --transport http --port 8080 -e admin@example.com -p secret

Settings not given on the command line are read from the environment
(POCKETBASE_URL, POCKETBASE_TOKEN, POCKETBASE_ADMIN_EMAIL,
POCKETBASE_ADMIN_PASSWORD, POCKETBASE_TIMEOUT, LOG_LEVEL) or a .env file.
"""
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    mcp_parser = subparsers.add_parser("mcp", help="Run the MCP server")
    mcp_parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="stdio",
        help="Transport type (default: stdio)"
    )
    mcp_parser.add_argument("--host", default="0.0.0.0", help="Host for HTTP transport")
    mcp_parser.add_argument("--port", type=int, default=8080, help="Port for HTTP transport")
    mcp_parser.add_argument("-u", "--url", help="PocketBase base URL (default: http://localhost:8090)")
    mcp_parser.add_argument("--token", help="Pre-issued PocketBase auth token")
    mcp_parser.add_argument("-e", "--admin-email", help="Superuser email for automatic login")
    mcp_parser.add_argument("-p", "--admin-password", help="Superuser password for automatic login")
    mcp_parser.add_argument("--timeout", help="Request timeout in seconds")
    mcp_parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: INFO)"
    )

    return parser


def main(argv=None):
    """Main entry point with CLI argument parsing."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "mcp":
        run_mcp_server(args)
    else:
        parser.print_help()
        print("\nNo command specified. Use: mcp", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()

"""Command-line interface for gsheets-mcp."""

import argparse
import asyncio
import logging
import sys

import uvicorn

from .config import settings


def main():
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="gsheets-mcp - MCP server for the Google Sheets API"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Server command
    server_parser = subparsers.add_parser("serve", help="Start the MCP server")
    server_parser.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default="stdio",
        help="Transport to serve on (default: stdio)",
    )
    server_parser.add_argument(
        "--host", default=settings.host, help=f"Host to bind to for SSE (default: {settings.host})"
    )
    server_parser.add_argument(
        "--port", type=int, default=settings.port, help=f"Port to bind to for SSE (default: {settings.port})"
    )

    # Catalogue listing
    subparsers.add_parser("list-tools", help="List the registered tools and resources")

    args = parser.parse_args()
    configure_logging(settings.log_level)

    if args.command == "serve":
        if args.transport == "sse":
            run_sse(args.host, args.port)
        else:
            asyncio.run(run_stdio())
    elif args.command == "list-tools":
        list_tools()
    else:
        parser.print_help()
        sys.exit(1)


def configure_logging(level: str):
    """Send logs to stderr; stdout carries the stdio transport."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


async def run_stdio():
    """Run the MCP server on stdin/stdout."""
    from .server import create_server

    await create_server().run_stdio()


def run_sse(host: str, port: int):
    """Run the MCP server over HTTP with server-sent events."""
    uvicorn.run(
        "gsheets_mcp.api:create_app",
        host=host,
        port=port,
        factory=True,
        log_level=settings.log_level.lower(),
    )


def list_tools():
    """Print the tool and resource catalogue."""
    from .server import create_server

    server = create_server()
    print("Tools:")
    for tool in server.tools.list_tools():
        print(f"  {tool.name:<26} {tool.description}")
    print("Resources:")
    for resource in server.resources.list_resources():
        print(f"  {resource.name:<26} {resource.uri_template}")


if __name__ == "__main__":
    main()

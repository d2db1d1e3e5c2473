"""HTTP (SSE) transport for the MCP server."""

from .app import create_app, get_server

__all__ = ["create_app", "get_server"]

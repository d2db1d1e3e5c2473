"""FastAPI application factory serving the MCP server over SSE."""

import logging
from typing import Optional

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from mcp.server.sse import SseServerTransport

from ..config import settings
from ..server import SheetsMCPServer, create_server
from .routes import router

logger = logging.getLogger(__name__)

# Global server instance
_server: Optional[SheetsMCPServer] = None


def get_server() -> SheetsMCPServer:
    """Get the global MCP server instance."""
    global _server
    if _server is None:
        _server = create_server()
    return _server


def create_app(mcp_server: Optional[SheetsMCPServer] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    global _server
    if mcp_server is not None:
        _server = mcp_server
    mcp_server = get_server()

    app = FastAPI(
        title="gsheets-mcp",
        description="MCP server for the Google Sheets API",
        version=settings.server_version,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    sse = SseServerTransport("/messages/")

    async def handle_sse(request: Request):
        """Open an MCP session on a server-sent event stream."""
        logger.info(f"SSE session opened from {request.client.host if request.client else 'unknown'}")
        async with sse.connect_sse(request.scope, request.receive, request._send) as streams:
            await mcp_server.server.run(
                streams[0],
                streams[1],
                mcp_server.server.create_initialization_options(),
            )
        return Response()

    app.add_route("/sse", handle_sse, methods=["GET"])
    app.mount("/messages/", app=sse.handle_post_message)

    return app

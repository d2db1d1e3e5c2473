"""HTTP routes served next to the MCP SSE transport."""

from fastapi import APIRouter

router = APIRouter()


def get_server():
    """Get the global MCP server instance."""
    from .app import get_server as _get_server

    return _get_server()


@router.get("/health")
async def health_check():
    """Health check endpoint with diagnostics."""
    from ..config import settings

    # Gather non-secret diagnostics
    config = {
        "server_name": settings.server_name,
        "server_version": settings.server_version,
        "credentials_configured": settings.credentials_configured,
        "missing_credentials": settings.missing_credentials(),
    }

    return {
        "status": "ok",
        "service": "gsheets-mcp",
        "tool_count": len(get_server().tools.list_tools()),
        "config": config,
    }


@router.get("/tools")
async def list_tools():
    """List the registered tools with their input schemas."""
    server = get_server()
    return {
        "tools": server.tools.to_schemas(),
        "resources": [
            {"name": r.name, "uriTemplate": r.uri_template, "description": r.description}
            for r in server.resources.list_resources()
        ],
    }

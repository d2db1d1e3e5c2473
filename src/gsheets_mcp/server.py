"""MCP server exposing the Google Sheets tools and resources."""

import logging
from typing import Any, Optional

import mcp.types as types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from .config import Settings, settings
from .resources import ResourceRegistry, SheetsResources
from .sheets import GoogleSheetsClient
from .tools import (
    DeveloperMetadataTools,
    ResourceResult,
    SheetTools,
    SpreadsheetTools,
    ToolRegistry,
    ToolResult,
    ValueTools,
)

logger = logging.getLogger(__name__)


class SheetsMCPServer:
    """Dispatches MCP tool calls and resource reads to the Sheets catalogue.

    The server keeps no state between calls. Every handler shares the one
    ``GoogleSheetsClient`` passed in at construction.
    """

    def __init__(
        self,
        client: GoogleSheetsClient,
        name: str = "Google Sheets API",
        version: Optional[str] = None,
    ):
        self.client = client

        self.tools = ToolRegistry()
        SpreadsheetTools(client).register(self.tools)
        SheetTools(client).register(self.tools)
        ValueTools(client).register(self.tools)
        DeveloperMetadataTools(client).register(self.tools)

        self.resources = ResourceRegistry()
        SheetsResources(client).register(self.resources)

        self.server = Server(name, version=version)
        self._bind()
        logger.info(
            f"Registered {len(self.tools.list_tools())} tools and "
            f"{len(self.resources.list_resources())} resources"
        )

    async def call_tool(self, name: str, arguments: Optional[dict[str, Any]] = None) -> ToolResult:
        """Validate and run one tool call."""
        logger.debug(f"Calling tool {name}")
        return await self.tools.execute(name, arguments)

    async def read_resource(self, uri: str) -> ResourceResult:
        """Resolve a resource URI and read it."""
        logger.debug(f"Reading resource {uri}")
        return await self.resources.read(uri)

    def _bind(self):
        """Wire the registries into the MCP request handlers."""
        server = self.server

        @server.list_tools()
        async def list_tools() -> list[types.Tool]:
            return [
                types.Tool(
                    name=tool.name,
                    description=tool.description,
                    inputSchema=tool.input_schema(),
                )
                for tool in self.tools.list_tools()
            ]

        @server.list_resources()
        async def list_resources() -> list[types.Resource]:
            # Only templated resources are offered
            return []

        @server.list_resource_templates()
        async def list_resource_templates() -> list[types.ResourceTemplate]:
            return [
                types.ResourceTemplate(
                    uriTemplate=resource.uri_template,
                    name=resource.name,
                    description=resource.description,
                    mimeType=resource.mime_type,
                )
                for resource in self.resources.list_resources()
            ]

        # Tool and resource envelopes are relayed as-is, isError included,
        # so these two handlers are installed directly.
        async def handle_call_tool(req: types.CallToolRequest) -> types.ServerResult:
            result = await self.call_tool(req.params.name, req.params.arguments)
            return types.ServerResult(to_call_tool_result(result))

        async def handle_read_resource(req: types.ReadResourceRequest) -> types.ServerResult:
            result = await self.read_resource(str(req.params.uri))
            return types.ServerResult(to_read_resource_result(result))

        server.request_handlers[types.CallToolRequest] = handle_call_tool
        server.request_handlers[types.ReadResourceRequest] = handle_read_resource

    async def run_stdio(self):
        """Serve over stdin/stdout until the client disconnects."""
        logger.info("Starting MCP server on stdio")
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )


def to_call_tool_result(result: ToolResult) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=item.text) for item in result.content],
        isError=result.is_error,
    )


def to_read_resource_result(result: ResourceResult) -> types.ReadResourceResult:
    contents = []
    for item in result.contents:
        extra = {"isError": True} if item.is_error else {}
        contents.append(
            types.TextResourceContents(uri=item.uri, text=item.text, mimeType="text/plain", **extra)
        )
    return types.ReadResourceResult(contents=contents)


def create_server(
    config: Optional[Settings] = None,
    client: Optional[GoogleSheetsClient] = None,
) -> SheetsMCPServer:
    """Build the Sheets client once and the server around it."""
    config = config or settings
    client = client or GoogleSheetsClient.from_settings(config)
    return SheetsMCPServer(client, name=config.server_name, version=config.server_version)

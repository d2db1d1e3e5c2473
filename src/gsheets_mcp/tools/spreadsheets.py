"""Spreadsheet-level tools: create, fetch and batch update documents."""

import json
from typing import Any, Optional

from ..sheets import GoogleSheetsClient
from ..sheets.formatting import sheet_titles, spreadsheet_url
from .registry import Tool, ToolParameter, ToolRegistry
from .results import ToolResult, handle_api_error

SPREADSHEET_PROPERTIES = [
    ToolParameter(name="title", type="string", description="The title of the spreadsheet", required=False),
    ToolParameter(name="locale", type="string", description="The locale of the spreadsheet", required=False),
    ToolParameter(name="autoRecalc", type="string", description="When to recalculate volatile functions", required=False),
    ToolParameter(name="timeZone", type="string", description="The time zone of the spreadsheet", required=False),
    ToolParameter(name="defaultFormat", type="any", description="The default format of all cells", required=False),
    ToolParameter(
        name="iterativeCalculationSettings",
        type="any",
        description="Settings to control how circular dependencies are resolved",
        required=False,
    ),
    ToolParameter(name="spreadsheetTheme", type="any", description="Theme applied to the spreadsheet", required=False),
]


class SpreadsheetTools:
    """Spreadsheet-level tools that can be registered with the server."""

    def __init__(self, client: GoogleSheetsClient):
        self.client = client

    def register(self, registry: ToolRegistry):
        """Register all spreadsheet tools with the registry."""
        registry.register(self._create_spreadsheet_tool())
        registry.register(self._get_spreadsheet_tool())
        registry.register(self._batch_update_tool())

    def _create_spreadsheet_tool(self) -> Tool:
        """Create the createSpreadsheet tool."""

        async def handler(
            properties: Optional[dict] = None,
            sheets: Optional[list[Any]] = None,
            namedRanges: Optional[list[Any]] = None,
        ) -> ToolResult:
            body = {
                key: value
                for key, value in (
                    ("properties", properties),
                    ("sheets", sheets),
                    ("namedRanges", namedRanges),
                )
                if value is not None
            }
            try:
                result = await self.client.create_spreadsheet(body)
                spreadsheet_id = result["spreadsheetId"]
                return ToolResult.text(
                    f"Spreadsheet created successfully. ID: {spreadsheet_id}\n"
                    f"Title: {result['properties']['title']}\n"
                    f"URL: {spreadsheet_url(spreadsheet_id)}"
                )
            except Exception as e:
                return handle_api_error(e)

        return Tool(
            name="createSpreadsheet",
            description="Creates a new spreadsheet with the specified properties",
            parameters=[
                ToolParameter(
                    name="properties",
                    type="object",
                    description="Properties of the new spreadsheet",
                    required=False,
                    properties=SPREADSHEET_PROPERTIES,
                ),
                ToolParameter(
                    name="sheets",
                    type="array",
                    description="The sheets that are part of the spreadsheet",
                    required=False,
                    items=ToolParameter(name="sheet", type="any"),
                ),
                ToolParameter(
                    name="namedRanges",
                    type="array",
                    description="The named ranges defined in the spreadsheet",
                    required=False,
                    items=ToolParameter(name="namedRange", type="any"),
                ),
            ],
            handler=handler,
        )

    def _get_spreadsheet_tool(self) -> Tool:
        """Create the getSpreadsheet tool."""

        async def handler(
            spreadsheetId: str,
            ranges: Optional[list[str]] = None,
            includeGridData: Optional[bool] = None,
        ) -> ToolResult:
            try:
                result = await self.client.get_spreadsheet(spreadsheetId, ranges, includeGridData)
                return ToolResult.text(
                    "Spreadsheet details:\n"
                    f"ID: {result['spreadsheetId']}\n"
                    f"Title: {result['properties']['title']}\n"
                    f"Sheets: {sheet_titles(result)}\n"
                    f"URL: {spreadsheet_url(result['spreadsheetId'])}"
                )
            except Exception as e:
                return handle_api_error(e)

        return Tool(
            name="getSpreadsheet",
            description="Gets a spreadsheet by ID",
            parameters=[
                ToolParameter(
                    name="spreadsheetId",
                    type="string",
                    description="The ID of the spreadsheet to retrieve",
                ),
                ToolParameter(
                    name="ranges",
                    type="array",
                    description="The ranges to retrieve from the spreadsheet",
                    required=False,
                    items=ToolParameter(name="range", type="string"),
                ),
                ToolParameter(
                    name="includeGridData",
                    type="boolean",
                    description="True if grid data should be returned",
                    required=False,
                ),
            ],
            handler=handler,
        )

    def _batch_update_tool(self) -> Tool:
        """Create the batchUpdate tool."""

        async def handler(
            spreadsheetId: str,
            requests: list[Any],
            includeSpreadsheetInResponse: Optional[bool] = None,
            responseRanges: Optional[list[str]] = None,
            responseIncludeGridData: Optional[bool] = None,
        ) -> ToolResult:
            body: dict[str, Any] = {"requests": requests}
            if includeSpreadsheetInResponse is not None:
                body["includeSpreadsheetInResponse"] = includeSpreadsheetInResponse
            if responseRanges is not None:
                body["responseRanges"] = responseRanges
            if responseIncludeGridData is not None:
                body["responseIncludeGridData"] = responseIncludeGridData

            try:
                result = await self.client.batch_update(spreadsheetId, body)
                replies = json.dumps(result.get("replies") or {}, indent=2)
                return ToolResult.text(
                    "Batch update completed successfully.\n"
                    f"Spreadsheet ID: {spreadsheetId}\n"
                    f"Updates applied: {len(requests)}\n"
                    f"Response: {replies}"
                )
            except Exception as e:
                return handle_api_error(e)

        return Tool(
            name="batchUpdate",
            description="Applies one or more updates to a spreadsheet",
            parameters=[
                ToolParameter(
                    name="spreadsheetId",
                    type="string",
                    description="The ID of the spreadsheet to update",
                ),
                ToolParameter(
                    name="requests",
                    type="array",
                    description="A list of updates to apply to the spreadsheet",
                    items=ToolParameter(name="request", type="any"),
                ),
                ToolParameter(
                    name="includeSpreadsheetInResponse",
                    type="boolean",
                    description="Determines if the update response should include the spreadsheet resource",
                    required=False,
                ),
                ToolParameter(
                    name="responseRanges",
                    type="array",
                    description="Limits the ranges included in the response spreadsheet",
                    required=False,
                    items=ToolParameter(name="range", type="string"),
                ),
                ToolParameter(
                    name="responseIncludeGridData",
                    type="boolean",
                    description="True if grid data should be returned",
                    required=False,
                ),
            ],
            handler=handler,
        )

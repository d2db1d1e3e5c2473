"""Sheet-level tools: copy, add, delete and update individual sheets."""

from typing import Optional

from ..sheets import GoogleSheetsClient
from .registry import Tool, ToolParameter, ToolRegistry
from .results import ToolResult, handle_api_error

DEFAULT_ROW_COUNT = 1000
DEFAULT_COLUMN_COUNT = 26

GRID_PROPERTIES = [
    ToolParameter(name="rowCount", type="integer", required=False),
    ToolParameter(name="columnCount", type="integer", required=False),
    ToolParameter(name="frozenRowCount", type="integer", required=False),
    ToolParameter(name="frozenColumnCount", type="integer", required=False),
]


def build_sheet_properties_update(sheet_id: int, **changes) -> dict:
    """Build an ``updateSheetProperties`` request from the supplied changes.

    Changes whose value is None are dropped, and the field mask names exactly
    the remaining properties (never ``sheetId``, which only identifies the
    sheet).
    """
    supplied = {key: value for key, value in changes.items() if value is not None}
    return {
        "updateSheetProperties": {
            "properties": {"sheetId": sheet_id, **supplied},
            "fields": ",".join(supplied),
        }
    }


class SheetTools:
    """Sheet-level tools that can be registered with the server."""

    def __init__(self, client: GoogleSheetsClient):
        self.client = client

    def register(self, registry: ToolRegistry):
        """Register all sheet tools with the registry."""
        registry.register(self._copy_sheet_tool())
        registry.register(self._add_sheet_tool())
        registry.register(self._delete_sheet_tool())
        registry.register(self._update_sheet_properties_tool())

    def _copy_sheet_tool(self) -> Tool:
        """Create the copySheet tool."""

        async def handler(spreadsheetId: str, sheetId: int, destinationSpreadsheetId: str) -> ToolResult:
            try:
                result = await self.client.copy_sheet(spreadsheetId, sheetId, destinationSpreadsheetId)
                return ToolResult.text(
                    "Sheet copied successfully.\n"
                    f"Source Spreadsheet ID: {spreadsheetId}\n"
                    f"Source Sheet ID: {sheetId}\n"
                    f"Destination Spreadsheet ID: {destinationSpreadsheetId}\n"
                    f"New Sheet ID: {result.get('sheetId')}\n"
                    f"New Sheet Index: {result.get('index')}"
                )
            except Exception as e:
                return handle_api_error(e)

        return Tool(
            name="copySheet",
            description="Copies a sheet to another spreadsheet",
            parameters=[
                ToolParameter(
                    name="spreadsheetId",
                    type="string",
                    description="The ID of the spreadsheet containing the sheet to copy",
                ),
                ToolParameter(
                    name="sheetId",
                    type="integer",
                    description="The ID of the sheet to copy",
                ),
                ToolParameter(
                    name="destinationSpreadsheetId",
                    type="string",
                    description="The ID of the spreadsheet to copy the sheet to",
                ),
            ],
            handler=handler,
        )

    def _add_sheet_tool(self) -> Tool:
        """Create the addSheet tool."""

        async def handler(
            spreadsheetId: str,
            title: str,
            index: Optional[int] = None,
            rowCount: int = DEFAULT_ROW_COUNT,
            columnCount: int = DEFAULT_COLUMN_COUNT,
        ) -> ToolResult:
            properties = {
                "title": title,
                "gridProperties": {"rowCount": rowCount, "columnCount": columnCount},
            }
            if index is not None:
                properties["index"] = index

            try:
                result = await self.client.batch_update(
                    spreadsheetId, {"requests": [{"addSheet": {"properties": properties}}]}
                )
                new_sheet = result["replies"][0]["addSheet"]["properties"]
                grid = new_sheet["gridProperties"]
                return ToolResult.text(
                    "Sheet added successfully.\n"
                    f"Spreadsheet ID: {spreadsheetId}\n"
                    f"New Sheet Title: {new_sheet['title']}\n"
                    f"New Sheet ID: {new_sheet['sheetId']}\n"
                    f"Dimensions: {grid['rowCount']} rows x {grid['columnCount']} columns"
                )
            except Exception as e:
                return handle_api_error(e)

        return Tool(
            name="addSheet",
            description="Adds a new sheet to a spreadsheet",
            parameters=[
                ToolParameter(name="spreadsheetId", type="string", description="The ID of the spreadsheet"),
                ToolParameter(name="title", type="string", description="The name of the new sheet"),
                ToolParameter(
                    name="index",
                    type="integer",
                    description="The zero-based index where the new sheet should be inserted",
                    required=False,
                ),
                ToolParameter(
                    name="rowCount",
                    type="integer",
                    description="The number of rows in the new sheet",
                    required=False,
                    default=DEFAULT_ROW_COUNT,
                ),
                ToolParameter(
                    name="columnCount",
                    type="integer",
                    description="The number of columns in the new sheet",
                    required=False,
                    default=DEFAULT_COLUMN_COUNT,
                ),
            ],
            handler=handler,
        )

    def _delete_sheet_tool(self) -> Tool:
        """Create the deleteSheet tool."""

        async def handler(spreadsheetId: str, sheetId: int) -> ToolResult:
            try:
                await self.client.batch_update(
                    spreadsheetId, {"requests": [{"deleteSheet": {"sheetId": sheetId}}]}
                )
                return ToolResult.text(
                    "Sheet deleted successfully.\n"
                    f"Spreadsheet ID: {spreadsheetId}\n"
                    f"Deleted Sheet ID: {sheetId}"
                )
            except Exception as e:
                return handle_api_error(e)

        return Tool(
            name="deleteSheet",
            description="Deletes a sheet from a spreadsheet",
            parameters=[
                ToolParameter(name="spreadsheetId", type="string", description="The ID of the spreadsheet"),
                ToolParameter(name="sheetId", type="integer", description="The ID of the sheet to delete"),
            ],
            handler=handler,
        )

    def _update_sheet_properties_tool(self) -> Tool:
        """Create the updateSheetProperties tool."""

        async def handler(
            spreadsheetId: str,
            sheetId: int,
            title: Optional[str] = None,
            index: Optional[int] = None,
            hidden: Optional[bool] = None,
            rightToLeft: Optional[bool] = None,
            gridProperties: Optional[dict] = None,
        ) -> ToolResult:
            request = build_sheet_properties_update(
                sheetId,
                title=title,
                index=index,
                hidden=hidden,
                rightToLeft=rightToLeft,
                gridProperties=gridProperties,
            )
            updated = request["updateSheetProperties"]["fields"].replace(",", ", ")

            try:
                await self.client.batch_update(spreadsheetId, {"requests": [request]})
                return ToolResult.text(
                    "Sheet properties updated successfully.\n"
                    f"Spreadsheet ID: {spreadsheetId}\n"
                    f"Sheet ID: {sheetId}\n"
                    f"Updated properties: {updated}"
                )
            except Exception as e:
                return handle_api_error(e)

        return Tool(
            name="updateSheetProperties",
            description="Updates the properties of a sheet",
            parameters=[
                ToolParameter(name="spreadsheetId", type="string", description="The ID of the spreadsheet"),
                ToolParameter(name="sheetId", type="integer", description="The ID of the sheet to update"),
                ToolParameter(name="title", type="string", description="The new title for the sheet", required=False),
                ToolParameter(name="index", type="integer", description="The new index for the sheet", required=False),
                ToolParameter(
                    name="hidden",
                    type="boolean",
                    description="Whether the sheet should be hidden",
                    required=False,
                ),
                ToolParameter(
                    name="rightToLeft",
                    type="boolean",
                    description="Whether the sheet is displayed right-to-left",
                    required=False,
                ),
                ToolParameter(
                    name="gridProperties",
                    type="object",
                    description="Grid properties to update",
                    required=False,
                    properties=GRID_PROPERTIES,
                ),
            ],
            handler=handler,
        )

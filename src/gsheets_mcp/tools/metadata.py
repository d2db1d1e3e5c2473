"""Developer metadata tools: search, create, update and delete annotations."""

from typing import Optional

from ..sheets import GoogleSheetsClient, build_metadata_location
from ..sheets.formatting import NO_METADATA_TEXT, format_developer_metadata
from .registry import Tool, ToolParameter, ToolRegistry
from .results import ToolResult, handle_api_error

LOCATION_TYPES = ["SPREADSHEET", "SHEET", "ROW", "COLUMN", "CELL"]
VISIBILITIES = ["DOCUMENT", "PROJECT"]
DEFAULT_VISIBILITY = "DOCUMENT"

# An empty filter matches every piece of metadata in the spreadsheet
MATCH_ALL_FILTERS = [{}]


def build_metadata_update(
    metadata_id: int,
    metadata_key: Optional[str] = None,
    metadata_value: Optional[str] = None,
    visibility: Optional[str] = None,
) -> dict:
    """Build an ``updateDeveloperMetadata`` request for the supplied fields."""
    developer_metadata: dict = {"metadataId": metadata_id}
    fields = []
    for name, value in (
        ("metadataKey", metadata_key),
        ("metadataValue", metadata_value),
        ("visibility", visibility),
    ):
        if value is not None:
            developer_metadata[name] = value
            fields.append(name)

    return {
        "updateDeveloperMetadata": {
            "dataFilters": [{"developerMetadataLookup": {"metadataId": metadata_id}}],
            "developerMetadata": developer_metadata,
            "fields": ",".join(fields),
        }
    }


class DeveloperMetadataTools:
    """Developer metadata tools that can be registered with the server."""

    def __init__(self, client: GoogleSheetsClient):
        self.client = client

    def register(self, registry: ToolRegistry):
        """Register all developer metadata tools with the registry."""
        registry.register(self._get_developer_metadata_tool())
        registry.register(self._create_developer_metadata_tool())
        registry.register(self._update_developer_metadata_tool())
        registry.register(self._delete_developer_metadata_tool())

    def _get_developer_metadata_tool(self) -> Tool:
        """Create the getDeveloperMetadata tool."""

        async def handler(spreadsheetId: str) -> ToolResult:
            try:
                result = await self.client.search_developer_metadata(
                    spreadsheetId, MATCH_ALL_FILTERS
                )
                matched = result.get("matchedDeveloperMetadata", [])
                if not matched:
                    return ToolResult.text(NO_METADATA_TEXT)
                return ToolResult.text(
                    f"Found {len(matched)} developer metadata items:\n\n"
                    f"{format_developer_metadata(matched)}"
                )
            except Exception as e:
                return handle_api_error(e)

        return Tool(
            name="getDeveloperMetadata",
            description="Gets all developer metadata for a spreadsheet",
            parameters=[
                ToolParameter(
                    name="spreadsheetId",
                    type="string",
                    description="The ID of the spreadsheet to retrieve metadata from",
                ),
            ],
            handler=handler,
        )

    def _create_developer_metadata_tool(self) -> Tool:
        """Create the createDeveloperMetadata tool."""

        async def handler(
            spreadsheetId: str,
            metadataKey: str,
            metadataValue: str,
            location: dict,
            visibility: str = DEFAULT_VISIBILITY,
        ) -> ToolResult:
            try:
                request = {
                    "createDeveloperMetadata": {
                        "developerMetadata": {
                            "metadataKey": metadataKey,
                            "metadataValue": metadataValue,
                            "location": build_metadata_location(location),
                            "visibility": visibility,
                        }
                    }
                }
                result = await self.client.batch_update(spreadsheetId, {"requests": [request]})
                reply = result["replies"][0]["createDeveloperMetadata"]
                return ToolResult.text(
                    "Developer metadata created successfully.\n"
                    f"Spreadsheet ID: {spreadsheetId}\n"
                    f"Metadata ID: {reply['developerMetadata']['metadataId']}\n"
                    f"Key: {metadataKey}\n"
                    f"Value: {metadataValue}\n"
                    f"Location Type: {location['type']}"
                )
            except Exception as e:
                return handle_api_error(e)

        return Tool(
            name="createDeveloperMetadata",
            description="Creates developer metadata for a spreadsheet",
            parameters=[
                ToolParameter(name="spreadsheetId", type="string", description="The ID of the spreadsheet"),
                ToolParameter(name="metadataKey", type="string", description="The key of the developer metadata"),
                ToolParameter(
                    name="metadataValue",
                    type="string",
                    description="The value of the developer metadata",
                ),
                ToolParameter(
                    name="location",
                    type="object",
                    description="The location where the metadata should be created",
                    properties=[
                        ToolParameter(
                            name="type",
                            type="string",
                            description="The type of location",
                            enum=LOCATION_TYPES,
                        ),
                        ToolParameter(
                            name="sheetId",
                            type="integer",
                            description="The ID of the sheet (required for SHEET, ROW, COLUMN, CELL)",
                            required=False,
                        ),
                        ToolParameter(
                            name="rowIndex",
                            type="integer",
                            description="The row index (required for ROW, CELL)",
                            required=False,
                        ),
                        ToolParameter(
                            name="columnIndex",
                            type="integer",
                            description="The column index (required for COLUMN, CELL)",
                            required=False,
                        ),
                    ],
                ),
                ToolParameter(
                    name="visibility",
                    type="string",
                    description="The visibility of the developer metadata",
                    required=False,
                    enum=VISIBILITIES,
                    default=DEFAULT_VISIBILITY,
                ),
            ],
            handler=handler,
        )

    def _update_developer_metadata_tool(self) -> Tool:
        """Create the updateDeveloperMetadata tool."""

        async def handler(
            spreadsheetId: str,
            metadataId: int,
            metadataKey: Optional[str] = None,
            metadataValue: Optional[str] = None,
            visibility: Optional[str] = None,
        ) -> ToolResult:
            request = build_metadata_update(metadataId, metadataKey, metadataValue, visibility)
            fields = request["updateDeveloperMetadata"]["fields"]

            try:
                await self.client.batch_update(spreadsheetId, {"requests": [request]})
                return ToolResult.text(
                    "Developer metadata updated successfully.\n"
                    f"Spreadsheet ID: {spreadsheetId}\n"
                    f"Metadata ID: {metadataId}\n"
                    f"Updated fields: {fields.replace(',', ', ')}"
                )
            except Exception as e:
                return handle_api_error(e)

        return Tool(
            name="updateDeveloperMetadata",
            description="Updates existing developer metadata",
            parameters=[
                ToolParameter(name="spreadsheetId", type="string", description="The ID of the spreadsheet"),
                ToolParameter(name="metadataId", type="integer", description="The ID of the metadata to update"),
                ToolParameter(
                    name="metadataKey",
                    type="string",
                    description="The new key for the metadata",
                    required=False,
                ),
                ToolParameter(
                    name="metadataValue",
                    type="string",
                    description="The new value for the metadata",
                    required=False,
                ),
                ToolParameter(
                    name="visibility",
                    type="string",
                    description="The new visibility for the metadata",
                    required=False,
                    enum=VISIBILITIES,
                ),
            ],
            handler=handler,
        )

    def _delete_developer_metadata_tool(self) -> Tool:
        """Create the deleteDeveloperMetadata tool."""

        async def handler(spreadsheetId: str, metadataId: int) -> ToolResult:
            # Field name is ``developerId`` here, not ``metadataId``
            request = {"deleteDeveloperMetadata": {"developerId": metadataId}}
            try:
                await self.client.batch_update(spreadsheetId, {"requests": [request]})
                return ToolResult.text(
                    "Developer metadata deleted successfully.\n"
                    f"Spreadsheet ID: {spreadsheetId}\n"
                    f"Metadata ID: {metadataId}"
                )
            except Exception as e:
                return handle_api_error(e)

        return Tool(
            name="deleteDeveloperMetadata",
            description="Deletes developer metadata",
            parameters=[
                ToolParameter(name="spreadsheetId", type="string", description="The ID of the spreadsheet"),
                ToolParameter(name="metadataId", type="integer", description="The ID of the metadata to delete"),
            ],
            handler=handler,
        )

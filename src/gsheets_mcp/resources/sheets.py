"""Read-only resources exposing spreadsheet state under ``sheets://`` URIs."""

from ..sheets import GoogleSheetsClient
from ..sheets.formatting import (
    NO_METADATA_TEXT,
    format_developer_metadata,
    format_grid,
    sheet_titles,
    spreadsheet_url,
)
from ..tools.metadata import MATCH_ALL_FILTERS
from ..tools.results import ResourceResult, handle_resource_error
from .registry import Resource, ResourceRegistry

NOT_SPECIFIED = "Not specified"


def find_sheet(spreadsheet: dict, sheet_name: str):
    """Return the sheet whose title equals ``sheet_name`` ignoring case."""
    wanted = sheet_name.lower()
    for sheet in spreadsheet.get("sheets", []):
        if sheet["properties"]["title"].lower() == wanted:
            return sheet
    return None


def _yes_no(flag) -> str:
    return "Yes" if flag else "No"


class SheetsResources:
    """Spreadsheet resources that can be registered with the server."""

    def __init__(self, client: GoogleSheetsClient):
        self.client = client

    def register(self, registry: ResourceRegistry):
        """Register all spreadsheet resources with the registry."""
        registry.register(self._spreadsheet_resource())
        registry.register(self._sheet_resource())
        registry.register(self._values_resource())
        registry.register(self._metadata_resource())

    def _spreadsheet_resource(self) -> Resource:
        async def handler(uri: str, spreadsheetId: str) -> ResourceResult:
            try:
                data = await self.client.get_spreadsheet(spreadsheetId, include_grid_data=False)
                properties = data["properties"]
                return ResourceResult.text(
                    uri,
                    f"Spreadsheet: {properties['title']}\n"
                    f"ID: {data['spreadsheetId']}\n"
                    f"URL: {spreadsheet_url(data['spreadsheetId'])}\n"
                    f"Sheets: {sheet_titles(data)}\n"
                    f"Locale: {properties.get('locale') or NOT_SPECIFIED}\n"
                    f"Time Zone: {properties.get('timeZone') or NOT_SPECIFIED}",
                )
            except Exception as e:
                return handle_resource_error(uri, "spreadsheet", e)

        return Resource(
            name="spreadsheet",
            uri_template="sheets://spreadsheet/{spreadsheetId}",
            description="Summary of a spreadsheet: title, URL, sheets, locale and time zone",
            handler=handler,
        )

    def _sheet_resource(self) -> Resource:
        async def handler(uri: str, spreadsheetId: str, sheetName: str) -> ResourceResult:
            try:
                data = await self.client.get_spreadsheet(spreadsheetId, include_grid_data=False)
                sheet = find_sheet(data, sheetName)
                if sheet is None:
                    return ResourceResult.error(uri, f'Sheet "{sheetName}" not found in spreadsheet.')

                props = sheet["properties"]
                grid = props.get("gridProperties", {})
                return ResourceResult.text(
                    uri,
                    f"Sheet: {props['title']}\n"
                    f"Sheet ID: {props.get('sheetId')}\n"
                    f"Index: {props.get('index')}\n"
                    f"Row Count: {grid.get('rowCount') or 'Unknown'}\n"
                    f"Column Count: {grid.get('columnCount') or 'Unknown'}\n"
                    f"Frozen Rows: {grid.get('frozenRowCount', 0)}\n"
                    f"Frozen Columns: {grid.get('frozenColumnCount', 0)}\n"
                    f"Hidden: {_yes_no(props.get('hidden'))}\n"
                    f"Right-to-Left: {_yes_no(props.get('rightToLeft'))}",
                )
            except Exception as e:
                return handle_resource_error(uri, "sheet", e)

        return Resource(
            name="sheet",
            uri_template="sheets://spreadsheet/{spreadsheetId}/sheet/{sheetName}",
            description="Properties of one sheet, looked up by title (case-insensitive)",
            handler=handler,
        )

    def _values_resource(self) -> Resource:
        async def handler(uri: str, spreadsheetId: str, range: str) -> ResourceResult:
            try:
                data = await self.client.get_values(
                    spreadsheetId, range, value_render_option="FORMATTED_VALUE"
                )
                values = data.get("values", [])
                if not values:
                    return ResourceResult.text(uri, f'No data found in range "{range}".')
                return ResourceResult.text(
                    uri, f'Values in range "{range}":\n\n{format_grid(values)}'
                )
            except Exception as e:
                return handle_resource_error(uri, "values", e)

        return Resource(
            name="values",
            uri_template="sheets://spreadsheet/{spreadsheetId}/values/{range}",
            description="Formatted cell values of a range, tab-separated",
            handler=handler,
        )

    def _metadata_resource(self) -> Resource:
        async def handler(uri: str, spreadsheetId: str) -> ResourceResult:
            try:
                data = await self.client.search_developer_metadata(spreadsheetId, MATCH_ALL_FILTERS)
                matched = data.get("matchedDeveloperMetadata", [])
                if not matched:
                    return ResourceResult.text(uri, NO_METADATA_TEXT)
                return ResourceResult.text(
                    uri,
                    f"Developer Metadata for Spreadsheet {spreadsheetId}:\n\n"
                    f"{format_developer_metadata(matched)}",
                )
            except Exception as e:
                return handle_resource_error(uri, "metadata", e)

        return Resource(
            name="metadata",
            uri_template="sheets://spreadsheet/{spreadsheetId}/metadata",
            description="All developer metadata attached to a spreadsheet",
            handler=handler,
        )

"""Cell range tools: read, write, append and clear values."""

from typing import Any

from ..sheets import GoogleSheetsClient
from ..sheets.formatting import format_grid
from .registry import Tool, ToolParameter, ToolRegistry
from .results import ToolResult, handle_api_error

MAJOR_DIMENSIONS = ["ROWS", "COLUMNS"]
VALUE_RENDER_OPTIONS = ["FORMATTED_VALUE", "UNFORMATTED_VALUE", "FORMULA"]
VALUE_INPUT_OPTIONS = ["RAW", "USER_ENTERED"]
INSERT_DATA_OPTIONS = ["OVERWRITE", "INSERT_ROWS"]

DEFAULT_MAJOR_DIMENSION = "ROWS"
DEFAULT_VALUE_RENDER_OPTION = "FORMATTED_VALUE"
DEFAULT_VALUE_INPUT_OPTION = "USER_ENTERED"
DEFAULT_INSERT_DATA_OPTION = "INSERT_ROWS"

NO_DATA_TEXT = "No data found in the specified range."
NO_RANGE_DATA_TEXT = "No data found in this range."


def _major_dimension_param(description: str) -> ToolParameter:
    return ToolParameter(
        name="majorDimension",
        type="string",
        description=description,
        required=False,
        enum=MAJOR_DIMENSIONS,
        default=DEFAULT_MAJOR_DIMENSION,
    )


def _value_render_param() -> ToolParameter:
    return ToolParameter(
        name="valueRenderOption",
        type="string",
        description="How values should be represented in the output",
        required=False,
        enum=VALUE_RENDER_OPTIONS,
        default=DEFAULT_VALUE_RENDER_OPTION,
    )


def _value_input_param() -> ToolParameter:
    return ToolParameter(
        name="valueInputOption",
        type="string",
        description="How the input data should be interpreted",
        required=False,
        enum=VALUE_INPUT_OPTIONS,
        default=DEFAULT_VALUE_INPUT_OPTION,
    )


def _grid_param(description: str) -> ToolParameter:
    return ToolParameter(
        name="values",
        type="array",
        description=description,
        items=ToolParameter(name="row", type="array", items=ToolParameter(name="cell", type="any")),
    )


def render_values(range_notation: str, values: list[list[Any]], major_dimension: str) -> str:
    """Render a getValues reply; an empty grid gets an explicit no-data line."""
    if not values:
        return f"Retrieved values from {range_notation}:\n{NO_DATA_TEXT}"
    return (
        f"Retrieved values from {range_notation}:\n"
        f"Data ({len(values)} {major_dimension.lower()}):\n"
        f"{format_grid(values)}"
    )


def render_value_ranges(ranges: list[str], value_ranges: list[dict]) -> str:
    blocks = []
    for i, value_range in enumerate(value_ranges, start=1):
        values = value_range.get("values", [])
        body = format_grid(values) if values else NO_RANGE_DATA_TEXT
        blocks.append(f"Range {i} ({value_range.get('range')}):\n{body}")
    header = f"Retrieved values from {len(ranges)} ranges:"
    return "\n\n".join([header, *blocks])


class ValueTools:
    """Cell value tools that can be registered with the server."""

    def __init__(self, client: GoogleSheetsClient):
        self.client = client

    def register(self, registry: ToolRegistry):
        """Register all value tools with the registry."""
        registry.register(self._get_values_tool())
        registry.register(self._update_values_tool())
        registry.register(self._append_values_tool())
        registry.register(self._clear_values_tool())
        registry.register(self._batch_get_values_tool())
        registry.register(self._batch_update_values_tool())

    def _get_values_tool(self) -> Tool:
        """Create the getValues tool."""

        async def handler(
            spreadsheetId: str,
            range: str,
            majorDimension: str = DEFAULT_MAJOR_DIMENSION,
            valueRenderOption: str = DEFAULT_VALUE_RENDER_OPTION,
        ) -> ToolResult:
            try:
                result = await self.client.get_values(
                    spreadsheetId, range, majorDimension, valueRenderOption
                )
                return ToolResult.text(
                    render_values(range, result.get("values", []), majorDimension)
                )
            except Exception as e:
                return handle_api_error(e)

        return Tool(
            name="getValues",
            description="Gets values from a spreadsheet",
            parameters=[
                ToolParameter(
                    name="spreadsheetId",
                    type="string",
                    description="The ID of the spreadsheet to retrieve data from",
                ),
                ToolParameter(
                    name="range",
                    type="string",
                    description="The A1 notation or R1C1 notation of the range to retrieve values from",
                ),
                _major_dimension_param("The major dimension that results should use"),
                _value_render_param(),
            ],
            handler=handler,
        )

    def _update_values_tool(self) -> Tool:
        """Create the updateValues tool."""

        async def handler(
            spreadsheetId: str,
            range: str,
            values: list[list[Any]],
            majorDimension: str = DEFAULT_MAJOR_DIMENSION,
            valueInputOption: str = DEFAULT_VALUE_INPUT_OPTION,
        ) -> ToolResult:
            try:
                result = await self.client.update_values(
                    spreadsheetId, range, values, majorDimension, valueInputOption
                )
                return ToolResult.text(
                    "Values updated successfully.\n"
                    f"Spreadsheet ID: {spreadsheetId}\n"
                    f"Range: {result.get('updatedRange')}\n"
                    f"Updated cells: {result.get('updatedCells')}\n"
                    f"Updated rows: {result.get('updatedRows')}\n"
                    f"Updated columns: {result.get('updatedColumns')}"
                )
            except Exception as e:
                return handle_api_error(e)

        return Tool(
            name="updateValues",
            description="Updates values in a spreadsheet",
            parameters=[
                ToolParameter(
                    name="spreadsheetId",
                    type="string",
                    description="The ID of the spreadsheet to update",
                ),
                ToolParameter(
                    name="range",
                    type="string",
                    description="The A1 notation of the values to update",
                ),
                _grid_param("The data to write"),
                _major_dimension_param("The major dimension of the values"),
                _value_input_param(),
            ],
            handler=handler,
        )

    def _append_values_tool(self) -> Tool:
        """Create the appendValues tool."""

        async def handler(
            spreadsheetId: str,
            range: str,
            values: list[list[Any]],
            majorDimension: str = DEFAULT_MAJOR_DIMENSION,
            valueInputOption: str = DEFAULT_VALUE_INPUT_OPTION,
            insertDataOption: str = DEFAULT_INSERT_DATA_OPTION,
        ) -> ToolResult:
            try:
                result = await self.client.append_values(
                    spreadsheetId,
                    range,
                    values,
                    majorDimension,
                    valueInputOption,
                    insertDataOption,
                )
                updates = result["updates"]
                return ToolResult.text(
                    "Values appended successfully.\n"
                    f"Spreadsheet ID: {spreadsheetId}\n"
                    f"Range: {updates.get('updatedRange')}\n"
                    f"Updated cells: {updates.get('updatedCells')}\n"
                    f"Updated rows: {updates.get('updatedRows')}\n"
                    f"Updated columns: {updates.get('updatedColumns')}"
                )
            except Exception as e:
                return handle_api_error(e)

        return Tool(
            name="appendValues",
            description="Appends values to a spreadsheet",
            parameters=[
                ToolParameter(
                    name="spreadsheetId",
                    type="string",
                    description="The ID of the spreadsheet to append data to",
                ),
                ToolParameter(
                    name="range",
                    type="string",
                    description="The A1 notation of the table to append to",
                ),
                _grid_param("The data to append"),
                _major_dimension_param("The major dimension of the values"),
                _value_input_param(),
                ToolParameter(
                    name="insertDataOption",
                    type="string",
                    description="How the input data should be inserted",
                    required=False,
                    enum=INSERT_DATA_OPTIONS,
                    default=DEFAULT_INSERT_DATA_OPTION,
                ),
            ],
            handler=handler,
        )

    def _clear_values_tool(self) -> Tool:
        """Create the clearValues tool."""

        async def handler(spreadsheetId: str, range: str) -> ToolResult:
            try:
                result = await self.client.clear_values(spreadsheetId, range)
                return ToolResult.text(
                    "Values cleared successfully.\n"
                    f"Spreadsheet ID: {spreadsheetId}\n"
                    f"Range: {result.get('clearedRange')}"
                )
            except Exception as e:
                return handle_api_error(e)

        return Tool(
            name="clearValues",
            description="Clears values from a spreadsheet",
            parameters=[
                ToolParameter(
                    name="spreadsheetId",
                    type="string",
                    description="The ID of the spreadsheet to clear",
                ),
                ToolParameter(
                    name="range",
                    type="string",
                    description="The A1 notation of the values to clear",
                ),
            ],
            handler=handler,
        )

    def _batch_get_values_tool(self) -> Tool:
        """Create the batchGetValues tool."""

        async def handler(
            spreadsheetId: str,
            ranges: list[str],
            majorDimension: str = DEFAULT_MAJOR_DIMENSION,
            valueRenderOption: str = DEFAULT_VALUE_RENDER_OPTION,
        ) -> ToolResult:
            try:
                result = await self.client.batch_get_values(
                    spreadsheetId, ranges, majorDimension, valueRenderOption
                )
                return ToolResult.text(
                    render_value_ranges(ranges, result.get("valueRanges", []))
                )
            except Exception as e:
                return handle_api_error(e)

        return Tool(
            name="batchGetValues",
            description="Gets values from multiple ranges of a spreadsheet",
            parameters=[
                ToolParameter(
                    name="spreadsheetId",
                    type="string",
                    description="The ID of the spreadsheet to retrieve data from",
                ),
                ToolParameter(
                    name="ranges",
                    type="array",
                    description="The A1 notation of the ranges to retrieve values from",
                    items=ToolParameter(name="range", type="string"),
                ),
                _major_dimension_param("The major dimension that results should use"),
                _value_render_param(),
            ],
            handler=handler,
        )

    def _batch_update_values_tool(self) -> Tool:
        """Create the batchUpdateValues tool."""

        async def handler(
            spreadsheetId: str,
            data: list[dict],
            valueInputOption: str = DEFAULT_VALUE_INPUT_OPTION,
        ) -> ToolResult:
            try:
                result = await self.client.batch_update_values(spreadsheetId, data, valueInputOption)
                return ToolResult.text(
                    "Batch update completed successfully.\n"
                    f"Spreadsheet ID: {spreadsheetId}\n"
                    f"Total updated cells: {result.get('totalUpdatedCells')}\n"
                    f"Total updated ranges: {result.get('totalUpdatedRanges')}\n"
                    f"Total updated rows: {result.get('totalUpdatedRows')}\n"
                    f"Total updated columns: {result.get('totalUpdatedColumns')}"
                )
            except Exception as e:
                return handle_api_error(e)

        return Tool(
            name="batchUpdateValues",
            description="Updates multiple ranges of values in a spreadsheet",
            parameters=[
                ToolParameter(
                    name="spreadsheetId",
                    type="string",
                    description="The ID of the spreadsheet to update",
                ),
                ToolParameter(
                    name="data",
                    type="array",
                    description="The data to write to multiple ranges",
                    items=ToolParameter(
                        name="valueRange",
                        type="object",
                        properties=[
                            ToolParameter(
                                name="range",
                                type="string",
                                description="The A1 notation of the values to update",
                            ),
                            _grid_param("The data to write"),
                            ToolParameter(
                                name="majorDimension",
                                type="string",
                                description="The major dimension of the values",
                                required=False,
                                enum=MAJOR_DIMENSIONS,
                            ),
                        ],
                    ),
                ),
                _value_input_param(),
            ],
            handler=handler,
        )

"""Tests for sheet-level tools."""

import pytest

from gsheets_mcp.tools import SheetTools, ToolRegistry
from gsheets_mcp.tools.sheets import build_sheet_properties_update


@pytest.fixture
def registry(mock_sheets_client):
    registry = ToolRegistry()
    SheetTools(mock_sheets_client).register(registry)
    return registry


def _add_sheet_reply(title="Data", sheet_id=7, rows=1000, columns=26):
    return {
        "replies": [
            {
                "addSheet": {
                    "properties": {
                        "sheetId": sheet_id,
                        "title": title,
                        "gridProperties": {"rowCount": rows, "columnCount": columns},
                    }
                }
            }
        ]
    }


class TestBuildSheetPropertiesUpdate:
    """Test the updateSheetProperties request builder."""

    def test_mask_names_supplied_fields_only(self):
        """Test the field mask lists exactly the changed properties."""
        request = build_sheet_properties_update(4, title="Renamed", hidden=None, index=2)

        assert request == {
            "updateSheetProperties": {
                "properties": {"sheetId": 4, "title": "Renamed", "index": 2},
                "fields": "title,index",
            }
        }

    def test_false_values_are_kept(self):
        """Test False is a real change, not an omission."""
        request = build_sheet_properties_update(0, hidden=False)

        assert request["updateSheetProperties"]["fields"] == "hidden"
        assert request["updateSheetProperties"]["properties"]["hidden"] is False


class TestCopySheet:
    """Test the copySheet tool."""

    @pytest.mark.asyncio
    async def test_copy_sheet(self, registry, mock_sheets_client):
        """Test the new sheet ID and index are reported."""
        result = await registry.execute(
            "copySheet",
            {"spreadsheetId": "src", "sheetId": 0, "destinationSpreadsheetId": "dst"},
        )

        mock_sheets_client.copy_sheet.assert_awaited_once_with("src", 0, "dst")
        assert result.first_text == (
            "Sheet copied successfully.\n"
            "Source Spreadsheet ID: src\n"
            "Source Sheet ID: 0\n"
            "Destination Spreadsheet ID: dst\n"
            "New Sheet ID: 99\n"
            "New Sheet Index: 3"
        )

    @pytest.mark.asyncio
    async def test_sheet_id_must_be_integer(self, registry, mock_sheets_client):
        """Test a string sheet ID is rejected."""
        result = await registry.execute(
            "copySheet",
            {"spreadsheetId": "src", "sheetId": "0", "destinationSpreadsheetId": "dst"},
        )

        assert result.is_error is True
        mock_sheets_client.copy_sheet.assert_not_awaited()


class TestAddSheet:
    """Test the addSheet tool."""

    @pytest.mark.asyncio
    async def test_add_sheet_defaults(self, registry, mock_sheets_client):
        """Test a new sheet defaults to 1000 rows and 26 columns."""
        mock_sheets_client.batch_update.return_value = _add_sheet_reply()

        result = await registry.execute("addSheet", {"spreadsheetId": "abc", "title": "Data"})

        mock_sheets_client.batch_update.assert_awaited_once_with(
            "abc",
            {
                "requests": [
                    {
                        "addSheet": {
                            "properties": {
                                "title": "Data",
                                "gridProperties": {"rowCount": 1000, "columnCount": 26},
                            }
                        }
                    }
                ]
            },
        )
        assert result.first_text == (
            "Sheet added successfully.\n"
            "Spreadsheet ID: abc\n"
            "New Sheet Title: Data\n"
            "New Sheet ID: 7\n"
            "Dimensions: 1000 rows x 26 columns"
        )

    @pytest.mark.asyncio
    async def test_add_sheet_with_index_and_size(self, registry, mock_sheets_client):
        """Test index and dimensions are forwarded when supplied."""
        mock_sheets_client.batch_update.return_value = _add_sheet_reply(rows=10, columns=3)

        result = await registry.execute(
            "addSheet",
            {"spreadsheetId": "abc", "title": "Data", "index": 0, "rowCount": 10, "columnCount": 3},
        )

        body = mock_sheets_client.batch_update.await_args.args[1]
        properties = body["requests"][0]["addSheet"]["properties"]
        assert properties["index"] == 0
        assert properties["gridProperties"] == {"rowCount": 10, "columnCount": 3}
        assert result.first_text.endswith("Dimensions: 10 rows x 3 columns")

    @pytest.mark.asyncio
    async def test_add_sheet_unexpected_reply(self, registry, mock_sheets_client):
        """Test a reply without the new sheet is reported as an error."""
        mock_sheets_client.batch_update.return_value = {"replies": []}

        result = await registry.execute("addSheet", {"spreadsheetId": "abc", "title": "Data"})

        assert result.is_error is True
        assert result.first_text.startswith("Error: ")


class TestDeleteSheet:
    """Test the deleteSheet tool."""

    @pytest.mark.asyncio
    async def test_delete_sheet(self, registry, mock_sheets_client):
        """Test deleting a sheet sends one deleteSheet request."""
        result = await registry.execute("deleteSheet", {"spreadsheetId": "abc", "sheetId": 42})

        mock_sheets_client.batch_update.assert_awaited_once_with(
            "abc", {"requests": [{"deleteSheet": {"sheetId": 42}}]}
        )
        assert result.first_text == (
            "Sheet deleted successfully.\nSpreadsheet ID: abc\nDeleted Sheet ID: 42"
        )


class TestUpdateSheetProperties:
    """Test the updateSheetProperties tool."""

    @pytest.mark.asyncio
    async def test_update_subset(self, registry, mock_sheets_client):
        """Test only supplied properties are sent and reported."""
        result = await registry.execute(
            "updateSheetProperties",
            {"spreadsheetId": "abc", "sheetId": 0, "title": "Renamed", "hidden": True},
        )

        mock_sheets_client.batch_update.assert_awaited_once_with(
            "abc",
            {
                "requests": [
                    {
                        "updateSheetProperties": {
                            "properties": {"sheetId": 0, "title": "Renamed", "hidden": True},
                            "fields": "title,hidden",
                        }
                    }
                ]
            },
        )
        assert result.first_text.endswith("Updated properties: title, hidden")

    @pytest.mark.asyncio
    async def test_update_grid_properties(self, registry, mock_sheets_client):
        """Test nested grid properties are forwarded as supplied."""
        await registry.execute(
            "updateSheetProperties",
            {"spreadsheetId": "abc", "sheetId": 1, "gridProperties": {"frozenRowCount": 1}},
        )

        request = mock_sheets_client.batch_update.await_args.args[1]["requests"][0]
        assert request["updateSheetProperties"]["properties"]["gridProperties"] == {"frozenRowCount": 1}
        assert request["updateSheetProperties"]["fields"] == "gridProperties"

    @pytest.mark.asyncio
    async def test_unknown_grid_property_rejected(self, registry, mock_sheets_client):
        """Test undeclared grid properties are rejected."""
        result = await registry.execute(
            "updateSheetProperties",
            {"spreadsheetId": "abc", "sheetId": 1, "gridProperties": {"hideGridlines": True}},
        )

        assert result.is_error is True
        mock_sheets_client.batch_update.assert_not_awaited()

"""Tests for developer metadata tools."""

import pytest

from gsheets_mcp.tools import DeveloperMetadataTools, ToolRegistry
from gsheets_mcp.tools.metadata import MATCH_ALL_FILTERS, build_metadata_update


@pytest.fixture
def registry(mock_sheets_client):
    registry = ToolRegistry()
    DeveloperMetadataTools(mock_sheets_client).register(registry)
    return registry


class TestBuildMetadataUpdate:
    """Test the updateDeveloperMetadata request builder."""

    def test_only_supplied_fields(self):
        """Test the mask names only the supplied fields."""
        request = build_metadata_update(12, metadata_value="v2")

        assert request == {
            "updateDeveloperMetadata": {
                "dataFilters": [{"developerMetadataLookup": {"metadataId": 12}}],
                "developerMetadata": {"metadataId": 12, "metadataValue": "v2"},
                "fields": "metadataValue",
            }
        }

    def test_all_fields(self):
        """Test the mask order when every field is supplied."""
        request = build_metadata_update(1, "k", "v", "PROJECT")

        assert request["updateDeveloperMetadata"]["fields"] == "metadataKey,metadataValue,visibility"


class TestGetDeveloperMetadata:
    """Test the getDeveloperMetadata tool."""

    @pytest.mark.asyncio
    async def test_no_metadata(self, registry, mock_sheets_client):
        """Test an empty search reports no metadata."""
        result = await registry.execute("getDeveloperMetadata", {"spreadsheetId": "abc"})

        mock_sheets_client.search_developer_metadata.assert_awaited_once_with("abc", MATCH_ALL_FILTERS)
        assert result.is_error is False
        assert result.first_text == "No developer metadata found in this spreadsheet."

    @pytest.mark.asyncio
    async def test_lists_metadata(self, registry, mock_sheets_client):
        """Test matched metadata is counted and listed."""
        mock_sheets_client.search_developer_metadata.return_value = {
            "matchedDeveloperMetadata": [
                {
                    "developerMetadata": {
                        "metadataId": 5,
                        "metadataKey": "owner",
                        "metadataValue": "ops",
                        "visibility": "DOCUMENT",
                        "location": {
                            "dimensionRange": {
                                "sheetId": 0,
                                "dimension": "ROWS",
                                "startIndex": 0,
                                "endIndex": 1,
                            }
                        },
                    }
                }
            ]
        }

        result = await registry.execute("getDeveloperMetadata", {"spreadsheetId": "abc"})

        assert result.first_text.startswith("Found 1 developer metadata items:\n\nMetadata 1:\n- ID: 5")
        assert result.first_text.endswith(
            "- Location: Dimension Range (Sheet ID: 0, Dimension: ROWS, Start: 0, End: 1)"
        )


class TestCreateDeveloperMetadata:
    """Test the createDeveloperMetadata tool."""

    @pytest.fixture(autouse=True)
    def created_reply(self, mock_sheets_client):
        mock_sheets_client.batch_update.return_value = {
            "replies": [{"createDeveloperMetadata": {"developerMetadata": {"metadataId": 321}}}]
        }

    @pytest.mark.asyncio
    async def test_create_row_metadata(self, registry, mock_sheets_client):
        """Test a row location is mapped to a one-row dimension range."""
        result = await registry.execute(
            "createDeveloperMetadata",
            {
                "spreadsheetId": "abc",
                "metadataKey": "status",
                "metadataValue": "reviewed",
                "location": {"type": "ROW", "sheetId": 0, "rowIndex": 4},
            },
        )

        mock_sheets_client.batch_update.assert_awaited_once_with(
            "abc",
            {
                "requests": [
                    {
                        "createDeveloperMetadata": {
                            "developerMetadata": {
                                "metadataKey": "status",
                                "metadataValue": "reviewed",
                                "location": {
                                    "dimensionRange": {
                                        "sheetId": 0,
                                        "dimension": "ROWS",
                                        "startIndex": 4,
                                        "endIndex": 5,
                                    }
                                },
                                "visibility": "DOCUMENT",
                            }
                        }
                    }
                ]
            },
        )
        assert result.first_text == (
            "Developer metadata created successfully.\n"
            "Spreadsheet ID: abc\n"
            "Metadata ID: 321\n"
            "Key: status\n"
            "Value: reviewed\n"
            "Location Type: ROW"
        )

    @pytest.mark.asyncio
    async def test_create_spreadsheet_metadata(self, registry, mock_sheets_client):
        """Test spreadsheet-level metadata with explicit visibility."""
        await registry.execute(
            "createDeveloperMetadata",
            {
                "spreadsheetId": "abc",
                "metadataKey": "k",
                "metadataValue": "v",
                "location": {"type": "SPREADSHEET"},
                "visibility": "PROJECT",
            },
        )

        metadata = mock_sheets_client.batch_update.await_args.args[1]["requests"][0][
            "createDeveloperMetadata"
        ]["developerMetadata"]
        assert metadata["location"] == {"spreadsheet": True}
        assert metadata["visibility"] == "PROJECT"

    @pytest.mark.asyncio
    async def test_missing_row_index(self, registry, mock_sheets_client):
        """Test a ROW location without rowIndex fails before any call."""
        result = await registry.execute(
            "createDeveloperMetadata",
            {
                "spreadsheetId": "abc",
                "metadataKey": "k",
                "metadataValue": "v",
                "location": {"type": "ROW", "sheetId": 0},
            },
        )

        assert result.is_error is True
        assert result.first_text == "Error: rowIndex is required for ROW locations"
        mock_sheets_client.batch_update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_location_type(self, registry, mock_sheets_client):
        """Test location types outside the enum are rejected."""
        result = await registry.execute(
            "createDeveloperMetadata",
            {
                "spreadsheetId": "abc",
                "metadataKey": "k",
                "metadataValue": "v",
                "location": {"type": "RANGE"},
            },
        )

        assert result.first_text.startswith("Input validation error")


class TestUpdateDeveloperMetadata:
    """Test the updateDeveloperMetadata tool."""

    @pytest.mark.asyncio
    async def test_update_value(self, registry, mock_sheets_client):
        """Test a single field update."""
        result = await registry.execute(
            "updateDeveloperMetadata",
            {"spreadsheetId": "abc", "metadataId": 12, "metadataValue": "v2"},
        )

        mock_sheets_client.batch_update.assert_awaited_once_with(
            "abc", {"requests": [build_metadata_update(12, metadata_value="v2")]}
        )
        assert result.first_text == (
            "Developer metadata updated successfully.\n"
            "Spreadsheet ID: abc\n"
            "Metadata ID: 12\n"
            "Updated fields: metadataValue"
        )


class TestDeleteDeveloperMetadata:
    """Test the deleteDeveloperMetadata tool."""

    @pytest.mark.asyncio
    async def test_delete_uses_developer_id(self, registry, mock_sheets_client):
        """Test the delete request names the metadata by developerId."""
        result = await registry.execute(
            "deleteDeveloperMetadata", {"spreadsheetId": "abc", "metadataId": 12}
        )

        mock_sheets_client.batch_update.assert_awaited_once_with(
            "abc", {"requests": [{"deleteDeveloperMetadata": {"developerId": 12}}]}
        )
        assert result.first_text == (
            "Developer metadata deleted successfully.\nSpreadsheet ID: abc\nMetadata ID: 12"
        )

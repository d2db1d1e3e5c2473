"""Pytest configuration and shared fixtures."""

from unittest.mock import AsyncMock, Mock

import pytest

from gsheets_mcp.config import Settings
from gsheets_mcp.server import SheetsMCPServer
from gsheets_mcp.sheets import GoogleSheetsClient


@pytest.fixture
def mock_settings() -> Settings:
    """Create settings with test values."""
    return Settings(
        client_id="test-client-id",
        client_secret="test-client-secret",
        redirect_uri="http://localhost:3000/oauth2callback",
        refresh_token="test-refresh-token",
        server_name="Google Sheets API",
        server_version="1.0.0",
        host="127.0.0.1",
        port=8000,
        debug=False,
        cors_allow_origins=["*"],
    )


@pytest.fixture
def spreadsheet_response() -> dict:
    """A spreadsheets.get reply with two sheets."""
    return {
        "spreadsheetId": "test-sheet-123",
        "properties": {
            "title": "Test Sheet",
            "locale": "en_US",
            "timeZone": "Europe/London",
        },
        "sheets": [
            {
                "properties": {
                    "sheetId": 0,
                    "title": "sheet1",
                    "index": 0,
                    "gridProperties": {"rowCount": 1000, "columnCount": 26, "frozenRowCount": 1},
                }
            },
            {
                "properties": {
                    "sheetId": 42,
                    "title": "Summary",
                    "index": 1,
                    "hidden": True,
                    "gridProperties": {"rowCount": 50, "columnCount": 5},
                }
            },
        ],
    }


@pytest.fixture
def mock_sheets_client(spreadsheet_response) -> Mock:
    """Create a mocked Google Sheets client."""
    client = Mock(spec=GoogleSheetsClient)

    client.create_spreadsheet = AsyncMock(
        return_value={"spreadsheetId": "new-sheet-456", "properties": {"title": "Budget"}}
    )
    client.get_spreadsheet = AsyncMock(return_value=spreadsheet_response)
    client.batch_update = AsyncMock(return_value={"spreadsheetId": "test-sheet-123", "replies": [{}]})
    client.copy_sheet = AsyncMock(return_value={"sheetId": 99, "title": "Copy of sheet1", "index": 3})
    client.get_values = AsyncMock(return_value={"range": "Sheet1!A1:B2", "values": []})
    client.update_values = AsyncMock(return_value={})
    client.append_values = AsyncMock(return_value={"updates": {}})
    client.clear_values = AsyncMock(return_value={"clearedRange": "Sheet1!A1:B2"})
    client.batch_get_values = AsyncMock(return_value={"valueRanges": []})
    client.batch_update_values = AsyncMock(return_value={})
    client.search_developer_metadata = AsyncMock(return_value={})

    return client


@pytest.fixture
def mcp_server(mock_sheets_client) -> SheetsMCPServer:
    """Create a server wired to the mocked client."""
    return SheetsMCPServer(mock_sheets_client, name="Google Sheets API", version="1.0.0")


class ApiError(Exception):
    """Failure shaped like an HTTP client error carrying the API response."""

    def __init__(self, status: int, status_text: str, data):
        super().__init__(f"Request failed with status code {status}")
        self.response = {"status": status, "statusText": status_text, "data": data}


@pytest.fixture
def api_error():
    """Factory for errors that carry an API response."""
    return ApiError


# Configure pytest-asyncio
def pytest_configure(config):
    """Configure pytest with asyncio settings."""
    config.addinivalue_line("markers", "asyncio: mark test as async")

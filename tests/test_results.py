"""Tests for result envelopes and error normalization."""

import json
from types import SimpleNamespace

from gsheets_mcp.sheets import SheetsApiError
from gsheets_mcp.tools.results import (
    ResourceResult,
    ToolResult,
    format_error,
    handle_api_error,
    handle_resource_error,
)


class TestToolResult:
    """Test the tool result envelope."""

    def test_text_result(self):
        """Test a successful result carries one text entry."""
        result = ToolResult.text("hello")

        assert result.to_dict() == {"content": [{"type": "text", "text": "hello"}], "isError": False}

    def test_error_result(self):
        """Test an error result sets isError."""
        result = ToolResult.error("bad")

        assert result.is_error is True
        assert result.to_dict()["isError"] is True
        assert result.first_text == "bad"


class TestResourceResult:
    """Test the resource result envelope."""

    def test_text_omits_is_error(self):
        """Test successful contents do not carry an isError key."""
        result = ResourceResult.text("sheets://spreadsheet/abc", "Spreadsheet: X")

        assert result.to_dict() == {
            "contents": [{"uri": "sheets://spreadsheet/abc", "text": "Spreadsheet: X"}]
        }
        assert result.is_error is False

    def test_error_sets_is_error(self):
        """Test error contents carry isError."""
        result = ResourceResult.error("sheets://x", "nope")

        assert result.is_error is True
        assert result.to_dict()["contents"][0]["isError"] is True


class TestFormatError:
    """Test the single-line error rendering."""

    def test_sheets_api_error(self):
        """Test an API rejection renders status, reason and message."""
        error = SheetsApiError(404, "Not Found", {"error": {"message": "no such sheet"}})

        assert format_error(error) == "API Error (404 Not Found): no such sheet"

    def test_response_dict_error(self, api_error):
        """Test errors carrying a response mapping are treated as API errors."""
        error = api_error(403, "Forbidden", {"error": {"message": "The caller does not have permission"}})

        assert format_error(error) == "API Error (403 Forbidden): The caller does not have permission"

    def test_response_object_error(self):
        """Test errors carrying a response object with a reason."""
        error = RuntimeError("request failed")
        error.response = SimpleNamespace(status=500, reason="Internal Server Error", data={"error": {"message": "backend"}})

        assert format_error(error) == "API Error (500 Internal Server Error): backend"

    def test_payload_without_message_is_serialized(self, api_error):
        """Test the whole payload is shown when there is no error message."""
        data = {"error": {"code": 400}}
        error = api_error(400, "Bad Request", data)

        assert format_error(error) == f"API Error (400 Bad Request): {json.dumps(data)}"

    def test_plain_exception(self):
        """Test other failures render their message."""
        assert format_error(TimeoutError("timeout")) == "Error: timeout"

    def test_exception_without_message(self):
        """Test failures with an empty message fall back to their repr."""
        assert format_error(KeyError()) == "Error: KeyError()"

    def test_response_none_is_plain_error(self):
        """Test an attribute named response that is None is ignored."""
        error = ValueError("bad input")
        error.response = None

        assert format_error(error) == "Error: bad input"


class TestHandleErrors:
    """Test conversion of failures into envelopes."""

    def test_handle_api_error(self, caplog):
        """Test handler failures are logged and returned as error results."""
        with caplog.at_level("ERROR"):
            result = handle_api_error(SheetsApiError(404, "Not Found", {"error": {"message": "missing"}}))

        assert result.is_error is True
        assert result.first_text == "API Error (404 Not Found): missing"
        assert "Google Sheets API Error" in caplog.text

    def test_handle_resource_error(self):
        """Test resource failures name what was being fetched."""
        result = handle_resource_error("sheets://spreadsheet/abc", "spreadsheet", RuntimeError("boom"))

        assert result.is_error is True
        assert result.contents[0].uri == "sheets://spreadsheet/abc"
        assert result.contents[0].text == "Error fetching spreadsheet: boom"

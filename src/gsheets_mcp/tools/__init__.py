"""MCP tools for the Google Sheets API."""

from .metadata import DeveloperMetadataTools
from .registry import Tool, ToolParameter, ToolRegistry
from .results import ResourceResult, ToolResult, handle_api_error
from .sheets import SheetTools
from .spreadsheets import SpreadsheetTools
from .values import ValueTools

__all__ = [
    "SpreadsheetTools",
    "SheetTools",
    "ValueTools",
    "DeveloperMetadataTools",
    "ToolRegistry",
    "Tool",
    "ToolParameter",
    "ToolResult",
    "ResourceResult",
    "handle_api_error",
]

"""Google Sheets API integration."""

from .client import GoogleSheetsClient, SheetsApiError
from .formatting import format_grid, spreadsheet_url
from .models import MetadataLocation, build_metadata_location

__all__ = [
    "GoogleSheetsClient",
    "SheetsApiError",
    "MetadataLocation",
    "build_metadata_location",
    "format_grid",
    "spreadsheet_url",
]

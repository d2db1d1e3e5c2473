"""Data models for Google Sheets request payloads."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

LocationType = Literal["SPREADSHEET", "SHEET", "ROW", "COLUMN", "CELL"]


class MetadataLocation(BaseModel):
    """Where a piece of developer metadata is attached.

    ``to_api`` maps each location type onto the single API location shape it
    corresponds to. Row, column and cell ranges are half-open and span exactly
    one index, e.g. row 4 becomes ``startIndex=4, endIndex=5``.
    """

    model_config = ConfigDict(populate_by_name=True)

    type: LocationType
    sheet_id: Optional[int] = Field(default=None, alias="sheetId")
    row_index: Optional[int] = Field(default=None, alias="rowIndex")
    column_index: Optional[int] = Field(default=None, alias="columnIndex")

    def _require(self, field: str, value: Optional[int]) -> int:
        if value is None:
            raise ValueError(f"{field} is required for {self.type} locations")
        return value

    def _sheet(self) -> dict:
        # An absent sheetId is left out of the payload rather than sent as null
        return {} if self.sheet_id is None else {"sheetId": self.sheet_id}

    def to_api(self) -> dict:
        """Build the ``DeveloperMetadataLocation`` payload."""
        if self.type == "SPREADSHEET":
            return {"spreadsheet": True}

        if self.type == "SHEET":
            return self._sheet()

        if self.type == "ROW":
            row = self._require("rowIndex", self.row_index)
            return {
                "dimensionRange": {
                    **self._sheet(),
                    "dimension": "ROWS",
                    "startIndex": row,
                    "endIndex": row + 1,
                }
            }

        if self.type == "COLUMN":
            column = self._require("columnIndex", self.column_index)
            return {
                "dimensionRange": {
                    **self._sheet(),
                    "dimension": "COLUMNS",
                    "startIndex": column,
                    "endIndex": column + 1,
                }
            }

        row = self._require("rowIndex", self.row_index)
        column = self._require("columnIndex", self.column_index)
        return {
            "gridRange": {
                **self._sheet(),
                "startRowIndex": row,
                "endRowIndex": row + 1,
                "startColumnIndex": column,
                "endColumnIndex": column + 1,
            }
        }


def build_metadata_location(location: dict) -> dict:
    """Map a ``{type, sheetId?, rowIndex?, columnIndex?}`` dict to the API shape."""
    return MetadataLocation.model_validate(location).to_api()

"""Plain-text rendering of Sheets API responses."""

from typing import Any, Optional

EDIT_URL_TEMPLATE = "https://docs.google.com/spreadsheets/d/{spreadsheet_id}/edit"

NO_METADATA_TEXT = "No developer metadata found in this spreadsheet."


def spreadsheet_url(spreadsheet_id: str) -> str:
    """Return the browser edit link for a spreadsheet."""
    return EDIT_URL_TEMPLATE.format(spreadsheet_id=spreadsheet_id)


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def format_grid(values: list[list[Any]]) -> str:
    """Render a 2-D grid as tab-separated cells and newline-separated rows.

    Callers check for an empty grid first; an empty grid renders as "".
    """
    return "\n".join("\t".join(_cell_text(cell) for cell in row) for row in values)


def sheet_titles(spreadsheet: dict) -> str:
    return ", ".join(s["properties"]["title"] for s in spreadsheet.get("sheets", []))


def describe_location(location: dict) -> Optional[str]:
    if location.get("spreadsheet"):
        return "Spreadsheet level"
    if "sheetId" in location:
        return f"Sheet (ID: {location['sheetId']})"
    if "dimensionRange" in location:
        dr = location["dimensionRange"]
        return (
            f"Dimension Range (Sheet ID: {dr.get('sheetId')}, "
            f"Dimension: {dr.get('dimension')}, "
            f"Start: {dr.get('startIndex')}, End: {dr.get('endIndex')})"
        )
    return None


def format_developer_metadata(matched: list[dict]) -> str:
    """Render ``matchedDeveloperMetadata`` entries as a numbered listing."""
    blocks = []
    for i, item in enumerate(matched, start=1):
        metadata = item.get("developerMetadata", {})
        lines = [
            f"Metadata {i}:",
            f"- ID: {metadata.get('metadataId')}",
            f"- Key: {metadata.get('metadataKey')}",
            f"- Value: {metadata.get('metadataValue')}",
            f"- Visibility: {metadata.get('visibility')}",
        ]
        location = describe_location(metadata.get("location", {}))
        if location is not None:
            lines.append(f"- Location: {location}")
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)

"""MCP server exposing the Google Sheets API as tools and resources."""

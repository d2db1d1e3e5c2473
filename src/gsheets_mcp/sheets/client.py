"""Google Sheets API client."""

import asyncio
import json
import logging
from typing import Any, Optional

import httplib2
from google.oauth2.credentials import Credentials
from google_auth_httplib2 import AuthorizedHttp
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from ..config import Settings, settings

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


class SheetsApiError(Exception):
    """A request rejected by the Sheets API, with the HTTP status and payload."""

    def __init__(self, status: int, status_text: str, data: Any = None):
        self.status = status
        self.status_text = status_text
        self.data = data
        super().__init__(self.message or f"{status} {status_text}")

    @property
    def message(self) -> Optional[str]:
        """The human readable ``error.message`` from the payload, if any."""
        if isinstance(self.data, dict):
            error = self.data.get("error")
            if isinstance(error, dict):
                return error.get("message")
        return None

    @classmethod
    def from_http_error(cls, error: HttpError) -> "SheetsApiError":
        content = error.content
        if isinstance(content, bytes):
            content = content.decode("utf-8", errors="replace")
        try:
            data = json.loads(content)
        except (TypeError, ValueError):
            data = content
        return cls(error.resp.status, error.resp.reason, data)


def _without_none(**kwargs) -> dict:
    return {key: value for key, value in kwargs.items() if value is not None}


class GoogleSheetsClient:
    """Async client for the Google Sheets v4 API.

    One instance is shared by every tool and resource handler. The blocking
    googleapiclient request runs in a worker thread with its own HTTP
    connection, so concurrent calls never contend for a socket.
    """

    def __init__(self, credentials: Optional[Credentials] = None, service=None):
        self._credentials = credentials
        self._service = service

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "GoogleSheetsClient":
        """Build a client from the OAuth client settings and refresh token."""
        config = config or settings
        missing = config.missing_credentials()
        if missing:
            logger.warning(f"Missing environment variables: {', '.join(missing)}")
            logger.warning("Authentication will fail. Please set these variables in a .env file.")

        credentials = Credentials(
            token=None,
            refresh_token=config.refresh_token,
            client_id=config.client_id,
            client_secret=config.client_secret,
            token_uri=config.token_uri,
            scopes=SCOPES,
        )
        return cls(credentials=credentials)

    @property
    def service(self):
        """Get or create the Sheets API service."""
        if self._service is None:
            self._service = build(
                "sheets", "v4", credentials=self._credentials, cache_discovery=False
            )
        return self._service

    async def _execute(self, request) -> dict:
        """Run a prepared API request off the event loop."""
        try:
            if self._credentials is None:
                return await asyncio.to_thread(request.execute)
            http = AuthorizedHttp(self._credentials, http=httplib2.Http())
            return await asyncio.to_thread(request.execute, http=http)
        except HttpError as e:
            raise SheetsApiError.from_http_error(e) from e

    # Spreadsheets

    async def create_spreadsheet(self, body: dict) -> dict:
        request = self.service.spreadsheets().create(body=body)
        return await self._execute(request)

    async def get_spreadsheet(
        self,
        spreadsheet_id: str,
        ranges: Optional[list[str]] = None,
        include_grid_data: Optional[bool] = None,
    ) -> dict:
        request = self.service.spreadsheets().get(
            spreadsheetId=spreadsheet_id,
            **_without_none(ranges=ranges, includeGridData=include_grid_data),
        )
        return await self._execute(request)

    async def batch_update(self, spreadsheet_id: str, body: dict) -> dict:
        """Apply a list of update requests as one transaction."""
        request = self.service.spreadsheets().batchUpdate(
            spreadsheetId=spreadsheet_id, body=body
        )
        return await self._execute(request)

    # Sheets

    async def copy_sheet(
        self, spreadsheet_id: str, sheet_id: int, destination_spreadsheet_id: str
    ) -> dict:
        request = (
            self.service.spreadsheets()
            .sheets()
            .copyTo(
                spreadsheetId=spreadsheet_id,
                sheetId=sheet_id,
                body={"destinationSpreadsheetId": destination_spreadsheet_id},
            )
        )
        return await self._execute(request)

    # Values

    async def get_values(
        self,
        spreadsheet_id: str,
        range_notation: str,
        major_dimension: Optional[str] = None,
        value_render_option: Optional[str] = None,
    ) -> dict:
        request = (
            self.service.spreadsheets()
            .values()
            .get(
                spreadsheetId=spreadsheet_id,
                range=range_notation,
                **_without_none(
                    majorDimension=major_dimension,
                    valueRenderOption=value_render_option,
                ),
            )
        )
        return await self._execute(request)

    async def update_values(
        self,
        spreadsheet_id: str,
        range_notation: str,
        values: list[list[Any]],
        major_dimension: str,
        value_input_option: str,
    ) -> dict:
        request = (
            self.service.spreadsheets()
            .values()
            .update(
                spreadsheetId=spreadsheet_id,
                range=range_notation,
                valueInputOption=value_input_option,
                body={
                    "range": range_notation,
                    "majorDimension": major_dimension,
                    "values": values,
                },
            )
        )
        return await self._execute(request)

    async def append_values(
        self,
        spreadsheet_id: str,
        range_notation: str,
        values: list[list[Any]],
        major_dimension: str,
        value_input_option: str,
        insert_data_option: str,
    ) -> dict:
        request = (
            self.service.spreadsheets()
            .values()
            .append(
                spreadsheetId=spreadsheet_id,
                range=range_notation,
                valueInputOption=value_input_option,
                insertDataOption=insert_data_option,
                body={
                    "range": range_notation,
                    "majorDimension": major_dimension,
                    "values": values,
                },
            )
        )
        return await self._execute(request)

    async def clear_values(self, spreadsheet_id: str, range_notation: str) -> dict:
        request = (
            self.service.spreadsheets()
            .values()
            .clear(spreadsheetId=spreadsheet_id, range=range_notation, body={})
        )
        return await self._execute(request)

    async def batch_get_values(
        self,
        spreadsheet_id: str,
        ranges: list[str],
        major_dimension: Optional[str] = None,
        value_render_option: Optional[str] = None,
    ) -> dict:
        request = (
            self.service.spreadsheets()
            .values()
            .batchGet(
                spreadsheetId=spreadsheet_id,
                ranges=ranges,
                **_without_none(
                    majorDimension=major_dimension,
                    valueRenderOption=value_render_option,
                ),
            )
        )
        return await self._execute(request)

    async def batch_update_values(
        self, spreadsheet_id: str, data: list[dict], value_input_option: str
    ) -> dict:
        request = (
            self.service.spreadsheets()
            .values()
            .batchUpdate(
                spreadsheetId=spreadsheet_id,
                body={"valueInputOption": value_input_option, "data": data},
            )
        )
        return await self._execute(request)

    # Developer metadata

    async def search_developer_metadata(
        self, spreadsheet_id: str, data_filters: list[dict]
    ) -> dict:
        request = (
            self.service.spreadsheets()
            .developerMetadata()
            .search(spreadsheetId=spreadsheet_id, body={"dataFilters": data_filters})
        )
        return await self._execute(request)

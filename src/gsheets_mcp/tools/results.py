"""Result envelopes returned by tools and resources, and error normalization."""

import json
import logging
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class TextContent(BaseModel):
    """A single text entry of a tool result."""

    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """Envelope returned by every tool handler."""

    model_config = ConfigDict(populate_by_name=True)

    content: list[TextContent] = Field(default_factory=list)
    is_error: bool = Field(default=False, alias="isError")

    @classmethod
    def text(cls, text: str) -> "ToolResult":
        return cls(content=[TextContent(text=text)])

    @classmethod
    def error(cls, text: str) -> "ToolResult":
        return cls(content=[TextContent(text=text)], is_error=True)

    @property
    def first_text(self) -> str:
        return self.content[0].text if self.content else ""

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)


class ResourceContent(BaseModel):
    """One document returned from a resource read."""

    model_config = ConfigDict(populate_by_name=True)

    uri: str
    text: str
    is_error: Optional[bool] = Field(default=None, alias="isError")


class ResourceResult(BaseModel):
    """Envelope returned by every resource handler."""

    contents: list[ResourceContent] = Field(default_factory=list)

    @classmethod
    def text(cls, uri: str, text: str) -> "ResourceResult":
        return cls(contents=[ResourceContent(uri=uri, text=text)])

    @classmethod
    def error(cls, uri: str, text: str) -> "ResourceResult":
        return cls(contents=[ResourceContent(uri=uri, text=text, is_error=True)])

    @property
    def is_error(self) -> bool:
        return any(c.is_error for c in self.contents)

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


def _api_response(error: BaseException) -> Optional[tuple[Any, Any, Any]]:
    """Return ``(status, status_text, data)`` when the error carries an API response."""
    if hasattr(error, "status") and hasattr(error, "status_text"):
        return error.status, error.status_text, getattr(error, "data", None)

    response = getattr(error, "response", None)
    if response is None:
        return None
    if isinstance(response, dict):
        if "status" not in response:
            return None
        return (
            response.get("status"),
            response.get("statusText", response.get("status_text")),
            response.get("data"),
        )
    status = getattr(response, "status", getattr(response, "status_code", None))
    if status is None:
        return None
    status_text = getattr(response, "status_text", getattr(response, "reason", ""))
    return status, status_text, getattr(response, "data", None)


def _payload_message(data: Any) -> str:
    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict) and error.get("message"):
            return error["message"]
    return json.dumps(data)


def format_error(error: BaseException) -> str:
    """Render a failure as the single line shown to the caller."""
    api_response = _api_response(error)
    if api_response is not None:
        status, status_text, data = api_response
        return f"API Error ({status} {status_text}): {_payload_message(data)}"
    return f"Error: {str(error) or repr(error)}"


def handle_api_error(error: BaseException) -> ToolResult:
    """Log a handler failure and convert it into an error result."""
    logger.error(f"Google Sheets API Error: {error!r}", exc_info=error)
    return ToolResult.error(format_error(error))


def handle_resource_error(uri: str, subject: str, error: BaseException) -> ResourceResult:
    """Log a resource read failure and convert it into an error content."""
    logger.error(f"Error fetching {subject}: {error!r}", exc_info=error)
    return ResourceResult.error(uri, f"Error fetching {subject}: {str(error) or repr(error)}")

"""Configuration management for gsheets-mcp."""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()

GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"

# Environment variables needed to build the Sheets API credentials
REQUIRED_ENV_VARS = ["CLIENT_ID", "CLIENT_SECRET", "REDIRECT_URI", "REFRESH_TOKEN"]


def _parse_cors_origins() -> list[str]:
    """Parse CORS origins from environment variable."""
    cors_env = os.getenv("CORS_ALLOW_ORIGINS")
    if cors_env:
        return cors_env.split(",")
    return ["*"]


class Settings(BaseModel):
    """Application settings."""

    # Google OAuth2 client and the long-lived refresh token
    client_id: Optional[str] = os.getenv("CLIENT_ID")
    client_secret: Optional[str] = os.getenv("CLIENT_SECRET")
    redirect_uri: Optional[str] = os.getenv("REDIRECT_URI")
    refresh_token: Optional[str] = os.getenv("REFRESH_TOKEN")
    token_uri: str = os.getenv("TOKEN_URI", GOOGLE_TOKEN_URI)

    # MCP server identity
    server_name: str = os.getenv("SERVER_NAME", "Google Sheets API")
    server_version: str = os.getenv("SERVER_VERSION", "1.0.0")

    # SSE transport settings
    host: str = os.getenv("HOST", "127.0.0.1")
    port: int = int(os.getenv("PORT", "8000"))
    debug: bool = os.getenv("DEBUG", "false").lower() == "true"

    # CORS settings (comma-separated list of allowed origins, or * for all)
    cors_allow_origins: list[str] = _parse_cors_origins()

    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    def missing_credentials(self) -> list[str]:
        """Return the environment variable names of unset credentials."""
        values = {
            "CLIENT_ID": self.client_id,
            "CLIENT_SECRET": self.client_secret,
            "REDIRECT_URI": self.redirect_uri,
            "REFRESH_TOKEN": self.refresh_token,
        }
        return [name for name in REQUIRED_ENV_VARS if not values[name]]

    @property
    def credentials_configured(self) -> bool:
        return not self.missing_credentials()


settings = Settings()

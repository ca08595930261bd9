"""
Application Configuration

Centralized configuration using Pydantic Settings for type-safe
environment variable management with validation.
"""

import re
from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Get the directory containing this file, then go up to the project root
_CONFIG_DIR = Path(__file__).parent.parent.parent

# RFC 6265 cookie-name token characters
_COOKIE_NAME_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    """

    model_config = SettingsConfigDict(
        env_file=_CONFIG_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server Configuration
    server_host: str = "0.0.0.0"
    server_port: int = 8080
    debug: bool = False

    # Authentication Configuration
    auth_enabled: bool = True
    auth_login_path: str = "/login"
    auth_cookie_name: str = "authgate_session"
    auth_users: str = "admin:"  # comma-separated "name:secret" entries
    auth_users_file: str | None = None  # replaces auth_users when set

    @field_validator("auth_login_path")
    @classmethod
    def _check_login_path(cls, value: str) -> str:
        if not value.startswith("/") or value == "/" or value.endswith("/"):
            raise ValueError("auth_login_path must start with '/' and must not end with '/'")
        return value

    @field_validator("auth_cookie_name")
    @classmethod
    def _check_cookie_name(cls, value: str) -> str:
        if not _COOKIE_NAME_RE.match(value):
            raise ValueError(f"auth_cookie_name is not a valid cookie name: {value!r}")
        return value

    @property
    def resolved_users_file(self) -> Path | None:
        """Return the users file as an absolute path, relative to the project root."""
        if not self.auth_users_file:
            return None
        raw = Path(self.auth_users_file)
        if raw.is_absolute():
            return raw
        return (_CONFIG_DIR / raw).resolve()


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once
    and reused throughout the application lifecycle.
    """
    return Settings()

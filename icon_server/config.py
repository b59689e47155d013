"""Application settings using pydantic-settings."""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

IconFormat = Literal["svg", "png", "webp", "avif", "ico"]
IconSourceKind = Literal["local", "remote"]

SUPPORTED_FORMATS: tuple[str, ...] = ("svg", "png", "webp", "avif", "ico")


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application settings
    app_name: str = "Icon Server"
    debug: bool = False
    port: int = 4050

    # Where icons come from: "local" reads the mounted volume, anything else the CDN
    icon_source: IconSourceKind = "remote"
    remote_base_url: str = "https://cdn.jsdelivr.net/gh/selfhst/icons@main"
    local_base_path: str = "/app/icons"
    # Empty means "<local_base_path>/custom"
    custom_icons_path: str = ""

    # Format served when no color is requested
    standard_icon_format: IconFormat = "svg"

    # In-memory icon cache
    cache_ttl_seconds: float = Field(default=3600.0, gt=0)
    cache_max_entries: int = Field(default=500, gt=0)

    # Remote CDN request timeout (seconds). A hung CDN must not pin a request forever.
    remote_timeout_seconds: float = Field(default=30.0, gt=0)

    @field_validator("icon_source", mode="before")
    @classmethod
    def _normalize_icon_source(cls, value: object) -> str:
        return "local" if str(value).strip().lower() == "local" else "remote"

    @field_validator("standard_icon_format", mode="before")
    @classmethod
    def _normalize_standard_format(cls, value: object) -> str:
        fmt = str(value).strip().lower()
        return fmt if fmt in SUPPORTED_FORMATS else "svg"

    @field_validator("remote_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def custom_path(self) -> str:
        """Directory holding user supplied assets served under /custom."""
        if self.custom_icons_path:
            return self.custom_icons_path
        return f"{self.local_base_path.rstrip('/')}/custom"

    @property
    def source_location(self) -> str:
        """Base path or URL of the configured icon source."""
        return self.local_base_path if self.icon_source == "local" else self.remote_base_url

    def describe(self) -> dict:
        """Public server info for the root endpoint."""
        return {
            "iconSource": "Local volume" if self.icon_source == "local" else "Remote CDN",
            "standardFormat": self.standard_icon_format,
            "caching": (
                f"TTL: {int(self.cache_ttl_seconds)}s, Max items: {self.cache_max_entries}"
            ),
            "baseUrl": self.source_location,
        }


settings = Settings()

"""Error types for icon resolution.

Every failure is scoped to a single request. Each error carries a stable code and
an HTTP status so the API can return consistent structured error bodies.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class ErrorBody:
    detail: str
    code: str
    timestamp: str

    def to_dict(self) -> dict[str, str]:
        return {"detail": self.detail, "code": self.code, "timestamp": self.timestamp}


class IconServerError(Exception):
    """Base error with a stable error code and timestamped payload."""

    status_code: int = 500
    code: str = "icon_server_error"

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail
        self.timestamp = _utc_now_iso()

    def to_payload(self) -> dict[str, str]:
        return ErrorBody(detail=self.detail, code=self.code, timestamp=self.timestamp).to_dict()


class InvalidInputError(IconServerError):
    """Malformed icon name or color code."""

    status_code = 400
    code = "invalid_input"


class NotFoundError(IconServerError):
    status_code = 404
    code = "not_found"


class IconNotFoundError(NotFoundError):
    """Icon absent at every location the fallback chain tried."""

    def __init__(self, icon_name: str, color_code: str = "", *, reason: str = "") -> None:
        super().__init__("Icon not found")
        self.icon_name = icon_name
        self.color_code = color_code
        self.reason = reason


class AssetNotFoundError(NotFoundError):
    def __init__(self, filename: str) -> None:
        super().__init__("Custom icon not found")
        self.filename = filename


class AssetReadError(IconServerError):
    """Custom asset exists but could not be read."""

    code = "read_error"

    def __init__(self, filename: str) -> None:
        super().__init__("Failed to read custom icon")
        self.filename = filename


class BackendError(IconServerError):
    """Transport or filesystem failure distinct from plain absence."""

    status_code = 502
    code = "backend_error"

    def __init__(self, detail: str, *, location: str = "") -> None:
        super().__init__(detail)
        self.location = location


class SourceStatusError(BackendError):
    """Remote source answered with a non-OK HTTP status."""

    def __init__(self, status: int, *, location: str = "") -> None:
        super().__init__(f"HTTP {status}", location=location)
        self.status = status

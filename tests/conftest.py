"""Test fixtures and configuration."""

from collections.abc import Callable
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from icon_server.config import Settings
from icon_server.core.cache import MemoryCache
from icon_server.core.cache import stats as cache_stats
from icon_server.core.sources import IconSource
from icon_server.errors import BackendError
from icon_server.main import create_app

LIGHT_SVG = (
    b'<svg xmlns="http://www.w3.org/2000/svg">'
    b'<path style="opacity:1;fill:#fff" d="M0 0h1"/>'
    b'<circle fill="#fff" r="2"/>'
    b"</svg>"
)
PLAIN_SVG = b'<svg xmlns="http://www.w3.org/2000/svg"><path fill="#0f0" d="M0 0h1"/></svg>'
PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR-fake-png"


class FakeIconSource(IconSource):
    """In-memory source recording every call it receives."""

    name = "fake"

    def __init__(self, files: dict[str, bytes] | None = None, *, broken: set[str] | None = None):
        self.files = dict(files or {})
        # Paths whose existence check succeeds but whose fetch fails
        self.broken = set(broken or ())
        self.calls: list[tuple[str, str]] = []
        self.closed = False

    @property
    def location(self) -> str:
        return "memory://icons"

    async def exists(self, path: str) -> bool:
        self.calls.append(("exists", path))
        return path in self.files or path in self.broken

    async def fetch(self, path: str) -> bytes:
        self.calls.append(("fetch", path))
        if path in self.broken or path not in self.files:
            raise BackendError("missing", location=path)
        return self.files[path]

    async def close(self) -> None:
        self.closed = True


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def _reset_cache_stats():
    cache_stats.reset()
    yield
    cache_stats.reset()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> MemoryCache:
    return MemoryCache(ttl_seconds=60, max_entries=10, clock=clock)


@pytest.fixture
def make_source() -> Callable[..., FakeIconSource]:
    return FakeIconSource


@pytest.fixture
def icon_dir(tmp_path: Path) -> Path:
    """A local icon volume laid out like the CDN: svg/, png/, custom/."""
    for sub in ("svg", "png", "custom"):
        (tmp_path / sub).mkdir()
    (tmp_path / "svg" / "github.svg").write_bytes(PLAIN_SVG)
    (tmp_path / "svg" / "github-light.svg").write_bytes(LIGHT_SVG)
    (tmp_path / "png" / "github.png").write_bytes(PNG_BYTES)
    (tmp_path / "svg" / "svgonly.svg").write_bytes(PLAIN_SVG)
    (tmp_path / "custom" / "logo.png").write_bytes(PNG_BYTES)
    (tmp_path / "custom" / "brand.SVG").write_bytes(PLAIN_SVG)
    return tmp_path


@pytest.fixture
def local_settings(icon_dir: Path) -> Settings:
    return Settings(
        _env_file=None,
        icon_source="local",
        local_base_path=str(icon_dir),
        standard_icon_format="png",
        cache_ttl_seconds=60,
        cache_max_entries=10,
    )


@pytest.fixture
def client(local_settings: Settings) -> TestClient:
    """Test client over a local icon volume with PNG as standard format."""
    return TestClient(create_app(local_settings))

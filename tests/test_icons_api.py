"""Tests for the HTTP routes."""

import httpx
from conftest import PLAIN_SVG, PNG_BYTES, FakeIconSource
from fastapi.testclient import TestClient

from icon_server.config import Settings
from icon_server.core.sources import RemoteIconSource
from icon_server.http_client import create_cdn_client
from icon_server.main import create_app


class TestIconEndpoints:
    def test_standard_format(self, client: TestClient) -> None:
        response = client.get("/github")

        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        assert response.headers["x-cache"] == "MISS"
        assert response.content == PNG_BYTES

    def test_second_request_hits_cache(self, client: TestClient) -> None:
        client.get("/github")
        response = client.get("/github")

        assert response.headers["x-cache"] == "HIT"
        assert response.content == PNG_BYTES

    def test_colored(self, client: TestClient) -> None:
        response = client.get("/github/ff8800")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("image/svg+xml")
        assert b"fill:#ff8800" in response.content
        assert b"#fff" not in response.content

    def test_colored_without_light_variant_serves_plain_svg(self, client: TestClient) -> None:
        response = client.get("/svgonly/ff8800")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("image/svg+xml")
        assert response.content == PLAIN_SVG

    def test_missing_standard_format_falls_back_to_svg(self, client: TestClient) -> None:
        response = client.get("/svgonly")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("image/svg+xml")

    def test_not_found(self, client: TestClient) -> None:
        response = client.get("/nope")

        assert response.status_code == 404
        body = response.json()
        assert body["code"] == "not_found"
        assert body["detail"] == "Icon not found"
        assert "timestamp" in body

    def test_nul_byte_in_name_is_not_found(self, client: TestClient) -> None:
        response = client.get("/git%00hub")

        assert response.status_code == 404
        assert response.json()["code"] == "not_found"

    def test_nul_byte_in_name_is_not_found_remote(self, local_settings: Settings) -> None:
        calls: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request.url.path)
            return httpx.Response(404, request=request)

        source = RemoteIconSource(
            "https://cdn.example.test/icons",
            create_cdn_client(transport=httpx.MockTransport(handler)),
        )
        with TestClient(create_app(local_settings, source=source)) as remote_client:
            response = remote_client.get("/git%00hub/ff8800")

        assert response.status_code == 404
        assert calls == []

    def test_invalid_color(self, client: TestClient) -> None:
        response = client.get("/github/zzz")

        assert response.status_code == 400
        assert response.json()["code"] == "invalid_input"

    def test_invalid_color_query_on_plain_route(self, client: TestClient) -> None:
        response = client.get("/github", params={"color_code": "#123"})

        assert response.status_code == 400


class TestLegacyEndpoint:
    def test_color_query(self, client: TestClient) -> None:
        response = client.get("/github.svg", params={"color": "#00ff00"})

        assert response.status_code == 200
        assert b"fill:#00ff00" in response.content

    def test_color_query_without_hash(self, client: TestClient) -> None:
        response = client.get("/github.svg", params={"color": "00ff00"})

        assert b'fill="#00ff00"' in response.content

    def test_invalid_color_is_ignored(self, client: TestClient) -> None:
        response = client.get("/github.svg", params={"color": "red"})

        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        assert response.content == PNG_BYTES

    def test_no_color(self, client: TestClient) -> None:
        response = client.get("/github.svg")

        assert response.status_code == 200
        assert response.content == PNG_BYTES


class TestCustomEndpoint:
    def test_custom_asset(self, client: TestClient) -> None:
        response = client.get("/custom/logo.png")

        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        assert response.content == PNG_BYTES

    def test_custom_asset_missing(self, client: TestClient) -> None:
        response = client.get("/custom/missing.png")

        assert response.status_code == 404
        assert response.json()["detail"] == "Custom icon not found"

    def test_custom_asset_nul_byte_is_not_found(self, client: TestClient) -> None:
        response = client.get("/custom/lo%00go.png")

        assert response.status_code == 404
        assert response.json()["detail"] == "Custom icon not found"


class TestServerEndpoints:
    def test_root_describes_configuration(self, client: TestClient, local_settings: Settings) -> None:
        client.get("/github")
        data = client.get("/").json()

        assert data["server"] == "Self-hosted icon server"
        assert data["features"]["iconSource"] == "Local volume"
        assert data["features"]["standardFormat"] == "png"
        assert data["features"]["baseUrl"] == local_settings.local_base_path
        assert data["features"]["cachedItems"] == 1

    def test_health(self, client: TestClient) -> None:
        assert client.get("/health").json() == {"status": "healthy"}

    def test_security_headers(self, client: TestClient) -> None:
        response = client.get("/github/112233")

        assert response.headers["x-content-type-options"] == "nosniff"
        assert "default-src 'none'" in response.headers["content-security-policy"]
        assert "x-request-id" in response.headers


def test_injected_source_and_lifespan_close(local_settings: Settings) -> None:
    source = FakeIconSource({"svg/app.svg": PLAIN_SVG})
    app = create_app(local_settings, source=source)

    with TestClient(app) as client:
        response = client.get("/app")
        assert response.status_code == 200
        assert response.content == PLAIN_SVG

    assert source.closed is True


def test_apps_have_independent_caches(local_settings: Settings) -> None:
    source = FakeIconSource({"png/app.png": PNG_BYTES})
    first = TestClient(create_app(local_settings, source=source))
    second = TestClient(create_app(local_settings, source=source))

    first.get("/app")
    response = second.get("/app")

    assert response.headers["x-cache"] == "MISS"

"""Unit tests for ResourceFetcher (httpx MockTransport + local assets)."""

import httpx
import pytest

from app.exceptions import UpstreamFetchError
from app.services.fetcher import ResourceFetcher


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler), follow_redirects=True)


def _ok_handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/missing.png":
        return httpx.Response(404, text="not found")
    if request.url.path == "/down.png":
        raise httpx.ConnectError("connection refused", request=request)
    return httpx.Response(200, content=b"IMG" + request.url.path.encode(), headers={"content-type": "image/png"})


@pytest.fixture
async def fetcher(settings, tmp_path):
    assets = tmp_path / "public"
    (assets / "branding").mkdir(parents=True)
    (assets / "branding" / "cover.jpg").write_bytes(b"JPEGDATA")
    (tmp_path / "secret.txt").write_text("secret")
    local = settings.model_copy(update={"asset_root": str(assets)})
    async with ResourceFetcher(local, client=_client(_ok_handler)) as f:
        yield f


class TestFetch:
    async def test_remote_success(self, fetcher):
        result = await fetcher.fetch("https://cdn.example/a.png")
        assert result.ok
        assert result.content == b"IMG/a.png"
        assert result.content_type == "image/png"

    async def test_remote_non_2xx_is_a_result_not_an_exception(self, fetcher):
        result = await fetcher.fetch("https://cdn.example/missing.png")
        assert not result.ok
        assert result.status_code == 404
        assert "404" in result.error

    async def test_network_error_is_a_result(self, fetcher):
        result = await fetcher.fetch("https://cdn.example/down.png")
        assert not result.ok
        assert "ConnectError" in result.error

    async def test_proxy_url_is_unwrapped(self, fetcher):
        result = await fetcher.fetch("/image-proxy?url=https%3A%2F%2Fcdn.example%2Fb.png")
        assert result.ok
        assert result.content == b"IMG/b.png"

    async def test_local_asset(self, fetcher):
        result = await fetcher.fetch("/branding/cover.jpg")
        assert result.ok
        assert result.content == b"JPEGDATA"
        assert result.content_type == "image/jpeg"

    async def test_missing_asset(self, fetcher):
        result = await fetcher.fetch("/branding/nope.jpg")
        assert not result.ok
        assert result.status_code == 404

    async def test_path_outside_asset_root_is_refused(self, fetcher):
        result = await fetcher.fetch("/../secret.txt")
        assert not result.ok
        assert result.content == b""

    @pytest.mark.parametrize("url", ["", None, "ftp://x.example/a.png"])
    async def test_unsupported_urls(self, fetcher, url):
        assert not (await fetcher.fetch(url)).ok


class TestFetchUpstream:
    async def test_success(self, fetcher):
        result = await fetcher.fetch_upstream("https://cdn.example/a.png")
        assert result.content == b"IMG/a.png"

    async def test_upstream_status_is_carried(self, fetcher):
        with pytest.raises(UpstreamFetchError) as exc_info:
            await fetcher.fetch_upstream("https://cdn.example/missing.png")
        assert exc_info.value.status_code == 404

    async def test_network_error_maps_to_500(self, fetcher):
        with pytest.raises(UpstreamFetchError) as exc_info:
            await fetcher.fetch_upstream("https://cdn.example/down.png")
        assert exc_info.value.status_code == 500


class TestUnwrapProxy:
    def test_absolute_url_is_kept(self, settings):
        fetcher = ResourceFetcher(settings)
        assert fetcher.unwrap_proxy("https://x.example/image-proxy?url=a") == "https://x.example/image-proxy?url=a"

    def test_pdf_proxy_is_unwrapped(self, settings):
        fetcher = ResourceFetcher(settings)
        assert fetcher.unwrap_proxy("/pdf-proxy?url=https%3A%2F%2Fcdn.example%2Fs.pdf") == "https://cdn.example/s.pdf"

    def test_other_paths_are_kept(self, settings):
        fetcher = ResourceFetcher(settings)
        assert fetcher.unwrap_proxy("/specs/oslo.pdf") == "/specs/oslo.pdf"

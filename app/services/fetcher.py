"""원격/정적 리소스 조회 서비스입니다.

덱 생성 중 필요한 이미지와 PDF를 가져옵니다. 세 종류의 주소를 처리합니다.
1. 프록시 주소 (/image-proxy?url=..., /pdf-proxy?url=...) → 안쪽 URL을 직접 조회
2. 절대 URL (http/https) → httpx로 조회 (리다이렉트 허용)
3. 같은 출처 경로 (/branding/..., /specs/...) → asset_root 아래 파일을 aiofiles로 읽기

fetch()는 예외를 던지지 않고 FetchResult(성공/실패)를 반환합니다.
프록시 엔드포인트처럼 실패를 HTTP 응답으로 돌려줘야 하는 곳에서는 fetch_upstream()을 사용합니다.
"""

import logging
import mimetypes
from pathlib import Path
from typing import Optional
from urllib.parse import parse_qs, urlsplit

import aiofiles
import httpx

from app.config import Settings, get_settings
from app.exceptions import UpstreamFetchError
from app.models import FetchResult

logger = logging.getLogger(__name__)


class ResourceFetcher:
    """
    URL 하나를 (content_type, bytes)로 가져오는 서비스.

    Args:
        settings: 애플리케이션 설정 (None이면 get_settings())
        client: 재사용할 httpx.AsyncClient (테스트에서 MockTransport 주입용)
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.settings = settings or get_settings()
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            # fetch_timeout_seconds가 None이면 타임아웃 없이 기다립니다
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.settings.fetch_timeout_seconds),
                follow_redirects=True,
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "ResourceFetcher":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    # ==================== 공개 API ====================

    async def fetch(self, url: Optional[str]) -> FetchResult:
        """
        URL을 조회합니다. 어떤 실패도 예외로 전파하지 않습니다.

        Returns:
            FetchResult: ok=True이면 content/content_type 포함, 아니면 error 포함
        """
        if not url:
            return FetchResult.failure("", "빈 URL")

        target = self.unwrap_proxy(url)
        try:
            if target.lower().startswith(("http://", "https://")):
                return await self._fetch_remote(target)
            if target.startswith("/"):
                return await self._read_asset(target)
            return FetchResult.failure(url, "지원하지 않는 URL 형식")
        except Exception as e:
            logger.warning(f"[Fetcher] 조회 실패: {url} ({type(e).__name__}: {e})")
            return FetchResult.failure(url, f"{type(e).__name__}: {e}")

    async def fetch_upstream(self, url: str) -> FetchResult:
        """
        프록시 엔드포인트용 조회. 실패 시 UpstreamFetchError를 발생시킵니다.
        업스트림이 2xx가 아니면 같은 상태 코드를, 네트워크 오류면 500을 사용합니다.
        """
        try:
            result = await self._fetch_remote(url)
        except httpx.HTTPError as e:
            logger.warning(f"[Fetcher] 업스트림 연결 실패: {url} ({e})")
            raise UpstreamFetchError(
                f"proxy error: {type(e).__name__}",
                status_code=500,
                details={"url": url},
            ) from e

        if not result.ok:
            raise UpstreamFetchError(
                result.error or "Upstream error",
                status_code=result.status_code or 502,
                details={"url": url},
            )
        return result

    def unwrap_proxy(self, url: str) -> str:
        """
        /image-proxy?url=... 형태의 같은 출처 프록시 주소라면 안쪽 URL을 꺼냅니다.
        서버 안에서 자기 자신에게 HTTP 요청을 보내지 않기 위함입니다.
        """
        parts = urlsplit(url)
        if parts.scheme or parts.netloc:
            return url
        if parts.path in (self.settings.image_proxy_path, self.settings.pdf_proxy_path):
            inner = parse_qs(parts.query).get("url")
            if inner and inner[0]:
                return inner[0]
        return url

    # ==================== 내부 구현 ====================

    async def _fetch_remote(self, url: str) -> FetchResult:
        response = await self.client.get(url)
        if response.status_code < 200 or response.status_code >= 300:
            logger.warning(f"[Fetcher] 업스트림 응답 {response.status_code}: {url}")
            return FetchResult.failure(
                url,
                f"Upstream {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )
        return FetchResult.success(
            url,
            response.content,
            content_type=response.headers.get("content-type"),
            status_code=response.status_code,
        )

    async def _read_asset(self, path: str) -> FetchResult:
        """asset_root 아래의 정적 파일을 읽습니다. 루트 밖으로 나가는 경로는 거부합니다."""
        root = Path(self.settings.asset_root).resolve()
        relative = urlsplit(path).path.lstrip("/")
        file_path = (root / relative).resolve()

        if root != file_path and root not in file_path.parents:
            return FetchResult.failure(path, "asset_root 밖의 경로")
        if not file_path.is_file():
            return FetchResult.failure(path, "파일 없음", status_code=404)

        async with aiofiles.open(file_path, "rb") as f:
            content = await f.read()

        content_type, _ = mimetypes.guess_type(file_path.name)
        return FetchResult.success(path, content, content_type=content_type)


async def get_resource_fetcher():
    """요청 단위 ResourceFetcher (FastAPI 의존성). 요청이 끝나면 클라이언트를 닫습니다."""
    async with ResourceFetcher() as fetcher:
        yield fetcher

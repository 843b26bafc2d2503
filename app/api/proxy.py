"""
같은 출처(same-origin) 프록시 엔드포인트입니다.
브라우저가 외부 이미지/PDF/스프레드시트를 직접 가져올 때 생기는 CORS 문제를 피하기 위해
서버가 대신 받아서 그대로 돌려줍니다.

- GET /image-proxy?url=<encoded>
- GET /pdf-proxy?url=<encoded>
- GET /sheet-data?range=<A1 범위>
"""

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse, Response

from app.config import get_settings
from app.exceptions import DeckBuilderError, http_status_for
from app.services.fetcher import ResourceFetcher, get_resource_fetcher
from app.services.sheets_client import SheetsClient
from app.utils.validation import validate_proxy_url

logger = logging.getLogger(__name__)

router = APIRouter()

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, HEAD, OPTIONS",
    "Access-Control-Allow-Headers": "*",
}
IMAGE_CACHE_CONTROL = "public, max-age=3600"


def error_response(exc: DeckBuilderError) -> JSONResponse:
    """프록시 실패는 {error} 본문과 CORS 헤더를 가진 JSON으로 돌려줍니다."""
    return JSONResponse(
        status_code=http_status_for(exc),
        content={"error": exc.message, "error_code": exc.error_code},
        headers=CORS_HEADERS,
    )


async def proxy(
    url: str,
    fetcher: ResourceFetcher,
    default_type: str,
    cache_control: str = "",
) -> Response:
    try:
        target = validate_proxy_url(url)
        result = await fetcher.fetch_upstream(target)
    except DeckBuilderError as e:
        logger.warning(f"[Proxy] {url}: {e.message}")
        return error_response(e)

    headers = dict(CORS_HEADERS)
    if cache_control:
        headers["Cache-Control"] = cache_control
    return Response(
        content=result.content,
        media_type=result.content_type or default_type,
        headers=headers,
    )


def preflight() -> Response:
    return Response(status_code=204, headers=CORS_HEADERS)


settings = get_settings()


@router.get(settings.image_proxy_path)
async def image_proxy(
    url: str = Query(""),
    fetcher: ResourceFetcher = Depends(get_resource_fetcher),
) -> Response:
    """외부 이미지를 upstream content-type 그대로 전달합니다."""
    return await proxy(url, fetcher, "application/octet-stream", IMAGE_CACHE_CONTROL)


@router.options(settings.image_proxy_path)
async def image_proxy_preflight() -> Response:
    return preflight()


@router.get(settings.pdf_proxy_path)
async def pdf_proxy(
    url: str = Query(""),
    fetcher: ResourceFetcher = Depends(get_resource_fetcher),
) -> Response:
    """외부 PDF 스펙시트를 전달합니다."""
    return await proxy(url, fetcher, "application/pdf")


@router.options(settings.pdf_proxy_path)
async def pdf_proxy_preflight() -> Response:
    return preflight()


def get_sheets_client() -> SheetsClient:
    return SheetsClient()


@router.get("/sheet-data")
async def sheet_data(
    range: str = Query(""),
    client: SheetsClient = Depends(get_sheets_client),
) -> JSONResponse:
    """
    스프레드시트 원본 값(RawTable)을 반환합니다.
    실패하면 SheetFetchError가 전역 예외 핸들러에서 502로 변환됩니다.
    """
    normalized, values = await client.fetch_values(range)
    return JSONResponse(
        content={"range": normalized, "values": values},
        headers={**CORS_HEADERS, "Cache-Control": "no-store"},
    )

"""
제품 카탈로그 API 통합 테스트.
Sheets API는 httpx.MockTransport로, 캐시는 테스트마다 새 인스턴스로 대체합니다.
"""

import httpx
import pytest
from httpx import AsyncClient, ASGITransport

from app.main import app
from app.services.cache import CatalogCache
from app.services.catalog import CatalogService, get_catalog_service
from app.services.sheets_client import SheetsClient


@pytest.fixture
def sheet_calls():
    return []


@pytest.fixture
async def client(settings, sample_table, sheet_calls):
    def sheets_api(request: httpx.Request) -> httpx.Response:
        sheet_calls.append(str(request.url))
        return httpx.Response(200, json={"values": sample_table})

    service = CatalogService(
        settings,
        sheets_client=SheetsClient(
            settings, client=httpx.AsyncClient(transport=httpx.MockTransport(sheets_api))
        ),
        cache=CatalogCache(ttl_seconds=300),
    )
    app.dependency_overrides[get_catalog_service] = lambda: service
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


async def test_lists_products_in_sheet_order(client: AsyncClient):
    response = await client.get("/api/v1/products")

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 3
    assert data["categories"] == ["Vanities", "Tapware", "Other"]
    assert [p["code"] for p in data["products"]] == ["VAN-01", "TAP-02", ""]


async def test_products_use_camel_case_keys(client: AsyncClient):
    response = await client.get("/api/v1/products")

    vanity = response.json()["products"][0]
    assert vanity["imageUrl"] == "https://cdn.example/vanity.png"
    assert vanity["specsBullets"] == ["Soft close drawers", "Oak veneer"]
    assert vanity["pdfUrl"] == "/specs/oslo.pdf"


async def test_sort_by_name(client: AsyncClient):
    response = await client.get("/api/v1/products", params={"sort": "name"})

    names = [p["name"] for p in response.json()["products"]]
    assert names == ["", "Flow Mixer", "Oslo Vanity"]


async def test_unknown_sort_is_rejected(client: AsyncClient):
    response = await client.get("/api/v1/products", params={"sort": "price"})

    assert response.status_code == 422


async def test_filters_keep_full_category_list(client: AsyncClient):
    response = await client.get("/api/v1/products", params={"category": "tapware"})

    data = response.json()
    assert [p["code"] for p in data["products"]] == ["TAP-02"]
    assert data["categories"] == ["Vanities", "Tapware", "Other"]


async def test_search_matches_description(client: AsyncClient):
    response = await client.get("/api/v1/products", params={"q": "OAK"})

    assert [p["code"] for p in response.json()["products"]] == ["VAN-01"]


async def test_catalog_is_cached_until_refresh(client: AsyncClient, sheet_calls):
    await client.get("/api/v1/products")
    await client.get("/api/v1/products/categories")
    assert len(sheet_calls) == 1

    await client.get("/api/v1/products", params={"refresh": "true"})
    assert len(sheet_calls) == 2


async def test_categories_endpoint(client: AsyncClient):
    response = await client.get("/api/v1/products/categories")

    assert response.status_code == 200
    assert response.json() == {"categories": ["Vanities", "Tapware", "Other"]}


async def test_sheet_failure_is_502(settings):
    """시트 조회 실패는 전역 예외 핸들러에서 502로 변환되어야 한다."""

    def failing(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="boom")

    service = CatalogService(
        settings,
        sheets_client=SheetsClient(
            settings, client=httpx.AsyncClient(transport=httpx.MockTransport(failing))
        ),
        cache=CatalogCache(),
    )
    app.dependency_overrides[get_catalog_service] = lambda: service
    try:
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            response = await ac.get("/api/v1/products")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 502
    assert response.json()["error_code"] == "ERR_SHEET_001"

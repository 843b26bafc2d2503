"""
제품 카탈로그 API입니다.
스프레드시트에서 읽어 정규화한 제품 목록을 정렬/필터링해서 보여줍니다.
"""

from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query

from app.services.catalog import (
    CatalogService,
    filter_products,
    get_catalog_service,
    list_categories,
    sort_products,
)

router = APIRouter()


@router.get("")
async def list_products(
    range: Optional[str] = Query(None, description="A1 범위 (예: Products!A:ZZZ)"),
    sort: Literal["sheet", "name", "code", "category"] = "sheet",
    category: Optional[str] = None,
    q: Optional[str] = Query(None, description="이름/코드/설명 검색어"),
    refresh: bool = False,
    catalog: CatalogService = Depends(get_catalog_service),
) -> dict:
    """
    제품 목록 조회 API.

    - sort=sheet: 스프레드시트 순서 그대로
    - categories는 필터 적용 전 전체 목록 기준입니다
    """
    products = await catalog.load_products(range, refresh=refresh)
    selected = sort_products(filter_products(products, query=q, category=category), sort)
    return {
        "total": len(selected),
        "categories": list_categories(products),
        "products": [p.model_dump(by_alias=True) for p in selected],
    }


@router.get("/categories")
async def list_product_categories(
    range: Optional[str] = None,
    catalog: CatalogService = Depends(get_catalog_service),
) -> dict:
    """카테고리 목록 (처음 등장한 순서)."""
    products = await catalog.load_products(range)
    return {"categories": list_categories(products)}

"""
제품 카탈로그 서비스입니다.
스프레드시트 조회(SheetsClient)와 행 정규화(RowNormalizer)를 묶고,
결과를 메모리 캐시에 잠시 보관합니다.

조회한 제품 목록은 이후 변경하지 않는(immutable) 값으로 취급합니다.
"""

import logging
from pathlib import Path
from typing import Optional

from app.config import Settings, get_settings
from app.layers.layer1_catalog.normalizer import RowNormalizer
from app.models import ProductRecord
from .cache import CatalogCache, get_catalog_cache
from .sheets_client import SheetsClient, normalize_range

logger = logging.getLogger(__name__)

SORT_KEYS = ("sheet", "name", "code", "category")
DEFAULT_CATEGORY = "Other"


def category_of(product: ProductRecord) -> str:
    """비어있는 카테고리는 'Other' 버킷으로 묶습니다."""
    return (product.category or "").strip() or DEFAULT_CATEGORY


def list_categories(products: list[ProductRecord]) -> list[str]:
    """처음 등장한 순서대로 카테고리 목록을 반환합니다."""
    seen: list[str] = []
    for product in products:
        category = category_of(product)
        if category not in seen:
            seen.append(category)
    return seen


def sort_products(products: list[ProductRecord], sort: str = "sheet") -> list[ProductRecord]:
    """
    제품 정렬. 'sheet'는 스프레드시트 순서(입력 순서) 그대로입니다.
    정렬은 안정 정렬이므로 같은 키끼리는 시트 순서를 유지합니다.
    """
    if sort == "name":
        return sorted(products, key=lambda p: (p.name or p.code).casefold())
    if sort == "code":
        return sorted(products, key=lambda p: (p.code or p.name).casefold())
    if sort == "category":
        return sorted(products, key=lambda p: category_of(p).casefold())
    return list(products)


def filter_products(
    products: list[ProductRecord],
    query: Optional[str] = None,
    category: Optional[str] = None,
) -> list[ProductRecord]:
    """검색어(name/code/description 부분 일치)와 카테고리로 필터링합니다."""
    result = list(products)
    if category:
        wanted = category.strip().casefold()
        result = [p for p in result if category_of(p).casefold() == wanted]
    if query and query.strip():
        needle = query.strip().casefold()
        result = [
            p for p in result
            if needle in p.name.casefold()
            or needle in p.code.casefold()
            or needle in p.description.casefold()
        ]
    return result


class CatalogService:
    """스프레드시트 → 정규화된 제품 목록."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        sheets_client: Optional[SheetsClient] = None,
        cache: Optional[CatalogCache] = None,
    ):
        self.settings = settings or get_settings()
        self.sheets_client = sheets_client or SheetsClient(self.settings)
        self.cache = cache if cache is not None else get_catalog_cache()
        self.normalizer = RowNormalizer(
            image_proxy_path=self.settings.image_proxy_path,
            pdf_proxy_path=self.settings.pdf_proxy_path,
            specs_dir=str(Path(self.settings.asset_root) / "specs"),
        )

    async def load_products(
        self,
        range_: Optional[str] = None,
        refresh: bool = False,
    ) -> list[ProductRecord]:
        """
        카탈로그를 불러옵니다.

        Raises:
            SheetFetchError: 스프레드시트 조회 실패 (사용자에게 로딩 오류로 표시)
        """
        key = normalize_range(range_ or self.settings.default_range)
        if not refresh:
            cached = self.cache.get(key)
            if cached is not None:
                return cached

        _, values = await self.sheets_client.fetch_values(key)
        products = self.normalizer.normalize(values)
        self.cache.set(key, products)
        logger.info(f"[Catalog] {key}: 제품 {len(products)}개")
        return products


# 싱글톤 인스턴스
_catalog_service: Optional[CatalogService] = None


def get_catalog_service() -> CatalogService:
    """CatalogService 싱글톤 인스턴스 반환."""
    global _catalog_service
    if _catalog_service is None:
        _catalog_service = CatalogService()
    return _catalog_service

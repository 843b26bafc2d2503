"""
헬스 체크(Health Check) 엔드포인트입니다.
서버가 살아서 정상적으로 응답하는지 확인하는 용도입니다.
"""

from fastapi import APIRouter

from app.config import get_settings
from app.services.cache import get_catalog_cache

router = APIRouter()


@router.get("")
async def health_check():
    """
    기본 상태 확인 함수.
    서버가 켜져 있으면 {"status": "healthy"}를 반환합니다.
    """
    return {"status": "healthy"}


@router.get("/detail")
async def health_check_detail():
    """
    상세 상태 확인 함수.
    스프레드시트 설정 여부와 카탈로그 캐시 상태도 같이 보여줍니다.
    """
    settings = get_settings()
    return {
        "status": "healthy",
        "config": {
            "sheet_configured": bool(settings.gsheet_id and settings.gsheet_api_key),  # 시트 ID/키 설정 여부
            "default_range": settings.default_range,
            "catalog_ttl_seconds": settings.catalog_ttl_seconds,
            "brand_name": settings.brand_name,
        },
        "cache": get_catalog_cache().get_stats_summary(),
    }

"""
API 라우터 설정 파일입니다.
각 기능별로 나누어진 API 주소들을 하나로 모으는 역할을 합니다.
"""

from fastapi import APIRouter

from app.api.endpoints import health, products, deck, session

# 메인 API 라우터 생성
api_router = APIRouter()

# 헬스 체크 엔드포인트: 서버 상태 확인용 (/health)
api_router.include_router(
    health.router,
    prefix="/health",
    tags=["health"]
)

# 제품 카탈로그 엔드포인트: 정규화된 제품 목록 (/products)
api_router.include_router(
    products.router,
    prefix="/products",
    tags=["products"]
)

# 덱 내보내기 엔드포인트: pptx 생성 (/deck)
api_router.include_router(
    deck.router,
    prefix="/deck",
    tags=["deck"]
)

# 세션 엔드포인트: 담당자/프로젝트 기본값 (/session)
api_router.include_router(
    session.router,
    prefix="/session",
    tags=["session"]
)

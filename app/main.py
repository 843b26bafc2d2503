"""
제안서 덱 생성 시스템의 메인 진입점 파일입니다.
웹 서버 애플리케이션을 생성하고 설정하는 역할을 담당합니다.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.config import get_settings
from app.api.proxy import router as proxy_router
from app.api.router import api_router
from app.exceptions import DeckBuilderError, http_status_for

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    애플리케이션의 생명주기(시작과 종료)를 관리하는 함수입니다.

    서버가 시작될 때 설정을 불러오고 시작 로그를 출력합니다.
    """
    settings = get_settings()
    logger.info(f"제안서 덱 생성기가 다음 주소에서 시작됩니다: {settings.host}:{settings.port}")
    if not settings.gsheet_id or not settings.gsheet_api_key:
        logger.warning("GSHEET_ID / GSHEET_API_KEY가 설정되지 않았습니다. 카탈로그 조회가 실패합니다")

    yield

    logger.info("제안서 덱 생성기가 종료됩니다")


def create_app() -> FastAPI:
    """
    FastAPI 웹 애플리케이션을 생성하고 설정하는 함수입니다.

    주요 기능:
    1. CORS 설정 (프론트엔드와의 통신 허용 설정)
    2. 프록시 라우터 (/image-proxy, /pdf-proxy, /sheet-data) 연결
    3. API 라우터 (/api/v1) 연결
    4. 정적 자산 (branding/, specs/) 제공
    """
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="제안서 덱 생성 시스템",
        description="스프레드시트 제품 카탈로그를 정규화하고 브랜드 제안서 덱(pptx)으로 만듭니다",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",  # 개발자용 문서 주소
        redoc_url="/redoc",
    )

    # CORS 미들웨어 설정: 프론트엔드 웹페이지가 이 서버에 접속할 수 있도록 허용하는 설정입니다.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition", "X-Slide-Count"],
    )

    # 글로벌 예외 핸들러: 커스텀 예외를 구조화된 JSON 응답으로 변환
    @app.exception_handler(DeckBuilderError)
    async def deck_error_handler(request: Request, exc: DeckBuilderError):
        return JSONResponse(
            status_code=http_status_for(exc),
            content={
                "error": exc.message,
                "error_code": exc.error_code,
                "message": exc.message,
                "details": exc.details,
                "timestamp": datetime.now().isoformat(),
            },
        )

    @app.exception_handler(Exception)
    async def general_error_handler(request: Request, exc: Exception):
        logger.error(f"처리되지 않은 예외: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "error_code": "ERR_INTERNAL",
                "message": "내부 서버 오류가 발생했습니다",
                "details": None,
                "timestamp": datetime.now().isoformat(),
            },
        )

    # 같은 출처 프록시는 루트에, 나머지 API는 /api/v1 아래에 연결합니다.
    app.include_router(proxy_router, tags=["proxy"])
    app.include_router(api_router, prefix="/api/v1")

    @app.get("/")
    async def root():
        """
        루트 엔드포인트: 서버가 정상적으로 동작하는지 확인하는 기본 주소입니다.
        """
        return {
            "name": "제안서 덱 생성 시스템",
            "version": "1.0.0",
            "docs": "/docs",
            "api": "/api/v1",
        }

    # 정적 자산은 모든 라우트 뒤에 마운트합니다 (/branding/..., /specs/...)
    asset_root = Path(settings.asset_root)
    if asset_root.is_dir():
        app.mount("/", StaticFiles(directory=asset_root), name="assets")
    else:
        logger.info(f"정적 자산 디렉토리가 없습니다: {asset_root}")

    return app


# 애플리케이션 인스턴스 생성
app = create_app()


# 이 파일을 직접 실행했을 때 서버를 구동시키는 코드입니다.
if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,  # 코드가 변경되면 자동으로 재시작 (개발 모드)
    )

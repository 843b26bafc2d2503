from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """
    애플리케이션의 설정을 관리하는 클래스입니다.
    환경 변수(.env 파일)에서 설정값을 읽어옵니다.
    """

    # 서버 설정: 서버가 실행될 주소와 포트 번호
    host: str = "0.0.0.0"  # 모든 외부 접속 허용
    port: int = 8000
    allowed_origins: list[str] = ["*"]
    log_level: str = "INFO"

    # 스프레드시트 설정: Google Sheets API로 제품 카탈로그를 읽어옵니다.
    gsheet_id: str = ""
    gsheet_api_key: str = ""
    sheets_api_base: str = "https://sheets.googleapis.com/v4/spreadsheets"
    default_range: str = "Products!A:ZZZ"
    catalog_ttl_seconds: int = 300  # 0이면 캐시 사용 안 함

    # 프록시 설정: 외부 이미지/PDF를 같은 출처(same-origin)로 다시 제공하는 주소
    image_proxy_path: str = "/image-proxy"
    pdf_proxy_path: str = "/pdf-proxy"
    public_base_url: str = ""  # 덱 안의 하이퍼링크를 절대 주소로 만들 때 사용

    # 정적 자산: branding/ 과 specs/ 폴더가 들어있는 디렉토리
    asset_root: str = "public"
    cover_images: list[str] = ["/branding/cover.jpg", "/branding/cover2.jpg"]
    back_images: list[str] = ["/branding/warranty.jpg", "/branding/service.jpg"]

    # 덱 레이아웃 설정
    brand_name: str = "Pacific Bathroom"
    max_bullets: int = 6
    max_description_chars: int = 600
    pdf_max_pages: int = 2
    pdf_render_scale: float = 2.0
    fetch_timeout_seconds: Optional[float] = None  # None이면 타임아웃 없음

    # 기본 담당자 정보 (연락처 디렉토리에서 선택하지 않았을 때)
    default_contact_id: str = ""
    default_company: str = "Pacific Bathroom"
    default_contact_name: str = "Your Name"
    default_email: str = "you@example.com"
    default_phone: str = ""
    default_title: str = "Sales Consultant"

    class Config:
        # 설정을 읽어올 파일 지정
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    """
    설정을 가져오는 함수입니다.
    @lru_cache를 사용하여 한 번 읽은 설정은 메모리에 저장해두고 재사용합니다.
    """
    return Settings()

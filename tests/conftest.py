"""공유 pytest fixture 모음."""

import io

import fitz
import pytest
from PIL import Image

from app.config import Settings
from app.models import DeckForm, FetchResult, ProductRecord


def make_png(width: int = 40, height: int = 30, color=(200, 30, 30)) -> bytes:
    """메모리에서 PNG 바이트를 만듭니다."""
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format="PNG")
    return buffer.getvalue()


def make_webp(width: int = 40, height: int = 30) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), (10, 120, 200)).save(buffer, format="WEBP")
    return buffer.getvalue()


def make_pdf(pages: int = 3) -> bytes:
    """페이지마다 텍스트 한 줄이 있는 PDF."""
    doc = fitz.open()
    for index in range(pages):
        page = doc.new_page(width=595, height=842)
        page.insert_text((72, 72), f"Spec sheet page {index + 1}")
    content = doc.tobytes()
    doc.close()
    return content


class FakeFetcher:
    """
    URL → FetchResult 매핑으로 동작하는 ResourceFetcher 대역.
    매핑에 없는 URL은 404 실패로 응답합니다.
    """

    def __init__(self, resources: dict[str, bytes] = None, content_type: str = "image/png"):
        self.resources = dict(resources or {})
        self.content_type = content_type
        self.requested: list[str] = []

    async def fetch(self, url):
        self.requested.append(url)
        if url in self.resources:
            return FetchResult.success(url, self.resources[url], content_type=self.content_type)
        return FetchResult.failure(url or "", "Upstream 404 Not Found", status_code=404)


@pytest.fixture
def settings():
    """테스트용 Settings (환경 변수/.env 값에 영향받지 않는 명시값)."""
    return Settings(
        gsheet_id="sheet-123",
        gsheet_api_key="key-abc",
        cover_images=["/branding/cover.jpg", "/branding/cover2.jpg"],
        back_images=["/branding/warranty.jpg", "/branding/service.jpg"],
        brand_name="Pacific Bathroom",
        public_base_url="",
        catalog_ttl_seconds=300,
        default_contact_id="",
        default_contact_name="Your Name",
        default_email="you@example.com",
    )


@pytest.fixture
def png_bytes():
    return make_png()


@pytest.fixture
def pdf_bytes():
    return make_pdf()


@pytest.fixture
def sample_table():
    """제목 행이 헤더 위에 있는 스프레드시트 값."""
    return [
        ["Pacific Bathroom product list"],
        ["SKU", "Product", "Desc", "Category", "Image", "Bullets", "Spec 1", "PdfKey"],
        [
            "VAN-01", "Oslo Vanity", "Wall hung vanity in oak", "Vanities",
            "https://cdn.example/vanity.png", "Soft close drawers; Oak veneer", "Soft close drawers", "oslo",
        ],
        ["", "", "", "", "", "", "", ""],
        ["TAP-02", "Flow Mixer", "Basin mixer", "Tapware"],
        ["", "", "", "", "https://cdn.example/only-image.jpg"],
    ]


@pytest.fixture
def sample_products():
    """카테고리 A, A, B 순서의 선택 제품."""
    return [
        ProductRecord(code="A-1", name="Alpha", category="A", image_url="https://cdn.example/a1.png",
                      image_proxied="/image-proxy?url=https%3A%2F%2Fcdn.example%2Fa1.png"),
        ProductRecord(code="B-1", name="Bravo", category="B"),
        ProductRecord(code="A-2", name="Alpha Two", category="A", description="Durable. Lightweight."),
    ]


@pytest.fixture
def deck_form():
    return DeckForm(
        project_name="Villa 7",
        client_name="Harbour Homes",
        contact_name="Amy Keys",
        email="amy@pacificbathroom.com.au",
        phone="07 4755 2266",
        date="2026-10-19",
    )


@pytest.fixture
def image_factory():
    """크기/형식을 지정해서 이미지 바이트를 만드는 함수."""

    def factory(width: int = 40, height: int = 30, fmt: str = "PNG") -> bytes:
        if fmt.upper() == "WEBP":
            return make_webp(width, height)
        return make_png(width, height)

    return factory


@pytest.fixture
def pdf_factory():
    return make_pdf


@pytest.fixture
def fake_fetcher_factory():
    return FakeFetcher

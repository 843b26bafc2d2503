"""Layer 3: 이미지/PDF 주소 해석기.

스프레드시트의 이미지 참조는 형식이 다양합니다.
- 직접 URL (https://cdn.example/img.png)
- Google Drive 공유 링크 (drive.google.com/file/d/<ID>/view)
- 스프레드시트 수식 (=IMAGE("https://..."))
- 같은 출처 경로 (/branding/cover.jpg)

모두 직접 가져올 수 있는 URL(direct)로 정규화한 뒤,
절대 URL이면 같은 출처 프록시 주소(proxied)로 감쌉니다.
이미지를 찾지 못해도 에러가 아니며, 결과 필드가 모두 None이 됩니다.
"""

import logging
import re
from pathlib import Path
from typing import Optional, Union
from urllib.parse import quote

from app.models import ImageReference
from app.layers.layer1_catalog.header_map import SheetRow

logger = logging.getLogger(__name__)


# 명시적인 이미지 컬럼 이름 (우선순위 순)
IMAGE_COLUMN_NAMES = (
    "image",
    "image url",
    "imageurl",
    "picture",
    "photo",
    "thumbnail",
    "main image",
    "primary image",
)

IMAGE_FORMULA = re.compile(r'^=*\s*image\s*\(\s*"([^"]+)"\s*(?:,.*)?\)\s*$', re.IGNORECASE)
IMAGE_EXTENSION = re.compile(r"\.(?:png|jpe?g|webp|gif|svg)(?:$|[?#])", re.IGNORECASE)
DRIVE_SHARE_LINK = re.compile(r"drive\.google\.com/file/d/([^/?#]+)")
DRIVE_OPEN_LINK = re.compile(r"drive\.google\.com/open\?(?:.*&)?id=([^&#]+)")
DRIVE_FILE_PATTERN = re.compile(
    r"drive\.google\.com/(?:file/d/|uc\?|open\?)|googleusercontent\.com", re.IGNORECASE
)
CDN_KEYWORDS = (
    "cdn",
    "cloudinary",
    "imgix",
    "shopify",
    "wixstatic",
    "squarespace",
    "googleusercontent",
    "/images/",
    "/branding/",
)

DRIVE_DOWNLOAD_URL = "https://drive.google.com/uc?export=download&id={file_id}"


def extract_formula_url(value: Optional[str]) -> Optional[str]:
    """=IMAGE("...") 수식에서 URL을 꺼냅니다. 수식이 아니면 None."""
    if not value:
        return None
    match = IMAGE_FORMULA.match(value.strip())
    return match.group(1).strip() if match else None


def looks_like_url(value: Optional[str]) -> bool:
    """http(s):// 또는 / 로 시작하면 URL로 간주합니다."""
    text = (value or "").strip()
    return bool(re.match(r"^https?://", text, re.IGNORECASE)) or text.startswith("/")


def looks_like_image(value: str) -> bool:
    """확장자, 클라우드 드라이브 패턴, CDN 키워드 중 하나라도 맞으면 이미지로 봅니다."""
    lowered = value.lower()
    if IMAGE_EXTENSION.search(lowered):
        return True
    if DRIVE_FILE_PATTERN.search(lowered):
        return True
    return any(keyword in lowered for keyword in CDN_KEYWORDS)


def to_direct_url(url: Optional[str]) -> Optional[str]:
    """
    Google Drive 공유 링크를 직접 다운로드 형식으로 바꿉니다.
    그 외 URL은 그대로 반환합니다.
    """
    if not url:
        return url
    match = DRIVE_SHARE_LINK.search(url) or DRIVE_OPEN_LINK.search(url)
    if match:
        return DRIVE_DOWNLOAD_URL.format(file_id=match.group(1))
    return url


def is_absolute(url: Optional[str]) -> bool:
    return bool(url) and bool(re.match(r"^https?://", url, re.IGNORECASE))


def proxy_url(direct: Optional[str], endpoint: str) -> Optional[str]:
    """절대 URL은 프록시 주소로 감싸고, 같은 출처 경로는 그대로 둡니다."""
    if not direct:
        return None
    if is_absolute(direct):
        return f"{endpoint}?url={quote(direct, safe='')}"
    return direct


def coerce_reference(value: Optional[str]) -> Optional[str]:
    """셀 값을 URL 후보로 정리합니다 (수식 해제, 프로토콜 상대 주소 보정)."""
    text = (value or "").strip()
    if not text:
        return None
    text = extract_formula_url(text) or text
    if text.startswith("//"):
        text = "https:" + text
    return text if looks_like_url(text) else None


class ImageResolver:
    """
    한 행에서 이미지 참조를 찾아 raw / direct / proxied 세 형태로 반환합니다.

    Args:
        proxy_endpoint: 이미지 프록시 경로 (기본값: /image-proxy)
    """

    def __init__(self, proxy_endpoint: str = "/image-proxy"):
        self.proxy_endpoint = proxy_endpoint

    def resolve(self, row: SheetRow) -> ImageReference:
        raw = self._find_raw(row)
        if not raw:
            return ImageReference()

        direct = to_direct_url(coerce_reference(raw))
        if not direct:
            return ImageReference()

        return ImageReference(
            raw=raw,
            direct=direct,
            proxied=proxy_url(direct, self.proxy_endpoint),
        )

    def _find_raw(self, row: SheetRow) -> Optional[str]:
        """명시적 이미지 컬럼 우선, 없으면 전체 컬럼에서 이미지처럼 보이는 URL을 찾습니다."""
        explicit = [row.value("image_url")]
        for name in IMAGE_COLUMN_NAMES:
            _, value = row.by_header(name)
            explicit.append(value)

        for value in explicit:
            if value and coerce_reference(value):
                return value

        for _, _, value in row.items():
            candidate = coerce_reference(value)
            if candidate and looks_like_image(candidate):
                return value
        return None


class PdfResolver:
    """
    스펙시트 PDF 주소를 해석합니다.

    우선순위:
    1. PdfFile 컬럼 → /specs/<파일명>
    2. PdfKey 컬럼  → /specs/<키>.pdf
    3. 제품 코드    → /specs/<코드>.pdf (specs_dir에 파일이 실제로 있을 때만)
    4. PdfURL 계열 컬럼 → 외부 URL (Drive 공유 링크는 직접 다운로드 형식으로 변환)

    Args:
        specs_dir: /specs 경로에 대응하는 로컬 디렉토리. None이면 코드 기반 조회를 하지 않습니다.
    """

    def __init__(
        self,
        proxy_endpoint: str = "/pdf-proxy",
        specs_path: str = "/specs",
        specs_dir: Optional[Union[str, Path]] = None,
    ):
        self.proxy_endpoint = proxy_endpoint
        self.specs_path = specs_path.rstrip("/")
        self.specs_dir = Path(specs_dir) if specs_dir else None

    def resolve(self, row: SheetRow) -> tuple[Optional[str], Optional[str]]:
        """(pdf_url, pdf_proxied) 튜플을 반환합니다."""
        pdf_file = row.value("pdf_file")
        if pdf_file:
            url = f"{self.specs_path}/{pdf_file.lstrip('/')}"
            return url, url

        pdf_key = row.value("pdf_key")
        if pdf_key:
            url = f"{self.specs_path}/{pdf_key}.pdf"
            return url, url

        code_url = self._from_code(row.value("code"))
        if code_url:
            return code_url, code_url

        direct = to_direct_url(coerce_reference(row.value("pdf_url")))
        if not direct:
            return None, None
        return direct, proxy_url(direct, self.proxy_endpoint)

    def _from_code(self, code: str) -> Optional[str]:
        """코드 이름의 PDF가 specs_dir에 있으면 /specs/<코드>.pdf 를 반환합니다."""
        if not code or self.specs_dir is None or Path(code).name != code:
            return None
        if not (self.specs_dir / f"{code}.pdf").is_file():
            return None
        return f"{self.specs_path}/{code}.pdf"


_default_resolver = ImageResolver()


def resolve_image(row: SheetRow) -> ImageReference:
    """모듈 수준 단축 함수 (기본 프록시 경로 사용)."""
    return _default_resolver.resolve(row)

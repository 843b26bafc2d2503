"""입력 유효성 검증 유틸리티.

프록시 URL 검증, 다운로드 파일명 생성, 슬라이드 텍스트 길이 제한을 담당합니다.
"""

import re
from typing import Optional
from urllib.parse import urlsplit

from app.exceptions import InputValidationError


ALLOWED_PROXY_SCHEMES = {"http", "https"}

# 파일명에서 ASCII 영문/숫자/_ 와 - 이외의 문자열은 _ 하나로 합칩니다.
# Content-Disposition 헤더는 latin-1로 인코딩되므로 비ASCII 문자는 남기지 않습니다.
FILENAME_UNSAFE = re.compile(r"[^\w-]+", re.ASCII)

DEFAULT_FILENAME_STEM = "Selection"
DECK_EXTENSION = ".pptx"
ELLIPSIS = "…"


def validate_proxy_url(url: Optional[str]) -> str:
    """
    프록시 대상 URL 검증.

    Args:
        url: ?url= 쿼리 파라미터 값

    Returns:
        앞뒤 공백을 제거한 URL

    Raises:
        InputValidationError: 비어있거나 http(s)가 아닌 URL
    """
    value = (url or "").strip()
    if not value:
        raise InputValidationError("Missing url")

    parts = urlsplit(value)
    if parts.scheme.lower() not in ALLOWED_PROXY_SCHEMES or not parts.netloc:
        raise InputValidationError(
            "Invalid url",
            details={"url": value},
        )
    return value


def build_download_filename(project_name: Optional[str]) -> str:
    """
    프로젝트 이름으로 덱 파일명을 만듭니다.

    예: "Villa 7 / Stage 2" → "Villa_7_Stage_2.pptx"
    """
    stem = (project_name or "").strip() or DEFAULT_FILENAME_STEM
    stem = FILENAME_UNSAFE.sub("_", stem)
    return f"{stem}{DECK_EXTENSION}"


def clamp_text(text: Optional[str], max_chars: int) -> str:
    """
    텍스트를 최대 길이 이하로 자릅니다.
    단어 중간에서 자르지 않고 마지막 공백 위치에서 자른 뒤 말줄임표를 붙입니다.
    """
    value = " ".join((text or "").split())
    if max_chars <= 0 or len(value) <= max_chars:
        return value

    # 말줄임표 한 글자를 포함해 max_chars 이하가 되도록 자릅니다
    cut = value[:max_chars - 1]
    space = cut.rfind(" ")
    if space > 0:
        cut = cut[:space]
    return cut.rstrip(" ,;:.-") + ELLIPSIS

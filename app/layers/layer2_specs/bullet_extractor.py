"""Layer 2: 스펙 불릿(Spec-Bullet) 추출기.

스프레드시트의 특징/사양 텍스트는 여러 컬럼에 흩어져 있고 작성 형식도 제각각입니다.
네 가지 전략을 정해진 우선순위로 실행한 뒤, 결과를 이어붙이고
대소문자 무시 중복 제거(먼저 나온 항목 우선)를 수행합니다.

전략 우선순위:
1. 번호 컬럼: "Spec 1", "Feature A" 처럼 접두어 + 서수로 된 컬럼 (셀 값 그대로 1개 후보)
2. 단일 컬럼: "Bullets", "Specifications", "Features" ... 순서로 첫 번째 비어있지 않은 값을 분할
3. 유사 헤더: spec/feature/bullet... 을 포함하고 제외 패턴에 걸리지 않는 컬럼 값을 분할
4. 전체 수집(최후 수단): 1~3이 아무것도 못 찾았을 때 제외 패턴 이외의 모든 컬럼 값을 분할,
   그래도 없으면 description 자체를 분할

추출 결과에는 개수 제한이 없습니다. 개수 제한은 슬라이드 레이아웃(Layer 4)에서 적용합니다.
"""

import logging
import re
from typing import Iterable, Optional

from app.layers.layer1_catalog.header_map import SheetRow

logger = logging.getLogger(__name__)


NUMBERED_PREFIXES = (
    "spec", "feature", "bullet", "point", "highlight", "detail", "benefit", "item",
)

# 끝에 붙은 서수: 구분자 뒤의 숫자/한 글자, 또는 바로 붙은 숫자 ("Spec 1", "Feature A", "Spec1")
TRAILING_ORDINAL = re.compile(r"(?:[\s#_.:-]+(\d+|[a-z])|(\d+))$")

SINGLE_COLUMN_PRIORITY = (
    "bullets",
    "bullet points",
    "specifications",
    "specs",
    "features",
    "key features",
    "highlights",
    "selling points",
    "benefits",
    "key points",
    "notes",
)

FUZZY_HEADER = re.compile(r"spec|feature|bullet|point|highlight|detail|benefit")
EXCLUDED_HEADER = re.compile(r"image|url|link|page|pdf|code|sku|name|title|category|desc")
CATCH_ALL_EXCLUDED = re.compile(
    r"image|url|link|page|pdf|code|sku|name|title|category|desc|select|photo|picture|thumbnail"
)

# 절대 URL, www. 주소, 공백으로 구분된 같은 출처 경로 (/specs/oslo.pdf)
URL_PATTERN = re.compile(
    r"(?:https?://|www\.)\S+"
    r"|(?<!\S)/[\w.%~-]+(?:/[\w.%~-]*)*(?=\s|$)",
    re.IGNORECASE,
)

# 분할 기준: 줄바꿈, 세미콜론, 불릿 기호, 쉼표, 파이프, 슬래시, em/en 대시,
# 양쪽이 공백인 하이픈, 줄 시작 하이픈.
# 숫자 사이의 쉼표/슬래시("1,200", "1/2")는 분할하지 않습니다.
SPLIT_PATTERN = re.compile(
    r"\r?\n"
    r"|;"
    r"|[•▪◦·]"
    r"|(?<!\d),|,(?!\d)"
    r"|\|"
    r"|(?<!\d)/|/(?!\d)"
    r"|[—–]"
    r"|\s-\s"
    r"|^\s*-(?=\s)",
    re.MULTILINE,
)

LEADING_MARKERS = "•▪◦·-–—*> \t"


def clean_candidate(text: Optional[str]) -> str:
    """앞쪽 불릿 기호/대시를 제거하고 공백을 정리합니다."""
    cleaned = str(text or "").strip().lstrip(LEADING_MARKERS).strip()
    cleaned = re.sub(r"\s+", " ", cleaned)
    # 구두점만 남은 조각은 버림
    if not re.search(r"\w", cleaned):
        return ""
    return cleaned


def is_url(value: str) -> bool:
    value = value.strip()
    return bool(URL_PATTERN.fullmatch(value)) or value.startswith("/") and " " not in value


def split_bullets(text: Optional[str]) -> list[str]:
    """
    공용 분할 규칙으로 텍스트를 불릿 후보로 나눕니다.
    URL과 같은 출처 경로는 분할 전에 제거하므로 결과에 포함되지 않습니다.
    """
    if not text or not str(text).strip() or is_url(str(text)):
        return []
    without_urls = URL_PATTERN.sub("\n", str(text))
    pieces = SPLIT_PATTERN.split(without_urls)
    return [c for c in (clean_candidate(p) for p in pieces if p and not is_url(p)) if c]


def dedupe(candidates: Iterable[str]) -> list[str]:
    """대소문자 무시 완전 일치 기준 중복 제거. 먼저 나온 항목이 남습니다."""
    seen: set[str] = set()
    result = []
    for candidate in candidates:
        text = (candidate or "").strip()
        if not text:
            continue
        key = text.casefold()
        if key in seen:
            continue
        seen.add(key)
        result.append(text)
    return result


def is_numbered_header(header: str) -> bool:
    """'spec 1', 'feature a' 처럼 알려진 접두어 + 끝 서수 형태인지 확인합니다."""
    return header.startswith(NUMBERED_PREFIXES) and bool(TRAILING_ORDINAL.search(header))


class BulletExtractor:
    """
    한 행(row)에서 스펙 불릿 목록을 추출합니다.

    Usage:
        extractor = BulletExtractor()
        bullets = extractor.extract(row, description="...")
    """

    def extract(self, row: SheetRow, description: str = "") -> list[str]:
        """중복 제거된, 순서가 보존된 불릿 목록을 반환합니다."""
        candidates: list[str] = []
        candidates += self._from_numbered_columns(row)
        candidates += self._from_single_column(row)
        candidates += self._from_fuzzy_headers(row)

        bullets = dedupe(candidates)
        if bullets:
            return bullets

        bullets = dedupe(self._from_catch_all(row, description))
        if bullets:
            logger.debug(f"[Bullets] 행 {row.row_number}: 전체 수집 전략으로 {len(bullets)}개 추출")
        return bullets

    def _from_numbered_columns(self, row: SheetRow) -> list[str]:
        """전략 1: 번호 컬럼의 셀 값을 그대로 후보 하나로 사용합니다."""
        candidates = []
        for _, header, value in row.items():
            if not value or not is_numbered_header(header):
                continue
            if is_url(value):
                continue
            cleaned = clean_candidate(value)
            if cleaned:
                candidates.append(cleaned)
        return candidates

    def _from_single_column(self, row: SheetRow) -> list[str]:
        """전략 2: 우선순위 컬럼 중 첫 번째 비어있지 않은 값을 분할합니다."""
        mapped = row.value("specs_bullets")
        if mapped:
            return split_bullets(mapped)
        _, value = row.by_header(*SINGLE_COLUMN_PRIORITY)
        return split_bullets(value)

    def _from_fuzzy_headers(self, row: SheetRow) -> list[str]:
        """
        전략 3: 헤더가 스펙 관련 단어를 포함하는 컬럼 (제외 패턴 제외).
        표준 필드에 매핑된 컬럼 (Spec Sheet → pdf_url 등)은 건너뜁니다.
        """
        claimed = row.header_map.claimed_indexes()
        candidates = []
        for index, header, value in row.items():
            if not value or not header or index in claimed or is_numbered_header(header):
                continue
            if FUZZY_HEADER.search(header) and not EXCLUDED_HEADER.search(header):
                candidates += split_bullets(value)
        return candidates

    def _from_catch_all(self, row: SheetRow, description: str) -> list[str]:
        """전략 4: 식별/링크 컬럼을 제외한 모든 컬럼, 최종적으로 description."""
        claimed = row.header_map.claimed_indexes()
        candidates = []
        for index, header, value in row.items():
            if not value or index in claimed:
                continue
            if header and CATCH_ALL_EXCLUDED.search(header):
                continue
            if is_url(value):
                continue
            candidates += split_bullets(value)

        if not candidates:
            candidates = split_bullets(description or row.value("description"))
        return candidates


_default_extractor = BulletExtractor()


def extract_bullets(row: SheetRow, description: str = "") -> list[str]:
    """모듈 수준 단축 함수."""
    return _default_extractor.extract(row, description)

"""헤더 행 감지와 컬럼 매핑(HeaderMap).

사람이 직접 편집하는 스프레드시트는 컬럼 이름이 제각각입니다.
정해진 표준 필드(name, code, description ...)마다 허용되는 동의어 목록을 두고,
헤더 행의 텍스트와 비교하여 컬럼 인덱스를 한 번만 계산합니다.

매칭 규칙:
- 앞뒤 공백 제거 후 대소문자 무시 완전 일치
- 표준 필드 하나는 최대 하나의 컬럼에만 매핑 (가장 왼쪽 컬럼 우선)
- 매칭되지 않은 필드는 None (에러 아님)
"""

from dataclasses import dataclass, field, fields
from typing import Iterator, Optional, Sequence

# 헤더 후보로 검사할 최대 행 수 (제목 행이 헤더 위에 있는 경우 대비)
HEADER_SCAN_ROWS = 3

# 표준 필드 → 허용되는 헤더 문자열 (소문자)
FIELD_SYNONYMS: dict[str, tuple[str, ...]] = {
    "name": ("name", "product", "product name", "productname", "item name", "title", "model"),
    "code": ("code", "sku", "product code", "productcode", "item code", "item #", "part number", "model number"),
    "description": ("description", "desc", "product description", "summary", "overview"),
    "category": ("category", "categories", "type", "product type", "group", "collection", "range"),
    "url": ("url", "link", "product url", "producturl", "product link", "product page", "page", "website"),
    "image_url": (
        "image", "image url", "imageurl", "image link", "img", "picture", "photo",
        "thumbnail", "main image", "primary image",
    ),
    "specs_bullets": ("specsbullets", "specs bullets", "spec bullets", "specs_bullets"),
    "pdf_url": (
        "pdf", "pdf url", "pdfurl", "pdf link", "spec sheet", "spec sheet url",
        "specsheet", "datasheet", "data sheet",
    ),
    "pdf_file": ("pdf file", "pdffile"),
    "pdf_key": ("pdf key", "pdfkey"),
}


def normalize_header(value: Optional[str]) -> str:
    """헤더 비교용 정규화: 앞뒤 공백 제거 + 소문자."""
    return str(value or "").strip().lower()


def is_blank(value: Optional[str]) -> bool:
    return not str(value or "").strip()


def detect_header_row(table: Sequence[Sequence[str]]) -> int:
    """
    처음 3개 행 중 비어있지 않은 셀이 가장 많은 행을 헤더로 선택합니다.
    동점이면 더 위쪽(작은 인덱스) 행이 우선입니다.
    """
    best_index = 0
    best_count = -1
    for index, row in enumerate(table[:HEADER_SCAN_ROWS]):
        count = sum(1 for cell in (row or []) if not is_blank(cell))
        if count > best_count:
            best_index, best_count = index, count
    return best_index


@dataclass
class HeaderMap:
    """표준 필드별 컬럼 인덱스. 매칭되지 않은 필드는 None."""

    name: Optional[int] = None
    code: Optional[int] = None
    description: Optional[int] = None
    category: Optional[int] = None
    url: Optional[int] = None
    image_url: Optional[int] = None
    specs_bullets: Optional[int] = None
    pdf_url: Optional[int] = None
    pdf_file: Optional[int] = None
    pdf_key: Optional[int] = None

    @classmethod
    def from_headers(cls, headers: Sequence[str]) -> "HeaderMap":
        """헤더 행에서 HeaderMap을 만듭니다."""
        normalized = [normalize_header(h) for h in headers]
        claimed: set[int] = set()
        mapping: dict[str, int] = {}

        for field_name, synonyms in FIELD_SYNONYMS.items():
            accepted = set(synonyms)
            for index, header in enumerate(normalized):
                if index in claimed or not header:
                    continue
                if header in accepted:
                    mapping[field_name] = index
                    claimed.add(index)
                    break

        return cls(**mapping)

    def claimed_indexes(self) -> set[int]:
        """표준 필드에 매핑된 컬럼 인덱스 집합."""
        return {
            getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    def as_dict(self) -> dict[str, Optional[int]]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass
class SheetRow:
    """
    헤더 정보와 함께 묶인 스프레드시트 한 행.
    행이 헤더보다 짧을 수 있으므로, 범위를 벗어난 셀은 빈 문자열로 취급합니다.
    """

    headers: list[str]
    cells: list[str]
    row_number: int = 0
    header_map: HeaderMap = field(default_factory=HeaderMap)

    def cell(self, index: Optional[int]) -> str:
        if index is None or index < 0 or index >= len(self.cells):
            return ""
        value = self.cells[index]
        return "" if value is None else str(value).strip()

    def value(self, field_name: str) -> str:
        """표준 필드 값을 읽습니다. 매핑이 없으면 빈 문자열."""
        return self.cell(getattr(self.header_map, field_name, None))

    def items(self) -> Iterator[tuple[int, str, str]]:
        """
        (컬럼 인덱스, 소문자 헤더, 셀 값) 순회.
        헤더보다 긴 행의 나머지 셀은 빈 헤더로 함께 순회합니다.
        """
        for index in range(max(len(self.headers), len(self.cells))):
            header = self.headers[index] if index < len(self.headers) else ""
            yield index, normalize_header(header), self.cell(index)

    def by_header(self, *names: str) -> tuple[Optional[int], str]:
        """주어진 이름 순서대로 헤더를 찾아 첫 번째 비어있지 않은 값을 반환합니다."""
        normalized = [normalize_header(h) for h in self.headers]
        for name in names:
            target = normalize_header(name)
            for index, header in enumerate(normalized):
                if header == target:
                    value = self.cell(index)
                    if value:
                        return index, value
        return None, ""

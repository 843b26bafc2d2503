"""
생성된 덱(슬라이드 문서) 관련 데이터 모델입니다.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .product import ProductRecord
from .session import DeckForm, ContactInfo, ProjectMeta


class SlideKind(str, Enum):
    """슬라이드 종류입니다."""

    COVER = "cover"              # 앞 표지 (전면 이미지)
    TITLE = "title"              # 프로젝트/고객/담당자 정보
    CATEGORY_DIVIDER = "divider" # 카테고리 구분 슬라이드
    PRODUCT = "product"          # 제품 상세
    SPEC_SHEET_PAGE = "spec_page" # PDF 스펙시트 페이지 이미지
    BACK_COVER = "back"          # 뒤 표지 (전면 이미지)


class SlideRecord(BaseModel):
    """덱에 추가된 슬라이드 한 장의 요약 정보."""

    kind: SlideKind
    page_number: int
    label: str = ""
    has_image: bool = False


class GeneratedDocument(BaseModel):
    """
    완성된 덱입니다.
    Assembler가 모든 작업을 끝낸 뒤에만 생성되므로, 부분 결과는 존재하지 않습니다.
    """

    filename: str
    slides: list[SlideRecord] = Field(default_factory=list)
    content: bytes = b""

    @property
    def slide_count(self) -> int:
        return len(self.slides)

    def kinds(self) -> list[SlideKind]:
        """슬라이드 종류만 순서대로 반환합니다."""
        return [slide.kind for slide in self.slides]


class ExportRequest(BaseModel):
    """
    내보내기 API 요청 본문.
    form을 직접 주거나, 세션 정보(contact/project)를 주면 서버에서 form을 구성합니다.
    """

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    items: list[ProductRecord] = Field(default_factory=list)
    form: Optional[DeckForm] = None
    contact_id: Optional[str] = None
    contact: Optional[ContactInfo] = None
    project: Optional[ProjectMeta] = None

"""
제품 카탈로그 데이터 모델입니다.
스프레드시트의 한 행(row)을 정규화한 결과를 정의합니다.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ProductRecord(BaseModel):
    """
    정규화된 제품 한 개를 나타냅니다.

    JSON으로 내보낼 때는 camelCase 키(imageUrl, specsBullets 등)를 사용합니다.
    code / name / url / image_url 중 최소 하나는 값이 있어야 카탈로그에 남습니다.
    """

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    row_number: Optional[int] = Field(default=None, description="시트상의 행 번호 (1부터 시작)")
    code: str = ""
    name: str = ""
    description: str = ""
    category: str = ""
    url: str = ""
    specs_bullets: list[str] = Field(default_factory=list)
    image_url: Optional[str] = None      # 직접 가져올 수 있는 이미지 주소
    image_proxied: Optional[str] = None  # 프록시를 거친 같은 출처 주소
    pdf_url: Optional[str] = None
    pdf_proxied: Optional[str] = None

    def has_identity(self) -> bool:
        """식별 가능한 필드가 하나라도 있는지 확인합니다."""
        return any(
            (value or "").strip()
            for value in (self.name, self.code, self.url, self.image_url)
        )


class ImageReference(BaseModel):
    """이미지 주소 해석 결과입니다. 이미지가 없으면 세 필드 모두 None 입니다."""

    raw: Optional[str] = None
    direct: Optional[str] = None
    proxied: Optional[str] = None

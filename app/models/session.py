"""
담당자(Contact)와 프로젝트 정보 모델입니다.
덱의 타이틀 슬라이드에 들어가는 값들을 정의합니다.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ContactInfo(BaseModel):
    """제안서를 작성하는 영업 담당자 정보."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    company: Optional[str] = None
    contact_name: str = ""
    email: str = ""
    phone: Optional[str] = None
    title: Optional[str] = None


class ContactRecord(ContactInfo):
    """연락처 디렉토리에 등록된 담당자 (고유 id 포함)."""

    id: str
    initials: Optional[str] = None


class ProjectMeta(BaseModel):
    """제안 대상 프로젝트 정보."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    project_name: str = ""
    client_name: str = ""
    presentation_date: str = ""  # 'YYYY-MM-DD'


class DeckForm(BaseModel):
    """Document Assembler에 전달되는 입력 폼."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    project_name: str = ""
    client_name: str = ""
    contact_name: str = ""
    email: str = ""
    phone: str = ""
    date: str = ""


class SessionPayload(BaseModel):
    """세션 해석 요청 본문 (부분 값 허용)."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    contact_id: Optional[str] = None
    contact: dict = Field(default_factory=dict)
    project: dict = Field(default_factory=dict)

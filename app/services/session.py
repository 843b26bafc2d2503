"""
세션 컨텍스트(담당자 + 프로젝트 정보) 서비스입니다.

UI 세션마다 하나의 SessionContext를 만들어 Document Assembler에 전달합니다.
프로세스 전역 싱글톤은 사용하지 않습니다. 값은 클라이언트 쪽에 저장되고,
서버는 요청마다 기본값 보정과 연락처 디렉토리 조회만 담당합니다.
"""

from datetime import date
from typing import Optional

from app.config import Settings, get_settings
from app.data.contacts import CONTACTS
from app.models import ContactInfo, ContactRecord, DeckForm, ProjectMeta


def today() -> str:
    return date.today().isoformat()


def default_contact(settings: Optional[Settings] = None) -> ContactInfo:
    """환경 변수 기반 기본 담당자."""
    settings = settings or get_settings()
    return ContactInfo(
        company=settings.default_company,
        contact_name=settings.default_contact_name,
        email=settings.default_email,
        phone=settings.default_phone,
        title=settings.default_title,
    )


def find_contact_by_loose_key(
    key: Optional[str],
    contacts: Optional[list[ContactRecord]] = None,
) -> Optional[ContactRecord]:
    """id → 이메일 → 이름 순서로 (대소문자 무시) 담당자를 찾습니다."""
    if not key or not key.strip():
        return None
    contacts = CONTACTS if contacts is None else contacts
    k = key.strip().lower()
    for matcher in (
        lambda c: c.id == k,
        lambda c: (c.email or "").lower() == k,
        lambda c: c.contact_name.lower() == k,
    ):
        for contact in contacts:
            if matcher(contact):
                return contact
    return None


def normalized_contact(
    contact: Optional[dict],
    fallback: Optional[ContactInfo] = None,
) -> ContactInfo:
    """비어있는 이름/이메일은 기본값으로 채웁니다. 나머지 필드는 None일 때만 기본값."""
    values = dict(contact or {})
    base = fallback or default_contact()

    def pick(*names):
        for name in names:
            if name in values:
                return values[name]
        return None

    name = (pick("contact_name", "contactName") or "").strip()
    email = (pick("email") or "").strip()
    company = pick("company")
    phone = pick("phone")
    title = pick("title")
    return ContactInfo(
        company=company if company is not None else base.company,
        contact_name=name or base.contact_name,
        email=email or base.email,
        phone=phone if phone is not None else base.phone,
        title=title if title is not None else base.title,
    )


def normalized_project(project: Optional[dict]) -> ProjectMeta:
    """발표 날짜가 비어있으면 오늘 날짜로 채웁니다."""
    values = dict(project or {})

    def pick(*names):
        for name in names:
            if values.get(name) is not None:
                return str(values[name])
        return ""

    return ProjectMeta(
        project_name=pick("project_name", "projectName"),
        client_name=pick("client_name", "clientName"),
        presentation_date=pick("presentation_date", "presentationDate").strip() or today(),
    )


class SessionContext:
    """
    하나의 UI 세션이 소유하는 담당자/프로젝트 상태.

    Usage:
        session = SessionContext.create(contact_id="amy-keys")
        session.project = normalized_project({"projectName": "Villa 7"})
        form = session.to_deck_form()
    """

    def __init__(
        self,
        contact: ContactInfo,
        project: ProjectMeta,
        selected_contact_id: Optional[str] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self.contact = contact
        self.project = project
        self.selected_contact_id = selected_contact_id

    @classmethod
    def create(
        cls,
        contact_id: Optional[str] = None,
        contact: Optional[dict] = None,
        project: Optional[dict] = None,
        settings: Optional[Settings] = None,
    ) -> "SessionContext":
        """
        요청 값 → 디렉토리 연락처 → 설정 기본 연락처 순서로 세션을 구성합니다.
        """
        settings = settings or get_settings()
        record = find_contact_by_loose_key(contact_id) or find_contact_by_loose_key(
            settings.default_contact_id
        )
        base = ContactInfo(**record.model_dump(include=set(ContactInfo.model_fields))) if record else None
        return cls(
            contact=normalized_contact(contact, fallback=base or default_contact(settings)),
            project=normalized_project(project),
            selected_contact_id=record.id if record else None,
            settings=settings,
        )

    def select_contact(self, contact_id: Optional[str]) -> bool:
        """디렉토리에서 담당자를 선택합니다. 찾지 못하면 False."""
        if not contact_id:
            self.selected_contact_id = None
            return True
        record = find_contact_by_loose_key(contact_id)
        if record is None:
            return False
        self.selected_contact_id = record.id
        self.contact = normalized_contact(
            record.model_dump(include=set(ContactInfo.model_fields)),
            fallback=default_contact(self.settings),
        )
        return True

    def reset_to_defaults(self, overrides: Optional[dict] = None) -> None:
        """URL 파라미터 같은 덮어쓰기 값만 남기고 기본 상태로 되돌립니다."""
        overrides = overrides or {}
        fresh = SessionContext.create(
            contact_id=overrides.get("contact_id") or overrides.get("contactId"),
            contact=overrides,
            project=overrides,
            settings=self.settings,
        )
        self.contact = fresh.contact
        self.project = fresh.project
        self.selected_contact_id = fresh.selected_contact_id

    def to_deck_form(self) -> DeckForm:
        """Document Assembler 입력 폼으로 변환합니다."""
        return DeckForm(
            project_name=self.project.project_name,
            client_name=self.project.client_name,
            contact_name=self.contact.contact_name,
            email=self.contact.email,
            phone=self.contact.phone or "",
            date=self.project.presentation_date,
        )

    def to_dict(self) -> dict:
        return {
            "selectedContactId": self.selected_contact_id,
            "contact": self.contact.model_dump(by_alias=True),
            "project": self.project.model_dump(by_alias=True),
        }

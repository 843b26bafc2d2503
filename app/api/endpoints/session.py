"""
세션(담당자/프로젝트) API입니다.
값은 클라이언트가 보관하고, 서버는 연락처 디렉토리 조회와 기본값 보정만 합니다.
"""

from fastapi import APIRouter

from app.data.contacts import CONTACTS
from app.models import SessionPayload
from app.services.session import SessionContext

router = APIRouter()


@router.get("/contacts")
async def list_contacts() -> dict:
    """연락처 디렉토리."""
    return {"contacts": [c.model_dump(by_alias=True) for c in CONTACTS]}


@router.post("/resolve")
async def resolve_session(payload: SessionPayload) -> dict:
    """
    부분 입력(contactId, contact, project)을 기본값이 채워진 세션으로 만듭니다.
    덱 폼(form)도 같이 돌려줍니다.
    """
    session = SessionContext.create(
        contact_id=payload.contact_id,
        contact=payload.contact,
        project=payload.project,
    )
    return {
        **session.to_dict(),
        "form": session.to_deck_form().model_dump(by_alias=True),
    }

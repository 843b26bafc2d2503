"""
제안서 덱 내보내기 API입니다.
선택한 제품과 프로젝트/담당자 정보를 받아 pptx 파일을 돌려줍니다.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from app.exceptions import ExportPreconditionError
from app.layers.layer4_deck.assembler import DeckAssembler
from app.models import DeckForm, ExportRequest
from app.services.fetcher import ResourceFetcher, get_resource_fetcher
from app.services.session import SessionContext

logger = logging.getLogger(__name__)

router = APIRouter()

PPTX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.presentationml.presentation"


def resolve_form(request: ExportRequest) -> DeckForm:
    """form이 있으면 그대로, 없으면 세션 정보(contact/project)로 만듭니다."""
    if request.form is not None:
        return request.form
    session = SessionContext.create(
        contact_id=request.contact_id,
        contact=request.contact.model_dump(exclude_unset=True) if request.contact else None,
        project=request.project.model_dump(exclude_unset=True) if request.project else None,
    )
    return session.to_deck_form()


@router.post("/export")
async def export_deck(
    request: ExportRequest,
    fetcher: ResourceFetcher = Depends(get_resource_fetcher),
) -> Response:
    """
    덱 내보내기 API.

    선택한 제품이 없으면 슬라이드 작업 없이 400 (ERR_EXPORT_001)을 반환합니다.
    """
    if not request.items:
        raise ExportPreconditionError("Select at least one product to export.")

    form = resolve_form(request)
    logger.info(f"[Deck] 내보내기 요청: 제품 {len(request.items)}개, 프로젝트 '{form.project_name}'")

    document = await DeckAssembler(fetcher).assemble(request.items, form)
    return Response(
        content=document.content,
        media_type=PPTX_MEDIA_TYPE,
        headers={
            "Content-Disposition": f'attachment; filename="{document.filename}"',
            "X-Slide-Count": str(document.slide_count),
        },
    )

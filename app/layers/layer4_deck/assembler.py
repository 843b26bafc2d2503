"""
Document Assembler: 선택한 제품 목록 → 제안서 덱(pptx).

슬라이드 순서 (고정):
1. 앞 표지 (전면 이미지, 설정된 개수만큼)
2. 타이틀 (프로젝트/고객/담당자/날짜)
3. 카테고리별 블록: 구분 슬라이드 + 제품 슬라이드 (+ 스펙시트 페이지)
4. 뒤 표지 (전면 이미지)

이미지/PDF 조회 실패는 해당 요소만 생략하고 계속 진행합니다.
선택된 제품이 없을 때만 슬라이드 작업 전에 ExportPreconditionError로 중단합니다.
"""

import asyncio
import io
import logging
import time
from typing import Optional
from urllib.parse import urljoin

from app.config import Settings, get_settings
from app.exceptions import ExportPreconditionError, GenerationError
from app.layers.layer2_specs.bullet_extractor import dedupe, split_bullets
from app.models import (
    DeckForm,
    GeneratedDocument,
    ProductRecord,
    SlideKind,
    SlideRecord,
)
from app.services.fetcher import ResourceFetcher
from app.utils.validation import build_download_filename, clamp_text

from . import slides
from .image_utils import PreparedImage, prepare_image
from .pdf_renderer import render_pdf_pages

logger = logging.getLogger(__name__)

PLACEHOLDER = "—"
DEFAULT_CATEGORY = "Other"
DEFAULT_HEADING = "Project Selection"
PRODUCT_LINK_LABEL = "Product page"
PDF_LINK_LABEL = "Spec sheet (PDF)"


def group_by_category(products: list[ProductRecord]) -> list[tuple[str, list[ProductRecord]]]:
    """처음 등장한 카테고리 순서로 묶습니다. 카테고리 안에서는 입력 순서를 유지합니다."""
    groups: dict[str, list[ProductRecord]] = {}
    for product in products:
        category = (product.category or "").strip() or DEFAULT_CATEGORY
        groups.setdefault(category, []).append(product)
    return list(groups.items())


def derive_bullets(product: ProductRecord, max_bullets: int) -> list[str]:
    """슬라이드에 표시할 불릿. specsBullets가 없으면 설명을 나눠서 사용합니다."""
    bullets = product.specs_bullets or split_bullets(product.description)
    return dedupe(bullets)[:max_bullets]


def title_lines(form: DeckForm) -> tuple[str, list[str]]:
    """타이틀 슬라이드의 제목과 본문 줄들. 빈 값은 '—'로 표시합니다."""

    def show(value: str) -> str:
        return (value or "").strip() or PLACEHOLDER

    heading = (form.project_name or "").strip() or DEFAULT_HEADING
    return heading, [
        f"Client: {show(form.client_name)}",
        f"Prepared by: {show(form.contact_name)}",
        f"Email: {show(form.email)}",
        f"Phone: {show(form.phone)}",
        f"Date: {show(form.date)}",
    ]


class DeckAssembler:
    """
    제안서 덱 생성기.

    Usage:
        async with ResourceFetcher() as fetcher:
            document = await DeckAssembler(fetcher).assemble(products, form)
    """

    def __init__(
        self,
        fetcher: Optional[ResourceFetcher] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self.fetcher = fetcher or ResourceFetcher(self.settings)

    async def assemble(
        self,
        products: list[ProductRecord],
        form: Optional[DeckForm] = None,
    ) -> GeneratedDocument:
        """
        덱을 생성합니다.

        Args:
            products: 선택된 제품 (입력 순서 유지)
            form: 타이틀 슬라이드에 들어갈 프로젝트/담당자 정보

        Returns:
            GeneratedDocument: 전체 작업이 끝난 완성본

        Raises:
            ExportPreconditionError: 선택된 제품이 없음
            GenerationError: pptx 직렬화 실패
        """
        if not products:
            raise ExportPreconditionError("Select at least one product to export.")

        form = form or DeckForm()
        start_time = time.time()
        prs = slides.new_presentation()
        records: list[SlideRecord] = []

        def finish(slide, kind: SlideKind, label: str = "", has_image: bool = False):
            page_number = len(records) + 1
            slides.add_footer(slide, self.settings.brand_name, page_number)
            records.append(SlideRecord(
                kind=kind, page_number=page_number, label=label, has_image=has_image,
            ))

        # ========== 1. 앞 표지 ==========
        for path in self.settings.cover_images:
            image = await self._load_image(path)
            finish(slides.add_full_bleed_slide(prs, image), SlideKind.COVER, path, image is not None)

        # ========== 2. 타이틀 ==========
        heading, lines = title_lines(form)
        finish(slides.add_title_slide(prs, heading, lines), SlideKind.TITLE, heading)

        # ========== 3. 카테고리별 제품 ==========
        for category, items in group_by_category(products):
            finish(
                slides.add_category_divider_slide(prs, category, len(items)),
                SlideKind.CATEGORY_DIVIDER,
                category,
            )
            for product in items:
                await self._add_product(prs, product, finish)

        # ========== 4. 뒤 표지 ==========
        for path in self.settings.back_images:
            image = await self._load_image(path)
            finish(slides.add_full_bleed_slide(prs, image), SlideKind.BACK_COVER, path, image is not None)

        content = self._serialize(prs)
        elapsed = time.time() - start_time
        logger.info(
            f"[Deck] 덱 생성 완료: 제품 {len(products)}개, 슬라이드 {len(records)}장 ({elapsed:.2f}초)"
        )
        return GeneratedDocument(
            filename=build_download_filename(form.project_name),
            slides=records,
            content=content,
        )

    # ==================== 제품 슬라이드 ====================

    async def _add_product(self, prs, product: ProductRecord, finish) -> None:
        image = await self._load_image(product.image_proxied or product.image_url)

        name = product.name.strip() or PLACEHOLDER
        slide = slides.add_product_slide(
            prs,
            name=name,
            code=product.code.strip(),
            category=product.category.strip(),
            description=clamp_text(product.description, self.settings.max_description_chars),
            bullets=derive_bullets(product, self.settings.max_bullets),
            image=image,
            links=self.product_links(product),
        )
        finish(slide, SlideKind.PRODUCT, name, image is not None)

        for page in await self._render_spec_pages(product):
            finish(slides.add_spec_page_slide(prs, page), SlideKind.SPEC_SHEET_PAGE, name, True)

    def product_links(self, product: ProductRecord) -> list[tuple[str, str]]:
        """상품 페이지 / 스펙시트 하이퍼링크 목록."""
        links = []
        if product.url.strip():
            links.append((PRODUCT_LINK_LABEL, product.url.strip()))
        pdf_link = self.pdf_link(product)
        if pdf_link:
            links.append((PDF_LINK_LABEL, pdf_link))
        return links

    def pdf_link(self, product: ProductRecord) -> Optional[str]:
        """
        public_base_url이 설정되어 있으면 프록시 주소를 절대 주소로 만들어 연결하고,
        아니면 원래 PDF 주소를 그대로 연결합니다.
        """
        if not product.pdf_url:
            return None
        base = self.settings.public_base_url.strip()
        if base:
            return urljoin(base.rstrip("/") + "/", (product.pdf_proxied or product.pdf_url).lstrip("/"))
        return product.pdf_url

    # ==================== 리소스 조회 ====================

    async def _load_image(self, url: Optional[str]) -> Optional[PreparedImage]:
        """이미지를 가져와 삽입 가능한 형태로 준비합니다. 실패하면 None."""
        if not url:
            return None
        result = await self.fetcher.fetch(url)
        if not result.ok:
            logger.warning(f"[Deck] 이미지 생략: {url} ({result.error})")
            return None
        try:
            return prepare_image(result.content)
        except Exception as e:
            logger.warning(f"[Deck] 이미지 변환 실패: {url} ({type(e).__name__}: {e})")
            return None

    async def _render_spec_pages(self, product: ProductRecord) -> list[PreparedImage]:
        """스펙시트 PDF 앞쪽 페이지들을 이미지로. 실패하면 빈 목록 (링크만 남음)."""
        url = product.pdf_proxied or product.pdf_url
        if not url or self.settings.pdf_max_pages <= 0:
            return []

        result = await self.fetcher.fetch(url)
        if not result.ok:
            logger.warning(f"[Deck] 스펙시트 조회 실패: {url} ({result.error})")
            return []

        try:
            pages = await asyncio.to_thread(
                render_pdf_pages,
                result.content,
                self.settings.pdf_max_pages,
                self.settings.pdf_render_scale,
            )
            return [prepare_image(page) for page in pages]
        except Exception as e:
            logger.warning(f"[Deck] 스펙시트 렌더링 실패: {url} ({type(e).__name__}: {e})")
            return []

    def _serialize(self, prs) -> bytes:
        try:
            buffer = io.BytesIO()
            prs.save(buffer)
            return buffer.getvalue()
        except Exception as e:
            logger.error(f"[Deck] 덱 저장 실패: {e}", exc_info=True)
            raise GenerationError(f"Could not write presentation: {e}") from e


async def assemble_deck(
    products: list[ProductRecord],
    form: Optional[DeckForm] = None,
    settings: Optional[Settings] = None,
) -> GeneratedDocument:
    """ResourceFetcher 수명까지 관리하는 편의 함수."""
    settings = settings or get_settings()
    async with ResourceFetcher(settings) as fetcher:
        return await DeckAssembler(fetcher, settings).assemble(products, form)

"""
스펙시트 PDF → 이미지 변환기입니다.
PyMuPDF(fitz)로 앞쪽 N 페이지를 고정 배율로 래스터화하여 PNG 바이트로 반환합니다.
"""

import logging

import fitz  # PyMuPDF

logger = logging.getLogger(__name__)


def render_pdf_pages(pdf_bytes: bytes, max_pages: int = 2, scale: float = 2.0) -> list[bytes]:
    """
    PDF 앞쪽 페이지들을 PNG로 렌더링합니다.

    Args:
        pdf_bytes: PDF 파일 내용
        max_pages: 렌더링할 최대 페이지 수
        scale: 확대 배율 (1.0 = 72 DPI)

    Raises:
        PDF가 손상되었거나 PDF가 아니면 fitz에서 발생한 예외를 그대로 전파합니다.
        호출하는 쪽(Assembler)에서 잡아서 "링크만 표시"로 처리합니다.
    """
    if max_pages <= 0:
        return []

    pages = []
    with fitz.open(stream=pdf_bytes, filetype="pdf") as doc:
        matrix = fitz.Matrix(scale, scale)
        for index in range(min(max_pages, doc.page_count)):
            page = doc.load_page(index)
            pix = page.get_pixmap(matrix=matrix, alpha=False)
            pages.append(pix.tobytes("png"))

    logger.debug(f"[PdfRenderer] {len(pages)}페이지 렌더링 (배율 {scale})")
    return pages

"""슬라이드 빌더 함수 모음.

python-pptx로 제안서 덱의 각 슬라이드 유형을 고정 레이아웃에 맞춰 그립니다.
슬라이드 크기는 16:9 (10 × 5.625 inch) 입니다.

슬라이드 유형:
- 전면 이미지 (앞/뒤 표지)
- 타이틀 (프로젝트/고객/담당자/날짜)
- 카테고리 구분
- 제품 상세 (왼쪽 이미지, 오른쪽 텍스트)
- 스펙시트 페이지 이미지
"""

from typing import Optional

from pptx import Presentation
from pptx.util import Inches, Pt, Emu
from pptx.dml.color import RGBColor
from pptx.enum.text import PP_ALIGN, MSO_ANCHOR
from pptx.enum.shapes import MSO_SHAPE

from .image_utils import PreparedImage, fit_contain, cover_crop


SLIDE_WIDTH = 10.0    # inch
SLIDE_HEIGHT = 5.625  # inch

# 제품 슬라이드 영역 (inch): (x, y, w, h)
PRODUCT_IMAGE_BOX = (0.3, 0.6, 4.9, 4.2)
RIGHT_COLUMN_X = 5.6
RIGHT_COLUMN_W = 4.2
SPEC_PAGE_BOX = (0.0, 0.0, SLIDE_WIDTH, 5.2)
FOOTER_BOX = (0.4, 5.25, 9.2, 0.3)

COLORS = {
    "background": "FFFFFF",
    "panel": "000000",
    "divider": "1F2937",
    "text_primary": "111827",
    "text_secondary": "4B5563",
    "text_inverse": "FFFFFF",
    "accent": "0EA5E9",
    "link": "1D4ED8",
    "footer": "6B7280",
    "placeholder": "E5E7EB",
}


def hex_to_rgb(hex_color: str) -> RGBColor:
    """Hex 컬러를 RGBColor로 변환."""
    hex_color = hex_color.lstrip('#')
    return RGBColor(
        int(hex_color[0:2], 16),
        int(hex_color[2:4], 16),
        int(hex_color[4:6], 16)
    )


def set_slide_background(slide, color_hex: str):
    """슬라이드 배경색 설정."""
    fill = slide.background.fill
    fill.solid()
    fill.fore_color.rgb = hex_to_rgb(color_hex)


def new_presentation() -> Presentation:
    """16:9 빈 프레젠테이션 생성."""
    prs = Presentation()
    prs.slide_width = Inches(SLIDE_WIDTH)
    prs.slide_height = Inches(SLIDE_HEIGHT)
    return prs


def add_blank_slide(prs):
    slide = prs.slides.add_slide(prs.slide_layouts[6])  # Blank
    set_slide_background(slide, COLORS["background"])
    return slide


def _add_text(slide, x, y, w, h, text: str, size: int, color: str,
              bold: bool = False, align=PP_ALIGN.LEFT, wrap: bool = True):
    """텍스트 상자 하나를 추가하고 첫 문단을 반환합니다."""
    box = slide.shapes.add_textbox(Inches(x), Inches(y), Inches(w), Inches(h))
    tf = box.text_frame
    tf.word_wrap = wrap
    p = tf.paragraphs[0]
    p.text = text
    p.font.size = Pt(size)
    p.font.bold = bold
    p.font.color.rgb = hex_to_rgb(color)
    p.alignment = align
    return box


def add_picture_contain(slide, image: PreparedImage, box: tuple):
    """이미지를 상자 안에 비율 유지(contain)로 배치합니다. 잘리지 않습니다."""
    x, y, w, h = (Inches(v) for v in box)
    width, height, dx, dy = fit_contain(image.width, image.height, int(w), int(h))
    return slide.shapes.add_picture(
        image.stream, Emu(x + dx), Emu(y + dy), Emu(width), Emu(height)
    )


def add_picture_cover(slide, image: PreparedImage, prs):
    """슬라이드 전체를 채우도록(cover) 이미지를 배치합니다. 넘치는 부분은 잘라냅니다."""
    pic = slide.shapes.add_picture(image.stream, 0, 0, prs.slide_width, prs.slide_height)
    left, right, top, bottom = cover_crop(
        image.width, image.height, int(prs.slide_width), int(prs.slide_height)
    )
    pic.crop_left, pic.crop_right = left, right
    pic.crop_top, pic.crop_bottom = top, bottom
    return pic


def add_full_bleed_slide(prs, image: Optional[PreparedImage]):
    """전면 이미지 슬라이드 (앞/뒤 표지). 이미지가 없으면 빈 슬라이드."""
    slide = add_blank_slide(prs)
    if image is not None:
        add_picture_cover(slide, image, prs)
    return slide


def add_title_slide(prs, heading: str, lines: list[str]):
    """타이틀 슬라이드: 어두운 패널 위에 프로젝트/고객/담당자 정보."""
    slide = add_blank_slide(prs)

    panel = slide.shapes.add_shape(
        MSO_SHAPE.RECTANGLE, Inches(0.4), Inches(0.9), Inches(6.8), Inches(3.6)
    )
    panel.fill.solid()
    panel.fill.fore_color.rgb = hex_to_rgb(COLORS["panel"])
    panel.line.fill.background()

    _add_text(slide, 0.7, 1.1, 6.2, 0.8, heading, 30, COLORS["text_inverse"], bold=True)

    box = slide.shapes.add_textbox(Inches(0.7), Inches(2.0), Inches(6.2), Inches(2.4))
    tf = box.text_frame
    tf.word_wrap = True
    tf.vertical_anchor = MSO_ANCHOR.TOP
    for i, line in enumerate(lines):
        p = tf.paragraphs[0] if i == 0 else tf.add_paragraph()
        p.text = line
        p.font.size = Pt(16)
        p.font.color.rgb = hex_to_rgb(COLORS["text_inverse"])
        p.space_before = Pt(4)

    return slide


def add_category_divider_slide(prs, category: str, count: int):
    """카테고리 구분 슬라이드."""
    slide = add_blank_slide(prs)
    set_slide_background(slide, COLORS["divider"])

    bar = slide.shapes.add_shape(
        MSO_SHAPE.RECTANGLE, Inches(0.5), Inches(2.0), Inches(0.12), Inches(1.4)
    )
    bar.fill.solid()
    bar.fill.fore_color.rgb = hex_to_rgb(COLORS["accent"])
    bar.line.fill.background()

    _add_text(slide, 0.9, 1.9, 8.5, 1.0, category, 40, COLORS["text_inverse"], bold=True)
    label = f"{count} product" if count == 1 else f"{count} products"
    _add_text(slide, 0.9, 2.9, 8.5, 0.5, label, 16, COLORS["placeholder"])
    return slide


def add_image_placeholder(slide, box: tuple, text: str = "No image"):
    """이미지를 가져오지 못했을 때 보여줄 회색 상자."""
    x, y, w, h = box
    shape = slide.shapes.add_shape(
        MSO_SHAPE.RECTANGLE, Inches(x), Inches(y), Inches(w), Inches(h)
    )
    shape.fill.solid()
    shape.fill.fore_color.rgb = hex_to_rgb(COLORS["placeholder"])
    shape.line.fill.background()
    tf = shape.text_frame
    p = tf.paragraphs[0]
    p.text = text
    p.font.size = Pt(12)
    p.font.color.rgb = hex_to_rgb(COLORS["text_secondary"])
    p.alignment = PP_ALIGN.CENTER
    return shape


def add_product_slide(
    prs,
    name: str,
    code: str,
    category: str,
    description: str,
    bullets: list[str],
    image: Optional[PreparedImage],
    links: list[tuple[str, str]],
):
    """
    제품 슬라이드.
    왼쪽: 이미지 (contain). 오른쪽: 이름, SKU, 카테고리, 설명, 불릿, 링크.
    """
    slide = add_blank_slide(prs)

    if image is not None:
        add_picture_contain(slide, image, PRODUCT_IMAGE_BOX)
    else:
        add_image_placeholder(slide, PRODUCT_IMAGE_BOX)

    x, w = RIGHT_COLUMN_X, RIGHT_COLUMN_W
    _add_text(slide, x, 0.6, w, 0.6, name, 22, COLORS["text_primary"], bold=True)
    if code:
        _add_text(slide, x, 1.2, w, 0.4, f"SKU: {code}", 12, COLORS["text_secondary"])
    if category:
        _add_text(slide, x, 1.6, w, 0.4, f"Category: {category}", 12, COLORS["text_secondary"])

    if description:
        box = _add_text(slide, x, 2.1, w, 1.1, description, 12, COLORS["text_primary"])
        box.text_frame.vertical_anchor = MSO_ANCHOR.TOP

    if bullets:
        box = slide.shapes.add_textbox(Inches(x), Inches(3.25), Inches(w), Inches(1.35))
        tf = box.text_frame
        tf.word_wrap = True
        tf.vertical_anchor = MSO_ANCHOR.TOP
        for i, bullet in enumerate(bullets):
            p = tf.paragraphs[0] if i == 0 else tf.add_paragraph()
            p.text = f"• {bullet}"
            p.font.size = Pt(12)
            p.font.color.rgb = hex_to_rgb(COLORS["text_primary"])
            p.space_before = Pt(2)

    # 링크 (상품 페이지, 스펙시트)
    link_y = 4.65
    for label, address in links:
        box = slide.shapes.add_textbox(Inches(x), Inches(link_y), Inches(w), Inches(0.3))
        run = box.text_frame.paragraphs[0].add_run()
        run.text = label
        run.font.size = Pt(12)
        run.font.underline = True
        run.font.color.rgb = hex_to_rgb(COLORS["link"])
        run.hyperlink.address = address
        link_y += 0.3

    return slide


def add_spec_page_slide(prs, image: PreparedImage):
    """스펙시트 PDF 한 페이지를 슬라이드 폭에 맞춰 보여줍니다."""
    slide = add_blank_slide(prs)
    add_picture_contain(slide, image, SPEC_PAGE_BOX)
    return slide


def add_footer(slide, brand: str, page_number: int):
    """모든 슬라이드 하단 오른쪽에 브랜드와 페이지 번호를 표시합니다."""
    x, y, w, h = FOOTER_BOX
    return _add_text(
        slide, x, y, w, h, f"{brand} | {page_number}", 9, COLORS["footer"],
        align=PP_ALIGN.RIGHT, wrap=False,
    )

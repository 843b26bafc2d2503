"""
슬라이드에 넣을 이미지 전처리 유틸리티입니다.
Pillow로 이미지 크기를 측정하고, python-pptx가 지원하지 않는 형식(webp 등)은 PNG로 변환합니다.
"""

import io
from dataclasses import dataclass

from PIL import Image

# python-pptx가 그대로 삽입할 수 있는 형식
PPTX_NATIVE_FORMATS = {"PNG", "JPEG", "GIF", "BMP", "TIFF"}


@dataclass
class PreparedImage:
    """삽입 준비가 끝난 이미지 (바이트 + 픽셀 크기)."""
    data: bytes
    width: int
    height: int

    @property
    def stream(self) -> io.BytesIO:
        return io.BytesIO(self.data)


def prepare_image(content: bytes) -> PreparedImage:
    """
    이미지 바이트를 검증하고 필요하면 PNG로 변환합니다.

    Raises:
        PIL.UnidentifiedImageError: 이미지가 아니거나 지원하지 않는 형식 (예: SVG)
    """
    with Image.open(io.BytesIO(content)) as img:
        img.load()
        width, height = img.size
        if img.format in PPTX_NATIVE_FORMATS:
            return PreparedImage(data=content, width=width, height=height)

        mode = "RGBA" if "A" in img.getbands() else "RGB"
        buffer = io.BytesIO()
        img.convert(mode).save(buffer, format="PNG")
        return PreparedImage(data=buffer.getvalue(), width=width, height=height)


def fit_contain(
    image_width: int,
    image_height: int,
    box_width: int,
    box_height: int,
) -> tuple[int, int, int, int]:
    """
    상자 안에 이미지를 잘라내지 않고 비율을 유지해 넣습니다 (contain).

    Returns:
        (너비, 높이, x 오프셋, y 오프셋) - 상자 좌상단 기준, 가운데 정렬
    """
    if image_width <= 0 or image_height <= 0:
        return box_width, box_height, 0, 0
    scale = min(box_width / image_width, box_height / image_height)
    width = int(image_width * scale)
    height = int(image_height * scale)
    return width, height, (box_width - width) // 2, (box_height - height) // 2


def cover_crop(
    image_width: int,
    image_height: int,
    box_width: int,
    box_height: int,
) -> tuple[float, float, float, float]:
    """
    상자 전체를 채우도록(cover) 잘라낼 비율을 계산합니다. 늘리지 않습니다.

    Returns:
        (left, right, top, bottom) 잘라낼 비율 (0.0 ~ 1.0)
    """
    if image_width <= 0 or image_height <= 0 or box_height <= 0:
        return 0.0, 0.0, 0.0, 0.0
    image_ratio = image_width / image_height
    box_ratio = box_width / box_height
    if image_ratio > box_ratio:
        visible = box_ratio / image_ratio
        side = (1.0 - visible) / 2
        return side, side, 0.0, 0.0
    visible = image_ratio / box_ratio
    side = (1.0 - visible) / 2
    return 0.0, 0.0, side, side

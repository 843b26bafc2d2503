"""Layer 1: 행 정규화(Row Normalizer).

스프레드시트에서 읽은 2차원 문자열 표(RawTable)를 ProductRecord 목록으로 변환합니다.

처리 흐름:
1. 처음 3개 행 중 비어있지 않은 셀이 가장 많은 행을 헤더로 선택
2. 헤더 행에서 HeaderMap 생성 (동의어 매칭, 한 번만 계산)
3. 헤더 아래 각 행에서 표준 필드 추출 (짧은 행은 빈 문자열로 보정)
4. Layer 2(불릿 추출), Layer 3(이미지/PDF 주소 해석) 적용
5. name / code / url / image_url 이 모두 빈 행 제거
6. 입력 행 순서(시트 순서) 유지

표가 비어있거나 형식이 깨져 있어도 예외 대신 빈 목록을 반환합니다.
"""

import logging
from datetime import datetime
from typing import Optional, Sequence

from app.models import ProductRecord
from app.layers.layer2_specs.bullet_extractor import BulletExtractor
from app.layers.layer3_images.image_resolver import ImageResolver, PdfResolver
from .header_map import HeaderMap, SheetRow, detect_header_row

logger = logging.getLogger(__name__)

RawTable = Sequence[Sequence[Optional[str]]]


def _as_cells(row) -> list[str]:
    """행 하나를 문자열 셀 목록으로 변환합니다 (None → 빈 문자열)."""
    if row is None:
        return []
    if isinstance(row, str):
        return [row]
    return ["" if cell is None else str(cell) for cell in row]


class RowNormalizer:
    """
    RawTable → ProductRecord 목록 변환기.

    Usage:
        normalizer = RowNormalizer(image_proxy_path="/image-proxy")
        products = normalizer.normalize(values)
    """

    def __init__(
        self,
        image_proxy_path: str = "/image-proxy",
        pdf_proxy_path: str = "/pdf-proxy",
        bullet_extractor: Optional[BulletExtractor] = None,
        specs_dir: Optional[str] = None,
    ):
        self.bullet_extractor = bullet_extractor or BulletExtractor()
        self.image_resolver = ImageResolver(proxy_endpoint=image_proxy_path)
        self.pdf_resolver = PdfResolver(proxy_endpoint=pdf_proxy_path, specs_dir=specs_dir)

    def normalize(self, table: Optional[RawTable]) -> list[ProductRecord]:
        """표 전체를 정규화합니다. 행이 없으면 빈 목록."""
        if not table:
            logger.info("[Normalizer] 빈 표가 입력되었습니다")
            return []

        start_time = datetime.now()
        rows = [_as_cells(row) for row in table]

        header_index = detect_header_row(rows)
        headers = rows[header_index]
        header_map = HeaderMap.from_headers(headers)
        mapped = {k: v for k, v in header_map.as_dict().items() if v is not None}
        logger.info(f"[Normalizer] 헤더 행: {header_index}, 매핑: {mapped}")

        products = []
        dropped = 0
        for offset, cells in enumerate(rows[header_index + 1:], start=header_index + 2):
            row = SheetRow(
                headers=headers,
                cells=cells,
                row_number=offset,
                header_map=header_map,
            )
            product = self.normalize_row(row)
            if product is None:
                dropped += 1
                continue
            products.append(product)

        elapsed = (datetime.now() - start_time).total_seconds()
        logger.info(
            f"[Normalizer] 제품 {len(products)}개 정규화, 빈 행 {dropped}개 제외 "
            f"({elapsed:.3f}초)"
        )
        return products

    def normalize_row(self, row: SheetRow) -> Optional[ProductRecord]:
        """
        행 하나를 ProductRecord로 변환합니다.
        식별 필드(name, code, url, image_url)가 모두 비어있으면 None.
        """
        description = row.value("description")
        image = self.image_resolver.resolve(row)
        pdf_url, pdf_proxied = self.pdf_resolver.resolve(row)

        product = ProductRecord(
            row_number=row.row_number,
            code=row.value("code"),
            name=row.value("name"),
            description=description,
            category=row.value("category"),
            url=row.value("url"),
            image_url=image.direct,
            image_proxied=image.proxied,
            pdf_url=pdf_url,
            pdf_proxied=pdf_proxied,
        )
        if not product.has_identity():
            return None

        product.specs_bullets = self.bullet_extractor.extract(row, description=description)
        return product


def normalize(table: Optional[RawTable]) -> list[ProductRecord]:
    """모듈 수준 단축 함수 (기본 프록시 경로 사용)."""
    return RowNormalizer().normalize(table)

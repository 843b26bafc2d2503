"""Google Sheets 값(values) 조회 클라이언트입니다.

Sheets API v4의 values 엔드포인트를 API 키로 호출하여
RawTable(행 × 셀 문자열 목록)을 가져옵니다.

필요한 환경 변수:
- GSHEET_ID       스프레드시트 ID
- GSHEET_API_KEY  Sheets API가 활성화된 Google API 키
"""

import logging
import re
from typing import Optional
from urllib.parse import quote

import httpx

from app.config import Settings, get_settings
from app.exceptions import SheetFetchError

logger = logging.getLogger(__name__)

DEFAULT_SHEET = "Products"
WIDE_COLUMNS = "A:ZZZ"


def normalize_range(value: Optional[str]) -> str:
    """
    요청 범위를 항상 넓은 열 범위로 보정합니다.

    - 빈 값            → Products!A:ZZZ
    - 시트 이름만      → <시트>!A:ZZZ
    - Products!A1:Z999 → Products!A:ZZZ (왼쪽 열은 유지, 행 번호 제거, 오른쪽은 ZZZ)
    """
    range_ = (value or "").strip() or f"{DEFAULT_SHEET}!{WIDE_COLUMNS}"

    if "!" not in range_:
        return f"{range_}!{WIDE_COLUMNS}"

    sheet, _, cols = range_.partition("!")
    if not cols:
        return f"{sheet}!{WIDE_COLUMNS}"

    if ":" in cols:
        left = re.sub(r"\d+$", "", cols.split(":")[0]) or "A"
        return f"{sheet}!{left}:ZZZ"

    return f"{sheet}!{WIDE_COLUMNS}"


class SheetsClient:
    """
    스프레드시트 값 조회 클라이언트.

    Args:
        settings: 애플리케이션 설정
        client: 재사용할 httpx.AsyncClient (테스트에서 MockTransport 주입용)
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.settings = settings or get_settings()
        self._client = client

    def build_url(self, range_: str) -> str:
        return (
            f"{self.settings.sheets_api_base}/{quote(self.settings.gsheet_id, safe='')}"
            f"/values/{quote(range_, safe='')}"
        )

    async def fetch_values(self, range_: Optional[str] = None) -> tuple[str, list[list[str]]]:
        """
        시트 값을 조회합니다.

        Returns:
            (정규화된 범위, RawTable)

        Raises:
            SheetFetchError: 환경 변수 누락, 네트워크 오류, 2xx가 아닌 응답
        """
        if not self.settings.gsheet_id or not self.settings.gsheet_api_key:
            raise SheetFetchError("Missing GSHEET_ID or GSHEET_API_KEY env vars")

        normalized = normalize_range(range_ or self.settings.default_range)
        params = {
            "majorDimension": "ROWS",
            "valueRenderOption": "FORMATTED_VALUE",
            "dateTimeRenderOption": "FORMATTED_STRING",
            "key": self.settings.gsheet_api_key,
        }

        logger.info(f"[Sheets] 시트 조회: {normalized}")
        try:
            if self._client is not None:
                response = await self._client.get(self.build_url(normalized), params=params)
            else:
                async with httpx.AsyncClient(timeout=30.0) as client:
                    response = await client.get(self.build_url(normalized), params=params)
        except httpx.HTTPError as e:
            logger.error(f"[Sheets] 네트워크 오류: {type(e).__name__}: {e}")
            raise SheetFetchError(
                f"Sheet fetch failed: {type(e).__name__}",
                details={"range": normalized},
            ) from e

        if response.status_code != 200:
            logger.error(f"[Sheets] API 오류 {response.status_code}")
            raise SheetFetchError(
                "Sheets API error",
                details={
                    "range": normalized,
                    "status": response.status_code,
                    "body": response.text[:500],
                },
            )

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"[Sheets] JSON이 아닌 응답: {e}")
            raise SheetFetchError(
                "Sheets API returned invalid JSON",
                details={"range": normalized, "body": response.text[:500]},
            ) from e
        if not isinstance(payload, dict):
            raise SheetFetchError(
                "Sheets API returned an unexpected payload",
                details={"range": normalized, "body": response.text[:500]},
            )

        values = payload.get("values") or []
        logger.info(f"[Sheets] {len(values)}행 수신")
        return normalized, values

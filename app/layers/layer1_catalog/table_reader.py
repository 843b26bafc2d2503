"""
로컬 카탈로그 파일(.csv / .xlsx / .xls) 리더입니다.
Pandas 라이브러리로 파일을 읽어 스프레드시트 API와 같은 RawTable(2차원 문자열 목록)로 변환합니다.
헤더 위치는 알 수 없으므로 header=None으로 읽고, 헤더 감지는 RowNormalizer에 맡깁니다.
"""

import csv
import io
import logging
from pathlib import Path
from typing import Optional, Union

import pandas as pd

from app.exceptions import InputValidationError

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = [".csv", ".xlsx", ".xls"]


def _frame_to_table(df: pd.DataFrame) -> list[list[str]]:
    """DataFrame을 문자열 표로 변환합니다. 뒤쪽 빈 셀은 잘라냅니다."""
    df = df.fillna("")
    table = []
    for values in df.astype(str).values.tolist():
        cells = [v.strip() for v in values]
        while cells and not cells[-1]:
            cells.pop()
        table.append(cells)
    return table


def _read_csv(source: Union[str, Path, bytes]) -> pd.DataFrame:
    """
    CSV는 행마다 셀 수가 다를 수 있습니다 (헤더 위의 제목 행 등).
    가장 긴 행 기준으로 열 이름을 미리 정해서 읽습니다.
    """
    raw = source if isinstance(source, bytes) else Path(source).read_bytes()
    text = raw.decode("utf-8-sig")
    width = max((len(r) for r in csv.reader(io.StringIO(text))), default=0)
    if width == 0:
        return pd.DataFrame()
    return pd.read_csv(
        io.StringIO(text),
        header=None,
        names=list(range(width)),
        dtype=str,
        keep_default_na=False,
    )


def read_table(
    source: Union[str, Path, bytes],
    filename: Optional[str] = None,
    sheet_name: Optional[str] = None,
) -> list[list[str]]:
    """
    파일 경로나 바이트에서 RawTable을 읽습니다.

    Args:
        source: 파일 경로 또는 파일 내용(bytes)
        filename: bytes를 넘긴 경우 확장자 판단용 파일명
        sheet_name: 엑셀 시트 이름 (없으면 'Products' 시트, 그것도 없으면 첫 시트)
    """
    name = filename or (str(source) if not isinstance(source, bytes) else "")
    ext = Path(name).suffix.lower()
    if ext not in SUPPORTED_EXTENSIONS:
        raise InputValidationError(
            f"지원하지 않는 카탈로그 파일 형식입니다: {ext or '(없음)'}",
            details={"allowed": SUPPORTED_EXTENSIONS},
        )

    handle = io.BytesIO(source) if isinstance(source, bytes) else source

    if ext == ".csv":
        df = _read_csv(source)
    else:
        xlsx = pd.ExcelFile(handle)
        target = sheet_name
        if target is None:
            target = "Products" if "Products" in xlsx.sheet_names else xlsx.sheet_names[0]
        df = pd.read_excel(xlsx, sheet_name=target, header=None, dtype=str)

    table = _frame_to_table(df)
    logger.info(f"[TableReader] {name}: {len(table)}행 읽음")
    return table

"""
원격 리소스 조회 결과 모델입니다.
선택적(optional) 리소스는 예외 대신 이 결과 객체로 성공/실패를 전달합니다.
"""

from typing import Optional
from pydantic import BaseModel


class FetchResult(BaseModel):
    """fetch(url) → Ok(bytes) | Err(reason)."""

    url: str
    ok: bool
    content: bytes = b""
    content_type: Optional[str] = None
    status_code: Optional[int] = None
    error: Optional[str] = None

    @classmethod
    def success(
        cls,
        url: str,
        content: bytes,
        content_type: Optional[str] = None,
        status_code: int = 200,
    ) -> "FetchResult":
        return cls(
            url=url,
            ok=True,
            content=content,
            content_type=content_type,
            status_code=status_code,
        )

    @classmethod
    def failure(
        cls,
        url: str,
        error: str,
        status_code: Optional[int] = None,
    ) -> "FetchResult":
        return cls(url=url, ok=False, error=error, status_code=status_code)

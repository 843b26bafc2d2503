"""
제안서 덱 생성 시스템 커스텀 예외 계층입니다.
각 레이어/서비스별 구조화된 에러 코드와 메시지를 제공합니다.
"""

from typing import Optional, Any


class DeckBuilderError(Exception):
    """덱 생성 시스템 기본 예외 클래스."""

    def __init__(
        self,
        message: str,
        error_code: str = "ERR_UNKNOWN",
        details: Optional[Any] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details
        super().__init__(self.message)


class SheetFetchError(DeckBuilderError):
    """스프레드시트(카탈로그) 로딩 실패. 사용자에게 그대로 노출됩니다."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, error_code="ERR_SHEET_001", details=details)


class UpstreamFetchError(DeckBuilderError):
    """프록시 대상(이미지/PDF) 서버 응답 실패."""

    def __init__(
        self,
        message: str,
        status_code: int = 502,
        details: Optional[Any] = None,
    ):
        self.status_code = status_code
        super().__init__(message, error_code="ERR_FETCH_001", details=details)


class GenerationError(DeckBuilderError):
    """덱 직렬화 단계에서 발생한 예상치 못한 에러."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, error_code="ERR_GEN_001", details=details)


class InputValidationError(DeckBuilderError):
    """입력 유효성 검증 에러 (400 응답)."""

    def __init__(
        self,
        message: str,
        details: Optional[Any] = None,
        error_code: str = "ERR_INPUT_001",
    ):
        super().__init__(message, error_code=error_code, details=details)


class ExportPreconditionError(InputValidationError):
    """선택된 제품 없이 내보내기를 요청한 경우. 슬라이드 작업 전에 중단합니다."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, details=details, error_code="ERR_EXPORT_001")


def http_status_for(exc: DeckBuilderError) -> int:
    """예외 종류에 맞는 HTTP 상태 코드."""
    if isinstance(exc, InputValidationError):
        return 400
    if isinstance(exc, UpstreamFetchError):
        return exc.status_code
    if isinstance(exc, SheetFetchError):
        return 502
    return 500

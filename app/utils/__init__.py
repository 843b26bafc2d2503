"""유틸리티 모듈."""

from .validation import (
    validate_proxy_url,
    build_download_filename,
    clamp_text,
)

__all__ = [
    "validate_proxy_url",
    "build_download_filename",
    "clamp_text",
]

"""Layer 3: Image and spec-sheet URL resolution."""

from .image_resolver import (
    ImageResolver,
    PdfResolver,
    resolve_image,
    to_direct_url,
    proxy_url,
    extract_formula_url,
)

__all__ = [
    "ImageResolver",
    "PdfResolver",
    "resolve_image",
    "to_direct_url",
    "proxy_url",
    "extract_formula_url",
]

"""Layer 2: Spec-bullet extraction from free-form spreadsheet columns."""

from .bullet_extractor import BulletExtractor, extract_bullets, split_bullets, dedupe

__all__ = [
    "BulletExtractor",
    "extract_bullets",
    "split_bullets",
    "dedupe",
]

"""Layer 4: Slide-deck assembly (python-pptx) with PDF spec-sheet rendering."""

from .assembler import DeckAssembler, assemble_deck, group_by_category, derive_bullets
from .pdf_renderer import render_pdf_pages

__all__ = [
    "DeckAssembler",
    "assemble_deck",
    "group_by_category",
    "derive_bullets",
    "render_pdf_pages",
]

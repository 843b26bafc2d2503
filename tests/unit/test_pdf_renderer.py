"""Unit tests for spec-sheet PDF rasterization (PyMuPDF)."""

import pytest

from app.layers.layer4_deck.pdf_renderer import render_pdf_pages

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def test_renders_first_pages_only(pdf_factory):
    pages = render_pdf_pages(pdf_factory(3), max_pages=2, scale=1.0)
    assert len(pages) == 2
    assert all(page.startswith(PNG_SIGNATURE) for page in pages)


def test_short_pdf_renders_all_pages(pdf_factory):
    assert len(render_pdf_pages(pdf_factory(1), max_pages=2, scale=1.0)) == 1


def test_zero_pages_requested(pdf_factory):
    assert render_pdf_pages(pdf_factory(2), max_pages=0) == []


def test_scale_increases_resolution(pdf_factory):
    from PIL import Image
    import io

    pdf = pdf_factory(1)
    small = Image.open(io.BytesIO(render_pdf_pages(pdf, max_pages=1, scale=1.0)[0]))
    large = Image.open(io.BytesIO(render_pdf_pages(pdf, max_pages=1, scale=2.0)[0]))
    assert large.width == pytest.approx(small.width * 2, abs=2)


def test_corrupt_pdf_raises():
    with pytest.raises(Exception):
        render_pdf_pages(b"not a pdf at all", max_pages=1)

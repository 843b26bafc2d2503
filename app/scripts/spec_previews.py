#!/usr/bin/env python3
"""Spec sheet preview generator.

specs/ 폴더의 PDF마다 첫 페이지를 <이름>.png 미리보기로 만듭니다.
이미 미리보기 이미지(.png/.jpg/.jpeg/.webp)가 있으면 건너뜁니다.

Usage:
    python -m app.scripts.spec_previews
    python -m app.scripts.spec_previews --check
    python -m app.scripts.spec_previews --dir public/specs
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

logger = logging.getLogger(__name__)

PREVIEW_EXTENSIONS = (".png", ".jpg", ".jpeg", ".webp")


def find_missing_previews(specs_dir: Path) -> list[Path]:
    """미리보기 이미지가 없는 PDF 목록."""
    missing = []
    for pdf_path in sorted(specs_dir.glob("*.pdf")):
        if not any(pdf_path.with_suffix(ext).exists() for ext in PREVIEW_EXTENSIONS):
            missing.append(pdf_path)
    return missing


def render_preview(pdf_path: Path, scale: float = 2.0) -> Path:
    """PDF 첫 페이지를 같은 이름의 PNG로 저장합니다."""
    from app.layers.layer4_deck.pdf_renderer import render_pdf_pages

    pages = render_pdf_pages(pdf_path.read_bytes(), max_pages=1, scale=scale)
    if not pages:
        raise ValueError(f"페이지가 없는 PDF입니다: {pdf_path.name}")
    out_path = pdf_path.with_suffix(".png")
    out_path.write_bytes(pages[0])
    return out_path


def main(argv: Optional[list[str]] = None) -> int:
    from app.config import get_settings

    settings = get_settings()
    parser = argparse.ArgumentParser(description="스펙시트 PDF 미리보기 생성")
    parser.add_argument(
        "--dir",
        type=str,
        default=str(Path(settings.asset_root) / "specs"),
        help="스펙시트 PDF 디렉토리",
    )
    parser.add_argument("--check", action="store_true", help="누락된 미리보기만 보고 (생성하지 않음)")
    parser.add_argument("--scale", type=float, default=settings.pdf_render_scale, help="렌더링 배율")
    args = parser.parse_args(argv)

    specs_dir = Path(args.dir)
    if not specs_dir.is_dir():
        print(f'디렉토리를 찾을 수 없습니다: {specs_dir}')
        return 1

    missing = find_missing_previews(specs_dir)
    if args.check:
        for pdf_path in missing:
            print(f'  미리보기 없음: {pdf_path.name}')
        print(f'\n누락: {len(missing)}개')
        return 1 if missing else 0

    failed = 0
    for pdf_path in missing:
        try:
            out_path = render_preview(pdf_path, scale=args.scale)
            print(f'  생성: {out_path.name}')
        except Exception as e:
            failed += 1
            logger.warning(f"[Previews] {pdf_path.name} 렌더링 실패: {e}")
            print(f'  실패: {pdf_path.name} ({type(e).__name__})')

    print(f'\n생성 {len(missing) - failed}개, 실패 {failed}개')
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())

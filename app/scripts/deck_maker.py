#!/usr/bin/env python3
"""Offline deck maker: local catalog file → proposal deck.

Usage:
    python -m app.scripts.deck_maker catalog.xlsx
    python -m app.scripts.deck_maker catalog.csv --codes VAN-01,TAP-02 --project "Villa 7"
    python -m app.scripts.deck_maker catalog.xlsx --contact amy-keys --out villa7.pptx
"""

import asyncio
import argparse
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Optional

sys.path.insert(0, str(Path(__file__).parent.parent.parent))


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="로컬 카탈로그로 제안서 덱 생성")
    parser.add_argument("catalog", type=str, help="카탈로그 파일 (.csv / .xlsx / .xls)")
    parser.add_argument("--sheet", type=str, default=None, help="엑셀 시트 이름")
    parser.add_argument("--codes", type=str, default="", help="포함할 제품 코드 (쉼표 구분, 비우면 전체)")
    parser.add_argument("--project", type=str, default="", help="프로젝트 이름")
    parser.add_argument("--client", type=str, default="", help="고객사 이름")
    parser.add_argument("--contact", type=str, default=None, help="담당자 id / 이메일 / 이름")
    parser.add_argument("--date", type=str, default="", help="발표 날짜 (YYYY-MM-DD, 비우면 오늘)")
    parser.add_argument("--out", type=str, default=None, help="출력 파일 경로")
    return parser.parse_args(argv)


def select_by_codes(products: list, codes: str) -> list:
    """코드 목록 순서대로 제품을 고릅니다. 코드를 주지 않으면 전체."""
    wanted = [c.strip().casefold() for c in codes.split(",") if c.strip()]
    if not wanted:
        return list(products)
    by_code = {p.code.strip().casefold(): p for p in reversed(products) if p.code.strip()}
    return [by_code[code] for code in wanted if code in by_code]


async def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)

    from app.config import get_settings
    from app.exceptions import DeckBuilderError
    from app.layers.layer1_catalog.normalizer import RowNormalizer
    from app.layers.layer1_catalog.table_reader import read_table
    from app.layers.layer4_deck.assembler import assemble_deck
    from app.services.session import SessionContext

    print('\n' + '=' * 70)
    print('제안서 덱 생성')
    print(f'시작 시간: {datetime.now().strftime("%Y-%m-%d %H:%M:%S")}')
    print('=' * 70)

    start_time = time.time()
    try:
        table = read_table(Path(args.catalog), sheet_name=args.sheet)
        specs_dir = Path(get_settings().asset_root) / "specs"
        products = RowNormalizer(specs_dir=str(specs_dir)).normalize(table)
        print(f'\n카탈로그: {args.catalog} ({len(products)}개 제품)')

        selected = select_by_codes(products, args.codes)
        if args.codes and len(selected) < len([c for c in args.codes.split(",") if c.strip()]):
            print('  일부 코드를 카탈로그에서 찾지 못했습니다')

        session = SessionContext.create(
            contact_id=args.contact,
            project={
                "project_name": args.project,
                "client_name": args.client,
                "presentation_date": args.date,
            },
        )
        document = await assemble_deck(selected, session.to_deck_form())
    except DeckBuilderError as e:
        print(f'\n[오류] {e.error_code}: {e.message}')
        return 1

    out_path = Path(args.out) if args.out else Path(document.filename)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_bytes(document.content)

    elapsed = time.time() - start_time
    print(f'\n슬라이드: {document.slide_count}장')
    print(f'출력 파일: {out_path}')
    print(f'소요 시간: {elapsed:.1f}초')
    return 0


def run_deck_maker():
    """CLI 진입점."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run_deck_maker()

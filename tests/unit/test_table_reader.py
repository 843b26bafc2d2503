"""Unit tests for local catalog file reading (pandas)."""

import io

import pandas as pd
import pytest

from app.exceptions import InputValidationError
from app.layers.layer1_catalog.table_reader import read_table


def test_csv_with_title_row(tmp_path):
    path = tmp_path / "catalog.csv"
    path.write_text("Product list\nSKU,Product,Desc\nA-1,Alpha,First\nB-2,Bravo\n", encoding="utf-8")
    table = read_table(path)
    assert table == [
        ["Product list"],
        ["SKU", "Product", "Desc"],
        ["A-1", "Alpha", "First"],
        ["B-2", "Bravo"],
    ]


def test_csv_bytes_keep_leading_zeros():
    table = read_table(b"Code,Name\n007,Bond\n", filename="catalog.csv")
    assert table[1] == ["007", "Bond"]


def test_xlsx_prefers_products_sheet():
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        pd.DataFrame([["ignore"]]).to_excel(writer, sheet_name="Notes", header=False, index=False)
        pd.DataFrame([["SKU", "Product"], ["A-1", "Alpha"]]).to_excel(
            writer, sheet_name="Products", header=False, index=False
        )
    table = read_table(buffer.getvalue(), filename="catalog.xlsx")
    assert table == [["SKU", "Product"], ["A-1", "Alpha"]]


def test_unsupported_extension():
    with pytest.raises(InputValidationError):
        read_table(b"{}", filename="catalog.json")

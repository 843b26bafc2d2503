"""Unit tests for the Row Normalizer (RawTable → ProductRecord)."""

import pytest

from app.layers.layer1_catalog.normalizer import RowNormalizer, normalize


@pytest.fixture
def normalizer():
    return RowNormalizer()


class TestNormalize:
    def test_title_row_above_header_is_skipped(self, normalizer, sample_table):
        products = normalizer.normalize(sample_table)
        assert [p.code for p in products] == ["VAN-01", "TAP-02", ""]

    def test_fields_are_extracted(self, normalizer, sample_table):
        vanity = normalizer.normalize(sample_table)[0]
        assert vanity.name == "Oslo Vanity"
        assert vanity.description == "Wall hung vanity in oak"
        assert vanity.category == "Vanities"
        assert vanity.row_number == 3

    def test_image_is_resolved_and_proxied(self, normalizer, sample_table):
        vanity = normalizer.normalize(sample_table)[0]
        assert vanity.image_url == "https://cdn.example/vanity.png"
        assert vanity.image_proxied == "/image-proxy?url=https%3A%2F%2Fcdn.example%2Fvanity.png"

    def test_pdf_key_resolves_to_specs_path(self, normalizer, sample_table):
        vanity = normalizer.normalize(sample_table)[0]
        assert vanity.pdf_url == "/specs/oslo.pdf"
        assert vanity.pdf_proxied == "/specs/oslo.pdf"

    def test_bullets_are_deduplicated_across_strategies(self, normalizer, sample_table):
        vanity = normalizer.normalize(sample_table)[0]
        assert vanity.specs_bullets == ["Soft close drawers", "Oak veneer"]

    def test_short_row_defaults_to_empty_values(self, normalizer, sample_table):
        mixer = normalizer.normalize(sample_table)[1]
        assert mixer.name == "Flow Mixer"
        assert mixer.image_url is None
        assert mixer.image_proxied is None
        assert mixer.pdf_url is None
        assert mixer.specs_bullets == ["Basin mixer"]

    def test_row_with_only_image_is_kept(self, normalizer, sample_table):
        image_only = normalizer.normalize(sample_table)[2]
        assert image_only.name == ""
        assert image_only.image_url == "https://cdn.example/only-image.jpg"
        assert image_only.row_number == 6

    def test_blank_rows_are_dropped(self, normalizer):
        table = [
            ["Name", "Code", "Category", "Notes"],
            ["", "", "Vanities", "orphan note"],
            ["Basin", "", "", ""],
        ]
        products = normalizer.normalize(table)
        assert [p.name for p in products] == ["Basin"]

    def test_missing_column_leaves_field_empty_for_every_row(self, normalizer):
        table = [["SKU", "Product", "Desc"], ["A", "Alpha", "x"], ["B", "Bravo", "y"]]
        products = normalizer.normalize(table)
        assert [p.category for p in products] == ["", ""]

    def test_sheet_order_is_preserved(self, normalizer):
        table = [["Name"], ["Zulu"], ["alpha"], ["Mike"]]
        assert [p.name for p in normalizer.normalize(table)] == ["Zulu", "alpha", "Mike"]

    @pytest.mark.parametrize("table", [[], None, [[]]])
    def test_empty_table_yields_empty_list(self, normalizer, table):
        assert normalizer.normalize(table) == []

    def test_none_cells_are_tolerated(self, normalizer):
        products = normalizer.normalize([["Name", "Code"], [None, "X-1"]])
        assert products[0].code == "X-1"
        assert products[0].name == ""

    def test_image_past_header_width_keeps_row(self, normalizer):
        table = [["Name", "Notes"], ["", "", "https://cdn.example/extra.png"]]
        products = normalizer.normalize(table)
        assert [p.image_url for p in products] == ["https://cdn.example/extra.png"]
        assert products[0].specs_bullets == []

    def test_code_resolves_local_spec_sheet(self, tmp_path):
        (tmp_path / "VAN-01.pdf").write_bytes(b"%PDF-1.7")
        table = [["SKU", "Product"], ["VAN-01", "Oslo"], ["TAP-02", "Flow"]]
        products = RowNormalizer(specs_dir=str(tmp_path)).normalize(table)
        assert [p.pdf_url for p in products] == ["/specs/VAN-01.pdf", None]

    def test_custom_proxy_path(self):
        table = [["Name", "Image"], ["A", "https://cdn.example/a.png"]]
        product = RowNormalizer(image_proxy_path="/api/img").normalize(table)[0]
        assert product.image_proxied.startswith("/api/img?url=")

    def test_module_level_shortcut(self, sample_table):
        assert len(normalize(sample_table)) == 3


class TestProductJson:
    def test_records_serialize_with_camel_case_keys(self, normalizer, sample_table):
        data = normalizer.normalize(sample_table)[0].model_dump(by_alias=True)
        assert data["imageProxied"].startswith("/image-proxy")
        assert data["specsBullets"] == ["Soft close drawers", "Oak veneer"]
        assert data["rowNumber"] == 3

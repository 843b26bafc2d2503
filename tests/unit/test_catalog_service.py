"""Unit tests for the catalog service, sorting/filtering helpers and the TTL cache."""

from unittest.mock import AsyncMock, patch

import pytest

from app.exceptions import SheetFetchError
from app.models import ProductRecord
from app.services.cache import CatalogCache
from app.services.catalog import (
    CatalogService,
    category_of,
    filter_products,
    list_categories,
    sort_products,
)


@pytest.fixture
def products():
    return [
        ProductRecord(code="T-2", name="tap", category="Tapware", description="Brass basin mixer"),
        ProductRecord(code="V-1", name="Vanity", category="Vanities"),
        ProductRecord(code="A-9", name="Accessory", category=""),
        ProductRecord(code="T-1", name="Shower", category="tapware"),
    ]


class TestHelpers:
    def test_blank_category_is_other(self):
        assert category_of(ProductRecord(category="  ")) == "Other"

    def test_categories_in_first_seen_order(self, products):
        assert list_categories(products) == ["Tapware", "Vanities", "Other", "tapware"]

    def test_sheet_sort_keeps_input_order(self, products):
        assert [p.code for p in sort_products(products, "sheet")] == ["T-2", "V-1", "A-9", "T-1"]

    def test_name_sort_is_case_insensitive(self, products):
        assert [p.name for p in sort_products(products, "name")] == ["Accessory", "Shower", "tap", "Vanity"]

    def test_code_sort(self, products):
        assert [p.code for p in sort_products(products, "code")] == ["A-9", "T-1", "T-2", "V-1"]

    def test_category_sort_is_stable(self, products):
        assert [p.code for p in sort_products(products, "category")] == ["A-9", "T-2", "T-1", "V-1"]

    def test_query_matches_name_code_and_description(self, products):
        assert [p.code for p in filter_products(products, query="BRASS")] == ["T-2"]
        assert [p.code for p in filter_products(products, query="v-1")] == ["V-1"]

    def test_category_filter_is_case_insensitive(self, products):
        assert [p.code for p in filter_products(products, category="TAPWARE")] == ["T-2", "T-1"]
        assert [p.code for p in filter_products(products, category="other")] == ["A-9"]

    def test_no_filters(self, products):
        assert filter_products(products) == products


def _service(settings, table, ttl=300):
    sheets = AsyncMock()
    sheets.fetch_values = AsyncMock(return_value=("Products!A:ZZZ", table))
    return CatalogService(settings, sheets_client=sheets, cache=CatalogCache(ttl_seconds=ttl)), sheets


class TestCatalogService:
    async def test_load_products_normalizes_sheet_values(self, settings, sample_table):
        service, _ = _service(settings, sample_table)
        products = await service.load_products()
        assert [p.code for p in products] == ["VAN-01", "TAP-02", ""]

    async def test_results_are_cached_per_range(self, settings, sample_table):
        service, sheets = _service(settings, sample_table)
        await service.load_products("Products!A1:Z50")
        await service.load_products("Products")
        assert sheets.fetch_values.await_count == 1

    async def test_refresh_bypasses_cache(self, settings, sample_table):
        service, sheets = _service(settings, sample_table)
        await service.load_products()
        await service.load_products(refresh=True)
        assert sheets.fetch_values.await_count == 2

    async def test_zero_ttl_disables_cache(self, settings, sample_table):
        service, sheets = _service(settings, sample_table, ttl=0)
        await service.load_products()
        await service.load_products()
        assert sheets.fetch_values.await_count == 2

    async def test_sheet_errors_propagate(self, settings):
        sheets = AsyncMock()
        sheets.fetch_values = AsyncMock(side_effect=SheetFetchError("Sheets API error"))
        service = CatalogService(settings, sheets_client=sheets, cache=CatalogCache())
        with pytest.raises(SheetFetchError):
            await service.load_products()


class TestCatalogCache:
    def test_set_and_get(self):
        cache = CatalogCache(ttl_seconds=60)
        cache.set("k", [1, 2])
        assert cache.get("k") == [1, 2]
        assert cache.stats.hits == 1

    def test_expired_entry_is_removed(self):
        cache = CatalogCache(ttl_seconds=60)
        with patch("app.services.cache.time") as mock_time:
            mock_time.time.return_value = 1000.0
            cache.set("k", "v")
            mock_time.time.return_value = 1061.0
            assert cache.get("k") is None
        assert cache.stats.misses == 1
        assert cache.stats.evictions == 1

    def test_disabled_cache_stores_nothing(self):
        cache = CatalogCache(ttl_seconds=0)
        cache.set("k", "v")
        assert cache.get("k") is None
        assert not cache.enabled

    def test_oldest_entry_is_evicted(self):
        cache = CatalogCache(ttl_seconds=60, max_entries=2)
        with patch("app.services.cache.time") as mock_time:
            for index, key in enumerate(["a", "b", "c"]):
                mock_time.time.return_value = 1000.0 + index
                cache.set(key, key)
            assert cache.get("a") is None
            assert cache.get("c") == "c"

    def test_delete_and_clear(self):
        cache = CatalogCache(ttl_seconds=60)
        cache.set("a", 1)
        cache.set("b", 2)
        assert cache.delete("a") is True
        assert cache.delete("a") is False
        assert cache.clear() == 1

"""
Tests for Product / Catalog and the catalog loaders.
"""
import pytest
from pydantic import ValidationError

from luxematch.core.config import DEFAULT_CATALOG_PATH
from luxematch.domain.models.product import Catalog, Product
from luxematch.domain.repositories.catalog_file_repo import load_catalog_file

from conftest import PRODUCT_RECORDS


class TestProduct:

    def test_reads_dataset_field_names(self):
        p = Product.model_validate(PRODUCT_RECORDS[0])
        assert p.product_id == "A1"
        assert p.name == "Ivory Silk Blouse"
        assert p.brand == "Zara"
        assert p.primary_color == "White"
        assert p.price == 2499
        assert p.num_images == 5

    def test_is_immutable(self):
        p = Product.model_validate(PRODUCT_RECORDS[0])
        with pytest.raises(ValidationError):
            p.name = "Something else"

    def test_rejects_negative_price(self):
        with pytest.raises(ValidationError):
            Product.model_validate({**PRODUCT_RECORDS[0], "Price": -1})

    def test_rejects_negative_image_count(self):
        with pytest.raises(ValidationError):
            Product.model_validate({**PRODUCT_RECORDS[0], "NumImages": -2})

    def test_numeric_product_id_kept_as_string(self):
        p = Product.model_validate({**PRODUCT_RECORDS[0], "ProductID": 10017413})
        assert p.product_id == "10017413"


class TestCatalog:

    def test_keeps_load_order(self, catalog):
        assert [p.product_id for p in catalog] == ["A1", "B2", "C3", "D4"]
        assert len(catalog) == 4

    def test_get_is_exact_match(self, catalog):
        assert catalog.get("A1").name == "Ivory Silk Blouse"
        assert catalog.get("a1") is None
        assert catalog.get(" A1") is None
        assert "C3" in catalog
        assert "Z9" not in catalog

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ValueError, match="Duplicate ProductID"):
            Catalog.from_records([PRODUCT_RECORDS[0], PRODUCT_RECORDS[0]])

    def test_numeric_ids_found_by_string(self):
        catalog = Catalog.from_records([{**PRODUCT_RECORDS[0], "ProductID": 10017413}])
        assert catalog.get("10017413").name == "Ivory Silk Blouse"

    def test_empty_catalog(self):
        catalog = Catalog([])
        assert len(catalog) == 0
        assert list(catalog) == []


class TestCatalogFile:

    def test_bundled_sample_loads(self):
        catalog = load_catalog_file(DEFAULT_CATALOG_PATH)
        assert len(catalog) == 16
        first = next(iter(catalog))
        assert first.product_id == "10017413"

    def test_file_with_duplicates_fails(self, tmp_path):
        path = tmp_path / "dup.json"
        path.write_text(
            '[{"ProductID": "X", "ProductName": "a"}, {"ProductID": "X", "ProductName": "b"}]',
            encoding="utf-8",
        )
        with pytest.raises(ValueError):
            load_catalog_file(path)

"""
Unit tests for CatalogService.

Run: pytest tests/unit/test_catalog_service.py -v
"""

import pytest

from services.catalog_service import CatalogService
from models.pricing import ProductType
from exceptions import CatalogItemNotFoundError, DatabaseError

from tests.factories import CatalogRecordFactory


class TestGetRecord:
    """Tests for CatalogService.get_record()"""

    def test_returns_carpet(self, mock_db, mock_supabase, sample_carpet_record):
        mock_supabase.set_table_data("products", [sample_carpet_record])
        service = CatalogService()

        record = service.get_record("carpet-001", ProductType.CARPET)

        assert record.id == "carpet-001"
        assert record.width == "180 cm"
        assert record.individual_stock_tracking is True

    def test_raw_material_uses_its_table(self, mock_db, mock_supabase, sample_raw_material_record):
        mock_supabase.set_table_data("raw_materials", [sample_raw_material_record])
        service = CatalogService()

        record = service.get_record("rm-001", "raw_material")

        assert record.name == "Wool Yarn 2/24"
        assert record.unit == "kg"

    def test_not_found(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("products", [CatalogRecordFactory.create(id="other")])
        service = CatalogService()

        with pytest.raises(CatalogItemNotFoundError) as exc_info:
            service.get_record("missing")

        assert exc_info.value.status_code == 404
        assert exc_info.value.code == "CATALOG_ITEM_NOT_FOUND"

    def test_single_row_miss_maps_to_not_found(self, mock_db, mock_supabase):
        """
        Supabase .single() raises instead of returning empty data.

        The PGRST116 "0 rows" error must surface as a 404, not a 500.
        """
        mock_supabase.set_execute_error(
            "products",
            Exception("{'code': 'PGRST116', 'message': 'The result contains 0 rows'}")
        )
        service = CatalogService()

        with pytest.raises(CatalogItemNotFoundError) as exc_info:
            service.get_record("missing")

        assert exc_info.value.status_code == 404

    def test_query_failure_raises_database_error(self, mock_db, mock_supabase):
        mock_supabase.set_table_error("products", RuntimeError("timeout"))
        service = CatalogService()

        with pytest.raises(DatabaseError):
            service.get_record("carpet-001")


class TestSearch:
    """Tests for CatalogService.search()"""

    def test_search_by_name(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("products", [
            CatalogRecordFactory.create_rug(name="Persian Blue"),
            CatalogRecordFactory.create_rug(name="Kashmir Red"),
        ])
        service = CatalogService()

        records = service.search(name="persian")

        assert [r.name for r in records] == ["Persian Blue"]

    def test_search_respects_limit(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("products", CatalogRecordFactory.create_batch(5))
        service = CatalogService()

        assert len(service.search(limit=2)) == 2

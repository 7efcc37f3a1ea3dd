"""
Shared test fixtures.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

import pytest
from decimal import Decimal
from unittest.mock import patch
from typing import Generator

from models.pricing import ProductDimensions, ProductType

# ===================
# MOCK SUPABASE CLIENT
# ===================

class MockSupabaseResponse:
    """Mock Supabase query response."""
    
    def __init__(self, data=None, count: int = None):
        self.data = data if data is not None else []
        if count is not None:
            self.count = count
        elif isinstance(self.data, list):
            self.count = len(self.data)
        else:
            self.count = 1


class MockSupabaseQuery:
    """Mock Supabase query builder with chainable methods."""
    
    def __init__(self, data: list = None, count: int = None, execute_error: Exception = None):
        self._data = data or []
        self._count = count
        self._execute_error = execute_error
        self._is_single = False
        self._filters = []
    
    def select(self, *args, **kwargs):
        return self
    
    def eq(self, column, value):
        self._filters.append((column, value))
        return self
    
    def ilike(self, column, pattern):
        needle = pattern.strip("%").lower()
        self._data = [row for row in self._data if needle in str(row.get(column, "")).lower()]
        return self
    
    def single(self):
        self._is_single = True
        return self
    
    def order(self, column, **kwargs):
        return self
    
    def limit(self, count):
        self._data = self._data[:count]
        return self
    
    def execute(self) -> MockSupabaseResponse:
        if self._execute_error:
            raise self._execute_error
        rows = [
            row for row in self._data
            if all(row.get(column) == value for column, value in self._filters)
        ]
        if self._is_single:
            # Return first item or None for single()
            return MockSupabaseResponse(data=rows[0] if rows else None, count=1 if rows else 0)
        return MockSupabaseResponse(
            data=rows,
            count=self._count if self._count is not None else len(rows)
        )


class MockSupabaseTable:
    """Mock Supabase table with configurable responses."""
    
    def __init__(
        self,
        data: list = None,
        count: int = None,
        error: Exception = None,
        execute_error: Exception = None
    ):
        self._data = data or []
        self._count = count
        self._error = error
        self._execute_error = execute_error
    
    def select(self, *args, **kwargs):
        if self._error:
            raise self._error
        return MockSupabaseQuery(self._data.copy(), self._count, self._execute_error)


class MockSupabaseClient:
    """Mock Supabase client."""
    
    def __init__(self):
        self._tables = {}
    
    def set_table_data(self, table_name: str, data: list, count: int = None):
        """Configure mock data for a table."""
        self._tables[table_name] = {"data": data, "count": count, "error": None, "execute_error": None}
    
    def set_table_error(self, table_name: str, error: Exception):
        """Make every query on a table raise."""
        self._tables[table_name] = {"data": [], "count": None, "error": error, "execute_error": None}
    
    def set_execute_error(self, table_name: str, error: Exception):
        """Make query execution on a table raise, as Supabase does for .single() misses."""
        self._tables[table_name] = {"data": [], "count": None, "error": None, "execute_error": error}
    
    def table(self, name: str) -> MockSupabaseTable:
        """Get mock table."""
        config = self._tables.get(name, {"data": [], "count": None, "error": None, "execute_error": None})
        return MockSupabaseTable(
            config["data"], config["count"], config["error"], config["execute_error"]
        )


# ===================
# FIXTURES
# ===================

@pytest.fixture
def mock_supabase() -> MockSupabaseClient:
    """
    Create a mock Supabase client.
    
    Usage:
        def test_something(mock_supabase):
            mock_supabase.set_table_data("products", [
                {"id": "1", "name": "Persian Blue", "width": "180 cm", ...}
            ])
    """
    return MockSupabaseClient()


@pytest.fixture
def mock_db(mock_supabase) -> Generator:
    """
    Patch the catalog's database client with the mock.

    Also drops the cached CatalogService so it picks up the mock.
    """
    import services.catalog_service as catalog_module

    catalog_module._catalog_service = None
    with patch("services.catalog_service.get_supabase_client", return_value=mock_supabase):
        yield mock_supabase
    catalog_module._catalog_service = None


@pytest.fixture
def carpet_dimensions() -> ProductDimensions:
    """180 × 270 cm carpet, no weight or GSM."""
    return ProductDimensions(
        product_type=ProductType.CARPET,
        width=Decimal("180"),
        height=Decimal("270"),
    )


@pytest.fixture
def full_carpet_dimensions() -> ProductDimensions:
    """Carpet with every pricing-relevant dimension."""
    return ProductDimensions(
        product_type=ProductType.CARPET,
        width=Decimal("200"),
        height=Decimal("300"),
        weight=Decimal("12.5"),
        gsm=Decimal("1800"),
        volume=Decimal("40"),
    )


@pytest.fixture
def sample_carpet_record() -> dict:
    """Carpet row as the catalog stores it."""
    return {
        "id": "carpet-001",
        "name": "Persian Blue Medallion",
        "unit": "piece",
        "width": "180 cm",
        "height": "270cm",
        "weight": "N/A",
        "stock": 12,
        "individual_stock_tracking": True,
    }


@pytest.fixture
def sample_raw_material_record() -> dict:
    """Raw material row as the catalog stores it."""
    return {
        "id": "rm-001",
        "name": "Wool Yarn 2/24",
        "unit": "kg",
        "weight": "25 kg",
        "stock": 500,
        "individual_stock_tracking": False,
    }


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client():
    """
    Create FastAPI test client.
    
    Usage:
        def test_endpoint(test_client):
            response = test_client.get("/api/pricing/units")
            assert response.status_code == 200
    """
    from fastapi.testclient import TestClient
    from main import app
    
    return TestClient(app)


@pytest.fixture
def test_client_with_mock_db(mock_db):
    """FastAPI test client whose catalog lookups hit the mock."""
    from fastapi.testclient import TestClient
    from main import app
    
    yield TestClient(app)

"""
Unit tests for PricingService.

Run: pytest tests/unit/test_pricing_service.py -v
"""

import pytest
from decimal import Decimal
from pydantic import ValidationError as PydanticValidationError

from services.pricing_service import PricingService, get_pricing_service
from models.catalog import CatalogRecord
from models.pricing import LineItem, LineItemSnapshot, PricingUnit, ProductDimensions, ProductType
from exceptions import LineItemNotValidError, UnknownLineItemFieldError

from tests.factories import CatalogRecordFactory, LineItemFactory


@pytest.fixture
def service() -> PricingService:
    return PricingService(currency_symbol="₹", decimal_places=2)


class TestCalculateItemPrice:
    """Tests for PricingService.calculate_item_price()"""

    def test_combines_calculator_and_validator(self, service):
        item = LineItemFactory.create(pricing_unit=PricingUnit.SQM, unit_price="200", quantity=2,
                                      width=180, height=270)

        result = service.calculate_item_price(item)

        assert result.is_valid is True
        assert result.total_price == Decimal("1944")

    def test_validate_item(self, service):
        assert service.validate_item(LineItemFactory.create(unit_price="1", quantity=1)) is True
        assert service.validate_item(LineItemFactory.create(unit_price="0", quantity=1)) is False

    def test_refresh_does_not_touch_input(self, service):
        item = LineItemFactory.create(unit_price="10", quantity=2)

        refreshed = service.refresh(item)

        assert refreshed.total_price == Decimal("20")
        assert refreshed.is_valid is True
        assert item.total_price is None

    def test_order_total_recalculates_stale_items(self, service):
        """Derived fields on input are ignored; totals are recomputed."""
        stale = LineItemFactory.create(unit_price="100", quantity=3).model_copy(
            update={"total_price": Decimal("1"), "is_valid": True}
        )
        invalid = LineItemFactory.create(unit_price="0", quantity=3)

        assert service.calculate_order_total([stale, invalid]) == Decimal("300")


class TestLineItemLifecycle:
    """Tests for create/update/snapshot."""

    def test_create_line_item_defaults(self, service, carpet_dimensions):
        item = service.create_line_item("rug-1", ProductType.CARPET, carpet_dimensions)

        assert item.quantity == 1
        assert item.unit_price == Decimal("0")
        assert item.pricing_unit == PricingUnit.SQM
        assert item.is_valid is False
        assert "enter a price" in item.error_message

    def test_catalog_unit_wins_when_computable(self, service, carpet_dimensions):
        item = service.create_line_item("rug-1", "carpet", carpet_dimensions, catalog_unit="roll")

        assert item.pricing_unit == PricingUnit.ROLL

    def test_catalog_unit_ignored_when_not_computable(self, service, carpet_dimensions):
        """A 'kg' stocking unit without weight falls back to the suggestion."""
        item = service.create_line_item("rug-1", "carpet", carpet_dimensions, catalog_unit="kg")

        assert item.pricing_unit == PricingUnit.SQM

    def test_raw_material_with_area_is_not_suggested_sqm(self, service, carpet_dimensions):
        """The line item's product type decides, not the one on the dimensions."""
        item = service.create_line_item("backing-1", ProductType.RAW_MATERIAL, carpet_dimensions)

        assert item.pricing_unit == PricingUnit.PIECE
        assert item.dimensions.product_type == ProductType.RAW_MATERIAL

    def test_line_item_overrides_dimension_type(self):
        dims = ProductDimensions(product_type=ProductType.CARPET, width=Decimal("200"))

        from_model = LineItem(product_id="a", product_type="raw_material", dimensions=dims)
        from_dict = LineItem(
            product_id="b", product_type="raw_material", dimensions={"product_type": "carpet"}
        )
        without_dims = LineItem(product_id="c", product_type="raw_material")

        assert from_model.dimensions.product_type == ProductType.RAW_MATERIAL
        assert from_model.dimensions.width == Decimal("200")
        assert from_dict.dimensions.product_type == ProductType.RAW_MATERIAL
        assert without_dims.dimensions.product_type == ProductType.RAW_MATERIAL
        assert dims.product_type == ProductType.CARPET

    def test_update_keeps_dimension_type_in_step(self, service, carpet_dimensions):
        item = service.create_line_item("backing-1", "raw_material", carpet_dimensions)

        item = service.update_line_item(item, dimensions=carpet_dimensions)

        assert item.dimensions.product_type == ProductType.RAW_MATERIAL

    def test_create_from_record(self, service):
        record = CatalogRecord(**CatalogRecordFactory.create_yarn(id="yarn-1", name="Wool"))

        item = service.create_line_item_from_record(record, ProductType.RAW_MATERIAL)

        assert item.product_id == "yarn-1"
        assert item.product_name == "Wool"
        assert item.pricing_unit == PricingUnit.KG
        assert item.dimensions.weight == Decimal("25")

    def test_update_recomputes(self, service, carpet_dimensions):
        item = service.create_line_item("rug-1", "carpet", carpet_dimensions)

        item = service.update_line_item(item, unit_price=Decimal("200"))
        item = service.update_line_item(item, quantity=2)

        assert item.is_valid is True
        assert item.unit_value == Decimal("4.86")
        assert item.total_price == Decimal("1944")

    def test_update_unit_switches_regime(self, service, carpet_dimensions):
        item = service.create_line_item("rug-1", "carpet", carpet_dimensions)
        item = service.update_line_item(item, unit_price=Decimal("1500"), quantity=2)

        item = service.update_line_item(item, pricing_unit=PricingUnit.PIECE)

        assert item.unit_value == Decimal("1")
        assert item.total_price == Decimal("3000")

    def test_update_dimensions_can_invalidate(self, service, carpet_dimensions):
        item = service.create_line_item("rug-1", "carpet", carpet_dimensions)
        item = service.update_line_item(item, unit_price=Decimal("200"))

        item = service.update_line_item(item, dimensions=ProductDimensions(height=Decimal("270")))

        assert item.is_valid is False
        assert "width" in item.error_message
        assert item.total_price == Decimal("0")

    def test_fractional_quantity_rejected(self, service, carpet_dimensions):
        item = service.create_line_item("rug-1", "carpet", carpet_dimensions)

        with pytest.raises(PydanticValidationError):
            service.update_line_item(item, quantity=1.5)

    def test_non_editable_field_rejected(self, service, carpet_dimensions):
        item = service.create_line_item("rug-1", "carpet", carpet_dimensions)

        with pytest.raises(UnknownLineItemFieldError) as exc_info:
            service.update_line_item(item, total_price=Decimal("5"))

        assert exc_info.value.status_code == 422

    def test_snapshot_valid_item(self, service):
        item = LineItemFactory.create(unit_price="500", quantity=3)

        snapshot = service.snapshot(item)

        assert isinstance(snapshot, LineItemSnapshot)
        assert snapshot.total_price == Decimal("1500")
        with pytest.raises(PydanticValidationError):
            snapshot.quantity = 10

    def test_snapshot_invalid_item_refused(self, service):
        item = LineItemFactory.create(unit_price="0", quantity=3)

        with pytest.raises(LineItemNotValidError) as exc_info:
            service.snapshot(item)

        assert exc_info.value.code == "LINE_ITEM_NOT_VALID"


class TestPricingInfo:
    """Tests for PricingService.get_pricing_info()"""

    def test_pricing_info_for_rug(self, service, sample_carpet_record):
        record = CatalogRecord(**sample_carpet_record)

        info = service.get_pricing_info(record, "carpet")

        assert info.product_id == "carpet-001"
        # catalog unit "piece" is always computable
        assert info.suggested_pricing_unit == PricingUnit.PIECE
        assert PricingUnit.SQM in info.available_pricing_units
        assert PricingUnit.KG not in info.available_pricing_units
        assert info.dimensions.weight is None


class TestFormatting:

    def test_format_price(self, service):
        assert service.format_price(Decimal("1944")) == "₹1,944.00"

    def test_format_unit(self, service):
        assert service.format_unit(PricingUnit.PIECE, 2) == "pieces"

    def test_singleton(self):
        assert get_pricing_service() is get_pricing_service()

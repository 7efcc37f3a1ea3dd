"""
Pricing service for order-item entry.

Facade the order form talks to. Combines the calculator and validator,
drives the line item lifecycle, and formats prices for display.

Line item lifecycle (recomputed from scratch on every change):
    product selected → dimensions resolved, unit suggested
    → quantity / price / unit edited → valid | invalid
Items are only frozen (snapshot) when the order is submitted.
"""

from decimal import Decimal
from typing import Any, Iterable, Optional, Union
import structlog

from config import settings
from models.catalog import CatalogRecord
from models.pricing import (
    LineItem,
    LineItemSnapshot,
    PriceResult,
    PricingUnit,
    ProductDimensions,
    ProductPricingInfo,
    ProductType,
)
from services import (
    dimension_resolver,
    order_aggregator,
    price_calculator,
    price_validator,
    unit_registry,
    unit_suggestion_service,
)
from utils.format_utils import format_price
from exceptions import LineItemNotValidError, UnknownLineItemFieldError

logger = structlog.get_logger(__name__)

# Fields a user may edit; everything else on LineItem is derived or fixed
EDITABLE_FIELDS = frozenset({
    "quantity",
    "unit_price",
    "pricing_unit",
    "dimensions",
    "product_name",
})


class PricingService:
    """
    Order-item pricing logic.
    
    Stateless: every method is a pure function of its arguments.
    """
    
    def __init__(self, currency_symbol: Optional[str] = None, decimal_places: Optional[int] = None):
        self.currency_symbol = currency_symbol or settings.currency_symbol
        self.decimal_places = settings.price_decimal_places if decimal_places is None else decimal_places
    
    # ===================
    # CALCULATION
    # ===================
    
    def calculate_item_price(self, item: LineItem) -> PriceResult:
        """Calculate and validate one line item."""
        result = price_calculator.calculate(item)
        return price_validator.validate(item, result)
    
    def validate_item(self, item: LineItem) -> bool:
        """True when the line item can be priced as entered."""
        return self.calculate_item_price(item).is_valid
    
    def refresh(self, item: LineItem) -> LineItem:
        """
        Return a copy of the item with derived fields recomputed.
        
        The input item is left untouched.
        """
        return self.apply_result(item, self.calculate_item_price(item))
    
    def apply_result(self, item: LineItem, result: PriceResult) -> LineItem:
        """Copy of the item carrying an already computed result."""
        return item.model_copy(update={
            "unit_value": result.unit_value,
            "total_value": result.total_value,
            "total_price": result.total_price,
            "is_valid": result.is_valid,
            "error_message": result.error_message,
        })
    
    def calculate_order_total(self, items: Iterable[LineItem]) -> Decimal:
        """Recalculate every item and sum the valid ones."""
        return order_aggregator.total(self.refresh(item) for item in items)
    
    # ===================
    # LINE ITEM LIFECYCLE
    # ===================
    
    def create_line_item(
        self,
        product_id: str,
        product_type: Union[ProductType, str],
        dimensions: ProductDimensions,
        product_name: Optional[str] = None,
        catalog_unit: Optional[str] = None,
    ) -> LineItem:
        """
        Start a line item for a freshly selected product.
        
        Quantity starts at 1 and price at 0 (the user enters their own).
        The pricing unit is the product's own stocking unit when it maps
        to a computable pricing unit, otherwise the suggested one.
        
        Args:
            product_id: Catalog id
            product_type: carpet or raw_material
            dimensions: Resolved dimensions for the product
            product_name: Display name
            catalog_unit: Catalog stocking unit, e.g. "roll"
            
        Returns:
            LineItem with derived fields computed (invalid until priced)
        """
        kind = ProductType(product_type)
        if dimensions.product_type != kind:
            dimensions = dimensions.model_copy(update={"product_type": kind})
        pricing_unit = self.default_unit(dimensions, catalog_unit)
        
        logger.info(
            "line_item_created",
            product_id=product_id,
            product_type=kind.value,
            pricing_unit=pricing_unit.value,
        )
        
        item = LineItem(
            product_id=product_id,
            product_name=product_name,
            product_type=product_type,
            quantity=1,
            unit_price=Decimal("0"),
            pricing_unit=pricing_unit,
            dimensions=dimensions,
        )
        return self.refresh(item)
    
    def create_line_item_from_record(
        self,
        record: CatalogRecord,
        product_type: Union[ProductType, str],
    ) -> LineItem:
        """Resolve a catalog record's dimensions and start a line item for it."""
        dimensions = dimension_resolver.resolve(record, product_type)
        return self.create_line_item(
            product_id=record.id,
            product_type=product_type,
            dimensions=dimensions,
            product_name=record.name or None,
            catalog_unit=record.unit,
        )
    
    def update_line_item(self, item: LineItem, **changes: Any) -> LineItem:
        """
        Apply user edits and recompute.
        
        Args:
            item: Current line item
            **changes: quantity, unit_price, pricing_unit, dimensions or product_name
            
        Returns:
            New, revalidated LineItem
            
        Raises:
            UnknownLineItemFieldError: If a change targets a non-editable field
            pydantic.ValidationError: If a value is invalid (e.g. fractional quantity)
        """
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise UnknownLineItemFieldError(list(unknown))
        
        data = item.model_dump()
        data.update(changes)
        updated = LineItem.model_validate(data)
        return self.refresh(updated)
    
    def snapshot(self, item: LineItem) -> LineItemSnapshot:
        """
        Freeze a line item for the order record.
        
        Raises:
            LineItemNotValidError: If the item is not fully priced
        """
        current = self.refresh(item)
        if not current.is_valid:
            logger.warning(
                "snapshot_rejected",
                product_id=item.product_id,
                reason=current.error_message,
            )
            raise LineItemNotValidError(item.product_id, current.error_message)
        
        return LineItemSnapshot(
            product_id=current.product_id,
            product_name=current.product_name,
            product_type=current.product_type,
            quantity=current.quantity,
            unit_price=current.unit_price,
            pricing_unit=current.pricing_unit,
            dimensions=current.dimensions,
            unit_value=current.unit_value,
            total_value=current.total_value,
            total_price=current.total_price,
        )
    
    # ===================
    # UNIT SELECTION
    # ===================
    
    def default_unit(
        self,
        dimensions: ProductDimensions,
        catalog_unit: Optional[str] = None,
    ) -> PricingUnit:
        """Catalog stocking unit if computable, otherwise the suggestion."""
        mapped = unit_suggestion_service.map_catalog_unit(catalog_unit)
        if mapped is not None and mapped in unit_suggestion_service.available(dimensions):
            return mapped
        return unit_suggestion_service.suggest(dimensions)
    
    def get_available_pricing_units(self, dimensions: ProductDimensions) -> list[PricingUnit]:
        """Computable units in display order, each once."""
        return unit_suggestion_service.available_ordered(dimensions)
    
    def get_pricing_info(
        self,
        record: CatalogRecord,
        product_type: Union[ProductType, str],
    ) -> ProductPricingInfo:
        """Dimensions, default unit and selectable units for a catalog product."""
        dimensions = dimension_resolver.resolve(record, product_type)
        return ProductPricingInfo(
            product_id=record.id,
            product_name=record.name or None,
            dimensions=dimensions,
            suggested_pricing_unit=self.default_unit(dimensions, record.unit),
            available_pricing_units=self.get_available_pricing_units(dimensions),
        )
    
    # ===================
    # FORMATTING
    # ===================
    
    def format_price(self, price: Optional[Decimal]) -> str:
        """Money for display, e.g. ₹1,944.00"""
        return format_price(price, symbol=self.currency_symbol, places=self.decimal_places)
    
    def format_unit(self, unit: Union[PricingUnit, str], quantity=1) -> str:
        """Unit symbol for display, pluralized by quantity."""
        return unit_registry.format_unit(unit, quantity)


# Singleton instance for convenience
_pricing_service: Optional[PricingService] = None

def get_pricing_service() -> PricingService:
    """Get or create PricingService instance."""
    global _pricing_service
    if _pricing_service is None:
        _pricing_service = PricingService()
    return _pricing_service

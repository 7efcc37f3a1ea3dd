"""
Request and response schemas for the pricing API.

Engine values are exact Decimals. Responses carry them rounded to two
places as floats, alongside preformatted display strings.
"""

from pydantic import Field
from typing import Any, Optional

from models.base import BaseSchema
from models.pricing import (
    LineItem,
    PricingErrorCode,
    PricingUnit,
    ProductDimensions,
    ProductType,
    UnitKind,
)


class UnitResponse(BaseSchema):
    """One registry entry."""
    
    unit: PricingUnit
    label: str
    description: str
    kind: UnitKind
    required_dimension_fields: list[str]
    product_types: list[ProductType]
    symbol: str


class UnitListResponse(BaseSchema):
    """All pricing units."""
    
    data: list[UnitResponse]
    total: int


class ResolveDimensionsRequest(BaseSchema):
    """Raw catalog-like record to normalize."""
    
    product_type: ProductType = Field(ProductType.CARPET, description="carpet or raw_material")
    record: dict[str, Any] = Field(
        default_factory=dict,
        description="Catalog fields, e.g. {'width': '180 cm', 'height': '270 cm'}",
        examples=[{"width": "180 cm", "height": "270cm", "weight": "N/A"}]
    )
    catalog_unit: Optional[str] = Field(None, description="Catalog stocking unit")


class ResolveDimensionsResponse(BaseSchema):
    """Normalized dimensions plus unit options."""
    
    dimensions: ProductDimensions
    suggested_pricing_unit: PricingUnit
    available_pricing_units: list[PricingUnit]


class CalculationResponse(BaseSchema):
    """Priced line item, rounded for presentation."""
    
    product_id: str
    pricing_unit: PricingUnit
    quantity: int
    unit_price: float
    unit_value: float
    total_value: float
    total_price: float
    is_valid: bool
    error_message: str = ""
    error_code: Optional[PricingErrorCode] = None
    unit_value_display: str = Field(..., description="e.g. '4.86 sqm'")
    total_price_display: str = Field(..., description="e.g. '₹1,944.00'")


class OrderTotalRequest(BaseSchema):
    """Line items of an order under construction."""
    
    items: list[LineItem] = Field(default_factory=list)


class OrderTotalResponse(BaseSchema):
    """Tax-agnostic order subtotal with per-item results."""
    
    items: list[CalculationResponse]
    subtotal: float
    subtotal_display: str
    item_count: int
    valid_count: int
    unresolved_item_ids: list[str]

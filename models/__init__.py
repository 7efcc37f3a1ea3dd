"""
Pydantic models for validation and serialization.
"""

from models.base import (
    BaseSchema,
    FrozenSchema,
)
from models.pricing import (
    PricingUnit,
    UnitKind,
    ProductType,
    PricingErrorCode,
    DIMENSION_FIELDS,
    UnitDescriptor,
    ProductDimensions,
    PriceResult,
    LineItem,
    LineItemSnapshot,
    ProductPricingInfo,
    OrderTotals,
)
from models.catalog import CatalogRecord

__all__ = [
    # Base
    "BaseSchema",
    "FrozenSchema",

    # Pricing
    "PricingUnit",
    "UnitKind",
    "ProductType",
    "PricingErrorCode",
    "DIMENSION_FIELDS",
    "UnitDescriptor",
    "ProductDimensions",
    "PriceResult",
    "LineItem",
    "LineItemSnapshot",
    "ProductPricingInfo",
    "OrderTotals",

    # Catalog
    "CatalogRecord",
]

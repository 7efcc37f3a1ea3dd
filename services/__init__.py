"""
Business logic services.

Pricing engine modules (pure, no I/O):
    unit_registry, dimension_resolver, unit_suggestion_service,
    price_calculator, price_validator, order_aggregator

Facades:
    PricingService: order-item pricing used by the API
    CatalogService: read-only catalog lookups
"""

from services.pricing_service import PricingService, get_pricing_service
from services.catalog_service import CatalogService, get_catalog_service

__all__ = [
    "PricingService",
    "get_pricing_service",
    "CatalogService",
    "get_catalog_service",
]

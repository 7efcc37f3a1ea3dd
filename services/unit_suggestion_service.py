"""Unit suggestion engine.

Proposes a default pricing unit for a product and restricts the units the
order form offers to those its dimensions can actually compute.

Suggestion priority is fixed: area > weight > density > count. Re-selecting
the same product therefore always yields the same default unit.
"""

from typing import Optional

import structlog

from models.pricing import PricingUnit, ProductDimensions, ProductType
from services import unit_registry

logger = structlog.get_logger(__name__)

# Offered when nothing else is computable
FALLBACK_UNIT = PricingUnit.PIECE

# (unit, product types it may be suggested for)
_SUGGESTION_PRIORITY: tuple[tuple[PricingUnit, Optional[ProductType]], ...] = (
    (PricingUnit.SQM, ProductType.CARPET),
    (PricingUnit.KG, None),
    (PricingUnit.GSM, ProductType.CARPET),
    (PricingUnit.PIECE, None),
)

# Catalog stocking units that map directly onto a pricing unit
_CATALOG_UNIT_ALIASES = {
    "pcs": PricingUnit.PIECE,
    "pc": PricingUnit.PIECE,
    "pieces": PricingUnit.PIECE,
    "rolls": PricingUnit.ROLL,
    "units": PricingUnit.UNIT,
    "kgs": PricingUnit.KG,
    "kilogram": PricingUnit.KG,
    "g": PricingUnit.GRAM,
    "grams": PricingUnit.GRAM,
    "m": PricingUnit.METER,
    "meters": PricingUnit.METER,
    "metre": PricingUnit.METER,
    "m2": PricingUnit.SQM,
    "m²": PricingUnit.SQM,
    "ft2": PricingUnit.SQFT,
    "yards": PricingUnit.YARD,
    "l": PricingUnit.LITER,
    "litre": PricingUnit.LITER,
    "liters": PricingUnit.LITER,
}


def available(dimensions: ProductDimensions) -> frozenset[PricingUnit]:
    """
    Pricing units computable for a product.

    Count units need no dimensions so they are always included; the
    piece fallback keeps the selector from ever being empty.

    Args:
        dimensions: Resolved product dimensions

    Returns:
        Set of pricing units (no duplicates by construction)
    """
    units = unit_registry.units_for(dimensions)
    # Count units currently match every product; this guards a registry
    # that someday restricts or drops them
    if not units:
        return frozenset({FALLBACK_UNIT})
    return units


def available_ordered(dimensions: ProductDimensions) -> list[PricingUnit]:
    """available(), in registry display order for select inputs."""
    return unit_registry.ordered(available(dimensions))


def suggest(dimensions: ProductDimensions) -> PricingUnit:
    """
    Default pricing unit for a product.

    Carpets with width and height → sqm; anything with weight → kg;
    carpets with a computable GSM basis → gsm; otherwise piece.
    """
    offered = available(dimensions)
    for unit, product_type in _SUGGESTION_PRIORITY:
        if product_type is not None and dimensions.product_type != product_type:
            continue
        if unit in offered:
            return unit
    return FALLBACK_UNIT


def map_catalog_unit(unit: Optional[str]) -> Optional[PricingUnit]:
    """
    Map a catalog stocking unit ("roll", "Kg", "m2") to a pricing unit.

    Returns:
        PricingUnit, or None when the string is empty or unrecognized
    """
    if not unit:
        return None
    key = unit.strip().lower()
    try:
        return PricingUnit(key)
    except ValueError:
        pass
    mapped = _CATALOG_UNIT_ALIASES.get(key)
    if mapped is None:
        logger.debug("catalog_unit_unmapped", unit=unit)
    return mapped

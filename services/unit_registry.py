"""Pricing unit registry.

Single source of truth for which dimension fields each pricing unit
needs. Nothing else in the codebase maps units to dimensions.
"""

from typing import Union

import structlog

from models.pricing import (
    PricingUnit,
    UnitKind,
    ProductType,
    UnitDescriptor,
    ProductDimensions,
    DIMENSION_FIELDS,
)
from exceptions import UnknownUnitError

logger = structlog.get_logger(__name__)

_CARPET_ONLY = frozenset({ProductType.CARPET})

_UNITS: tuple[UnitDescriptor, ...] = (
    # Count: priced per physical item, no conversion
    UnitDescriptor(
        unit=PricingUnit.PIECE,
        label="Per Piece",
        description="Price per individual piece",
        kind=UnitKind.COUNT,
        singular="piece",
        plural="pieces",
    ),
    UnitDescriptor(
        unit=PricingUnit.ROLL,
        label="Per Roll",
        description="Price per complete roll",
        kind=UnitKind.COUNT,
        singular="roll",
        plural="rolls",
    ),
    UnitDescriptor(
        unit=PricingUnit.UNIT,
        label="Per Unit",
        description="Price per stocking unit",
        kind=UnitKind.COUNT,
        singular="unit",
        plural="units",
    ),
    # Weight
    UnitDescriptor(
        unit=PricingUnit.KG,
        label="Per Kilogram",
        description="Price per kilogram of weight",
        kind=UnitKind.WEIGHT,
        required_dimension_fields=frozenset({"weight"}),
        singular="kg",
        plural="kg",
    ),
    UnitDescriptor(
        unit=PricingUnit.GRAM,
        label="Per Gram",
        description="Price per gram of weight",
        kind=UnitKind.WEIGHT,
        required_dimension_fields=frozenset({"weight"}),
        singular="g",
        plural="g",
    ),
    # Length (carpet height is its running length)
    UnitDescriptor(
        unit=PricingUnit.METER,
        label="Per Meter",
        description="Price per running meter of length",
        kind=UnitKind.LENGTH,
        required_dimension_fields=frozenset({"height"}),
        singular="m",
        plural="m",
    ),
    # Area
    UnitDescriptor(
        unit=PricingUnit.SQM,
        label="Per Square Meter",
        description="Price per square meter (width × length)",
        kind=UnitKind.AREA,
        required_dimension_fields=frozenset({"width", "height"}),
        singular="sqm",
        plural="sqm",
    ),
    UnitDescriptor(
        unit=PricingUnit.SQFT,
        label="Per Square Foot",
        description="Price per square foot (width × length)",
        kind=UnitKind.AREA,
        required_dimension_fields=frozenset({"width", "height"}),
        singular="sqft",
        plural="sqft",
    ),
    UnitDescriptor(
        unit=PricingUnit.YARD,
        label="Per Yard",
        description="Price per running yard of length",
        kind=UnitKind.LENGTH,
        required_dimension_fields=frozenset({"height"}),
        singular="yd",
        plural="yd",
    ),
    # Volume
    UnitDescriptor(
        unit=PricingUnit.LITER,
        label="Per Liter",
        description="Price per liter of volume",
        kind=UnitKind.VOLUME,
        required_dimension_fields=frozenset({"volume"}),
        singular="L",
        plural="L",
    ),
    # Density: woven pile only
    UnitDescriptor(
        unit=PricingUnit.GSM,
        label="Per GSM",
        description="Price per kg of face yarn (area × GSM ÷ 1000)",
        kind=UnitKind.DENSITY,
        required_dimension_fields=frozenset({"width", "height", "gsm"}),
        product_types=_CARPET_ONLY,
        singular="kg (GSM)",
        plural="kg (GSM)",
    ),
)

_BY_UNIT: dict[PricingUnit, UnitDescriptor] = {d.unit: d for d in _UNITS}


def list_units() -> list[UnitDescriptor]:
    """All supported pricing units, in display order."""
    return list(_UNITS)


def describe(unit: Union[PricingUnit, str]) -> UnitDescriptor:
    """
    Look up a pricing unit.

    Args:
        unit: PricingUnit member or its string value

    Returns:
        UnitDescriptor

    Raises:
        UnknownUnitError: If the unit is not registered
    """
    try:
        key = PricingUnit(unit)
    except ValueError:
        logger.error("unknown_pricing_unit", unit=str(unit))
        raise UnknownUnitError(unit)

    descriptor = _BY_UNIT.get(key)
    if descriptor is None:
        logger.error("unregistered_pricing_unit", unit=key.value)
        raise UnknownUnitError(key.value)
    return descriptor


def missing_fields(descriptor: UnitDescriptor, dimensions: ProductDimensions) -> list[str]:
    """Required fields that are absent or not positive, in canonical field order."""
    required = descriptor.required_dimension_fields
    return [f for f in DIMENSION_FIELDS if f in required and not dimensions.has(f)]


def is_offered(descriptor: UnitDescriptor, dimensions: ProductDimensions) -> bool:
    """True when the unit applies to this product type and its fields are all known."""
    if dimensions.product_type not in descriptor.product_types:
        return False
    return not missing_fields(descriptor, dimensions)


def units_for(dimensions: ProductDimensions) -> frozenset[PricingUnit]:
    """Units computable for these dimensions. Each unit appears once."""
    return frozenset(d.unit for d in _UNITS if is_offered(d, dimensions))


def ordered(units) -> list[PricingUnit]:
    """Sort units into registry display order."""
    return [d.unit for d in _UNITS if d.unit in units]


def format_unit(unit: Union[PricingUnit, str], quantity=1) -> str:
    """Display symbol, pluralized for quantities other than one."""
    descriptor = describe(unit)
    return descriptor.singular if quantity == 1 else descriptor.plural

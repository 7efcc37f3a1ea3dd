"""
Price calculator.

Derives unit value, total value and total price for one line item.

Two regimes:
    - Count units (piece, roll, unit): unit_value = 1, price = unit_price × quantity.
      Returns before touching dimensions.
    - Derived units: unit_value comes from the dimensions the registry says
      the unit needs, total_price = unit_value × quantity × unit_price.

Nothing is rounded here. Repeated recalculation with the same inputs
returns identical Decimals.
"""

from decimal import Decimal
from typing import Callable

import structlog

from config.pricing import (
    CM_PER_METER,
    METERS_PER_YARD,
    SQFT_PER_SQM,
    GRAMS_PER_KG,
    GSM_TO_KG_DIVISOR,
)
from models.pricing import (
    ZERO,
    LineItem,
    PriceResult,
    PricingErrorCode,
    PricingUnit,
    ProductDimensions,
    ProductType,
)
from services import unit_registry
from exceptions import InvalidLineItemError, UnknownUnitError

logger = structlog.get_logger(__name__)

ONE = Decimal("1")


def _area_sqm(d: ProductDimensions) -> Decimal:
    return (d.width / CM_PER_METER) * (d.height / CM_PER_METER)


# Unit value per physical piece. Only called once required fields are known.
_UNIT_VALUE: dict[PricingUnit, Callable[[ProductDimensions], Decimal]] = {
    PricingUnit.KG: lambda d: d.weight,
    PricingUnit.GRAM: lambda d: d.weight * GRAMS_PER_KG,
    PricingUnit.METER: lambda d: d.height / CM_PER_METER,
    PricingUnit.YARD: lambda d: d.height / CM_PER_METER / METERS_PER_YARD,
    PricingUnit.SQM: _area_sqm,
    PricingUnit.SQFT: lambda d: _area_sqm(d) * SQFT_PER_SQM,
    PricingUnit.LITER: lambda d: d.volume,
    PricingUnit.GSM: lambda d: _area_sqm(d) * d.gsm / GSM_TO_KG_DIVISOR,
}


def _check_inputs(item: LineItem) -> None:
    """Reject values the line item schema should never have let through."""
    quantity = item.quantity
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise InvalidLineItemError("quantity", quantity, "must be a whole number")
    if quantity < 0:
        raise InvalidLineItemError("quantity", quantity, "must not be negative")
    if item.unit_price is None or item.unit_price < 0:
        raise InvalidLineItemError("unit_price", item.unit_price, "must not be negative")


def missing_dimension_message(fields: list[str], label: str) -> str:
    """'Product width is required for Per Square Meter pricing'"""
    names = " and ".join(f.replace("_", " ") for f in fields)
    verb = "is" if len(fields) == 1 else "are"
    return f"Product {names} {verb} required for {label} pricing"


def unit_not_offered_message(label: str, product_type: ProductType) -> str:
    """'Per GSM pricing is not available for raw materials'"""
    return f"{label} pricing is not available for {product_type.value.replace('_', ' ')}s"


def calculate(item: LineItem) -> PriceResult:
    """
    Price one line item.

    Args:
        item: Line item with quantity, unit price, pricing unit and dimensions

    Returns:
        PriceResult. A missing dimension, or a unit not offered for the
        product type, yields is_valid=False with zeroed totals instead of
        an exception.

    Raises:
        UnknownUnitError: Pricing unit not in the registry
        InvalidLineItemError: Negative/fractional quantity or negative price
    """
    descriptor = unit_registry.describe(item.pricing_unit)
    _check_inputs(item)

    if item.product_type not in descriptor.product_types:
        logger.debug(
            "unit_not_offered",
            product_id=item.product_id,
            pricing_unit=descriptor.unit.value,
            product_type=item.product_type.value,
        )
        return PriceResult(
            unit_value=ZERO,
            total_value=ZERO,
            total_price=ZERO,
            is_valid=False,
            error_message=unit_not_offered_message(descriptor.label, item.product_type),
            error_code=PricingErrorCode.UNIT_NOT_OFFERED,
        )

    quantity = Decimal(item.quantity)
    unit_price = Decimal(item.unit_price)

    if descriptor.is_count:
        return PriceResult(
            unit_value=ONE,
            total_value=quantity,
            total_price=unit_price * quantity,
            is_valid=True,
        )

    dimensions = item.dimensions
    missing = unit_registry.missing_fields(descriptor, dimensions)
    if missing:
        logger.debug(
            "missing_dimension",
            product_id=item.product_id,
            pricing_unit=descriptor.unit.value,
            fields=missing,
        )
        return PriceResult(
            unit_value=ZERO,
            total_value=ZERO,
            total_price=ZERO,
            is_valid=False,
            error_message=missing_dimension_message(missing, descriptor.label),
            error_code=PricingErrorCode.MISSING_DIMENSION,
        )

    compute = _UNIT_VALUE.get(descriptor.unit)
    if compute is None:
        # Registered as derived but no conversion defined
        logger.error("unit_conversion_missing", pricing_unit=descriptor.unit.value)
        raise UnknownUnitError(descriptor.unit.value)

    unit_value = compute(dimensions)
    total_value = unit_value * quantity
    total_price = total_value * unit_price

    logger.debug(
        "price_calculated",
        product_id=item.product_id,
        pricing_unit=descriptor.unit.value,
        unit_value=str(unit_value),
        total_price=str(total_price),
    )

    return PriceResult(
        unit_value=unit_value,
        total_value=total_value,
        total_price=total_price,
        is_valid=True,
    )

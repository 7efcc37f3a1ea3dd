"""
Dimension resolver.

Turns loosely typed catalog values into a canonical ProductDimensions.
Catalog columns arrive as numbers, decorated strings ("120 cm", "12mm")
or junk ("N/A", ""). Anything that does not parse is left out so
dimension-dependent units are disqualified downstream instead of being
priced against a silent zero.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional, Union

import structlog

from models.catalog import CatalogRecord
from models.pricing import ProductDimensions, ProductType, DIMENSION_FIELDS

logger = structlog.get_logger(__name__)

# Everything except digits, decimal point and minus sign
_NON_NUMERIC = re.compile(r"[^\d.\-]")

# Alternate spellings seen in catalog rows
_FIELD_ALIASES = {
    "thread_count": ("thread_count", "threadCount"),
}


def parse_dimension(raw: Any) -> Optional[Decimal]:
    """
    Parse one catalog dimension value.

    Examples:
        "120 cm" → Decimal("120")
        "12mm"   → Decimal("12")
        2.5      → Decimal("2.5")
        "N/A"    → None
        None     → None

    Args:
        raw: Catalog value (number, string, or None)

    Returns:
        Finite Decimal, or None if the value cannot be parsed
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, Decimal):
        value = raw
    elif isinstance(raw, (int, float)):
        value = Decimal(str(raw))
    else:
        cleaned = _NON_NUMERIC.sub("", str(raw))
        if not cleaned:
            return None
        try:
            value = Decimal(cleaned)
        except InvalidOperation:
            return None

    if not value.is_finite():
        return None
    return value


def _read(raw_product: Union[CatalogRecord, Mapping[str, Any]], field: str) -> Any:
    names = _FIELD_ALIASES.get(field, (field,))
    if isinstance(raw_product, Mapping):
        for name in names:
            if raw_product.get(name) is not None:
                return raw_product[name]
        return None
    for name in names:
        value = getattr(raw_product, name, None)
        if value is not None:
            return value
    return None


def resolve(
    raw_product: Union[CatalogRecord, Mapping[str, Any]],
    product_type: Union[ProductType, str],
) -> ProductDimensions:
    """
    Build ProductDimensions from a catalog record.

    Args:
        raw_product: CatalogRecord or plain row dict
        product_type: carpet or raw_material, carried through unchanged

    Returns:
        ProductDimensions with only the fields that parsed
    """
    kind = ProductType(product_type)
    parsed: dict[str, Decimal] = {}
    skipped: list[str] = []

    for field in DIMENSION_FIELDS:
        raw = _read(raw_product, field)
        if raw is None:
            continue
        value = parse_dimension(raw)
        if value is None:
            skipped.append(field)
            continue
        parsed[field] = value

    if skipped:
        logger.debug(
            "dimension_values_unparsed",
            fields=skipped,
            product_type=kind.value,
        )

    return ProductDimensions(product_type=kind, **parsed)

"""
Presentation helpers for money and quantities.

The pricing engine never rounds. These helpers are the only place
values are rounded, and only for display or API responses.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

from config.pricing import DISPLAY_DECIMAL_PLACES

Number = Union[Decimal, int, float, str]


def round_value(value: Optional[Number], places: int = DISPLAY_DECIMAL_PLACES) -> Decimal:
    """
    Round half-up to a fixed number of places.

    - Decimal("1944") → Decimal("1944.00")
    - Decimal("2.952755") → Decimal("2.95")
    - None → Decimal("0.00")
    """
    if value is None:
        value = 0
    exponent = Decimal(1).scaleb(-places)
    return Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP)


def group_indian(digits: str) -> str:
    """
    Group an integer digit string the Indian way (lakh/crore).

    - "123" → "123"
    - "123456" → "1,23,456"
    - "12345678" → "1,23,45,678"
    """
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_price(
    value: Optional[Number],
    symbol: str = "₹",
    places: int = DISPLAY_DECIMAL_PLACES,
) -> str:
    """
    Format a money value for display.

    - Decimal("1944") → "₹1,944.00"
    - Decimal("123456.5") → "₹1,23,456.50"
    - Decimal("-50") → "-₹50.00"
    """
    rounded = round_value(value, places)
    sign = "-" if rounded < 0 else ""
    text = f"{abs(rounded):.{places}f}"
    whole, _, fraction = text.partition(".")
    grouped = group_indian(whole)
    if fraction:
        grouped = f"{grouped}.{fraction}"
    return f"{sign}{symbol}{grouped}"


def format_quantity(value: Optional[Number], places: int = DISPLAY_DECIMAL_PLACES) -> str:
    """Fixed-point quantity for display, e.g. Decimal("4.86") → "4.86"."""
    return f"{round_value(value, places):.{places}f}"

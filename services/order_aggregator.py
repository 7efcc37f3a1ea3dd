"""Order aggregator.

Sums priced line items into a tax-agnostic subtotal. GST and any
order-level adjustments are applied by the caller on top of this.
"""

from decimal import Decimal
from typing import Iterable

import structlog

from models.pricing import ZERO, LineItem, OrderTotals

logger = structlog.get_logger(__name__)


def total(items: Iterable[LineItem]) -> Decimal:
    """Sum of total_price over valid items. Invalid items contribute zero."""
    return sum(
        (item.total_price for item in items if item.is_valid and item.total_price is not None),
        ZERO,
    )


def summarize(items: Iterable[LineItem]) -> OrderTotals:
    """
    Subtotal plus counts, listing items still awaiting a valid price.

    Args:
        items: Line items with derived fields already computed

    Returns:
        OrderTotals
    """
    items = list(items)
    unresolved = [item.product_id for item in items if not item.is_valid]
    subtotal = total(items)

    logger.debug(
        "order_totals_summarized",
        item_count=len(items),
        unresolved=len(unresolved),
        subtotal=str(subtotal),
    )

    return OrderTotals(
        subtotal=subtotal,
        item_count=len(items),
        valid_count=len(items) - len(unresolved),
        unresolved_item_ids=unresolved,
    )

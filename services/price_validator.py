"""
Line item validator.

Applies business rules on top of a calculator result. First failure wins:
    1. unit price must be positive
    2. quantity must be positive
    3. calculator-reported problems (missing dimension, unit not offered
       for the product type), surfaced verbatim

Pure function: safe to call on every keystroke.
"""

from models.pricing import LineItem, PriceResult, PricingErrorCode

PRICE_REQUIRED_MESSAGE = "Please enter a price for this item"
QUANTITY_REQUIRED_MESSAGE = "Please enter a quantity greater than 0"


def validate(item: LineItem, result: PriceResult) -> PriceResult:
    """
    Refine a calculator result with user-input rules.

    Computed totals are kept so the form can still show them; only
    validity and the message change.

    Args:
        item: The line item that was priced
        result: Output of price_calculator.calculate(item)

    Returns:
        New PriceResult (the input is not modified)
    """
    if item.unit_price <= 0:
        return result.model_copy(update={
            "is_valid": False,
            "error_message": PRICE_REQUIRED_MESSAGE,
            "error_code": PricingErrorCode.NON_POSITIVE_PRICE,
        })

    if item.quantity <= 0:
        return result.model_copy(update={
            "is_valid": False,
            "error_message": QUANTITY_REQUIRED_MESSAGE,
            "error_code": PricingErrorCode.NON_POSITIVE_QUANTITY,
        })

    if not result.is_valid:
        return result.model_copy()

    return result.model_copy(update={
        "is_valid": True,
        "error_message": "",
        "error_code": None,
    })

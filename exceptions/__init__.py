"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,
    DatabaseError,

    # Pricing engine
    UnknownUnitError,
    InvalidLineItemError,
    LineItemNotValidError,
    UnknownLineItemFieldError,

    # Catalog
    CatalogItemNotFoundError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",
    "DatabaseError",

    # Pricing engine
    "UnknownUnitError",
    "InvalidLineItemError",
    "LineItemNotValidError",
    "UnknownLineItemFieldError",

    # Catalog
    "CatalogItemNotFoundError",
]

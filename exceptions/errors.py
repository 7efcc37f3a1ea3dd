"""
Custom exception classes for the application.

User-facing pricing problems (missing dimension, zero price, zero quantity)
are returned as data on PriceResult. Only the errors below are raised.
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all application errors.
    
    All custom exceptions inherit from this.
    
    Attributes:
        code: Error code (e.g., "UNKNOWN_PRICING_UNIT")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """
    
    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)
    
    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """Resource not found (404)."""
    
    def __init__(
        self,
        resource: str,
        identifier: str,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": identifier}
        )


class ValidationError(AppError):
    """Validation failed (422)."""
    
    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class DatabaseError(AppError):
    """Database operation failed (500)."""
    
    def __init__(
        self,
        operation: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="DATABASE_ERROR",
            message=f"Database {operation} failed: {message}",
            status_code=500,
            details={"operation": operation, **(details or {})}
        )


# ===================
# PRICING ENGINE ERRORS
# ===================

class UnknownUnitError(AppError):
    """
    A pricing unit the registry does not recognize.
    
    Indicates drift between the registry and its callers, never bad
    user input, so it fails loudly.
    """
    
    def __init__(self, unit: Any):
        super().__init__(
            code="UNKNOWN_PRICING_UNIT",
            message=f"Unknown pricing unit: {unit}",
            status_code=500,
            details={"unit": str(unit)}
        )


class InvalidLineItemError(AppError):
    """Line item reached the calculator with values validation should have blocked."""
    
    def __init__(self, field: str, value: Any, reason: str):
        super().__init__(
            code="INVALID_LINE_ITEM",
            message=f"Invalid {field}: {reason}",
            status_code=500,
            details={"field": field, "value": str(value)}
        )


class LineItemNotValidError(ValidationError):
    """Attempt to snapshot a line item that still has pricing errors."""
    
    def __init__(self, product_id: str, reason: Optional[str]):
        super().__init__(
            code="LINE_ITEM_NOT_VALID",
            message=reason or "Line item pricing is incomplete",
            details={"product_id": product_id}
        )


class UnknownLineItemFieldError(ValidationError):
    """Line item update referenced fields that cannot be edited."""
    
    def __init__(self, fields: list[str]):
        super().__init__(
            code="UNKNOWN_LINE_ITEM_FIELD",
            message=f"Cannot update line item fields: {', '.join(sorted(fields))}",
            details={"fields": sorted(fields)}
        )


# ===================
# CATALOG ERRORS
# ===================

class CatalogItemNotFoundError(NotFoundError):
    """Product or raw material not found in the catalog."""
    
    def __init__(self, product_id: str, product_type: str = "carpet"):
        resource = "Raw material" if product_type == "raw_material" else "Product"
        super().__init__(
            resource=resource,
            identifier=product_id,
            code="CATALOG_ITEM_NOT_FOUND"
        )

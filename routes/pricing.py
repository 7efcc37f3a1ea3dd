"""
Pricing API routes.

GET  /api/pricing/units: pricing unit registry
POST /api/pricing/dimensions/resolve: normalize catalog dimensions
POST /api/pricing/calculate: price one line item
POST /api/pricing/order-total: price and sum an order's items
GET  /api/pricing/products/{product_type}/{id}: pricing options for a catalog product
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
import structlog

from models.calculation import (
    UnitResponse,
    UnitListResponse,
    ResolveDimensionsRequest,
    ResolveDimensionsResponse,
    CalculationResponse,
    OrderTotalRequest,
    OrderTotalResponse,
)
from models.pricing import LineItem, PriceResult, ProductPricingInfo, ProductType
from services import (
    dimension_resolver,
    order_aggregator,
    unit_registry,
    unit_suggestion_service,
)
from services.pricing_service import PricingService, get_pricing_service
from services.catalog_service import get_catalog_service
from utils.format_utils import format_quantity, round_value
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/pricing", tags=["Pricing"])


# ===================
# EXCEPTION HANDLER
# ===================

def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    # Unexpected error
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


def _to_response(
    service: PricingService,
    item: LineItem,
    result: PriceResult
) -> CalculationResponse:
    """Round a result for presentation."""
    return CalculationResponse(
        product_id=item.product_id,
        pricing_unit=item.pricing_unit,
        quantity=item.quantity,
        unit_price=float(round_value(item.unit_price)),
        unit_value=float(round_value(result.unit_value)),
        total_value=float(round_value(result.total_value)),
        total_price=float(round_value(result.total_price)),
        is_valid=result.is_valid,
        error_message=result.error_message,
        error_code=result.error_code,
        unit_value_display=f"{format_quantity(result.unit_value)} {service.format_unit(item.pricing_unit, result.unit_value)}",
        total_price_display=service.format_price(result.total_price),
    )


# ===================
# ROUTES
# ===================

@router.get("/units", response_model=UnitListResponse)
def list_units():
    """
    List every supported pricing unit in display order.
    """
    units = [
        UnitResponse(
            unit=d.unit,
            label=d.label,
            description=d.description,
            kind=d.kind,
            required_dimension_fields=sorted(d.required_dimension_fields),
            product_types=sorted(d.product_types, key=lambda t: t.value),
            symbol=d.singular,
        )
        for d in unit_registry.list_units()
    ]
    return UnitListResponse(data=units, total=len(units))


@router.post("/dimensions/resolve", response_model=ResolveDimensionsResponse)
def resolve_dimensions(data: ResolveDimensionsRequest):
    """
    Normalize raw catalog dimensions and propose pricing units.
    
    Unparseable values ("N/A") are dropped, never zeroed.
    """
    try:
        service = get_pricing_service()
        dimensions = dimension_resolver.resolve(data.record, data.product_type)
        
        return ResolveDimensionsResponse(
            dimensions=dimensions,
            suggested_pricing_unit=service.default_unit(dimensions, data.catalog_unit),
            available_pricing_units=unit_suggestion_service.available_ordered(dimensions),
        )
        
    except Exception as e:
        return handle_error(e)


@router.post("/calculate", response_model=CalculationResponse)
def calculate_price(item: LineItem):
    """
    Price one line item.
    
    Pricing problems (missing dimension, zero price or quantity) come back
    as is_valid=false with a message, not as an error status.
    """
    try:
        service = get_pricing_service()
        result = service.calculate_item_price(item)
        
        logger.debug(
            "calculate_request",
            product_id=item.product_id,
            pricing_unit=item.pricing_unit.value,
            is_valid=result.is_valid
        )
        
        return _to_response(service, item, result)
        
    except Exception as e:
        return handle_error(e)


@router.post("/order-total", response_model=OrderTotalResponse)
def order_total(data: OrderTotalRequest):
    """
    Price every item and sum the valid ones.
    
    Invalid items contribute nothing and are listed as unresolved.
    GST is applied by the order, not here.
    """
    try:
        service = get_pricing_service()
        results = [(item, service.calculate_item_price(item)) for item in data.items]
        totals = order_aggregator.summarize(
            service.apply_result(item, result) for item, result in results
        )
        responses = [_to_response(service, item, result) for item, result in results]
        
        logger.info(
            "order_total_calculated",
            item_count=totals.item_count,
            valid_count=totals.valid_count
        )
        
        return OrderTotalResponse(
            items=responses,
            subtotal=float(round_value(totals.subtotal)),
            subtotal_display=service.format_price(totals.subtotal),
            item_count=totals.item_count,
            valid_count=totals.valid_count,
            unresolved_item_ids=totals.unresolved_item_ids,
        )
        
    except Exception as e:
        return handle_error(e)


@router.get("/products/{product_type}/{product_id}", response_model=ProductPricingInfo)
def get_product_pricing(product_type: ProductType, product_id: str):
    """
    Look up a catalog product and return its pricing options.
    
    Raises:
        404: Product not found
    """
    try:
        record = get_catalog_service().get_record(product_id, product_type)
        return get_pricing_service().get_pricing_info(record, product_type)
        
    except Exception as e:
        return handle_error(e)

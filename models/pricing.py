"""
Pricing engine schemas: units, dimensions, line items and results.

All numeric values are Decimal. Nothing here is rounded; rounding
happens only when a value is presented (see utils.format_utils).
"""

from pydantic import Field, model_validator
from typing import Optional
from enum import Enum
from decimal import Decimal

from models.base import BaseSchema, FrozenSchema


ZERO = Decimal("0")


class PricingUnit(str, Enum):
    """Unit of measure a price is quoted against."""
    PIECE = "piece"
    ROLL = "roll"
    UNIT = "unit"
    KG = "kg"
    GRAM = "gram"
    METER = "meter"
    SQM = "sqm"
    SQFT = "sqft"
    YARD = "yard"
    LITER = "liter"
    GSM = "gsm"


class UnitKind(str, Enum):
    """What a pricing unit measures. Decides which dimensions it needs."""
    COUNT = "count"
    WEIGHT = "weight"
    LENGTH = "length"
    AREA = "area"
    VOLUME = "volume"
    DENSITY = "density"


class ProductType(str, Enum):
    """Catalog a line item's product comes from."""
    CARPET = "carpet"
    RAW_MATERIAL = "raw_material"

    @classmethod
    def _missing_(cls, value):
        # Order rows call finished carpets "product"
        if isinstance(value, str) and value.strip().lower() == "product":
            return cls.CARPET
        return None


class PricingErrorCode(str, Enum):
    """Reasons a line item cannot be priced yet."""
    MISSING_DIMENSION = "MISSING_DIMENSION"
    NON_POSITIVE_PRICE = "NON_POSITIVE_PRICE"
    NON_POSITIVE_QUANTITY = "NON_POSITIVE_QUANTITY"
    UNIT_NOT_OFFERED = "UNIT_NOT_OFFERED"


# Dimension field names, in the order they are reported
DIMENSION_FIELDS = ("width", "height", "weight", "gsm", "denier", "thread_count", "volume")


class UnitDescriptor(FrozenSchema):
    """Registry entry for one pricing unit."""
    
    unit: PricingUnit
    label: str = Field(..., description="Human label, e.g. 'Square Meter'")
    description: str
    kind: UnitKind
    required_dimension_fields: frozenset[str] = Field(
        default_factory=frozenset,
        description="Dimension fields that must be present and positive"
    )
    product_types: frozenset[ProductType] = Field(
        default_factory=lambda: frozenset(ProductType),
        description="Product types this unit may be offered for"
    )
    singular: str = Field(..., description="Display symbol for one unit")
    plural: str = Field(..., description="Display symbol for several units")

    @property
    def is_count(self) -> bool:
        return self.kind == UnitKind.COUNT


class ProductDimensions(BaseSchema):
    """
    Physical attributes of one piece, normalized from catalog data.
    
    Units: width/height in cm, weight in kg, gsm in g/m², volume in liters.
    A field is None when the catalog did not supply a parseable value;
    it is never defaulted to zero.
    """
    
    product_type: ProductType = Field(ProductType.CARPET, description="carpet or raw_material")
    width: Optional[Decimal] = Field(None, description="Width (cm)")
    height: Optional[Decimal] = Field(None, description="Height / length (cm)")
    weight: Optional[Decimal] = Field(None, description="Weight per piece (kg)")
    gsm: Optional[Decimal] = Field(None, description="Face weight (g/m²)")
    denier: Optional[Decimal] = Field(None, description="Yarn denier")
    thread_count: Optional[Decimal] = Field(None, description="Threads per unit width")
    volume: Optional[Decimal] = Field(None, description="Volume per piece (liters)")

    def has(self, field: str) -> bool:
        """True when the field is present and positive."""
        value = getattr(self, field)
        return value is not None and value > 0

    def present_fields(self) -> list[str]:
        return [f for f in DIMENSION_FIELDS if getattr(self, f) is not None]


class PriceResult(BaseSchema):
    """Outcome of pricing one line item."""
    
    unit_value: Decimal = Field(ZERO, description="Priced units contained in one piece")
    total_value: Decimal = Field(ZERO, description="unit_value × quantity")
    total_price: Decimal = Field(ZERO, description="Line total before tax")
    is_valid: bool = False
    error_message: str = ""
    error_code: Optional[PricingErrorCode] = None


class LineItem(BaseSchema):
    """
    One product row in an order being built.
    
    The derived fields (unit_value onwards) are recomputed from scratch on
    every change; see services.pricing_service.PricingService.refresh.
    """
    
    product_id: str = Field(..., min_length=1, description="Catalog id")
    product_name: Optional[str] = None
    product_type: ProductType = ProductType.CARPET
    quantity: int = Field(1, ge=0, description="Whole pieces ordered")
    unit_price: Decimal = Field(ZERO, ge=0, description="Price per pricing unit")
    pricing_unit: PricingUnit = PricingUnit.PIECE
    dimensions: ProductDimensions = Field(default_factory=ProductDimensions)
    
    # Derived
    unit_value: Optional[Decimal] = None
    total_value: Optional[Decimal] = None
    total_price: Optional[Decimal] = None
    is_valid: bool = False
    error_message: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def sync_dimension_type(cls, data):
        """The line item's product_type wins over the one on its dimensions."""
        if not isinstance(data, dict):
            return data
        kind = ProductType(data.get("product_type", ProductType.CARPET))
        dims = data.get("dimensions")
        if dims is None:
            dims = ProductDimensions(product_type=kind)
        elif isinstance(dims, ProductDimensions):
            if dims.product_type != kind:
                dims = dims.model_copy(update={"product_type": kind})
        elif isinstance(dims, dict):
            dims = {**dims, "product_type": kind}
        return {**data, "dimensions": dims}


class LineItemSnapshot(FrozenSchema):
    """Read-only copy of a priced line item, written to the order on submit."""
    
    product_id: str
    product_name: Optional[str] = None
    product_type: ProductType
    quantity: int
    unit_price: Decimal
    pricing_unit: PricingUnit
    dimensions: ProductDimensions
    unit_value: Decimal
    total_value: Decimal
    total_price: Decimal


class ProductPricingInfo(BaseSchema):
    """Pricing options for a catalog product once it is selected."""
    
    product_id: str
    product_name: Optional[str] = None
    dimensions: ProductDimensions
    suggested_pricing_unit: PricingUnit
    available_pricing_units: list[PricingUnit]


class OrderTotals(BaseSchema):
    """Tax-agnostic order subtotal. GST is applied by the caller."""
    
    subtotal: Decimal = ZERO
    item_count: int = 0
    valid_count: int = 0
    unresolved_item_ids: list[str] = Field(default_factory=list)

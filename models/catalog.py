"""
Catalog record schema.

Records come from the remote table store as loosely typed rows:
dimension columns may be numbers, decorated strings ("120 cm") or junk
("N/A"). They are kept raw here and normalized by
services.dimension_resolver before any pricing happens.
"""

from pydantic import ConfigDict, Field
from typing import Optional, Union

from models.base import BaseSchema

RawDimension = Optional[Union[int, float, str]]


class CatalogRecord(BaseSchema):
    """Product or raw material row as the catalog stores it."""
    
    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
        extra="allow"
    )
    
    id: str = Field(..., description="Catalog id")
    name: str = Field("", description="Display name")
    unit: Optional[str] = Field(None, description="Stocking unit, e.g. 'roll' or 'kg'")
    width: RawDimension = None
    height: RawDimension = None
    weight: RawDimension = None
    gsm: RawDimension = None
    denier: RawDimension = None
    thread_count: RawDimension = None
    volume: RawDimension = None
    stock: float = Field(0, description="Units on hand")
    individual_stock_tracking: bool = Field(
        False,
        description="Whether each piece is tracked individually"
    )

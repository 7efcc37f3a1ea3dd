"""
Catalog lookup service.

Read-only access to finished carpets and raw materials in the remote
table store. Records are returned raw; dimension parsing belongs to
services.dimension_resolver.
"""

from typing import Optional, Union
import structlog

from config import get_supabase_client, settings
from models.catalog import CatalogRecord
from models.pricing import ProductType
from exceptions import CatalogItemNotFoundError, DatabaseError

logger = structlog.get_logger(__name__)


class CatalogService:
    """
    Catalog read operations.
    
    Never writes: stock and product edits belong to the inventory pages.
    """
    
    def __init__(self):
        self.db = get_supabase_client()
        self.tables = {
            ProductType.CARPET: settings.products_table,
            ProductType.RAW_MATERIAL: settings.raw_materials_table,
        }
    
    def table_for(self, product_type: Union[ProductType, str]) -> str:
        """Table holding records of this product type."""
        return self.tables[ProductType(product_type)]
    
    def get_record(
        self,
        product_id: str,
        product_type: Union[ProductType, str] = ProductType.CARPET
    ) -> CatalogRecord:
        """
        Get a single catalog record by ID.
        
        Args:
            product_id: Catalog id
            product_type: carpet or raw_material
            
        Returns:
            CatalogRecord
            
        Raises:
            CatalogItemNotFoundError: If the record doesn't exist
            DatabaseError: If the query fails
        """
        kind = ProductType(product_type)
        table = self.table_for(kind)
        logger.debug("getting_catalog_record", product_id=product_id, table=table)
        
        try:
            result = (
                self.db.table(table)
                .select("*")
                .eq("id", product_id)
                .single()
                .execute()
            )
            
            if not result.data:
                raise CatalogItemNotFoundError(product_id, kind.value)
            
        except CatalogItemNotFoundError:
            raise
        except Exception as e:
            logger.error(
                "get_catalog_record_failed",
                product_id=product_id,
                table=table,
                error=str(e)
            )
            # Supabase .single() raises PGRST116 when nothing matches
            if "0 rows" in str(e) or "no rows" in str(e).lower():
                raise CatalogItemNotFoundError(product_id, kind.value)
            raise DatabaseError("select", str(e))
        
        logger.info(
            "catalog_record_retrieved",
            product_id=product_id,
            product_type=kind.value
        )
        return CatalogRecord(**result.data)
    
    def search(
        self,
        product_type: Union[ProductType, str] = ProductType.CARPET,
        name: Optional[str] = None,
        limit: int = 50
    ) -> list[CatalogRecord]:
        """
        List catalog records, optionally filtered by name.
        
        Args:
            product_type: carpet or raw_material
            name: Case-insensitive substring of the record name
            limit: Maximum records returned
            
        Returns:
            List of CatalogRecord ordered by name
        """
        table = self.table_for(product_type)
        logger.debug("searching_catalog", table=table, name=name, limit=limit)
        
        try:
            query = self.db.table(table).select("*")
            if name:
                query = query.ilike("name", f"%{name}%")
            result = query.order("name").limit(limit).execute()
        except Exception as e:
            logger.error("search_catalog_failed", table=table, error=str(e))
            raise DatabaseError("select", str(e))
        
        records = [CatalogRecord(**row) for row in result.data]
        logger.info("catalog_searched", table=table, count=len(records))
        return records


# Singleton instance for convenience
_catalog_service: Optional[CatalogService] = None

def get_catalog_service() -> CatalogService:
    """Get or create CatalogService instance."""
    global _catalog_service
    if _catalog_service is None:
        _catalog_service = CatalogService()
    return _catalog_service

"""
Product Service - catalog and wholesale tiers
"""
import logging
from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.errors import ConflictError
from storefront.repositories.product_repository import ProductRepository, WholesaleRateRepository
from storefront.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    WholesaleRateCreate,
    WholesaleRateUpdate,
    WholesaleRateResponse
)

logger = logging.getLogger(__name__)

# Labels the storefront sends for "no filter"
ALL_CATEGORIES = ("All", "ทั้งหมด")


class ProductService:
    """Service layer for product business logic"""
    
    def __init__(self, db: Session):
        self.repository = ProductRepository(db)
        self.rate_repository = WholesaleRateRepository(db)
    
    def get_all_products(self, category: Optional[str] = None, featured: bool = False) -> List[ProductResponse]:
        """Get products, optionally by category or featured flag"""
        if category in ALL_CATEGORIES:
            category = None
        products = self.repository.get_all(category=category, featured=featured)
        return [ProductResponse.model_validate(p) for p in products]
    
    def get_product_by_id(self, product_id: int) -> Optional[ProductResponse]:
        """Get product by ID"""
        product = self.repository.get_by_id(product_id)
        if not product:
            return None
        return ProductResponse.model_validate(product)
    
    def create_product(self, product_data: ProductCreate) -> ProductResponse:
        """Create new product"""
        product = self.repository.create(product_data)
        logger.info("Product %s created: %s", product.id, product.name)
        return ProductResponse.model_validate(product)
    
    def update_product(self, product_id: int, product_data: ProductUpdate) -> Optional[ProductResponse]:
        """Update existing product"""
        product = self.repository.update(product_id, product_data)
        if not product:
            return None
        return ProductResponse.model_validate(product)
    
    def delete_product(self, product_id: int) -> bool:
        """
        Delete product

        Raises:
            ConflictError: If existing orders still reference the product
        """
        try:
            deleted = self.repository.delete(product_id)
        except IntegrityError:
            self.repository.db.rollback()
            raise ConflictError("Product is referenced by existing orders")
        if deleted:
            logger.info("Product %s deleted", product_id)
        return deleted
    
    def get_wholesale_rates(self) -> List[WholesaleRateResponse]:
        """Wholesale tiers, smallest minimum quantity first"""
        return [WholesaleRateResponse.model_validate(r) for r in self.rate_repository.get_all()]
    
    def create_wholesale_rate(self, rate_data: WholesaleRateCreate) -> WholesaleRateResponse:
        return WholesaleRateResponse.model_validate(self.rate_repository.create(rate_data))
    
    def update_wholesale_rate(self, rate_id: int, rate_data: WholesaleRateUpdate) -> Optional[WholesaleRateResponse]:
        rate = self.rate_repository.update(rate_id, rate_data)
        if not rate:
            return None
        return WholesaleRateResponse.model_validate(rate)
    
    def delete_wholesale_rate(self, rate_id: int) -> bool:
        return self.rate_repository.delete(rate_id)

"""
Product Repository - Data Access Layer
"""
from typing import Iterable, List, Optional
from sqlalchemy.orm import Session

from storefront.models.product import Product, WholesaleRate
from storefront.schemas.product import ProductCreate, ProductUpdate, WholesaleRateCreate, WholesaleRateUpdate


class ProductRepository:
    """Repository for Product CRUD operations"""
    
    def __init__(self, db: Session):
        self.db = db
    
    def get_all(self, category: Optional[str] = None, featured: Optional[bool] = None) -> List[Product]:
        """Get products, newest first, optionally filtered"""
        query = self.db.query(Product)
        if category:
            query = query.filter(Product.category == category)
        if featured:
            query = query.filter(Product.is_featured.is_(True))
        return query.order_by(Product.created_at.desc(), Product.id.desc()).all()
    
    def get_by_id(self, product_id: int) -> Optional[Product]:
        """Get product by ID"""
        return self.db.query(Product).filter(Product.id == product_id).first()
    
    def lock_many(self, product_ids: Iterable[int]) -> List[Product]:
        """
        Load products with row locks held until the current transaction ends
        
        Rows are locked in id order so concurrent checkouts and cancellations
        cannot deadlock on each other.
        """
        ids = sorted(set(product_ids))
        if not ids:
            return []
        return self.db.query(Product).filter(
            Product.id.in_(ids)
        ).order_by(Product.id).with_for_update().all()
    
    def create(self, product_data: ProductCreate) -> Product:
        """Create new product"""
        product = Product(**product_data.model_dump())
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product
    
    def update(self, product_id: int, product_data: ProductUpdate) -> Optional[Product]:
        """Update existing product"""
        product = self.get_by_id(product_id)
        if not product:
            return None
        
        # Update only provided fields
        update_data = product_data.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(product, field, value)
        
        self.db.commit()
        self.db.refresh(product)
        return product
    
    def delete(self, product_id: int) -> bool:
        """Delete product"""
        product = self.get_by_id(product_id)
        if not product:
            return False
        
        self.db.delete(product)
        self.db.commit()
        return True
    
    def increment_stock(self, product_id: int, quantity: int) -> bool:
        """
        Add quantity to stock inside the caller's transaction (no commit)
        
        Returns:
            False if the product does not exist
        """
        updated = self.db.query(Product).filter(
            Product.id == product_id
        ).update({Product.stock: Product.stock + quantity}, synchronize_session=False)
        return updated == 1
    
    def decrement_stock(self, product_id: int, quantity: int) -> bool:
        """
        Take quantity out of stock inside the caller's transaction (no commit)
        
        The update only applies while enough stock is left, so stock never
        goes negative.
        
        Returns:
            False if the product is missing or has insufficient stock
        """
        updated = self.db.query(Product).filter(
            Product.id == product_id,
            Product.stock >= quantity
        ).update({Product.stock: Product.stock - quantity}, synchronize_session=False)
        return updated == 1
    
    def count(self) -> int:
        """Get total count of products"""
        return self.db.query(Product).count()


class WholesaleRateRepository:
    """Repository for wholesale price tiers"""
    
    def __init__(self, db: Session):
        self.db = db
    
    def get_all(self) -> List[WholesaleRate]:
        return self.db.query(WholesaleRate).order_by(WholesaleRate.min_quantity.asc()).all()
    
    def get_by_id(self, rate_id: int) -> Optional[WholesaleRate]:
        return self.db.query(WholesaleRate).filter(WholesaleRate.id == rate_id).first()
    
    def create(self, rate_data: WholesaleRateCreate) -> WholesaleRate:
        rate = WholesaleRate(**rate_data.model_dump())
        self.db.add(rate)
        self.db.commit()
        self.db.refresh(rate)
        return rate
    
    def update(self, rate_id: int, rate_data: WholesaleRateUpdate) -> Optional[WholesaleRate]:
        rate = self.get_by_id(rate_id)
        if not rate:
            return None
        
        for field, value in rate_data.model_dump(exclude_unset=True).items():
            setattr(rate, field, value)
        
        self.db.commit()
        self.db.refresh(rate)
        return rate
    
    def delete(self, rate_id: int) -> bool:
        rate = self.get_by_id(rate_id)
        if not rate:
            return False
        
        self.db.delete(rate)
        self.db.commit()
        return True

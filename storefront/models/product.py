"""
SQLAlchemy Product and WholesaleRate models
"""
from sqlalchemy import Column, Integer, String, Float, DateTime, Text, Boolean, JSON, CheckConstraint
from sqlalchemy.sql import func
from storefront.database import Base


class Product(Base):
    """Product database model"""
    
    __tablename__ = "products"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    price = Column(Float, nullable=False)
    cost_price = Column(Float, nullable=True)
    unit = Column(String(100), nullable=True)
    stock = Column(Integer, nullable=False, default=0)
    category = Column(String(100), nullable=True, index=True)
    tags = Column(JSON, nullable=False, default=list)
    is_featured = Column(Boolean, nullable=False, default=False, index=True)
    image_url = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    
    # Constraints
    __table_args__ = (
        CheckConstraint('price >= 0', name='check_price_positive'),
        CheckConstraint('stock >= 0', name='check_stock_non_negative'),
    )
    
    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', price={self.price}, stock={self.stock})>"


class WholesaleRate(Base):
    """Bulk price tier, keyed by minimum quantity"""
    
    __tablename__ = "wholesale_rates"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    min_quantity = Column(Integer, nullable=False, index=True)
    price_per_kg = Column(Float, nullable=False)
    cost_per_unit = Column(Float, nullable=True)
    discount_label = Column(String(100), nullable=True)
    is_popular = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    
    __table_args__ = (
        CheckConstraint('min_quantity > 0', name='check_min_quantity_positive'),
    )
    
    def __repr__(self):
        return f"<WholesaleRate(id={self.id}, min_quantity={self.min_quantity}, price_per_kg={self.price_per_kg})>"

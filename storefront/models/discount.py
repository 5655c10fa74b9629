"""
SQLAlchemy Discount model
"""
from enum import Enum

from sqlalchemy import Column, Integer, String, Float, DateTime, Text, Boolean, CheckConstraint
from sqlalchemy.sql import func
from storefront.database import Base


class DiscountType(str, Enum):
    PERCENTAGE = "PERCENTAGE"
    FIXED = "FIXED"


class Discount(Base):
    """Discount code; codes are stored upper-case"""
    
    __tablename__ = "discounts"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    code = Column(String(50), nullable=False, unique=True, index=True)
    description = Column(Text, nullable=True)
    type = Column(String(20), nullable=False, default=DiscountType.PERCENTAGE.value)
    discount_value = Column(Float, nullable=False)
    min_purchase_amount = Column(Float, nullable=True)
    usage_limit = Column(Integer, nullable=True)
    used_count = Column(Integer, nullable=False, default=0)
    user_usage_limit = Column(Integer, nullable=True)
    start_date = Column(DateTime(timezone=True), nullable=True)
    end_date = Column(DateTime(timezone=True), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    
    __table_args__ = (
        CheckConstraint("type IN ('PERCENTAGE', 'FIXED')", name='check_discount_type_valid'),
        CheckConstraint('discount_value >= 0', name='check_discount_value_non_negative'),
    )
    
    def __repr__(self):
        return f"<Discount(code='{self.code}', type='{self.type}', value={self.discount_value})>"

"""
SQLAlchemy Order and OrderItem models
"""
from enum import Enum

from sqlalchemy import Column, Integer, String, Float, DateTime, Text, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from storefront.database import Base


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class Order(Base):
    """Order database model"""
    
    __tablename__ = "orders"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    customer_id = Column(Integer, nullable=True, index=True)  # NULL for guest checkout
    customer_name = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False, index=True)
    address = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default=OrderStatus.PENDING.value, index=True)
    total_amount = Column(Float, nullable=False)
    discount_code = Column(String(50), nullable=True, index=True)
    discount_amount = Column(Float, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    
    items = relationship(
        "OrderItem",
        back_populates="order",
        order_by="OrderItem.id",
        cascade="all, delete-orphan",
    )
    
    # Constraints
    __table_args__ = (
        CheckConstraint(
            "status IN ('PENDING', 'CONFIRMED', 'SHIPPED', 'DELIVERED', 'CANCELLED')",
            name='check_status_valid'
        ),
    )
    
    def __repr__(self):
        return f"<Order(id={self.id}, total_amount={self.total_amount}, status='{self.status}')>"


class OrderItem(Base):
    """Order line; price and cost are copied from the product at checkout"""
    
    __tablename__ = "order_items"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    price = Column(Float, nullable=False)
    cost_price = Column(Float, nullable=True)
    
    order = relationship("Order", back_populates="items")
    product = relationship("Product", lazy="joined")
    
    __table_args__ = (
        CheckConstraint('quantity > 0', name='check_quantity_positive'),
    )
    
    @property
    def product_name(self):
        return self.product.name if self.product is not None else None
    
    def __repr__(self):
        return f"<OrderItem(order_id={self.order_id}, product_id={self.product_id}, quantity={self.quantity})>"

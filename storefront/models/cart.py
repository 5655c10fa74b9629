"""
SQLAlchemy Cart and CartItem models
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from storefront.database import Base


class Cart(Base):
    """Shopping cart bound to a browser session id"""
    
    __tablename__ = "carts"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    session_id = Column(String(64), nullable=False, unique=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    
    items = relationship(
        "CartItem",
        back_populates="cart",
        order_by="CartItem.id",
        cascade="all, delete-orphan",
    )
    
    @property
    def subtotal(self) -> float:
        return sum(item.product.price * item.quantity for item in self.items)


class CartItem(Base):
    __tablename__ = "cart_items"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    cart_id = Column(Integer, ForeignKey("carts.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    
    cart = relationship("Cart", back_populates="items")
    product = relationship("Product", lazy="joined")
    
    __table_args__ = (
        UniqueConstraint('cart_id', 'product_id', name='uq_cart_product'),
        CheckConstraint('quantity > 0', name='check_cart_quantity_positive'),
    )

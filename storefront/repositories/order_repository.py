"""
Order Repository - Data Access Layer
"""
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session, selectinload
from sqlalchemy import desc, func

from storefront.models.order import Order, OrderItem, OrderStatus


class OrderRepository:
    """Repository for Order reads and writes"""
    
    def __init__(self, db: Session):
        self.db = db
    
    def get_all(self, skip: int = 0, limit: int = 100) -> List[Order]:
        """Get all orders with pagination, newest first"""
        return self.db.query(Order).options(
            selectinload(Order.items)
        ).order_by(
            desc(Order.created_at), desc(Order.id)
        ).offset(skip).limit(limit).all()
    
    def get_by_id(self, order_id: int) -> Optional[Order]:
        """Get order by ID"""
        return self.db.query(Order).filter(Order.id == order_id).first()
    
    def get_for_update(self, order_id: int) -> Optional[Order]:
        """Get order by ID and lock its row for the current transaction"""
        return self.db.query(Order).filter(Order.id == order_id).with_for_update().first()
    
    def get_by_customer(self, customer_id: int) -> List[Order]:
        """Get orders placed by a signed-in customer"""
        return self.db.query(Order).options(
            selectinload(Order.items)
        ).filter(
            Order.customer_id == customer_id
        ).order_by(desc(Order.created_at), desc(Order.id)).all()
    
    def get_by_id_and_phone(self, order_id: int, phone: str) -> Optional[Order]:
        """Guest lookup: the phone number acts as the shared secret"""
        return self.db.query(Order).filter(
            Order.id == order_id,
            Order.phone == phone
        ).first()
    
    def get_non_cancelled_between(self, start: datetime, end: datetime) -> List[Order]:
        """Non-cancelled orders created inside [start, end], oldest first"""
        return self.db.query(Order).options(
            selectinload(Order.items)
        ).filter(
            Order.created_at >= start,
            Order.created_at <= end,
            Order.status != OrderStatus.CANCELLED.value
        ).order_by(Order.created_at.asc(), Order.id.asc()).all()
    
    def get_all_with_items(self) -> List[Order]:
        """Every order with its items, in creation order"""
        return self.db.query(Order).options(
            selectinload(Order.items)
        ).order_by(Order.created_at.asc(), Order.id.asc()).all()
    
    def add(self, order: Order) -> Order:
        """Stage a new order and its items inside the caller's transaction"""
        self.db.add(order)
        self.db.flush()
        return order
    
    def count(self) -> int:
        """Get total count of orders"""
        return self.db.query(Order).count()
    
    def count_discount_uses(self, code: str, phone: str) -> int:
        """How many non-cancelled orders this phone placed with a discount code"""
        return self.db.query(func.count(Order.id)).filter(
            Order.phone == phone,
            Order.discount_code == code,
            Order.status != OrderStatus.CANCELLED.value
        ).scalar()

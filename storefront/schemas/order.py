"""
Pydantic schemas for checkout, orders and status changes
"""
from pydantic import Field
from typing import List, Optional
from datetime import datetime

from storefront.models.order import OrderStatus
from storefront.schemas.common import CamelModel


class CheckoutRequest(CamelModel):
    """Schema for placing an order from the session cart"""
    customer_name: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., min_length=3, max_length=50)
    address: str = Field(..., min_length=1)
    discount_code: Optional[str] = Field(None, max_length=50)


class OrderStatusUpdate(CamelModel):
    """Schema for updating order status"""
    status: OrderStatus = Field(..., description="Target order status")


class TrackOrderRequest(CamelModel):
    """Guest order lookup"""
    order_id: int = Field(..., gt=0)
    phone: str = Field(..., min_length=1)


class OrderItemResponse(CamelModel):
    id: int
    product_id: int
    product_name: Optional[str] = None
    quantity: int
    price: float


class OrderResponse(CamelModel):
    """Schema for order response"""
    id: int
    customer_id: Optional[int]
    customer_name: str
    phone: str
    address: str
    status: OrderStatus
    total_amount: float
    discount_code: Optional[str]
    discount_amount: float
    created_at: datetime
    items: List[OrderItemResponse] = []


class OrderListResponse(CamelModel):
    """Schema for list of orders response"""
    orders: List[OrderResponse]
    total: int

"""
Order API endpoints for shoppers: checkout, tracking and customer orders
"""
from fastapi import APIRouter, Cookie, Depends, status
from sqlalchemy.orm import Session
from typing import Optional

from storefront.config import settings
from storefront.database import get_db
from storefront.security import CustomerPrincipal, get_current_customer, get_optional_customer
from storefront.services.order_service import OrderService
from storefront.schemas.common import MessageResponse
from storefront.schemas.order import (
    CheckoutRequest,
    TrackOrderRequest,
    OrderResponse,
    OrderListResponse
)

router = APIRouter(prefix="/api/orders", tags=["orders"])
customer_router = APIRouter(prefix="/api/customer/orders", tags=["customer"])


def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    """Dependency to get OrderService instance"""
    return OrderService(db)


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED, summary="Place order")
def place_order(
    order_data: CheckoutRequest,
    cart_session_id: Optional[str] = Cookie(None, alias=settings.CART_COOKIE_NAME),
    customer: Optional[CustomerPrincipal] = Depends(get_optional_customer),
    service: OrderService = Depends(get_order_service)
):
    """
    Place an order from the current cart
    
    Process:
    1. Check and reserve stock for every cart line
    2. Apply the discount code (optional)
    3. Add the shipping fee
    4. Save the order as PENDING and empty the cart
    
    - **customerName**: Recipient name (required)
    - **phone**: Contact phone, also used for guest tracking (required)
    - **address**: Delivery address (required)
    - **discountCode**: Discount code (optional)
    """
    return service.place_order(cart_session_id, order_data, customer)


@router.post("/track", response_model=OrderResponse, summary="Track order")
def track_order(
    request: TrackOrderRequest,
    service: OrderService = Depends(get_order_service)
):
    """Look up an order by its number and the phone used at checkout"""
    return service.track_order(request.order_id, request.phone)


@customer_router.get("", response_model=OrderListResponse, summary="Get my orders")
def get_my_orders(
    customer: CustomerPrincipal = Depends(get_current_customer),
    service: OrderService = Depends(get_order_service)
):
    return service.get_orders_by_customer(customer.customer_id)


@customer_router.patch("/{order_id}/cancel", response_model=MessageResponse, summary="Cancel my order")
def cancel_my_order(
    order_id: int,
    customer: CustomerPrincipal = Depends(get_current_customer),
    service: OrderService = Depends(get_order_service)
):
    """
    Cancel a PENDING order and return its items to stock
    
    - 401 without a valid customer token
    - 403 if the order belongs to someone else
    - 400 if the order is no longer PENDING
    - 404 if the order does not exist
    """
    return service.cancel_order_by_customer(order_id, customer)

"""
Shopping cart endpoints

The cart is identified by a session cookie; a cart is created on first use.
"""
from fastapi import APIRouter, Cookie, Depends, Query, Response
from sqlalchemy.orm import Session
from typing import Optional

from storefront.config import settings
from storefront.database import get_db
from storefront.services.cart_service import CartService
from storefront.schemas.cart import CartItemAdd, CartItemUpdate, CartResponse

router = APIRouter(prefix="/api/cart", tags=["cart"])


def get_cart_service(db: Session = Depends(get_db)) -> CartService:
    return CartService(db)


def _set_session_cookie(response: Response, session_id: str):
    response.set_cookie(
        settings.CART_COOKIE_NAME,
        session_id,
        max_age=settings.CART_COOKIE_MAX_AGE,
        httponly=True,
        samesite="lax",
    )


@router.get("", response_model=CartResponse, summary="Get cart")
def get_cart(
    response: Response,
    cart_session_id: Optional[str] = Cookie(None, alias=settings.CART_COOKIE_NAME),
    service: CartService = Depends(get_cart_service)
):
    cart, session_id = service.get_or_create(cart_session_id)
    _set_session_cookie(response, session_id)
    return service.view(cart)


@router.post("", response_model=CartResponse, summary="Add item to cart")
def add_to_cart(
    item: CartItemAdd,
    response: Response,
    cart_session_id: Optional[str] = Cookie(None, alias=settings.CART_COOKIE_NAME),
    service: CartService = Depends(get_cart_service)
):
    """
    Add a product to the cart
    
    - **productId**: Product ID
    - **quantity**: Quantity to add (default 1); total may not exceed stock
    """
    cart, session_id = service.get_or_create(cart_session_id)
    _set_session_cookie(response, session_id)
    return service.add_item(cart, item.product_id, item.quantity)


@router.patch("", response_model=CartResponse, summary="Change item quantity")
def update_cart_item(
    item: CartItemUpdate,
    cart_session_id: Optional[str] = Cookie(None, alias=settings.CART_COOKIE_NAME),
    service: CartService = Depends(get_cart_service)
):
    cart, _ = service.get_or_create(cart_session_id)
    return service.update_item(cart, item.product_id, item.quantity)


@router.delete("", response_model=CartResponse, summary="Remove item or clear cart")
def delete_cart_item(
    product_id: Optional[int] = Query(None, alias="productId"),
    cart_session_id: Optional[str] = Cookie(None, alias=settings.CART_COOKIE_NAME),
    service: CartService = Depends(get_cart_service)
):
    """Remove one product, or clear the whole cart when productId is omitted"""
    cart, _ = service.get_or_create(cart_session_id)
    return service.remove_item(cart, product_id)

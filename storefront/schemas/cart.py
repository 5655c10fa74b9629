"""
Pydantic schemas for the shopping cart
"""
from pydantic import Field
from typing import List

from storefront.schemas.common import CamelModel
from storefront.schemas.product import ProductResponse


class CartItemAdd(CamelModel):
    product_id: int = Field(..., gt=0)
    quantity: int = Field(1, gt=0)


class CartItemUpdate(CamelModel):
    """Set an item's quantity; zero or less removes it"""
    product_id: int = Field(..., gt=0)
    quantity: int


class CartItemResponse(CamelModel):
    id: int
    product_id: int
    quantity: int
    product: ProductResponse


class CartResponse(CamelModel):
    id: int
    items: List[CartItemResponse]
    subtotal: float

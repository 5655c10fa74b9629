"""
Pydantic schemas for products and wholesale rates
"""
from pydantic import Field
from typing import List, Optional
from datetime import datetime

from storefront.schemas.common import CamelModel


class ProductBase(CamelModel):
    """Base Product schema with common fields"""
    name: str = Field(..., min_length=1, max_length=255, description="Product name")
    description: Optional[str] = Field(None, description="Product description")
    price: float = Field(..., ge=0, description="Selling price")
    cost_price: Optional[float] = Field(None, ge=0, description="Cost price, used for profit reports")
    unit: Optional[str] = Field(None, max_length=100, description="Selling unit, e.g. 'pack 500 g'")
    stock: int = Field(0, ge=0, description="Stock quantity (must be non-negative)")
    category: Optional[str] = Field(None, max_length=100, description="Product category")
    tags: List[str] = Field(default_factory=list, description="Free-form labels")
    is_featured: bool = Field(False, description="Show on the home page")
    image_url: Optional[str] = Field(None, max_length=500, description="Product image URL")


class ProductCreate(ProductBase):
    """Schema for creating a new product"""
    pass


class ProductUpdate(CamelModel):
    """
    Schema for updating a product
    
    Only fields present in the request are applied; an explicit null clears
    a nullable field.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    cost_price: Optional[float] = Field(None, ge=0)
    unit: Optional[str] = Field(None, max_length=100)
    stock: Optional[int] = Field(None, ge=0)
    category: Optional[str] = Field(None, max_length=100)
    tags: Optional[List[str]] = None
    is_featured: Optional[bool] = None
    image_url: Optional[str] = Field(None, max_length=500)


class ProductResponse(ProductBase):
    """Schema for product response"""
    id: int
    created_at: datetime
    updated_at: datetime


class WholesaleRateBase(CamelModel):
    min_quantity: int = Field(..., gt=0, description="Minimum quantity for this tier")
    price_per_kg: float = Field(..., ge=0)
    cost_per_unit: Optional[float] = Field(None, ge=0)
    discount_label: Optional[str] = Field(None, max_length=100)
    is_popular: bool = False


class WholesaleRateCreate(WholesaleRateBase):
    pass


class WholesaleRateUpdate(CamelModel):
    min_quantity: Optional[int] = Field(None, gt=0)
    price_per_kg: Optional[float] = Field(None, ge=0)
    cost_per_unit: Optional[float] = Field(None, ge=0)
    discount_label: Optional[str] = Field(None, max_length=100)
    is_popular: Optional[bool] = None


class WholesaleRateResponse(WholesaleRateBase):
    id: int

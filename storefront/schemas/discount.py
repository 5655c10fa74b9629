"""
Pydantic schemas for discount codes
"""
from pydantic import Field
from typing import Optional
from datetime import datetime

from storefront.models.discount import DiscountType
from storefront.schemas.common import CamelModel


class DiscountValidateRequest(CamelModel):
    """Checkout-time code check"""
    code: Optional[str] = None
    subtotal: float = Field(0, ge=0)
    phone: Optional[str] = None


class DiscountValidationResponse(CamelModel):
    """
    What the storefront needs to apply an accepted code
    
    Usage counters stay server-side.
    """
    code: str
    type: DiscountType
    discount_value: float
    description: Optional[str]
    min_purchase_amount: Optional[float]
    user_usage_limit: Optional[int]


class DiscountBase(CamelModel):
    code: str = Field(..., min_length=1, max_length=50)
    description: Optional[str] = None
    type: DiscountType = DiscountType.PERCENTAGE
    discount_value: float = Field(..., ge=0)
    min_purchase_amount: Optional[float] = Field(None, ge=0)
    usage_limit: Optional[int] = Field(None, ge=0)
    user_usage_limit: Optional[int] = Field(None, ge=0)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    is_active: bool = True


class DiscountCreate(DiscountBase):
    pass


class DiscountUpdate(CamelModel):
    """Partial update; absent fields are left untouched"""
    code: Optional[str] = Field(None, min_length=1, max_length=50)
    description: Optional[str] = None
    type: Optional[DiscountType] = None
    discount_value: Optional[float] = Field(None, ge=0)
    min_purchase_amount: Optional[float] = Field(None, ge=0)
    usage_limit: Optional[int] = Field(None, ge=0)
    user_usage_limit: Optional[int] = Field(None, ge=0)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    is_active: Optional[bool] = None


class DiscountResponse(DiscountBase):
    """Admin view, includes usage counters"""
    id: int
    used_count: int
    created_at: datetime

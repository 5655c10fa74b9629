"""
Pydantic schemas for reviews
"""
from pydantic import Field
from typing import Optional
from datetime import datetime

from storefront.schemas.common import CamelModel


class ReviewCreate(CamelModel):
    customer_name: str = Field(..., min_length=1, max_length=255)
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = None
    image_url: Optional[str] = Field(None, max_length=500)
    source: str = Field("Website", max_length=50)


class ReviewResponse(ReviewCreate):
    id: int
    created_at: datetime

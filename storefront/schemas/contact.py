"""
Pydantic schemas for contact form messages
"""
from pydantic import Field
from datetime import datetime

from storefront.schemas.common import CamelModel


class ContactMessageCreate(CamelModel):
    """Contact form submission; blank fields are rejected after trimming"""
    name: str = Field(..., max_length=255)
    phone: str = Field(..., max_length=50)
    subject: str = Field(..., max_length=255)
    message: str


class ContactMessageResponse(ContactMessageCreate):
    id: int
    created_at: datetime

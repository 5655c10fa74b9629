"""
Contact form endpoints
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from storefront.database import get_db
from storefront.security import require_admin
from storefront.services.contact_service import ContactService
from storefront.schemas.contact import ContactMessageCreate, ContactMessageResponse

router = APIRouter(prefix="/api/contact", tags=["contact"])
admin_router = APIRouter(
    prefix="/api/admin/contacts",
    tags=["admin"],
    dependencies=[Depends(require_admin)]
)


def get_contact_service(db: Session = Depends(get_db)) -> ContactService:
    return ContactService(db)


@router.post("", response_model=ContactMessageResponse, status_code=status.HTTP_201_CREATED, summary="Send message")
def send_message(
    message_data: ContactMessageCreate,
    service: ContactService = Depends(get_contact_service)
):
    """
    Send a message to the shop
    
    - **name**, **phone**, **subject**, **message**: all required, trimmed
    """
    return service.send_message(message_data)


@admin_router.get("", response_model=List[ContactMessageResponse], summary="Get contact messages")
def get_messages(service: ContactService = Depends(get_contact_service)):
    """Every contact message, newest first"""
    return service.get_all_messages()

"""
Contact Service - contact form messages
"""
import logging
from typing import List
from sqlalchemy.orm import Session

from storefront.errors import ValidationError
from storefront.repositories.contact_repository import ContactMessageRepository
from storefront.schemas.contact import ContactMessageCreate, ContactMessageResponse

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = (
    ("name", "Please enter your name"),
    ("phone", "Please enter your phone number"),
    ("subject", "Please choose a subject"),
    ("message", "Please enter a message"),
)


class ContactService:
    def __init__(self, db: Session):
        self.repository = ContactMessageRepository(db)
    
    def send_message(self, message_data: ContactMessageCreate) -> ContactMessageResponse:
        """
        Store a contact form message with surrounding whitespace removed
        
        Raises:
            ValidationError: If a field is blank
        """
        data = {}
        for field, error in REQUIRED_FIELDS:
            value = getattr(message_data, field).strip()
            if not value:
                raise ValidationError(error)
            data[field] = value
        
        message = self.repository.create(data)
        logger.info("Contact message %s received: %s", message.id, message.subject)
        return ContactMessageResponse.model_validate(message)
    
    def get_all_messages(self) -> List[ContactMessageResponse]:
        return [ContactMessageResponse.model_validate(m) for m in self.repository.get_all()]

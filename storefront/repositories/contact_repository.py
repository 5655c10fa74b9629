"""
Contact Message Repository - Data Access Layer
"""
from typing import List
from sqlalchemy.orm import Session
from sqlalchemy import desc

from storefront.models.contact import ContactMessage


class ContactMessageRepository:
    """Repository for contact form messages"""
    
    def __init__(self, db: Session):
        self.db = db
    
    def get_all(self) -> List[ContactMessage]:
        """Get every message, newest first"""
        return self.db.query(ContactMessage).order_by(
            desc(ContactMessage.created_at), desc(ContactMessage.id)
        ).all()
    
    def create(self, data: dict) -> ContactMessage:
        message = ContactMessage(**data)
        self.db.add(message)
        self.db.commit()
        self.db.refresh(message)
        return message

"""
SQLAlchemy ContactMessage model
"""
from sqlalchemy import Column, Integer, String, DateTime, Text
from sqlalchemy.sql import func
from storefront.database import Base


class ContactMessage(Base):
    """Message sent through the storefront contact form"""
    
    __tablename__ = "contact_messages"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False)
    subject = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    
    def __repr__(self):
        return f"<ContactMessage(id={self.id}, name='{self.name}', subject='{self.subject}')>"

"""
SQLAlchemy Review model
"""
from sqlalchemy import Column, Integer, String, DateTime, Text, CheckConstraint
from sqlalchemy.sql import func
from storefront.database import Base


class Review(Base):
    """Customer review shown on the storefront"""
    
    __tablename__ = "reviews"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    customer_name = Column(String(255), nullable=False)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=True)
    image_url = Column(String(500), nullable=True)
    source = Column(String(50), nullable=False, default="Website")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    
    __table_args__ = (
        CheckConstraint('rating BETWEEN 1 AND 5', name='check_rating_range'),
    )
    
    def __repr__(self):
        return f"<Review(id={self.id}, customer_name='{self.customer_name}', rating={self.rating})>"

"""
Review Repository - Data Access Layer
"""
from typing import List
from sqlalchemy.orm import Session
from sqlalchemy import desc

from storefront.models.review import Review
from storefront.schemas.review import ReviewCreate


class ReviewRepository:
    """Repository for Review CRUD operations"""
    
    def __init__(self, db: Session):
        self.db = db
    
    def get_all(self) -> List[Review]:
        return self.db.query(Review).order_by(desc(Review.created_at), desc(Review.id)).all()
    
    def create(self, review_data: ReviewCreate) -> Review:
        review = Review(**review_data.model_dump())
        self.db.add(review)
        self.db.commit()
        self.db.refresh(review)
        return review
    
    def delete(self, review_id: int) -> bool:
        review = self.db.query(Review).filter(Review.id == review_id).first()
        if not review:
            return False
        self.db.delete(review)
        self.db.commit()
        return True

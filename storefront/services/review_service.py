"""
Review Service
"""
from typing import List
from sqlalchemy.orm import Session

from storefront.repositories.review_repository import ReviewRepository
from storefront.schemas.review import ReviewCreate, ReviewResponse


class ReviewService:
    def __init__(self, db: Session):
        self.repository = ReviewRepository(db)
    
    def get_all_reviews(self) -> List[ReviewResponse]:
        return [ReviewResponse.model_validate(r) for r in self.repository.get_all()]
    
    def create_review(self, review_data: ReviewCreate) -> ReviewResponse:
        return ReviewResponse.model_validate(self.repository.create(review_data))
    
    def delete_review(self, review_id: int) -> bool:
        return self.repository.delete(review_id)

"""
Review endpoints
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from storefront.database import get_db
from storefront.errors import NotFoundError
from storefront.security import require_admin
from storefront.services.review_service import ReviewService
from storefront.schemas.common import MessageResponse
from storefront.schemas.review import ReviewCreate, ReviewResponse

router = APIRouter(prefix="/api/reviews", tags=["reviews"])
admin_router = APIRouter(
    prefix="/api/admin/reviews",
    tags=["admin"],
    dependencies=[Depends(require_admin)]
)


def get_review_service(db: Session = Depends(get_db)) -> ReviewService:
    return ReviewService(db)


@router.get("", response_model=List[ReviewResponse])
def get_reviews(service: ReviewService = Depends(get_review_service)):
    return service.get_all_reviews()


@router.post("", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
def create_review(
    review_data: ReviewCreate,
    service: ReviewService = Depends(get_review_service)
):
    return service.create_review(review_data)


@admin_router.get("", response_model=List[ReviewResponse])
def get_reviews_admin(service: ReviewService = Depends(get_review_service)):
    return service.get_all_reviews()


@admin_router.delete("/{review_id}", response_model=MessageResponse)
def delete_review(
    review_id: int,
    service: ReviewService = Depends(get_review_service)
):
    if not service.delete_review(review_id):
        raise NotFoundError("Review", review_id)
    return MessageResponse(message="Review deleted")

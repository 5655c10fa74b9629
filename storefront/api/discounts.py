"""
Discount code endpoints
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from storefront.database import get_db
from storefront.security import require_admin
from storefront.services.discount_service import DiscountService
from storefront.schemas.common import MessageResponse
from storefront.schemas.discount import (
    DiscountValidateRequest,
    DiscountValidationResponse,
    DiscountCreate,
    DiscountUpdate,
    DiscountResponse
)

router = APIRouter(prefix="/api/discounts", tags=["discounts"])
admin_router = APIRouter(
    prefix="/api/admin/discounts",
    tags=["admin"],
    dependencies=[Depends(require_admin)]
)


def get_discount_service(db: Session = Depends(get_db)) -> DiscountService:
    """Dependency to get DiscountService instance"""
    return DiscountService(db)


@router.post("/validate", response_model=DiscountValidationResponse, summary="Validate discount code")
def validate_discount(
    request: DiscountValidateRequest,
    service: DiscountService = Depends(get_discount_service)
):
    """
    Check a discount code against the current cart
    
    - **code**: Discount code, case-insensitive
    - **subtotal**: Cart subtotal before shipping
    - **phone**: Checkout phone, enables the per-customer limit check
    
    Rejections come back as `{error, reason}`: 404 for an unknown code,
    400 for every other reason.
    """
    return service.validate(request.code, request.subtotal, request.phone)


@admin_router.get("", response_model=List[DiscountResponse], summary="Get discount codes")
def get_discounts(service: DiscountService = Depends(get_discount_service)):
    return service.list_discounts()


@admin_router.post("", response_model=DiscountResponse, status_code=status.HTTP_201_CREATED, summary="Create discount code")
def create_discount(
    discount_data: DiscountCreate,
    service: DiscountService = Depends(get_discount_service)
):
    return service.create_discount(discount_data)


@admin_router.patch("/{discount_id}", response_model=DiscountResponse, summary="Update discount code")
def update_discount(
    discount_id: int,
    discount_data: DiscountUpdate,
    service: DiscountService = Depends(get_discount_service)
):
    return service.update_discount(discount_id, discount_data)


@admin_router.delete("/{discount_id}", response_model=MessageResponse, summary="Delete discount code")
def delete_discount(
    discount_id: int,
    service: DiscountService = Depends(get_discount_service)
):
    service.delete_discount(discount_id)
    return MessageResponse(message="Discount deleted")

"""
Wholesale price tier endpoints
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from storefront.database import get_db
from storefront.errors import NotFoundError
from storefront.security import require_admin
from storefront.services.product_service import ProductService
from storefront.schemas.common import MessageResponse
from storefront.schemas.product import (
    WholesaleRateCreate,
    WholesaleRateUpdate,
    WholesaleRateResponse
)

router = APIRouter(prefix="/api/wholesale", tags=["wholesale"])
admin_router = APIRouter(
    prefix="/api/admin/wholesale",
    tags=["admin"],
    dependencies=[Depends(require_admin)]
)


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    return ProductService(db)


@router.get("", response_model=List[WholesaleRateResponse], summary="Get wholesale rates")
def get_rates(service: ProductService = Depends(get_product_service)):
    """Wholesale tiers ordered by minimum quantity"""
    return service.get_wholesale_rates()


@admin_router.get("", response_model=List[WholesaleRateResponse], summary="Get wholesale rates (admin)")
def get_rates_admin(service: ProductService = Depends(get_product_service)):
    return service.get_wholesale_rates()


@admin_router.post("", response_model=WholesaleRateResponse, status_code=status.HTTP_201_CREATED)
def create_rate(
    rate_data: WholesaleRateCreate,
    service: ProductService = Depends(get_product_service)
):
    return service.create_wholesale_rate(rate_data)


@admin_router.patch("/{rate_id}", response_model=WholesaleRateResponse)
def update_rate(
    rate_id: int,
    rate_data: WholesaleRateUpdate,
    service: ProductService = Depends(get_product_service)
):
    rate = service.update_wholesale_rate(rate_id, rate_data)
    if not rate:
        raise NotFoundError("Wholesale rate", rate_id)
    return rate


@admin_router.delete("/{rate_id}", response_model=MessageResponse)
def delete_rate(
    rate_id: int,
    service: ProductService = Depends(get_product_service)
):
    if not service.delete_wholesale_rate(rate_id):
        raise NotFoundError("Wholesale rate", rate_id)
    return MessageResponse(message="Wholesale rate deleted")

"""
Product API endpoints
"""
from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from storefront.database import get_db
from storefront.errors import NotFoundError
from storefront.security import require_admin
from storefront.services.product_service import ProductService
from storefront.schemas.common import MessageResponse
from storefront.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
)

router = APIRouter(prefix="/api/products", tags=["products"])
admin_router = APIRouter(
    prefix="/api/admin/products",
    tags=["admin"],
    dependencies=[Depends(require_admin)]
)


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    """Dependency to get ProductService instance"""
    return ProductService(db)


@router.get("", response_model=List[ProductResponse], summary="Get products")
def get_products(
    category: Optional[str] = Query(None, description="Only products in this category"),
    featured: bool = Query(False, description="Only featured products"),
    service: ProductService = Depends(get_product_service)
):
    """
    Retrieve products, newest first
    
    - **category**: Category filter ("All" means no filter)
    - **featured**: Only products flagged for the home page
    """
    return service.get_all_products(category=category, featured=featured)


@router.get("/{product_id}", response_model=ProductResponse, summary="Get product by ID")
def get_product(
    product_id: int,
    service: ProductService = Depends(get_product_service)
):
    """
    Retrieve a specific product by ID
    
    - **product_id**: Product ID
    """
    product = service.get_product_by_id(product_id)
    if not product:
        raise NotFoundError("Product", product_id)
    return product


@admin_router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED, summary="Create product")
def create_product(
    product_data: ProductCreate,
    service: ProductService = Depends(get_product_service)
):
    """
    Create a new product
    
    - **name**: Product name (required)
    - **price**: Selling price (required)
    - **costPrice**: Cost price used for profit reports (optional)
    - **stock**: Stock quantity (must be non-negative)
    """
    return service.create_product(product_data)


@admin_router.patch("/{product_id}", response_model=ProductResponse, summary="Update product")
def update_product(
    product_id: int,
    product_data: ProductUpdate,
    service: ProductService = Depends(get_product_service)
):
    """
    Update an existing product
    
    Only fields present in the body are changed.
    """
    product = service.update_product(product_id, product_data)
    if not product:
        raise NotFoundError("Product", product_id)
    return product


@admin_router.delete("/{product_id}", response_model=MessageResponse, summary="Delete product")
def delete_product(
    product_id: int,
    service: ProductService = Depends(get_product_service)
):
    if not service.delete_product(product_id):
        raise NotFoundError("Product", product_id)
    return MessageResponse(message="Product deleted")

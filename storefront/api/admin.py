"""
Admin back-office endpoints: order management, dashboard and sales report
"""
from datetime import datetime
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from storefront.database import get_db
from storefront.errors import ValidationError
from storefront.security import require_admin
from storefront.services.order_service import OrderService
from storefront.services.report_service import ReportService
from storefront.schemas.order import OrderStatusUpdate, OrderResponse, OrderListResponse
from storefront.schemas.report import SalesReportResponse, DashboardStatsResponse

router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)])


def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    return OrderService(db)


def get_report_service(db: Session = Depends(get_db)) -> ReportService:
    return ReportService(db)


def parse_anchor_date(value: Optional[str]) -> Optional[datetime]:
    """Parse the ISO-8601 `date` query parameter"""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise ValidationError(f"Invalid date '{value}', expected ISO-8601")


@router.get("/orders", response_model=OrderListResponse, summary="Get all orders")
def get_orders(
    skip: int = Query(0, ge=0, description="Number of orders to skip"),
    limit: int = Query(100, ge=1, le=1000, description="Maximum number of orders to return"),
    service: OrderService = Depends(get_order_service)
):
    """
    Retrieve all orders with pagination, newest first
    
    - **skip**: Number of orders to skip (default: 0)
    - **limit**: Maximum number of orders to return (default: 100, max: 1000)
    """
    return service.get_all_orders(skip=skip, limit=limit)


@router.get("/orders/{order_id}", response_model=OrderResponse, summary="Get order by ID")
def get_order(
    order_id: int,
    service: OrderService = Depends(get_order_service)
):
    return service.get_order_by_id(order_id)


@router.patch("/orders/{order_id}", response_model=OrderResponse, summary="Update order status")
def update_order_status(
    order_id: int,
    status_data: OrderStatusUpdate,
    service: OrderService = Depends(get_order_service)
):
    """
    Update order status
    
    - **order_id**: Order ID
    - **status**: PENDING, CONFIRMED, SHIPPED, DELIVERED or CANCELLED
    
    Cancelling returns the order's items to stock.
    """
    return service.update_order_status(order_id, status_data.status)


@router.get("/stats", response_model=DashboardStatsResponse, summary="Dashboard statistics")
def get_stats(service: ReportService = Depends(get_report_service)):
    return service.dashboard_stats()


@router.get("/reports/sales", response_model=SalesReportResponse, summary="Sales report")
def get_sales_report(
    period: str = Query("day", description="day, month or year"),
    date: Optional[str] = Query(None, description="Any ISO-8601 date inside the period (default: today)"),
    service: ReportService = Depends(get_report_service)
):
    """
    Revenue, profit and a chart series for the period containing `date`
    """
    return service.sales_report(period, parse_anchor_date(date))

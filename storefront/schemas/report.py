"""
Pydantic schemas for the sales report and dashboard
"""
from typing import List, Optional
from datetime import datetime

from storefront.models.order import OrderStatus
from storefront.schemas.common import CamelModel
from storefront.schemas.order import OrderResponse


class SalesSummary(CamelModel):
    total_revenue: float
    total_orders: int
    total_profit: float
    avg_order_value: float


class ChartPoint(CamelModel):
    label: str
    revenue: float
    orders: int


class SalesReportOrder(CamelModel):
    id: int
    customer_name: str
    total_amount: float
    discount_code: Optional[str]
    discount_amount: float
    created_at: datetime
    status: OrderStatus


class SalesReportResponse(CamelModel):
    summary: SalesSummary
    chart_data: List[ChartPoint]
    orders: List[SalesReportOrder]


class TopProduct(CamelModel):
    product_id: int
    name: Optional[str]
    quantity: int
    revenue: float


class DashboardStatsResponse(CamelModel):
    total_revenue: float
    total_orders: int
    total_profit: float
    top_products: List[TopProduct]
    today_orders_count: int
    today_orders: List[OrderResponse]

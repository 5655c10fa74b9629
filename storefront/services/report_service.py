"""
Report Service - sales report and dashboard statistics
"""
import calendar
from datetime import date, datetime, time
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy.orm import Session

from storefront.errors import ValidationError
from storefront.models.order import Order, OrderStatus
from storefront.repositories.order_repository import OrderRepository
from storefront.schemas.order import OrderResponse
from storefront.schemas.report import (
    ChartPoint,
    DashboardStatsResponse,
    SalesReportOrder,
    SalesReportResponse,
    SalesSummary,
    TopProduct,
)
from storefront.utils import as_naive_utc, utcnow

PERIODS = ("day", "month", "year")
TOP_PRODUCTS_LIMIT = 5


def period_bounds(period: str, anchor: datetime) -> Tuple[datetime, datetime]:
    """
    Inclusive start and end of the day, month or year containing anchor

    Raises:
        ValidationError: If period is not one of day, month, year
    """
    day = anchor.date()
    if period == "day":
        first, last = day, day
    elif period == "month":
        first = day.replace(day=1)
        last = day.replace(day=calendar.monthrange(day.year, day.month)[1])
    elif period == "year":
        first = date(day.year, 1, 1)
        last = date(day.year, 12, 31)
    else:
        raise ValidationError(f"Unknown period '{period}', expected one of: {', '.join(PERIODS)}")
    return datetime.combine(first, time.min), datetime.combine(last, time.max)


def order_cost(order: Order) -> float:
    """Cost of goods for an order; items without a cost price count as free"""
    return sum((item.cost_price or 0) * item.quantity for item in order.items)


def _sum_revenue(orders: Iterable[Order]) -> float:
    return round(sum(o.total_amount for o in orders), 2)


class ReportService:
    """Read-only aggregations over the order history"""

    def __init__(self, db: Session):
        self.repository = OrderRepository(db)

    def sales_report(self, period: str = "day", anchor: Optional[datetime] = None) -> SalesReportResponse:
        """
        Revenue, profit and a time series for one day, month or year

        Cancelled orders are excluded. The chart has a single point for a
        day, one point per calendar day for a month and one point per month
        for a year; empty buckets are reported as zero.
        """
        anchor = as_naive_utc(anchor) or utcnow()
        start, end = period_bounds(period, anchor)
        orders = self.repository.get_non_cancelled_between(start, end)

        total_revenue = _sum_revenue(orders)
        total_orders = len(orders)
        total_cost = sum(order_cost(o) for o in orders)

        summary = SalesSummary(
            total_revenue=total_revenue,
            total_orders=total_orders,
            total_profit=round(total_revenue - total_cost, 2),
            avg_order_value=round(total_revenue / total_orders, 2) if total_orders > 0 else 0
        )

        return SalesReportResponse(
            summary=summary,
            chart_data=self._chart(period, anchor, start, end, orders),
            orders=[SalesReportOrder.model_validate(o) for o in orders]
        )

    def _chart(
        self,
        period: str,
        anchor: datetime,
        start: datetime,
        end: datetime,
        orders: List[Order]
    ) -> List[ChartPoint]:
        if period == "day":
            return [ChartPoint(
                label=anchor.strftime("%d/%m/%Y"),
                revenue=_sum_revenue(orders),
                orders=len(orders)
            )]

        buckets: Dict[object, List[Order]] = {}
        for order in orders:
            created = as_naive_utc(order.created_at)
            key = created.date() if period == "month" else (created.year, created.month)
            buckets.setdefault(key, []).append(order)

        points = []
        if period == "month":
            for day_number in range(start.day, end.day + 1):
                day = start.date().replace(day=day_number)
                bucket = buckets.get(day, [])
                points.append(ChartPoint(
                    label=day.strftime("%d/%m"),
                    revenue=_sum_revenue(bucket),
                    orders=len(bucket)
                ))
        else:
            for month in range(1, 13):
                bucket = buckets.get((start.year, month), [])
                points.append(ChartPoint(
                    label=date(start.year, month, 1).strftime("%b"),
                    revenue=_sum_revenue(bucket),
                    orders=len(bucket)
                ))
        return points

    def dashboard_stats(self, today: Optional[date] = None) -> DashboardStatsResponse:
        """
        Headline numbers for the admin dashboard

        Revenue, profit and best sellers only count non-cancelled orders;
        the order total and today's list include every order.
        """
        today = today or utcnow().date()
        orders = self.repository.get_all_with_items()
        active = [o for o in orders if o.status != OrderStatus.CANCELLED.value]

        total_revenue = _sum_revenue(active)
        total_profit = round(sum(o.total_amount - order_cost(o) for o in active), 2)

        # Insertion order is first-seen order, so the stable sort keeps ties in that order
        product_stats: Dict[int, dict] = {}
        for order in active:
            for item in order.items:
                stats = product_stats.setdefault(item.product_id, {
                    "product_id": item.product_id,
                    "name": item.product_name,
                    "quantity": 0,
                    "revenue": 0.0,
                })
                stats["quantity"] += item.quantity
                stats["revenue"] += item.price * item.quantity
        ranked = sorted(product_stats.values(), key=lambda s: s["quantity"], reverse=True)
        top_products = [TopProduct(**s) for s in ranked[:TOP_PRODUCTS_LIMIT]]

        today_orders = [o for o in orders if as_naive_utc(o.created_at).date() == today]
        today_orders.reverse()

        return DashboardStatsResponse(
            total_revenue=total_revenue,
            total_orders=len(orders),
            total_profit=total_profit,
            top_products=top_products,
            today_orders_count=len(today_orders),
            today_orders=[OrderResponse.model_validate(o) for o in today_orders]
        )

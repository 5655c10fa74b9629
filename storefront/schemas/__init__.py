"""
Schemas package
"""
from storefront.schemas.common import CamelModel, MessageResponse
from storefront.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    WholesaleRateCreate,
    WholesaleRateUpdate,
    WholesaleRateResponse
)
from storefront.schemas.order import (
    CheckoutRequest,
    OrderStatusUpdate,
    TrackOrderRequest,
    OrderItemResponse,
    OrderResponse,
    OrderListResponse
)
from storefront.schemas.discount import (
    DiscountValidateRequest,
    DiscountValidationResponse,
    DiscountCreate,
    DiscountUpdate,
    DiscountResponse
)
from storefront.schemas.report import (
    SalesSummary,
    ChartPoint,
    SalesReportResponse,
    TopProduct,
    DashboardStatsResponse
)
from storefront.schemas.cart import CartItemAdd, CartItemUpdate, CartResponse
from storefront.schemas.review import ReviewCreate, ReviewResponse
from storefront.schemas.contact import ContactMessageCreate, ContactMessageResponse

__all__ = [
    "CamelModel",
    "MessageResponse",
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
    "WholesaleRateCreate",
    "WholesaleRateUpdate",
    "WholesaleRateResponse",
    "CheckoutRequest",
    "OrderStatusUpdate",
    "TrackOrderRequest",
    "OrderItemResponse",
    "OrderResponse",
    "OrderListResponse",
    "DiscountValidateRequest",
    "DiscountValidationResponse",
    "DiscountCreate",
    "DiscountUpdate",
    "DiscountResponse",
    "SalesSummary",
    "ChartPoint",
    "SalesReportResponse",
    "TopProduct",
    "DashboardStatsResponse",
    "CartItemAdd",
    "CartItemUpdate",
    "CartResponse",
    "ReviewCreate",
    "ReviewResponse",
    "ContactMessageCreate",
    "ContactMessageResponse"
]

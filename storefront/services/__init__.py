"""
Services package
"""
from storefront.services.discount_service import DiscountService
from storefront.services.order_service import OrderService
from storefront.services.report_service import ReportService
from storefront.services.product_service import ProductService
from storefront.services.cart_service import CartService
from storefront.services.review_service import ReviewService
from storefront.services.contact_service import ContactService

__all__ = [
    "DiscountService",
    "OrderService",
    "ReportService",
    "ProductService",
    "CartService",
    "ReviewService",
    "ContactService"
]

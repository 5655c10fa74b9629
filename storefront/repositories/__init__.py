"""
Repositories package
"""
from storefront.repositories.product_repository import ProductRepository, WholesaleRateRepository
from storefront.repositories.order_repository import OrderRepository
from storefront.repositories.discount_repository import DiscountRepository
from storefront.repositories.cart_repository import CartRepository
from storefront.repositories.review_repository import ReviewRepository
from storefront.repositories.contact_repository import ContactMessageRepository

__all__ = [
    "ProductRepository",
    "WholesaleRateRepository",
    "OrderRepository",
    "DiscountRepository",
    "CartRepository",
    "ReviewRepository",
    "ContactMessageRepository"
]

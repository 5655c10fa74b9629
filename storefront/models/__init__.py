"""
Models package
"""
from storefront.models.product import Product, WholesaleRate
from storefront.models.order import Order, OrderItem, OrderStatus
from storefront.models.discount import Discount, DiscountType
from storefront.models.cart import Cart, CartItem
from storefront.models.review import Review
from storefront.models.contact import ContactMessage

__all__ = [
    "Product",
    "WholesaleRate",
    "Order",
    "OrderItem",
    "OrderStatus",
    "Discount",
    "DiscountType",
    "Cart",
    "CartItem",
    "Review",
    "ContactMessage"
]

"""
Storefront - shop and back-office service for a food-products retailer
"""
__version__ = "1.0.0"

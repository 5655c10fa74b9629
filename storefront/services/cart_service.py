"""
Cart Service - session shopping cart
"""
import uuid
from typing import Optional, Tuple
from sqlalchemy.orm import Session

from storefront.errors import NotFoundError, ValidationError
from storefront.models.cart import Cart
from storefront.repositories.cart_repository import CartRepository
from storefront.repositories.product_repository import ProductRepository
from storefront.schemas.cart import CartResponse


class CartService:
    """Service layer for carts keyed by a browser session id"""
    
    def __init__(self, db: Session):
        self.repository = CartRepository(db)
        self.product_repository = ProductRepository(db)
    
    def get_or_create(self, session_id: Optional[str]) -> Tuple[Cart, str]:
        """
        Find the cart for a session, creating session and cart as needed
        
        Returns:
            The cart and the session id to hand back in the cookie
        """
        if not session_id:
            session_id = uuid.uuid4().hex
        cart = self.repository.get_by_session(session_id)
        if not cart:
            cart = self.repository.create(session_id)
        return cart, session_id
    
    def view(self, cart: Cart) -> CartResponse:
        return CartResponse.model_validate(cart)
    
    def add_item(self, cart: Cart, product_id: int, quantity: int = 1) -> CartResponse:
        """
        Add quantity of a product, merging with an existing line
        
        Raises:
            NotFoundError: If the product does not exist
            ValidationError: If the product does not have enough stock
        """
        product = self.product_repository.get_by_id(product_id)
        if not product:
            raise NotFoundError("Product", product_id)
        
        existing = self.repository.get_item(cart.id, product_id)
        new_quantity = quantity + (existing.quantity if existing else 0)
        if product.stock < new_quantity:
            raise ValidationError(f"Not enough stock for {product.name} (available {product.stock})")
        
        self.repository.set_quantity(cart, product_id, new_quantity)
        return self.view(cart)
    
    def update_item(self, cart: Cart, product_id: int, quantity: int) -> CartResponse:
        """Set a line's quantity; zero or less removes the line"""
        if quantity <= 0:
            self.repository.remove_item(cart, product_id)
            return self.view(cart)
        
        product = self.product_repository.get_by_id(product_id)
        if not product:
            raise NotFoundError("Product", product_id)
        if not self.repository.get_item(cart.id, product_id):
            raise NotFoundError("Cart item")
        if product.stock < quantity:
            raise ValidationError(f"Only {product.stock} left of {product.name}")
        
        self.repository.set_quantity(cart, product_id, quantity)
        return self.view(cart)
    
    def remove_item(self, cart: Cart, product_id: Optional[int] = None) -> CartResponse:
        """Remove one product, or empty the cart when no product is given"""
        if product_id is None:
            self.repository.clear(cart)
        else:
            self.repository.remove_item(cart, product_id)
        return self.view(cart)

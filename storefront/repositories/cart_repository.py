"""
Cart Repository - Data Access Layer
"""
from typing import Optional
from sqlalchemy.orm import Session

from storefront.models.cart import Cart, CartItem


class CartRepository:
    """Repository for session carts"""
    
    def __init__(self, db: Session):
        self.db = db
    
    def get_by_session(self, session_id: str) -> Optional[Cart]:
        return self.db.query(Cart).filter(Cart.session_id == session_id).first()
    
    def create(self, session_id: str) -> Cart:
        cart = Cart(session_id=session_id)
        self.db.add(cart)
        self.db.commit()
        self.db.refresh(cart)
        return cart
    
    def get_item(self, cart_id: int, product_id: int) -> Optional[CartItem]:
        return self.db.query(CartItem).filter(
            CartItem.cart_id == cart_id,
            CartItem.product_id == product_id
        ).first()
    
    def set_quantity(self, cart: Cart, product_id: int, quantity: int) -> CartItem:
        """Insert or update a line"""
        item = self.get_item(cart.id, product_id)
        if item:
            item.quantity = quantity
        else:
            item = CartItem(cart_id=cart.id, product_id=product_id, quantity=quantity)
            self.db.add(item)
        self.db.commit()
        self.db.refresh(cart)
        return item
    
    def remove_item(self, cart: Cart, product_id: int) -> bool:
        item = self.get_item(cart.id, product_id)
        if not item:
            return False
        self.db.delete(item)
        self.db.commit()
        self.db.refresh(cart)
        return True
    
    def clear(self, cart: Cart, commit: bool = True):
        """Remove every line; pass commit=False to stay inside a larger transaction"""
        self.db.query(CartItem).filter(CartItem.cart_id == cart.id).delete(synchronize_session=False)
        if commit:
            self.db.commit()
            self.db.refresh(cart)

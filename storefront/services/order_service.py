"""
Order Service - Business Logic Layer

Owns checkout and every order status change. Status changes that cancel an
order put the items back into stock in the same transaction as the status
write, so readers never see a cancelled order with stock only partly
returned.
"""
import logging
from typing import Dict, Optional, Set

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.config import settings
from storefront.database import transaction
from storefront.errors import (
    DiscountRejectedError,
    DiscountRejection,
    ForbiddenError,
    InternalError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from storefront.models.order import Order, OrderItem, OrderStatus
from storefront.repositories.cart_repository import CartRepository
from storefront.repositories.discount_repository import DiscountRepository
from storefront.repositories.order_repository import OrderRepository
from storefront.repositories.product_repository import ProductRepository
from storefront.schemas.common import MessageResponse
from storefront.schemas.order import CheckoutRequest, OrderListResponse, OrderResponse
from storefront.security import CustomerPrincipal
from storefront.services.discount_service import DiscountService, compute_discount_amount

logger = logging.getLogger(__name__)

# Forward moves allowed from each status; cancelling is allowed from anywhere
TRANSITIONS: Dict[OrderStatus, Set[OrderStatus]] = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED},
    OrderStatus.CONFIRMED: {OrderStatus.SHIPPED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),
    OrderStatus.CANCELLED: set(),
}


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    """Whether an order in `current` may be moved to `target`"""
    if target == OrderStatus.CANCELLED:
        return True
    return target in TRANSITIONS[current]


class OrderService:
    """Service layer for order business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repository = OrderRepository(db)
        self.product_repository = ProductRepository(db)
        self.cart_repository = CartRepository(db)
        self.discount_repository = DiscountRepository(db)

    # Reads

    def get_all_orders(self, skip: int = 0, limit: int = 100) -> OrderListResponse:
        """Get all orders with pagination"""
        orders = self.repository.get_all(skip=skip, limit=limit)
        total = self.repository.count()

        return OrderListResponse(
            orders=[OrderResponse.model_validate(o) for o in orders],
            total=total
        )

    def get_order_by_id(self, order_id: int) -> OrderResponse:
        order = self.repository.get_by_id(order_id)
        if not order:
            raise NotFoundError("Order", order_id)
        return OrderResponse.model_validate(order)

    def get_orders_by_customer(self, customer_id: int) -> OrderListResponse:
        """Get orders placed by a signed-in customer, newest first"""
        orders = self.repository.get_by_customer(customer_id)
        return OrderListResponse(
            orders=[OrderResponse.model_validate(o) for o in orders],
            total=len(orders)
        )

    def track_order(self, order_id: int, phone: str) -> OrderResponse:
        """Guest tracking: order id plus the phone number used at checkout"""
        order = self.repository.get_by_id_and_phone(order_id, phone.strip())
        if not order:
            raise NotFoundError("Order")
        return OrderResponse.model_validate(order)

    # Checkout

    def place_order(
        self,
        session_id: Optional[str],
        order_data: CheckoutRequest,
        customer: Optional[CustomerPrincipal] = None
    ) -> OrderResponse:
        """
        Turn the session cart into a PENDING order

        Steps, all in one transaction:
        1. Lock the products in the cart
        2. Take each line out of stock (fails if stock is short)
        3. Lock the discount code, if any, check it and count its use
        4. Save the order with price/cost snapshots
        5. Empty the cart

        Raises:
            ValidationError: Empty cart, short stock or rejected discount code
            NotFoundError: A product in the cart no longer exists
            InternalError: The database refused the writes
        """
        cart = self.cart_repository.get_by_session(session_id) if session_id else None
        if not cart or not cart.items:
            raise ValidationError("Cart is empty")
        phone = order_data.phone.strip()

        try:
            with transaction(self.db):
                cart_items = list(cart.items)
                products = {
                    p.id: p for p in self.product_repository.lock_many(i.product_id for i in cart_items)
                }

                subtotal = 0.0
                lines = []
                for item in cart_items:
                    product = products.get(item.product_id)
                    if product is None:
                        raise NotFoundError("Product", item.product_id)
                    if not self.product_repository.decrement_stock(product.id, item.quantity):
                        raise ValidationError(
                            f"Insufficient stock for {product.name} "
                            f"(available {product.stock}, requested {item.quantity})"
                        )
                    subtotal += product.price * item.quantity
                    lines.append(OrderItem(
                        product_id=product.id,
                        quantity=item.quantity,
                        price=product.price,
                        cost_price=product.cost_price
                    ))

                discount_code = None
                discount_amount = 0.0
                if order_data.discount_code:
                    discount = DiscountService(self.db).check(
                        order_data.discount_code, subtotal, phone, for_update=True
                    )
                    if not self.discount_repository.increment_used_count(discount.id):
                        raise DiscountRejectedError(
                            DiscountRejection.GLOBAL_LIMIT_REACHED,
                            "This discount code has reached its usage limit"
                        )
                    discount_code = discount.code
                    discount_amount = compute_discount_amount(discount, subtotal)

                order = Order(
                    customer_id=customer.customer_id if customer else None,
                    customer_name=order_data.customer_name,
                    phone=phone,
                    address=order_data.address,
                    status=OrderStatus.PENDING.value,
                    total_amount=round(subtotal - discount_amount + settings.SHIPPING_FEE, 2),
                    discount_code=discount_code,
                    discount_amount=discount_amount,
                    items=lines
                )
                self.repository.add(order)
                self.cart_repository.clear(cart, commit=False)
        except SQLAlchemyError as e:
            logger.error("Checkout failed for cart session %s: %s", session_id, e)
            raise InternalError("Could not place order") from e

        logger.info("Order %s placed: total=%.2f discount=%s", order.id, order.total_amount, order.discount_code)
        return OrderResponse.model_validate(order)

    # Status changes

    def update_order_status(self, order_id: int, new_status: OrderStatus) -> OrderResponse:
        """
        Move an order to a new status (admin)

        Args:
            order_id: Order ID
            new_status: Target status

        Returns:
            The order after the change

        Raises:
            NotFoundError: If the order does not exist
            InvalidTransitionError: If the move is not allowed from the current status
            InternalError: If restocking or the status write failed; nothing is committed
        """
        try:
            with transaction(self.db):
                order = self.repository.get_for_update(order_id)
                if not order:
                    raise NotFoundError("Order", order_id)
                old_status = self._apply_transition(order, OrderStatus(new_status))
        except SQLAlchemyError as e:
            logger.error("Status update failed for order %s: %s", order_id, e)
            raise InternalError("Could not update order status") from e

        if old_status != order.status:
            logger.info("Order %s status changed: %s -> %s", order_id, old_status, order.status)
        return OrderResponse.model_validate(order)

    def cancel_order_by_customer(self, order_id: int, customer: CustomerPrincipal) -> MessageResponse:
        """
        Cancel an order on behalf of the customer who placed it

        Only PENDING orders can be cancelled this way.

        Raises:
            NotFoundError: If the order does not exist
            ForbiddenError: If the order belongs to someone else
            InvalidTransitionError: If the order is no longer PENDING
            InternalError: If restocking failed; nothing is committed
        """
        try:
            with transaction(self.db):
                order = self.repository.get_for_update(order_id)
                if not order:
                    raise NotFoundError("Order", order_id)
                if order.customer_id is None or order.customer_id != customer.customer_id:
                    raise ForbiddenError("You are not allowed to cancel this order")
                if order.status != OrderStatus.PENDING.value:
                    raise InvalidTransitionError(
                        order.status,
                        OrderStatus.CANCELLED.value,
                        "Orders that are already being processed cannot be cancelled"
                    )
                self._apply_transition(order, OrderStatus.CANCELLED)
        except SQLAlchemyError as e:
            logger.error("Customer cancellation failed for order %s: %s", order_id, e)
            raise InternalError("Could not cancel order") from e

        logger.info("Order %s cancelled by customer %s", order_id, customer.customer_id)
        return MessageResponse(message="Order cancelled")

    def _apply_transition(self, order: Order, target: OrderStatus) -> str:
        """
        Validate and stage a status change inside the caller's transaction

        Returns:
            The status the order had before the change
        """
        current = OrderStatus(order.status)
        if target == current:
            # Same status again (including re-cancelling) changes nothing
            return current.value
        if not can_transition(current, target):
            raise InvalidTransitionError(current.value, target.value)

        if target == OrderStatus.CANCELLED:
            self._restock(order)
        order.status = target.value
        self.db.flush()
        return current.value

    def _restock(self, order: Order):
        """Return every item of the order to stock"""
        items = list(order.items)
        self.product_repository.lock_many(item.product_id for item in items)
        for item in items:
            if not self.product_repository.increment_stock(item.product_id, item.quantity):
                raise InternalError(
                    f"Cannot restock order {order.id}: product {item.product_id} no longer exists"
                )

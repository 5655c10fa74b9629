"""
Discount Service - code validation and administration
"""
import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.errors import (
    ConflictError,
    DiscountRejectedError,
    DiscountRejection,
    NotFoundError,
    ValidationError,
)
from storefront.models.discount import Discount, DiscountType
from storefront.repositories.discount_repository import DiscountRepository
from storefront.repositories.order_repository import OrderRepository
from storefront.schemas.discount import (
    DiscountCreate,
    DiscountResponse,
    DiscountUpdate,
    DiscountValidationResponse,
)
from storefront.utils import as_naive_utc, utcnow

logger = logging.getLogger(__name__)


def compute_discount_amount(discount: Discount, subtotal: float) -> float:
    """
    Money taken off a subtotal by an accepted discount

    Percentage codes take value% of the subtotal; fixed codes take their
    value, never more than the subtotal itself.
    """
    if discount.type == DiscountType.PERCENTAGE.value:
        amount = subtotal * discount.discount_value / 100
    else:
        amount = discount.discount_value
    return round(min(max(amount, 0), subtotal), 2)


class DiscountService:
    """Service layer for discount codes"""

    def __init__(self, db: Session):
        self.repository = DiscountRepository(db)
        self.order_repository = OrderRepository(db)

    def check(
        self,
        code: Optional[str],
        subtotal: float,
        phone: Optional[str] = None,
        now: Optional[datetime] = None,
        for_update: bool = False
    ) -> Discount:
        """
        Run every rule against a code and return the matching Discount

        Rules run in a fixed order and the first failure wins:
        existence, active flag, minimum purchase, global usage limit,
        per-customer usage limit (only when a phone is given), start date,
        end date. Pass for_update inside a checkout transaction to hold the
        code's row lock until the use is counted.

        Raises:
            ValidationError: If no code was supplied
            DiscountRejectedError: With the reason of the first failing rule
        """
        if not code or not code.strip():
            raise ValidationError("Discount code must not be empty")

        discount = self.repository.get_by_code(code, for_update=for_update)
        if not discount:
            raise DiscountRejectedError(DiscountRejection.NOT_FOUND, "Discount code not found")

        if not discount.is_active:
            raise DiscountRejectedError(DiscountRejection.DISABLED, "This discount code has been disabled")

        if discount.min_purchase_amount is not None and subtotal < discount.min_purchase_amount:
            raise DiscountRejectedError(
                DiscountRejection.BELOW_MINIMUM,
                f"Minimum purchase is ฿{discount.min_purchase_amount:,.2f} "
                f"(current subtotal ฿{subtotal:,.2f})"
            )

        if discount.usage_limit is not None and discount.used_count >= discount.usage_limit:
            raise DiscountRejectedError(
                DiscountRejection.GLOBAL_LIMIT_REACHED,
                "This discount code has reached its usage limit"
            )

        phone = phone.strip() if phone else None
        if discount.user_usage_limit is not None and phone:
            used = self.order_repository.count_discount_uses(discount.code, phone)
            if used >= discount.user_usage_limit:
                raise DiscountRejectedError(
                    DiscountRejection.PER_USER_LIMIT_REACHED,
                    f"You have already used this code {discount.user_usage_limit} time(s)"
                )

        now = now or utcnow()
        start_date = as_naive_utc(discount.start_date)
        end_date = as_naive_utc(discount.end_date)
        if start_date is not None and now < start_date:
            raise DiscountRejectedError(DiscountRejection.NOT_YET_ACTIVE, "This discount code is not active yet")
        if end_date is not None and now > end_date:
            raise DiscountRejectedError(DiscountRejection.EXPIRED, "This discount code has expired")

        return discount

    def validate(
        self,
        code: Optional[str],
        subtotal: float,
        phone: Optional[str] = None,
        now: Optional[datetime] = None
    ) -> DiscountValidationResponse:
        """Validate a code for the storefront and describe how to apply it"""
        discount = self.check(code, subtotal, phone, now)
        return DiscountValidationResponse.model_validate(discount)

    # Admin operations

    def list_discounts(self) -> List[DiscountResponse]:
        return [DiscountResponse.model_validate(d) for d in self.repository.get_all()]

    def create_discount(self, data: DiscountCreate) -> DiscountResponse:
        """Create a code; codes are stored upper-case and must be unique"""
        payload = data.model_dump()
        payload["code"] = payload["code"].strip().upper()
        payload["type"] = data.type.value
        if self.repository.get_by_code(payload["code"]):
            raise ConflictError(f"Discount code {payload['code']} already exists")
        try:
            discount = self.repository.create(payload)
        except IntegrityError:
            self.repository.db.rollback()
            raise ConflictError(f"Discount code {payload['code']} already exists")
        logger.info("Discount %s created", discount.code)
        return DiscountResponse.model_validate(discount)

    def update_discount(self, discount_id: int, data: DiscountUpdate) -> DiscountResponse:
        discount = self.repository.get_by_id(discount_id)
        if not discount:
            raise NotFoundError("Discount", discount_id)

        changes = data.model_dump(exclude_unset=True)
        if changes.get("code") is not None:
            changes["code"] = changes["code"].strip().upper()
            existing = self.repository.get_by_code(changes["code"])
            if existing and existing.id != discount.id:
                raise ConflictError(f"Discount code {changes['code']} already exists")
        if changes.get("type") is not None:
            changes["type"] = DiscountType(changes["type"]).value
        for required in ("code", "type", "discount_value", "is_active"):
            if required in changes and changes[required] is None:
                raise ValidationError(f"{required} cannot be null")

        try:
            discount = self.repository.update(discount, changes)
        except IntegrityError:
            self.repository.db.rollback()
            raise ConflictError("Discount code already exists")
        return DiscountResponse.model_validate(discount)

    def delete_discount(self, discount_id: int):
        discount = self.repository.get_by_id(discount_id)
        if not discount:
            raise NotFoundError("Discount", discount_id)
        code = discount.code
        self.repository.delete(discount)
        logger.info("Discount %s deleted", code)

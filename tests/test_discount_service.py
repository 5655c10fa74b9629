"""Tests for discount code validation."""

from datetime import datetime, timedelta

import pytest

from storefront.errors import DiscountRejectedError, DiscountRejection, ValidationError
from storefront.models import Discount, OrderStatus
from storefront.repositories.discount_repository import DiscountRepository
from storefront.services.discount_service import DiscountService, compute_discount_amount

NOW = datetime(2024, 6, 15, 12, 0, 0)


@pytest.fixture
def service(db_session):
    return DiscountService(db_session)


def reason_of(excinfo):
    return excinfo.value.reason


class TestValidationOrder:
    def test_below_minimum_then_accepted(self, service, make_discount):
        make_discount(code="SAVE10", type="PERCENTAGE", discount_value=10, min_purchase_amount=500)

        with pytest.raises(DiscountRejectedError) as excinfo:
            service.validate("SAVE10", 400, now=NOW)
        assert reason_of(excinfo) == DiscountRejection.BELOW_MINIMUM
        assert "500" in str(excinfo.value)
        assert "400" in str(excinfo.value)

        result = service.validate("SAVE10", 600, now=NOW)
        assert result.discount_value == 10
        assert result.code == "SAVE10"

    def test_code_match_is_case_insensitive(self, service, make_discount):
        make_discount(code="SAVE10")
        assert service.validate("save10", 100, now=NOW).code == "SAVE10"
        assert service.validate("  Save10 ", 100, now=NOW).code == "SAVE10"

    def test_unknown_code(self, service):
        with pytest.raises(DiscountRejectedError) as excinfo:
            service.validate("NOPE", 100, now=NOW)
        assert reason_of(excinfo) == DiscountRejection.NOT_FOUND

    @pytest.mark.parametrize("code", [None, "", "   "])
    def test_empty_code_is_a_validation_error(self, service, code):
        with pytest.raises(ValidationError) as excinfo:
            service.validate(code, 100, now=NOW)
        assert not isinstance(excinfo.value, DiscountRejectedError)

    def test_disabled_wins_over_later_checks(self, service, make_discount):
        make_discount(is_active=False, min_purchase_amount=1000, usage_limit=1, used_count=1)
        with pytest.raises(DiscountRejectedError) as excinfo:
            service.validate("SAVE10", 10, now=NOW)
        assert reason_of(excinfo) == DiscountRejection.DISABLED

    @pytest.mark.parametrize(
        "used_count,usage_limit,extra",
        [
            (5, 5, {}),
            (6, 5, {}),
            (0, 0, {}),
            (3, 3, {"end_date": NOW - timedelta(days=1)}),
            (3, 3, {"start_date": NOW + timedelta(days=1)}),
            (3, 3, {"user_usage_limit": 10}),
        ],
    )
    def test_global_limit_reached(self, service, make_discount, used_count, usage_limit, extra):
        make_discount(used_count=used_count, usage_limit=usage_limit, **extra)
        with pytest.raises(DiscountRejectedError) as excinfo:
            service.validate("SAVE10", 100, phone="0811111111", now=NOW)
        assert reason_of(excinfo) == DiscountRejection.GLOBAL_LIMIT_REACHED

    def test_under_global_limit_passes(self, service, make_discount):
        make_discount(used_count=4, usage_limit=5)
        assert service.validate("SAVE10", 100, now=NOW).code == "SAVE10"


class TestPerCustomerLimit:
    def test_counts_only_non_cancelled_orders_for_the_phone(self, service, make_discount, make_order):
        make_discount(user_usage_limit=2)
        make_order(phone="0811111111", discount_code="SAVE10")
        make_order(phone="0811111111", discount_code="SAVE10", status=OrderStatus.CANCELLED)
        make_order(phone="0822222222", discount_code="SAVE10")
        make_order(phone="0811111111", discount_code="OTHER")

        assert service.validate("SAVE10", 100, phone="0811111111", now=NOW).code == "SAVE10"

        make_order(phone="0811111111", discount_code="SAVE10", status=OrderStatus.DELIVERED)
        with pytest.raises(DiscountRejectedError) as excinfo:
            service.validate("save10", 100, phone="0811111111", now=NOW)
        assert reason_of(excinfo) == DiscountRejection.PER_USER_LIMIT_REACHED

    def test_skipped_without_phone(self, service, make_discount, make_order):
        make_discount(user_usage_limit=1)
        make_order(phone="0811111111", discount_code="SAVE10")
        assert service.validate("SAVE10", 100, now=NOW).code == "SAVE10"


class TestDateWindow:
    def test_not_yet_active(self, service, make_discount):
        make_discount(start_date=NOW + timedelta(hours=1))
        with pytest.raises(DiscountRejectedError) as excinfo:
            service.validate("SAVE10", 100, now=NOW)
        assert reason_of(excinfo) == DiscountRejection.NOT_YET_ACTIVE

    def test_expired(self, service, make_discount):
        make_discount(end_date=NOW - timedelta(seconds=1))
        with pytest.raises(DiscountRejectedError) as excinfo:
            service.validate("SAVE10", 100, now=NOW)
        assert reason_of(excinfo) == DiscountRejection.EXPIRED

    def test_inside_window(self, service, make_discount):
        make_discount(start_date=NOW - timedelta(days=1), end_date=NOW + timedelta(days=1))
        assert service.validate("SAVE10", 100, now=NOW).code == "SAVE10"

    def test_start_checked_before_end(self, service, make_discount):
        make_discount(start_date=NOW + timedelta(days=1), end_date=NOW - timedelta(days=1))
        with pytest.raises(DiscountRejectedError) as excinfo:
            service.validate("SAVE10", 100, now=NOW)
        assert reason_of(excinfo) == DiscountRejection.NOT_YET_ACTIVE


class TestValidationResponse:
    def test_does_not_expose_counters(self, service, make_discount):
        make_discount(
            description="10% off",
            min_purchase_amount=100,
            usage_limit=50,
            used_count=3,
            user_usage_limit=1,
        )
        payload = service.validate("SAVE10", 200, now=NOW).model_dump(by_alias=True)
        assert payload == {
            "code": "SAVE10",
            "type": "PERCENTAGE",
            "discountValue": 10,
            "description": "10% off",
            "minPurchaseAmount": 100,
            "userUsageLimit": 1,
        }


class TestDiscountAmount:
    def test_percentage(self, make_discount):
        discount = make_discount(type="PERCENTAGE", discount_value=10)
        assert compute_discount_amount(discount, 600) == 60

    def test_fixed(self, make_discount):
        discount = make_discount(type="FIXED", discount_value=50)
        assert compute_discount_amount(discount, 600) == 50

    def test_fixed_never_exceeds_subtotal(self, make_discount):
        discount = make_discount(type="FIXED", discount_value=500)
        assert compute_discount_amount(discount, 120) == 120


class TestPhoneNormalisation:
    def test_surrounding_whitespace_does_not_bypass_limit(self, service, make_discount, make_order):
        make_discount(user_usage_limit=1)
        make_order(phone="0811111111", discount_code="SAVE10")

        with pytest.raises(DiscountRejectedError) as excinfo:
            service.validate("SAVE10", 100, phone="  0811111111 ", now=NOW)
        assert reason_of(excinfo) == DiscountRejection.PER_USER_LIMIT_REACHED

    def test_blank_phone_skips_limit(self, service, make_discount, make_order):
        make_discount(user_usage_limit=1)
        make_order(phone="0811111111", discount_code="SAVE10")

        assert service.validate("SAVE10", 100, phone="   ", now=NOW).code == "SAVE10"


class TestUsageCounter:
    def test_increment_stops_at_limit(self, db_session, make_discount):
        discount_id = make_discount(usage_limit=2, used_count=1).id
        repository = DiscountRepository(db_session)

        assert repository.increment_used_count(discount_id)
        assert not repository.increment_used_count(discount_id)
        db_session.commit()

        assert db_session.query(Discount).filter(Discount.id == discount_id).one().used_count == 2

    def test_unlimited_code_always_counts(self, db_session, make_discount):
        discount_id = make_discount(used_count=500).id

        assert DiscountRepository(db_session).increment_used_count(discount_id)
        db_session.commit()

        assert db_session.query(Discount).filter(Discount.id == discount_id).one().used_count == 501

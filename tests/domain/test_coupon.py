"""Unit tests for coupon applicability and discount calculation."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from ordering.domain.exceptions import BusinessRuleError, ValidationError
from ordering.domain.model.coupon import Coupon
from ordering.domain.model.value_objects import Money

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def _coupon(**overrides) -> Coupon:
    values = dict(
        id="c1",
        code="SPRING",
        discount_amount=Money.of("20.00"),
        start_date=NOW - timedelta(days=1),
        end_date=NOW + timedelta(days=1),
    )
    values.update(overrides)
    return Coupon(**values)


class TestCouponValidation:

    def test_end_before_start_rejected(self):
        with pytest.raises(ValidationError, match="end date"):
            _coupon(start_date=NOW, end_date=NOW - timedelta(seconds=1))

    def test_percentage_out_of_range_rejected(self):
        with pytest.raises(ValidationError, match="between 0 and 100"):
            _coupon(discount_percentage=Decimal("150"))


class TestCouponApplicability:

    def test_valid_inside_window(self):
        assert _coupon().is_valid(NOW)

    def test_invalid_after_end(self):
        assert not _coupon().is_valid(NOW + timedelta(days=2))

    def test_window_bounds_are_inclusive(self):
        coupon = _coupon()
        coupon.check_applicable(Money.of("1"), coupon.start_date)
        coupon.check_applicable(Money.of("1"), coupon.end_date)

    def test_unlimited_usage(self):
        coupon = _coupon(usage_limit=0, used_count=10_000)
        assert not coupon.usage_limit_reached

    def test_limit_reached(self):
        coupon = _coupon(usage_limit=3, used_count=3)
        assert coupon.usage_limit_reached
        with pytest.raises(BusinessRuleError, match="usage limit"):
            coupon.check_applicable(Money.of("50"), NOW)


class TestCouponDiscount:

    def test_fixed_amount(self):
        assert _coupon().calculate_discount(Money.of("100"), NOW) == Money.of("20.00")

    def test_fixed_amount_capped_at_purchase(self):
        assert _coupon().calculate_discount(Money.of("15"), NOW) == Money.of("15")

    def test_percentage(self):
        coupon = _coupon(discount_percentage=Decimal("10"))
        assert coupon.calculate_discount(Money.of("100.00"), NOW) == Money.of("10.00")

    def test_percentage_rounded_to_cents(self):
        coupon = _coupon(discount_percentage=Decimal("15"))
        assert coupon.calculate_discount(Money.of("33.33"), NOW) == Money.of("5.00")

    def test_percentage_capped_by_maximum(self):
        coupon = _coupon(
            discount_percentage=Decimal("50"),
            maximum_discount_amount=Money.of("25.00"),
        )
        assert coupon.calculate_discount(Money.of("100.00"), NOW) == Money.of("25.00")

    def test_discount_checks_applicability(self):
        coupon = _coupon(minimum_purchase_amount=Money.of("200"))
        with pytest.raises(BusinessRuleError, match="minimum purchase"):
            coupon.calculate_discount(Money.of("100"), NOW)


class TestCouponUsage:

    def test_increment(self):
        coupon = _coupon(usage_limit=2)
        coupon.increment_usage(NOW)
        assert coupon.used_count == 1

    def test_increment_past_limit_rejected(self):
        coupon = _coupon(usage_limit=1)
        coupon.increment_usage(NOW)
        with pytest.raises(BusinessRuleError, match="no longer be used"):
            coupon.increment_usage(NOW)

"""JSON-file-backed implementation of CouponRepository."""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path

from ordering.domain.model.coupon import Coupon
from ordering.domain.repository.coupon_repository import CouponRepository
from ordering.infrastructure.persistence.json_codec import (
    datetime_from_raw,
    datetime_to_raw,
    money_from_raw,
    money_to_raw,
)


class JsonCouponRepository(CouponRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- CouponRepository interface -------------------------------------------

    def get_by_code(self, code: str) -> Coupon | None:
        return self._load().get(code.strip().upper())

    def save(self, coupon: Coupon) -> None:
        coupons = self._load()
        coupons[coupon.code.upper()] = coupon
        self._persist(coupons)

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, Coupon]:
        raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        return {item["code"].upper(): self._to_domain(item) for item in raw}

    @staticmethod
    def _to_domain(item: dict) -> Coupon:
        percentage = item.get("discount_percentage")
        return Coupon(
            id=item["id"],
            code=item["code"],
            discount_amount=money_from_raw(item["discount_amount"]),
            start_date=datetime_from_raw(item["start_date"]),
            end_date=datetime_from_raw(item["end_date"]),
            discount_percentage=Decimal(percentage) if percentage is not None else None,
            minimum_purchase_amount=money_from_raw(item.get("minimum_purchase_amount")),
            maximum_discount_amount=money_from_raw(item.get("maximum_discount_amount")),
            usage_limit=item.get("usage_limit", 0),
            used_count=item.get("used_count", 0),
            is_active=item.get("is_active", True),
        )

    def _persist(self, coupons: dict[str, Coupon]) -> None:
        raw = [
            {
                "id": c.id,
                "code": c.code,
                "discount_amount": money_to_raw(c.discount_amount),
                "start_date": datetime_to_raw(c.start_date),
                "end_date": datetime_to_raw(c.end_date),
                "discount_percentage": (
                    str(c.discount_percentage) if c.discount_percentage is not None else None
                ),
                "minimum_purchase_amount": money_to_raw(c.minimum_purchase_amount),
                "maximum_discount_amount": money_to_raw(c.maximum_discount_amount),
                "usage_limit": c.usage_limit,
                "used_count": c.used_count,
                "is_active": c.is_active,
            }
            for c in coupons.values()
        ]
        self._file_path.write_text(
            json.dumps(raw, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")

"""Shared JSON encodings for Money and timestamps."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from ordering.domain.model.value_objects import DEFAULT_CURRENCY, Money


def money_to_raw(money: Money | None) -> dict | None:
    if money is None:
        return None
    return {"amount": str(money.amount), "currency": money.currency}


def money_from_raw(raw: dict | None) -> Money | None:
    if raw is None:
        return None
    return Money(Decimal(raw["amount"]), raw.get("currency", DEFAULT_CURRENCY))


def datetime_to_raw(value: datetime | None) -> str | None:
    return None if value is None else value.isoformat()


def datetime_from_raw(raw: str | None) -> datetime | None:
    return None if raw is None else datetime.fromisoformat(raw)

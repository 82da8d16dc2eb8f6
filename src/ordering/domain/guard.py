"""Precondition checks used by every aggregate mutator.

Each helper raises ValidationError naming the offending argument, so a
failed check never reaches the aggregate's state.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from ordering.domain.exceptions import ValidationError
from ordering.domain.model.value_objects import Money


def against_none(value: Any, name: str) -> None:
    if value is None:
        raise ValidationError(f"{name} is required")


def against_empty(value: str | None, name: str) -> None:
    if value is None or not str(value).strip():
        raise ValidationError(f"{name} cannot be empty")


def against_non_positive(value: int | Decimal, name: str) -> None:
    against_none(value, name)
    if value <= 0:
        raise ValidationError(f"{name} must be positive, got {value}")


def against_negative(value: int | Decimal, name: str) -> None:
    against_none(value, name)
    if value < 0:
        raise ValidationError(f"{name} cannot be negative, got {value}")


def against_negative_money(value: Money | None, name: str) -> None:
    against_none(value, name)
    if value.is_negative:
        raise ValidationError(f"{name} cannot be negative, got {value}")

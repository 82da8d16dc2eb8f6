"""Base domain event.

Events are immutable records of something that happened inside an
aggregate.  They carry ids and values only, never an aggregate snapshot,
and are drained from the aggregate by the application layer after a
successful save.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any

from ordering.domain.model.value_objects import Money

_METADATA_FIELDS = ("event_id", "occurred_at")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class DomainEvent:
    event_id: str = field(default_factory=lambda: str(uuid.uuid4()), kw_only=True)
    occurred_at: datetime = field(default_factory=_utcnow, kw_only=True)

    @property
    def event_type(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict[str, Any]:
        """Serializable form used by publishers."""
        return {
            "event_id": self.event_id,
            "event_type": self.event_type,
            "occurred_at": self.occurred_at.isoformat(),
            "data": {
                f.name: _serialize(getattr(self, f.name))
                for f in fields(self)
                if f.name not in _METADATA_FIELDS
            },
        }


def _serialize(value: Any) -> Any:
    if isinstance(value, Money):
        return {"amount": str(value.amount), "currency": value.currency}
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    return value

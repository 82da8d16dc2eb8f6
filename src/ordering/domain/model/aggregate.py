"""Base class for aggregate roots that raise domain events."""

from __future__ import annotations

from dataclasses import dataclass, field

from ordering.domain.events.base import DomainEvent


@dataclass
class AggregateRoot:
    """Owns the buffer of events raised since the aggregate was loaded.

    The buffer is never persisted.  The application layer calls
    ``pop_events()`` exactly once per unit of work, after the repository
    accepted the save.
    """

    _events: list[DomainEvent] = field(
        default_factory=list, init=False, repr=False, compare=False
    )

    @property
    def pending_events(self) -> tuple[DomainEvent, ...]:
        return tuple(self._events)

    def pop_events(self) -> list[DomainEvent]:
        events = list(self._events)
        self._events.clear()
        return events

    def _record(self, event: DomainEvent) -> None:
        self._events.append(event)

"""Abstract outlet for drained domain events.

Defined in the domain layer so handlers never depend on how events
leave the process.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from ordering.domain.events.base import DomainEvent


class EventPublisher(ABC):

    @abstractmethod
    def publish(self, events: Iterable[DomainEvent]) -> None:
        """Hand over events raised by one unit of work, in order."""

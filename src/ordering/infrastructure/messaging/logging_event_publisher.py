"""EventPublisher that writes every drained domain event to the log."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable

from ordering.domain.events.base import DomainEvent
from ordering.domain.events.publisher import EventPublisher

logger = logging.getLogger(__name__)


class LoggingEventPublisher(EventPublisher):

    def publish(self, events: Iterable[DomainEvent]) -> None:
        for event in events:
            payload = event.to_dict()
            logger.info("%s %s", event.event_type, json.dumps(payload["data"], sort_keys=True))

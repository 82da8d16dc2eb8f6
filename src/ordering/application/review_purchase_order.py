"""Application service: purchase order approval workflow."""

from __future__ import annotations

import logging
from enum import Enum

from ordering.application.dto import PurchaseOrderDTO, purchase_order_to_dto
from ordering.domain.events.publisher import EventPublisher
from ordering.domain.exceptions import EntityNotFoundError, ValidationError
from ordering.domain.repository.purchase_order_repository import (
    PurchaseOrderRepository,
)

logger = logging.getLogger(__name__)


class ReviewDecision(Enum):
    SUBMIT = "submit"
    APPROVE = "approve"
    REJECT = "reject"
    CANCEL = "cancel"


class ReviewPurchaseOrderHandler:

    def __init__(
        self,
        purchase_order_repo: PurchaseOrderRepository,
        publisher: EventPublisher,
    ) -> None:
        self._purchase_order_repo = purchase_order_repo
        self._publisher = publisher

    def handle(
        self,
        purchase_order_id: str,
        decision: ReviewDecision,
        user_id: str | None = None,
        reason: str | None = None,
    ) -> PurchaseOrderDTO:
        purchase_order = self._purchase_order_repo.get_by_id(purchase_order_id)
        if purchase_order is None:
            raise EntityNotFoundError(f"Purchase order {purchase_order_id} not found")

        if decision is ReviewDecision.SUBMIT:
            purchase_order.submit()
        elif decision is ReviewDecision.APPROVE:
            if user_id is None:
                raise ValidationError("An approval needs the approving user")
            purchase_order.approve(user_id)
        elif decision is ReviewDecision.REJECT:
            if reason is None:
                raise ValidationError("A rejection needs a reason")
            purchase_order.reject(reason)
        elif decision is ReviewDecision.CANCEL:
            purchase_order.cancel()

        self._purchase_order_repo.save(purchase_order)
        self._publisher.publish(purchase_order.pop_events())

        logger.info(
            "Purchase order %s is now %s",
            purchase_order.po_number,
            purchase_order.status.value,
        )
        return purchase_order_to_dto(purchase_order)

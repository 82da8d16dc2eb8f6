"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations

from typing import Any


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A single argument or field violates a structural precondition."""


class BusinessRuleError(DomainException):
    """A domain rule beyond simple field validation was violated."""


class InvalidOperationError(BusinessRuleError):
    """The operation is not allowed in the aggregate's current status."""


class InsufficientStockError(BusinessRuleError):
    """Requested quantity exceeds the stock available right now."""


class InvalidStateTransitionError(DomainException):
    """A status change was attempted that the transition table forbids."""

    def __init__(self, from_status: Any, to_status: Any) -> None:
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(
            f"Cannot transition from {_label(from_status)} to {_label(to_status)}"
        )


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ConcurrencyError(DomainException):
    """The aggregate was modified by someone else since it was loaded."""


def _label(status: Any) -> str:
    return getattr(status, "value", str(status))

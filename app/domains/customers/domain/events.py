"""
Customer Domain Events

Returned by Customer's mutating operations.
"""

from dataclasses import dataclass

from app.core.domain import DomainEvent


@dataclass(frozen=True)
class CustomerEvent(DomainEvent):
    """Base for events raised by the Customer aggregate."""

    customer_id: int | str | None = None


@dataclass(frozen=True)
class FitterAssigned(CustomerEvent):
    fitter_id: int | None = None
    previous_fitter_id: int | None = None


@dataclass(frozen=True)
class FitterRemoved(CustomerEvent):
    previous_fitter_id: int | None = None


@dataclass(frozen=True)
class CustomerStatusChanged(CustomerEvent):
    previous_status: str = ""
    new_status: str = ""


@dataclass(frozen=True)
class CustomerDeleted(CustomerEvent):
    previous_status: str = ""


@dataclass(frozen=True)
class CustomerRestored(CustomerEvent):
    pass


@dataclass(frozen=True)
class CustomerContactInfoUpdated(CustomerEvent):
    changed_fields: tuple[str, ...] = ()

"""
Customer Aggregate

The customer of a made-to-order business: contact details, the fitter
responsible for them, and a lifecycle that ends in soft deletion.
"""

from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any

from app.core.domain import (
    AggregateRoot,
    BusinessRuleViolationException,
    DomainEvent,
    Email,
    InvalidOperationException,
    ValidationException,
)
from app.domains.customers.domain.events import (
    CustomerContactInfoUpdated,
    CustomerDeleted,
    CustomerRestored,
    CustomerStatusChanged,
    FitterAssigned,
    FitterRemoved,
)
from app.domains.customers.domain.value_objects import CustomerId, CustomerStatus


class _Unset:
    """Marker for a field that was not supplied in a partial update."""

    _instance: "_Unset | None" = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()

# Optional free-text attributes, in persisted column order.
DESCRIPTIVE_FIELDS: tuple[str, ...] = (
    "horse_name",
    "company",
    "address",
    "city",
    "state",
    "zipcode",
    "country",
    "phone_no",
    "cell_no",
    "bank_account_number",
)


def canonical_fitter_id(fitter_id: int | None) -> int | None:
    """Treat 0 as "no fitter"; reject anything else that is not a positive int."""
    if fitter_id is None or fitter_id == 0:
        return None
    if isinstance(fitter_id, bool) or not isinstance(fitter_id, int) or fitter_id < 0:
        raise ValidationException(f"Invalid fitter id: {fitter_id!r}", field="fitter_id")
    return fitter_id


@dataclass(frozen=True)
class CustomerDetails:
    """Named-field input for building a customer."""

    name: str
    email: "str | Email | None" = None
    horse_name: str | None = None
    company: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zipcode: str | None = None
    country: str | None = None
    phone_no: str | None = None
    cell_no: str | None = None
    bank_account_number: str | None = None
    fitter_id: int | None = None

    def descriptive(self) -> dict[str, str | None]:
        return {name: getattr(self, name) for name in DESCRIPTIVE_FIELDS}


@dataclass(frozen=True)
class ContactInfoUpdate:
    """
    Partial update of a customer's contact data.

    Fields left as ``UNSET`` are not touched; ``None`` clears a field.
    """

    name: Any = UNSET
    email: Any = UNSET
    horse_name: Any = UNSET
    company: Any = UNSET
    address: Any = UNSET
    city: Any = UNSET
    state: Any = UNSET
    zipcode: Any = UNSET
    country: Any = UNSET
    phone_no: Any = UNSET
    cell_no: Any = UNSET
    bank_account_number: Any = UNSET

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "ContactInfoUpdate":
        """Build from a dict holding only the keys the caller sent."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValidationException(f"Unknown contact fields: {', '.join(sorted(unknown))}")
        return cls(**data)

    def provided(self) -> dict[str, Any]:
        """Fields that were explicitly supplied."""
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not UNSET}

    def is_empty(self) -> bool:
        return not self.provided()


@dataclass(eq=False)
class Customer(AggregateRoot[CustomerId]):
    """
    Customer aggregate root.

    State changes go through the methods below; each returns the domain
    events it produced (an empty list when nothing changed).

    Example:
        ```python
        customer = Customer.create(CustomerId.generate(), CustomerDetails(name="Jane Doe"))
        events = customer.assign_fitter(7)
        customer.validate_for_order()
        ```
    """

    name: str = ""
    email: Email | None = None

    horse_name: str | None = None
    company: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zipcode: str | None = None
    country: str | None = None
    phone_no: str | None = None
    cell_no: str | None = None
    bank_account_number: str | None = None

    # Reference to the Fitter aggregate by id only
    fitter_id: int | None = None

    status: CustomerStatus = field(default=CustomerStatus.ACTIVE)

    def __post_init__(self):
        self.fitter_id = canonical_fitter_id(self.fitter_id)

    # Factories

    @classmethod
    def create(cls, customer_id: CustomerId, details: CustomerDetails) -> "Customer":
        """
        Create a new customer.

        Args:
            customer_id: Identity, usually ``CustomerId.generate()``
            details: Name, contact data and optional fitter

        Returns:
            Active, non-deleted customer

        Raises:
            ValidationException: If the name is blank or the email is malformed
        """
        if not details.name or not details.name.strip():
            raise ValidationException("Customer name is required", field="name")
        return cls(
            id=customer_id,
            name=details.name,
            email=_to_email(details.email),
            fitter_id=details.fitter_id,
            **details.descriptive(),
        )

    @classmethod
    def reconstitute(
        cls,
        customer_id: CustomerId,
        details: CustomerDetails,
        *,
        status: CustomerStatus,
        created_at: datetime,
        updated_at: datetime,
        version: int = 0,
    ) -> "Customer":
        """Rebuild a stored customer exactly as persisted, without new-customer checks."""
        return cls(
            id=customer_id,
            name=details.name or "",
            email=_to_email(details.email),
            fitter_id=details.fitter_id,
            status=status,
            created_at=created_at,
            updated_at=updated_at,
            version=version,
            **details.descriptive(),
        )

    # Derived values

    @property
    def deleted(self) -> bool:
        return self.status.is_deleted()

    def is_active(self) -> bool:
        """True unless the customer has been soft-deleted."""
        return not self.deleted

    def is_deleted(self) -> bool:
        return self.deleted

    def has_fitter(self) -> bool:
        return self.fitter_id is not None

    @property
    def display_name(self) -> str:
        if self.email:
            return f"{self.name} ({self.email})"
        return self.name

    @property
    def display_info(self) -> str:
        parts = [part for part in (self.city, self.state, self.country) if part]
        return ", ".join(parts) if parts else "No location"

    # Fitter assignment

    def assign_fitter(self, fitter_id: int) -> list[DomainEvent]:
        """
        Assign the responsible fitter.

        Re-assigning the current fitter is a no-op and leaves updated_at alone.
        """
        self._ensure_not_deleted("assign_fitter")
        new_fitter_id = canonical_fitter_id(fitter_id)
        if new_fitter_id is None:
            raise ValidationException("Fitter id must be a positive integer", field="fitter_id")
        if self.fitter_id == new_fitter_id:
            return []

        previous = self.fitter_id
        self.fitter_id = new_fitter_id
        self.touch()
        return [FitterAssigned(customer_id=self._event_id(), fitter_id=new_fitter_id, previous_fitter_id=previous)]

    def remove_fitter(self) -> list[DomainEvent]:
        """Clear the fitter reference. Always advances updated_at."""
        self._ensure_not_deleted("remove_fitter")
        previous = self.fitter_id
        self.fitter_id = None
        self.touch()
        if previous is None:
            return []
        return [FitterRemoved(customer_id=self._event_id(), previous_fitter_id=previous)]

    # Lifecycle

    def change_status(self, new_status: CustomerStatus | str) -> list[DomainEvent]:
        """
        Move to another lifecycle state.

        Raises:
            InvalidOperationException: If the transition is not allowed.
                A deleted customer has to be restored first.
        """
        if isinstance(new_status, str) and not isinstance(new_status, CustomerStatus):
            new_status = CustomerStatus.from_string(new_status)
        if new_status == self.status:
            return []
        if self.deleted:
            raise InvalidOperationException(
                "change_status",
                self.status.value,
                "Deleted customers must be restored before changing status",
            )
        if not self.status.can_transition_to(new_status):
            raise InvalidOperationException("change_status", self.status.value)

        previous = self.status
        self.status = new_status
        self.touch()
        if new_status == CustomerStatus.DELETED:
            return [CustomerDeleted(customer_id=self._event_id(), previous_status=previous.value)]
        return [
            CustomerStatusChanged(
                customer_id=self._event_id(),
                previous_status=previous.value,
                new_status=new_status.value,
            )
        ]

    def deactivate(self) -> list[DomainEvent]:
        return self.change_status(CustomerStatus.INACTIVE)

    def reactivate(self) -> list[DomainEvent]:
        return self.change_status(CustomerStatus.ACTIVE)

    def mark_deleted(self) -> list[DomainEvent]:
        """Soft-delete the customer."""
        return self.change_status(CustomerStatus.DELETED)

    def restore(self) -> list[DomainEvent]:
        """Bring a soft-deleted customer back as active. No-op otherwise."""
        if not self.deleted:
            return []
        self.status = CustomerStatus.ACTIVE
        self.touch()
        return [CustomerRestored(customer_id=self._event_id())]

    # Contact data

    def update_contact_info(self, changes: ContactInfoUpdate) -> list[DomainEvent]:
        """
        Apply a partial contact update.

        Only supplied fields change. A None or blank email removes the
        address. updated_at advances even when every value is unchanged.
        """
        self._ensure_not_deleted("update_contact_info")
        provided = changes.provided()
        changed: list[str] = []

        if "name" in provided:
            name = provided.pop("name")
            if not name or not str(name).strip():
                raise ValidationException("Customer name cannot be empty", field="name")
            if name != self.name:
                self.name = name
                changed.append("name")

        if "email" in provided:
            email = _to_email(provided.pop("email"))
            if email != self.email:
                self.email = email
                changed.append("email")

        for field_name, value in provided.items():
            if getattr(self, field_name) != value:
                setattr(self, field_name, value)
                changed.append(field_name)

        self.touch()
        return [CustomerContactInfoUpdated(customer_id=self._event_id(), changed_fields=tuple(changed))]

    # Business rules

    def validate_for_order(self) -> None:
        """
        Check the customer can be the subject of a new order.

        Raises:
            BusinessRuleViolationException: If deleted or without a usable name
        """
        if not self.status.can_place_orders():
            raise BusinessRuleViolationException(
                "customer_must_be_active",
                "Cannot create order for inactive customer",
            )
        if not self.name or not self.name.strip():
            raise BusinessRuleViolationException(
                "customer_must_have_name",
                "Customer must have valid name",
            )

    # Persistence support

    def bind_identity(self, customer_id: CustomerId) -> None:
        """Adopt the key assigned by the store on first save."""
        if self.id is not None and self.id.is_persisted() and self.id != customer_id:
            raise InvalidOperationException(
                "bind_identity",
                f"persisted as {self.id}",
                f"Customer {self.id} cannot be re-keyed to {customer_id}",
            )
        self.id = customer_id

    def _ensure_not_deleted(self, operation: str) -> None:
        if self.deleted:
            raise InvalidOperationException(operation, self.status.value)

    def _event_id(self) -> int | str | None:
        return self.id.value if self.id is not None else None


def _to_email(value: "str | Email | None") -> Email | None:
    if isinstance(value, Email):
        return value
    return Email.create(value)

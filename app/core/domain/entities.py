"""
Base Entity Classes for Domain-Driven Design

Entities are domain objects with identity and lifecycle.
They maintain their identity regardless of their attributes.
"""

from abc import ABC
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Generic, TypeVar

# Type variable for entity ID (int, str, value object, etc.)
TId = TypeVar("TId")


def utcnow() -> datetime:
    """Timezone-aware current time used for entity timestamps."""
    return datetime.now(UTC)


@dataclass(eq=False)
class Entity(ABC, Generic[TId]):
    """
    Base class for all domain entities.

    An entity is a domain object that has a distinct identity
    that runs through time and different states.

    Type Parameters:
        TId: Type of entity identifier
    """

    id: TId | None = field(default=None)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def __eq__(self, other: object) -> bool:
        """Entities are equal if they have the same ID."""
        if not isinstance(other, Entity):
            return False
        if self.id is None or other.id is None:
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on ID for use in sets and dicts."""
        return hash(self.id) if self.id is not None else id(self)

    def is_new(self) -> bool:
        """Check if entity is new (not yet persisted)."""
        return self.id is None

    def touch(self) -> None:
        """
        Advance the updated_at timestamp.

        The clock is forced forward by at least one microsecond so two
        mutations in the same tick still produce distinct timestamps.
        """
        now = utcnow()
        if now <= self.updated_at:
            now = self.updated_at + _ONE_MICROSECOND
        self.updated_at = now


@dataclass(eq=False)
class AggregateRoot(Entity[TId], Generic[TId]):
    """
    Base class for aggregate roots.

    An aggregate root is the entry point to an aggregate. It controls access
    to all members of the aggregate and ensures invariants are maintained.

    Aggregates do not buffer domain events. Mutating operations return the
    events they emit and the caller decides where they go:

        ```python
        events = customer.assign_fitter(7)
        await repository.save(customer)
        await publisher.publish_all(events)
        ```
    """

    version: int = field(default=0)

    def increment_version(self) -> None:
        """Increment version for optimistic concurrency."""
        self.version += 1


_ONE_MICROSECOND = datetime.resolution

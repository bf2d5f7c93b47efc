"""
Customer Lifecycle Status

A single state machine replaces the separate "deleted" flag: a soft-deleted
customer is simply in the DELETED state.
"""

from app.core.domain import StatusEnum


class CustomerStatus(StatusEnum):
    """Lifecycle state of a customer."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    DELETED = "deleted"

    def is_deleted(self) -> bool:
        return self == CustomerStatus.DELETED

    def can_place_orders(self) -> bool:
        """Anyone but a soft-deleted customer can be the subject of a new order."""
        return not self.is_deleted()

    def can_transition_to(self, new_status: "CustomerStatus") -> bool:
        """Check if status transition is valid."""
        transitions = {
            CustomerStatus.ACTIVE: [CustomerStatus.INACTIVE, CustomerStatus.DELETED],
            CustomerStatus.INACTIVE: [CustomerStatus.ACTIVE, CustomerStatus.DELETED],
            CustomerStatus.DELETED: [CustomerStatus.ACTIVE],
        }
        return new_status in transitions.get(self, [])

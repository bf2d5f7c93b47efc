"""
Customers Domain Layer

Components:
- Entities: Customer (Aggregate Root), CustomerDetails, ContactInfoUpdate
- Value Objects: CustomerId, CustomerStatus, Email
- Events: returned by Customer's mutating operations
"""

from app.domains.customers.domain.entities import (
    UNSET,
    ContactInfoUpdate,
    Customer,
    CustomerDetails,
)
from app.domains.customers.domain.events import (
    CustomerContactInfoUpdated,
    CustomerDeleted,
    CustomerEvent,
    CustomerRestored,
    CustomerStatusChanged,
    FitterAssigned,
    FitterRemoved,
)
from app.domains.customers.domain.value_objects import CustomerId, CustomerStatus, Email

__all__ = [
    # Entities
    "Customer",
    "CustomerDetails",
    "ContactInfoUpdate",
    "UNSET",
    # Value Objects
    "CustomerId",
    "CustomerStatus",
    "Email",
    # Events
    "CustomerEvent",
    "CustomerContactInfoUpdated",
    "CustomerDeleted",
    "CustomerRestored",
    "CustomerStatusChanged",
    "FitterAssigned",
    "FitterRemoved",
]

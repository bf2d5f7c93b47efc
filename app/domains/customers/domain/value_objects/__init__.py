"""
Customers Domain Value Objects

Immutable value objects for the customers domain.
"""

from app.core.domain import Email
from app.domains.customers.domain.value_objects.customer_id import CustomerId
from app.domains.customers.domain.value_objects.customer_status import CustomerStatus

__all__ = [
    "CustomerId",
    "CustomerStatus",
    "Email",
]

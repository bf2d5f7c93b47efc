"""
Customers Domain Entities
"""

from app.domains.customers.domain.entities.customer import (
    DESCRIPTIVE_FIELDS,
    UNSET,
    ContactInfoUpdate,
    Customer,
    CustomerDetails,
    canonical_fitter_id,
)

__all__ = [
    "Customer",
    "CustomerDetails",
    "ContactInfoUpdate",
    "DESCRIPTIVE_FIELDS",
    "UNSET",
    "canonical_fitter_id",
]

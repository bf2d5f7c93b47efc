"""
Customers Infrastructure Repositories

SQLAlchemy implementations of the customers domain ports.
"""

from app.domains.customers.infrastructure.repositories.customer_repository import SQLAlchemyCustomerRepository

__all__ = [
    "SQLAlchemyCustomerRepository",
]

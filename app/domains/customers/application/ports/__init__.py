"""
Customers Domain Ports

Interfaces (ports) for the customers domain following Clean Architecture.
"""

from app.domains.customers.application.ports.customer_repository import ICustomerRepository

__all__ = [
    "ICustomerRepository",
]

"""
Customers Application Services
"""

from app.domains.customers.application.services.customer_service import CustomerService

__all__ = [
    "CustomerService",
]

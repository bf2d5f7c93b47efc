"""
Customer Repository Port

Interface for customer data access following Clean Architecture.
"""

from typing import Protocol, runtime_checkable

from app.domains.customers.application.dto import CustomerFilters, CustomerPage, CustomerSearchCriteria
from app.domains.customers.domain.entities import Customer
from app.domains.customers.domain.value_objects import CustomerId, CustomerStatus, Email


@runtime_checkable
class ICustomerRepository(Protocol):
    """
    Customer repository interface.

    Defines the contract for customer persistence. Soft-deleted customers are
    excluded from every lookup except ``find_by_id_including_deleted``.
    Listings are ordered by name ascending.

    Example:
        ```python
        class SQLAlchemyCustomerRepository(ICustomerRepository):
            async def find_by_id(self, customer_id: CustomerId) -> Customer | None:
                ...
        ```
    """

    async def find_by_id(self, customer_id: CustomerId) -> Customer | None:
        """
        Find a live (not soft-deleted) customer by ID.

        Args:
            customer_id: Customer identifier

        Returns:
            Customer if found, None otherwise
        """
        ...

    async def find_by_id_including_deleted(self, customer_id: CustomerId) -> Customer | None:
        """
        Find a customer by ID regardless of soft deletion.

        Intended for audit, restore and migration paths.

        Args:
            customer_id: Customer identifier

        Returns:
            Customer if a row exists, None otherwise
        """
        ...

    async def find_by_email(self, email: Email, fitter_id: int | None = None) -> Customer | None:
        """
        Find a customer by email.

        Args:
            email: Email to match (case-insensitive)
            fitter_id: Restrict to this fitter; None searches across all fitters

        Returns:
            First matching customer, None otherwise
        """
        ...

    async def exists_by_email(self, email: Email, fitter_id: int | None = None) -> bool:
        """
        Check whether a customer with this email exists.

        Advisory only: the store's unique index is the real guarantee.

        Args:
            email: Email to match (case-insensitive)
            fitter_id: Restrict to this fitter; None searches across all fitters

        Returns:
            True if at least one live customer matches
        """
        ...

    async def find_by_fitter_id(self, fitter_id: int) -> list[Customer]:
        """
        Get customers assigned to a fitter.

        Args:
            fitter_id: Fitter identifier

        Returns:
            Customers ordered by name
        """
        ...

    async def find_by_country(self, country: str) -> list[Customer]:
        """
        Get customers whose country contains the given text (case-insensitive).

        Args:
            country: Country fragment

        Returns:
            Customers ordered by name
        """
        ...

    async def find_by_city(self, city: str) -> list[Customer]:
        """
        Get customers whose city contains the given text (case-insensitive).

        Args:
            city: City fragment

        Returns:
            Customers ordered by name
        """
        ...

    async def find_by_status(self, status: CustomerStatus) -> list[Customer]:
        """
        Get customers in a lifecycle state.

        Args:
            status: Status to filter by

        Returns:
            Customers ordered by name
        """
        ...

    async def find_active(self) -> list[Customer]:
        """
        Get active customers.

        Returns:
            Customers with ACTIVE status, ordered by name
        """
        ...

    async def find_active_customers_without_fitter(self) -> list[Customer]:
        """
        Get live customers that have no fitter assigned.

        Returns:
            Customers ordered by name
        """
        ...

    async def find_all(self, filters: CustomerFilters | None = None) -> list[Customer]:
        """
        List customers matching every supplied filter.

        Args:
            filters: Optional filters; absent keys impose no constraint

        Returns:
            Customers ordered by name
        """
        ...

    async def find_all_paginated(self, criteria: CustomerSearchCriteria) -> CustomerPage:
        """
        Universal search with field filters and pagination.

        Args:
            criteria: Search term, field filters, page and limit

        Returns:
            Page of customers and the total matching the same filters
        """
        ...

    async def save(self, customer: Customer) -> Customer:
        """
        Insert or update a customer.

        Args:
            customer: Customer to persist

        Returns:
            The persisted customer carrying its store-assigned identity

        Raises:
            DuplicateEntityException: If the email is already used under the same fitter
            ConcurrencyException: If the row changed since the customer was loaded
        """
        ...

    async def delete(self, customer_id: CustomerId) -> bool:
        """
        Soft-delete a customer. The row is kept.

        Args:
            customer_id: Customer identifier

        Returns:
            True if a live customer was deleted
        """
        ...

    async def count_by_fitter_id(self, fitter_id: int) -> int:
        """
        Count live customers assigned to a fitter.

        Args:
            fitter_id: Fitter identifier

        Returns:
            Number of customers
        """
        ...

    async def count_active(self) -> int:
        """
        Count active customers.

        Returns:
            Number of customers with ACTIVE status
        """
        ...

    async def bulk_create(self, customers: list[Customer]) -> list[Customer]:
        """
        Insert many customers at once.

        Args:
            customers: New customers

        Returns:
            Persisted customers in input order with store-assigned identities
        """
        ...

"""
Customer Application Service

Orchestrates customer use cases on top of the repository port.
"""

from datetime import datetime

from app.core.domain import (
    DomainEvent,
    DomainEventPublisher,
    DuplicateEntityException,
    EntityNotFoundException,
)
from app.core.shared.logger import get_service_logger
from app.domains.customers.application.dto import (
    CustomerDTO,
    CustomerFilters,
    CustomerListDTO,
    CustomerSearchCriteria,
    DataIntegrityReport,
)
from app.domains.customers.application.dto.mapper import CustomerDTOMapper
from app.domains.customers.application.ports import ICustomerRepository
from app.domains.customers.domain.entities import (
    UNSET,
    ContactInfoUpdate,
    Customer,
    CustomerDetails,
    canonical_fitter_id,
)
from app.domains.customers.domain.value_objects import CustomerId, CustomerStatus, Email

CustomerIdInput = int | str | CustomerId


class CustomerService:
    """
    Customer use cases.

    Depends only on ICustomerRepository; query logic stays in the repository.
    Domain exceptions propagate to the caller unchanged.
    """

    def __init__(
        self,
        repository: ICustomerRepository,
        dto_mapper: CustomerDTOMapper | None = None,
        event_publisher: DomainEventPublisher | None = None,
    ):
        """
        Initialize service.

        Args:
            repository: Customer repository port
            dto_mapper: Aggregate to DTO translator
            event_publisher: Receives events after successful saves
        """
        self.repository = repository
        self.dto_mapper = dto_mapper or CustomerDTOMapper()
        self.event_publisher = event_publisher or DomainEventPublisher()
        self.logger = get_service_logger("customers")

    # Create

    async def create_customer(self, details: CustomerDetails) -> CustomerDTO:
        """
        Create a customer.

        Raises:
            ValidationException: Blank name or malformed email
            DuplicateEntityException: Email already used under the same fitter
        """
        customer = Customer.create(CustomerId.generate(), details)
        await self._ensure_email_available(customer.email, customer.fitter_id)

        saved = await self.repository.save(customer)
        self.logger.info("Customer created", customer_id=saved.id.value, fitter_id=saved.fitter_id)
        return self.dto_mapper.to_dto(saved)

    async def bulk_create(self, details_list: list[CustomerDetails]) -> list[CustomerDTO]:
        """Create many customers in one batch (imports and migrations)."""
        customers = [Customer.create(CustomerId.generate(), details) for details in details_list]
        saved = await self.repository.bulk_create(customers)
        self.logger.info("Customers bulk created", count=len(saved))
        return self.dto_mapper.to_dto_list(saved)

    # Read

    async def get_customer(self, customer_id: CustomerIdInput) -> CustomerDTO:
        customer = await self._get_or_raise(customer_id)
        return self.dto_mapper.to_dto(customer)

    async def list_customers(self, criteria: CustomerSearchCriteria) -> CustomerListDTO:
        """Paginated universal search."""
        page = await self.repository.find_all_paginated(criteria)
        return self.dto_mapper.to_list_dto(page)

    async def find_all(self, filters: CustomerFilters | None = None) -> list[CustomerDTO]:
        customers = await self.repository.find_all(filters)
        return self.dto_mapper.to_dto_list(customers)

    async def find_by_fitter(self, fitter_id: int) -> list[CustomerDTO]:
        return self.dto_mapper.to_dto_list(await self.repository.find_by_fitter_id(fitter_id))

    async def find_without_fitter(self) -> list[CustomerDTO]:
        return self.dto_mapper.to_dto_list(await self.repository.find_active_customers_without_fitter())

    async def find_by_country(self, country: str) -> list[CustomerDTO]:
        return self.dto_mapper.to_dto_list(await self.repository.find_by_country(country))

    async def find_by_city(self, city: str) -> list[CustomerDTO]:
        return self.dto_mapper.to_dto_list(await self.repository.find_by_city(city))

    async def find_active(self) -> list[CustomerDTO]:
        return self.dto_mapper.to_dto_list(await self.repository.find_active())

    async def get_customer_count_by_fitter(self, fitter_id: int) -> int:
        return await self.repository.count_by_fitter_id(fitter_id)

    async def get_active_count(self) -> int:
        return await self.repository.count_active()

    # Update

    async def update_customer(
        self,
        customer_id: CustomerIdInput,
        changes: ContactInfoUpdate,
        fitter_id: int | None = UNSET,
    ) -> CustomerDTO:
        """
        Apply a partial update.

        Args:
            customer_id: Customer to update
            changes: Contact fields to change; omitted fields are untouched
            fitter_id: UNSET leaves the fitter alone, None removes it,
                a number assigns that fitter

        Raises:
            EntityNotFoundException: Unknown or deleted customer
            DuplicateEntityException: New email/fitter pair already taken
        """
        customer = await self._get_or_raise(customer_id)
        previous_email = customer.email
        previous_fitter = customer.fitter_id
        last_updated = customer.updated_at

        events: list[DomainEvent] = []
        if not changes.is_empty():
            events += customer.update_contact_info(changes)
        if fitter_id is not UNSET:
            if canonical_fitter_id(fitter_id) is None:
                events += customer.remove_fitter()
            else:
                events += customer.assign_fitter(fitter_id)

        if customer.email != previous_email or customer.fitter_id != previous_fitter:
            await self._ensure_email_available(customer.email, customer.fitter_id, exclude=customer.id)

        saved = await self._save_and_publish(customer, events, unchanged_since=last_updated)
        self.logger.info("Customer updated", customer_id=saved.id.value, events=len(events))
        return self.dto_mapper.to_dto(saved)

    async def assign_fitter(self, customer_id: CustomerIdInput, fitter_id: int) -> CustomerDTO:
        customer = await self._get_or_raise(customer_id)
        last_updated = customer.updated_at
        events = customer.assign_fitter(fitter_id)
        if events:
            await self._ensure_email_available(customer.email, customer.fitter_id, exclude=customer.id)
        saved = await self._save_and_publish(customer, events, unchanged_since=last_updated)
        self.logger.info("Fitter assigned", customer_id=saved.id.value, fitter_id=fitter_id)
        return self.dto_mapper.to_dto(saved)

    async def remove_fitter(self, customer_id: CustomerIdInput) -> CustomerDTO:
        customer = await self._get_or_raise(customer_id)
        last_updated = customer.updated_at
        events = customer.remove_fitter()
        saved = await self._save_and_publish(customer, events, unchanged_since=last_updated)
        self.logger.info("Fitter removed", customer_id=saved.id.value)
        return self.dto_mapper.to_dto(saved)

    async def change_status(self, customer_id: CustomerIdInput, status: CustomerStatus | str) -> CustomerDTO:
        customer = await self._get_or_raise(customer_id)
        last_updated = customer.updated_at
        events = customer.change_status(status)
        saved = await self._save_and_publish(customer, events, unchanged_since=last_updated)
        self.logger.info("Customer status changed", customer_id=saved.id.value, status=saved.status.value)
        return self.dto_mapper.to_dto(saved)

    # Delete / restore

    async def remove_customer(self, customer_id: CustomerIdInput) -> None:
        """
        Soft-delete a customer.

        Raises:
            EntityNotFoundException: Unknown or already deleted customer
        """
        customer = await self._get_or_raise(customer_id)
        events = customer.mark_deleted()
        deleted = await self.repository.delete(customer.id)
        if not deleted:
            raise EntityNotFoundException("Customer", customer.id)
        await self.event_publisher.publish_all(events)
        self.logger.info("Customer deleted", customer_id=customer.id.value)

    async def restore_customer(self, customer_id: CustomerIdInput) -> CustomerDTO:
        """Bring back a soft-deleted customer."""
        parsed_id = CustomerId.parse(customer_id)
        customer = await self.repository.find_by_id_including_deleted(parsed_id)
        if customer is None:
            raise EntityNotFoundException("Customer", parsed_id)

        last_updated = customer.updated_at
        events = customer.restore()
        if events and customer.email:
            await self._ensure_email_available(customer.email, customer.fitter_id, exclude=customer.id)
        saved = await self._save_and_publish(customer, events, unchanged_since=last_updated)
        self.logger.info("Customer restored", customer_id=saved.id.value)
        return self.dto_mapper.to_dto(saved)

    # Checks

    async def validate_data_integrity(self, customer_id: CustomerIdInput) -> DataIntegrityReport:
        """Lightweight consistency check; add new rules to the issues list."""
        customer = await self._get_or_raise(customer_id)
        issues: list[str] = []
        if not customer.name or not customer.name.strip():
            issues.append("Missing customer name")
        return DataIntegrityReport(customer_id=customer.id.value, valid=not issues, issues=issues)

    async def validate_for_order(self, customer_id: CustomerIdInput) -> CustomerDTO:
        """
        Load a customer and check it can be used on a new order.

        Raises:
            EntityNotFoundException: Unknown or deleted customer
            BusinessRuleViolationException: Customer cannot take orders
        """
        customer = await self._get_or_raise(customer_id)
        customer.validate_for_order()
        return self.dto_mapper.to_dto(customer)

    # Helpers

    async def _get_or_raise(self, customer_id: CustomerIdInput) -> Customer:
        parsed_id = CustomerId.parse(customer_id)
        customer = await self.repository.find_by_id(parsed_id)
        if customer is None:
            raise EntityNotFoundException("Customer", parsed_id)
        return customer

    async def _ensure_email_available(
        self,
        email: Email | None,
        fitter_id: int | None,
        exclude: CustomerId | None = None,
    ) -> None:
        """
        Advisory per-fitter uniqueness check.

        Customers without a fitter are not checked; the unique index only
        covers rows that have one.
        """
        if email is None or fitter_id is None:
            return
        if exclude is None:
            taken = await self.repository.exists_by_email(email, fitter_id)
        else:
            existing = await self.repository.find_by_email(email, fitter_id)
            taken = existing is not None and existing.id != exclude
        if taken:
            self.logger.warning("Email already used for fitter", email=str(email), fitter_id=fitter_id)
            raise DuplicateEntityException("Customer", "email", email, scope={"fitter_id": fitter_id})

    async def _save_and_publish(
        self,
        customer: Customer,
        events: list[DomainEvent],
        unchanged_since: datetime | None = None,
    ) -> Customer:
        """
        Flush the customer through the repository, then publish its events.

        The save is a flush inside the request transaction; get_async_db
        commits after the handler returns. Subscribers therefore see events
        for flushed changes that a failed commit can still roll back.

        A mutation that emitted nothing and left ``updated_at`` at
        ``unchanged_since`` is not written, so the row version stays put.
        """
        if not events and unchanged_since is not None and customer.updated_at == unchanged_since:
            return customer
        saved = await self.repository.save(customer)
        await self.event_publisher.publish_all(events)
        return saved

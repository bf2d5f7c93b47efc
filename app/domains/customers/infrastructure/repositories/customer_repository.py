"""
Customer Repository Implementation

SQLAlchemy implementation of ICustomerRepository.
"""

from typing import Any

from sqlalchemy import and_, false, func, not_, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain import ConcurrencyException, DuplicateEntityException
from app.core.shared import get_repository_logger
from app.domains.customers.application.dto import CustomerFilters, CustomerPage, CustomerSearchCriteria
from app.domains.customers.application.ports.customer_repository import ICustomerRepository
from app.domains.customers.domain.entities import Customer, canonical_fitter_id
from app.domains.customers.domain.value_objects import CustomerId, CustomerStatus, Email
from app.domains.customers.infrastructure.persistence.sqlalchemy.mappers import CustomerMapper
from app.domains.customers.infrastructure.persistence.sqlalchemy.models import (
    FITTER_EMAIL_UNIQUE_INDEX,
    CustomerModel,
)

logger = get_repository_logger("customers")

# Largest value an INTEGER primary key can hold
MAX_ID_VALUE = 2_147_483_647

# Columns scanned by the free-text part of the universal search
SEARCHABLE_COLUMNS = (
    CustomerModel.name,
    CustomerModel.email,
    CustomerModel.city,
    CustomerModel.country,
)


def is_numeric_term(term: str) -> bool:
    """True for terms made only of ASCII digits."""
    return term.isascii() and term.isdigit()


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so user input matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SQLAlchemyCustomerRepository(ICustomerRepository):
    """
    SQLAlchemy implementation of customer repository.

    Writes are flushed, not committed: the session owner (``get_async_db``)
    decides when the transaction ends.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session
        self.mapper = CustomerMapper()

    # Predicates

    @staticmethod
    def _not_deleted():
        """Live rows only; any deletion marker excludes the row."""
        return and_(
            CustomerModel.deleted_at.is_(None),
            or_(CustomerModel.deleted.is_(None), CustomerModel.deleted == 0),
            CustomerModel.status != CustomerStatus.DELETED.value,
        )

    @staticmethod
    def _without_fitter():
        # Legacy rows use 0 for "no fitter"
        return or_(CustomerModel.fitter_id.is_(None), CustomerModel.fitter_id == 0)

    @staticmethod
    def _assigned_to(fitter_id: int | None):
        """Rows of one fitter; 0 is "no fitter" and so matches nothing."""
        scoped_fitter = canonical_fitter_id(fitter_id)
        if scoped_fitter is None:
            return false()
        return CustomerModel.fitter_id == scoped_fitter

    @staticmethod
    def _contains(column, term: str):
        """Case-insensitive substring match."""
        return column.ilike(f"%{escape_like(term)}%", escape="\\")

    def _search_predicate(self, search: str | None):
        """
        Free-text part of the universal search.

        A digits-only term matches the id exactly OR any searchable column as
        a substring; any other term only matches the columns.
        """
        term = (search or "").strip()
        if not term:
            return None

        text_match = or_(*(self._contains(column, term) for column in SEARCHABLE_COLUMNS))
        if is_numeric_term(term):
            number = int(term)
            if number <= MAX_ID_VALUE:
                return or_(CustomerModel.id == number, text_match)
        return text_match

    # Query helpers

    async def _list(self, *conditions: Any, include_deleted: bool = False) -> list[Customer]:
        stmt = select(CustomerModel)
        if not include_deleted:
            stmt = stmt.where(self._not_deleted())
        stmt = stmt.where(*conditions).order_by(CustomerModel.name.asc(), CustomerModel.id.asc())
        result = await self.session.execute(stmt)
        return self.mapper.to_domain_list(list(result.scalars().all()))

    async def _count(self, *conditions: Any) -> int:
        result = await self.session.execute(
            select(func.count()).select_from(CustomerModel).where(self._not_deleted(), *conditions)
        )
        return result.scalar_one()

    async def _get_model(self, numeric_id: int, *, include_deleted: bool, for_update: bool = False):
        stmt = select(CustomerModel).where(CustomerModel.id == numeric_id)
        if not include_deleted:
            stmt = stmt.where(self._not_deleted())
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    # Lookups

    async def find_by_id(self, customer_id: CustomerId) -> Customer | None:
        """Find live customer by ID."""
        if customer_id.numeric_value is None:
            return None
        model = await self._get_model(customer_id.numeric_value, include_deleted=False)
        return self.mapper.to_domain(model) if model else None

    async def find_by_id_including_deleted(self, customer_id: CustomerId) -> Customer | None:
        """Find customer by ID, soft-deleted or not."""
        if customer_id.numeric_value is None:
            return None
        model = await self._get_model(customer_id.numeric_value, include_deleted=True)
        return self.mapper.to_domain(model) if model else None

    async def find_by_email(self, email: Email, fitter_id: int | None = None) -> Customer | None:
        """Find customer by email, optionally scoped to a fitter."""
        stmt = select(CustomerModel).where(self._not_deleted(), *self._email_conditions(email, fitter_id))
        result = await self.session.execute(stmt.order_by(CustomerModel.id.asc()).limit(1))
        model = result.scalars().first()
        return self.mapper.to_domain(model) if model else None

    async def exists_by_email(self, email: Email, fitter_id: int | None = None) -> bool:
        """Check if a customer with this email exists."""
        return await self._count(*self._email_conditions(email, fitter_id)) > 0

    @staticmethod
    def _email_conditions(email: Email, fitter_id: int | None) -> list[Any]:
        conditions: list[Any] = [func.lower(CustomerModel.email) == email.address]
        scoped_fitter = canonical_fitter_id(fitter_id)
        if scoped_fitter is not None:
            conditions.append(CustomerModel.fitter_id == scoped_fitter)
        return conditions

    async def find_by_fitter_id(self, fitter_id: int) -> list[Customer]:
        """Get customers assigned to a fitter."""
        return await self._list(self._assigned_to(fitter_id))

    async def find_by_country(self, country: str) -> list[Customer]:
        """Get customers by country (substring, case-insensitive)."""
        return await self._list(self._contains(CustomerModel.country, country))

    async def find_by_city(self, city: str) -> list[Customer]:
        """Get customers by city (substring, case-insensitive)."""
        return await self._list(self._contains(CustomerModel.city, city))

    async def find_by_status(self, status: CustomerStatus) -> list[Customer]:
        """Get customers in a lifecycle state."""
        if status == CustomerStatus.DELETED:
            return await self._list(not_(self._not_deleted()), include_deleted=True)
        return await self._list(CustomerModel.status == status.value)

    async def find_active(self) -> list[Customer]:
        """Get active customers."""
        return await self._list(CustomerModel.status == CustomerStatus.ACTIVE.value)

    async def find_active_customers_without_fitter(self) -> list[Customer]:
        """Get live customers with no fitter."""
        return await self._list(self._without_fitter())

    async def find_all(self, filters: CustomerFilters | None = None) -> list[Customer]:
        """List customers matching all given filters."""
        filters = filters or CustomerFilters()
        conditions: list[Any] = []
        if filters.fitter_id is not None:
            conditions.append(self._assigned_to(filters.fitter_id))
        if filters.country:
            conditions.append(self._contains(CustomerModel.country, filters.country))
        if filters.city:
            conditions.append(self._contains(CustomerModel.city, filters.city))
        if filters.is_active is True:
            conditions.append(CustomerModel.status == CustomerStatus.ACTIVE.value)
        elif filters.is_active is False:
            conditions.append(CustomerModel.status != CustomerStatus.ACTIVE.value)
        return await self._list(*conditions)

    async def find_all_paginated(self, criteria: CustomerSearchCriteria) -> CustomerPage:
        """
        Universal search.

        The page and the total are computed from the same statement, so the
        count always reflects exactly the filters applied to the page.
        """
        conditions: list[Any] = [self._not_deleted()]

        if criteria.id is not None:
            conditions.append(CustomerModel.id == criteria.id)
        if criteria.fitter_id is not None:
            conditions.append(self._assigned_to(criteria.fitter_id))

        field_filters = (
            (CustomerModel.name, criteria.name),
            (CustomerModel.email, criteria.email),
            (CustomerModel.country, criteria.country),
            (CustomerModel.city, criteria.city),
        )
        for column, value in field_filters:
            if value and value.strip():
                conditions.append(self._contains(column, value.strip()))

        search_condition = self._search_predicate(criteria.search)
        if search_condition is not None:
            conditions.append(search_condition)

        stmt = select(CustomerModel).where(*conditions)

        count_result = await self.session.execute(select(func.count()).select_from(stmt.subquery()))
        total = count_result.scalar_one()

        result = await self.session.execute(
            stmt.order_by(CustomerModel.name.asc(), CustomerModel.id.asc())
            .offset(criteria.offset)
            .limit(criteria.limit)
        )
        customers = self.mapper.to_domain_list(list(result.scalars().all()))

        return CustomerPage(customers=customers, total=total, page=criteria.page, limit=criteria.limit)

    # Writes

    async def save(self, customer: Customer) -> Customer:
        """
        Insert or update a customer.

        The existing row is locked and its version compared with the
        aggregate's, so a stale copy cannot overwrite (or resurrect) a row
        that changed after it was loaded.
        """
        numeric_id = customer.id.numeric_value if customer.id else None
        model = None
        if numeric_id is not None:
            model = await self._get_model(numeric_id, include_deleted=True, for_update=True)

        if model is not None:
            stored_version = model.version or 0
            if stored_version != customer.version:
                logger.warning(
                    f"Stale save rejected for customer {numeric_id}: "
                    f"version {customer.version}, stored {stored_version}"
                )
                raise ConcurrencyException("Customer", numeric_id, customer.version, stored_version)
            self.mapper.update_model(model, customer)
            model.version = stored_version + 1
        else:
            model = self.mapper.to_model(customer)
            self.session.add(model)

        await self._flush(customer)

        customer.bind_identity(CustomerId.from_number(model.id))
        if customer.version != model.version:
            customer.increment_version()
        return self.mapper.to_domain(model)

    async def delete(self, customer_id: CustomerId) -> bool:
        """Soft delete: the row stays, marked deleted."""
        if customer_id.numeric_value is None:
            return False
        model = await self._get_model(customer_id.numeric_value, include_deleted=False, for_update=True)
        if model is None:
            return False

        customer = self.mapper.to_domain(model)
        customer.mark_deleted()
        self.mapper.update_model(model, customer)
        model.version = customer.version + 1
        await self._flush(customer)
        return True

    async def bulk_create(self, customers: list[Customer]) -> list[Customer]:
        """Insert all customers in one flush."""
        if not customers:
            return []
        models = [self.mapper.to_model(customer) for customer in customers]
        self.session.add_all(models)
        await self._flush(None)

        for customer, model in zip(customers, models):
            customer.bind_identity(CustomerId.from_number(model.id))
        logger.info(f"Bulk created {len(models)} customers")
        return self.mapper.to_domain_list(models)

    # Counts

    async def count_by_fitter_id(self, fitter_id: int) -> int:
        """Count customers assigned to a fitter."""
        return await self._count(self._assigned_to(fitter_id))

    async def count_active(self) -> int:
        """Count active customers."""
        return await self._count(CustomerModel.status == CustomerStatus.ACTIVE.value)

    # Error mapping

    async def _flush(self, customer: Customer | None) -> None:
        try:
            await self.session.flush()
        except IntegrityError as e:
            conflict = self._to_duplicate_error(e, customer)
            if conflict is None:
                raise
            logger.warning(f"Customer email conflict: {conflict.message}")
            raise conflict from e

    @staticmethod
    def _to_duplicate_error(error: IntegrityError, customer: Customer | None) -> DuplicateEntityException | None:
        """Map a violation of the per-fitter email index; other violations are not ours to rename."""
        message = str(error.orig).lower()
        is_email_conflict = FITTER_EMAIL_UNIQUE_INDEX in message or (
            "unique" in message and "customers.email" in message
        )
        if not is_email_conflict:
            return None
        if customer is None:
            return DuplicateEntityException("Customer", "email", "batch")
        return DuplicateEntityException(
            "Customer",
            "email",
            customer.email,
            scope={"fitter_id": customer.fitter_id},
        )

"""
Tests for SQLAlchemyCustomerRepository against an in-memory SQLite database.

Covers the universal search, soft deletion, optimistic concurrency and the
per-fitter email uniqueness index.
"""

from datetime import UTC, datetime

import pytest
from sqlalchemy import insert

from app.core.domain import BusinessRuleViolationException, ConcurrencyException, DuplicateEntityException
from app.domains.customers.application.dto import CustomerFilters, CustomerSearchCriteria
from app.domains.customers.application.services import CustomerService
from app.domains.customers.domain.entities import Customer, CustomerDetails
from app.domains.customers.domain.value_objects import CustomerId, CustomerStatus, Email
from app.domains.customers.infrastructure.persistence.sqlalchemy.models import CustomerModel
from app.domains.customers.infrastructure.repositories import SQLAlchemyCustomerRepository
from app.domains.customers.infrastructure.repositories.customer_repository import escape_like, is_numeric_term


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def repository(db_session):
    return SQLAlchemyCustomerRepository(db_session)


def new_customer(name: str, **kwargs) -> Customer:
    return Customer.create(CustomerId.generate(), CustomerDetails(name=name, **kwargs))


async def seed(repository, *customers: Customer) -> list[Customer]:
    return await repository.bulk_create(list(customers))


async def insert_legacy_row(session, **values) -> int:
    """Insert a row the way older writers left it (bypassing the mapper)."""
    now = datetime.now(UTC)
    row = {"name": "Legacy", "status": "active", "created_at": now, "updated_at": now, "version": 0}
    row.update(values)
    result = await session.execute(insert(CustomerModel).values(**row).returning(CustomerModel.id))
    return result.scalar_one()


# ============================================================================
# Helpers
# ============================================================================


@pytest.mark.unit
def test_is_numeric_term():
    assert is_numeric_term("123") is True
    assert is_numeric_term("12a") is False
    assert is_numeric_term("١٢") is False


@pytest.mark.unit
def test_escape_like():
    assert escape_like("50%_off\\") == "50\\%\\_off\\\\"


# ============================================================================
# Save / lookups
# ============================================================================


@pytest.mark.repository
@pytest.mark.asyncio
async def test_save_new_customer_assigns_numeric_id(repository):
    # Arrange
    customer = new_customer("Jane", email="Jane@Example.com", fitter_id=3)

    # Act
    saved = await repository.save(customer)

    # Assert
    assert saved.id.is_persisted()
    assert customer.id == saved.id
    found = await repository.find_by_id(saved.id)
    assert found is not None
    assert found.name == "Jane"
    assert found.email == Email("jane@example.com")
    assert found.fitter_id == 3
    assert found.status == CustomerStatus.ACTIVE


@pytest.mark.repository
@pytest.mark.asyncio
async def test_find_by_id_with_unsaved_identity_returns_none(repository):
    assert await repository.find_by_id(CustomerId.generate()) is None


@pytest.mark.repository
@pytest.mark.asyncio
async def test_save_existing_customer_bumps_version(repository):
    saved = await repository.save(new_customer("Jane"))
    assert saved.version == 0

    saved.assign_fitter(9)
    updated = await repository.save(saved)

    assert updated.version == 1
    assert saved.version == 1
    assert (await repository.find_by_id(saved.id)).fitter_id == 9


@pytest.mark.repository
@pytest.mark.asyncio
async def test_stale_save_raises_concurrency_error(repository):
    # Arrange
    saved = await repository.save(new_customer("Jane"))
    first_copy = await repository.find_by_id(saved.id)
    second_copy = await repository.find_by_id(saved.id)

    first_copy.assign_fitter(1)
    await repository.save(first_copy)

    # Act & Assert
    second_copy.assign_fitter(2)
    with pytest.raises(ConcurrencyException) as exc_info:
        await repository.save(second_copy)

    assert exc_info.value.expected_version == 0
    assert exc_info.value.actual_version == 1


@pytest.mark.repository
@pytest.mark.asyncio
async def test_find_by_email_scoped_to_fitter(repository):
    await seed(
        repository,
        new_customer("A", email="shared@example.com", fitter_id=1),
        new_customer("B", email="shared@example.com", fitter_id=2),
    )

    found = await repository.find_by_email(Email("SHARED@example.com"), 2)

    assert found is not None
    assert found.name == "B"
    assert await repository.exists_by_email(Email("shared@example.com"), 3) is False
    assert await repository.exists_by_email(Email("shared@example.com")) is True


# ============================================================================
# Uniqueness
# ============================================================================


@pytest.mark.repository
@pytest.mark.asyncio
async def test_duplicate_email_for_same_fitter_is_rejected(repository):
    await repository.save(new_customer("A", email="dup@example.com", fitter_id=4))

    with pytest.raises(DuplicateEntityException) as exc_info:
        await repository.save(new_customer("B", email="dup@example.com", fitter_id=4))

    assert exc_info.value.scope == {"fitter_id": 4}


@pytest.mark.repository
@pytest.mark.asyncio
async def test_same_email_without_fitter_is_allowed(repository):
    await repository.save(new_customer("A", email="dup@example.com"))
    await repository.save(new_customer("B", email="dup@example.com"))

    assert len(await repository.find_all()) == 2


@pytest.mark.repository
@pytest.mark.asyncio
async def test_email_of_deleted_customer_can_be_reused(repository):
    first = await repository.save(new_customer("A", email="dup@example.com", fitter_id=4))
    await repository.delete(first.id)

    second = await repository.save(new_customer("B", email="dup@example.com", fitter_id=4))

    assert second.id != first.id


# ============================================================================
# Soft delete
# ============================================================================


@pytest.mark.repository
@pytest.mark.asyncio
async def test_delete_is_soft(repository):
    # Arrange
    saved = await repository.save(new_customer("Jane"))

    # Act
    result = await repository.delete(saved.id)

    # Assert
    assert result is True
    assert await repository.find_by_id(saved.id) is None
    stored = await repository.find_by_id_including_deleted(saved.id)
    assert stored is not None
    assert stored.deleted is True
    assert stored.status == CustomerStatus.DELETED
    assert stored.version == 1


@pytest.mark.repository
@pytest.mark.asyncio
async def test_customer_without_email_through_deletion(repository):
    # Arrange
    saved = await repository.save(new_customer("Jane Doe", city="Lexington", country="USA"))
    assert saved.is_active()
    assert not saved.has_fitter()
    saved.validate_for_order()

    # Act
    await repository.delete(saved.id)

    # Assert
    assert await repository.find_by_id(saved.id) is None
    assert saved.id not in [c.id for c in await repository.find_active()]
    stored = await repository.find_by_id_including_deleted(saved.id)
    assert stored.is_deleted()
    with pytest.raises(BusinessRuleViolationException):
        stored.validate_for_order()


@pytest.mark.repository
@pytest.mark.asyncio
async def test_delete_missing_or_already_deleted_returns_false(repository):
    saved = await repository.save(new_customer("Jane"))
    await repository.delete(saved.id)

    assert await repository.delete(saved.id) is False
    assert await repository.delete(CustomerId.from_number(999)) is False


@pytest.mark.repository
@pytest.mark.asyncio
async def test_restore_round_trip(repository):
    saved = await repository.save(new_customer("Jane"))
    await repository.delete(saved.id)

    deleted = await repository.find_by_id_including_deleted(saved.id)
    deleted.restore()
    await repository.save(deleted)

    restored = await repository.find_by_id(saved.id)
    assert restored is not None
    assert restored.deleted is False
    assert restored.status == CustomerStatus.ACTIVE


@pytest.mark.repository
@pytest.mark.asyncio
async def test_legacy_rows_are_read_consistently(repository, db_session):
    """Test NULL deleted flags count as live and fitter 0 as no fitter."""
    live_id = await insert_legacy_row(db_session, name="Live", deleted=None, fitter_id=0)
    await insert_legacy_row(db_session, name="Flagged", deleted=1)

    live = await repository.find_by_id(CustomerId.from_number(live_id))
    without_fitter = await repository.find_active_customers_without_fitter()

    assert live is not None
    assert live.fitter_id is None
    assert [c.name for c in without_fitter] == ["Live"]
    assert [c.name for c in await repository.find_by_status(CustomerStatus.DELETED)] == ["Flagged"]


@pytest.mark.repository
@pytest.mark.asyncio
async def test_fitter_zero_is_not_a_fitter_in_queries(repository, db_session):
    # Arrange
    await insert_legacy_row(db_session, name="Legacy", fitter_id=0)
    await seed(repository, new_customer("Assigned", fitter_id=3))

    # Act & Assert
    assert await repository.find_by_fitter_id(0) == []
    assert await repository.count_by_fitter_id(0) == 0
    assert await repository.find_all(CustomerFilters(fitter_id=0)) == []
    page = await repository.find_all_paginated(CustomerSearchCriteria(fitter_id=0))
    assert page.total == 0


# ============================================================================
# Listings and counts
# ============================================================================


@pytest.mark.repository
@pytest.mark.asyncio
async def test_listings_exclude_deleted_and_order_by_name(repository):
    # Arrange
    customers = await seed(
        repository,
        new_customer("Zed", fitter_id=1, country="Canada", city="Calgary"),
        new_customer("Amy", fitter_id=1, country="USA", city="Ocala"),
        new_customer("Bob", country="usa", city="Lexington"),
        new_customer("Gone", fitter_id=1, country="USA"),
    )
    await repository.delete(customers[3].id)

    # Act & Assert
    assert [c.name for c in await repository.find_by_fitter_id(1)] == ["Amy", "Zed"]
    assert [c.name for c in await repository.find_by_country("US")] == ["Amy", "Bob"]
    assert [c.name for c in await repository.find_by_city("cal")] == ["Amy", "Zed"]
    assert [c.name for c in await repository.find_active_customers_without_fitter()] == ["Bob"]
    assert await repository.count_by_fitter_id(1) == 2
    assert await repository.count_active() == 3


@pytest.mark.repository
@pytest.mark.asyncio
async def test_find_all_with_filters(repository):
    customers = await seed(
        repository,
        new_customer("Amy", fitter_id=1, city="Ocala"),
        new_customer("Bob", fitter_id=1, city="Lexington"),
        new_customer("Cat", fitter_id=2, city="Ocala"),
    )
    customers[1].deactivate()
    await repository.save(customers[1])

    assert [c.name for c in await repository.find_all(CustomerFilters(fitter_id=1))] == ["Amy", "Bob"]
    assert [c.name for c in await repository.find_all(CustomerFilters(city="ocala"))] == ["Amy", "Cat"]
    assert [c.name for c in await repository.find_all(CustomerFilters(is_active=True))] == ["Amy", "Cat"]
    assert [c.name for c in await repository.find_all(CustomerFilters(is_active=False))] == ["Bob"]
    assert [c.name for c in await repository.find_active()] == ["Amy", "Cat"]
    assert [c.name for c in await repository.find_by_status(CustomerStatus.INACTIVE)] == ["Bob"]


# ============================================================================
# Universal search
# ============================================================================


@pytest.mark.repository
@pytest.mark.asyncio
async def test_paginated_search_counts_all_matches(repository):
    # Arrange
    await seed(repository, *(new_customer(f"Customer {i:02d}") for i in range(1, 8)))

    # Act
    page = await repository.find_all_paginated(CustomerSearchCriteria(page=2, limit=3, search="customer"))

    # Assert
    assert page.total == 7
    assert page.pages == 3
    assert [c.name for c in page.customers] == ["Customer 04", "Customer 05", "Customer 06"]


@pytest.mark.repository
@pytest.mark.asyncio
async def test_numeric_search_matches_id_or_text(repository):
    # Arrange
    customers = await seed(
        repository,
        new_customer("First"),
        new_customer("Second"),
        new_customer("Barn 2"),
    )
    second_id = customers[1].id.numeric_value

    # Act
    page = await repository.find_all_paginated(CustomerSearchCriteria(search=str(second_id)))

    # Assert: the fresh database hands out ids 1, 2, 3
    assert second_id == 2
    assert [c.name for c in page.customers] == ["Barn 2", "Second"]
    assert page.total == 2


@pytest.mark.repository
@pytest.mark.asyncio
async def test_numeric_search_beyond_integer_range_only_matches_text(repository):
    await seed(repository, new_customer("Phone 99999999999"), new_customer("Other"))

    page = await repository.find_all_paginated(CustomerSearchCriteria(search="99999999999"))

    assert [c.name for c in page.customers] == ["Phone 99999999999"]


@pytest.mark.repository
@pytest.mark.asyncio
async def test_mixed_search_term_never_matches_id(repository):
    await seed(repository, new_customer("First"), new_customer("Stall 2a"))

    page = await repository.find_all_paginated(CustomerSearchCriteria(search="2a"))

    assert [c.name for c in page.customers] == ["Stall 2a"]
    assert page.total == 1


@pytest.mark.repository
@pytest.mark.asyncio
async def test_search_treats_wildcards_literally(repository):
    await seed(repository, new_customer("100% Cotton"), new_customer("Plain"), new_customer("snake_case"))

    percent = await repository.find_all_paginated(CustomerSearchCriteria(search="%"))
    underscore = await repository.find_all_paginated(CustomerSearchCriteria(search="_"))

    assert [c.name for c in percent.customers] == ["100% Cotton"]
    assert [c.name for c in underscore.customers] == ["snake_case"]


@pytest.mark.repository
@pytest.mark.asyncio
async def test_search_combines_field_filters_and_excludes_deleted(repository):
    # Arrange
    customers = await seed(
        repository,
        new_customer("Amy", email="amy@farm.com", fitter_id=1, country="USA", city="Ocala"),
        new_customer("Amos", email="amos@farm.com", fitter_id=2, country="USA", city="Ocala"),
        new_customer("Amelia", email="amelia@farm.com", fitter_id=1, country="UK", city="York"),
        new_customer("Amber", fitter_id=1, country="USA"),
    )
    await repository.delete(customers[3].id)

    # Act
    page = await repository.find_all_paginated(
        CustomerSearchCriteria(search="am", fitter_id=1, country="us", email="farm")
    )

    # Assert
    assert [c.name for c in page.customers] == ["Amy"]
    assert page.total == 1


@pytest.mark.repository
@pytest.mark.asyncio
async def test_search_by_exact_id(repository):
    customers = await seed(repository, new_customer("A"), new_customer("B"))

    page = await repository.find_all_paginated(CustomerSearchCriteria(id=customers[1].id.numeric_value))

    assert [c.name for c in page.customers] == ["B"]


@pytest.mark.repository
@pytest.mark.asyncio
async def test_bulk_create_empty_is_noop(repository):
    assert await repository.bulk_create([]) == []


@pytest.mark.repository
@pytest.mark.asyncio
async def test_repeated_assignment_of_same_fitter_keeps_version(repository):
    # Arrange
    saved = await repository.save(new_customer("Jane", fitter_id=4))
    service = CustomerService(repository=repository)

    # Act
    await service.assign_fitter(saved.id.value, 4)
    await service.assign_fitter(saved.id.value, 4)

    # Assert
    stored = await repository.find_by_id(saved.id)
    assert stored.version == 0
    assert stored.updated_at == saved.updated_at

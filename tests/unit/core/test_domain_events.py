"""
Unit tests for DomainEvent and DomainEventPublisher.
"""

import pytest

from app.core.domain import DomainEventPublisher
from app.domains.customers.domain.events import CustomerContactInfoUpdated, FitterAssigned, FitterRemoved


@pytest.mark.unit
def test_event_to_dict():
    event = CustomerContactInfoUpdated(customer_id=3, changed_fields=("city", "state"))

    data = event.to_dict()

    assert data["event_type"] == "CustomerContactInfoUpdated"
    assert data["customer_id"] == 3
    assert data["changed_fields"] == ["city", "state"]
    assert isinstance(data["event_id"], str)
    assert isinstance(data["occurred_at"], str)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_publisher_routes_by_event_type():
    # Arrange
    publisher = DomainEventPublisher()
    assigned, removed = [], []

    async def on_assigned(event):
        assigned.append(event)

    async def on_removed(event):
        removed.append(event)

    publisher.subscribe(FitterAssigned, on_assigned)
    publisher.subscribe(FitterRemoved, on_removed)

    # Act
    await publisher.publish_all([FitterAssigned(customer_id=1, fitter_id=2), FitterRemoved(customer_id=1)])

    # Assert
    assert len(assigned) == 1
    assert len(removed) == 1


@pytest.mark.unit
@pytest.mark.asyncio
async def test_failing_handler_does_not_stop_others(caplog):
    publisher = DomainEventPublisher()
    received = []

    async def broken(event):
        raise RuntimeError("handler failed")

    async def working(event):
        received.append(event)

    publisher.subscribe(FitterAssigned, broken)
    publisher.subscribe(FitterAssigned, working)

    await publisher.publish(FitterAssigned(customer_id=1, fitter_id=2))

    assert len(received) == 1
    assert "Error in event handler for FitterAssigned" in caplog.text


@pytest.mark.unit
@pytest.mark.asyncio
async def test_clear_handlers():
    publisher = DomainEventPublisher()
    received = []

    async def handler(event):
        received.append(event)

    publisher.subscribe(FitterAssigned, handler)
    publisher.clear_handlers()
    await publisher.publish(FitterAssigned(customer_id=1, fitter_id=2))

    assert received == []

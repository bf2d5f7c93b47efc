"""
Dependency Injection Container.

Centralized container for creating and managing application dependencies.
Wires concrete implementations to the ports the application layer uses.

This module is the facade that composes the domain-specific containers.
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain import DomainEventPublisher
from app.domains.customers.application.services import CustomerService
from app.domains.customers.infrastructure.repositories import SQLAlchemyCustomerRepository

from .base import BaseContainer
from .customers import CustomersContainer

logger = logging.getLogger(__name__)


class DependencyContainer:
    """
    Dependency Injection Container (Facade).

    Single Responsibility: Compose and delegate to domain-specific containers.
    """

    def __init__(self, config: dict | None = None):
        """
        Initialize container with all domain sub-containers.

        Args:
            config: Optional configuration dict (overrides settings)
        """
        self._base = BaseContainer(config)
        self._customers = CustomersContainer(self._base)

        logger.info("DependencyContainer initialized with all domain containers")

    @property
    def settings(self):
        return self._base.settings

    def get_event_publisher(self) -> DomainEventPublisher:
        return self._base.get_event_publisher()

    # ============================================================
    # CUSTOMERS (delegated to CustomersContainer)
    # ============================================================

    def create_customer_repository(self, db: AsyncSession) -> SQLAlchemyCustomerRepository:
        return self._customers.create_customer_repository(db)

    def create_customer_service(self, db: AsyncSession) -> CustomerService:
        return self._customers.create_customer_service(db)


# ============================================================
# GLOBAL CONTAINER INSTANCE
# ============================================================

_container: DependencyContainer | None = None


def get_container(config: dict | None = None) -> DependencyContainer:
    """
    Get global container instance (singleton).

    Args:
        config: Optional configuration (only used on first call)

    Returns:
        DependencyContainer instance
    """
    global _container

    if _container is None:
        logger.info("Initializing global DependencyContainer")
        _container = DependencyContainer(config)
    elif config is not None:
        logger.warning(
            "Container already initialized, ignoring new config. "
            "Call reset_container() first to change config."
        )

    return _container


def reset_container() -> None:
    """
    Reset global container instance.

    Useful for testing or reconfiguration.
    """
    global _container
    logger.info("Resetting global DependencyContainer")
    _container = None


__all__ = [
    "BaseContainer",
    "CustomersContainer",
    "DependencyContainer",
    "get_container",
    "reset_container",
]

"""
Customers Domain Container.

Single Responsibility: Wire all customers domain dependencies.
"""

import logging
from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession

from app.domains.customers.application.dto.mapper import CustomerDTOMapper
from app.domains.customers.application.services import CustomerService
from app.domains.customers.infrastructure.repositories import SQLAlchemyCustomerRepository

if TYPE_CHECKING:
    from app.core.container.base import BaseContainer

logger = logging.getLogger(__name__)


class CustomersContainer:
    """
    Customers domain container.

    Single Responsibility: Create customer repositories and services.
    """

    def __init__(self, base: "BaseContainer"):
        """
        Initialize customers container.

        Args:
            base: BaseContainer with shared singletons
        """
        self._base = base
        self._dto_mapper = CustomerDTOMapper()

    # ==================== REPOSITORIES ====================

    def create_customer_repository(self, db: AsyncSession) -> SQLAlchemyCustomerRepository:
        """Create Customer Repository."""
        return SQLAlchemyCustomerRepository(session=db)

    # ==================== SERVICES ====================

    def create_customer_service(self, db: AsyncSession) -> CustomerService:
        """Create CustomerService bound to the request session."""
        return CustomerService(
            repository=self.create_customer_repository(db),
            dto_mapper=self._dto_mapper,
            event_publisher=self._base.get_event_publisher(),
        )

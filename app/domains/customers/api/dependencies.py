"""
Customers API Dependencies

FastAPI dependencies for the customers domain.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.container import get_container
from app.database.async_db import get_async_db
from app.domains.customers.application.services import CustomerService

# Type alias for database session dependency
DbSession = Annotated[AsyncSession, Depends(get_async_db)]


def get_customer_service(db: DbSession) -> CustomerService:
    """Get CustomerService instance with database session."""
    container = get_container()
    return container.create_customer_service(db)


__all__ = [
    "DbSession",
    "get_customer_service",
]

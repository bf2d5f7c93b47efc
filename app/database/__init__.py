"""
Database access: async engine, sessions and FastAPI dependencies.
"""

from app.database.async_db import (
    create_tables,
    dispose_async_engine,
    get_async_db,
    get_async_db_context,
    get_async_engine,
)

__all__ = [
    "create_tables",
    "dispose_async_engine",
    "get_async_db",
    "get_async_db_context",
    "get_async_engine",
]

"""
Base models and mixins for the database
"""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, Integer, SmallInteger
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TimestampMixin:
    """Mixin para agregar timestamps automáticos."""

    # Using timezone-aware UTC datetimes for consistency with the domain entities
    created_at = Column(
        DateTime(timezone=True),
        default=_utcnow,
        nullable=False,
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=_utcnow,
        onupdate=_utcnow,
        nullable=False,
    )


class SoftDeleteMixin:
    """
    Soft delete columns.

    ``deleted`` is kept as a small integer flag (0, 1, or NULL on legacy
    rows); ``deleted_at`` records when the row was retired.
    """

    deleted = Column(SmallInteger, nullable=True, default=0)
    deleted_at = Column(DateTime(timezone=True), nullable=True)


class VersionMixin:
    """Optimistic concurrency counter."""

    version = Column(Integer, nullable=False, default=0)

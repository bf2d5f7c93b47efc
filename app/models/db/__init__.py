"""
Database models package - shared declarative base and mixins
"""

from .base import Base, SoftDeleteMixin, TimestampMixin, VersionMixin

__all__ = [
    "Base",
    "SoftDeleteMixin",
    "TimestampMixin",
    "VersionMixin",
]

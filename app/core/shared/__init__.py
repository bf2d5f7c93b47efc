"""
Shared utilities module

Domain-agnostic helpers used across the application.
"""

from .logger import (
    ColoredFormatter,
    ContextLogger,
    JSONFormatter,
    configure_logging,
    get_repository_logger,
    get_logger,
    get_service_logger,
)

__all__ = [
    "ColoredFormatter",
    "ContextLogger",
    "JSONFormatter",
    "configure_logging",
    "get_repository_logger",
    "get_logger",
    "get_service_logger",
]

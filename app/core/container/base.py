"""
Base Container - Shared Singletons.

Single Responsibility: Hold process-wide resources shared by domain containers.
"""

import logging

from app.config.settings import get_settings
from app.core.domain import DomainEventPublisher

logger = logging.getLogger(__name__)


class BaseContainer:
    """
    Base container for shared singletons.

    Single Responsibility: Create and cache shared resources.
    """

    def __init__(self, config: dict | None = None):
        """
        Initialize base container.

        Args:
            config: Optional configuration dict (overrides settings)
        """
        self.settings = get_settings()
        self.config = config or {}
        self._event_publisher: DomainEventPublisher | None = None

        logger.info("BaseContainer initialized")

    def get_event_publisher(self) -> DomainEventPublisher:
        """
        Get the domain event publisher (singleton).

        Handlers subscribed here receive events from every request.
        """
        if self._event_publisher is None:
            self._event_publisher = self.config.get("event_publisher") or DomainEventPublisher()
        return self._event_publisher

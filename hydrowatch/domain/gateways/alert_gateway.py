"""
Domain Gateway - Alerts

This module defines the gateway interface for publishing anomaly alerts.
"""

from abc import ABC, abstractmethod


class IAlertGateway(ABC):
    """Interface for alert notification delivery."""

    @abstractmethod
    async def publish(self, subject: str, message: str) -> None:
        """
        Publish a plain-text alert.

        Raises:
            AlertPublishError: When the notification cannot be delivered
        """
        pass

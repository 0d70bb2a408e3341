"""Infrastructure Gateway - Webhook alert publisher."""

from typing import Optional

import httpx
import structlog

from hydrowatch.domain.entities.errors import AlertPublishError
from hydrowatch.domain.gateways.alert_gateway import IAlertGateway

logger = structlog.get_logger(__name__)


class WebhookAlertGateway(IAlertGateway):
    """Posts alerts as JSON to a webhook; logs them when none is configured."""

    def __init__(self, webhook_url: Optional[str] = None, timeout: float = 10.0):
        self.webhook_url = webhook_url or None
        self.timeout = timeout

    async def publish(self, subject: str, message: str) -> None:
        if not self.webhook_url:
            logger.info("alerts.logged", subject=subject, body=message)
            return

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.webhook_url, json={"subject": subject, "message": message}
                )
                response.raise_for_status()

        except httpx.HTTPStatusError as e:
            raise AlertPublishError(
                f"Alert webhook returned status {e.response.status_code}"
            ) from e

        except httpx.RequestError as e:
            raise AlertPublishError(f"Alert webhook request failed: {e}") from e

        logger.info("alerts.published", subject=subject)

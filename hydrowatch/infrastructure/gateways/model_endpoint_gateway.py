"""
Infrastructure Gateway - Model inference endpoint

Invokes a hosted model with CSV rows, following the SageMaker-style
runtime contract: ``POST /endpoints/{name}/invocations`` with the target
model of a multi-model endpoint selected by header.
"""

from typing import Dict, Optional

import httpx
import structlog

from hydrowatch.domain.entities.errors import EndpointError
from hydrowatch.domain.gateways.inference_gateway import IInferenceGateway

logger = structlog.get_logger(__name__)

TARGET_MODEL_HEADER = "X-Amzn-SageMaker-Target-Model"


class ModelEndpointGateway(IInferenceGateway):
    """HTTP implementation of the inference gateway."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 60.0,
        headers: Optional[Dict[str, str]] = None,
    ):
        """
        Initialize the inference gateway.

        Args:
            base_url: Inference runtime base URL
            timeout: Request timeout in seconds
            headers: Extra headers sent with every invocation
        """
        self.base_url = (base_url or "").rstrip("/")
        self.timeout = timeout
        self.headers = dict(headers or {})

    async def invoke(
        self, endpoint_name: str, payload: bytes, target_model: str
    ) -> bytes:
        if not self.base_url:
            raise EndpointError("Inference base URL is not configured")

        url = f"{self.base_url}/endpoints/{endpoint_name}/invocations"
        headers = {
            **self.headers,
            "Content-Type": "text/csv",
            "Accept": "text/csv, application/json",
        }
        if target_model:
            headers[TARGET_MODEL_HEADER] = target_model

        logger.info(
            "inference.invoke",
            endpoint=endpoint_name,
            target_model=target_model,
            payload_bytes=len(payload),
        )

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(url, content=payload, headers=headers)
                response.raise_for_status()
                return response.content

        except httpx.HTTPStatusError as e:
            logger.error(
                "inference.http_error",
                status_code=e.response.status_code,
                response_text=e.response.text[:500],
                endpoint=endpoint_name,
            )
            raise EndpointError(
                f"Inference endpoint returned status {e.response.status_code}",
                status_code=e.response.status_code,
                details={"endpoint": endpoint_name},
            ) from e

        except httpx.RequestError as e:
            logger.error("inference.request_error", error=str(e), endpoint=endpoint_name)
            raise EndpointError(
                f"Inference endpoint unreachable: {e}",
                details={"endpoint": endpoint_name},
            ) from e

"""Application Use Case - Inference endpoint client."""

from __future__ import annotations

import structlog

from hydrowatch.domain.entities.errors import EndpointConfigurationError
from hydrowatch.domain.gateways.inference_gateway import IInferenceGateway
from hydrowatch.domain.services.prediction_parser import (
    parse_predictions,
    strip_label_column,
)

logger = structlog.get_logger(__name__)


class InferenceClient:
    """Sends feature-only rows to the endpoint and parses its prediction."""

    def __init__(
        self,
        gateway: IInferenceGateway,
        endpoint_name: str,
        target_model: str,
    ):
        self.gateway = gateway
        self.endpoint_name = (endpoint_name or "").strip()
        self.target_model = (target_model or "").strip()

    def ensure_configured(self) -> None:
        """
        Raises:
            EndpointConfigurationError: When the endpoint name or target
                model is missing
        """
        missing = [
            name
            for name, value in (
                ("endpoint_name", self.endpoint_name),
                ("target_model", self.target_model),
            )
            if not value
        ]
        if missing:
            raise EndpointConfigurationError(
                "Inference endpoint is not configured",
                details={"missing": missing},
            )

    async def invoke(self, features: bytes) -> bytes:
        """Invoke the endpoint with label-free rows and return raw output."""
        self.ensure_configured()
        return await self.gateway.invoke(
            self.endpoint_name, features, self.target_model
        )

    async def predict(self, encoded_rows: bytes) -> float:
        """
        Strip the label column, invoke the endpoint and parse the result.

        Raises:
            EndpointConfigurationError: When the endpoint is not configured
            EndpointError: When the endpoint call fails
            NoPredictionParsed: When the output holds no numeric token
        """
        payload = strip_label_column(encoded_rows)
        output = await self.invoke(payload)
        prediction = parse_predictions(output)
        logger.info(
            "inference.predicted",
            endpoint=self.endpoint_name,
            target_model=self.target_model,
            rows=payload.count(b"\n"),
            prediction=prediction,
        )
        return prediction

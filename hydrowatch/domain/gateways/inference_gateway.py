"""
Domain Gateway - Inference Endpoint

This module defines the gateway interface for invoking a hosted
prediction endpoint.
"""

from abc import ABC, abstractmethod


class IInferenceGateway(ABC):
    """Interface for the model-serving endpoint."""

    @abstractmethod
    async def invoke(
        self, endpoint_name: str, payload: bytes, target_model: str
    ) -> bytes:
        """
        Send feature-only CSV rows to the endpoint and return its raw output.

        Args:
            endpoint_name: Name of the deployed endpoint
            payload: Feature-only CSV bytes (label column removed)
            target_model: Model variant to serve the request with

        Returns:
            Raw response body

        Raises:
            EndpointError: When the endpoint is unreachable or returns a
                non-success status
        """
        pass

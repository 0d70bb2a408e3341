"""
Gateways Package - Infrastructure Layer

This package contains concrete implementations of the gateway
interfaces defined in the domain layer. These implementations
handle the details of external service communications.
"""

from .model_endpoint_gateway import ModelEndpointGateway
from .nws_weather_gateway import NwsWeatherGateway
from .usgs_water_services_gateway import UsgsWaterServicesGateway
from .webhook_alert_gateway import WebhookAlertGateway

__all__ = [
    "ModelEndpointGateway",
    "NwsWeatherGateway",
    "UsgsWaterServicesGateway",
    "WebhookAlertGateway",
]

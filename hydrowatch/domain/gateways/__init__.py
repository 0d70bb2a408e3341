"""
Gateways Package - Domain Layer

This package contains interfaces defining gateway contracts
for external service communications: the water-services provider,
the weather lookup, the inference endpoint and alert publishing.
Specific implementations are provided by the infrastructure layer.
"""

from .alert_gateway import IAlertGateway
from .inference_gateway import IInferenceGateway
from .time_series_gateway import ITimeSeriesGateway
from .weather_gateway import IWeatherGateway

__all__ = [
    "IAlertGateway",
    "IInferenceGateway",
    "ITimeSeriesGateway",
    "IWeatherGateway",
]

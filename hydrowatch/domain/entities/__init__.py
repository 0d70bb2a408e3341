"""
Domain Entities Package

This package contains the core domain entities: parsed observations,
feature rows, weather readings, predictions and the error taxonomy.
"""

from .dataset import DatasetUpdate
from .errors import (
    AlertPublishError,
    ConfigurationError,
    DatasetNotFoundError,
    DatasetStorageError,
    DocumentParseError,
    DomainError,
    EndpointConfigurationError,
    EndpointError,
    NoObservationsError,
    NoPredictionParsed,
    ParseError,
    ProviderFetchError,
    WeatherLookupError,
)
from .features import FEATURE_COLUMNS, LABEL_COLUMN, FeatureRow
from .health import ApplicationInfo, DependencyStatus, ServiceStatus, SystemHealth
from .prediction import (
    AnomalyBatchResult,
    AnomalyDecision,
    PredictionResult,
    SiteFailure,
)
from .time_series import (
    Granularity,
    Observation,
    ParsedDocument,
    RawDocument,
    SeriesObservations,
    SourceTier,
    TimeSeriesBatch,
)
from .weather import WeatherReading

__all__ = [
    "AlertPublishError",
    "AnomalyBatchResult",
    "AnomalyDecision",
    "ApplicationInfo",
    "ConfigurationError",
    "DatasetNotFoundError",
    "DatasetStorageError",
    "DatasetUpdate",
    "DependencyStatus",
    "DocumentParseError",
    "DomainError",
    "EndpointConfigurationError",
    "EndpointError",
    "FEATURE_COLUMNS",
    "FeatureRow",
    "Granularity",
    "LABEL_COLUMN",
    "NoObservationsError",
    "NoPredictionParsed",
    "Observation",
    "ParseError",
    "ParsedDocument",
    "PredictionResult",
    "ProviderFetchError",
    "RawDocument",
    "SeriesObservations",
    "ServiceStatus",
    "SiteFailure",
    "SourceTier",
    "SystemHealth",
    "TimeSeriesBatch",
    "WeatherLookupError",
    "WeatherReading",
]

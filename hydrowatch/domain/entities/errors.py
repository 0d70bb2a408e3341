"""
Domain Errors

Failure taxonomy of the fetch, encode, infer and decide pipeline. Hard
failures abort the pipeline for one site; soft failures (weather lookup,
dataset persistence, alert publishing) are logged by the caller and never
propagated.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(DomainError):
    """Raised when a required site id, endpoint or model identifier is missing."""


class ProviderFetchError(DomainError):
    """Raised when one tier of the time-series provider fails for a batch."""

    def __init__(
        self,
        message: str,
        site_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.site_id = site_id
        super().__init__(message, details)


class ParseError(DomainError):
    """Raised when a provider or endpoint response cannot be interpreted."""


class DocumentParseError(ParseError):
    """Raised when a raw time-series document is not a JSON object."""


class NoObservationsError(ParseError):
    """Raised when a document holds no point with a parseable timestamp."""


class EndpointError(DomainError):
    """Raised when the inference endpoint is unreachable or rejects the call."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.status_code = status_code
        super().__init__(message, details)


class EndpointConfigurationError(ConfigurationError, EndpointError):
    """Raised when the endpoint name or target model is not configured."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details=details)


class NoPredictionParsed(ParseError):
    """Raised when the inference output contains no numeric token."""

    def __init__(self, output: str, details: Optional[Dict[str, Any]] = None):
        self.output = output
        if output.strip():
            message = "No numeric predictions parsed from endpoint output"
        else:
            message = "Empty prediction output"
        super().__init__(message, details)


class WeatherLookupError(DomainError):
    """Raised when the weather service cannot provide a temperature."""


class DatasetNotFoundError(DomainError):
    """Raised when no dataset is stored under a key."""

    def __init__(self, key: str, details: Optional[Dict[str, Any]] = None):
        self.key = key
        super().__init__(f"Dataset {key} not found", details)


class DatasetStorageError(DomainError):
    """Raised when the dataset blob store fails to read or write."""


class AlertPublishError(DomainError):
    """Raised when an alert notification cannot be delivered."""

"""Mapping of domain errors to HTTP responses."""

from fastapi import HTTPException, status

from hydrowatch.domain.entities.errors import (
    ConfigurationError,
    DomainError,
    EndpointConfigurationError,
    EndpointError,
    NoPredictionParsed,
    ParseError,
    ProviderFetchError,
)

# First match wins, so subclasses come before their bases.
_STATUS_BY_ERROR = (
    (EndpointConfigurationError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (ConfigurationError, status.HTTP_400_BAD_REQUEST),
    (NoPredictionParsed, status.HTTP_502_BAD_GATEWAY),
    (EndpointError, status.HTTP_502_BAD_GATEWAY),
    (ProviderFetchError, status.HTTP_502_BAD_GATEWAY),
    (ParseError, status.HTTP_422_UNPROCESSABLE_ENTITY),
)


def http_error_for(exc: DomainError) -> HTTPException:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=exc.message)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=exc.message
    )

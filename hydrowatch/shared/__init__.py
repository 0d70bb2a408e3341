"""
Shared module - Cross-cutting concerns / Shared Layer

This module provides shared utilities, constants, and enums that are used
across multiple layers of the application.

Its primary responsibilities include:
- Defining cross-layer constants (environment names, log levels, provider codes)
- Configuring structured logging for the API and the worker
- Resolving secret files into environment variables

The shared module must not depend on Infrastructure or Frameworks.
"""

from .consts import (
    DAILY_MEAN_STATISTIC_CODE,
    DEFAULT_PARAMETER_CODE,
    DEFAULT_USER_AGENT,
    EnumEnvironment,
    EnumLogLevel,
)
from .logging import (
    bind_log_context,
    configure_logging,
    get_logger,
    update_logging_from_settings,
)

__all__ = [
    "DAILY_MEAN_STATISTIC_CODE",
    "DEFAULT_PARAMETER_CODE",
    "DEFAULT_USER_AGENT",
    "EnumEnvironment",
    "EnumLogLevel",
    "bind_log_context",
    "configure_logging",
    "get_logger",
    "update_logging_from_settings",
]

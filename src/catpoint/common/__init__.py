"""Shared error and logging utilities."""

from .errors import (
    ErrorCode,
    SecurityError,
    ConfigError,
    RepositoryError,
    SensorNotFoundError,
    ImageServiceError,
    get_http_status,
)
from .logging import configure_logging, get_logger

__all__ = [
    # Errors
    'ErrorCode',
    'SecurityError',
    'ConfigError',
    'RepositoryError',
    'SensorNotFoundError',
    'ImageServiceError',
    'get_http_status',
    # Logging
    'configure_logging',
    'get_logger',
]

"""
Error handling

Exception classes and error codes shared across Catpoint.
Every exception derives from SecurityError so the API layer can turn any of
them into a consistent JSON body.
"""

from enum import Enum
from typing import Any, Optional


class ErrorCode(str, Enum):
    """Error codes, mapped onto HTTP status codes for API responses."""

    # Config
    CONFIG_INVALID = "CONFIG_INVALID"
    CONFIG_NOT_FOUND = "CONFIG_NOT_FOUND"
    CONFIG_PARSE_ERROR = "CONFIG_PARSE_ERROR"

    # Repository
    SENSOR_NOT_FOUND = "SENSOR_NOT_FOUND"
    SENSOR_ALREADY_EXISTS = "SENSOR_ALREADY_EXISTS"
    REPOSITORY_READ_FAILED = "REPOSITORY_READ_FAILED"
    REPOSITORY_WRITE_FAILED = "REPOSITORY_WRITE_FAILED"

    # Image analysis
    IMAGE_SERVICE_UNAVAILABLE = "IMAGE_SERVICE_UNAVAILABLE"
    IMAGE_ANALYSIS_FAILED = "IMAGE_ANALYSIS_FAILED"
    IMAGE_INVALID = "IMAGE_INVALID"

    # Auth
    UNAUTHORIZED = "UNAUTHORIZED"

    INTERNAL_ERROR = "INTERNAL_ERROR"


_ERROR_CODE_TO_HTTP_STATUS: dict[ErrorCode, int] = {
    ErrorCode.CONFIG_INVALID: 400,
    ErrorCode.CONFIG_PARSE_ERROR: 400,
    ErrorCode.CONFIG_NOT_FOUND: 404,
    ErrorCode.SENSOR_NOT_FOUND: 404,
    ErrorCode.SENSOR_ALREADY_EXISTS: 409,
    ErrorCode.REPOSITORY_READ_FAILED: 500,
    ErrorCode.REPOSITORY_WRITE_FAILED: 500,
    ErrorCode.IMAGE_SERVICE_UNAVAILABLE: 503,
    ErrorCode.IMAGE_ANALYSIS_FAILED: 500,
    ErrorCode.IMAGE_INVALID: 400,
    ErrorCode.UNAUTHORIZED: 401,
    ErrorCode.INTERNAL_ERROR: 500,
}


def get_http_status(error_code: ErrorCode) -> int:
    """Return the HTTP status for an error code (500 when unmapped)."""
    return _ERROR_CODE_TO_HTTP_STATUS.get(error_code, 500)


class SecurityError(Exception):
    """
    Base exception for Catpoint.

    Attributes:
        code: ErrorCode
        message: human readable message
        details: extra context for debugging
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    @property
    def http_status(self) -> int:
        return get_http_status(self.code)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for REST responses."""
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


class ConfigError(SecurityError):
    """Raised while loading, parsing or validating configuration."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        config_path: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.config_path = config_path
        _details: dict[str, Any] = {}
        if config_path:
            _details["config_path"] = config_path
        if details:
            _details.update(details)
        super().__init__(code, message, _details)


class RepositoryError(SecurityError):
    """Raised when the repository cannot read or persist its state."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        path: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.path = path
        _details: dict[str, Any] = {}
        if path:
            _details["path"] = path
        if details:
            _details.update(details)
        super().__init__(code, message, _details)


class SensorNotFoundError(RepositoryError):
    """Raised when a sensor id is unknown to the repository."""

    def __init__(self, sensor_id: str) -> None:
        self.sensor_id = sensor_id
        super().__init__(
            ErrorCode.SENSOR_NOT_FOUND,
            f"Sensor not found: {sensor_id}",
            details={"sensor_id": sensor_id},
        )


class ImageServiceError(SecurityError):
    """Raised when the image classifier is unavailable or inference fails."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        model_name: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.model_name = model_name
        _details: dict[str, Any] = {}
        if model_name:
            _details["model_name"] = model_name
        if details:
            _details.update(details)
        super().__init__(code, message, _details)

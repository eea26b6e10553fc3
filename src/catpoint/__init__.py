"""
Catpoint - home security alarm status service

Turns sensor activations, arming changes and camera cat detection into
NO_ALARM / PENDING_ALARM / ALARM transitions.
"""

__version__ = "1.0.0"

from .common.errors import SecurityError, ErrorCode
from .domain import AlarmStatus, ArmingStatus, SensorType, Sensor
from .services import (
    SecurityService,
    SecurityServiceConfig,
    StatusListener,
    InMemorySecurityRepository,
    JsonFileSecurityRepository,
    FakeImageService,
)

__all__ = [
    '__version__',
    'SecurityError',
    'ErrorCode',
    'AlarmStatus',
    'ArmingStatus',
    'SensorType',
    'Sensor',
    'SecurityService',
    'SecurityServiceConfig',
    'StatusListener',
    'InMemorySecurityRepository',
    'JsonFileSecurityRepository',
    'FakeImageService',
]

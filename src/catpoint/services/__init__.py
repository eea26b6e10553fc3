"""Catpoint Services"""

from .alarm_engine import (
    AlarmDecision,
    Command,
    CommandType,
    TransitionTrigger,
    on_arming_status_changed,
    on_image_analyzed,
    on_sensor_activated,
    on_sensor_deactivated,
)
from .repository import (
    SecurityRepository,
    InMemorySecurityRepository,
    JsonFileSecurityRepository,
)
from .image_service import (
    ImageService,
    FakeImageService,
    DEFAULT_CONFIDENCE_THRESHOLD,
)
from .security_service import (
    SecurityService,
    SecurityServiceConfig,
    StatusListener,
)

__all__ = [
    # Decision Engine
    'AlarmDecision',
    'Command',
    'CommandType',
    'TransitionTrigger',
    'on_arming_status_changed',
    'on_image_analyzed',
    'on_sensor_activated',
    'on_sensor_deactivated',
    # Repository
    'SecurityRepository',
    'InMemorySecurityRepository',
    'JsonFileSecurityRepository',
    # Image Service
    'ImageService',
    'FakeImageService',
    'DEFAULT_CONFIDENCE_THRESHOLD',
    # Security Service
    'SecurityService',
    'SecurityServiceConfig',
    'StatusListener',
]

"""Shared fixtures for Catpoint tests"""

from unittest.mock import Mock, create_autospec

import pytest
from loguru import logger

from catpoint.domain.enums import AlarmStatus, ArmingStatus, SensorType
from catpoint.domain.models import Sensor
from catpoint.services.image_service import ImageService
from catpoint.services.repository import InMemorySecurityRepository, SecurityRepository
from catpoint.services.security_service import SecurityService, StatusListener


@pytest.fixture
def mock_repository():
    """Autospec'd repository with no sensors and a disarmed, quiet system."""
    repository = create_autospec(SecurityRepository, instance=True)
    repository.get_sensors.return_value = set()
    repository.get_alarm_status.return_value = AlarmStatus.NO_ALARM
    repository.get_arming_status.return_value = ArmingStatus.DISARMED
    return repository


@pytest.fixture
def mock_image_service():
    image_service = create_autospec(ImageService, instance=True)
    image_service.image_contains_cat.return_value = False
    return image_service


@pytest.fixture
def service(mock_repository, mock_image_service):
    return SecurityService(mock_repository, mock_image_service)


@pytest.fixture
def door_sensor():
    return Sensor(name="Front Door", sensor_type=SensorType.DOOR)


@pytest.fixture
def window_sensor():
    return Sensor(name="Kitchen Window", sensor_type=SensorType.WINDOW)


@pytest.fixture
def memory_repository(door_sensor, window_sensor):
    return InMemorySecurityRepository(sensors=[door_sensor, window_sensor])


@pytest.fixture
def listener():
    return Mock(spec=StatusListener)


@pytest.fixture
def log_records():
    """Loguru records emitted while the test runs."""
    records = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)

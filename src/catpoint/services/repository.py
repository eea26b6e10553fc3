"""
Security Repository - persisted alarm state

Implementations:
- SecurityRepository: abstract contract used by SecurityService
- InMemorySecurityRepository: dict backed, for tests and demos
- JsonFileSecurityRepository: writes a JSON document on every change
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, Field, ValidationError

from ..common.errors import ErrorCode, RepositoryError, SensorNotFoundError
from ..common.logging import get_logger
from ..domain.enums import AlarmStatus, ArmingStatus
from ..domain.models import Sensor


logger = get_logger("repository")


# =============================================================================
# Repository Base
# =============================================================================

class SecurityRepository(ABC):
    """Storage contract for alarm status, arming status and sensors."""

    @abstractmethod
    def get_alarm_status(self) -> AlarmStatus:
        pass

    @abstractmethod
    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        pass

    @abstractmethod
    def get_arming_status(self) -> ArmingStatus:
        pass

    @abstractmethod
    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        pass

    @abstractmethod
    def get_sensors(self) -> set[Sensor]:
        """Snapshot of all sensors. Mutating the result does not persist."""
        pass

    @abstractmethod
    def add_sensor(self, sensor: Sensor) -> None:
        pass

    @abstractmethod
    def remove_sensor(self, sensor: Sensor) -> None:
        pass

    @abstractmethod
    def update_sensor(self, sensor: Sensor) -> None:
        pass

    def get_sensor(self, sensor_id: str) -> Sensor:
        """Look up a single sensor by id."""
        for sensor in self.get_sensors():
            if sensor.sensor_id == sensor_id:
                return sensor
        raise SensorNotFoundError(sensor_id)


# =============================================================================
# In-memory Repository
# =============================================================================

class InMemorySecurityRepository(SecurityRepository):
    """Volatile repository."""

    def __init__(
        self,
        alarm_status: AlarmStatus = AlarmStatus.NO_ALARM,
        arming_status: ArmingStatus = ArmingStatus.DISARMED,
        sensors: Optional[list[Sensor]] = None,
    ):
        self._alarm_status = alarm_status
        self._arming_status = arming_status
        self._sensors: dict[str, Sensor] = {}
        for sensor in sensors or []:
            self._sensors[sensor.sensor_id] = sensor.model_copy()

    def get_alarm_status(self) -> AlarmStatus:
        return self._alarm_status

    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        self._alarm_status = alarm_status
        self._on_change()

    def get_arming_status(self) -> ArmingStatus:
        return self._arming_status

    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        self._arming_status = arming_status
        self._on_change()

    def get_sensors(self) -> set[Sensor]:
        return {sensor.model_copy() for sensor in self._sensors.values()}

    def add_sensor(self, sensor: Sensor) -> None:
        if sensor.sensor_id in self._sensors:
            raise RepositoryError(
                ErrorCode.SENSOR_ALREADY_EXISTS,
                f"Sensor already exists: {sensor.sensor_id}",
                details={"sensor_id": sensor.sensor_id},
            )
        self._sensors[sensor.sensor_id] = sensor.model_copy()
        self._on_change()

    def remove_sensor(self, sensor: Sensor) -> None:
        if self._sensors.pop(sensor.sensor_id, None) is None:
            raise SensorNotFoundError(sensor.sensor_id)
        self._on_change()

    def update_sensor(self, sensor: Sensor) -> None:
        if sensor.sensor_id not in self._sensors:
            raise SensorNotFoundError(sensor.sensor_id)
        self._sensors[sensor.sensor_id] = sensor.model_copy()
        self._on_change()

    def _on_change(self) -> None:
        """Hook for subclasses that persist state."""


# =============================================================================
# JSON File Repository
# =============================================================================

class RepositoryState(BaseModel):
    """On-disk document layout."""
    alarm_status: AlarmStatus = AlarmStatus.NO_ALARM
    arming_status: ArmingStatus = ArmingStatus.DISARMED
    sensors: list[Sensor] = Field(default_factory=list)


class JsonFileSecurityRepository(InMemorySecurityRepository):
    """Repository persisted to a JSON file.

    The file is loaded on construction (missing file = defaults) and
    rewritten after every mutation. A failed write restores the last
    saved state before raising.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        state = self._load()
        super().__init__(
            alarm_status=state.alarm_status,
            arming_status=state.arming_status,
            sensors=state.sensors,
        )
        self._saved = self._snapshot()

    def _snapshot(self) -> tuple[AlarmStatus, ArmingStatus, dict[str, Sensor]]:
        # Stored sensors are replaced on update, never mutated in place
        return self._alarm_status, self._arming_status, dict(self._sensors)

    def _rollback(self) -> None:
        self._alarm_status, self._arming_status, sensors = self._saved
        self._sensors = dict(sensors)

    def _load(self) -> RepositoryState:
        if not self.path.exists():
            logger.info(f"No repository file at {self.path}, starting empty")
            return RepositoryState()

        try:
            return RepositoryState.model_validate_json(self.path.read_bytes())
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            raise RepositoryError(
                ErrorCode.REPOSITORY_READ_FAILED,
                f"Failed to read repository file: {e}",
                path=str(self.path),
            ) from e

    def _on_change(self) -> None:
        state = RepositoryState(
            alarm_status=self._alarm_status,
            arming_status=self._arming_status,
            sensors=sorted(self._sensors.values()),
        )
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp_path.write_text(state.model_dump_json(indent=2), encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as e:
            self._rollback()
            raise RepositoryError(
                ErrorCode.REPOSITORY_WRITE_FAILED,
                f"Failed to write repository file: {e}",
                path=str(self.path),
            ) from e
        self._saved = self._snapshot()
        logger.debug(f"Repository saved to {self.path}")

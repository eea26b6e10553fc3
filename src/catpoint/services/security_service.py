"""
Security Service

Facade between the outside world (keypad, sensors, camera) and the
repository. Each operation reads the current state, asks the decision
engine what to do and applies the returned commands.
"""

from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass
from typing import Any, Optional

from ..common.logging import get_logger
from ..domain.enums import AlarmStatus, ArmingStatus
from ..domain.models import Sensor
from .alarm_engine import (
    AlarmDecision,
    Command,
    CommandType,
    on_arming_status_changed,
    on_image_analyzed,
    on_sensor_activated,
    on_sensor_deactivated,
)
from .image_service import DEFAULT_CONFIDENCE_THRESHOLD, ImageService
from .repository import SecurityRepository


logger = get_logger("security")


class StatusListener(ABC):
    """Observer for alarm, camera and sensor changes."""

    @abstractmethod
    def notify(self, alarm_status: AlarmStatus) -> None:
        pass

    @abstractmethod
    def cat_detected(self, cat: bool) -> None:
        pass

    @abstractmethod
    def sensor_status_changed(self) -> None:
        pass


@dataclass
class SecurityServiceConfig:
    """Tunables for SecurityService."""
    confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD  # 0-100
    history_size: int = 100


class SecurityService:
    """Applies alarm decisions to the repository and notifies listeners."""

    def __init__(
        self,
        repository: SecurityRepository,
        image_service: ImageService,
        config: Optional[SecurityServiceConfig] = None,
    ):
        self.repository = repository
        self.image_service = image_service
        self.config = config or SecurityServiceConfig()

        self._listeners: list[StatusListener] = []
        self._cat_detected = False
        self._decisions: deque[AlarmDecision] = deque(maxlen=self.config.history_size)

    # =========================================================================
    # Listeners
    # =========================================================================

    def add_status_listener(self, listener: StatusListener) -> None:
        self._listeners.append(listener)

    def remove_status_listener(self, listener: StatusListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify_listeners(self, method: str, *args: Any) -> None:
        for listener in list(self._listeners):
            try:
                getattr(listener, method)(*args)
            except Exception:
                logger.exception(f"Status listener {listener!r} failed in {method}")

    # =========================================================================
    # Queries
    # =========================================================================

    def get_alarm_status(self) -> AlarmStatus:
        return self.repository.get_alarm_status()

    def get_arming_status(self) -> ArmingStatus:
        return self.repository.get_arming_status()

    def get_sensors(self) -> set[Sensor]:
        return self.repository.get_sensors()

    @property
    def cat_detected(self) -> bool:
        """Result of the most recent image analysis."""
        return self._cat_detected

    def get_decision_history(self) -> list[AlarmDecision]:
        return list(self._decisions)

    # =========================================================================
    # Operations
    # =========================================================================

    def set_arming_status(self, arming_status: ArmingStatus) -> AlarmDecision:
        """Arm or disarm the system.

        Disarming forces NO_ALARM; arming resets every sensor to inactive.
        """
        decision = on_arming_status_changed(
            self.repository.get_alarm_status(),
            arming_status,
            cat_detected=self._cat_detected,
        )
        self.repository.set_arming_status(arming_status)
        logger.info(f"Arming status set to {arming_status.value}")
        self._apply(decision)
        return decision

    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        """Persist the alarm status and tell every listener."""
        self.repository.set_alarm_status(alarm_status)
        self._notify_listeners("notify", alarm_status)

    def deactivate_all_sensors(self) -> None:
        for sensor in self.repository.get_sensors():
            if sensor.active:
                sensor.active = False
                self.repository.update_sensor(sensor)
        self._notify_listeners("sensor_status_changed")

    def change_sensor_activation_status(self, sensor: Sensor, active: bool) -> AlarmDecision:
        """Apply a sensor state report.

        Args:
            sensor: Sensor as last known (its ``active`` flag is the previous state)
            active: New activation state
        """
        alarm_status = self.repository.get_alarm_status()

        if active:
            decision = on_sensor_activated(
                alarm_status,
                self.repository.get_arming_status(),
                sensor_id=sensor.sensor_id,
            )
        else:
            others_active = any(
                s.active for s in self.repository.get_sensors()
                if s.sensor_id != sensor.sensor_id
            )
            decision = on_sensor_deactivated(
                alarm_status,
                sensor_was_active=sensor.active,
                any_sensor_still_active=others_active,
                sensor_id=sensor.sensor_id,
            )

        self._apply(decision, sensor=sensor)
        return decision

    def process_image(self, image: Any) -> AlarmDecision:
        """Classify a camera image and update the alarm accordingly."""
        contains_cat = self.image_service.image_contains_cat(
            image, self.config.confidence_threshold
        )
        self._cat_detected = contains_cat

        any_active = any(s.active for s in self.repository.get_sensors())
        decision = on_image_analyzed(
            self.repository.get_alarm_status(),
            self.repository.get_arming_status(),
            contains_cat,
            any_active,
        )
        self._apply(decision)
        self._notify_listeners("cat_detected", contains_cat)
        return decision

    def add_sensor(self, sensor: Sensor) -> None:
        self.repository.add_sensor(sensor)
        logger.info(f"Sensor added: {sensor.name} ({sensor.sensor_type.value})")
        self._notify_listeners("sensor_status_changed")

    def remove_sensor(self, sensor: Sensor) -> None:
        self.repository.remove_sensor(sensor)
        logger.info(f"Sensor removed: {sensor.name}")
        self._notify_listeners("sensor_status_changed")

    # =========================================================================
    # Command Application
    # =========================================================================

    def _apply(self, decision: AlarmDecision, sensor: Optional[Sensor] = None) -> None:
        self._decisions.append(decision)

        if decision.changed:
            logger.info(
                f"Alarm {decision.from_status.value} → {decision.to_status.value} "
                f"({decision.trigger.value}): {decision.reason}"
            )
        else:
            logger.debug(f"No alarm change ({decision.trigger.value}): {decision.reason}")

        for command in decision.commands:
            self._execute(command, sensor)

    def _execute(self, command: Command, sensor: Optional[Sensor]) -> None:
        if command.command_type == CommandType.SET_ALARM_STATUS:
            self.set_alarm_status(command.alarm_status)

        elif command.command_type == CommandType.DEACTIVATE_ALL_SENSORS:
            self.deactivate_all_sensors()

        elif command.command_type == CommandType.SET_SENSOR_ACTIVE:
            if sensor is None or sensor.sensor_id != command.sensor_id:
                sensor = self.repository.get_sensor(command.sensor_id)
            sensor.active = command.active
            self.repository.update_sensor(sensor)
            self._notify_listeners("sensor_status_changed")

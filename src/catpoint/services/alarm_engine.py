"""
Catpoint Alarm Decision Engine

Maps (alarm status, arming status, event) to a new alarm status and the
commands the caller must apply to the repository:

NO_ALARM → PENDING_ALARM → ALARM

Key rules:
1. Armed + sensor activated escalates one step; ALARM never escalates further
2. Sensor changes never downgrade ALARM
3. PENDING_ALARM clears only when no sensor remains active
4. DISARMED forces NO_ALARM; arming deactivates every sensor
5. Cat seen while ARMED_HOME forces ALARM

Every function here is pure: it never touches the repository.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..domain.enums import AlarmStatus, ArmingStatus


class TransitionTrigger(str, Enum):
    """What caused the decision."""
    SENSOR_ACTIVATED = "sensor_activated"
    SENSOR_DEACTIVATED = "sensor_deactivated"
    ARMING_CHANGED = "arming_changed"
    IMAGE_ANALYZED = "image_analyzed"


class CommandType(str, Enum):
    """Side effects the caller applies through the repository."""
    SET_ALARM_STATUS = "set_alarm_status"
    SET_SENSOR_ACTIVE = "set_sensor_active"
    DEACTIVATE_ALL_SENSORS = "deactivate_all_sensors"


@dataclass(frozen=True)
class Command:
    """Single repository command."""
    command_type: CommandType
    alarm_status: Optional[AlarmStatus] = None
    sensor_id: Optional[str] = None
    active: Optional[bool] = None

    @classmethod
    def set_alarm_status(cls, status: AlarmStatus) -> "Command":
        return cls(CommandType.SET_ALARM_STATUS, alarm_status=status)

    @classmethod
    def set_sensor_active(cls, sensor_id: str, active: bool) -> "Command":
        return cls(CommandType.SET_SENSOR_ACTIVE, sensor_id=sensor_id, active=active)

    @classmethod
    def deactivate_all_sensors(cls) -> "Command":
        return cls(CommandType.DEACTIVATE_ALL_SENSORS)


@dataclass
class AlarmDecision:
    """Result of evaluating one event."""
    from_status: AlarmStatus
    to_status: AlarmStatus
    trigger: TransitionTrigger
    reason: str
    commands: list[Command] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return self.from_status != self.to_status

    @property
    def alarm_status_command(self) -> Optional[Command]:
        for command in self.commands:
            if command.command_type == CommandType.SET_ALARM_STATUS:
                return command
        return None


# =============================================================================
# Decision Helpers
# =============================================================================

def _no_change(
    current: AlarmStatus,
    trigger: TransitionTrigger,
    reason: str,
    commands: Optional[list[Command]] = None,
) -> AlarmDecision:
    return AlarmDecision(
        from_status=current,
        to_status=current,
        trigger=trigger,
        reason=reason,
        commands=list(commands or []),
    )


def _transition(
    current: AlarmStatus,
    target: AlarmStatus,
    trigger: TransitionTrigger,
    reason: str,
    extra_commands: Optional[list[Command]] = None,
) -> AlarmDecision:
    commands = list(extra_commands or [])
    commands.append(Command.set_alarm_status(target))
    return AlarmDecision(
        from_status=current,
        to_status=target,
        trigger=trigger,
        reason=reason,
        commands=commands,
    )


# =============================================================================
# Event Handlers
# =============================================================================

def on_sensor_activated(
    alarm_status: AlarmStatus,
    arming_status: ArmingStatus,
    sensor_id: Optional[str] = None,
) -> AlarmDecision:
    """A sensor reports activity (it may already have been active).

    An already-active sensor reporting again while PENDING_ALARM still
    escalates to ALARM. When ``sensor_id`` is given the decision also
    carries the command marking that sensor active.
    """
    trigger = TransitionTrigger.SENSOR_ACTIVATED
    sensor_commands = [Command.set_sensor_active(sensor_id, True)] if sensor_id else []

    if alarm_status == AlarmStatus.ALARM:
        return _no_change(alarm_status, trigger, "Alarm already active", sensor_commands)

    if not arming_status.is_armed:
        return _no_change(
            alarm_status, trigger, "System disarmed, activation ignored", sensor_commands
        )

    if alarm_status == AlarmStatus.NO_ALARM:
        return _transition(
            alarm_status,
            AlarmStatus.PENDING_ALARM,
            trigger,
            f"Sensor activated while {arming_status.value}",
            extra_commands=sensor_commands,
        )

    return _transition(
        alarm_status,
        AlarmStatus.ALARM,
        trigger,
        "Sensor activated during pending alarm",
        extra_commands=sensor_commands,
    )


def on_sensor_deactivated(
    alarm_status: AlarmStatus,
    sensor_was_active: bool,
    any_sensor_still_active: bool,
    sensor_id: Optional[str] = None,
) -> AlarmDecision:
    """A sensor reports it is no longer active.

    Args:
        alarm_status: Current alarm status
        sensor_was_active: Activation flag of the sensor before this event
        any_sensor_still_active: Whether any *other* sensor is active
        sensor_id: Sensor to mark inactive (optional)
    """
    trigger = TransitionTrigger.SENSOR_DEACTIVATED
    sensor_commands = [Command.set_sensor_active(sensor_id, False)] if sensor_id else []

    if not sensor_was_active:
        return _no_change(alarm_status, trigger, "Sensor was already inactive", sensor_commands)

    if alarm_status == AlarmStatus.ALARM:
        return _no_change(
            alarm_status,
            trigger,
            "Sensor changes do not affect an active alarm",
            sensor_commands,
        )

    if alarm_status == AlarmStatus.PENDING_ALARM and not any_sensor_still_active:
        return _transition(
            alarm_status,
            AlarmStatus.NO_ALARM,
            trigger,
            "All sensors inactive during pending alarm",
            extra_commands=sensor_commands,
        )

    return _no_change(
        alarm_status,
        trigger,
        "Other sensors still active or no pending alarm",
        sensor_commands,
    )


def on_arming_status_changed(
    alarm_status: AlarmStatus,
    new_arming_status: ArmingStatus,
    cat_detected: bool = False,
) -> AlarmDecision:
    """The user armed or disarmed the system.

    Args:
        alarm_status: Current alarm status
        new_arming_status: Arming status being applied
        cat_detected: Whether the last analysed image contained a cat
    """
    trigger = TransitionTrigger.ARMING_CHANGED

    if new_arming_status == ArmingStatus.DISARMED:
        return _transition(
            alarm_status,
            AlarmStatus.NO_ALARM,
            trigger,
            "System disarmed",
        )

    reset = [Command.deactivate_all_sensors()]

    if new_arming_status == ArmingStatus.ARMED_HOME and cat_detected:
        return _transition(
            alarm_status,
            AlarmStatus.ALARM,
            trigger,
            "Armed home while camera shows a cat",
            extra_commands=reset,
        )

    return _no_change(
        alarm_status,
        trigger,
        f"System {new_arming_status.value}, sensors reset",
        commands=reset,
    )


def on_image_analyzed(
    alarm_status: AlarmStatus,
    arming_status: ArmingStatus,
    contains_cat: bool,
    any_sensor_active: bool,
) -> AlarmDecision:
    """The camera image has been classified."""
    trigger = TransitionTrigger.IMAGE_ANALYZED

    if contains_cat:
        if arming_status == ArmingStatus.ARMED_HOME:
            return _transition(
                alarm_status,
                AlarmStatus.ALARM,
                trigger,
                "Cat detected while armed home",
            )
        return _no_change(
            alarm_status,
            trigger,
            f"Cat detected while {arming_status.value}, no action",
        )

    if not any_sensor_active:
        return _transition(
            alarm_status,
            AlarmStatus.NO_ALARM,
            trigger,
            "No cat detected and no sensors active",
        )

    return _no_change(alarm_status, trigger, "No cat detected but sensors still active")

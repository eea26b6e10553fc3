"""
Catpoint Core Enums

Alarm status, arming status and sensor type enumerations.
Values are the serialized form used by the repository file and the API.
"""

from enum import Enum


# =============================================================================
# Alarm Status
# =============================================================================

class AlarmStatus(str, Enum):
    """Current alert level of the system.

    Only changed through AlarmDecisionEngine decisions.
    """
    NO_ALARM = "no_alarm"
    PENDING_ALARM = "pending_alarm"   # Grace period before full alarm
    ALARM = "alarm"                   # Full alarm

    @property
    def description(self) -> str:
        return _ALARM_DESCRIPTIONS[self]


_ALARM_DESCRIPTIONS = {
    AlarmStatus.NO_ALARM: "Cool and Good",
    AlarmStatus.PENDING_ALARM: "I'm in Danger...",
    AlarmStatus.ALARM: "Awooga!",
}


# =============================================================================
# Arming Status
# =============================================================================

class ArmingStatus(str, Enum):
    """Whether monitoring is active, and in which mode."""
    DISARMED = "disarmed"
    ARMED_HOME = "armed_home"
    ARMED_AWAY = "armed_away"

    @property
    def is_armed(self) -> bool:
        return self in (ArmingStatus.ARMED_HOME, ArmingStatus.ARMED_AWAY)


# =============================================================================
# Sensor Types
# =============================================================================

class SensorType(str, Enum):
    """Physical sensor kind."""
    DOOR = "door"
    WINDOW = "window"
    MOTION = "motion"

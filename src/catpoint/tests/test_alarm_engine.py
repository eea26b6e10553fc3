"""
Tests for the alarm decision engine
"""

import pytest

from catpoint.domain.enums import AlarmStatus, ArmingStatus
from catpoint.services.alarm_engine import (
    Command,
    CommandType,
    TransitionTrigger,
    on_arming_status_changed,
    on_image_analyzed,
    on_sensor_activated,
    on_sensor_deactivated,
)


ARMED = [ArmingStatus.ARMED_HOME, ArmingStatus.ARMED_AWAY]


def status_commands(decision):
    return [c for c in decision.commands if c.command_type == CommandType.SET_ALARM_STATUS]


# =============================================================================
# Sensor Activation
# =============================================================================

class TestSensorActivated:

    @pytest.mark.parametrize("arming", ARMED)
    def test_no_alarm_becomes_pending(self, arming):
        decision = on_sensor_activated(AlarmStatus.NO_ALARM, arming)

        assert decision.to_status == AlarmStatus.PENDING_ALARM
        assert decision.changed is True
        assert decision.trigger == TransitionTrigger.SENSOR_ACTIVATED
        assert status_commands(decision) == [Command.set_alarm_status(AlarmStatus.PENDING_ALARM)]

    @pytest.mark.parametrize("arming", ARMED)
    def test_pending_becomes_alarm(self, arming):
        decision = on_sensor_activated(AlarmStatus.PENDING_ALARM, arming)

        assert decision.to_status == AlarmStatus.ALARM
        assert status_commands(decision) == [Command.set_alarm_status(AlarmStatus.ALARM)]

    @pytest.mark.parametrize("arming", ARMED + [ArmingStatus.DISARMED])
    def test_alarm_is_unchanged(self, arming):
        decision = on_sensor_activated(AlarmStatus.ALARM, arming)

        assert decision.changed is False
        assert status_commands(decision) == []

    @pytest.mark.parametrize("status", [AlarmStatus.NO_ALARM, AlarmStatus.PENDING_ALARM])
    def test_disarmed_ignores_activation(self, status):
        decision = on_sensor_activated(status, ArmingStatus.DISARMED)

        assert decision.to_status == status
        assert status_commands(decision) == []

    def test_sensor_id_adds_activation_command(self):
        decision = on_sensor_activated(
            AlarmStatus.NO_ALARM, ArmingStatus.ARMED_AWAY, sensor_id="s1"
        )

        assert Command.set_sensor_active("s1", True) in decision.commands

    def test_sensor_command_emitted_even_without_status_change(self):
        decision = on_sensor_activated(
            AlarmStatus.NO_ALARM, ArmingStatus.DISARMED, sensor_id="s1"
        )

        assert decision.commands == [Command.set_sensor_active("s1", True)]


# =============================================================================
# Sensor Deactivation
# =============================================================================

class TestSensorDeactivated:

    def test_pending_clears_when_no_sensor_active(self):
        decision = on_sensor_deactivated(
            AlarmStatus.PENDING_ALARM,
            sensor_was_active=True,
            any_sensor_still_active=False,
        )

        assert decision.to_status == AlarmStatus.NO_ALARM
        assert status_commands(decision) == [Command.set_alarm_status(AlarmStatus.NO_ALARM)]

    def test_pending_kept_while_other_sensor_active(self):
        decision = on_sensor_deactivated(
            AlarmStatus.PENDING_ALARM,
            sensor_was_active=True,
            any_sensor_still_active=True,
        )

        assert decision.to_status == AlarmStatus.PENDING_ALARM
        assert status_commands(decision) == []

    @pytest.mark.parametrize("others_active", [True, False])
    def test_alarm_never_downgraded(self, others_active):
        decision = on_sensor_deactivated(
            AlarmStatus.ALARM,
            sensor_was_active=True,
            any_sensor_still_active=others_active,
        )

        assert decision.to_status == AlarmStatus.ALARM
        assert status_commands(decision) == []

    @pytest.mark.parametrize("status", list(AlarmStatus))
    def test_already_inactive_sensor_is_no_op(self, status):
        decision = on_sensor_deactivated(
            status,
            sensor_was_active=False,
            any_sensor_still_active=False,
        )

        assert decision.changed is False
        assert status_commands(decision) == []

    def test_sensor_id_adds_deactivation_command(self):
        decision = on_sensor_deactivated(
            AlarmStatus.NO_ALARM,
            sensor_was_active=True,
            any_sensor_still_active=False,
            sensor_id="s1",
        )

        assert decision.commands == [Command.set_sensor_active("s1", False)]


# =============================================================================
# Arming Changes
# =============================================================================

class TestArmingStatusChanged:

    @pytest.mark.parametrize("status", list(AlarmStatus))
    def test_disarm_forces_no_alarm(self, status):
        decision = on_arming_status_changed(status, ArmingStatus.DISARMED)

        assert decision.to_status == AlarmStatus.NO_ALARM
        assert decision.commands == [Command.set_alarm_status(AlarmStatus.NO_ALARM)]

    @pytest.mark.parametrize("status", list(AlarmStatus))
    @pytest.mark.parametrize("arming", ARMED)
    def test_arming_deactivates_all_sensors(self, status, arming):
        decision = on_arming_status_changed(status, arming)

        assert Command.deactivate_all_sensors() in decision.commands
        assert decision.to_status == status

    def test_armed_home_with_cat_forces_alarm(self):
        decision = on_arming_status_changed(
            AlarmStatus.NO_ALARM, ArmingStatus.ARMED_HOME, cat_detected=True
        )

        assert decision.to_status == AlarmStatus.ALARM
        assert decision.commands == [
            Command.deactivate_all_sensors(),
            Command.set_alarm_status(AlarmStatus.ALARM),
        ]

    def test_armed_away_with_cat_does_not_alarm(self):
        decision = on_arming_status_changed(
            AlarmStatus.NO_ALARM, ArmingStatus.ARMED_AWAY, cat_detected=True
        )

        assert decision.to_status == AlarmStatus.NO_ALARM
        assert status_commands(decision) == []


# =============================================================================
# Image Analysis
# =============================================================================

class TestImageAnalyzed:

    @pytest.mark.parametrize("status", list(AlarmStatus))
    def test_cat_while_armed_home_forces_alarm(self, status):
        decision = on_image_analyzed(status, ArmingStatus.ARMED_HOME, True, any_sensor_active=False)

        assert decision.to_status == AlarmStatus.ALARM
        assert status_commands(decision) == [Command.set_alarm_status(AlarmStatus.ALARM)]

    @pytest.mark.parametrize("arming", [ArmingStatus.ARMED_AWAY, ArmingStatus.DISARMED])
    def test_cat_outside_armed_home_is_ignored(self, arming):
        decision = on_image_analyzed(AlarmStatus.NO_ALARM, arming, True, any_sensor_active=False)

        assert decision.changed is False
        assert decision.commands == []

    @pytest.mark.parametrize("status", list(AlarmStatus))
    def test_no_cat_and_no_active_sensor_clears(self, status):
        decision = on_image_analyzed(status, ArmingStatus.ARMED_HOME, False, any_sensor_active=False)

        assert decision.to_status == AlarmStatus.NO_ALARM
        assert decision.commands == [Command.set_alarm_status(AlarmStatus.NO_ALARM)]

    def test_no_cat_with_active_sensor_keeps_status(self):
        decision = on_image_analyzed(
            AlarmStatus.PENDING_ALARM, ArmingStatus.ARMED_AWAY, False, any_sensor_active=True
        )

        assert decision.to_status == AlarmStatus.PENDING_ALARM
        assert decision.commands == []


def test_every_input_combination_yields_a_valid_status():
    for status in AlarmStatus:
        for arming in ArmingStatus:
            for flag in (True, False):
                decisions = [
                    on_sensor_activated(status, arming),
                    on_sensor_deactivated(status, flag, not flag),
                    on_arming_status_changed(status, arming, flag),
                    on_image_analyzed(status, arming, flag, not flag),
                ]
                for decision in decisions:
                    assert decision.from_status == status
                    assert decision.to_status in AlarmStatus

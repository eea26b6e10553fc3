"""
Tests for the keypad, sensor and camera endpoints
"""

import pytest
from fastapi.testclient import TestClient

from catpoint.api.app import create_app
from catpoint.api.keypad_api import set_service
from catpoint.domain.enums import AlarmStatus, ArmingStatus
from catpoint.services.security_service import SecurityService


PIN = "4321"


@pytest.fixture
def live_service(memory_repository, mock_image_service):
    return SecurityService(memory_repository, mock_image_service)


@pytest.fixture
def client(live_service):
    app = create_app(live_service, pin=PIN)
    with TestClient(app) as test_client:
        yield test_client
    set_service(None)


# =============================================================================
# Keypad
# =============================================================================

class TestKeypadApi:

    def test_status(self, client):
        response = client.get("/keypad/status")

        assert response.status_code == 200
        body = response.json()
        assert body["arming_status"] == "disarmed"
        assert body["alarm_status"] == "no_alarm"
        assert body["alarm_description"] == "Cool and Good"
        assert body["is_armed"] is False
        assert body["sensors_total"] == 2
        assert body["sensors_active"] == 0

    def test_wrong_pin_rejected(self, client, live_service):
        response = client.post("/keypad/arm-away", json={"pin": "0000"})

        assert response.status_code == 401
        assert live_service.get_arming_status() == ArmingStatus.DISARMED

    def test_verify_pin(self, client):
        assert client.post("/keypad/verify-pin", json={"pin": PIN}).json()["valid"] is True
        assert client.post("/keypad/verify-pin", json={"pin": "0000"}).json()["valid"] is False

    def test_arm_home(self, client, live_service):
        response = client.post("/keypad/arm-home", json={"pin": PIN})

        assert response.status_code == 200
        body = response.json()
        assert body["new_status"] == "armed_home"
        assert body["is_armed"] is True
        assert live_service.get_arming_status() == ArmingStatus.ARMED_HOME

    def test_disarm_clears_alarm(self, client, live_service):
        live_service.repository.set_alarm_status(AlarmStatus.ALARM)

        response = client.post("/keypad/disarm", json={"pin": PIN})

        assert response.status_code == 200
        assert response.json()["alarm_status"] == "no_alarm"

    def test_change_mode(self, client, live_service):
        response = client.post(
            "/keypad/change-mode",
            json={"pin": PIN, "target_status": "armed_away"},
        )

        assert response.status_code == 200
        assert live_service.get_arming_status() == ArmingStatus.ARMED_AWAY


# =============================================================================
# Sensors
# =============================================================================

class TestSensorApi:

    def test_list_sorted_by_name(self, client):
        names = [s["name"] for s in client.get("/api/sensors").json()]

        assert names == ["Front Door", "Kitchen Window"]

    def test_create_and_delete(self, client, live_service):
        response = client.post("/api/sensors", json={"name": "Hallway", "sensor_type": "motion"})

        assert response.status_code == 201
        sensor_id = response.json()["sensor_id"]
        assert len(live_service.get_sensors()) == 3

        assert client.delete(f"/api/sensors/{sensor_id}").status_code == 204
        assert len(live_service.get_sensors()) == 2

    def test_unknown_sensor_returns_404(self, client):
        response = client.post("/api/sensors/nope/activation", json={"active": True})

        assert response.status_code == 404
        assert response.json()["code"] == "SENSOR_NOT_FOUND"

    def test_activation_while_armed_sets_pending(self, client, live_service, door_sensor):
        client.post("/keypad/arm-away", json={"pin": PIN})

        response = client.post(
            f"/api/sensors/{door_sensor.sensor_id}/activation",
            json={"active": True},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["alarm_status"] == "pending_alarm"
        assert body["sensor"]["active"] is True
        assert live_service.repository.get_sensor(door_sensor.sensor_id).active is True


# =============================================================================
# Camera
# =============================================================================

class TestCameraApi:

    def test_cat_while_armed_home_sets_alarm(self, client, mock_image_service):
        mock_image_service.image_contains_cat.return_value = True
        client.post("/keypad/arm-home", json={"pin": PIN})

        response = client.post(
            "/api/camera/analyze",
            content=b"\xff\xd8jpeg",
            headers={"Content-Type": "image/jpeg"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "cat_detected": True,
            "alarm_status": "alarm",
            "reason": "Cat detected while armed home",
        }
        mock_image_service.image_contains_cat.assert_called_once_with(b"\xff\xd8jpeg", 50.0)

    def test_empty_body_rejected(self, client):
        response = client.post("/api/camera/analyze", content=b"")

        assert response.status_code == 400
        assert response.json()["code"] == "IMAGE_INVALID"


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}

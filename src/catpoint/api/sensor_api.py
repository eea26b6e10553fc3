"""
Sensor API

Register, remove and toggle door/window/motion sensors.
"""

from fastapi import APIRouter
from pydantic import BaseModel, Field

from ..domain.enums import AlarmStatus, SensorType
from ..domain.models import Sensor
from .keypad_api import get_service


sensor_router = APIRouter(prefix="/api/sensors", tags=["sensors"])


class SensorCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=64)
    sensor_type: SensorType


class SensorActivationRequest(BaseModel):
    active: bool


class SensorActivationResponse(BaseModel):
    sensor: Sensor
    alarm_status: AlarmStatus
    reason: str


@sensor_router.get("", response_model=list[Sensor])
async def list_sensors():
    return sorted(get_service().get_sensors())


@sensor_router.post("", response_model=Sensor, status_code=201)
async def create_sensor(request: SensorCreateRequest):
    sensor = Sensor(name=request.name, sensor_type=request.sensor_type)
    get_service().add_sensor(sensor)
    return sensor


@sensor_router.delete("/{sensor_id}", status_code=204)
async def delete_sensor(sensor_id: str):
    service = get_service()
    service.remove_sensor(service.repository.get_sensor(sensor_id))


@sensor_router.post("/{sensor_id}/activation", response_model=SensorActivationResponse)
async def change_activation(sensor_id: str, request: SensorActivationRequest):
    """Report a sensor becoming active or inactive."""
    service = get_service()
    sensor = service.repository.get_sensor(sensor_id)
    decision = service.change_sensor_activation_status(sensor, request.active)

    return SensorActivationResponse(
        sensor=sensor,
        alarm_status=service.get_alarm_status(),
        reason=decision.reason,
    )

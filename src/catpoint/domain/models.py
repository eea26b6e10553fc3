"""
Catpoint Core Models

Sensor model. Uses Pydantic for validation and serialization.
"""

import uuid

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import SensorType


class Sensor(BaseModel):
    """A door, window or motion sensor.

    Identity is ``sensor_id``: two Sensor objects with the same id are equal
    even when their activation flags differ, so a set of sensors never holds
    two snapshots of the same device.
    """
    model_config = ConfigDict(validate_assignment=True)

    sensor_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    sensor_type: SensorType
    active: bool = False

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError('Sensor name must not be empty')
        return v

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sensor):
            return NotImplemented
        return self.sensor_id == other.sensor_id

    def __lt__(self, other: "Sensor") -> bool:
        if not isinstance(other, Sensor):
            return NotImplemented
        return (self.name, self.sensor_id) < (other.name, other.sensor_id)

    def __hash__(self) -> int:
        return hash(self.sensor_id)

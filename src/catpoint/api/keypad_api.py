"""
Keypad API

REST endpoints standing in for the physical keypad:
- Arm home / arm away / disarm
- PIN verification
- Status query
"""

from typing import Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from ..domain.enums import AlarmStatus, ArmingStatus
from ..services.security_service import SecurityService


keypad_router = APIRouter(prefix="/keypad", tags=["keypad"])


# =============================================================================
# Request/Response Models
# =============================================================================

class PinRequest(BaseModel):
    pin: str = Field(..., min_length=4, max_length=6, description="User PIN")


class ModeChangeRequest(BaseModel):
    pin: str = Field(..., min_length=4, max_length=6, description="User PIN")
    target_status: ArmingStatus = Field(..., description="Arming status to apply")


class KeypadStatusResponse(BaseModel):
    arming_status: ArmingStatus
    alarm_status: AlarmStatus
    alarm_description: str
    is_armed: bool
    cat_detected: bool
    sensors_total: int
    sensors_active: int
    last_reason: Optional[str] = None


class ModeChangeResponse(BaseModel):
    success: bool
    old_status: ArmingStatus
    new_status: ArmingStatus
    alarm_status: AlarmStatus
    is_armed: bool
    message: str


# =============================================================================
# Global State
# =============================================================================

_global_service: Optional[SecurityService] = None
_user_pin: str = "1234"


def set_service(service: Optional[SecurityService]):
    global _global_service
    _global_service = service


def get_service() -> SecurityService:
    if _global_service is None:
        raise HTTPException(status_code=500, detail="Security service not initialized")
    return _global_service


def set_user_pin(pin: str):
    global _user_pin
    _user_pin = pin


def verify_pin(pin: str) -> bool:
    return pin == _user_pin


# =============================================================================
# API Endpoints
# =============================================================================

@keypad_router.get("/status", response_model=KeypadStatusResponse)
async def get_keypad_status():
    """Current arming status, alarm status and sensor counts."""
    service = get_service()
    sensors = service.get_sensors()
    alarm_status = service.get_alarm_status()
    arming_status = service.get_arming_status()
    history = service.get_decision_history()

    return KeypadStatusResponse(
        arming_status=arming_status,
        alarm_status=alarm_status,
        alarm_description=alarm_status.description,
        is_armed=arming_status.is_armed,
        cat_detected=service.cat_detected,
        sensors_total=len(sensors),
        sensors_active=sum(1 for s in sensors if s.active),
        last_reason=history[-1].reason if history else None,
    )


@keypad_router.post("/verify-pin")
async def verify_pin_endpoint(request: PinRequest):
    is_valid = verify_pin(request.pin)
    return {
        "valid": is_valid,
        "message": "PIN accepted" if is_valid else "Wrong PIN",
    }


@keypad_router.post("/change-mode", response_model=ModeChangeResponse)
async def change_mode(request: ModeChangeRequest):
    """Apply an arming status.

    Disarming always clears the alarm; arming resets all sensors.
    """
    if not verify_pin(request.pin):
        raise HTTPException(status_code=401, detail="Wrong PIN")

    service = get_service()
    old_status = service.get_arming_status()
    decision = service.set_arming_status(request.target_status)

    return ModeChangeResponse(
        success=True,
        old_status=old_status,
        new_status=request.target_status,
        alarm_status=service.get_alarm_status(),
        is_armed=request.target_status.is_armed,
        message=f"{old_status.value} → {request.target_status.value}: {decision.reason}",
    )


@keypad_router.post("/disarm", response_model=ModeChangeResponse)
async def disarm(request: PinRequest):
    return await change_mode(
        ModeChangeRequest(pin=request.pin, target_status=ArmingStatus.DISARMED)
    )


@keypad_router.post("/arm-home", response_model=ModeChangeResponse)
async def arm_home(request: PinRequest):
    return await change_mode(
        ModeChangeRequest(pin=request.pin, target_status=ArmingStatus.ARMED_HOME)
    )


@keypad_router.post("/arm-away", response_model=ModeChangeResponse)
async def arm_away(request: PinRequest):
    return await change_mode(
        ModeChangeRequest(pin=request.pin, target_status=ArmingStatus.ARMED_AWAY)
    )

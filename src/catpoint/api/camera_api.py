"""
Camera API

Accepts a camera snapshot (raw jpeg/png body) and runs cat detection.
"""

from fastapi import APIRouter, Request
from pydantic import BaseModel

from ..common.errors import ErrorCode, ImageServiceError
from ..domain.enums import AlarmStatus
from .keypad_api import get_service


camera_router = APIRouter(prefix="/api/camera", tags=["camera"])

MAX_IMAGE_BYTES = 10 * 1024 * 1024


class AnalyzeResponse(BaseModel):
    cat_detected: bool
    alarm_status: AlarmStatus
    reason: str


@camera_router.post("/analyze", response_model=AnalyzeResponse)
async def analyze_image(request: Request):
    """Classify the uploaded image and update the alarm."""
    data = await request.body()
    if not data:
        raise ImageServiceError(ErrorCode.IMAGE_INVALID, "Empty image body")
    if len(data) > MAX_IMAGE_BYTES:
        raise ImageServiceError(
            ErrorCode.IMAGE_INVALID,
            "Image too large",
            details={"size": len(data), "limit": MAX_IMAGE_BYTES},
        )

    service = get_service()
    decision = service.process_image(data)

    return AnalyzeResponse(
        cat_detected=service.cat_detected,
        alarm_status=service.get_alarm_status(),
        reason=decision.reason,
    )

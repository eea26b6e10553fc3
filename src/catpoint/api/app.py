"""
Catpoint FastAPI application
"""

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..common.errors import SecurityError
from ..common.logging import get_logger
from ..services.security_service import SecurityService
from .camera_api import camera_router
from .keypad_api import keypad_router, set_service, set_user_pin
from .sensor_api import sensor_router


logger = get_logger("api")


def create_app(service: SecurityService, pin: Optional[str] = None) -> FastAPI:
    """Build the API around an existing SecurityService."""
    set_service(service)
    if pin is not None:
        set_user_pin(pin)

    app = FastAPI(title="Catpoint Security", version="1.0.0")

    @app.exception_handler(SecurityError)
    async def security_error_handler(request: Request, exc: SecurityError):
        logger.warning(f"{request.method} {request.url.path} failed: {exc.code.value} {exc.message}")
        return JSONResponse(status_code=exc.http_status, content=exc.to_dict())

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    app.include_router(keypad_router)
    app.include_router(sensor_router)
    app.include_router(camera_router)
    return app

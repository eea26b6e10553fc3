"""Catpoint HTTP API"""

from .app import create_app
from .keypad_api import keypad_router, set_service, get_service, set_user_pin
from .sensor_api import sensor_router
from .camera_api import camera_router

__all__ = [
    'create_app',
    'keypad_router',
    'sensor_router',
    'camera_router',
    'set_service',
    'get_service',
    'set_user_pin',
]

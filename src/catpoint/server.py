#!/usr/bin/env python3
"""
Catpoint Security Server

Starts the management API with:
- Keypad (arm/disarm)
- Sensor management and activation reports
- Camera image analysis

Usage:
    python -m catpoint.server --config config.json
    # or
    CATPOINT_CONFIG=config.json uvicorn catpoint.server:app_factory --factory --port 8080
"""

import argparse
import os

import uvicorn

from .api.app import create_app
from .common.logging import configure_logging, get_logger
from .config import build_service, load_config


CONFIG_ENV = "CATPOINT_CONFIG"

logger = get_logger("server")


def app_factory():
    """uvicorn factory: builds the app from the config named in CATPOINT_CONFIG."""
    config = load_config(os.getenv(CONFIG_ENV))
    configure_logging(level=config.log_level)
    service = build_service(config)
    return create_app(service, pin=config.keypad_pin)


def main():
    parser = argparse.ArgumentParser(description="Catpoint Security Server")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to")
    parser.add_argument("--port", type=int, default=8080, help="Port to bind to")
    parser.add_argument("--config", default=None, help="Path to config.json")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")

    args = parser.parse_args()

    if args.config:
        os.environ[CONFIG_ENV] = args.config

    logger.info(f"Catpoint API on http://{args.host}:{args.port}/ (docs at /docs)")

    uvicorn.run(
        "catpoint.server:app_factory",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()

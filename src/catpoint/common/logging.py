"""
Structured logging

loguru based logging setup for Catpoint:
- colored console output for development
- JSON lines for production (LOG_FORMAT=json)
- optional rotating log file
"""

import json
import os
import sys
from typing import Any, Optional

from loguru import logger


_LOG_LEVELS = {
    "DEBUG": "DEBUG",
    "INFO": "INFO",
    "WARNING": "WARNING",
    "WARN": "WARNING",
    "ERROR": "ERROR",
    "CRITICAL": "CRITICAL",
}


def _json_formatter(record: dict[str, Any]) -> str:
    log_entry = {
        "timestamp": record["time"].strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z",
        "level": record["level"].name,
        "message": record["message"],
        "logger": record["extra"].get("component", record["name"]),
    }
    for key, value in record["extra"].items():
        if key != "component":
            log_entry[key] = value

    if record["exception"]:
        exc = record["exception"]
        log_entry["exception"] = {
            "type": exc.type.__name__ if exc.type else None,
            "value": str(exc.value) if exc.value else None,
        }

    # loguru treats the returned string as a format template
    serialized = json.dumps(log_entry, default=str, ensure_ascii=False)
    return serialized.replace("{", "{{").replace("}", "}}") + "\n"


def _console_formatter(record: dict[str, Any]) -> str:
    fmt = "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    fmt += "<level>{level: <8}</level> | "
    if "component" in record["extra"]:
        fmt += "<cyan>{extra[component]}</cyan> | "
    else:
        fmt += "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
    fmt += "<level>{message}</level>\n"
    if record["exception"]:
        fmt += "{exception}"
    return fmt


def configure_logging(
    level: str = "INFO",
    json_output: Optional[bool] = None,
    log_file: Optional[str] = None,
) -> None:
    """
    Reset loguru sinks.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        json_output: JSON lines on stdout (None = decided by LOG_FORMAT)
        log_file: extra file sink (None = decided by LOG_FILE)

    Environment:
        LOG_LEVEL, LOG_FORMAT (json|console), LOG_FILE
    """
    env_level = os.getenv("LOG_LEVEL", level).upper()
    log_level = _LOG_LEVELS.get(env_level, "INFO")

    if json_output is None:
        json_output = os.getenv("LOG_FORMAT", "console").lower() == "json"

    if log_file is None:
        log_file = os.getenv("LOG_FILE")

    logger.remove()

    if json_output:
        logger.add(sys.stdout, format=_json_formatter, level=log_level)
    else:
        logger.add(sys.stdout, format=_console_formatter, level=log_level, colorize=True)

    if log_file:
        logger.add(
            log_file,
            format=_json_formatter,
            level=log_level,
            rotation="10 MB",
            retention="7 days",
        )

    logger.info(f"Logging configured: level={log_level}, json={json_output}, file={log_file}")


def get_logger(name: str):
    """Return the loguru logger bound to a component name.

    Example:
        >>> log = get_logger("security")
        >>> log.info("Alarm status changed")
    """
    return logger.bind(component=name)

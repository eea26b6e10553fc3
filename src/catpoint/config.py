"""
Catpoint configuration

Pydantic models for config.json, a loader that turns every failure into
ConfigError, and build_service() which wires the runtime objects.
"""

import json
from pathlib import Path
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .common.errors import ConfigError, ErrorCode
from .common.logging import get_logger
from .services.image_service import DEFAULT_CONFIDENCE_THRESHOLD, FakeImageService, ImageService
from .services.repository import (
    InMemorySecurityRepository,
    JsonFileSecurityRepository,
    SecurityRepository,
)
from .services.security_service import SecurityService, SecurityServiceConfig


logger = get_logger("config")


class RepositoryConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    backend: Literal["memory", "json"] = "memory"
    path: str = Field("./data/catpoint.json", description="JSON file for the json backend")


class ImageServiceConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    backend: Literal["fake", "yolo"] = "fake"
    model_name: str = "yolo11n.pt"
    device: Literal["cpu", "cuda"] = "cpu"
    seed: Optional[int] = None


class SecurityConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    confidence_threshold: float = Field(DEFAULT_CONFIDENCE_THRESHOLD, ge=0.0, le=100.0)
    history_size: int = Field(100, ge=1, description="Alarm decisions kept in memory")


class AppConfig(BaseModel):
    """Top level config.json layout."""
    model_config = ConfigDict(extra="ignore")

    repository: RepositoryConfig = Field(default_factory=RepositoryConfig)
    image_service: ImageServiceConfig = Field(default_factory=ImageServiceConfig)
    security: SecurityConfig = Field(default_factory=SecurityConfig)
    keypad_pin: str = Field("1234", min_length=4, max_length=6)
    log_level: str = "INFO"

    @field_validator("keypad_pin")
    @classmethod
    def validate_pin(cls, value: str) -> str:
        if not value.isdigit():
            raise ValueError("keypad_pin must contain digits only")
        return value


def load_config(path: Optional[Union[str, Path]] = None) -> AppConfig:
    """Load and validate config.json. ``None`` returns the defaults."""
    if path is None:
        return AppConfig()

    target = Path(path)
    if not target.exists():
        raise ConfigError(
            ErrorCode.CONFIG_NOT_FOUND,
            f"Config file not found: {target}",
            config_path=str(target),
        )

    try:
        text = target.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(
            ErrorCode.CONFIG_PARSE_ERROR,
            f"Config file could not be read: {e}",
            config_path=str(target),
        ) from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError(
            ErrorCode.CONFIG_PARSE_ERROR,
            f"Config file is not valid JSON: {e}",
            config_path=str(target),
        ) from e

    return load_config_dict(data, config_path=str(target))


def load_config_dict(data: dict[str, Any], config_path: Optional[str] = None) -> AppConfig:
    try:
        return AppConfig.model_validate(data)
    except ValidationError as e:
        logger.error(f"Config validation failed: {e.error_count()} error(s)")
        raise ConfigError(
            ErrorCode.CONFIG_INVALID,
            "Config validation failed",
            config_path=config_path,
            details={"errors": e.errors(include_url=False, include_context=False)},
        ) from e


def build_repository(config: RepositoryConfig) -> SecurityRepository:
    if config.backend == "json":
        return JsonFileSecurityRepository(config.path)
    return InMemorySecurityRepository()


def build_image_service(config: ImageServiceConfig) -> ImageService:
    if config.backend == "yolo":
        from .hardware.yolo_detector import YoloImageService

        return YoloImageService(model_name=config.model_name, device=config.device)
    return FakeImageService(seed=config.seed)


def build_service(config: AppConfig) -> SecurityService:
    """Create the SecurityService described by ``config``."""
    service = SecurityService(
        repository=build_repository(config.repository),
        image_service=build_image_service(config.image_service),
        config=SecurityServiceConfig(
            confidence_threshold=config.security.confidence_threshold,
            history_size=config.security.history_size,
        ),
    )
    logger.info(
        f"Service ready: repository={config.repository.backend}, "
        f"image_service={config.image_service.backend}"
    )
    return service

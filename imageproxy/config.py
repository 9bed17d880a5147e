"""
Configuration for the imageproxy transform core.

Settings are plain Pydantic models with documented defaults. get_settings()
builds them once from IMAGEPROXY_* environment variables; call sites that need
different values construct their own Settings instead of touching globals.
"""

import logging
import os
from functools import lru_cache
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from imageproxy.core.enums import MetadataBackend, SmartCropMethod
from imageproxy.core.metadata import DEFAULT_EXIFTOOL_ARGS

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class TransformSettings(BaseModel):
    """Numeric policy of the transform pipeline."""

    default_quality: int = Field(95, ge=1, le=100, description="JPEG quality when none requested")
    max_exif_size: int = Field(1 << 20, gt=0, description="Largest EXIF block scanned, in bytes")
    smart_crop_method: SmartCropMethod = SmartCropMethod.CENTRE


class MetadataSettings(BaseModel):
    """Orientation tag rewriting."""

    backend: MetadataBackend = MetadataBackend.EXIFTOOL
    tool_path: str = "exiftool"
    tool_args: List[str] = Field(default_factory=lambda: list(DEFAULT_EXIFTOOL_ARGS))
    timeout_seconds: Optional[float] = Field(None, gt=0, description="None blocks until exit")


class SystemSettings(BaseModel):
    """Logging and debug flags."""

    log_level: str = "INFO"
    debug: bool = False

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}")
        return level


class Settings(BaseModel):
    """Top level settings."""

    environment: str = "development"
    transform: TransformSettings = Field(default_factory=TransformSettings)
    metadata: MetadataSettings = Field(default_factory=MetadataSettings)
    system: SystemSettings = Field(default_factory=SystemSettings)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from IMAGEPROXY_* variables.

        Args:
            environ: Mapping to read instead of os.environ

        Returns:
            Validated settings; unset variables keep their defaults
        """
        env = os.environ if environ is None else environ

        def pick(name: str) -> Optional[str]:
            value = env.get(f"IMAGEPROXY_{name}")
            return value if value not in (None, "") else None

        transform: Dict[str, Any] = {}
        metadata: Dict[str, Any] = {}
        system: Dict[str, Any] = {}
        data: Dict[str, Any] = {}

        if pick("ENV"):
            data["environment"] = pick("ENV")
        if pick("LOG_LEVEL"):
            system["log_level"] = pick("LOG_LEVEL")
        if pick("DEBUG"):
            system["debug"] = pick("DEBUG").lower() in ("1", "true", "yes", "on")
        if pick("DEFAULT_QUALITY"):
            transform["default_quality"] = pick("DEFAULT_QUALITY")
        if pick("MAX_EXIF_SIZE"):
            transform["max_exif_size"] = pick("MAX_EXIF_SIZE")
        if pick("SMART_CROP"):
            transform["smart_crop_method"] = pick("SMART_CROP").lower()
        if pick("METADATA_BACKEND"):
            metadata["backend"] = pick("METADATA_BACKEND").lower()
        if pick("EXIFTOOL"):
            metadata["tool_path"] = pick("EXIFTOOL")
        if pick("METADATA_TIMEOUT"):
            metadata["timeout_seconds"] = pick("METADATA_TIMEOUT")

        return cls(
            **data,
            transform=TransformSettings(**transform),
            metadata=MetadataSettings(**metadata),
            system=SystemSettings(**system),
        )


@lru_cache
def get_settings() -> Settings:
    """Settings from the environment, read once per process."""
    return Settings.from_env()


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure root logging from SystemSettings."""
    settings = settings or get_settings()
    logging.basicConfig(level=getattr(logging, settings.system.log_level), format=LOG_FORMAT)
    if settings.system.debug:
        logging.getLogger("imageproxy").setLevel(logging.DEBUG)
    # Pillow logs every plugin it probes at debug level
    logging.getLogger("PIL").setLevel(logging.WARNING)

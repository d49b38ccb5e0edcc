"""Logging configuration schema."""
from pydantic import BaseModel, Field, ValidationError, field_validator

from stdsched.config.constants import PROP_LOGGING_PREFIX
from stdsched.config.properties import SchedulerProperties
from stdsched.domain.core.exceptions import SchedulerConfigException

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_DESTINATIONS = ("stdout", "file", "both")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field("INFO", description="Root log level")
    destination: str = Field("stdout", description="Log destination: stdout, file or both")
    file_path: str = Field("logs/stdsched.log", description="Log file path")
    max_size_mb: int = Field(10, gt=0, description="Maximum log file size before rotation")
    backup_count: int = Field(5, ge=0, description="Number of rotated files to keep")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        level = v.upper()
        if level not in _LEVELS:
            raise ValueError(f"Log level must be one of {', '.join(_LEVELS)}")
        return level

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        """Validate log destination."""
        destination = v.lower()
        if destination not in _DESTINATIONS:
            raise ValueError(f"Log destination must be one of {', '.join(_DESTINATIONS)}")
        return destination

    @classmethod
    def from_properties(cls, properties: SchedulerProperties) -> "LoggingConfig":
        """Build from stdsched.logging.* properties (camelCase keys, e.g. maxSizeMb)."""
        group = properties.get_property_group(PROP_LOGGING_PREFIX)
        key_mapping = {
            "level": "level",
            "destination": "destination",
            "filePath": "file_path",
            "maxSizeMb": "max_size_mb",
            "backupCount": "backup_count",
        }
        data = {
            field_name: group[key].strip()
            for key, field_name in key_mapping.items()
            if group.get(key, "").strip()
        }
        try:
            return cls(**data)
        except ValidationError as e:
            raise SchedulerConfigException(f"Invalid logging configuration: {e}", e) from e

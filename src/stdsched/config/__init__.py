"""Configuration package with clean public API."""

from .properties import SchedulerProperties
from .environment import EnvironmentSource, read_system_overrides
from .resources import ResourceLocator
from .loader import ConfigurationLoader, ConfigurationFormatError
from .resolver import (
    ConfigurationResolver,
    InitializationState,
    InitializationStatus,
)
from .schemas import LoggingConfig, SchedulerSettings

__all__ = [
    # Configuration set
    'SchedulerProperties',

    # Sources
    'EnvironmentSource',
    'read_system_overrides',
    'ResourceLocator',
    'ConfigurationLoader',
    'ConfigurationFormatError',

    # Resolution
    'ConfigurationResolver',
    'InitializationState',
    'InitializationStatus',

    # Typed settings
    'LoggingConfig',
    'SchedulerSettings',
]

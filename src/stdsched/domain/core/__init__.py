"""Core domain types shared by every layer."""

from .exceptions import (
    SchedulerException,
    SchedulerConfigException,
    ConfigurationNotFoundError,
    BundledDefaultMissingError,
    ConfigurationUnreadableError,
    ConfigurationEnvironmentError,
    DuplicateSchedulerNameError,
)

__all__ = [
    'SchedulerException',
    'SchedulerConfigException',
    'ConfigurationNotFoundError',
    'BundledDefaultMissingError',
    'ConfigurationUnreadableError',
    'ConfigurationEnvironmentError',
    'DuplicateSchedulerNameError',
]

"""Typed configuration schemas built from resolved properties."""

from .logging_schema import LoggingConfig
from .scheduler_schema import SchedulerSettings

__all__ = [
    'LoggingConfig',
    'SchedulerSettings',
]

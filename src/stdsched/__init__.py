"""Standard Scheduler Factory - Root Package.

Bootstraps named, process-wide scheduler handles from layered
configuration sources and keeps at most one live instance per name.

Key Components:
    - config: Configuration sources, resolution cascade and typed settings
    - domain: Error taxonomy and ports
    - infrastructure: Logging, scheduler repository and default runtime
    - application: The scheduler factory
    - cli: Command line interface

Usage:
    >>> from stdsched import StdSchedulerFactory
    >>> scheduler = StdSchedulerFactory().get_scheduler()
"""

__version__ = "0.1.0"

from .domain.core.exceptions import (
    SchedulerException,
    SchedulerConfigException,
    ConfigurationNotFoundError,
    BundledDefaultMissingError,
    ConfigurationUnreadableError,
    ConfigurationEnvironmentError,
    DuplicateSchedulerNameError,
)
from .config import ConfigurationResolver, SchedulerProperties
from .infrastructure.registry.scheduler_repository import SchedulerRepository
from .application.scheduler_factory import StdSchedulerFactory, LockingStdSchedulerFactory

__all__ = [
    '__version__',
    'SchedulerException',
    'SchedulerConfigException',
    'ConfigurationNotFoundError',
    'BundledDefaultMissingError',
    'ConfigurationUnreadableError',
    'ConfigurationEnvironmentError',
    'DuplicateSchedulerNameError',
    'ConfigurationResolver',
    'SchedulerProperties',
    'SchedulerRepository',
    'StdSchedulerFactory',
    'LockingStdSchedulerFactory',
]

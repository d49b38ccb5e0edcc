"""Domain ports - interfaces the application layer depends on."""

from .scheduler_port import SchedulerPort, SchedulerRuntimePort, SchedulerFactoryPort

__all__ = [
    'SchedulerPort',
    'SchedulerRuntimePort',
    'SchedulerFactoryPort',
]

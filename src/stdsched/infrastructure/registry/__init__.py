"""Registry package for process-wide scheduler lookups."""

from .scheduler_repository import SchedulerRepository, get_scheduler_repository

__all__ = ['SchedulerRepository', 'get_scheduler_repository']

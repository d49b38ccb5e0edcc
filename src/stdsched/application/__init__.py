"""Application layer: the scheduler factory."""

from .scheduler_factory import StdSchedulerFactory, LockingStdSchedulerFactory

__all__ = ['StdSchedulerFactory', 'LockingStdSchedulerFactory']

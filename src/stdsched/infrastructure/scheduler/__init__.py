from .local_scheduler import LocalScheduler, LocalSchedulerRuntime, generate_instance_id

__all__ = ['LocalScheduler', 'LocalSchedulerRuntime', 'generate_instance_id']

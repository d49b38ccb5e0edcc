"""Scheduler Repository - process-wide registry of live scheduler handles.

Holds references to scheduler instances, ensuring name uniqueness and
allowing process-wide lookups.
"""

from typing import Dict, Optional, Tuple
import threading

from stdsched.domain.base.ports.scheduler_port import SchedulerPort
from stdsched.domain.core.exceptions import DuplicateSchedulerNameError
from stdsched.infrastructure.logging.logger import get_logger


class SchedulerRepository:
    """
    Registry mapping scheduler names to scheduler handles.

    All operations are serialized on one lock, so concurrent callers observe
    a linearizable sequence of registry states.

    Thread-safe singleton access through get_instance(); the constructor is
    public so that callers and tests can build isolated repositories.
    """

    _instance: Optional['SchedulerRepository'] = None
    _lock = threading.RLock()

    def __init__(self):
        """Initialize scheduler repository."""
        self._schedulers: Dict[str, SchedulerPort] = {}
        self._logger = get_logger(__name__)
        self._registry_lock = threading.RLock()

    @classmethod
    def get_instance(cls) -> 'SchedulerRepository':
        """Get singleton instance of scheduler repository."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    def bind(self, scheduler: SchedulerPort) -> None:
        """
        Register a scheduler under its name.

        Args:
            scheduler: Scheduler handle to register

        Raises:
            DuplicateSchedulerNameError: If a scheduler is already bound under that name
        """
        name = scheduler.name
        with self._registry_lock:
            if name in self._schedulers:
                self._logger.warning("Rejected duplicate scheduler binding", scheduler_name=name)
                raise DuplicateSchedulerNameError(name)
            self._schedulers[name] = scheduler
        self._logger.info(f"Bound scheduler: {name}")

    def remove(self, name: str) -> bool:
        """
        Remove the scheduler bound under a name.

        Returns:
            True if an entry was removed, False if none existed
        """
        with self._registry_lock:
            removed = self._schedulers.pop(name, None) is not None
        if removed:
            self._logger.info(f"Removed scheduler: {name}")
        return removed

    def lookup(self, name: str) -> Optional[SchedulerPort]:
        """Get the scheduler bound under a name, or None."""
        with self._registry_lock:
            return self._schedulers.get(name)

    def lookup_all(self) -> Tuple[SchedulerPort, ...]:
        """Get an immutable snapshot of every bound scheduler."""
        with self._registry_lock:
            return tuple(self._schedulers.values())

    def clear(self) -> None:
        """Remove every entry."""
        with self._registry_lock:
            self._schedulers.clear()
        self._logger.debug("Cleared scheduler repository")

    def __contains__(self, name: object) -> bool:
        with self._registry_lock:
            return name in self._schedulers

    def __len__(self) -> int:
        with self._registry_lock:
            return len(self._schedulers)


def get_scheduler_repository() -> SchedulerRepository:
    """Get the singleton scheduler repository instance."""
    return SchedulerRepository.get_instance()

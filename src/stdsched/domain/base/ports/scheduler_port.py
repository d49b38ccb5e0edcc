"""Domain ports for scheduler handles and the runtime that builds them."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List

if TYPE_CHECKING:
    from stdsched.config.properties import SchedulerProperties
    from stdsched.infrastructure.registry.scheduler_repository import SchedulerRepository


class SchedulerPort(ABC):
    """Client-usable handle to a scheduler instance."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Logical scheduler name, unique within the process."""
        pass

    @property
    @abstractmethod
    def instance_id(self) -> str:
        """Instance identifier of this scheduler."""
        pass

    @property
    @abstractmethod
    def context(self) -> Dict[str, Any]:
        """Scheduler context entries."""
        pass

    @abstractmethod
    def start(self) -> None:
        pass

    @abstractmethod
    def standby(self) -> None:
        pass

    @abstractmethod
    def shutdown(self, wait_for_jobs_to_complete: bool = False) -> None:
        pass

    @abstractmethod
    def is_started(self) -> bool:
        pass

    @abstractmethod
    def is_in_standby_mode(self) -> bool:
        pass

    @abstractmethod
    def is_shutdown(self) -> bool:
        """Whether this scheduler has been shut down and can no longer be used."""
        pass


class SchedulerRuntimePort(ABC):
    """Port for the runtime that constructs scheduler handles.

    Implementations are responsible for binding the new handle into the
    repository as part of their own startup sequence.
    """

    @abstractmethod
    def instantiate(self, properties: 'SchedulerProperties',
                    repository: 'SchedulerRepository') -> SchedulerPort:
        """Build, bind and return a new scheduler from resolved properties."""
        pass


class SchedulerFactoryPort(ABC):
    """Mechanism for obtaining client-usable scheduler handles."""

    @abstractmethod
    def get_scheduler(self) -> SchedulerPort:
        """Return a usable handle to the scheduler described by this factory's configuration."""
        pass

    @abstractmethod
    def get_all_schedulers(self) -> List[SchedulerPort]:
        pass

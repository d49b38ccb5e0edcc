"""In-process scheduler handle and the runtime that builds it from properties."""
import socket
import threading
import time
from typing import Any, Dict, Optional

from stdsched.config.constants import AUTO_GENERATE_INSTANCE_ID
from stdsched.config.properties import SchedulerProperties
from stdsched.config.schemas.scheduler_schema import SchedulerSettings
from stdsched.domain.base.ports.scheduler_port import SchedulerPort, SchedulerRuntimePort
from stdsched.domain.core.exceptions import SchedulerException
from stdsched.infrastructure.logging.logger import get_logger
from stdsched.infrastructure.registry.scheduler_repository import SchedulerRepository

logger = get_logger(__name__)


class LocalScheduler(SchedulerPort):
    """
    Lifecycle handle for a scheduler living in this process.

    Tracks started / standby / shutdown state only; it does not fire jobs.
    """

    def __init__(self, settings: SchedulerSettings, instance_id: str,
                 properties: Optional[SchedulerProperties] = None):
        self._settings = settings
        self._instance_id = instance_id
        self._properties = properties if properties is not None else SchedulerProperties()
        self._context: Dict[str, Any] = dict(settings.context)
        self._state_lock = threading.Lock()
        self._started = False
        self._standby = True
        self._shutdown = False

    def __repr__(self) -> str:
        return (f"LocalScheduler(name={self.name!r}, instance_id={self._instance_id!r}, "
                f"shutdown={self._shutdown})")

    @property
    def name(self) -> str:
        return self._settings.instance_name

    @property
    def instance_id(self) -> str:
        return self._instance_id

    @property
    def thread_name(self) -> str:
        return self._settings.thread_name

    @property
    def settings(self) -> SchedulerSettings:
        return self._settings

    @property
    def properties(self) -> SchedulerProperties:
        return self._properties

    @property
    def context(self) -> Dict[str, Any]:
        return self._context

    def start(self) -> None:
        with self._state_lock:
            if self._shutdown:
                raise SchedulerException("The Scheduler cannot be restarted after shutdown() has been called.")
            self._started = True
            self._standby = False
        logger.info("Scheduler started", scheduler_name=self.name, instance_id=self._instance_id)

    def standby(self) -> None:
        with self._state_lock:
            self._standby = True
        logger.info("Scheduler paused", scheduler_name=self.name)

    def shutdown(self, wait_for_jobs_to_complete: bool = False) -> None:
        with self._state_lock:
            if self._shutdown:
                return
            self._shutdown = True
            self._standby = True
        logger.info(
            "Scheduler shut down",
            scheduler_name=self.name,
            wait_for_jobs_to_complete=wait_for_jobs_to_complete
        )

    def is_started(self) -> bool:
        return self._started

    def is_in_standby_mode(self) -> bool:
        return self._standby

    def is_shutdown(self) -> bool:
        return self._shutdown


def generate_instance_id() -> str:
    """Host name followed by the current time in milliseconds."""
    try:
        host = socket.gethostname()
    except OSError as e:
        raise SchedulerException("Couldn't get host name!", e) from e
    return f"{host}{int(time.time() * 1000)}"


class LocalSchedulerRuntime(SchedulerRuntimePort):
    """Builds LocalScheduler handles and binds them into the repository."""

    def instantiate(self, properties: SchedulerProperties,
                    repository: SchedulerRepository) -> LocalScheduler:
        settings = SchedulerSettings.from_properties(properties)

        instance_id = settings.instance_id
        if instance_id == AUTO_GENERATE_INSTANCE_ID:
            instance_id = generate_instance_id()

        scheduler = LocalScheduler(settings, instance_id, properties)
        repository.bind(scheduler)
        logger.info(
            "Scheduler instantiated",
            scheduler_name=scheduler.name,
            instance_id=instance_id,
            thread_name=scheduler.thread_name
        )
        return scheduler

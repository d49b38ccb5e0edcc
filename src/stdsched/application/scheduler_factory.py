"""
Standard scheduler factory.

Resolves configuration, derives the scheduler name from it and returns the
live scheduler registered under that name, constructing a new one through
the runtime only when none is usable.
"""
import os
import threading
from typing import IO, Any, List, Mapping, Optional, Union

from stdsched.config.constants import DEFAULT_INSTANCE_NAME, PROP_SCHED_INSTANCE_NAME
from stdsched.config.properties import SchedulerProperties
from stdsched.config.resolver import ConfigurationResolver, ConfigurationSource
from stdsched.domain.base.ports.scheduler_port import (
    SchedulerFactoryPort,
    SchedulerPort,
    SchedulerRuntimePort,
)
from stdsched.domain.core.exceptions import SchedulerConfigException
from stdsched.infrastructure.logging.logger import get_logger
from stdsched.infrastructure.registry.scheduler_repository import SchedulerRepository
from stdsched.infrastructure.scheduler.local_scheduler import LocalSchedulerRuntime

logger = get_logger(__name__)


class StdSchedulerFactory(SchedulerFactoryPort):
    """
    Scheduler factory driven by a layered properties configuration.

    By default a stdsched.properties file is loaded from the working
    directory; failing that, the stdsched.properties resource bundled with
    the package is used. Set STDSCHED_PROPERTIES_FILE to point at a
    different file or resource, or call one of the initialize methods
    before get_scheduler().

    Environment variables override any property loaded from a file or
    resource.

    The reuse/replace decision in get_scheduler() is not atomic across
    factory instances: two threads may both decide to construct, in which
    case the second construction fails with DuplicateSchedulerNameError when
    binding. Use LockingStdSchedulerFactory to serialize the decision.
    """

    def __init__(self,
                 properties: Optional[Mapping[str, Any]] = None,
                 config_file: Optional[Union[str, 'os.PathLike[str]']] = None,
                 *,
                 runtime: Optional[SchedulerRuntimePort] = None,
                 repository: Optional[SchedulerRepository] = None,
                 resolver: Optional[ConfigurationResolver] = None):
        """
        Initialize the factory.

        Args:
            properties: Initialize immediately from this mapping
            config_file: Initialize immediately from this resource or file name
            runtime: Runtime that constructs and binds new schedulers
            repository: Scheduler repository, the process-wide one by default
            resolver: Configuration resolver holding this factory's state
        """
        if properties is not None and config_file is not None:
            raise SchedulerConfigException("Pass either properties or config_file, not both.")

        self._runtime = runtime if runtime is not None else LocalSchedulerRuntime()
        self._repository = repository if repository is not None else SchedulerRepository.get_instance()
        self._resolver = resolver if resolver is not None else ConfigurationResolver()

        if properties is not None:
            self.initialize_from_properties(properties)
        elif config_file is not None:
            self.initialize_from_name(config_file)

    # Initialization

    def initialize(self, source: ConfigurationSource = None) -> SchedulerProperties:
        """Initialize from any supported source; None runs the default cascade."""
        return self._resolver.resolve(source)

    def initialize_from_name(self, name: Union[str, 'os.PathLike[str]']) -> SchedulerProperties:
        return self._resolver.initialize_from_name(name)

    def initialize_from_stream(self, stream: Optional[IO[Any]]) -> SchedulerProperties:
        return self._resolver.initialize_from_stream(stream)

    def initialize_from_properties(self, properties: Mapping[str, Any]) -> SchedulerProperties:
        return self._resolver.initialize_from_properties(properties)

    # Accessors

    @property
    def repository(self) -> SchedulerRepository:
        return self._repository

    @property
    def resolver(self) -> ConfigurationResolver:
        return self._resolver

    @property
    def is_initialized(self) -> bool:
        return self._resolver.is_initialized

    @property
    def properties(self) -> Optional[SchedulerProperties]:
        return self._resolver.properties

    @property
    def property_source(self) -> Optional[str]:
        return self._resolver.property_source

    @property
    def scheduler_name(self) -> str:
        """Scheduler name derived from the resolved configuration."""
        properties = self._ensure_initialized()
        return properties.get_str(PROP_SCHED_INSTANCE_NAME, DEFAULT_INSTANCE_NAME)

    # Scheduler access

    def get_scheduler(self) -> SchedulerPort:
        """
        Return a handle to the scheduler produced by this factory.

        Resolves configuration with the default cascade if no initialize
        method was called. A live scheduler already bound under the
        configured name is returned as is; a shut down one is removed from
        the repository and replaced.

        Raises:
            SchedulerConfigException: If configuration cannot be resolved
            DuplicateSchedulerNameError: If a concurrent construction bound the name first
        """
        properties = self._ensure_initialized()
        name = properties.get_str(PROP_SCHED_INSTANCE_NAME, DEFAULT_INSTANCE_NAME)

        scheduler = self._repository.lookup(name)
        if scheduler is not None:
            if not scheduler.is_shutdown():
                logger.debug("Reusing live scheduler", scheduler_name=name)
                return scheduler
            logger.info("Replacing shut down scheduler", scheduler_name=name)
            self._repository.remove(name)

        return self._instantiate(properties)

    def get_scheduler_by_name(self, name: str) -> Optional[SchedulerPort]:
        """Return the scheduler bound under the given name, if any."""
        return self._repository.lookup(name)

    def get_all_schedulers(self) -> List[SchedulerPort]:
        """Return every scheduler currently bound in the repository."""
        return list(self._repository.lookup_all())

    def _ensure_initialized(self) -> SchedulerProperties:
        if not self._resolver.is_initialized:
            return self._resolver.initialize()
        return self._resolver.properties

    def _instantiate(self, properties: SchedulerProperties) -> SchedulerPort:
        logger.debug("Constructing scheduler", source=self.property_source)
        return self._runtime.instantiate(properties, self._repository)


class LockingStdSchedulerFactory(StdSchedulerFactory):
    """
    StdSchedulerFactory whose lookup/remove/construct sequence runs under one
    process-wide lock, so concurrent callers never construct twice.
    """

    _decision_lock = threading.RLock()

    def get_scheduler(self) -> SchedulerPort:
        with LockingStdSchedulerFactory._decision_lock:
            return super().get_scheduler()

"""
Configuration resolution for the scheduler factory.

Decides which configuration source supplies the base layer, overlays the
process environment on top of it and records the outcome. Resolution happens
at most once per resolver: a resolved configuration is returned unchanged on
every later call and a failure is re-raised as the identical exception,
without touching the source again.
"""
import os
import threading
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import IO, Any, Callable, Dict, Mapping, Optional, Sequence, Tuple, Union

from stdsched.config.constants import (
    DEFAULT_PROPERTIES_FILE,
    DEFAULT_RESOURCE_CANDIDATES,
    PROPERTIES_FILE,
    SOURCE_DEFAULT_RESOURCE,
    SOURCE_NAMED_FILE,
    SOURCE_NAMED_RESOURCE,
    SOURCE_PROPERTIES,
    SOURCE_SPECIFIED_FILE,
    SOURCE_SPECIFIED_RESOURCE,
    SOURCE_STREAM,
    SOURCE_WORKING_DIR_FILE,
)
from stdsched.config.environment import EnvironmentSource, read_system_overrides
from stdsched.config.loader import ConfigurationLoader
from stdsched.config.properties import SchedulerProperties
from stdsched.config.resources import ResourceLocator
from stdsched.domain.core.exceptions import (
    BundledDefaultMissingError,
    ConfigurationEnvironmentError,
    ConfigurationNotFoundError,
    ConfigurationUnreadableError,
    SchedulerConfigException,
    SchedulerException,
)
from stdsched.infrastructure.logging.logger import get_logger

logger = get_logger(__name__)

ConfigurationSource = Union[None, str, 'os.PathLike[str]', Mapping[str, Any], IO[Any]]


class InitializationStatus(str, Enum):
    """Lifecycle of a resolver's configuration."""
    UNINITIALIZED = "uninitialized"
    RESOLVED = "resolved"
    FAILED = "failed"


@dataclass(frozen=True)
class InitializationState:
    """Tagged state: uninitialized, resolved(properties, source) or failed(error)."""
    status: InitializationStatus
    properties: Optional[SchedulerProperties] = None
    source: Optional[str] = None
    error: Optional[SchedulerException] = None

    @classmethod
    def uninitialized(cls) -> 'InitializationState':
        return cls(InitializationStatus.UNINITIALIZED)

    @classmethod
    def resolved(cls, properties: SchedulerProperties, source: str) -> 'InitializationState':
        return cls(InitializationStatus.RESOLVED, properties=properties, source=source)

    @classmethod
    def failed(cls, error: SchedulerException, source: Optional[str] = None) -> 'InitializationState':
        return cls(InitializationStatus.FAILED, source=source, error=error)

    @property
    def is_terminal(self) -> bool:
        return self.status is not InitializationStatus.UNINITIALIZED


class ConfigurationResolver:
    """
    Resolves the scheduler configuration set from layered sources.

    Source precedence for initialize():
    1. The file or resource named by the STDSCHED_PROPERTIES_FILE variable
    2. stdsched.properties in the working directory
    3. The bundled default resource, tried under three lookup names

    The environment is then overlaid on the chosen layer, environment
    values winning every collision.

    State transitions are serialized by a per-resolver lock, so concurrent
    first calls perform I/O only once.
    """

    def __init__(self,
                 resource_locator: Optional[ResourceLocator] = None,
                 environment: Optional[EnvironmentSource] = None,
                 working_dir: Optional[Union[str, 'os.PathLike[str]']] = None,
                 properties_file_var: str = PROPERTIES_FILE,
                 default_file_name: str = DEFAULT_PROPERTIES_FILE,
                 resource_candidates: Sequence[str] = DEFAULT_RESOURCE_CANDIDATES):
        self._resource_locator = resource_locator
        self._environment = environment if environment is not None else EnvironmentSource()
        self._working_dir = Path(working_dir) if working_dir is not None else None
        self._properties_file_var = properties_file_var
        self._default_file_name = default_file_name
        self._resource_candidates = tuple(resource_candidates)
        self._lock = threading.RLock()
        self._state = InitializationState.uninitialized()

    @property
    def state(self) -> InitializationState:
        return self._state

    @property
    def is_initialized(self) -> bool:
        return self._state.status is InitializationStatus.RESOLVED

    @property
    def properties(self) -> Optional[SchedulerProperties]:
        """The resolved configuration set, or None before successful resolution."""
        return self._state.properties

    @property
    def property_source(self) -> Optional[str]:
        """Human readable description of where the base layer came from."""
        return self._state.source

    @property
    def resource_locator(self) -> ResourceLocator:
        if self._resource_locator is None:
            self._resource_locator = ResourceLocator.default()
        return self._resource_locator

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def resolve(self, source: ConfigurationSource = None) -> SchedulerProperties:
        """Resolve from whatever kind of source is given; None runs the default cascade."""
        if source is None:
            return self.initialize()
        if isinstance(source, (str, os.PathLike)):
            return self.initialize_from_name(source)
        if isinstance(source, Mapping):
            return self.initialize_from_properties(source)
        if hasattr(source, 'read'):
            return self.initialize_from_stream(source)
        raise SchedulerConfigException(
            f"Unsupported configuration source type: {type(source).__name__}"
        )

    def initialize(self) -> SchedulerProperties:
        """Resolve using the default source cascade plus the environment overlay."""
        return self._transition(self._load_default, apply_overrides=True)

    def initialize_from_name(self, name: Union[str, 'os.PathLike[str]']) -> SchedulerProperties:
        """Resolve from a named package resource, falling back to a filesystem path."""
        name = os.fspath(name)
        return self._transition(lambda: self._load_named(name), apply_overrides=True)

    def initialize_from_stream(self, stream: Optional[IO[Any]]) -> SchedulerProperties:
        """Resolve from an already opened stream. The stream is consumed and closed."""
        return self._transition(lambda: self._load_stream(stream), apply_overrides=True)

    def initialize_from_properties(self, properties: Optional[Mapping[str, Any]]) -> SchedulerProperties:
        """Resolve from a caller-assembled mapping. No I/O and no environment overlay."""
        return self._transition(lambda: self._load_mapping(properties), apply_overrides=False)

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    def _transition(self, load: Callable[[], Tuple[Mapping[str, Any], str]],
                    apply_overrides: bool) -> SchedulerProperties:
        with self._lock:
            state = self._state
            if state.status is InitializationStatus.RESOLVED:
                return state.properties
            if state.status is InitializationStatus.FAILED:
                raise state.error

            try:
                base, source = load()
            except SchedulerException as e:
                self._state = InitializationState.failed(e)
                logger.error("Scheduler configuration could not be resolved", error=str(e))
                raise
            except Exception as e:
                error = SchedulerConfigException(f"Error loading scheduler configuration: {e}", e)
                self._state = InitializationState.failed(error)
                logger.error("Scheduler configuration could not be resolved", error=str(error))
                raise error from e

            properties = SchedulerProperties(base)
            if apply_overrides:
                overrides = read_system_overrides(self._environment)
                if overrides is not None:
                    properties = properties.with_overrides(overrides)

            self._state = InitializationState.resolved(properties, source)
            logger.info(
                "Scheduler configuration resolved",
                source=source,
                property_count=len(properties)
            )
            return properties

    # ------------------------------------------------------------------
    # Source loaders
    # ------------------------------------------------------------------

    def _load_default(self) -> Tuple[Dict[str, str], str]:
        requested_file = self._environment.get(self._properties_file_var)
        file_name = requested_file if requested_file else self._default_file_name
        path = self._resolve_path(file_name)

        if path.exists():
            if requested_file:
                source = SOURCE_SPECIFIED_FILE.format(name=requested_file)
            else:
                source = SOURCE_WORKING_DIR_FILE
            return self._read_file(path, file_name), source

        if requested_file:
            properties = None
            if self.resource_locator.has_context():
                properties = self._read_resource(requested_file)
            if properties is None:
                raise ConfigurationNotFoundError(requested_file)
            return properties, SOURCE_SPECIFIED_RESOURCE.format(name=requested_file)

        return self._load_bundled_default(), SOURCE_DEFAULT_RESOURCE

    def _load_bundled_default(self) -> Dict[str, str]:
        locator = self.resource_locator
        if not locator.has_context():
            raise ConfigurationEnvironmentError(
                "Unable to find a resource lookup context for the bundled default configuration."
            )
        for candidate in self._resource_candidates:
            properties = self._read_resource(
                candidate,
                f"Resource properties file: '{candidate}' could not be read from the class path."
            )
            if properties is not None:
                logger.debug("Using bundled default configuration", resource=candidate)
                return properties
        raise BundledDefaultMissingError(self._default_file_name)

    def _load_named(self, name: str) -> Tuple[Dict[str, str], str]:
        if self.resource_locator.has_context():
            properties = self._read_resource(name)
            if properties is not None:
                return properties, SOURCE_NAMED_RESOURCE.format(name=name)

        path = self._resolve_path(name)
        if not path.exists():
            raise ConfigurationNotFoundError(name)
        return self._read_file(path, name), SOURCE_NAMED_FILE.format(name=name)

    def _load_stream(self, stream: Optional[IO[Any]]) -> Tuple[Dict[str, str], str]:
        if stream is None:
            raise ConfigurationUnreadableError(
                "InputStream",
                "Error loading property data from InputStream - InputStream is null."
            )
        properties = self._read_stream(
            stream, "InputStream", "Error loading property data from InputStream"
        )
        return properties, SOURCE_STREAM

    def _load_mapping(self, properties: Optional[Mapping[str, Any]]) -> Tuple[Mapping[str, Any], str]:
        if properties is None:
            raise SchedulerConfigException("Properties mapping must not be None.")
        return properties, SOURCE_PROPERTIES

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _resolve_path(self, name: str) -> Path:
        path = Path(name)
        if not path.is_absolute():
            path = (self._working_dir or Path.cwd()) / path
        return path

    def _read_file(self, path: Path, name: str) -> Dict[str, str]:
        try:
            return ConfigurationLoader.load_file(path)
        except Exception as e:
            raise ConfigurationUnreadableError(name, cause=e) from e

    def _read_resource(self, name: str, message: Optional[str] = None) -> Optional[Dict[str, str]]:
        """Load a resource by name, or return None when no such resource exists."""
        try:
            stream = self.resource_locator.open(name)
        except OSError as e:
            raise ConfigurationUnreadableError(name, message, cause=e) from e
        if stream is None:
            return None
        return self._read_stream(stream, name, message)

    @staticmethod
    def _read_stream(stream: IO[Any], name: str, message: Optional[str] = None) -> Dict[str, str]:
        try:
            return ConfigurationLoader.load_stream(stream)
        except Exception as e:
            raise ConfigurationUnreadableError(name, message, cause=e) from e
        finally:
            close = getattr(stream, "close", None)
            if close is not None:
                close()

"""Access to the ambient process environment used as the override layer."""
import os
from typing import Dict, Mapping, Optional

from stdsched.infrastructure.logging.logger import get_logger

logger = get_logger(__name__)


class EnvironmentSource:
    """
    Capability for reading the process-wide key/value environment.

    snapshot() may raise PermissionError when the host forbids enumerating
    the environment; callers treat that as "no override layer".
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self._environ = environ

    @property
    def _mapping(self) -> Mapping[str, str]:
        return os.environ if self._environ is None else self._environ

    def get(self, name: str) -> Optional[str]:
        """Return a single variable, or None when unset."""
        return self._mapping.get(name)

    def snapshot(self) -> Dict[str, str]:
        """Return a copy of the whole environment."""
        return dict(self._mapping)


def read_system_overrides(environment: EnvironmentSource) -> Optional[Dict[str, str]]:
    """
    Read the override layer from the environment.

    Returns:
        The environment snapshot, or None when access is denied
    """
    try:
        return environment.snapshot()
    except PermissionError as e:
        logger.warning(
            "Skipping overriding properties with environment values during "
            "initialization because access to the environment was denied. "
            "Grant read access to the environment or initialize the factory "
            "from an explicit properties mapping.",
            error=str(e)
        )
        return None

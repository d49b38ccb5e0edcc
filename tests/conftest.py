import logging
from pathlib import Path
from typing import Dict, Optional

import pytest

from stdsched.config.environment import EnvironmentSource
from stdsched.config.resolver import ConfigurationResolver
from stdsched.config.resources import ResourceLocator
from stdsched.infrastructure.registry.scheduler_repository import SchedulerRepository


class DeniedEnvironment(EnvironmentSource):
    """Environment whose full listing is forbidden, as under a restrictive host policy."""

    def snapshot(self) -> Dict[str, str]:
        raise PermissionError("environment access denied")


def write_properties(path: Path, entries: Dict[str, str]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("".join(f"{key}={value}\n" for key, value in entries.items()), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def fresh_repository_singleton(monkeypatch):
    """Make sure no test sees schedulers bound by another test."""
    monkeypatch.setattr(SchedulerRepository, "_instance", None)


@pytest.fixture
def repository():
    return SchedulerRepository()


@pytest.fixture
def working_dir(tmp_path):
    path = tmp_path / "cwd"
    path.mkdir()
    return path


@pytest.fixture
def resource_dir(tmp_path):
    path = tmp_path / "resources"
    path.mkdir()
    return path


@pytest.fixture
def locator(resource_dir):
    return ResourceLocator([resource_dir])


@pytest.fixture
def make_resolver(working_dir, locator):
    """Build a resolver isolated from the real environment and filesystem."""

    def _make(environ: Optional[Dict[str, str]] = None,
              environment: Optional[EnvironmentSource] = None,
              resource_locator: Optional[ResourceLocator] = None) -> ConfigurationResolver:
        return ConfigurationResolver(
            resource_locator=resource_locator if resource_locator is not None else locator,
            environment=environment if environment is not None else EnvironmentSource(environ or {}),
            working_dir=working_dir,
        )

    return _make


@pytest.fixture
def restore_root_logger():
    """Undo handler and level changes made by setup_logging()."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)

# src/stdsched/domain/core/exceptions.py
from typing import Optional


class SchedulerException(Exception):
    """Base exception for all scheduler factory errors.

    May carry a reference to the underlying exception that caused it.
    """
    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    @property
    def underlying_exception(self) -> Optional[BaseException]:
        """Return the underlying cause of this exception, if any."""
        return self.cause

    def __str__(self) -> str:
        if self.cause is None or self.cause is self:
            return self.message
        return f"{self.message} [See nested exception: {self.cause!r}]"


class SchedulerConfigException(SchedulerException):
    """Raised when the factory or one of the components it configures is misconfigured."""
    pass


class ConfigurationNotFoundError(SchedulerConfigException):
    """Raised when a named configuration source does not exist."""
    def __init__(self, source: str, message: Optional[str] = None):
        super().__init__(message or f"Properties file: '{source}' could not be found.")
        self.source = source


class BundledDefaultMissingError(ConfigurationNotFoundError):
    """Raised when none of the bundled default resources can be located."""
    def __init__(self, source: str):
        super().__init__(source, f"Default {source} not found in class path")


class ConfigurationUnreadableError(SchedulerConfigException):
    """Raised when a configuration source exists but cannot be read or parsed."""
    def __init__(self, source: str, message: Optional[str] = None,
                 cause: Optional[BaseException] = None):
        super().__init__(message or f"Properties file: '{source}' could not be read.", cause)
        self.source = source


class ConfigurationEnvironmentError(SchedulerConfigException):
    """Raised when no resource lookup context is available."""
    pass


class DuplicateSchedulerNameError(SchedulerException):
    """Raised when a scheduler is bound under a name that is already taken."""
    def __init__(self, name: str):
        super().__init__(f"Scheduler with name '{name}' already exists.")
        self.name = name

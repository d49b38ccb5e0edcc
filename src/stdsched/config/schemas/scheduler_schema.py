"""Scheduler settings schema."""
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from stdsched.config.constants import (
    DEFAULT_INSTANCE_ID,
    DEFAULT_INSTANCE_NAME,
    PROP_SCHED_CONTEXT_PREFIX,
    PROP_SCHED_IDLE_WAIT_TIME,
    PROP_SCHED_INSTANCE_ID,
    PROP_SCHED_INSTANCE_NAME,
    PROP_SCHED_INTERRUPT_JOBS_ON_SHUTDOWN,
    PROP_SCHED_MAKE_SCHEDULER_THREAD_DAEMON,
    PROP_SCHED_THREAD_NAME,
)
from stdsched.config.properties import SchedulerProperties
from stdsched.domain.core.exceptions import SchedulerConfigException


class SchedulerSettings(BaseModel):
    """Typed view of the scheduler-level properties."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    instance_name: str = Field(DEFAULT_INSTANCE_NAME, min_length=1, description="Logical scheduler name")
    instance_id: str = Field(DEFAULT_INSTANCE_ID, min_length=1, description="Instance identifier or AUTO")
    thread_name: Optional[str] = Field(None, description="Name of the main scheduler thread")
    make_scheduler_thread_daemon: bool = Field(False, description="Run the scheduler thread as a daemon")
    interrupt_jobs_on_shutdown: bool = Field(False, description="Interrupt running jobs on shutdown")
    idle_wait_time: int = Field(-1, ge=-1, description="Idle wait time in milliseconds, -1 for runtime default")
    context: Dict[str, str] = Field(default_factory=dict, description="Scheduler context entries")

    @model_validator(mode="after")
    def default_thread_name(self) -> "SchedulerSettings":
        """Derive the thread name from the instance name when not configured."""
        if not self.thread_name:
            object.__setattr__(self, "thread_name", f"{self.instance_name}_SchedulerThread")
        return self

    @classmethod
    def from_properties(cls, properties: SchedulerProperties) -> "SchedulerSettings":
        """
        Build settings from a resolved configuration set.

        Raises:
            SchedulerConfigException: If a value has the wrong type
        """
        data: Dict[str, Any] = {
            "context": properties.get_property_group(PROP_SCHED_CONTEXT_PREFIX),
        }
        key_mapping = {
            "instance_name": PROP_SCHED_INSTANCE_NAME,
            "instance_id": PROP_SCHED_INSTANCE_ID,
            "thread_name": PROP_SCHED_THREAD_NAME,
            "make_scheduler_thread_daemon": PROP_SCHED_MAKE_SCHEDULER_THREAD_DAEMON,
            "interrupt_jobs_on_shutdown": PROP_SCHED_INTERRUPT_JOBS_ON_SHUTDOWN,
            "idle_wait_time": PROP_SCHED_IDLE_WAIT_TIME,
        }
        for field_name, key in key_mapping.items():
            value = properties.get_str(key)
            if value is not None:
                data[field_name] = value

        try:
            return cls(**data)
        except ValidationError as e:
            raise SchedulerConfigException(f"Invalid scheduler configuration: {e}", e) from e

"""Tests for typed settings built from resolved properties."""

import pytest
from pydantic import ValidationError

from stdsched.config.properties import SchedulerProperties
from stdsched.config.schemas import LoggingConfig, SchedulerSettings
from stdsched.domain.core.exceptions import SchedulerConfigException


class TestSchedulerSettings:
    """Test SchedulerSettings.from_properties."""

    def test_defaults(self):
        settings = SchedulerSettings.from_properties(SchedulerProperties())

        assert settings.instance_name == "StdScheduler"
        assert settings.instance_id == "NON_CLUSTERED"
        assert settings.thread_name == "StdScheduler_SchedulerThread"
        assert settings.make_scheduler_thread_daemon is False
        assert settings.idle_wait_time == -1
        assert settings.context == {}

    def test_values_from_properties(self):
        props = SchedulerProperties({
            "stdsched.scheduler.instanceName": "Reports",
            "stdsched.scheduler.instanceId": "AUTO",
            "stdsched.scheduler.threadName": "reports-main",
            "stdsched.scheduler.makeSchedulerThreadDaemon": "true",
            "stdsched.scheduler.interruptJobsOnShutdown": "yes",
            "stdsched.scheduler.idleWaitTime": "30000",
            "stdsched.context.key.region": "eu-west",
            "stdsched.context.key.owner": "ops",
        })

        settings = SchedulerSettings.from_properties(props)

        assert settings.instance_name == "Reports"
        assert settings.instance_id == "AUTO"
        assert settings.thread_name == "reports-main"
        assert settings.make_scheduler_thread_daemon is True
        assert settings.interrupt_jobs_on_shutdown is True
        assert settings.idle_wait_time == 30000
        assert settings.context == {"region": "eu-west", "owner": "ops"}

    def test_blank_name_uses_default(self):
        props = SchedulerProperties({"stdsched.scheduler.instanceName": "  "})
        assert SchedulerSettings.from_properties(props).instance_name == "StdScheduler"

    def test_invalid_value(self):
        props = SchedulerProperties({"stdsched.scheduler.idleWaitTime": "soon"})

        with pytest.raises(SchedulerConfigException, match="Invalid scheduler configuration") as exc_info:
            SchedulerSettings.from_properties(props)

        assert exc_info.value.underlying_exception is not None

    def test_idle_wait_time_bounds(self):
        assert SchedulerSettings.from_properties(
            SchedulerProperties({"stdsched.scheduler.idleWaitTime": "0"})
        ).idle_wait_time == 0

        with pytest.raises(SchedulerConfigException):
            SchedulerSettings.from_properties(SchedulerProperties({"stdsched.scheduler.idleWaitTime": "-2"}))

    def test_settings_are_frozen(self):
        settings = SchedulerSettings()
        with pytest.raises(ValidationError):
            settings.instance_name = "Other"


class TestLoggingConfig:
    """Test LoggingConfig validation and property mapping."""

    def test_defaults(self):
        config = LoggingConfig()
        assert config.level == "INFO"
        assert config.destination == "stdout"

    def test_normalizes_values(self):
        config = LoggingConfig(level="debug", destination="BOTH")
        assert config.level == "DEBUG"
        assert config.destination == "both"

    def test_rejects_unknown_level(self):
        with pytest.raises(ValueError):
            LoggingConfig(level="chatty")

    def test_from_properties(self):
        props = SchedulerProperties({
            "stdsched.logging.level": "warning",
            "stdsched.logging.destination": "file",
            "stdsched.logging.filePath": "/var/log/sched.log",
            "stdsched.logging.maxSizeMb": "20",
            "stdsched.logging.backupCount": "2",
        })

        config = LoggingConfig.from_properties(props)

        assert config.level == "WARNING"
        assert config.destination == "file"
        assert config.file_path == "/var/log/sched.log"
        assert config.max_size_mb == 20
        assert config.backup_count == 2

    def test_from_properties_invalid(self):
        props = SchedulerProperties({"stdsched.logging.maxSizeMb": "0"})
        with pytest.raises(SchedulerConfigException):
            LoggingConfig.from_properties(props)

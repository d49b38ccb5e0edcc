"""Tests for the process-wide scheduler repository."""

import threading
from unittest.mock import Mock

import pytest

from stdsched.domain.base.ports.scheduler_port import SchedulerPort
from stdsched.domain.core.exceptions import DuplicateSchedulerNameError
from stdsched.infrastructure.registry.scheduler_repository import (
    SchedulerRepository,
    get_scheduler_repository,
)


def make_handle(name: str, shutdown: bool = False) -> Mock:
    handle = Mock(spec=SchedulerPort)
    handle.name = name
    handle.is_shutdown.return_value = shutdown
    return handle


class TestSchedulerRepository:
    """Test bind, remove, lookup and lookup_all."""

    def setup_method(self):
        """Set up test fixtures."""
        self.repository = SchedulerRepository()

    def test_bind_then_lookup_returns_same_handle(self):
        handle = make_handle("N")

        self.repository.bind(handle)

        assert self.repository.lookup("N") is handle
        assert "N" in self.repository
        assert len(self.repository) == 1

    def test_duplicate_bind_keeps_original(self):
        original = make_handle("N")
        intruder = make_handle("N")
        self.repository.bind(original)

        with pytest.raises(DuplicateSchedulerNameError) as exc_info:
            self.repository.bind(intruder)

        assert exc_info.value.name == "N"
        assert "already exists" in str(exc_info.value)
        assert self.repository.lookup("N") is original

    def test_remove_unbound_name(self):
        self.repository.bind(make_handle("A"))

        assert self.repository.remove("X") is False
        assert [h.name for h in self.repository.lookup_all()] == ["A"]

    def test_remove_bound_name(self):
        self.repository.bind(make_handle("A"))

        assert self.repository.remove("A") is True
        assert self.repository.lookup("A") is None
        assert self.repository.remove("A") is False

    def test_lookup_missing(self):
        assert self.repository.lookup("nobody") is None

    def test_lookup_all_is_a_snapshot(self):
        first = make_handle("A")
        self.repository.bind(first)

        snapshot = self.repository.lookup_all()
        self.repository.bind(make_handle("B"))
        self.repository.remove("A")

        assert snapshot == (first,)
        assert isinstance(snapshot, tuple)

    def test_rebind_after_remove(self):
        self.repository.bind(make_handle("A"))
        self.repository.remove("A")
        replacement = make_handle("A")

        self.repository.bind(replacement)

        assert self.repository.lookup("A") is replacement

    def test_clear(self):
        self.repository.bind(make_handle("A"))
        self.repository.bind(make_handle("B"))

        self.repository.clear()

        assert len(self.repository) == 0

    def test_concurrent_binds_admit_exactly_one(self):
        handles = [make_handle("Shared") for _ in range(10)]
        errors = []
        barrier = threading.Barrier(len(handles))

        def worker(handle):
            barrier.wait()
            try:
                self.repository.bind(handle)
            except DuplicateSchedulerNameError as e:
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(h,)) for h in handles]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(errors) == len(handles) - 1
        assert self.repository.lookup("Shared") in handles


class TestSingletonAccess:
    """Test process-wide singleton access."""

    def test_get_instance_returns_same_object(self):
        assert SchedulerRepository.get_instance() is SchedulerRepository.get_instance()
        assert get_scheduler_repository() is SchedulerRepository.get_instance()

    def test_constructor_builds_isolated_repositories(self):
        assert SchedulerRepository() is not SchedulerRepository.get_instance()

    def test_concurrent_first_access_creates_one_instance(self):
        instances = []
        barrier = threading.Barrier(16)

        def worker():
            barrier.wait()
            instances.append(SchedulerRepository.get_instance())

        threads = [threading.Thread(target=worker) for _ in range(16)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len({id(instance) for instance in instances}) == 1

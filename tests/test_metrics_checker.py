"""
Tests for the periodic metrics checker.

Tests cover:
- Checking every alerting user, with per-user failure isolation
- Forced checks
- Initial-check throttling
- Start/stop of the background loop
"""

import threading

from hivewatch.core.exceptions import TransientStoreError
from hivewatch.services.metrics_checker import MetricsChecker


class FakeManager:
    def __init__(self, results=None, failing=(), broken=()):
        self.results = results or {}
        self.failing = set(failing)
        self.broken = set(broken)
        self.calls = []
        self.called = threading.Event()

    def run_check(self, user_id):
        self.calls.append(user_id)
        self.called.set()
        if user_id in self.failing:
            raise TransientStoreError("thresholds unavailable")
        if user_id in self.broken:
            raise RuntimeError("unexpected response body")
        return self.results.get(user_id, 0)


class FakeStore:
    def __init__(self, users):
        self.users = users

    def list_alerting_users(self):
        return list(self.users)


class FakeMonotonic:
    def __init__(self):
        self.value = 1000.0

    def __call__(self):
        return self.value


def test_check_all_sums_across_users():
    manager = FakeManager(results={"a": 2, "b": 1})
    checker = MetricsChecker(manager, FakeStore(["a", "b"]))

    assert checker.check_all() == 3
    assert manager.calls == ["a", "b"]


def test_failing_user_does_not_stop_the_others():
    manager = FakeManager(results={"a": 2, "c": 4}, failing={"b"})
    checker = MetricsChecker(manager, FakeStore(["a", "b", "c"]))

    assert checker.check_all() == 6
    assert manager.calls == ["a", "b", "c"]


def test_unexpected_error_for_one_user_does_not_stop_the_others():
    manager = FakeManager(results={"a": 1, "c": 2}, broken={"b"})
    checker = MetricsChecker(manager, FakeStore(["a", "b", "c"]))

    assert checker.check_all() == 3
    assert manager.calls == ["a", "b", "c"]


def test_force_check_returns_count():
    checker = MetricsChecker(FakeManager(results={"a": 5}), FakeStore([]))
    assert checker.force_check("a") == 5
    assert checker.last_check_at is not None


def test_force_check_failure_returns_zero():
    checker = MetricsChecker(FakeManager(failing={"a"}), FakeStore([]))
    assert checker.force_check("a") == 0


def test_initial_check_is_throttled():
    monotonic = FakeMonotonic()
    checker = MetricsChecker(FakeManager(), FakeStore([]), min_interval_seconds=600, monotonic=monotonic)

    assert checker.should_run_initial_check()

    checker.force_check("a")
    monotonic.value += 300
    assert not checker.should_run_initial_check()

    monotonic.value += 301
    assert checker.should_run_initial_check()


def test_start_runs_initial_check_and_stop_joins():
    manager = FakeManager(results={"a": 1})
    checker = MetricsChecker(manager, FakeStore(["a"]), interval_seconds=3600)

    checker.start()
    try:
        assert manager.called.wait(timeout=5)
        assert checker.running
    finally:
        checker.stop()

    assert not checker.running
    assert manager.calls == ["a"]


def test_start_skips_initial_check_when_recent():
    manager = FakeManager()
    monotonic = FakeMonotonic()
    checker = MetricsChecker(manager, FakeStore(["a"]), interval_seconds=3600, monotonic=monotonic)
    checker.force_check("a")
    manager.calls.clear()
    manager.called.clear()

    checker.start()
    try:
        assert not manager.called.wait(timeout=0.2)
    finally:
        checker.stop()

    assert manager.calls == []

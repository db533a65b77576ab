"""Tests for ts_type_watcher.scheduler."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import List

import pytest

from ts_type_watcher.errors import ConfigurationError, DirectoryNotFoundError, WriteError
from ts_type_watcher.models import RunReport
from ts_type_watcher.scheduler import RegenerationScheduler


def _report() -> RunReport:
    return RunReport(output_path=Path("types.d.ts"), catalog_size=0, files_scanned=0)


def test_request_runs_immediately_when_idle() -> None:
    calls: List[int] = []

    def run() -> RunReport:
        calls.append(1)
        return _report()

    scheduler = RegenerationScheduler(run)

    assert scheduler.request() is True
    assert scheduler.request() is True
    assert len(calls) == 2
    assert scheduler.run_count == 2
    assert scheduler.last_report is not None
    assert not scheduler.is_running


def test_requests_during_a_run_coalesce_into_one_follow_up() -> None:
    started = threading.Event()
    release = threading.Event()
    calls: List[int] = []

    def run() -> RunReport:
        calls.append(1)
        if len(calls) == 1:
            started.set()
            assert release.wait(5)
        return _report()

    scheduler = RegenerationScheduler(run)
    worker = threading.Thread(target=scheduler.request, args=("initial",))
    worker.start()
    assert started.wait(5)

    assert scheduler.is_running
    assert scheduler.request("change") is False
    assert scheduler.request("change") is False
    assert scheduler.request("unlink") is False
    assert scheduler.has_pending

    release.set()
    worker.join(5)

    assert not worker.is_alive()
    assert len(calls) == 2
    assert not scheduler.is_running
    assert not scheduler.has_pending


def test_runs_never_overlap() -> None:
    active = 0
    max_active = 0
    lock = threading.Lock()

    def run() -> RunReport:
        nonlocal active, max_active
        with lock:
            active += 1
            max_active = max(max_active, active)
        threading.Event().wait(0.01)
        with lock:
            active -= 1
        return _report()

    scheduler = RegenerationScheduler(run)
    threads = [threading.Thread(target=scheduler.request) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(5)

    assert max_active == 1
    assert 1 <= scheduler.run_count <= 8
    assert not scheduler.is_running


@pytest.mark.parametrize("error", [DirectoryNotFoundError("gone"), WriteError("read-only")])
def test_recoverable_errors_are_logged_and_scheduler_keeps_working(
    error: Exception, caplog: pytest.LogCaptureFixture
) -> None:
    outcomes = [error, None]

    def run() -> RunReport:
        outcome = outcomes.pop(0)
        if outcome is not None:
            raise outcome
        return _report()

    scheduler = RegenerationScheduler(run)

    with caplog.at_level("ERROR", logger="ts_type_watcher"):
        assert scheduler.request() is True
    assert "Regeneration failed" in caplog.text
    assert scheduler.last_report is None

    assert scheduler.request() is True
    assert scheduler.last_report is not None


def test_configuration_error_propagates_and_clears_flags() -> None:
    def run() -> RunReport:
        raise ConfigurationError("schema missing")

    scheduler = RegenerationScheduler(run)

    with pytest.raises(ConfigurationError):
        scheduler.request()

    assert not scheduler.is_running
    assert not scheduler.has_pending

"""Shared fixtures and collaborator fakes for terminate tests."""

from datetime import datetime, timedelta

import pytest

from terminate.diagnostics import Diagnostics
from terminate.models import ActionResult, ProcessRecord

T0 = datetime(2024, 3, 1, 12, 0, 0)


class FakeProvider:
    """Snapshot provider returning a fixed list of records."""

    def __init__(self, records=None, error=None):
        self.records = list(records or [])
        self.error = error
        self.calls = 0

    def list_processes(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.records)


class FakeTerminator:
    """Terminator recording pids; pids in `failing` fail."""

    def __init__(self, failing=(), raising=()):
        self.failing = set(failing)
        self.raising = set(raising)
        self.calls: list[int] = []

    def terminate(self, pid):
        self.calls.append(pid)
        if pid in self.raising:
            raise RuntimeError(f"boom {pid}")
        if pid in self.failing:
            return ActionResult.failure(f"process {pid} is no longer running")
        return ActionResult.success()


class FakeReporter:
    """Reporter recording (field, value) pairs."""

    def __init__(self, resolvable=True, failing_fields=()):
        self.resolvable = resolvable
        self.failing_fields = set(failing_fields)
        self.resolve_calls = 0
        self.calls: list[tuple[str, str]] = []

    def resolve(self):
        self.resolve_calls += 1
        if not self.resolvable:
            return ActionResult.failure("cannot resolve reporting tool path: missing key")
        return ActionResult.success("C:\\tool")

    def report(self, field_name, value):
        self.calls.append((field_name, value))
        if field_name in self.failing_fields:
            return ActionResult.failure(f"{field_name} failed")
        return ActionResult.success(f"{field_name} sent")


def make_record(pid, name="app.exe", start_time=T0, path=None):
    return ProcessRecord(
        pid=pid,
        name=name,
        path=path if path is not None else f"c:\\apps\\{name}",
        start_time=start_time,
    )


def ticking_clock(start, step=timedelta(seconds=1)):
    """Clock returning start, start+step, start+2*step, ..."""
    state = {"now": start - step}

    def clock():
        state["now"] += step
        return state["now"]

    return clock


@pytest.fixture
def log_file(tmp_path):
    return tmp_path / "terminate.log"


@pytest.fixture
def diagnostics(log_file):
    diag = Diagnostics(log_file=log_file, debug=True)
    yield diag
    diag.close()


def read_log(path) -> str:
    return path.read_text(encoding="utf-8") if path.exists() else ""

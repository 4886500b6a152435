"""Process table snapshots for terminate."""

from datetime import datetime
from typing import Protocol

import psutil

from terminate.diagnostics import Diagnostics
from terminate.models import ProcessRecord

# Windows pseudo-processes without an executable path
_WINDOWS_PSEUDO_PATHS = {
    0: "system idle process",
    4: "system",
}


class SnapshotProvider(Protocol):
    """Anything that can list the running processes."""

    def list_processes(self) -> list[ProcessRecord]: ...


class PsutilSnapshotProvider:
    """
    Snapshot provider backed by psutil.

    Errors are handled per process: psutil failures and unconvertible
    values are logged, the offending process is skipped and the snapshot
    continues.
    """

    ATTRS = ["pid", "name", "exe", "create_time"]

    def __init__(self, diagnostics: Diagnostics) -> None:
        self._diagnostics = diagnostics

    def list_processes(self) -> list[ProcessRecord]:
        """Collect a record for every running process."""
        records: list[ProcessRecord] = []

        for proc in psutil.process_iter(attrs=self.ATTRS):
            try:
                records.append(self._to_record(proc.info))
            except (
                psutil.NoSuchProcess,
                psutil.AccessDenied,
                psutil.ZombieProcess,
                OverflowError,
                OSError,
                ValueError,
            ) as exc:
                # A create_time outside the platform range fails fromtimestamp
                self._diagnostics.warning(
                    f"Warning: could not get details on process: {proc.pid}  error: {exc}"
                )
                continue

        return records

    @staticmethod
    def _to_record(info: dict) -> ProcessRecord:
        """Convert a psutil info dict to a ProcessRecord."""
        pid = info.get("pid", 0)
        name = (info.get("name") or "").lower()

        if psutil.WINDOWS and pid in _WINDOWS_PSEUDO_PATHS:
            path = _WINDOWS_PSEUDO_PATHS[pid]
        else:
            # exe is None when access is denied, fall back to the name
            path = (info.get("exe") or name).lower()

        create_time = info.get("create_time")
        start_time = datetime.fromtimestamp(create_time) if create_time else None

        return ProcessRecord(pid=pid, name=name, path=path, start_time=start_time)

"""Action executors: process termination and inventory reporting."""

import subprocess
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Protocol

import psutil

from terminate import config
from terminate.models import ActionResult

InstallDirResolver = Callable[[], Path]
Runner = Callable[..., subprocess.CompletedProcess]


class Terminator(Protocol):
    def terminate(self, pid: int) -> ActionResult: ...


class Reporter(Protocol):
    def resolve(self) -> ActionResult: ...

    def report(self, field_name: str, value: str) -> ActionResult: ...


class ProcessTerminator:
    """Kills processes by pid using psutil."""

    def terminate(self, pid: int) -> ActionResult:
        """
        Kill the process with the given pid.

        A process that has already exited, or that we may not signal, is
        reported as a failure rather than raised.
        """
        try:
            proc = psutil.Process(pid)
            proc.kill()
        except psutil.NoSuchProcess:
            return ActionResult.failure(f"process {pid} is no longer running")
        except (psutil.AccessDenied, psutil.ZombieProcess) as exc:
            return ActionResult.failure(f"cannot kill process {pid}: {exc}")
        return ActionResult.success()


def registry_install_dir() -> Path:
    """
    Read the inventory client's install directory from the registry.

    Raises:
        OSError: The registry is unavailable or the key/value is missing.
    """
    if sys.platform != "win32":
        raise OSError("inventory client registry key is only available on Windows")

    import winreg

    with winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, config.REPORTER_REGISTRY_KEY) as key:
        value, _ = winreg.QueryValueEx(key, config.REPORTER_REGISTRY_VALUE)
    return Path(str(value))


def custom_data_argument(field_name: str, value: str) -> str:
    """Build the miniscan argument that sends one custom data field."""
    return f"/send={config.CUSTOM_DATA_PREFIX}{field_name} = {value}"


class ExternalReporter:
    """
    Sends custom data fields to inventory through the miniscan tool.

    Each report blocks until the launched tool exits. There is no timeout,
    a hung tool stalls the run.
    """

    def __init__(
        self,
        resolver: InstallDirResolver = registry_install_dir,
        runner: Runner = subprocess.run,
    ) -> None:
        """
        Initialize the ExternalReporter.

        Args:
            resolver: Returns the tool's install directory, raises OSError.
            runner: Launches the tool and waits for it (subprocess.run).
        """
        self._resolver = resolver
        self._runner = runner
        self._install_dir: Path | None = None

    @property
    def install_dir(self) -> Path | None:
        return self._install_dir

    def resolve(self) -> ActionResult:
        """Resolve the tool's install directory for the following reports."""
        self._install_dir = None
        try:
            self._install_dir = self._resolver()
        except OSError as exc:
            return ActionResult.failure(f"cannot resolve reporting tool path: {exc}")
        return ActionResult.success(str(self._install_dir))

    def report(self, field_name: str, value: str) -> ActionResult:
        """Launch the tool once to send a single field, waiting for it to exit."""
        if self._install_dir is None:
            return ActionResult.failure("reporting tool path not resolved")

        executable = self._install_dir / config.REPORTER_EXECUTABLE
        try:
            completed = self._runner(
                [str(executable), custom_data_argument(field_name, value)],
                cwd=str(self._install_dir),
            )
        except (OSError, subprocess.SubprocessError) as exc:
            return ActionResult.failure(f"{executable} failed to run: {exc}")
        return ActionResult.success(f"{field_name} sent, exit code {completed.returncode}")

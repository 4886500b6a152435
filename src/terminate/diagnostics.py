"""Diagnostics sink for terminate runs."""

import itertools
import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from terminate import config

_instance_ids = itertools.count(1)


class Diagnostics:
    """
    Append-only run log written to a file and to the console.

    Each instance owns its own non-propagating logger, so components only
    log through the instance they were handed.
    """

    def __init__(
        self,
        log_file: Path | None = None,
        debug: bool = False,
        console: Console | None = None,
    ) -> None:
        """
        Initialize the sink.

        Args:
            log_file: Path of the log file. Defaults to the temp directory.
            debug: Emit debug-level records when True.
            console: Console for interactive output. None disables it.
        """
        self._log_file = Path(log_file) if log_file is not None else config.log_path()
        self._level = logging.DEBUG if debug else logging.INFO
        self._logger = logging.getLogger(f"terminate.run{next(_instance_ids)}")
        self._logger.setLevel(self._level)
        self._logger.propagate = False
        self._closed = False

        self._file_error: OSError | None = None
        try:
            self._log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(self._log_file, encoding="utf-8")
        except OSError as exc:
            # Unusable log location, keep logging to the console only
            self._file_error = exc
        else:
            file_handler.setFormatter(
                logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
            )
            self._logger.addHandler(file_handler)

        if console is not None:
            console_handler = RichHandler(
                console=console,
                show_path=False,
                markup=False,
                rich_tracebacks=False,
            )
            console_handler.setFormatter(logging.Formatter("%(message)s"))
            self._logger.addHandler(console_handler)

        if self._file_error is not None:
            self.warning(f"Log file {self._log_file} unavailable: {self._file_error}")

    @property
    def log_file(self) -> Path:
        """Path of the log file."""
        return self._log_file

    @property
    def file_enabled(self) -> bool:
        """Whether messages are also written to the log file."""
        return self._file_error is None

    @property
    def is_debug(self) -> bool:
        return self._level == logging.DEBUG

    @property
    def closed(self) -> bool:
        return self._closed

    def append(self, message: str, level: int = logging.INFO) -> None:
        """Append a message at the given severity."""
        if self._closed:
            return
        self._logger.log(level, message)

    def debug(self, message: str) -> None:
        self.append(message, logging.DEBUG)

    def info(self, message: str) -> None:
        self.append(message, logging.INFO)

    def warning(self, message: str) -> None:
        self.append(message, logging.WARNING)

    def error(self, message: str) -> None:
        self.append(message, logging.ERROR)

    def close(self) -> None:
        """Flush and detach all handlers. Later messages are dropped."""
        if self._closed:
            return
        for handler in list(self._logger.handlers):
            handler.flush()
            handler.close()
            self._logger.removeHandler(handler)
        self._closed = True

    def __enter__(self) -> "Diagnostics":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

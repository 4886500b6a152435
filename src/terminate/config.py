"""Fixed settings for terminate."""

import os
import tempfile
from pathlib import Path

# Sentinel used when no TARGET= token was supplied
TARGET_SENTINEL = "NA"
EXECUTABLE_SUFFIX = ".exe"

LOG_FILE_NAME = "terminate.log"
LOG_DIR_ENV = "TERMINATE_LOG_DIR"

# Inventory client used by the TAG contract
REPORTER_REGISTRY_KEY = r"SOFTWARE\LANDesk\ManagementSuite\WinClient"
REPORTER_REGISTRY_VALUE = "Path"
REPORTER_EXECUTABLE = "miniscan.exe"
CUSTOM_DATA_PREFIX = "Custom Data - Support - "
FIELD_PROCESS_NAME = "ProcessName"
FIELD_PROCESS_AGE = "ProcessAgeMinutes"


def log_dir() -> Path:
    """Directory the diagnostics log is written to."""
    override = os.environ.get(LOG_DIR_ENV)
    if override:
        return Path(override)
    return Path(tempfile.gettempdir())


def log_path() -> Path:
    """Full path of the diagnostics log file."""
    return log_dir() / LOG_FILE_NAME

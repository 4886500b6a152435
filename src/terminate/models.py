"""Data models for terminate."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum

MINUTES_PER_DAY = 24 * 60


class Contract(Enum):
    """Disposition applied to targets older than the TTL."""

    TAG = "tag"
    KILL = "kill"


class Disposition(Enum):
    """Outcome of processing a single target."""

    ACTED = "acted"
    TOO_YOUNG = "too_young"
    FAILED = "failed"


@dataclass(slots=True, frozen=True)
class ProcessRecord:
    """Immutable entry of a process table snapshot."""

    pid: int
    name: str
    path: str  # Executable path, or the process name when unreadable
    start_time: datetime | None


def age_in_minutes(start_time: datetime, discovery_time: datetime) -> int:
    """
    Elapsed minutes between two points in time.

    Sums the day, hour and minute components of the span and drops the
    seconds. Components truncate toward zero, so a negative span gives a
    non-positive age of the same magnitude as its positive mirror.
    """
    span = discovery_time - start_time
    sign = -1 if span < timedelta(0) else 1
    span = abs(span)
    hours, remainder = divmod(span.seconds, 3600)
    minutes = remainder // 60
    return sign * (span.days * MINUTES_PER_DAY + hours * 60 + minutes)


@dataclass(slots=True, frozen=True)
class Target:
    """A selected process with its age frozen at discovery."""

    name: str
    path: str
    pid: int
    start_time: datetime
    discovery_time: datetime
    age: int  # Minutes

    @classmethod
    def capture(cls, record: ProcessRecord, discovery_time: datetime) -> "Target":
        """Build a Target from a snapshot record, computing its age once."""
        if record.start_time is None:
            raise ValueError("start time unavailable")
        return cls(
            name=record.name,
            path=record.path,
            pid=record.pid,
            start_time=record.start_time,
            discovery_time=discovery_time,
            age=age_in_minutes(record.start_time, discovery_time),
        )


@dataclass(slots=True)
class RunContext:
    """Per-invocation settings and the running tally of processed targets."""

    target_name: str
    ttl: int  # Minutes
    contract: Contract = Contract.TAG
    processed: int = 0


@dataclass(slots=True, frozen=True)
class ActionResult:
    """Result of a side-effecting action (kill or report)."""

    ok: bool
    detail: str = ""

    @classmethod
    def success(cls, detail: str = "") -> "ActionResult":
        return cls(ok=True, detail=detail)

    @classmethod
    def failure(cls, detail: str) -> "ActionResult":
        return cls(ok=False, detail=detail)


@dataclass(slots=True, frozen=True)
class TargetResult:
    """Verdict of the disposition engine for one target."""

    target: Target
    disposition: Disposition
    detail: str = ""

    @property
    def succeeded(self) -> bool:
        """Whether the target counts toward the run tally."""
        return self.disposition is Disposition.ACTED


@dataclass(slots=True, frozen=True)
class Capture:
    """Result of capturing one snapshot record as a Target."""

    record: ProcessRecord
    target: Target | None = None
    error: str = ""

    @property
    def ok(self) -> bool:
        return self.target is not None

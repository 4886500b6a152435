"""Target selection for terminate."""

from collections.abc import Callable, Iterable
from datetime import datetime

from terminate.diagnostics import Diagnostics
from terminate.models import Capture, ProcessRecord, Target

Clock = Callable[[], datetime]


def matches(record: ProcessRecord, name: str) -> bool:
    """Case-insensitive comparison of a record's name with the filter."""
    return record.name.lower() == name.lower()


def capture(record: ProcessRecord, clock: Clock = datetime.now) -> Capture:
    """Capture a record as a Target, stamping its discovery time now."""
    try:
        target = Target.capture(record, discovery_time=clock())
    except (ValueError, TypeError, AttributeError) as exc:
        return Capture(record=record, error=str(exc))
    return Capture(record=record, target=target)


def select_targets(
    name: str,
    records: Iterable[ProcessRecord],
    diagnostics: Diagnostics,
    clock: Clock = datetime.now,
) -> list[Target]:
    """
    Select the records whose name matches, preserving snapshot order.

    Each match gets its own discovery timestamp. Records that cannot be
    captured are logged as warnings and skipped.
    """
    targets: list[Target] = []

    for record in records:
        diagnostics.debug(f"evaluating: {record.name}")
        if not matches(record, name):
            continue

        result = capture(record, clock)
        if result.ok:
            targets.append(result.target)
        else:
            diagnostics.warning(
                f"Warning: could not evaluate potential target: {record.name}  "
                f"error: {result.error}"
            )

    return targets

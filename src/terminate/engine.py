"""Disposition engine: decides and applies the contract to each target."""

from collections.abc import Iterable

from terminate import config
from terminate.actions import Reporter, Terminator
from terminate.diagnostics import Diagnostics
from terminate.models import Contract, Disposition, RunContext, Target, TargetResult


class DispositionEngine:
    """
    Applies a contract to targets older than the TTL.

    Targets are processed one at a time. A failing target yields a FAILED
    result and never stops the batch.
    """

    def __init__(
        self,
        contract: Contract,
        ttl: int,
        terminator: Terminator,
        reporter: Reporter,
        diagnostics: Diagnostics,
    ) -> None:
        self._contract = contract
        self._ttl = ttl
        self._terminator = terminator
        self._reporter = reporter
        self._diagnostics = diagnostics

    @property
    def contract(self) -> Contract:
        return self._contract

    @property
    def ttl(self) -> int:
        return self._ttl

    def is_eligible(self, target: Target) -> bool:
        """Whether the target is old enough to act on."""
        return target.age > self._ttl

    def dispose(self, target: Target) -> TargetResult:
        """Decide and, if the target is old enough, apply the contract."""
        if not self.is_eligible(target):
            self._diagnostics.info(
                f"Hit aborted.  target too young: {target.age} minutes, name: {target.name}"
            )
            return TargetResult(target, Disposition.TOO_YOUNG)

        if self._contract is Contract.KILL:
            result = self._kill(target)
        else:
            result = self._tag(target)

        if result.succeeded:
            self._diagnostics.info("     done")
        else:
            self._diagnostics.error(
                f"Error completing processing target: {target.name}  error: {result.detail}"
            )
        return result

    def run(self, targets: Iterable[Target], context: RunContext | None = None) -> int:
        """
        Dispose of every target in order and return how many were acted on.

        Each success is also added to the tally of context, when given.
        """
        processed = 0
        for target in targets:
            try:
                result = self.dispose(target)
            except Exception as exc:
                # Collaborators report failures as results; anything else still
                # only fails this target.
                self._diagnostics.error(
                    f"Error completing processing target: {target.name}  error: {exc}"
                )
                continue
            if result.succeeded:
                processed += 1
                if context is not None:
                    context.processed += 1
        return processed

    def _kill(self, target: Target) -> TargetResult:
        self._diagnostics.info(f"Killing process: {target.name}")
        outcome = self._terminator.terminate(target.pid)
        if not outcome.ok:
            return TargetResult(target, Disposition.FAILED, outcome.detail)
        return TargetResult(target, Disposition.ACTED, outcome.detail)

    def _tag(self, target: Target) -> TargetResult:
        self._diagnostics.info(f"tagging process: {target.name}")
        resolved = self._reporter.resolve()
        if not resolved.ok:
            return TargetResult(target, Disposition.FAILED, resolved.detail)

        # Both fields are always sent; the target only counts if both succeed.
        outcomes = [
            self._reporter.report(config.FIELD_PROCESS_NAME, target.name),
            self._reporter.report(config.FIELD_PROCESS_AGE, str(target.age)),
        ]
        for outcome in outcomes:
            self._diagnostics.debug(f"     report: {outcome.detail}")
        failures = [outcome.detail for outcome in outcomes if not outcome.ok]
        if failures:
            return TargetResult(target, Disposition.FAILED, "; ".join(failures))
        return TargetResult(target, Disposition.ACTED)

"""terminate - command line entry point and run driver."""

import sys
from collections.abc import Sequence
from importlib.metadata import PackageNotFoundError, version

from rich.console import Console

from terminate import config
from terminate.actions import ExternalReporter, ProcessTerminator, Reporter, Terminator
from terminate.args import ArgumentError, parse_args, pull_debug
from terminate.diagnostics import Diagnostics
from terminate.engine import DispositionEngine
from terminate.models import RunContext, Target
from terminate.selector import select_targets
from terminate.snapshot import PsutilSnapshotProvider, SnapshotProvider

HELP_DESCRIPTION = (
    "Terminate is a diagnostics and recovery tool for inventory administrators. "
    "It can either report on (tag) or stop (kill) a specified process. If KILL is "
    "specified, all processes that match the specified name and have a start time "
    "older than the specified minutes will be force stopped. If TAG is specified, "
    "a process that matches the name and has an old start time will be reported "
    "to inventory."
)


def get_version() -> str:
    try:
        return version("terminate")
    except PackageNotFoundError:
        return "unknown"


def display_help(console: Console) -> None:
    """Print usage information."""
    console.print()
    console.print(f"[bold]Terminate, v.{get_version()}[/bold]")
    console.print("*****************************")
    console.print(HELP_DESCRIPTION)
    console.print()
    console.print("[bold]USAGE:[/bold]")
    console.print(
        "terminate TARGET=<target-process-name> TTL=<max-process-age-in-minutes> "
        "CONTRACT=<TAG-or-KILL>",
        markup=False,
    )
    console.print("process stop example: ")
    console.print("terminate TARGET=notepad.exe TTL=15 CONTRACT=KILL")
    console.print("process report example: ")
    console.print("terminate TARGET=notepad.exe TTL=15 CONTRACT=TAG")
    console.print()
    console.print("[bold]NOTES:[/bold]")
    console.print(
        "Command parameters are case insensitive. Process name can be specified "
        "with or without the .exe suffix. Add LOG=DEBUG for verbose logging."
    )
    console.print()
    console.print(
        f"Output is logged to the console as well as to {config.log_path()} "
        f"(override the directory with {config.LOG_DIR_ENV}).",
        markup=False,
    )
    console.print()
    console.print(
        "TAG sends custom data from the client to the inventory core with "
        f"{config.REPORTER_EXECUTABLE}. Custom data must be enabled. The two custom "
        "data paths are:"
    )
    console.print(f"{config.CUSTOM_DATA_PREFIX}{config.FIELD_PROCESS_NAME}")
    console.print("and")
    console.print(f"{config.CUSTOM_DATA_PREFIX}{config.FIELD_PROCESS_AGE}")
    console.print()


def acquire_targets(
    context: RunContext,
    provider: SnapshotProvider,
    diagnostics: Diagnostics,
) -> list[Target]:
    """Snapshot the process table and select targets. Failures yield no targets."""
    diagnostics.info("acquiring targets...")
    try:
        records = provider.list_processes()
        return select_targets(context.target_name, records, diagnostics)
    except Exception as exc:
        diagnostics.error(f"Error acquiring targets: {exc}")
        return []


def run_termination(
    context: RunContext,
    provider: SnapshotProvider,
    engine: DispositionEngine,
    diagnostics: Diagnostics,
) -> int:
    """Acquire targets and apply the contract, returning the updated tally."""
    targets = acquire_targets(context, provider, diagnostics)
    if targets:
        diagnostics.info(f"targets acquired: {len(targets)}  processing targets...")
        engine.run(targets, context)
    return context.processed


def execute(
    argv: Sequence[str],
    diagnostics: Diagnostics,
    console: Console,
    provider: SnapshotProvider | None = None,
    terminator: Terminator | None = None,
    reporter: Reporter | None = None,
) -> RunContext | None:
    """
    Run terminate for one command line.

    Returns the run context with its final tally, or None when the arguments
    did not allow a run (help is shown instead).
    """
    try:
        args = parse_args(argv)
    except ArgumentError as exc:
        diagnostics.error(f"Error pulling command line parameters: {exc}")
        display_help(console)
        return None

    if not args.is_valid:
        display_help(console)
        return None

    context = args.to_context()
    diagnostics.info("Terminate is starting")
    diagnostics.info(f"     target app: {context.target_name}")
    diagnostics.info(f"     max time to live (minutes): {context.ttl}")
    diagnostics.info(f"     contract type: {context.contract.name}")

    engine = DispositionEngine(
        contract=context.contract,
        ttl=context.ttl,
        terminator=terminator or ProcessTerminator(),
        reporter=reporter or ExternalReporter(),
        diagnostics=diagnostics,
    )
    run_termination(
        context,
        provider or PsutilSnapshotProvider(diagnostics),
        engine,
        diagnostics,
    )

    diagnostics.info(f"Total targets processed: {context.processed}")
    diagnostics.info("Terminate is complete.   Shutting down.")
    return context


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the terminate command."""
    if argv is None:
        argv = sys.argv[1:]
    console = Console()
    diagnostics = Diagnostics(debug=pull_debug(argv), console=console)
    try:
        execute(argv, diagnostics, console)
    finally:
        diagnostics.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())

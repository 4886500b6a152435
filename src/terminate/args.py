"""Command line token parsing for terminate."""

from collections.abc import Sequence
from dataclasses import dataclass

from terminate import config
from terminate.models import Contract, RunContext


class ArgumentError(ValueError):
    """A command line token has a value that cannot be used."""


@dataclass(slots=True, frozen=True)
class RunArgs:
    """Parsed command line."""

    target_name: str = config.TARGET_SENTINEL
    ttl: int = 0
    contract: Contract = Contract.TAG
    debug: bool = False

    @property
    def is_valid(self) -> bool:
        """A run needs a target and a non-zero TTL."""
        return self.target_name != config.TARGET_SENTINEL and self.ttl != 0

    def to_context(self) -> RunContext:
        return RunContext(target_name=self.target_name, ttl=self.ttl, contract=self.contract)


def token_value(args: Sequence[str], key: str) -> str | None:
    """Value of the first KEY=value token for key (case-insensitive), or None."""
    prefix = f"{key.lower()}="
    for arg in args:
        if arg.lower().startswith(prefix):
            return arg.split("=")[1]
    return None


def normalize_target_name(name: str) -> str:
    """Lowercase a process name and make sure it carries the .exe suffix."""
    name = name.strip().lower()
    if not name.endswith(config.EXECUTABLE_SUFFIX):
        name += config.EXECUTABLE_SUFFIX
    return name


def pull_target(args: Sequence[str]) -> str:
    value = token_value(args, "target")
    if value is None or not value.strip():
        return config.TARGET_SENTINEL
    return normalize_target_name(value)


def pull_ttl(args: Sequence[str]) -> int:
    """
    TTL in minutes, 0 when no TTL= token is present.

    Raises:
        ArgumentError: The value is not an integer, or is negative.
    """
    value = token_value(args, "ttl")
    if value is None:
        return 0
    try:
        ttl = int(value.strip())
    except ValueError:
        raise ArgumentError(f"TTL must be a whole number of minutes, got {value!r}") from None
    if ttl < 0:
        raise ArgumentError(f"TTL must not be negative, got {ttl}")
    return ttl


def pull_contract(args: Sequence[str]) -> Contract:
    """KILL if any CONTRACT= token asks for it, otherwise TAG."""
    for arg in args:
        if arg.lower().startswith("contract=") and arg.split("=")[1].strip().upper() == "KILL":
            return Contract.KILL
    return Contract.TAG


def pull_debug(args: Sequence[str]) -> bool:
    value = token_value(args, "log")
    return value is not None and value.strip().upper() == "DEBUG"


def parse_args(args: Sequence[str]) -> RunArgs:
    """
    Parse KEY=value tokens. Keys are case-insensitive, order is irrelevant
    and unrecognized tokens are ignored.

    Raises:
        ArgumentError: A recognized token has an unusable value.
    """
    return RunArgs(
        target_name=pull_target(args),
        ttl=pull_ttl(args),
        contract=pull_contract(args),
        debug=pull_debug(args),
    )

"""Tests for command line token parsing."""

import pytest

from terminate.args import (
    ArgumentError,
    RunArgs,
    normalize_target_name,
    parse_args,
    pull_contract,
    pull_debug,
    pull_target,
    pull_ttl,
    token_value,
)
from terminate.models import Contract


class TestTarget:
    """Tests for TARGET= parsing."""

    def test_suffix_appended(self):
        """Test a bare name gets the .exe suffix."""
        assert pull_target(["TARGET=notepad"]) == "notepad.exe"

    def test_lowercased(self):
        """Test the name is normalised to lowercase."""
        assert pull_target(["target=NOTEPAD.EXE"]) == "notepad.exe"

    def test_missing_is_sentinel(self):
        """Test no TARGET token gives the NA sentinel."""
        assert pull_target(["TTL=5"]) == "NA"

    def test_empty_is_sentinel(self):
        """Test an empty TARGET value gives the NA sentinel."""
        assert pull_target(["TARGET="]) == "NA"

    def test_normalize_is_idempotent(self):
        """Test normalising twice changes nothing."""
        assert normalize_target_name(normalize_target_name("App")) == "app.exe"


class TestTTL:
    """Tests for TTL= parsing."""

    def test_integer(self):
        """Test a numeric TTL is parsed."""
        assert pull_ttl(["TTL=15"]) == 15

    def test_missing_is_zero(self):
        """Test a missing TTL defaults to 0."""
        assert pull_ttl(["TARGET=app"]) == 0

    def test_malformed_raises(self):
        """Test a non-numeric TTL raises ArgumentError."""
        with pytest.raises(ArgumentError):
            pull_ttl(["TTL=soon"])

    def test_negative_raises(self):
        """Test a negative TTL raises ArgumentError."""
        with pytest.raises(ArgumentError):
            pull_ttl(["ttl=-5"])

    def test_argument_error_is_value_error(self):
        """Test ArgumentError can be caught as ValueError."""
        assert issubclass(ArgumentError, ValueError)


class TestContract:
    """Tests for CONTRACT= parsing."""

    @pytest.mark.parametrize("token", ["CONTRACT=KILL", "contract=kill", "Contract=Kill"])
    def test_kill(self, token):
        """Test KILL is recognised in any case."""
        assert pull_contract([token]) is Contract.KILL

    @pytest.mark.parametrize("args", [[], ["CONTRACT=TAG"], ["CONTRACT=explode"]])
    def test_defaults_to_tag(self, args):
        """Test absent or unrecognised contracts fall back to TAG."""
        assert pull_contract(args) is Contract.TAG

    def test_any_kill_token_wins(self):
        """Test a later CONTRACT=KILL overrides an earlier CONTRACT=TAG."""
        assert pull_contract(["CONTRACT=TAG", "CONTRACT=KILL"]) is Contract.KILL
        assert pull_contract(["CONTRACT=KILL", "CONTRACT=TAG"]) is Contract.KILL


def test_debug_flag():
    """Test LOG=DEBUG raises verbosity."""
    assert pull_debug(["LOG=DEBUG"])
    assert pull_debug(["log=debug"])
    assert not pull_debug(["LOG=INFO"])
    assert not pull_debug([])


def test_first_occurrence_wins():
    """Test the first token for a key is used."""
    assert token_value(["TTL=5", "TTL=9"], "ttl") == "5"


def test_parse_args_any_order_and_unknown_tokens():
    """Test order is irrelevant and unknown tokens are ignored."""
    args = parse_args(["CONTRACT=KILL", "--verbose", "TTL=15", "TARGET=App", "FOO=bar"])

    assert args == RunArgs(target_name="app.exe", ttl=15, contract=Contract.KILL, debug=False)
    assert args.is_valid


class TestValidation:
    """Tests for RunArgs.is_valid."""

    def test_missing_target_is_invalid(self):
        """Test a run without TARGET does not proceed."""
        assert not parse_args(["TTL=15"]).is_valid

    def test_zero_ttl_is_invalid(self):
        """Test a run with TTL=0 does not proceed."""
        assert not parse_args(["TARGET=app", "TTL=0"]).is_valid

    def test_no_arguments_is_invalid(self):
        """Test an empty command line does not proceed."""
        assert not parse_args([]).is_valid

    def test_to_context(self):
        """Test RunArgs converts to a fresh RunContext."""
        context = parse_args(["TARGET=app", "TTL=15", "CONTRACT=KILL"]).to_context()

        assert context.target_name == "app.exe"
        assert context.ttl == 15
        assert context.contract is Contract.KILL
        assert context.processed == 0

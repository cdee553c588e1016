"""Tests for command-line argument resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

from synutil.domain.models import HelpRequest, InvocationDescriptor, ListenInvocation
from synutil.routing import UsageError, resolve_arguments


class TestHostAndPort:
    def test_host_without_port_uses_default(self) -> None:
        result = resolve_arguments(["10.0.0.5", "getstatus"])
        assert isinstance(result, InvocationDescriptor)
        assert result.host == "10.0.0.5"
        assert result.port == 3734

    @pytest.mark.parametrize("port", ["0", "80", "3734", "65535"])
    def test_explicit_port(self, port: str) -> None:
        result = resolve_arguments([f"terminal.local:{port}", "getstatus"])
        assert result.host == "terminal.local"
        assert result.port == int(port)

    def test_custom_default_port(self) -> None:
        result = resolve_arguments(["host", "getstatus"], default_port=4000)
        assert result.port == 4000

    @pytest.mark.parametrize("arg", ["host:abc", "host:", "host:-1", "host:70000", "host:1:2"])
    def test_invalid_port(self, arg: str) -> None:
        with pytest.raises(UsageError, match="Invalid Port."):
            resolve_arguments([arg, "getstatus"])

    def test_empty_host(self) -> None:
        with pytest.raises(UsageError, match="Invalid Host."):
            resolve_arguments([":3734", "getstatus"])


class TestTerminalId:
    def test_default_is_zero(self) -> None:
        assert resolve_arguments(["host", "getstatus"]).terminal_id == 0

    @pytest.mark.parametrize("token", ["-t7", "-T7"])
    def test_terminal_id(self, token: str) -> None:
        result = resolve_arguments(["host", token, "getstatus"])
        assert result.terminal_id == 7

    def test_terminal_id_after_command(self) -> None:
        result = resolve_arguments(["host", "getstatus", "-t12"])
        assert result.terminal_id == 12
        assert result.command_args == ()

    @pytest.mark.parametrize("token", ["-tX", "-t", "-t-3", "-t1.5"])
    def test_invalid_terminal_id(self, token: str) -> None:
        with pytest.raises(UsageError, match="Invalid Terminal ID."):
            resolve_arguments(["host", token, "getstatus"])


class TestFlags:
    def test_verbose_and_force(self) -> None:
        result = resolve_arguments(["host", "-V", "-f", "upload", "a.rdy"])
        assert result.verbose is True
        assert result.force is True

    def test_flags_default_off(self) -> None:
        result = resolve_arguments(["host", "getstatus"])
        assert result.verbose is False
        assert result.force is False

    def test_flag_requires_exact_match(self) -> None:
        result = resolve_arguments(["host", "-verbose", "getstatus"])
        assert result.verbose is False

    def test_output_file_and_header_are_consumed(self) -> None:
        result = resolve_arguments(["host", "-o", "out.txt", "-h", "Terminal A", "getstatus"])
        assert result.output_file == Path("out.txt")
        assert result.output_header == "Terminal A"
        assert result.command == "getstatus"
        assert result.command_args == ()

    def test_output_option_value_is_not_the_command(self) -> None:
        result = resolve_arguments(["host", "-o", "report", "getdata"])
        assert result.command == "getdata"

    def test_output_option_after_command_args(self) -> None:
        result = resolve_arguments(["host", "upload", "a.rdy", "-o", "log.txt", "b.rdy"])
        assert result.command_args == ("a.rdy", "b.rdy")
        assert result.output_file == Path("log.txt")

    def test_missing_option_value(self) -> None:
        with pytest.raises(UsageError, match="Missing value for -o"):
            resolve_arguments(["host", "getstatus", "-o"])


class TestCommand:
    def test_command_and_args(self) -> None:
        result = resolve_arguments(["host", "settime", "2026-10-19", "08:30:00"])
        assert result.command == "settime"
        assert result.command_args == ("2026-10-19", "08:30:00")
        assert result.primary_arg == "2026-10-19"

    def test_command_skips_leading_flags(self) -> None:
        result = resolve_arguments(["host", "-t2", "-v", "deletetable", "x001"])
        assert result.command == "deletetable"
        assert result.primary_arg == "x001"

    def test_command_args_exclude_flags(self) -> None:
        result = resolve_arguments(["host", "upload", "a.rdy", "-f", "b.rdy"])
        assert result.command_args == ("a.rdy", "b.rdy")

    def test_no_primary_arg(self) -> None:
        assert resolve_arguments(["host", "getdata"]).primary_arg is None

    def test_command_case_is_preserved(self) -> None:
        assert resolve_arguments(["host", "GetStatus"]).command == "GetStatus"

    def test_only_flags_after_host(self) -> None:
        with pytest.raises(UsageError, match="No command specified."):
            resolve_arguments(["host", "-v", "-f"])


class TestHelp:
    @pytest.mark.parametrize("argv", [[], ["host"], ["-o", "out.txt", "host"]])
    def test_too_few_arguments(self, argv: list[str]) -> None:
        assert isinstance(resolve_arguments(argv), HelpRequest)


class TestListen:
    def test_listen_defaults(self) -> None:
        result = resolve_arguments(["listen"])
        assert isinstance(result, ListenInvocation)
        assert result.port == 3734
        assert result.acknowledge is False

    def test_listen_port_and_ack(self) -> None:
        result = resolve_arguments(["LISTEN", "4000", "Acknowledge"])
        assert result.port == 4000
        assert result.acknowledge is True

    def test_listen_anywhere_in_arguments(self) -> None:
        result = resolve_arguments(["ack", "5000", "listen"])
        assert isinstance(result, ListenInvocation)
        assert result.port == 5000
        assert result.acknowledge is True

    def test_first_integer_wins(self) -> None:
        assert resolve_arguments(["listen", "x", "4001", "4002"]).port == 4001

    def test_other_tokens_ignored(self) -> None:
        result = resolve_arguments(["listen", "host:abc", "-tX"])
        assert result.port == 3734

    def test_listen_output_redirect(self) -> None:
        result = resolve_arguments(["listen", "-o", "notes.log", "-h", "Started", "-v"])
        assert result.output_file == Path("notes.log")
        assert result.output_header == "Started"
        assert result.verbose is True

    def test_listen_port_out_of_range(self) -> None:
        with pytest.raises(UsageError, match="Invalid Port."):
            resolve_arguments(["listen", "99999"])

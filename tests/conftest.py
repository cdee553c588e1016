"""Shared test fixtures for the synutil test suite.

Provides in-memory terminal backend fakes, sinks writing to StringIO,
and factories for invocations and command contexts.
"""

from __future__ import annotations

import asyncio
import io
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import AsyncIterator, Callable

import pytest

from synutil.commands.base import CommandContext
from synutil.domain.models import (
    FingerprintEnrollMode,
    FingerprintThreshold,
    FingerprintUnitMode,
    InvocationDescriptor,
    NotificationType,
    ProgressEvent,
    TextAlignment,
)
from synutil.output.sink import OutputSink
from synutil.session import SessionManager
from synutil.terminal.base import (
    Notification,
    ProgrammingSession,
    TerminalBackend,
    TerminalSession,
)
from synutil.terminal.models import (
    FingerprintUnitStatus,
    HardwareConfiguration,
    NetworkConfiguration,
    TerminalStatus,
)


# ---------------------------------------------------------------------------
# Backend fakes
# ---------------------------------------------------------------------------


class FakeProgramming(ProgrammingSession):
    """Programming session recording every call in ``events``."""

    def __init__(self, events: list[str], blocks: int = 2, fail_on: set[str] | None = None) -> None:
        self.events = events
        self.blocks = blocks
        self.fail_on = fail_on or set()
        self.uploaded: list[tuple[Path, bool]] = []
        self.closed = False

    async def delete_table(self, table_type: str, table_id: int) -> None:
        self.events.append(f"delete_table:{table_type}:{table_id}")

    async def delete_all_tables(self) -> None:
        self.events.append("delete_all_tables")

    async def fix_mem_crash(self) -> None:
        self.events.append("fix_mem_crash")

    async def erase_all_memory(self) -> None:
        self.events.append("erase_all_memory")

    async def upload_table_from_file(self, path: Path, force: bool = False) -> AsyncIterator[ProgressEvent]:
        self.events.append(f"upload:{path.name}")
        for block in range(1, self.blocks + 1):
            if path.name in self.fail_on and block == self.blocks:
                raise OSError(f"terminal rejected block {block}")
            yield ProgressEvent(filename=path.name, current_block=block, total_blocks=self.blocks)
        self.uploaded.append((path, force))

    async def get_fingerprint_unit_status(self) -> FingerprintUnitStatus:
        self.events.append("get_fingerprint_unit_status")
        return FingerprintUnitStatus(
            comparison_mode="Normal",
            kernel_version="4.1",
            loaded_templates=12,
            maximum_templates=1000,
            fingerprint_unit_mode="Master",
            global_threshold="Medium",
            enroll_mode="Once",
        )

    async def set_fingerprint_unit_mode(self, mode: FingerprintUnitMode) -> None:
        self.events.append(f"set_fingerprint_unit_mode:{mode.value}")

    async def set_fingerprint_threshold(self, threshold: FingerprintThreshold) -> None:
        self.events.append(f"set_fingerprint_threshold:{threshold.value}")

    async def set_fingerprint_enroll_mode(self, mode: FingerprintEnrollMode) -> None:
        self.events.append(f"set_fingerprint_enroll_mode:{mode.value}")

    async def close(self) -> None:
        self.closed = True
        self.events.append("programming_closed")


class FakeSession(TerminalSession):
    """Terminal session recording every call in ``events``."""

    def __init__(self, events: list[str], records: list[str] | None = None, programming: FakeProgramming | None = None) -> None:
        self.events = events
        self.records = list(records or [])
        self.programming = programming or FakeProgramming(events)
        self.clock: datetime | None = None
        self.closed = False

    async def get_terminal_status(self) -> TerminalStatus:
        self.events.append("get_terminal_status")
        return TerminalStatus(
            hardware_model="SY-780",
            firmware_version="9.05",
            timestamp=datetime(2026, 10, 19, 8, 30),
            powered_on=True,
            memory_used=2048,
            polling_interval=timedelta(seconds=5),
            transport_type="tcp",
        )

    async def get_hardware_configuration(self) -> HardwareConfiguration:
        self.events.append("get_hardware_configuration")
        return HardwareConfiguration(terminal_id=3, host_serial_baud_rate=9600, host_serial_parameters="8n1")

    async def get_network_configuration(self) -> NetworkConfiguration:
        self.events.append("get_network_configuration")
        return NetworkConfiguration(terminal_ip_address="10.0.0.5", terminal_port=3734, enable_dhcp=True)

    async def set_terminal_clock(self, value: datetime) -> None:
        self.events.append("set_terminal_clock")
        self.clock = value

    async def get_data_and_acknowledge(self) -> str | None:
        self.events.append("get_data_and_acknowledge")
        return self.records.pop(0) if self.records else None

    async def reset_buffer(self) -> None:
        self.events.append("reset_buffer")

    async def clear_buffer(self) -> None:
        self.events.append("clear_buffer")

    async def halt(self) -> None:
        self.events.append("halt")

    async def run(self) -> None:
        self.events.append("run")

    async def enter_programming_mode(self) -> ProgrammingSession:
        self.events.append("programming_opened")
        return self.programming

    async def close(self) -> None:
        self.closed = True
        self.events.append("session_closed")


class FakeNotification(Notification):
    def __init__(self, notification_type: NotificationType, payload: str | None, terminal_id: int = 1) -> None:
        super().__init__(
            notification_type,
            "10.0.0.5",
            terminal_id,
            payload,
            timestamp=datetime(2026, 10, 19, 8, 30, 15, tzinfo=timezone(timedelta(hours=2))),
        )
        self.acknowledged = 0
        self.replies: list[tuple[bool, int, str, TextAlignment]] = []

    async def acknowledge(self) -> None:
        self.acknowledged += 1

    async def reply(self, ok: bool, code: int, text: str, alignment: TextAlignment) -> None:
        self.replies.append((ok, code, text, alignment))


class FakeBackend(TerminalBackend):
    """Backend handing out FakeSessions.

    Inbound notifications use a line format of ``D|<id>|<payload>`` or
    ``Q|<id>|<payload>``; acknowledgements are written back as ``ACK``
    and replies as ``REPLY <text>``.
    """

    def __init__(self, records: list[str] | None = None, blocks: int = 2, fail_on: set[str] | None = None) -> None:
        self.events: list[str] = []
        self.records = records
        self.blocks = blocks
        self.fail_on = fail_on
        self.sessions: list[FakeSession] = []
        self.connect_error: BaseException | None = None
        self.connect_delay = 0.0

    async def connect(self, host: str, port: int, terminal_id: int, timeout: float) -> TerminalSession:
        self.events.append(f"connect:{host}:{port}:{terminal_id}")
        if self.connect_delay:
            await asyncio.sleep(self.connect_delay)
        if self.connect_error is not None:
            raise self.connect_error
        session = FakeSession(
            self.events,
            records=self.records,
            programming=FakeProgramming(self.events, blocks=self.blocks, fail_on=self.fail_on),
        )
        self.sessions.append(session)
        return session

    async def read_notifications(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
    ) -> AsyncIterator[Notification]:
        address = writer.get_extra_info("peername")[0]
        while line := await reader.readline():
            kind, terminal_id, payload = line.decode().rstrip("\n").split("|", 2)
            notification_type = NotificationType.QUERY if kind == "Q" else NotificationType.DATA
            yield _LineNotification(notification_type, address, int(terminal_id), payload, writer)


class _LineNotification(Notification):
    def __init__(self, notification_type, remote_address, terminal_id, payload, writer) -> None:
        super().__init__(notification_type, remote_address, terminal_id, payload)
        self._writer = writer

    async def acknowledge(self) -> None:
        self._writer.write(b"ACK\n")
        await self._writer.drain()

    async def reply(self, ok: bool, code: int, text: str, alignment: TextAlignment) -> None:
        self._writer.write(f"REPLY {text} {code} {alignment.value}\n".encode())
        await self._writer.drain()


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def console() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def sink(console: io.StringIO) -> OutputSink:
    return OutputSink(console=console)


@pytest.fixture
def make_invocation() -> Callable[..., InvocationDescriptor]:
    def _make(command: str = "getstatus", *args: str, **overrides) -> InvocationDescriptor:
        values = {"host": "10.0.0.5", "command": command, "command_args": tuple(args)}
        values.update(overrides)
        return InvocationDescriptor(**values)

    return _make


@pytest.fixture
def make_context(
    backend: FakeBackend,
    sink: OutputSink,
    console: io.StringIO,
    make_invocation: Callable[..., InvocationDescriptor],
) -> Callable[..., CommandContext]:
    def _make(command: str = "getstatus", *args: str, **overrides) -> CommandContext:
        return CommandContext(
            invocation=make_invocation(command, *args, **overrides),
            sink=sink,
            sessions=SessionManager(backend=backend, timeout=1.0),
            console=console,
        )

    return _make

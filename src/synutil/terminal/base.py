"""Abstract interface of a terminal protocol backend.

The binary terminal protocol (handshake, framing, checksums, table
encoding, fingerprint unit commands) lives outside synutil. A backend
implements the classes below and is selected by import path in the
settings, enabling synutil to drive any terminal family without
changing the command layer.

Example usage::

    backend = MyBackend()
    session = await backend.connect("10.0.0.5", 3734, terminal_id=0, timeout=15.0)
    try:
        status = await session.get_terminal_status()
    finally:
        await session.close()
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import AsyncIterator

from synutil.domain.models import (
    FingerprintEnrollMode,
    FingerprintThreshold,
    FingerprintUnitMode,
    NotificationType,
    ProgressEvent,
    TextAlignment,
)
from synutil.terminal.models import (
    FingerprintUnitStatus,
    HardwareConfiguration,
    NetworkConfiguration,
    TerminalStatus,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TerminalError(Exception):
    """Base class for failures surfaced while talking to a terminal."""


class TerminalConnectionError(TerminalError, ConnectionError):
    """Raised when the transport cannot be established or bound."""


class TerminalTimeoutError(TerminalError, TimeoutError):
    """Raised when the terminal does not answer in time."""


class ProtocolError(TerminalError):
    """Raised for any other failure reported by the backend."""


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------


class ProgrammingSession(ABC):
    """Privileged sub-mode of a terminal session.

    Obtained from :meth:`TerminalSession.enter_programming_mode` and used
    for table and firmware-adjacent operations. Must be closed before
    the owning session.
    """

    @abstractmethod
    async def delete_table(self, table_type: str, table_id: int) -> None:
        """Delete one table, identified by type character and numeric id."""
        ...

    @abstractmethod
    async def delete_all_tables(self) -> None:
        ...

    @abstractmethod
    async def fix_mem_crash(self) -> None:
        ...

    @abstractmethod
    async def erase_all_memory(self) -> None:
        ...

    @abstractmethod
    def upload_table_from_file(self, path: Path, force: bool = False) -> AsyncIterator[ProgressEvent]:
        """Stream one RDY file to the terminal.

        Yields a :class:`ProgressEvent` after every block the terminal
        accepts. ``force`` bypasses the backend's own pre-upload
        validation and duplicate checks.

        Raises:
            TerminalError: If the transfer fails part-way.
        """
        ...

    @abstractmethod
    async def get_fingerprint_unit_status(self) -> FingerprintUnitStatus:
        ...

    @abstractmethod
    async def set_fingerprint_unit_mode(self, mode: FingerprintUnitMode) -> None:
        ...

    @abstractmethod
    async def set_fingerprint_threshold(self, threshold: FingerprintThreshold) -> None:
        ...

    @abstractmethod
    async def set_fingerprint_enroll_mode(self, mode: FingerprintEnrollMode) -> None:
        ...

    @abstractmethod
    async def close(self) -> None:
        """Leave programming mode. Safe to call more than once."""
        ...


class TerminalSession(ABC):
    """An open, handshaken connection to one terminal."""

    @abstractmethod
    async def get_terminal_status(self) -> TerminalStatus:
        ...

    @abstractmethod
    async def get_hardware_configuration(self) -> HardwareConfiguration:
        ...

    @abstractmethod
    async def get_network_configuration(self) -> NetworkConfiguration:
        ...

    @abstractmethod
    async def set_terminal_clock(self, value: datetime) -> None:
        ...

    @abstractmethod
    async def get_data_and_acknowledge(self) -> str | None:
        """Fetch the next transaction record, acknowledging it.

        Returns None once the terminal's buffer is exhausted.
        """
        ...

    @abstractmethod
    async def reset_buffer(self) -> None:
        ...

    @abstractmethod
    async def clear_buffer(self) -> None:
        ...

    @abstractmethod
    async def halt(self) -> None:
        ...

    @abstractmethod
    async def run(self) -> None:
        ...

    @abstractmethod
    async def enter_programming_mode(self) -> ProgrammingSession:
        ...

    @abstractmethod
    async def close(self) -> None:
        """Close the connection. Safe to call more than once."""
        ...


# ---------------------------------------------------------------------------
# Notifications
# ---------------------------------------------------------------------------


class Notification(ABC):
    """A message pushed by a terminal to a listening endpoint.

    Concrete backends decode the wire message and implement the two
    response operations on the connection it arrived on.
    """

    def __init__(
        self,
        notification_type: NotificationType,
        remote_address: str,
        terminal_id: int,
        payload: str | None,
        timestamp: datetime | None = None,
    ) -> None:
        self.type = notification_type
        self.remote_address = remote_address
        self.terminal_id = terminal_id
        self.payload = payload
        self.timestamp = timestamp or datetime.now().astimezone()

    @abstractmethod
    async def acknowledge(self) -> None:
        """Send the protocol-level acknowledgement for a data message."""
        ...

    @abstractmethod
    async def reply(self, ok: bool, code: int, text: str, alignment: TextAlignment) -> None:
        """Answer a query message with a display text and status code."""
        ...

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(type={self.type.value}, remote={self.remote_address}, "
            f"terminal_id={self.terminal_id}, payload={self.payload!r})"
        )


# ---------------------------------------------------------------------------
# Backend
# ---------------------------------------------------------------------------


class TerminalBackend(ABC):
    """Entry point of a protocol implementation."""

    @abstractmethod
    async def connect(self, host: str, port: int, terminal_id: int, timeout: float) -> TerminalSession:
        """Open a TCP connection and complete the session handshake.

        Raises:
            OSError: If the transport cannot be established.
            TimeoutError: If the handshake is not answered in time.
        """
        ...

    @abstractmethod
    def read_notifications(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
    ) -> AsyncIterator[Notification]:
        """Decode inbound notifications from one accepted connection.

        The iterator must not read the next message until the consumer
        asks for it, so each notification is fully handled (and
        acknowledged) before the following one is read. It ends when
        the peer closes the connection.
        """
        ...

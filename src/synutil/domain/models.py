"""Core domain models for the synutil system.

These models represent the values flowing through a single run: the
resolved invocation, upload progress events, command outcomes, and the
enumerations shared with terminal backends.
"""

from __future__ import annotations

import enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PORT = 3734


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class NotificationType(str, enum.Enum):
    """Kind of message pushed by a terminal to a listening endpoint."""

    DATA = "data"  # Transaction data, acknowledged
    QUERY = "query"  # Query awaiting a reply


class TextAlignment(str, enum.Enum):
    """Alignment of a reply message on the terminal display."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class ErrorKind(str, enum.Enum):
    """Category of a failed command, mapped to a diagnostic by the CLI."""

    USAGE = "usage"
    CONNECTION = "connection"
    TIMEOUT = "timeout"
    PROTOCOL = "protocol"
    UPLOAD_ABORT = "upload_abort"
    CONFIGURATION = "configuration"


class FingerprintUnitMode(str, enum.Enum):
    MASTER = "Master"
    SLAVE = "Slave"


class FingerprintThreshold(str, enum.Enum):
    VERY_HIGH = "VeryHigh"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    VERY_LOW = "VeryLow"


class FingerprintEnrollMode(str, enum.Enum):
    ONCE = "Once"
    TWICE = "Twice"
    DUAL = "Dual"


def parse_enum_setting(enum_type: type[enum.Enum], setting: str | None) -> enum.Enum | None:
    """Match a command-line word against an enum's values, ignoring case.

    Returns None when the setting is missing or does not name a member.
    """
    if not setting:
        return None
    wanted = setting.strip().lower()
    for member in enum_type:
        if member.value.lower() == wanted:
            return member
    return None


# ---------------------------------------------------------------------------
# Invocation Models
# ---------------------------------------------------------------------------


class InvocationDescriptor(BaseModel):
    """Everything resolved from the command line for a one-shot command.

    Built once by the router and passed explicitly to every handler.
    """

    model_config = ConfigDict(frozen=True)

    host: str = Field(min_length=1, description="Terminal host name or IP address")
    port: int = Field(default=DEFAULT_PORT, ge=0, le=65535)
    terminal_id: int = Field(default=0, ge=0)
    verbose: bool = Field(default=False, description="Emit timed trace output")
    force: bool = Field(default=False, description="Bypass upload validation checks")
    output_file: Path | None = Field(default=None, description="Append output to this file")
    output_header: str | None = Field(default=None, description="One-shot header line")
    command: str = Field(description="Command name as typed")
    command_args: tuple[str, ...] = Field(default=())

    @property
    def primary_arg(self) -> str | None:
        """The first command argument, used by single-argument commands."""
        return self.command_args[0] if self.command_args else None


class ListenInvocation(BaseModel):
    """Resolved arguments for the passive listener form."""

    model_config = ConfigDict(frozen=True)

    port: int = Field(default=DEFAULT_PORT, ge=0, le=65535)
    acknowledge: bool = Field(default=False)
    verbose: bool = Field(default=False)
    output_file: Path | None = Field(default=None)
    output_header: str | None = Field(default=None)


class HelpRequest(BaseModel):
    """Returned by the router when there is nothing to run."""

    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Progress / Outcome Models
# ---------------------------------------------------------------------------


class ProgressEvent(BaseModel):
    """One block of a file transfer has been accepted by the terminal."""

    model_config = ConfigDict(frozen=True)

    filename: str
    current_block: int = Field(ge=0)
    total_blocks: int = Field(ge=0)

    @property
    def complete(self) -> bool:
        return self.current_block == self.total_blocks


class Outcome(BaseModel):
    """Result of running a command; ``kind`` is None on success."""

    model_config = ConfigDict(frozen=True)

    kind: ErrorKind | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.kind is None

    @classmethod
    def success(cls, message: str = "") -> Outcome:
        return cls(kind=None, message=message)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> Outcome:
        return cls(kind=kind, message=message)

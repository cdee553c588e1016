"""Shared plumbing for command handlers.

A handler is an async callable taking a CommandContext and returning an
Outcome. Handlers validate their arguments before acquiring a session,
so bad input never reaches the network.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Sequence, TextIO

from synutil.domain.models import InvocationDescriptor, Outcome
from synutil.output.sink import OutputSink
from synutil.session import SessionManager

DEFAULT_BAR_SIZE = 30


@dataclass(frozen=True)
class CommandContext:
    """Everything a handler may use; nothing is read from globals."""

    invocation: InvocationDescriptor
    sink: OutputSink
    sessions: SessionManager
    console: TextIO = field(default_factory=lambda: sys.stdout)
    bar_size: int = DEFAULT_BAR_SIZE


CommandHandler = Callable[[CommandContext], Awaitable[Outcome]]


def render_fields(sink: OutputSink, rows: Sequence[tuple[str, object]], width: int = 21) -> None:
    """Write a blank-line framed block of aligned ``Label:  value`` rows."""
    sink.emit_line()
    for label, value in rows:
        sink.emit_line("{0}{1}", f"{label}:".ljust(width), value)
    sink.emit_line()

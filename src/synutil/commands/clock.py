"""Terminal clock command."""

from __future__ import annotations

import logging
from datetime import datetime

from synutil.commands.base import CommandContext
from synutil.domain.models import ErrorKind, Outcome

logger = logging.getLogger(__name__)

CLOCK_FORMAT = "%Y-%m-%d %H:%M:%S"

SET_TIME_USAGE = (
    "Leave blank to set the current time from this computer,\n"
    "or pass in YYYY-MM-DD HH:MM:SS format."
)


def parse_clock_args(args: tuple[str, ...]) -> datetime | None:
    """Return the requested time, local now for no args, None if malformed."""
    if not args:
        return datetime.now()
    if len(args) != 2:
        return None
    try:
        return datetime.strptime(" ".join(args), CLOCK_FORMAT)
    except ValueError:
        return None


async def set_time(ctx: CommandContext) -> Outcome:
    value = parse_clock_args(ctx.invocation.command_args)
    if value is None:
        return Outcome.failure(ErrorKind.USAGE, SET_TIME_USAGE)

    async with ctx.sessions.session(ctx.invocation) as session:
        await session.set_terminal_clock(value)
    logger.debug("Terminal clock set to %s", value.isoformat())

    ctx.sink.emit_line("Set the terminal clock to {0:%Y-%m-%d %H:%M}.", value)
    return Outcome.success()

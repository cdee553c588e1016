"""Transaction data and program control commands."""

from __future__ import annotations

import logging

from synutil.commands.base import CommandContext
from synutil.domain.models import Outcome

logger = logging.getLogger(__name__)


async def get_data(ctx: CommandContext) -> Outcome:
    """Drain the terminal's transaction buffer, acknowledging each record."""
    received = 0
    async with ctx.sessions.session(ctx.invocation) as session:
        ctx.sink.emit_line()
        while (record := await session.get_data_and_acknowledge()) is not None:
            ctx.sink.emit_line("{0}", record)
            received += 1

    if not received:
        ctx.sink.emit_line("The terminal has no transaction data to send.")
    logger.debug("Received %d transaction record(s)", received)
    return Outcome.success()


async def reset_data(ctx: CommandContext) -> Outcome:
    async with ctx.sessions.session(ctx.invocation) as session:
        await session.reset_buffer()

    ctx.sink.emit_line()
    ctx.sink.emit_line("Data has been reset.")
    return Outcome.success()


async def clear_data(ctx: CommandContext) -> Outcome:
    async with ctx.sessions.session(ctx.invocation) as session:
        await session.clear_buffer()

    ctx.sink.emit_line()
    ctx.sink.emit_line("Data has been cleared.")
    return Outcome.success()


async def halt(ctx: CommandContext) -> Outcome:
    async with ctx.sessions.session(ctx.invocation) as session:
        await session.halt()

    ctx.sink.emit_line()
    ctx.sink.emit_line("Sent command to halt the terminal program.")
    return Outcome.success()


async def run(ctx: CommandContext) -> Outcome:
    async with ctx.sessions.session(ctx.invocation) as session:
        await session.run()

    ctx.sink.emit_line()
    ctx.sink.emit_line("Sent command to run the terminal program.")
    return Outcome.success()

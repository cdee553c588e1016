"""Table maintenance commands, all run inside a programming session."""

from __future__ import annotations

import logging

from synutil.commands.base import CommandContext
from synutil.domain.models import ErrorKind, Outcome

logger = logging.getLogger(__name__)

DELETE_TABLE_USAGE = "Pass the table type and id to delete.  Example:  deletetable x001"
INVALID_TABLE_NAME = "Invalid table name."


def parse_table_name(name: str) -> tuple[str, int] | None:
    """Split ``x001`` into its type character and numeric id.

    Returns None unless the name is exactly one character followed by
    three digits.
    """
    if len(name) != 4:
        return None
    suffix = name[1:]
    if not suffix.isascii() or not suffix.isdigit():
        return None
    return name[0], int(suffix)


async def delete_table(ctx: CommandContext) -> Outcome:
    name = ctx.invocation.primary_arg
    if not name:
        return Outcome.failure(ErrorKind.USAGE, DELETE_TABLE_USAGE)
    parsed = parse_table_name(name)
    if parsed is None:
        return Outcome.failure(ErrorKind.USAGE, INVALID_TABLE_NAME)
    table_type, table_id = parsed

    async with ctx.sessions.session(ctx.invocation) as session:
        async with ctx.sessions.programming(session) as programming:
            await programming.delete_table(table_type, table_id)

    ctx.sink.emit_line()
    ctx.sink.emit_line("Sent command to delete table {0} from the terminal.", name)
    return Outcome.success()


async def delete_all_tables(ctx: CommandContext) -> Outcome:
    async with ctx.sessions.session(ctx.invocation) as session:
        async with ctx.sessions.programming(session) as programming:
            await programming.delete_all_tables()

    ctx.sink.emit_line()
    ctx.sink.emit_line("Sent command to delete all tables from the terminal.")
    return Outcome.success()


async def fix_mem_crash(ctx: CommandContext) -> Outcome:
    async with ctx.sessions.session(ctx.invocation) as session:
        async with ctx.sessions.programming(session) as programming:
            await programming.fix_mem_crash()

    ctx.sink.emit_line()
    ctx.sink.emit_line("Sent command to fix terminal memcrash.")
    return Outcome.success()


async def erase_all_memory(ctx: CommandContext) -> Outcome:
    async with ctx.sessions.session(ctx.invocation) as session:
        async with ctx.sessions.programming(session) as programming:
            await programming.erase_all_memory()

    ctx.sink.emit_line()
    ctx.sink.emit_line("Sent command to erase all terminal memory.")
    return Outcome.success()

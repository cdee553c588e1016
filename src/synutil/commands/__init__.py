"""Command handlers for synutil.

Maps command names (case-insensitive) to async handlers and converts
whatever a handler raises into an Outcome, so the entry point only has
to turn outcomes into messages and exit statuses.

Public API:
    CommandContext -- Explicit inputs of a handler
    COMMANDS -- Command name to handler table
    dispatch -- Run the handler named by the invocation
"""

from __future__ import annotations

import asyncio
import logging

from synutil.commands import clock, data, fingerprint, info, tables, upload
from synutil.commands.base import CommandContext, CommandHandler
from synutil.domain.models import ErrorKind, Outcome
from synutil.terminal.base import TerminalConnectionError, TerminalTimeoutError
from synutil.upload import UploadAbort

logger = logging.getLogger(__name__)

UNSUPPORTED_COMMAND = "Unsupported command."

COMMANDS: dict[str, CommandHandler] = {
    "getstatus": info.get_status,
    "gethardwareinfo": info.get_hardware_info,
    "getnetworkinfo": info.get_network_info,
    "getfingerinfo": info.get_fingerprint_info,
    "getfingerprintinfo": info.get_fingerprint_info,
    "settime": clock.set_time,
    "deletetable": tables.delete_table,
    "deletealltables": tables.delete_all_tables,
    "fixmemcrash": tables.fix_mem_crash,
    "eraseallmemory": tables.erase_all_memory,
    "upload": upload.upload,
    "halt": data.halt,
    "run": data.run,
    "getdata": data.get_data,
    "resetdata": data.reset_data,
    "cleardata": data.clear_data,
    "setfingermode": fingerprint.set_finger_mode,
    "setfingerthreshold": fingerprint.set_finger_threshold,
    "setfingerenrollment": fingerprint.set_finger_enrollment,
    "getfingertemplate": fingerprint.transfer_templates,
    "putfingertemplate": fingerprint.transfer_templates,
}

__all__ = ["COMMANDS", "CommandContext", "CommandHandler", "dispatch"]


async def dispatch(ctx: CommandContext) -> Outcome:
    """Run the command named by ``ctx.invocation``.

    Unknown names fail with a usage outcome before any session is
    acquired. Failures raised by the handler are classified by kind.
    """
    handler = COMMANDS.get(ctx.invocation.command.lower())
    if handler is None:
        return Outcome.failure(ErrorKind.USAGE, UNSUPPORTED_COMMAND)

    logger.debug("Running %s against %s:%d", ctx.invocation.command, ctx.invocation.host, ctx.invocation.port)
    try:
        return await handler(ctx)
    except UploadAbort as e:
        return Outcome.failure(ErrorKind.UPLOAD_ABORT, str(e))
    except (TerminalTimeoutError, asyncio.TimeoutError, TimeoutError) as e:
        return Outcome.failure(ErrorKind.TIMEOUT, str(e) or "The terminal did not respond in time.")
    except (TerminalConnectionError, ConnectionError) as e:
        return Outcome.failure(ErrorKind.CONNECTION, str(e))
    except Exception as e:
        logger.debug("Command %s failed", ctx.invocation.command, exc_info=True)
        return Outcome.failure(ErrorKind.PROTOCOL, str(e) or type(e).__name__)

"""Fingerprint unit configuration commands.

Template transfer is not supported; its command names are recognised
and answered without contacting the terminal.
"""

from __future__ import annotations

import logging

from synutil.commands.base import CommandContext
from synutil.domain.models import (
    ErrorKind,
    FingerprintEnrollMode,
    FingerprintThreshold,
    FingerprintUnitMode,
    Outcome,
    parse_enum_setting,
)

logger = logging.getLogger(__name__)

TEMPLATES_NOT_IMPLEMENTED = "Fingerprint template transfer is not implemented."


INVALID_UNIT_MODE = 'Invalid mode.  Pass either "Master" or "Slave"'
INVALID_THRESHOLD = 'Invalid threshold.  Pass one of "VeryHigh", "High", "Medium", "Low" or "VeryLow"'
INVALID_ENROLL_MODE = 'Invalid mode.  Pass one of "Once", "Twice", or "Dual"'


async def set_finger_mode(ctx: CommandContext) -> Outcome:
    mode = parse_enum_setting(FingerprintUnitMode, ctx.invocation.primary_arg)
    if mode is None:
        return Outcome.failure(ErrorKind.USAGE, INVALID_UNIT_MODE)

    async with ctx.sessions.session(ctx.invocation) as session:
        async with ctx.sessions.programming(session) as programming:
            await programming.set_fingerprint_unit_mode(mode)

    ctx.sink.emit_line("Set the fingerprint unit mode to {0}.", mode.value)
    return Outcome.success()


async def set_finger_threshold(ctx: CommandContext) -> Outcome:
    threshold = parse_enum_setting(FingerprintThreshold, ctx.invocation.primary_arg)
    if threshold is None:
        return Outcome.failure(ErrorKind.USAGE, INVALID_THRESHOLD)

    async with ctx.sessions.session(ctx.invocation) as session:
        async with ctx.sessions.programming(session) as programming:
            await programming.set_fingerprint_threshold(threshold)

    ctx.sink.emit_line("Set the fingerprint global threshold to {0}.", threshold.value)
    return Outcome.success()


async def set_finger_enrollment(ctx: CommandContext) -> Outcome:
    mode = parse_enum_setting(FingerprintEnrollMode, ctx.invocation.primary_arg)
    if mode is None:
        return Outcome.failure(ErrorKind.USAGE, INVALID_ENROLL_MODE)

    async with ctx.sessions.session(ctx.invocation) as session:
        async with ctx.sessions.programming(session) as programming:
            await programming.set_fingerprint_enroll_mode(mode)

    ctx.sink.emit_line("Set the fingerprint enroll mode to {0}.", mode.value)
    return Outcome.success()


async def transfer_templates(ctx: CommandContext) -> Outcome:
    logger.debug("Template command %s requested", ctx.invocation.command)
    return Outcome.failure(ErrorKind.USAGE, TEMPLATES_NOT_IMPLEMENTED)

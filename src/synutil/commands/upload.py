"""Upload command and its console progress bar."""

from __future__ import annotations

import logging
import math
from typing import TextIO

from synutil.commands.base import DEFAULT_BAR_SIZE, CommandContext
from synutil.domain.models import ErrorKind, Outcome, ProgressEvent
from synutil.upload import UploadPipeline

logger = logging.getLogger(__name__)

UPLOAD_USAGE = "Pass the path(s) of the file(s) to upload."

FILLED_CHAR = "▒"
EMPTY_CHAR = "░"


class ProgressBarRenderer:
    """Draws one in-place progress bar per uploaded file.

    A new bar line starts whenever the filename changes; a finished file
    ends with ``Complete!``.
    """

    def __init__(self, console: TextIO, bar_size: int = DEFAULT_BAR_SIZE) -> None:
        self._console = console
        self._bar_size = bar_size
        self._filename: str | None = None
        self._line_open = False
        self._last_width = 0

    def render(self, event: ProgressEvent) -> None:
        if event.filename != self._filename:
            self.finish()
            self._filename = event.filename
            self._last_width = 0

        prefix = f"Uploading {event.filename:<12} "
        percent = event.current_block / event.total_blocks if event.total_blocks else 1.0
        filled = min(self._bar_size, math.floor(percent * self._bar_size))
        bar = FILLED_CHAR * filled + EMPTY_CHAR * (self._bar_size - filled)

        if event.complete:
            line = f"{prefix}{bar} Complete!"
        else:
            line = f"{prefix}{bar}{f' {percent * 100:.2f}%':<12}[{event.current_block}/{event.total_blocks}]"

        self._console.write("\r" + line.ljust(self._last_width))
        self._last_width = len(line)
        self._line_open = True
        if event.complete:
            self._console.write("\n")
            self._line_open = False
        self._console.flush()

    def finish(self) -> None:
        """Terminate a bar left incomplete, e.g. by a failed transfer."""
        if self._line_open:
            self._console.write("\n")
            self._console.flush()
            self._line_open = False


async def upload(ctx: CommandContext) -> Outcome:
    invocation = ctx.invocation
    if not invocation.primary_arg:
        return Outcome.failure(ErrorKind.USAGE, UPLOAD_USAGE)

    # Verbose runs show the timed trace instead of bars.
    renderer = None if invocation.verbose else ProgressBarRenderer(ctx.console, ctx.bar_size)

    async with ctx.sessions.session(invocation) as session:
        async with ctx.sessions.programming(session) as programming:
            pipeline = UploadPipeline(programming, force=invocation.force)
            if renderer is not None:
                ctx.console.write("\n")
            try:
                async for event in pipeline.run(invocation.command_args):
                    if renderer is not None:
                        renderer.render(event)
            finally:
                if renderer is not None:
                    renderer.finish()

    report = pipeline.report
    ctx.sink.emit_line()
    ctx.sink.emit_line("Uploaded {0} file(s).", len(report.uploaded))
    if report.skipped:
        ctx.sink.emit_line("Skipped {0} duplicate file(s).", len(report.skipped))
    return Outcome.success()

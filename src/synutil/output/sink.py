"""Output sink for command results and listener notifications.

Directs formatted text either to the console or to an append-only file,
optionally writing a one-shot header line before the first output.
Callers never branch on the destination.
"""

from __future__ import annotations

import logging
import sys
import threading
from pathlib import Path
from typing import TextIO

logger = logging.getLogger(__name__)


class OutputSink:
    """Serialized writer for formatted output.

    Usage::

        sink = OutputSink(path=Path("status.txt"), header="Terminal 1")
        sink.reset_target()
        sink.emit_line("Firmware Version:    {0}", "1.2")
    """

    def __init__(
        self,
        path: Path | str | None = None,
        header: str | None = None,
        console: TextIO | None = None,
    ) -> None:
        self._path = Path(path) if path else None
        self._header = header
        self._pending_header = header
        self._console = console
        self._lock = threading.RLock()

    @property
    def path(self) -> Path | None:
        return self._path

    @property
    def is_file_backed(self) -> bool:
        return self._path is not None

    def emit(self, fmt: str = "", *args: object) -> None:
        """Write formatted text without a line terminator.

        ``fmt`` is passed through ``str.format`` only when ``args`` are
        given, so literal braces in plain text are safe.
        """
        text = fmt.format(*args) if args else fmt
        with self._lock:
            if self._pending_header is not None:
                header, self._pending_header = self._pending_header, None
                self._write(header + "\n")
            self._write(text)

    def emit_line(self, fmt: str = "", *args: object) -> None:
        """Write formatted text followed by a newline."""
        text = fmt.format(*args) if args else fmt
        self.emit(text + "\n")

    def reset_target(self) -> None:
        """Discard previous file output so the next dump starts clean.

        Deletes the output file if it exists and re-arms the header.
        Has no effect on a console sink.
        """
        if self._path is None:
            return
        with self._lock:
            try:
                self._path.unlink()
                logger.debug("Removed previous output file %s", self._path)
            except FileNotFoundError:
                pass
            self._pending_header = self._header

    def _write(self, text: str) -> None:
        if self._path is not None:
            with open(self._path, "a", encoding="utf-8") as f:
                f.write(text)
            return
        console = self._console or sys.stdout
        console.write(text)
        console.flush()

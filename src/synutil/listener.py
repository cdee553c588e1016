"""Passive listener for terminal-initiated notifications.

Binds a TCP endpoint, accepts terminal connections concurrently and
renders every notification to the output sink, optionally acknowledging
data messages and replying to queries. Runs until cancelled.
"""

from __future__ import annotations

import asyncio
import errno
import logging
from typing import Callable

from synutil.domain.models import NotificationType, TextAlignment
from synutil.output.sink import OutputSink
from synutil.terminal.base import Notification, TerminalBackend, TerminalConnectionError

logger = logging.getLogger(__name__)

ACKNOWLEDGED_SUFFIX = "  [ACKNOWLEDGED]"
QUERY_REPLY_TEXT = "OK"
QUERY_REPLY_CODE = 0


def format_notification(notification: Notification) -> str:
    """Render ``timestamp [address|terminal id]  payload``."""
    timestamp = notification.timestamp.isoformat(sep=" ", timespec="seconds")
    return f"{timestamp} [{notification.remote_address}|{notification.terminal_id}]  {notification.payload}"


class ListenerService:
    """Receives notifications from any number of terminals.

    Each connection is read in its own task; a connection's next
    notification is not read until the current one has been rendered
    and answered. Rendering is serialized across connections.

    Usage::

        service = ListenerService(backend, OutputSink(), acknowledge=True)
        await service.serve(3734)
    """

    def __init__(
        self,
        backend: TerminalBackend,
        sink: OutputSink,
        acknowledge: bool = False,
        host: str = "0.0.0.0",
    ) -> None:
        self._backend = backend
        self._sink = sink
        self._acknowledge = acknowledge
        self._host = host
        self._render_lock = asyncio.Lock()
        self._writers: set[asyncio.StreamWriter] = set()
        self._server: asyncio.AbstractServer | None = None

    @property
    def is_running(self) -> bool:
        return self._server is not None and self._server.is_serving()

    @property
    def active_connections(self) -> int:
        return len(self._writers)

    async def start(self, port: int) -> asyncio.AbstractServer:
        """Bind the passive endpoint.

        Raises:
            TerminalConnectionError: If the port cannot be bound.
        """
        try:
            self._server = await asyncio.start_server(self._handle_connection, self._host, port)
        except OSError as e:
            if e.errno == errno.EADDRINUSE:
                raise TerminalConnectionError(
                    f"Another application is already listening on port {port}."
                ) from e
            raise TerminalConnectionError(f"Cannot listen on port {port}: {e}") from e
        logger.info("Listening on %s:%d (acknowledge=%s)", self._host, port, self._acknowledge)
        return self._server

    async def serve(self, port: int, ready: Callable[[], None] | None = None) -> None:
        """Bind and serve until cancelled, then close every connection.

        ``ready`` is called once the endpoint is bound.
        """
        await self.start(port)
        if ready is not None:
            ready()
        # serve_forever() waits on idle connections when cancelled.
        try:
            await asyncio.get_running_loop().create_future()
        finally:
            await self.close()

    async def close(self) -> None:
        """Stop accepting and close all open terminal connections."""
        if self._server is not None:
            self._server.close()
        for writer in list(self._writers):
            writer.close()
        self._writers.clear()
        logger.info("Listener stopped")

    async def _handle_connection(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        peer = writer.get_extra_info("peername")
        logger.debug("Terminal connected from %s", peer)
        self._writers.add(writer)
        try:
            async for notification in self._backend.read_notifications(reader, writer):
                await self.handle(notification)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning("Connection from %s failed: %s", peer, e)
        finally:
            self._writers.discard(writer)
            writer.close()
            logger.debug("Terminal %s disconnected", peer)

    async def handle(self, notification: Notification) -> None:
        """Render one notification and apply the acknowledge policy."""
        if not notification.payload:
            logger.debug("Dropping empty notification %r", notification)
            return

        line = format_notification(notification)
        try:
            if self._acknowledge:
                await self._respond(notification)
                line += ACKNOWLEDGED_SUFFIX
        finally:
            # Only the sink is shared; a stalled terminal must not hold it.
            async with self._render_lock:
                self._sink.emit_line("{0}", line)

    async def _respond(self, notification: Notification) -> None:
        if notification.type is NotificationType.QUERY:
            await notification.reply(True, QUERY_REPLY_CODE, QUERY_REPLY_TEXT, TextAlignment.CENTER)
            logger.debug("Replied to query from terminal %d", notification.terminal_id)
        else:
            await notification.acknowledge()
            logger.debug("Acknowledged data from terminal %d", notification.terminal_id)

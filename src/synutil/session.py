"""Scoped acquisition of terminal sessions.

Every command that talks to a terminal does so inside::

    async with manager.session(invocation) as session:
        async with manager.programming(session) as p:
            ...

Both scopes close their resource on every exit path, the programming
session strictly before the outer session.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from synutil.domain.models import InvocationDescriptor
from synutil.terminal import load_backend
from synutil.terminal.base import (
    ProgrammingSession,
    TerminalBackend,
    TerminalConnectionError,
    TerminalSession,
    TerminalTimeoutError,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15.0


class SessionManager:
    """Acquires terminal sessions from a backend for one command.

    Args:
        backend: Pre-built backend (for testing). If None, the backend
            is loaded from ``backend_path`` on first acquisition.
        backend_path: ``"module:attribute"`` import path of the backend.
        timeout: Seconds allowed for connect plus handshake.
    """

    def __init__(
        self,
        backend: TerminalBackend | None = None,
        backend_path: str = "",
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._backend = backend
        self._backend_path = backend_path
        self._timeout = timeout

    @property
    def backend(self) -> TerminalBackend:
        if self._backend is None:
            self._backend = load_backend(self._backend_path)
        return self._backend

    async def acquire(self, host: str, port: int, terminal_id: int) -> TerminalSession:
        """Connect and handshake within the configured timeout.

        Raises:
            TerminalConnectionError: If the transport cannot be established.
            TerminalTimeoutError: If the terminal does not respond in time.
        """
        backend = self.backend
        logger.debug("Connecting to %s:%d (terminal %d)", host, port, terminal_id)
        try:
            session = await asyncio.wait_for(
                backend.connect(host, port, terminal_id, self._timeout),
                timeout=self._timeout,
            )
        except TerminalTimeoutError:
            raise
        except (asyncio.TimeoutError, TimeoutError) as e:
            raise TerminalTimeoutError(
                f"The terminal at {host}:{port} did not respond within {self._timeout:g} seconds."
            ) from e
        except TerminalConnectionError:
            raise
        except OSError as e:
            raise TerminalConnectionError(f"Cannot connect to {host}:{port}: {e}") from e
        logger.debug("Session established with %s:%d", host, port)
        return session

    @asynccontextmanager
    async def session(self, invocation: InvocationDescriptor) -> AsyncIterator[TerminalSession]:
        """Hold a terminal session for the duration of the block."""
        session = await self.acquire(invocation.host, invocation.port, invocation.terminal_id)
        try:
            yield session
        finally:
            await session.close()
            logger.debug("Session with %s:%d closed", invocation.host, invocation.port)

    @asynccontextmanager
    async def programming(self, session: TerminalSession) -> AsyncIterator[ProgrammingSession]:
        """Hold a programming sub-session of ``session`` for the block."""
        programming = await session.enter_programming_mode()
        logger.debug("Entered programming mode")
        try:
            yield programming
        finally:
            await programming.close()
            logger.debug("Left programming mode")

"""Terminal protocol backend interface for synutil.

Public API:
    TerminalBackend -- Abstract protocol entry point
    TerminalSession -- Abstract open session
    ProgrammingSession -- Abstract programming sub-session
    Notification -- Abstract inbound listener message
    load_backend -- Instantiate a backend from a 'module:attribute' path
"""

from __future__ import annotations

import importlib
import logging

from synutil.terminal.base import (
    Notification,
    ProgrammingSession,
    ProtocolError,
    TerminalBackend,
    TerminalConnectionError,
    TerminalError,
    TerminalSession,
    TerminalTimeoutError,
)

logger = logging.getLogger(__name__)

__all__ = [
    "Notification",
    "ProgrammingSession",
    "ProtocolError",
    "TerminalBackend",
    "TerminalConnectionError",
    "TerminalError",
    "TerminalSession",
    "TerminalTimeoutError",
    "load_backend",
]


def load_backend(path: str) -> TerminalBackend:
    """Import and instantiate the backend named by ``path``.

    ``path`` has the form ``"package.module:attribute"`` where the
    attribute is a TerminalBackend subclass or a zero-argument factory.

    Raises:
        ProtocolError: If no backend is configured or it cannot be loaded.
    """
    if not path:
        raise ProtocolError(
            "No terminal backend configured. Set terminal.backend in synutil.yaml "
            "or SYNUTIL_TERMINAL__BACKEND to 'module:attribute'."
        )
    module_name, sep, attribute = path.partition(":")
    if not sep or not module_name or not attribute:
        raise ProtocolError(f"Invalid backend path {path!r}, expected 'module:attribute'.")
    try:
        module = importlib.import_module(module_name)
        factory = getattr(module, attribute)
    except (ImportError, AttributeError) as e:
        raise ProtocolError(f"Cannot load terminal backend {path!r}: {e}") from e

    try:
        backend = factory()
    except Exception as e:
        raise ProtocolError(f"Cannot create terminal backend {path!r}: {e}") from e
    if not isinstance(backend, TerminalBackend):
        raise ProtocolError(f"{path!r} did not produce a TerminalBackend.")
    logger.debug("Loaded terminal backend %s", path)
    return backend

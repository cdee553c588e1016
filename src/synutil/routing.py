"""Command-line argument resolution.

Turns the raw argument list into exactly one of:

    InvocationDescriptor -- a one-shot command against a terminal
    ListenInvocation     -- the passive listener form
    HelpRequest          -- nothing to run, show the help text

The grammar is positional and tolerant of flag order, so it is resolved
by hand rather than with argparse::

    synutil <host>[:<port>] [-t<id>] [-v] [-f] [-o <file>] [-h <header>] <command> [args...]
    synutil listen [port] [ack]
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Sequence, Union

from synutil.domain.models import (
    DEFAULT_PORT,
    HelpRequest,
    InvocationDescriptor,
    ListenInvocation,
)

logger = logging.getLogger(__name__)

MAX_PORT = 65535

_DIGITS = re.compile(r"[0-9]+")

Resolution = Union[InvocationDescriptor, ListenInvocation, HelpRequest]


class UsageError(Exception):
    """Raised when the command line cannot be resolved.

    The message is the diagnostic shown to the user; no network action
    has been attempted when this is raised.
    """


def _parse_non_negative(text: str) -> int | None:
    if _DIGITS.fullmatch(text):
        return int(text)
    return None


def _parse_port(text: str) -> int:
    port = _parse_non_negative(text)
    if port is None or port > MAX_PORT:
        raise UsageError("Invalid Port.")
    return port


def _strip_value_options(args: Sequence[str]) -> tuple[list[str], Path | None, str | None]:
    """Remove ``-o <path>`` and ``-h <text>`` pairs wherever they occur."""
    remaining: list[str] = []
    output_file: Path | None = None
    output_header: str | None = None
    index = 0
    while index < len(args):
        token = args[index]
        option = token.lower()
        if option in ("-o", "-h"):
            if index + 1 >= len(args):
                raise UsageError(f"Missing value for {token}.")
            value = args[index + 1]
            if option == "-o":
                output_file = Path(value)
            else:
                output_header = value
            index += 2
            continue
        remaining.append(token)
        index += 1
    return remaining, output_file, output_header


def _has_flag(args: Sequence[str], flag: str) -> bool:
    return any(token.lower() == flag for token in args)


def _resolve_listen(
    args: Sequence[str],
    output_file: Path | None,
    output_header: str | None,
    default_port: int,
) -> ListenInvocation:
    port = default_port
    for token in args:
        value = _parse_non_negative(token)
        if value is not None:
            if value > MAX_PORT:
                raise UsageError("Invalid Port.")
            port = value
            break

    acknowledge = any(token.lower().startswith("ack") for token in args)
    return ListenInvocation(
        port=port,
        acknowledge=acknowledge,
        verbose=_has_flag(args, "-v"),
        output_file=output_file,
        output_header=output_header,
    )


def resolve_arguments(argv: Sequence[str], default_port: int = DEFAULT_PORT) -> Resolution:
    """Resolve process arguments into an invocation.

    Args:
        argv: Arguments without the program name.
        default_port: Port used when none is given.

    Raises:
        UsageError: If the host, port, terminal id or options are malformed.
    """
    args, output_file, output_header = _strip_value_options(argv)

    if any(token.lower() == "listen" for token in args):
        return _resolve_listen(args, output_file, output_header, default_port)

    if len(args) < 2:
        return HelpRequest()

    # host and port
    host, sep, port_text = args[0].partition(":")
    port = _parse_port(port_text) if sep else default_port
    if not host:
        raise UsageError("Invalid Host.")

    # terminal id
    terminal_id = 0
    tid_arg = next((token for token in args[1:] if token.lower().startswith("-t")), None)
    if tid_arg is not None:
        parsed = _parse_non_negative(tid_arg[2:])
        if parsed is None:
            raise UsageError("Invalid Terminal ID.")
        terminal_id = parsed

    # command and its arguments
    command_index = next(
        (index for index in range(1, len(args)) if not args[index].startswith("-")),
        None,
    )
    if command_index is None:
        raise UsageError("No command specified.")
    command_args = tuple(token for token in args[command_index + 1:] if not token.startswith("-"))

    descriptor = InvocationDescriptor(
        host=host,
        port=port,
        terminal_id=terminal_id,
        verbose=_has_flag(args, "-v"),
        force=_has_flag(args, "-f"),
        output_file=output_file,
        output_header=output_header,
        command=args[command_index],
        command_args=command_args,
    )
    logger.debug("Resolved invocation: %s", descriptor)
    return descriptor

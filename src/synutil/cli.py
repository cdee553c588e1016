"""Command-line interface for synutil.

Resolves the arguments once, then either runs a single command against
a terminal or starts the passive listener. This is the only place where
outcomes become messages and exit statuses.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Sequence, TextIO

import yaml

from synutil import __version__
from synutil.commands import CommandContext, dispatch
from synutil.config.settings import Settings, load_settings
from synutil.domain.models import (
    ErrorKind,
    HelpRequest,
    InvocationDescriptor,
    ListenInvocation,
    Outcome,
)
from synutil.listener import ListenerService
from synutil.output.sink import OutputSink
from synutil.routing import UsageError, resolve_arguments
from synutil.session import SessionManager
from synutil.terminal import load_backend
from synutil.terminal.base import ProtocolError, TerminalBackend, TerminalConnectionError
from synutil.utils.logging import setup_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1

TIMEOUT_HINT = "Be sure that you specified the correct host, port, and terminal ID."

HELP_TEXT = """\
synutil {version} - administer networked time and attendance terminals

Usage:
  synutil <host>[:<port>] [-t<id>] [-v] [-f] [-o <file>] [-h <header>] <command> [args...]
  synutil listen [port] [ack] [-v] [-o <file>] [-h <header>]

Options:
  -t<id>        Terminal ID (default 0)
  -v            Verbose, timed trace output
  -f            Force upload, bypassing validation and duplicate checks
  -o <file>     Append output to a file (recreated before each info dump)
  -h <header>   Header line written once before the first output

Commands:
  getstatus                       Terminal status
  gethardwareinfo                 Hardware configuration
  getnetworkinfo                  Network configuration
  getfingerinfo                   Fingerprint unit status
  settime [YYYY-MM-DD HH:MM:SS]   Set the clock (default: this computer's time)
  deletetable <x001>              Delete one table (type + 3-digit id)
  deletealltables                 Delete all tables
  fixmemcrash                     Recover from a memory crash
  eraseallmemory                  Erase all terminal memory
  upload <path...>                Upload RDY files (wildcards allowed)
  halt                            Halt the terminal program
  run                             Run the terminal program
  getdata                         Retrieve and acknowledge transaction data
  resetdata                       Reset the transaction buffer
  cleardata                       Clear the transaction buffer
  setfingermode <mode>            master | slave
  setfingerthreshold <level>      veryhigh | high | medium | low | verylow
  setfingerenrollment <mode>      once | twice | dual

The default port is 3734.  "listen" waits for terminals to connect and
prints their notifications; "ack" acknowledges them.

Exit status is 0 on success, help and usage errors, and 1 when the
configuration is invalid or the terminal cannot be reached or rejects
the command.
"""


def render_help(stream: TextIO | None = None) -> None:
    """Print the usage text with the current version."""
    (stream or sys.stdout).write(HELP_TEXT.format(version=f"v{__version__}"))


def report(outcome: Outcome, stream: TextIO | None = None) -> int:
    """Print an outcome's diagnostic and return the exit status."""
    out = stream or sys.stdout
    if outcome.message:
        out.write(outcome.message + "\n")
    if outcome.kind is ErrorKind.TIMEOUT:
        out.write(TIMEOUT_HINT + "\n")
    # Usage errors end the run cleanly; nothing was attempted.
    if outcome.ok or outcome.kind is ErrorKind.USAGE:
        return EXIT_OK
    return EXIT_FAILURE


def run_command(
    invocation: InvocationDescriptor,
    settings: Settings,
    sink: OutputSink,
    backend: TerminalBackend | None = None,
) -> Outcome:
    sessions = SessionManager(
        backend=backend,
        backend_path=settings.terminal.backend,
        timeout=settings.terminal.timeout,
    )
    ctx = CommandContext(
        invocation=invocation,
        sink=sink,
        sessions=sessions,
        bar_size=settings.upload.bar_size,
    )
    return asyncio.run(dispatch(ctx))


def run_listener(
    invocation: ListenInvocation,
    settings: Settings,
    sink: OutputSink,
    backend: TerminalBackend | None = None,
) -> Outcome:
    """Serve notifications until interrupted."""
    try:
        backend = backend or load_backend(settings.terminal.backend)
    except ProtocolError as e:
        return Outcome.failure(ErrorKind.PROTOCOL, str(e))

    service = ListenerService(
        backend,
        sink,
        acknowledge=invocation.acknowledge,
        host=settings.listener.bind_host,
    )

    def announce() -> None:
        print()
        print(f"Listening on port {invocation.port}.  Press Ctrl-C to terminate.")
        print()

    try:
        asyncio.run(service.serve(invocation.port, ready=announce))
    except KeyboardInterrupt:
        logger.info("Interrupted, listener closed")
    except TerminalConnectionError as e:
        return Outcome.failure(ErrorKind.CONNECTION, str(e))
    return Outcome.success()


def main(argv: Sequence[str] | None = None, backend: TerminalBackend | None = None) -> int:
    """Main entry point for the synutil CLI."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        settings = load_settings()
    # pydantic ValidationError and SettingsError are both ValueErrors.
    except (ValueError, yaml.YAMLError, OSError) as e:
        return report(Outcome.failure(ErrorKind.CONFIGURATION, f"Invalid configuration: {e}"))

    try:
        resolution = resolve_arguments(args, default_port=settings.terminal.default_port)
    except UsageError as e:
        return report(Outcome.failure(ErrorKind.USAGE, str(e)))

    if isinstance(resolution, HelpRequest):
        render_help()
        return EXIT_OK

    setup_logging(settings.logging, verbose=resolution.verbose)
    sink = OutputSink(path=resolution.output_file, header=resolution.output_header)

    if isinstance(resolution, ListenInvocation):
        outcome = run_listener(resolution, settings, sink, backend=backend)
    else:
        outcome = run_command(resolution, settings, sink, backend=backend)
    return report(outcome)


if __name__ == "__main__":
    sys.exit(main())

"""synutil -- Command-line utility for networked time-and-attendance terminals.

Connects to a terminal over TCP, issues one administrative or data
command and prints the result, or runs as a passive listener that
receives terminal-initiated notifications. The terminal wire protocol
itself is supplied by a pluggable backend (see ``synutil.terminal``).
"""

__version__ = "0.1.0"

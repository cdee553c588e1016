"""Output redirection for synutil.

Public API:
    OutputSink -- Console or append-only file writer with one-shot header
"""

from synutil.output.sink import OutputSink

__all__ = ["OutputSink"]

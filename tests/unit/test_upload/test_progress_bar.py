"""Tests for the upload progress bar renderer."""

from __future__ import annotations

import io

from synutil.commands.upload import EMPTY_CHAR, FILLED_CHAR, ProgressBarRenderer
from synutil.domain.models import ProgressEvent


def _event(name: str, current: int, total: int) -> ProgressEvent:
    return ProgressEvent(filename=name, current_block=current, total_blocks=total)


class TestProgressBarRenderer:
    def test_partial_progress(self) -> None:
        console = io.StringIO()
        renderer = ProgressBarRenderer(console, bar_size=10)
        renderer.render(_event("emp.rdy", 1, 4))
        output = console.getvalue()
        assert output.startswith("\rUploading emp.rdy      ")
        assert FILLED_CHAR * 2 + EMPTY_CHAR * 8 in output
        assert "25.00%" in output
        assert output.endswith("[1/4]")

    def test_completion_marker(self) -> None:
        console = io.StringIO()
        renderer = ProgressBarRenderer(console, bar_size=10)
        renderer.render(_event("emp.rdy", 1, 2))
        renderer.render(_event("emp.rdy", 2, 2))
        last_line = console.getvalue().split("\r")[-1]
        assert FILLED_CHAR * 10 + " Complete!" in last_line
        assert last_line.endswith("\n")

    def test_new_file_starts_new_bar(self) -> None:
        console = io.StringIO()
        renderer = ProgressBarRenderer(console, bar_size=10)
        renderer.render(_event("a.rdy", 1, 2))
        renderer.render(_event("b.rdy", 1, 1))
        lines = console.getvalue().split("\n")
        assert "Uploading a.rdy" in lines[0]
        assert "Uploading b.rdy" in lines[1]
        assert "Complete!" in lines[1]

    def test_finish_closes_open_bar(self) -> None:
        console = io.StringIO()
        renderer = ProgressBarRenderer(console, bar_size=10)
        renderer.render(_event("a.rdy", 1, 3))
        renderer.finish()
        renderer.finish()
        assert console.getvalue().count("\n") == 1

    def test_zero_blocks_counts_as_complete(self) -> None:
        console = io.StringIO()
        renderer = ProgressBarRenderer(console, bar_size=5)
        renderer.render(_event("empty.rdy", 0, 0))
        assert FILLED_CHAR * 5 + " Complete!" in console.getvalue()

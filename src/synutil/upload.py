"""Bulk upload of RDY files to a terminal.

Expands path patterns into an ordered, de-duplicated list of files and
streams each one through a programming session. Progress is exposed as
a lazy sequence of ProgressEvent values, so rendering stays with the
caller.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import AsyncIterator, Iterable, Sequence

from pydantic import BaseModel, Field

from synutil.domain.models import ProgressEvent
from synutil.terminal.base import ProgrammingSession

logger = logging.getLogger(__name__)

# Files defining terminal directories are sent before the tables using them.
DIRECTORY_FILE_PREFIX = "dir"


class UploadAbort(Exception):
    """Raised when one file fails; the remaining files are not sent.

    Files uploaded before the failure stay on the terminal.
    """

    def __init__(self, filename: str, uploaded: Sequence[Path], cause: BaseException) -> None:
        message = f"Upload of {filename} failed: {cause}"
        if uploaded:
            message += f" ({len(uploaded)} file(s) sent before the failure were kept.)"
        super().__init__(message)
        self.filename = filename
        self.uploaded = list(uploaded)
        self.cause = cause


class UploadReport(BaseModel):
    """Files sent and files skipped as duplicates during one job."""

    uploaded: list[Path] = Field(default_factory=list)
    skipped: list[Path] = Field(default_factory=list)


def upload_order(path: Path) -> tuple[int, str]:
    """Sort key putting directory-definition files first."""
    is_directory_file = path.name.lower().startswith(DIRECTORY_FILE_PREFIX)
    return (0 if is_directory_file else 1, str(path))


def expand_pattern(pattern: str, cwd: Path | None = None) -> list[Path]:
    """Expand one directory+glob pattern into its ordered file matches.

    Returns an empty list when the pattern has no file part or its
    directory does not exist.
    """
    directory, name = os.path.split(pattern)
    if not name:
        logger.debug("Skipping pattern without a file name: %s", pattern)
        return []

    base = Path(cwd) if cwd is not None else Path.cwd()
    full_dir = (base / directory).resolve() if directory else base.resolve()
    if not full_dir.is_dir():
        logger.debug("Skipping pattern with missing directory: %s", pattern)
        return []

    matches = [path for path in full_dir.glob(name) if path.is_file()]
    return sorted(matches, key=upload_order)


def resolve_upload_files(patterns: Iterable[str], cwd: Path | None = None) -> list[Path]:
    """Expand patterns in command-line order, each pattern sorted on its own."""
    files: list[Path] = []
    for pattern in patterns:
        files.extend(expand_pattern(pattern, cwd))
    return files


class UploadPipeline:
    """Sends every file matched by a set of patterns.

    Usage::

        pipeline = UploadPipeline(programming, force=False)
        async for event in pipeline.run(["tables/*.rdy"]):
            render(event)
        print(pipeline.report.uploaded)
    """

    def __init__(self, programming: ProgrammingSession, force: bool = False) -> None:
        self._programming = programming
        self._force = force
        self.report = UploadReport()

    async def run(self, patterns: Iterable[str], cwd: Path | None = None) -> AsyncIterator[ProgressEvent]:
        """Upload all matched files, yielding transfer progress.

        A base name (case-insensitive) is sent at most once per job.

        Raises:
            UploadAbort: If a file fails part-way; later files are not sent.
        """
        self.report = UploadReport()
        seen: set[str] = set()

        for path in resolve_upload_files(patterns, cwd):
            key = path.name.lower()
            if key in seen:
                logger.info("Skipping %s, a file with that name was already uploaded", path)
                self.report.skipped.append(path)
                continue
            seen.add(key)

            logger.debug("Uploading %s (force=%s)", path, self._force)
            try:
                async for event in self._programming.upload_table_from_file(path, force=self._force):
                    yield event
            except Exception as e:
                raise UploadAbort(path.name, self.report.uploaded, e) from e
            self.report.uploaded.append(path)
            logger.debug("Uploaded %s", path)

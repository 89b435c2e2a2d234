"""Terminal transcript capture.

Duplicates everything written to stdout and stderr into a timestamped plain-text
file for the lifetime of a teardown run.
"""

from __future__ import annotations

import re
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, TextIO

ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")


class TeeStream:
    """Text stream writing to a terminal stream and a log file."""

    def __init__(self, stream: TextIO, log: TextIO) -> None:
        self.stream = stream
        self.log = log

    def write(self, data: str) -> int:
        self.stream.write(data)
        self.log.write(ANSI_ESCAPE.sub("", data))
        return len(data)

    def flush(self) -> None:
        self.stream.flush()
        self.log.flush()

    def isatty(self) -> bool:
        return self.stream.isatty()

    def fileno(self) -> int:
        return self.stream.fileno()

    @property
    def encoding(self) -> str:
        return getattr(self.stream, "encoding", "utf-8")

    @property
    def errors(self) -> str:
        return getattr(self.stream, "errors", "strict")


class Transcript:
    """Context manager that tees stdout/stderr into a log file.

    Storage structure:
        ./logs/delete-all-stacks/
            delete-log-2025-11-11_15-30-00.txt

    Attributes:
        log_dir: Directory holding transcripts
        path: Transcript file path for this run
    """

    def __init__(self, log_dir: str, prefix: str = "delete-log", now: Optional[datetime] = None) -> None:
        self.log_dir = Path(log_dir)
        timestamp = (now or datetime.now()).strftime("%Y-%m-%d_%H-%M-%S")
        self.path = self.log_dir / f"{prefix}-{timestamp}.txt"
        self._file: Optional[TextIO] = None
        self._saved: Optional[tuple[TextIO, TextIO]] = None

    def __enter__(self) -> "Transcript":
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self._file = open(self.path, "a", encoding="utf-8")
        self._saved = (sys.stdout, sys.stderr)
        sys.stdout = TeeStream(sys.stdout, self._file)  # type: ignore[assignment]
        sys.stderr = TeeStream(sys.stderr, self._file)  # type: ignore[assignment]
        return self

    def __exit__(self, *exc_info: object) -> None:
        if self._saved is not None:
            sys.stdout.flush()
            sys.stderr.flush()
            sys.stdout, sys.stderr = self._saved
            self._saved = None
        if self._file is not None:
            self._file.close()
            self._file = None

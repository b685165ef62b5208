"""Output capture for ctortrace.

Captures stdout/stderr while an object is constructed so its trace can be
returned instead of printed.
"""

from __future__ import annotations

import sys
from contextlib import contextmanager
from dataclasses import dataclass
from io import StringIO
from typing import Generator


@dataclass
class CapturedOutput:
    """Container for captured stdout/stderr."""

    stdout: str = ""
    stderr: str = ""

    @property
    def has_output(self) -> bool:
        """Whether any output was captured."""
        return bool(self.stdout or self.stderr)

    @property
    def lines(self) -> list[str]:
        """Captured stdout split into lines."""
        return self.stdout.splitlines()


@contextmanager
def capture_output() -> Generator[CapturedOutput, None, None]:
    """Context manager that captures stdout and stderr.

    Usage:
        with capture_output() as captured:
            print("hello")

        assert captured.stdout == "hello\\n"
    """
    captured = CapturedOutput()

    old_stdout = sys.stdout
    old_stderr = sys.stderr

    new_stdout = StringIO()
    new_stderr = StringIO()

    try:
        sys.stdout = new_stdout
        sys.stderr = new_stderr

        yield captured

    finally:
        sys.stdout = old_stdout
        sys.stderr = old_stderr

        captured.stdout = new_stdout.getvalue()
        captured.stderr = new_stderr.getvalue()

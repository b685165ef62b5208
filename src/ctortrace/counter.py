"""Construction counter.

Every call to ``value()`` prints a trace line and hands out the next integer,
so field initializers that use it reveal the order they ran in.

The process-wide counter is plain mutable state with no locking. Callers that
share it across threads must synchronize externally.
"""

from __future__ import annotations

from typing import TextIO


class Counter:
    """Monotonic counter that traces every increment."""

    def __init__(self, out: TextIO | None = None):
        """Initialize the counter.

        Args:
            out: Stream for the ``value()`` trace line. None means whatever
                ``sys.stdout`` is at call time.
        """
        self.out = out
        self._seed = 0

    @property
    def current(self) -> int:
        """Last value handed out (0 before the first call)."""
        return self._seed

    def value(self, out: TextIO | None = None) -> int:
        """Print ``value()``, increment, and return the new value."""
        print("value()", file=out if out is not None else self.out)
        self._seed += 1
        return self._seed

    def reset(self) -> None:
        self._seed = 0


_counter = Counter()


def value() -> int:
    """Increment the process-wide counter and return it."""
    return _counter.value()


def reset_counter() -> None:
    """Reset the process-wide counter (for tests and fresh runs)."""
    _counter.reset()


def get_counter() -> int:
    """Get the current process-wide counter without incrementing it."""
    return _counter.current


def default_counter() -> Counter:
    """The process-wide counter instance."""
    return _counter

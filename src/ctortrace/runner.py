"""Trace runner - constructs a target and collects what it printed."""

from __future__ import annotations

from typing import Any, Sequence

from pydantic import BaseModel, Field

from ctortrace.capture import capture_output
from ctortrace.construction import Constructible
from ctortrace.counter import Counter, reset_counter
from ctortrace.diagnostics import format_line_diff
from ctortrace.resolver import resolve_target
from ctortrace.semantics import Language, Semantics

# What constructing Derived prints under each language's rules
EXPECTED_LINES: dict[Language, tuple[str, ...]] = {
    Language.JAVA: (
        "value()",
        "Base ctor",
        "Type=Derived",
        "Base.i=1",
        "Derived.init",
        "Derived.j=0",
        "value()",
        "Derived ctor",
        "Type=Derived",
        "Derived.j=2",
    ),
    Language.CSHARP: (
        "value()",
        "value()",
        "Base ctor",
        "Derived.init",
        "Derived.j=1",
        "Type=Derived",
        "Base.i=2",
        "Derived ctor",
        "Type=Derived",
        "Derived.j=1",
    ),
    Language.CPP: (
        "value()",
        "Base ctor",
        "Type=Base",
        "Base::i=1",
        "Base::init",
        "Base::i=1",
        "value()",
        "Derived ctor",
        "Type=Derived",
        "Derived::j=2",
    ),
}


class Trace(BaseModel):
    """Lines printed while constructing one object."""

    target: str
    language: Language
    lines: list[str] = Field(default_factory=list)
    stderr: str = ""
    """Anything written to stderr during construction."""
    instance: Any = Field(default=None, exclude=True)
    """The constructed object."""

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


def run_trace(
    target: str | type[Constructible] = "Derived",
    language: Language | str = Language.JAVA,
    counter: Counter | None = None,
) -> Trace:
    """Construct a target and capture its trace.

    Args:
        target: Class, or a name/dotted path resolved with resolve_target.
        language: Construction semantics to apply.
        counter: Counter for field initializers. If None, the process-wide
            counter is reset first so every run starts from 1.

    Returns:
        The captured trace.

    Raises:
        ResolutionError: If the target cannot be resolved.
        ConstructionError: If the target is not constructible.
    """
    cls = resolve_target(target) if isinstance(target, str) else target
    semantics = Semantics.for_language(language)

    if counter is None:
        reset_counter()

    with capture_output() as captured:
        instance = cls(counter=counter, semantics=semantics)

    return Trace(
        target=cls.__qualname__,
        language=semantics.language,
        lines=captured.lines,
        stderr=captured.stderr,
        instance=instance,
    )


def expected_lines(language: Language | str = Language.JAVA) -> list[str]:
    """The canonical trace of constructing Derived under a language's rules."""
    return list(EXPECTED_LINES[Language(language)])


def compare_lines(expected: Sequence[str], actual: Sequence[str]) -> list[str]:
    """Diff two traces. Empty when they match."""
    return format_line_diff(expected, actual)


def format_trace(trace: Trace, numbered: bool = False) -> str:
    """Format a trace for display.

    Args:
        trace: The trace to format.
        numbered: Prefix each line with its 1-based position.
    """
    if not numbered:
        return trace.text
    width = len(str(len(trace.lines)))
    return "\n".join(f"{n:>{width}}. {line}" for n, line in enumerate(trace.lines, 1))

"""Diagnostics and error reporting for ctortrace.

Provides detailed error messages with actionable suggestions.
"""

from dataclasses import dataclass, field
from itertools import zip_longest
from typing import Sequence


@dataclass
class SearchAttempt:
    """Record of a single search attempt during resolution."""

    location: str  # What was searched (module path, attribute path)
    found: bool
    reason: str | None = None  # Why it failed (if not found)


@dataclass
class DiagnosticContext:
    """Accumulated context while resolving or building a hierarchy."""

    target: str
    searches: list[SearchAttempt] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)

    def add_search(self, location: str, found: bool, reason: str | None = None) -> None:
        """Record a search attempt."""
        self.searches.append(SearchAttempt(location, found, reason))

    def add_suggestion(self, suggestion: str) -> None:
        """Add a suggested fix."""
        self.suggestions.append(suggestion)

    def format_error(self, summary: str) -> str:
        """Format a detailed error message.

        Args:
            summary: The main error message.

        Returns:
            Formatted error with search history and suggestions.
        """
        lines = [summary, ""]

        if self.searches:
            lines.append("Searched:")
            for attempt in self.searches:
                icon = "✓" if attempt.found else "✗"
                line = f"  {icon} {attempt.location}"
                if attempt.reason:
                    line += f" ({attempt.reason})"
                lines.append(line)
            lines.append("")

        if self.suggestions:
            lines.append("Suggestions:")
            for i, suggestion in enumerate(self.suggestions, 1):
                lines.append(f"  {i}. {suggestion}")

        return "\n".join(lines).rstrip()


class ResolutionError(Exception):
    """Raised when a construction target cannot be resolved.

    Includes diagnostic context about what was searched.
    """

    def __init__(self, message: str, context: DiagnosticContext | None = None):
        self.context = context
        if context:
            message = context.format_error(message)
        super().__init__(message)


class ConstructionError(Exception):
    """Raised when a resolved target cannot be constructed."""

    def __init__(self, message: str, context: DiagnosticContext | None = None):
        self.context = context
        if context:
            message = context.format_error(message)
        super().__init__(message)


class HierarchyError(TypeError):
    """Raised when a class hierarchy breaks the phase protocol."""

    def __init__(self, message: str, context: DiagnosticContext | None = None):
        self.context = context
        if context:
            message = context.format_error(message)
        super().__init__(message)


def format_line_diff(expected: Sequence[str], actual: Sequence[str]) -> list[str]:
    """Format a line-by-line diff between two traces.

    Args:
        expected: The expected lines.
        actual: The lines actually produced.

    Returns:
        List of diff lines, empty when the traces match.
    """
    lines = []

    for number, (exp_line, act_line) in enumerate(zip_longest(expected, actual), 1):
        if exp_line == act_line:
            continue
        if act_line is None:
            lines.append(f"  - Missing line {number}: {exp_line!r}")
        elif exp_line is None:
            lines.append(f"  + Extra line {number}: {act_line!r}")
        else:
            lines.append(f"  ≠ line {number}: expected {exp_line!r}, got {act_line!r}")

    return lines


def suggest_phase_methods(class_name: str) -> str:
    """Generate a suggestion for splitting ``__init__`` into phase methods.

    Args:
        class_name: Name of the offending class.

    Returns:
        Formatted suggestion with example code.
    """
    return f"""Split __init__ into construction phases:

  class {class_name}(...):
      def _initialize_fields(self):
          # Field initializers
          ...

      def _construct(self):
          # Constructor body
          ...
"""

"""Language semantics for replaying a construction sequence.

The same Base/Derived pair behaves differently depending on the rules of the
language it is written in. Each preset captures the rules that change the
trace.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class Language(str, Enum):
    """Languages whose construction rules can be replayed."""

    JAVA = "java"
    CSHARP = "csharp"
    CPP = "cpp"


class FieldOrder(str, Enum):
    """When field initializers run relative to constructor bodies."""

    BASE_FIRST = "base_first"  # Each class: fields, then its ctor body
    MOST_DERIVED_FIRST = "most_derived_first"  # All fields (derived up), then all ctor bodies


class Semantics(BaseModel):
    """Rules that drive one construction."""

    model_config = ConfigDict(frozen=True)

    language: Language = Language.JAVA

    field_order: FieldOrder = FieldOrder.BASE_FIRST
    """Ordering of field initializers and constructor bodies."""

    dynamic_dispatch: bool = True
    """Whether overridable calls made during construction reach the most-derived override."""

    report_constructing_type: bool = False
    """Whether the runtime type during construction is the class being constructed."""

    init_before_report: bool = False
    """Whether the base constructor calls ``init`` before printing its state."""

    separator: str = "."
    """Separator between owner and member in trace labels."""

    @classmethod
    def for_language(cls, language: Language | str) -> "Semantics":
        """Get the preset for a language.

        Raises:
            ValueError: If the language is unknown.
        """
        return PRESETS[Language(language)]


PRESETS: dict[Language, Semantics] = {
    Language.JAVA: Semantics(language=Language.JAVA),
    Language.CSHARP: Semantics(
        language=Language.CSHARP,
        field_order=FieldOrder.MOST_DERIVED_FIRST,
        init_before_report=True,
    ),
    Language.CPP: Semantics(
        language=Language.CPP,
        dynamic_dispatch=False,
        report_constructing_type=True,
        separator="::",
    ),
}

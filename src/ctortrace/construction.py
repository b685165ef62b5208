"""Phase-sequenced object construction.

Python runs whatever ``__init__`` says in whatever order it says it, so the
language rules being demonstrated are sequenced here explicitly. Each class
in a hierarchy declares up to two phases in its own body:

- ``_initialize_fields(self)``: the field initializers
- ``_construct(self)``: the constructor body

``Constructible.__init__`` walks the hierarchy base-most first and runs the
phases in the order the active ``Semantics`` dictate. Any overridable call made
through ``dispatch`` while this is happening may observe subclass fields at
their class-level default, since their own initializers have not run yet.

Fields are declared with a class annotation. An annotated field without a
class-level default is seeded with its type's zero value (``int()``,
``str()``, ...; None when the type cannot be called without arguments).
Reading an undeclared field through ``emit_field`` before it is assigned
raises ``ConstructionError``.
"""

from __future__ import annotations

import inspect
import sys
from typing import Any, ClassVar, TextIO, get_origin

from ctortrace.counter import Counter, default_counter
from ctortrace.diagnostics import (
    ConstructionError,
    DiagnosticContext,
    HierarchyError,
    suggest_phase_methods,
)
from ctortrace.semantics import FieldOrder, Language, Semantics

FIELD_PHASE = "_initialize_fields"
BODY_PHASE = "_construct"


class Constructible:
    """Base class for hierarchies whose construction order is traced."""

    under_construction: type | None = None
    """Class whose phase is currently running, None outside construction."""

    constructed: bool = False

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if "__init__" in cls.__dict__:
            ctx = DiagnosticContext(target=cls.__qualname__)
            ctx.add_suggestion(suggest_phase_methods(cls.__name__))
            raise HierarchyError(
                f"{cls.__qualname__} defines __init__; construction phases would not be sequenced",
                context=ctx,
            )
        _seed_field_defaults(cls)

    def __init__(
        self,
        counter: Counter | None = None,
        semantics: Semantics | None = None,
        out: TextIO | None = None,
    ):
        """Construct the object, running every phase of the hierarchy.

        Args:
            counter: Counter used by field initializers. Defaults to the
                process-wide counter.
            semantics: Construction rules. Defaults to Java semantics.
            out: Stream for trace lines. None means ``sys.stdout``.
        """
        self.counter = counter if counter is not None else default_counter()
        self.semantics = semantics or Semantics.for_language(Language.JAVA)
        self.out = out

        chain = self.construction_chain()
        if self.semantics.field_order is FieldOrder.MOST_DERIVED_FIRST:
            for klass in reversed(chain):
                self._run_phase(klass, FIELD_PHASE)
            for klass in chain:
                self._run_phase(klass, BODY_PHASE)
        else:
            for klass in chain:
                self._run_phase(klass, FIELD_PHASE)
                self._run_phase(klass, BODY_PHASE)

        self.under_construction = None
        self.constructed = True

    @classmethod
    def construction_chain(cls) -> list[type[Constructible]]:
        """Classes taking part in construction, base-most first."""
        return [
            klass
            for klass in reversed(cls.__mro__)
            if issubclass(klass, Constructible) and klass is not Constructible
        ]

    def _run_phase(self, klass: type, phase: str) -> None:
        # Only phases declared in the class body; inherited ones already ran.
        step = klass.__dict__.get(phase)
        if step is None:
            return
        self.under_construction = klass
        step(self)

    def dispatch(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """Call an overridable method the way the active semantics resolve it.

        With dynamic dispatch the most-derived override runs, even from inside
        a base constructor. With static dispatch a call made during
        construction resolves from the class currently being constructed.
        """
        owner: type = type(self)
        if not self.semantics.dynamic_dispatch and self.under_construction is not None:
            owner = self.under_construction
        method = getattr(owner, name)
        return method(self, *args, **kwargs)

    def runtime_type_name(self) -> str:
        """Name of the object's type as the active semantics report it."""
        if self.semantics.report_constructing_type and self.under_construction is not None:
            return self.under_construction.__name__
        return type(self).__name__

    def next_value(self) -> int:
        """Draw the next value from the counter, tracing to this object's stream."""
        return self.counter.value(out=self.out if self.out is not None else sys.stdout)

    def label(self, owner: str, member: str) -> str:
        return f"{owner}{self.semantics.separator}{member}"

    def emit(self, line: str) -> None:
        """Write one trace line."""
        print(line, file=self.out)

    def emit_type(self) -> None:
        self.emit(f"Type={self.runtime_type_name()}")

    def emit_field(self, owner: str, name: str) -> None:
        """Write ``<owner><sep><name>=<value>`` for a field."""
        try:
            field_value = getattr(self, name)
        except AttributeError:
            ctx = DiagnosticContext(target=f"{type(self).__qualname__}.{name}")
            ctx.add_suggestion(f"Declare the field with a class annotation, e.g. '{name}: int = 0'")
            raise ConstructionError(f"Field {name!r} was read before it was assigned", context=ctx) from None
        self.emit(f"{self.label(owner, name)}={field_value}")


def _seed_field_defaults(cls: type) -> None:
    """Give annotated fields without a default their type's zero value."""
    try:
        annotations = inspect.get_annotations(cls, eval_str=True)
    except NameError:
        annotations = inspect.get_annotations(cls)

    for name, hint in annotations.items():
        if hasattr(cls, name) or hint is ClassVar or get_origin(hint) is ClassVar:
            continue
        setattr(cls, name, _zero_value(hint))


def _zero_value(hint: Any) -> Any:
    if not isinstance(hint, type):
        return None
    try:
        return hint()
    except TypeError:
        return None

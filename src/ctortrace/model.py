"""The Base/Derived pair whose construction is traced.

Constructing ``Derived`` runs, in order: Base's field initializer, Base's
constructor (which calls the ``init`` hook), Derived's field initializer,
Derived's constructor. Under Java semantics the hook already reaches
``Derived.init``, which sees ``j`` before it has been assigned.
"""

from ctortrace.construction import Constructible


class Base(Constructible):
    i: int = 0

    def _initialize_fields(self) -> None:
        self.i = self.next_value()

    def _construct(self) -> None:
        self.emit("Base ctor")
        if self.semantics.init_before_report:
            self.dispatch("init")
            self._report()
        else:
            self._report()
            self.dispatch("init")

    def _report(self) -> None:
        self.emit_type()
        self.emit_field("Base", "i")

    def init(self) -> None:
        """Overridable hook called from the Base constructor."""
        self.emit(self.label("Base", "init"))
        self.emit_field("Base", "i")


class Derived(Base):
    j: int = 0  # Observed by init() before its initializer runs

    def _initialize_fields(self) -> None:
        self.j = self.next_value()

    def _construct(self) -> None:
        self.emit("Derived ctor")
        self.emit_type()
        self.emit_field("Derived", "j")

    def init(self) -> None:
        self.emit(self.label("Derived", "init"))
        self.emit_field("Derived", "j")


class MoreDerived(Derived):
    """Overrides the hook only; no fields, no constructor body."""

    def init(self) -> None:
        self.emit(self.label("MoreDerived", "init"))
        self.emit_field("Derived", "j")

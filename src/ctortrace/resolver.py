"""Target resolution for ctortrace.

Resolves targets like "ctortrace.model.Derived" to a Constructible class.
Bare class names are looked up in ctortrace.model.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path
from typing import Iterable

from ctortrace.construction import Constructible
from ctortrace.diagnostics import ConstructionError, DiagnosticContext, ResolutionError

DEFAULT_MODULE = "ctortrace.model"


def add_source_paths(source_paths: Iterable[str], project_root: Path | None = None) -> None:
    """Add source paths to sys.path so targets in them can be imported."""
    project_root = project_root or Path.cwd()
    for source_path in source_paths:
        if not Path(source_path).is_absolute():
            source_path = str(project_root / source_path)
        if source_path not in sys.path:
            sys.path.insert(0, source_path)


def resolve_target(target: str) -> type[Constructible]:
    """Resolve a target path to a Constructible subclass.

    Target formats:
    - "Derived" -> ctortrace.model.Derived
    - "module.Class"
    - "package.module.Outer.Class"

    Raises:
        ResolutionError: If nothing importable matches the target.
        ConstructionError: If the target is not a Constructible subclass.
    """
    path = target if "." in target else f"{DEFAULT_MODULE}.{target}"
    parts = path.split(".")
    ctx = DiagnosticContext(target=target)

    # Try progressively shorter module paths
    for i in range(len(parts) - 1, 0, -1):
        module_path = ".".join(parts[:i])

        try:
            module = importlib.import_module(module_path)
            ctx.add_search(f"import {module_path}", found=True)
        except ImportError as e:
            ctx.add_search(f"import {module_path}", found=False, reason=str(e))
            continue

        obj = module
        for part in parts[i:]:
            if not hasattr(obj, part):
                ctx.add_search(f"{module_path}.{part}", found=False, reason="attribute not found")
                break
            obj = getattr(obj, part)
        else:
            return _ensure_constructible(obj, path, ctx)

    ctx.add_suggestion(f"Use a class from {DEFAULT_MODULE} (Base, Derived, MoreDerived) or a full dotted path")
    ctx.add_suggestion("Check that source_paths in ctortrace.yaml includes your source directory")
    raise ResolutionError(f"Could not resolve target: {target}", context=ctx)


def _ensure_constructible(obj: object, path: str, ctx: DiagnosticContext) -> type[Constructible]:
    if isinstance(obj, type) and issubclass(obj, Constructible) and obj is not Constructible:
        return obj

    ctx.add_search(path, found=True, reason=f"resolved to {type(obj).__name__}, not a Constructible subclass")
    ctx.add_suggestion("Derive the target from ctortrace.construction.Constructible")
    raise ConstructionError(f"Target {path} cannot be constructed", context=ctx)

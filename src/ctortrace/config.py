"""Configuration management for ctortrace.

Loads and validates ctortrace.yaml configuration files.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from ctortrace.semantics import Language


class CtorTraceConfig(BaseModel):
    """Root configuration for ctortrace."""

    version: str = "0.1"
    """Config file version."""

    language: Language = Language.JAVA
    """Construction semantics to replay."""

    target: str = "Derived"
    """Class to construct: a name from ctortrace.model or a dotted path."""

    source_paths: list[str] = Field(default_factory=list)
    """Paths to add to sys.path for target resolution."""

    numbered: bool = False
    """Prefix trace lines with their position."""

    debug_mode: bool = False
    """Enable verbose debug output."""

    @field_validator("source_paths", mode="before")
    @classmethod
    def ensure_list(cls, v: Any) -> list[str]:
        if isinstance(v, str):
            return [v]
        return v


CONFIG_TEMPLATE = """\
# ctortrace configuration
version: "0.1"

# Construction semantics: java | csharp | cpp
#   java: base fields, base ctor, derived fields, derived ctor; dynamic dispatch
#   csharp: all field initializers (derived first), then ctor bodies
#   cpp: like java, but calls from a constructor resolve statically
# language: java

# Class to construct (name from ctortrace.model, or a dotted path)
# target: Derived

# Paths to add to Python's sys.path for target resolution
# source_paths:
#   - "./src"

# Prefix trace lines with their position
# numbered: false

# Enable verbose debug output
# debug_mode: false
"""


def load_config(config_path: Path | None = None, project_root: Path | None = None) -> CtorTraceConfig:
    """Load configuration from a YAML file.

    Args:
        config_path: Explicit path to config file. If None, searches for ctortrace.yaml.
        project_root: Project root directory. Defaults to cwd.

    Returns:
        Parsed configuration. Returns default config if no file found.
    """
    project_root = project_root or Path.cwd()

    if config_path is None:
        candidates = [
            project_root / "ctortrace.yaml",
            project_root / "ctortrace.yml",
            project_root / ".ctortrace.yaml",
            project_root / ".ctortrace.yml",
        ]
        for candidate in candidates:
            if candidate.exists():
                config_path = candidate
                break

    if config_path is None or not config_path.exists():
        return CtorTraceConfig()

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    return CtorTraceConfig.model_validate(data)


def resolve_paths(config: CtorTraceConfig, project_root: Path) -> CtorTraceConfig:
    """Resolve relative source paths to absolute paths.

    Returns:
        Config with resolved paths (new instance).
    """
    resolved_source_paths = [
        str((project_root / p).resolve()) if not Path(p).is_absolute() else p
        for p in config.source_paths
    ]
    return config.model_copy(update={"source_paths": resolved_source_paths})

import pytest
from pydantic import ValidationError

from ctortrace.config import CONFIG_TEMPLATE, CtorTraceConfig, load_config, resolve_paths
from ctortrace.semantics import Language


def test_defaults_without_file(tmp_path):
    cfg = load_config(project_root=tmp_path)
    assert cfg == CtorTraceConfig()
    assert cfg.language is Language.JAVA
    assert cfg.target == "Derived"


def test_loads_yaml(tmp_path):
    (tmp_path / "ctortrace.yaml").write_text(
        "language: cpp\ntarget: MoreDerived\nsource_paths: src\nnumbered: true\n"
    )
    cfg = load_config(project_root=tmp_path)
    assert cfg.language is Language.CPP
    assert cfg.target == "MoreDerived"
    assert cfg.source_paths == ["src"]
    assert cfg.numbered


def test_finds_dotted_variant(tmp_path):
    (tmp_path / ".ctortrace.yml").write_text("language: csharp\n")
    assert load_config(project_root=tmp_path).language is Language.CSHARP


def test_explicit_path(tmp_path):
    path = tmp_path / "custom.yaml"
    path.write_text("debug_mode: true\n")
    assert load_config(config_path=path, project_root=tmp_path).debug_mode


def test_empty_file(tmp_path):
    (tmp_path / "ctortrace.yaml").write_text("")
    assert load_config(project_root=tmp_path) == CtorTraceConfig()


def test_template_is_valid(tmp_path):
    (tmp_path / "ctortrace.yaml").write_text(CONFIG_TEMPLATE)
    assert load_config(project_root=tmp_path) == CtorTraceConfig()


def test_invalid_language(tmp_path):
    (tmp_path / "ctortrace.yaml").write_text("language: cobol\n")
    with pytest.raises(ValidationError):
        load_config(project_root=tmp_path)


def test_resolve_paths(tmp_path):
    cfg = CtorTraceConfig(source_paths=["src", "/abs/lib"])
    resolved = resolve_paths(cfg, tmp_path)
    assert resolved.source_paths == [str((tmp_path / "src").resolve()), "/abs/lib"]
    assert cfg.source_paths == ["src", "/abs/lib"]

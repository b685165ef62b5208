import subprocess
import sys

from click.testing import CliRunner

from ctortrace import __version__
from ctortrace.cli.main import cli
from ctortrace.runner import expected_lines


def _lines(*lines: str) -> str:
    return "".join(f"{line}\n" for line in lines)


def test_no_arguments_prints_canonical_trace():
    result = CliRunner().invoke(cli, [])
    assert result.exit_code == 0
    assert result.output == _lines(*expected_lines("java"))


def test_repeated_invocations_are_identical():
    runner = CliRunner()
    assert runner.invoke(cli, []).output == runner.invoke(cli, []).output


def test_module_entry_point_in_separate_processes():
    outputs = [
        subprocess.run(
            [sys.executable, "-m", "ctortrace"],
            capture_output=True,
            text=True,
            check=True,
        ).stdout
        for _ in range(2)
    ]
    assert outputs[0] == outputs[1] == _lines(*expected_lines("java"))


def test_version():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_run_with_language(tmp_path):
    result = CliRunner().invoke(cli, ["run", "--lang", "cpp", "--project", str(tmp_path)])
    assert result.exit_code == 0
    assert result.output == _lines(*expected_lines("cpp"))


def test_run_numbered_target(tmp_path):
    result = CliRunner().invoke(cli, ["run", "MoreDerived", "-n", "-p", str(tmp_path)])
    assert result.exit_code == 0
    assert " 5. MoreDerived.init" in result.output.splitlines()


def test_run_uses_config(tmp_path):
    (tmp_path / "ctortrace.yaml").write_text("language: csharp\n")
    result = CliRunner().invoke(cli, ["run", "--project", str(tmp_path)])
    assert result.exit_code == 0
    assert result.output == _lines(*expected_lines("csharp"))


def test_run_option_overrides_config(tmp_path):
    (tmp_path / "ctortrace.yaml").write_text("language: csharp\n")
    result = CliRunner().invoke(cli, ["run", "--lang", "java", "--project", str(tmp_path)])
    assert result.output == _lines(*expected_lines("java"))


def test_run_unknown_target(tmp_path):
    result = CliRunner().invoke(cli, ["run", "Nope", "--project", str(tmp_path)])
    assert result.exit_code == 1
    assert "Could not resolve target: Nope" in result.output


def test_run_invalid_config(tmp_path):
    (tmp_path / "ctortrace.yaml").write_text("language: cobol\n")
    result = CliRunner().invoke(cli, ["run", "--project", str(tmp_path)])
    assert result.exit_code == 1
    assert "Invalid configuration" in result.output


def test_run_debug_shows_config(tmp_path):
    result = CliRunner().invoke(cli, ["run", "--debug", "--project", str(tmp_path)])
    assert result.exit_code == 0
    assert "Config:" in result.output
    assert result.output.rstrip().endswith("Derived.j=2")


def test_compare_shows_every_language():
    result = CliRunner().invoke(cli, ["compare"])
    assert result.exit_code == 0
    for title in ("java", "csharp", "cpp"):
        assert title in result.output
    assert "Type=Base" in result.output


def test_check_passes():
    for lang in ("java", "csharp", "cpp"):
        result = CliRunner().invoke(cli, ["check", "--lang", lang])
        assert result.exit_code == 0
        assert "Trace matches: 10 lines" in result.output


def test_init_creates_config_once():
    runner = CliRunner()
    with runner.isolated_filesystem():
        first = runner.invoke(cli, ["init"])
        assert first.exit_code == 0
        assert "Created ctortrace.yaml" in first.output

        second = runner.invoke(cli, ["init"])
        assert "already exists" in second.output


def test_config_command(tmp_path):
    (tmp_path / "ctortrace.yaml").write_text("target: MoreDerived\n")
    result = CliRunner().invoke(cli, ["config", "--project", str(tmp_path)])
    assert result.exit_code == 0
    assert "MoreDerived" in result.output


def test_compare_resolves_through_source_paths(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "path", list(sys.path))
    (tmp_path / "lib").mkdir()
    (tmp_path / "lib" / "ctortrace_compare_shapes.py").write_text(
        "from ctortrace.model import Derived\n\n\nclass Circle(Derived):\n    pass\n"
    )
    (tmp_path / "ctortrace.yaml").write_text("source_paths: lib\ntarget: ctortrace_compare_shapes.Circle\n")

    result = CliRunner().invoke(cli, ["compare", "--project", str(tmp_path)])
    assert result.exit_code == 0
    assert "Type=Circle" in result.output

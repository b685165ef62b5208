"""ctortrace CLI entry point."""

from pathlib import Path
from typing import TYPE_CHECKING

import click
from pydantic import ValidationError
from rich.columns import Columns
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from ctortrace import __version__
from ctortrace.diagnostics import ConstructionError, ResolutionError
from ctortrace.semantics import Language

if TYPE_CHECKING:
    from ctortrace.config import CtorTraceConfig
    from ctortrace.runner import Trace

console = Console()

LANGUAGE_CHOICES = [language.value for language in Language]


def _print_lines(lines: list[str]) -> None:
    # Trace lines are the program's output contract: plain, unstyled.
    for line in lines:
        click.echo(line)


def _forward_stderr(trace: "Trace") -> None:
    if trace.stderr:
        click.echo(trace.stderr, err=True, nl=False)


def _load_config(project_root: Path, config_path: Path | None) -> "CtorTraceConfig":
    """Load config with resolved paths and make its source paths importable."""
    from ctortrace.config import load_config, resolve_paths
    from ctortrace.resolver import add_source_paths

    try:
        cfg = resolve_paths(load_config(config_path=config_path, project_root=project_root), project_root)
    except ValidationError as e:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        raise SystemExit(1)

    add_source_paths(cfg.source_paths, project_root)
    return cfg


@click.group(invoke_without_command=True)
@click.version_option(__version__, prog_name="ctortrace")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """ctortrace - watch an object being constructed.

    Without a command, constructs one Derived under Java rules and prints
    its trace.
    """
    if ctx.invoked_subcommand is None:
        from ctortrace.runner import run_trace

        trace = run_trace()
        _forward_stderr(trace)
        _print_lines(trace.lines)


@cli.command()
@click.argument("target", required=False)
@click.option(
    "--lang",
    "-l",
    type=click.Choice(LANGUAGE_CHOICES),
    default=None,
    help="Construction semantics to replay. Defaults to the config value (java).",
)
@click.option(
    "--numbered",
    "-n",
    is_flag=True,
    help="Prefix each trace line with its position.",
)
@click.option(
    "--project",
    "-p",
    type=click.Path(exists=True, path_type=Path),
    help="Project root directory. Defaults to current directory.",
)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to ctortrace.yaml config file.",
)
@click.option(
    "--debug",
    is_flag=True,
    help="Enable debug output.",
)
def run(
    target: str | None,
    lang: str | None,
    numbered: bool,
    project: Path | None,
    config: Path | None,
    debug: bool,
) -> None:
    """Construct TARGET and print its trace.

    TARGET is a class name from ctortrace.model (Base, Derived, MoreDerived)
    or a dotted path to a Constructible subclass.
    """
    from ctortrace.runner import format_trace, run_trace

    cfg = _load_config(project or Path.cwd(), config)

    if debug:
        cfg.debug_mode = True
    if cfg.debug_mode:
        console.print(f"[dim]Config: {escape(cfg.model_dump_json(indent=2))}[/dim]\n", highlight=False)

    try:
        trace = run_trace(target or cfg.target, lang or cfg.language)
    except (ResolutionError, ConstructionError) as e:
        console.print(f"[red]Error constructing {escape(target or cfg.target)}:[/red]", highlight=False)
        console.print(str(e), markup=False, highlight=False)
        raise SystemExit(1)

    _forward_stderr(trace)
    click.echo(format_trace(trace, numbered=numbered or cfg.numbered))


@cli.command()
@click.argument("target", required=False)
@click.option(
    "--project",
    "-p",
    type=click.Path(exists=True, path_type=Path),
    help="Project root directory. Defaults to current directory.",
)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to ctortrace.yaml config file.",
)
def compare(target: str | None, project: Path | None, config: Path | None) -> None:
    """Show TARGET's trace under every language's rules, side by side.

    TARGET defaults to the configured target (Derived).
    """
    from ctortrace.runner import format_trace, run_trace

    cfg = _load_config(project or Path.cwd(), config)

    panels = []
    for language in Language:
        try:
            trace = run_trace(target or cfg.target, language)
        except (ResolutionError, ConstructionError) as e:
            console.print(str(e), markup=False, highlight=False)
            raise SystemExit(1)
        _forward_stderr(trace)
        panels.append(Panel(format_trace(trace, numbered=True), title=language.value, expand=False))

    console.print(Columns(panels))


@cli.command()
@click.option(
    "--lang",
    "-l",
    type=click.Choice(LANGUAGE_CHOICES),
    default=Language.JAVA.value,
    help="Construction semantics to verify.",
)
def check(lang: str) -> None:
    """Verify that constructing Derived prints the canonical trace."""
    from ctortrace.runner import compare_lines, expected_lines, run_trace

    expected = expected_lines(lang)
    trace = run_trace("Derived", lang)
    diff = compare_lines(expected, trace.lines)

    if diff:
        console.print(
            Panel("\n".join(diff), title=f"[red]Trace mismatch ({lang})[/red]", border_style="red"),
        )
        raise SystemExit(1)

    console.print(f"[green]✓[/green] Trace matches: {len(expected)} lines ({lang})")


@cli.command()
def init() -> None:
    """Create a ctortrace.yaml in the current directory."""
    from ctortrace.config import CONFIG_TEMPLATE

    config_file = Path.cwd() / "ctortrace.yaml"
    if config_file.exists():
        console.print(f"[yellow]-[/yellow] {config_file.name} already exists")
        return

    config_file.write_text(CONFIG_TEMPLATE)
    console.print(f"[green]✓[/green] Created {config_file.name}")


@cli.command()
@click.option(
    "--project",
    "-p",
    type=click.Path(exists=True, path_type=Path),
    help="Project root directory. Defaults to current directory.",
)
def config(project: Path | None) -> None:
    """Show the current configuration."""
    from ctortrace.config import load_config

    project_root = project or Path.cwd()
    try:
        cfg = load_config(project_root=project_root)
    except ValidationError as e:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        raise SystemExit(1)

    console.print(Panel(cfg.model_dump_json(indent=2), title="ctortrace Config"))


if __name__ == "__main__":
    cli()

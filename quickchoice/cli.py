"""CLI entry point for QuickChoice."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.tree import Tree

from quickchoice_core.ai import ProviderRequester
from quickchoice_core.app import QuickChoice
from quickchoice_core.choices import Choice, MacroChoice, MultiChoice
from quickchoice_core.config import QuickChoiceConfig, find_config_path, load_config
from quickchoice_core.config.loader import DEFAULT_CONFIG_TEMPLATE
from quickchoice_core.engine import MacroRunReport
from quickchoice_core.errors import QuickChoiceError
from quickchoice_core.interfaces import HostServices, VaultFile
from quickchoice_core.logging_config import configure_logging
from quickchoice_core.registrar import InMemoryCommandRegistry
from quickchoice_core.sections import resolve_section_end
from quickchoice_core.ui import ConsoleNotices, ConsolePrompter, ConsoleSuggester
from quickchoice_core.vault import FilesystemVault

app = typer.Typer(
    name="quickchoice",
    help="Run reusable template, capture and macro choices against a Markdown vault.",
)

config_app = typer.Typer(help="Manage QuickChoice configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: QuickChoiceConfig | None = None
_config_path: Path | None = None


def _get_config() -> QuickChoiceConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to quickchoice.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config, _config_path
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    _config_path = find_config_path(config)
    configure_logging(_config.effective_log_level, _config.log_format)


def _build_app(cfg: QuickChoiceConfig) -> QuickChoice:
    host = HostServices(
        vault=FilesystemVault(cfg.vault_path),
        commands=InMemoryCommandRegistry(),
        suggester=ConsoleSuggester(),
        prompter=ConsolePrompter(),
        notices=ConsoleNotices(),
        requester=ProviderRequester(cfg.llm),
    )
    return QuickChoice(host, cfg, settings_path=_config_path)


def _shutdown(qc: QuickChoice) -> None:
    qc.stop()
    qc.host.notices.close()


def _parse_vars(pairs: list[str]) -> dict[str, str]:
    """Parse ``key=value`` pairs. Raises ValueError on malformed input."""
    variables: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Invalid variable '{pair}': expected key=value")
        variables[key.strip()] = value
    return variables


def _display_report(report: MacroRunReport) -> None:
    status = "[green]completed[/green]" if report.ok else f"[red]failed[/red] ({report.error})"
    rprint(
        Panel(
            f"[dim]Steps run:[/dim] {len(report.completed)}\n[dim]Status:[/dim]    {status}",
            title=f"Macro {report.macro}",
            border_style="green" if report.ok else "red",
        )
    )


def _add_choice_nodes(tree: Tree, choices: list[Choice]) -> None:
    for choice in choices:
        flag = " [yellow](command)[/yellow]" if choice.command else ""
        startup = (
            " [magenta](startup)[/magenta]"
            if isinstance(choice, MacroChoice) and choice.run_on_startup
            else ""
        )
        branch = tree.add(
            f"[cyan]{choice.name}[/cyan] [dim]{choice.type} · {choice.id}[/dim]{flag}{startup}"
        )
        if isinstance(choice, MultiChoice):
            _add_choice_nodes(branch, choice.choices)


@app.command()
def run(
    choice: str = typer.Argument(..., help="Choice name or id"),
    var: Annotated[
        list[str] | None, typer.Option("--var", "-v", help="Preset variable as key=value")
    ] = None,
) -> None:
    """Run a choice."""
    cfg = _get_config()
    try:
        variables = _parse_vars(var or [])
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    qc = _build_app(cfg)

    async def _run():
        await qc.start(run_startup=False)
        try:
            return await qc.run_choice(choice, variables)
        finally:
            _shutdown(qc)

    try:
        result = asyncio.run(_run())
    except QuickChoiceError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except Exception as e:
        rprint(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)

    if isinstance(result, MacroRunReport):
        _display_report(result)
        if not result.ok:
            raise typer.Exit(1)
    elif isinstance(result, VaultFile):
        rprint(f"[green]Written:[/green] {result.path}")
    else:
        rprint("[yellow]Nothing to do.[/yellow]")


@app.command("list")
def list_choices() -> None:
    """Show the choice tree."""
    cfg = _get_config()
    if not cfg.choices:
        rprint("[yellow]No choices configured.[/yellow]")
        raise typer.Exit(0)
    tree = Tree(f"[bold]Choices[/bold] ({len(cfg.choices)})")
    _add_choice_nodes(tree, cfg.choices)
    rprint(tree)


@app.command()
def commands() -> None:
    """List the commands registered for the configured choices."""
    cfg = _get_config()
    qc = _build_app(cfg)
    asyncio.run(qc.start(run_startup=False))

    registry = qc.host.commands
    table = Table(title=f"Registered commands ({len(registry)})")
    table.add_column("Id", style="cyan")
    table.add_column("Name", style="green")
    for command in registry.commands():
        table.add_row(command.id, command.name)
    rprint(table)
    _shutdown(qc)


@app.command()
def startup() -> None:
    """Run the macros flagged to run on startup."""
    cfg = _get_config()
    qc = _build_app(cfg)
    try:
        reports = asyncio.run(qc.start())
    finally:
        _shutdown(qc)
    if not reports:
        rprint("[yellow]No startup macros.[/yellow]")
        return
    for report in reports:
        _display_report(report)
    if any(not r.ok for r in reports):
        raise typer.Exit(1)


@app.command()
def delete(choice_id: str = typer.Argument(..., help="Id of the choice to delete")) -> None:
    """Delete a choice and its command, then save the settings."""
    cfg = _get_config()
    if _config_path is None:
        rprint("[red]Error:[/red] no config file to save to. Run 'quickchoice config init' first.")
        raise typer.Exit(1)
    qc = _build_app(cfg)
    asyncio.run(qc.start(run_startup=False))
    try:
        removed = qc.delete_choice(choice_id)
    except QuickChoiceError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    finally:
        _shutdown(qc)
    rprint(f"[green]Deleted[/green] {removed.name} ({removed.id})")


@app.command()
def section(
    file: str = typer.Argument(..., help="Markdown file"),
    line: int = typer.Argument(..., help="0-based target line"),
    subsections: bool = typer.Option(
        False, "--subsections/--no-subsections", help="Include nested headings"
    ),
) -> None:
    """Print where the section at LINE ends."""
    path = Path(file)
    if not path.is_file():
        rprint(f"[red]Error:[/red] file not found: {file}")
        raise typer.Exit(1)
    lines = path.read_text().split("\n")
    try:
        end = resolve_section_end(lines, line, subsections)
    except QuickChoiceError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    rprint(f"[bold]Section end:[/bold] {end}")
    rprint(Syntax("\n".join(lines[line:end + 1]), "markdown", line_numbers=True, start_line=line))


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(mode="json"), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default quickchoice.yaml in current directory."""
    target = Path("quickchoice.yaml")
    if target.exists() and not force:
        rprint("[yellow]quickchoice.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")


if __name__ == "__main__":
    app()

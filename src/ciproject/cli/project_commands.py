"""Project definition CLI commands."""

import asyncio
from enum import Enum
from pathlib import Path

import httpx
import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ciproject.errors import ConfigError, ValidationError
from ciproject.github.client import GitHubClient
from ciproject.github.remote import first_remote_url
from ciproject.loader import load_definition
from ciproject.models import Project
from ciproject.scaffold import ProjectScaffolder
from ciproject.serializers import to_json, to_kotlin_dsl

console = Console()


class OutputFormat(str, Enum):
    """Supported render formats."""

    KOTLIN = "kts"
    JSON = "json"


def init_project(
    repo_url: str = typer.Option(
        None,
        "--repo",
        help="GitHub repository or git remote URL (default: first remote of the destination)",
    ),
    destination: Path = typer.Option(
        Path("."), "--destination", "-d", help="Project root to write .teamcity/ into"
    ),
    template_prefix: str = typer.Option(
        None, "--template-prefix", help="Shared template id prefix (default: organization)"
    ),
    github_token: str = typer.Option(
        None, "--token", envvar="GITHUB_TOKEN", help="GitHub API token"
    ),
    offline: bool = typer.Option(
        False, "--offline", help="Do not query GitHub; assume the main branch is 'main'"
    ),
    disable_deletion: bool = typer.Option(
        False, "--disable-deletion", help="Keep an existing .teamcity directory"
    ),
):
    """
    Create (or recreate) the default TeamCity configuration for a repository.

    Example:
        ciproject init --repo https://github.com/owner/repo
        ciproject init --destination path/to/checkout
    """
    console.print(
        Panel.fit(
            "[bold blue]ciproject[/bold blue]\n"
            "TeamCity Project Scaffolding",
            border_style="blue",
        )
    )

    scaffolder = ProjectScaffolder(
        template_prefix=template_prefix,
        github_client=GitHubClient(token=github_token),
    )

    console.print(f"\n[bold]Resolving repository...[/bold]")

    try:
        if repo_url is None:
            repo_url = first_remote_url(destination)
        console.print(f"   URL: {repo_url}")

        with console.status("[bold green]Building project configuration..."):
            project = asyncio.run(scaffolder.scaffold_from_url(repo_url, offline=offline))
    except (ValueError, httpx.HTTPError) as e:
        console.print(f"   [red]✗ Failed to resolve repository: {e}[/red]")
        raise typer.Exit(1)
    except ConfigError as e:
        _display_errors(e)
        raise typer.Exit(1)

    settings_path = scaffolder.write(project, destination, disable_deletion=disable_deletion)

    console.print(f"\n[green]✓ Configuration generated successfully![/green]")
    console.print(f"   Location: {settings_path}")
    _display_project(project)


def validate_definition(
    definition: Path = typer.Argument(..., help="Project definition (JSON)"),
):
    """
    Validate a project definition and report every violation.

    Example:
        ciproject validate project.json
    """
    project = _build(definition)
    console.print(f"[green]✓ Definition is valid:[/green] {definition}")
    _display_project(project)


def render_definition(
    definition: Path = typer.Argument(..., help="Project definition (JSON)"),
    output_format: OutputFormat = typer.Option(
        OutputFormat.KOTLIN, "--format", "-f", help="Output format"
    ),
    output: Path = typer.Option(
        None, "--output", "-o", help="Output file (default: stdout)"
    ),
):
    """
    Render a validated project definition.

    Example:
        ciproject render project.json --format kts -o .teamcity/settings.kts
    """
    project = _build(definition)

    if output_format == OutputFormat.JSON:
        content = to_json(project) + "\n"
    else:
        content = to_kotlin_dsl(project)

    if output is None:
        typer.echo(content, nl=False)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(content, encoding="utf-8")
    console.print(f"[green]✓ Wrote {output}[/green]")


def _build(definition: Path) -> Project:
    """Load and build a definition, exiting non-zero on any error."""
    try:
        return load_definition(definition).build()
    except ConfigError as e:
        _display_errors(e)
        raise typer.Exit(1)


def _display_errors(error: ConfigError):
    """Display every violation carried by an error."""
    errors = error.errors if isinstance(error, ValidationError) else [error]

    table = Table(title=f"Configuration errors ({len(errors)})", title_style="bold red")
    table.add_column("Error", style="red", no_wrap=True)
    table.add_column("Details", style="yellow")

    for item in errors:
        table.add_row(type(item).__name__, str(item))

    console.print(table)


def _display_project(project: Project):
    """Display summary of a project."""
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Build Type", style="cyan")
    table.add_column("Name", style="yellow")
    table.add_column("Templates")
    table.add_column("Steps", justify="right")

    for pipeline in project.build_types:
        table.add_row(
            pipeline.id,
            pipeline.name,
            ", ".join(pipeline.templates) or "N/A",
            str(len(pipeline.steps)),
        )

    console.print(table)
    console.print(f"   Parameters: {len(project.params)}")
    console.print(f"   Features: {len(project.features)}")

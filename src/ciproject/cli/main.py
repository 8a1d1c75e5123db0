"""Main CLI entry point."""

import typer
from rich.console import Console

from ciproject.cli import project_commands

app = typer.Typer(
    name="ciproject",
    help="Build, validate and render TeamCity project configurations",
)
console = Console()

app.command(name="init")(project_commands.init_project)
app.command(name="validate")(project_commands.validate_definition)
app.command(name="render")(project_commands.render_definition)


@app.command()
def version():
    """Show version information."""
    from ciproject import __version__

    console.print(f"ciproject version {__version__}")


if __name__ == "__main__":
    app()

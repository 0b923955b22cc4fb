"""``labelle init NAME`` — create a new labelle project.

Resolves the engine version first (latest by default, always validated
against the release catalog) so a new project never pins a version that
does not exist.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.markup import escape
from rich.panel import Panel

from labelle_cli.cli import support
from labelle_cli.core.errors import LabelleError
from labelle_cli.core.scaffold import scaffold_project
from labelle_cli.models.versioning import LATEST


def init_cmd(
    project_name: str = typer.Argument(..., help="Name of the project directory to create."),
    engine: str = typer.Option(
        LATEST,
        "--engine",
        "-e",
        help="labelle-engine version to pin (default: latest release).",
    ),
    parent: Path = typer.Option(
        Path("."),
        "--in",
        help="Directory in which to create the project.",
    ),
) -> None:
    """Create a new labelle project pinned to a released engine version."""
    console = support.console
    console.print(f"Creating new labelle project: [bold]{escape(project_name)}[/bold]")

    try:
        with support.open_resolver() as resolver:
            resolved = resolver.resolve(engine, validate=True)
        console.print(f"Using labelle-engine {escape(resolved.version)}")
        root = scaffold_project(parent, project_name, resolved.version)
    except LabelleError as exc:
        support.report_error(exc)
        raise typer.Exit(code=1)

    console.print()
    console.print(
        Panel(
            "\n".join([
                "[bold green]Project created successfully![/bold green]",
                "",
                f"[bold]Location:[/bold] {escape(str(root))}",
                f"[bold]Engine:[/bold]   {escape(resolved.version)}",
                "",
                "[bold]Next steps:[/bold]",
                f"  cd {escape(project_name)}",
                "  labelle generate",
                "  labelle run",
            ]),
            title="[bold]labelle[/bold]",
            border_style="green",
            padding=(1, 2),
        )
    )

"""``labelle update`` — clear generated state and regenerate."""

from __future__ import annotations

from pathlib import Path

import typer

from labelle_cli.cli import support
from labelle_cli.config import settings
from labelle_cli.core.bootstrap import clear_generated_state
from labelle_cli.core.errors import LabelleError
from labelle_cli.core.project_config import read_project_config


def update_cmd(
    project_path: Path = typer.Argument(Path("."), help="Project directory."),
) -> None:
    """Delete the output and bootstrap directories, then regenerate."""
    support.console.print("Clearing caches and regenerating...")
    try:
        config = read_project_config(project_path)
        clear_generated_state(
            project_path,
            settings,
            output_dir=Path(config.output_dir) if config.output_dir else None,
        )
        support.generate_project(project_path)
    except LabelleError as exc:
        support.report_error(exc)
        raise typer.Exit(code=1)

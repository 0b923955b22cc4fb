"""``labelle build`` and ``labelle run`` — generate, then build the output.

Both regenerate first so the output always matches the pinned engine, then
hand over to ``zig build`` in the generated output directory.
"""

from __future__ import annotations

from pathlib import Path

import typer

from labelle_cli.cli import support
from labelle_cli.config import settings
from labelle_cli.core.errors import LabelleError


def _generate_and_build(project_path: Path, *, run: bool, release: bool) -> None:
    support.generate_project(project_path)

    support.console.print()
    support.console.print("Running project..." if run else "Building project...")
    support.make_runner().build_project(
        support.output_dir_for(project_path),
        run=run,
        optimize=settings.release_optimize_flag if release else None,
    )


def build_cmd(
    project_path: Path = typer.Argument(Path("."), help="Project directory."),
    release: bool = typer.Option(
        False, "--release", "-r", help="Build in release mode."
    ),
) -> None:
    """Generate, then build the project."""
    try:
        _generate_and_build(project_path, run=False, release=release)
    except LabelleError as exc:
        support.report_error(exc)
        raise typer.Exit(code=1)


def run_cmd(
    project_path: Path = typer.Argument(Path("."), help="Project directory."),
    release: bool = typer.Option(
        False, "--release", "-r", help="Build in release mode."
    ),
) -> None:
    """Generate, build and run the project."""
    try:
        _generate_and_build(project_path, run=True, release=release)
    except LabelleError as exc:
        support.report_error(exc)
        raise typer.Exit(code=1)

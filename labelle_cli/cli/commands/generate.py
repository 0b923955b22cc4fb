"""``labelle generate`` — regenerate project files through the pinned engine.

Reads ``engine_version`` from ``project.labelle``, validates it against the
release catalog, pins it in the bootstrap directory and runs the engine's
generator in the project directory.
"""

from __future__ import annotations

from pathlib import Path

import typer

from labelle_cli.cli import support
from labelle_cli.core.errors import LabelleError


def generator_args(main_only: bool, no_fetch: bool) -> list[str]:
    """Translate CLI flags into arguments for ``labelle-generate``."""
    args: list[str] = []
    if main_only:
        args.append("--main-only")
    if no_fetch:
        args.append("--no-fetch")
    return args


def generate_cmd(
    project_path: Path = typer.Argument(Path("."), help="Project directory."),
    engine: str = typer.Option(
        None,
        "--engine",
        "-e",
        help="Override the engine version from project.labelle.",
    ),
    main_only: bool = typer.Option(
        False, "--main-only", help="Only regenerate main.zig."
    ),
    no_fetch: bool = typer.Option(
        False, "--no-fetch", help="Skip fetching dependency hashes in the generator."
    ),
) -> None:
    """Generate project files from project.labelle."""
    try:
        support.generate_project(
            project_path,
            engine=engine,
            passthrough=generator_args(main_only, no_fetch),
        )
    except LabelleError as exc:
        support.report_error(exc)
        raise typer.Exit(code=1)

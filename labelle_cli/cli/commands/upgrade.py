"""``labelle upgrade`` — move a project to another engine release.

Modes
-----
``--list``           print every release in the catalog
``--check``          compare the pinned version with the latest release
``--version VER``    upgrade to VER (validated against the catalog)
(default)            upgrade to the latest release

Upgrading rewrites only the ``engine_version`` value in ``project.labelle``
and clears the generated and bootstrap directories; run ``labelle
generate`` afterwards.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.markup import escape

from labelle_cli.cli import support
from labelle_cli.config import settings
from labelle_cli.core.bootstrap import clear_generated_state, generated_state_dirs
from labelle_cli.core.errors import LabelleError
from labelle_cli.core.project_config import read_project_config, update_engine_version


def upgrade_cmd(
    project_path: Path = typer.Argument(Path("."), help="Project directory."),
    list_versions: bool = typer.Option(
        False, "--list", "-l", help="List all available versions."
    ),
    check: bool = typer.Option(
        False, "--check", help="Only check for updates, don't upgrade."
    ),
    target_version: str = typer.Option(
        None, "--version", help="Upgrade to a specific version."
    ),
    force: bool = typer.Option(
        False, "--force", help="Upgrade even if already on the target version."
    ),
) -> None:
    """Upgrade to a newer labelle-engine version."""
    console = support.console
    try:
        with support.open_resolver() as resolver:
            if list_versions:
                resolver.print_available_versions(console)
                return

            config = read_project_config(project_path)
            current = config.engine_version if config.engine_version is not None else "unknown"
            latest = resolver.latest()

            if check:
                console.print(f"Current: {escape(current)}")
                console.print(f"Latest:  {escape(latest)}")
                if current != latest:
                    console.print("\nRun 'labelle upgrade' to upgrade.")
                else:
                    console.print("\nAlready on latest version.")
                return

            # The latest tag came from the registry; only user input needs the catalog.
            target = resolver.resolve(
                target_version if target_version is not None else latest,
                validate=target_version is not None,
            ).version

        if current == target and not force:
            console.print(
                f"Already on version {escape(target)}. Use --force to reinstall."
            )
            return

        output_dir = Path(config.output_dir) if config.output_dir else None
        generated_state_dirs(project_path, settings, output_dir=output_dir)

        console.print(f"Upgrading from {escape(current)} to {escape(target)}...")
        update_engine_version(project_path, target)
        clear_generated_state(project_path, settings, output_dir=output_dir)
    except LabelleError as exc:
        support.report_error(exc)
        raise typer.Exit(code=1)

    console.print(
        f"[green]Updated engine_version to {escape(target)} in {settings.project_file}[/green]"
    )
    console.print("Run 'labelle generate' to regenerate files with the new version.")

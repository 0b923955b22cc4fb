"""Main Typer application — imports and registers all CLI commands.

Entry point: ``labelle`` (configured via pyproject.toml project.scripts).

Commands: init, generate, build, run, update, upgrade, version.
"""

from __future__ import annotations

import typer

from labelle_cli import __version__
from labelle_cli.cli import support
from labelle_cli.cli.commands.build import build_cmd, run_cmd
from labelle_cli.cli.commands.generate import generate_cmd
from labelle_cli.cli.commands.init_cmd import init_cmd
from labelle_cli.cli.commands.update import update_cmd
from labelle_cli.cli.commands.upgrade import upgrade_cmd

app = typer.Typer(
    name="labelle",
    help="labelle: bootstrap CLI for labelle-engine projects.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def root(
    verbose: bool = typer.Option(
        False, "--verbose", "-V", help="Enable debug logging."
    ),
) -> None:
    """labelle: bootstrap CLI for labelle-engine projects."""
    support.configure_logging(verbose)


# Register subcommands
app.command(name="init", help="Create a new labelle project.")(init_cmd)
app.command(name="generate", help="Generate project files from project.labelle.")(generate_cmd)
app.command(name="gen", hidden=True)(generate_cmd)
app.command(name="build", help="Build the project.")(build_cmd)
app.command(name="run", help="Build and run the project.")(run_cmd)
app.command(name="update", help="Clear caches and regenerate.")(update_cmd)
app.command(name="upgrade", help="Upgrade to a newer labelle-engine version.")(upgrade_cmd)


@app.command(name="version", help="Show CLI version.")
def version_cmd() -> None:
    """Print the CLI version."""
    support.console.print(f"labelle-cli {__version__}")


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()

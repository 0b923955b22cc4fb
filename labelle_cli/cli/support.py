"""Shared plumbing for CLI commands: consoles, collaborators, error reporting.

Collaborator factories (``open_registry``, ``make_runner``, ``make_bootstrap``)
and the ``run_subprocess`` seam are module attributes so tests can replace
them with fakes.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from labelle_cli.config import settings
from labelle_cli.core.errors import (
    FetchFailedError,
    GeneratorFailedError,
    LabelleError,
    ProjectNotFoundError,
)
from labelle_cli.core.hash_fetcher import PackageHashFetcher
from labelle_cli.core.pipeline import EngineBootstrap
from labelle_cli.core.project_config import read_project_config
from labelle_cli.core.registry import RegistryClient
from labelle_cli.core.resolver import VersionResolver
from labelle_cli.core.runner import BootstrapRunner
from labelle_cli.models.bootstrap import BootstrapArtifacts
from labelle_cli.models.versioning import LATEST

logger = logging.getLogger(__name__)

run_subprocess = subprocess.run

console = Console()
err_console = Console(stderr=True)


def configure_logging(verbose: bool = False) -> None:
    """Route stdlib logging through Rich at the configured level."""
    level = "DEBUG" if verbose or settings.debug else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, rich_tracebacks=settings.debug)],
        force=True,
    )


# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------


def open_registry() -> RegistryClient:
    return RegistryClient(settings)


def make_runner() -> BootstrapRunner:
    return BootstrapRunner(settings, run=run_subprocess)


def make_bootstrap(project_path: Path) -> EngineBootstrap:
    return EngineBootstrap(
        project_path,
        settings=settings,
        fetcher=PackageHashFetcher(settings, run=run_subprocess),
        runner=make_runner(),
        console=console,
    )


@contextmanager
def open_resolver() -> Iterator[VersionResolver]:
    """Yield a resolver whose registry connection is closed afterwards."""
    with open_registry() as registry:
        yield VersionResolver(
            registry,
            console=err_console,
            suggestion_limit=settings.suggestion_limit,
        )


# ---------------------------------------------------------------------------
# Error reporting
# ---------------------------------------------------------------------------


def report_error(exc: LabelleError) -> None:
    """Print one actionable message for *exc* unless it was already reported."""
    if exc.already_reported:
        return

    if isinstance(exc, FetchFailedError):
        err_console.print(f"[bold red]Error fetching engine:[/bold red] {escape(str(exc))}")
        if exc.detail:
            err_console.print(f"[dim]{escape(exc.detail)}[/dim]")
        version = exc.version or "the requested version"
        err_console.print(
            f"\nCould not fetch labelle-engine {escape(version)}. "
            "Check that the version exists with 'labelle upgrade --list'."
        )
    elif isinstance(exc, GeneratorFailedError):
        err_console.print(f"[bold red]{escape(str(exc))}[/bold red]")
    elif isinstance(exc, ProjectNotFoundError):
        err_console.print(f"[bold red]Error reading project.labelle:[/bold red] {escape(str(exc))}")
        err_console.print("Run 'labelle init <name>' to create a new project.")
    else:
        err_console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------


def generate_project(
    project_path: Path,
    *,
    engine: str | None = None,
    passthrough: Sequence[str] = (),
) -> BootstrapArtifacts:
    """Resolve the project's engine version and run its generator.

    *engine* overrides ``engine_version`` from ``project.labelle``; with
    neither, the latest release is used.
    """
    console.print("Generating project files...")
    config = read_project_config(project_path)

    # Only an absent value falls back; an empty string is looked up as-is.
    requested = engine if engine is not None else config.engine_version
    if requested is None:
        requested = LATEST
    with open_resolver() as resolver:
        resolved = resolver.resolve(requested, validate=True)
    console.print(f"Using labelle-engine [bold]{escape(resolved.version)}[/bold]")

    return make_bootstrap(project_path).generate(resolved.version, passthrough=passthrough)


def output_dir_for(project_path: Path) -> Path:
    """The generated output directory: ``output_dir`` from the config, else the default."""
    config = read_project_config(project_path)
    return Path(project_path) / (config.output_dir or settings.output_dir)

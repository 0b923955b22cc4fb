"""Version resolution — turns a requested engine version into a concrete one.

Requests are either the ``"latest"`` sentinel or an opaque version string.
Explicit versions are matched against the release catalog by exact,
case-sensitive string equality; there is no range or semver handling.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from labelle_cli.core.errors import VersionNotFoundError
from labelle_cli.core.registry import RegistryClient
from labelle_cli.models.versioning import LATEST, ResolvedVersion

logger = logging.getLogger(__name__)

DEFAULT_SUGGESTION_LIMIT = 10


def suggestions(catalog: list[str], limit: int = DEFAULT_SUGGESTION_LIMIT) -> tuple[list[str], int]:
    """Split *catalog* into the entries to show and the count left out.

    Entries keep catalog order; nothing is sorted before truncating.
    """
    shown = catalog[:limit]
    return shown, len(catalog) - len(shown)


class VersionResolver:
    """Resolves requested versions through a ``RegistryClient``.

    Parameters
    ----------
    registry:
        Source of the latest tag and the release catalog.
    console:
        Where the "version not found" diagnostic is rendered.
    suggestion_limit:
        How many catalog entries to suggest for an unknown version.
    """

    def __init__(
        self,
        registry: RegistryClient,
        console: Console | None = None,
        suggestion_limit: int = DEFAULT_SUGGESTION_LIMIT,
    ) -> None:
        self.registry = registry
        self.console = console or Console(stderr=True)
        self.suggestion_limit = suggestion_limit

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve(self, requested: str, validate: bool = True) -> ResolvedVersion:
        """Resolve *requested* to a concrete version.

        ``"latest"`` always queries the registry, whatever *validate* says.
        With ``validate=False`` any other string is trusted and returned
        unchanged without a network call. Otherwise the full catalog is
        fetched and the string must match one entry exactly.

        Raises
        ------
        VersionNotFoundError
            After rendering the suggestion list, when validation fails.
        """
        if requested == LATEST:
            return ResolvedVersion(version=self.registry.fetch_latest_tag(), from_registry=True)

        if not validate:
            logger.debug("Trusting engine version %r without validation", requested)
            return ResolvedVersion(version=requested)

        catalog = self.registry.fetch_all_tags()
        for tag in catalog:
            if tag == requested:
                logger.debug("Engine version %r found in catalog", requested)
                return ResolvedVersion(version=requested)

        shown, omitted = suggestions(catalog, self.suggestion_limit)
        self._report_not_found(requested, shown, omitted)
        raise VersionNotFoundError(requested, shown, omitted)

    def latest(self) -> str:
        """Return the newest released engine version."""
        return self.registry.fetch_latest_tag()

    def list_versions(self) -> list[str]:
        """Return the full release catalog in registry order."""
        return self.registry.fetch_all_tags()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _report_not_found(self, requested: str, shown: list[str], omitted: int) -> None:
        self.console.print(
            f"[bold red]Error:[/bold red] labelle-engine version "
            f"'{escape(requested)}' does not exist."
        )
        self.console.print()
        self.console.print("Available versions:")
        for tag in shown:
            self.console.print(f"  {escape(tag)}")
        if omitted > 0:
            self.console.print(f"  [dim]... and {omitted} more[/dim]")
        self.console.print()
        self.console.print("[dim]Run 'labelle upgrade --list' to see all versions.[/dim]")

    def print_available_versions(self, console: Console | None = None) -> list[str]:
        """Render the whole catalog as a table, in registry order."""
        out = console or Console()
        catalog = self.list_versions()

        table = Table(title="Available labelle-engine versions")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Version", style="cyan")
        for index, tag in enumerate(catalog, start=1):
            table.add_row(str(index), escape(tag))

        out.print(table)
        return catalog

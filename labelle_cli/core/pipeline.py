"""Engine bootstrap pipeline: fetch hash, write descriptors, run generator.

Stages run strictly in order, each consuming the previous stage's output.
Version resolution happens before this pipeline; it receives a concrete
version only.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from rich.console import Console

from labelle_cli.config import LabelleSettings, settings as default_settings
from labelle_cli.core.bootstrap import BootstrapSynthesizer
from labelle_cli.core.hash_fetcher import PackageHashFetcher
from labelle_cli.core.runner import BootstrapRunner
from labelle_cli.models.bootstrap import BootstrapArtifacts

logger = logging.getLogger(__name__)


class EngineBootstrap:
    """Pins an engine release in a bootstrap directory and runs its generator.

    Parameters
    ----------
    project_path:
        The project directory; the bootstrap directory lives inside it and
        the generator runs with it as working directory.
    fetcher, runner:
        Collaborators; defaults spawn the real ``zig``.
    console:
        Progress output.
    """

    def __init__(
        self,
        project_path: Path = Path("."),
        *,
        settings: LabelleSettings | None = None,
        fetcher: PackageHashFetcher | None = None,
        runner: BootstrapRunner | None = None,
        console: Console | None = None,
    ) -> None:
        self._settings = settings or default_settings
        self.project_path = Path(project_path)
        self.fetcher = fetcher or PackageHashFetcher(self._settings)
        self.runner = runner or BootstrapRunner(self._settings)
        self.synthesizer = BootstrapSynthesizer(self.bootstrap_dir, self._settings)
        self.console = console or Console()

    @property
    def bootstrap_dir(self) -> Path:
        return self.project_path / self._settings.bootstrap_dir

    def generate(
        self,
        version: str,
        *,
        optimize: str | None = None,
        passthrough: Sequence[str] = (),
    ) -> BootstrapArtifacts:
        """Fetch, pin and run the generator of engine *version*."""
        self.console.print(f"Fetching labelle-engine {version}...")
        package_hash = self.fetcher.fetch_version_hash(version)

        artifacts = self.synthesizer.write(version, package_hash)

        self.console.print("Running generator...")
        self.runner.run_generator(
            artifacts.directory,
            optimize=optimize,
            passthrough=passthrough,
        )

        self.console.print("[green]Generation complete![/green]")
        logger.info("Generated project with labelle-engine %s", version)
        return artifacts

"""Blocking ``zig build`` invocations.

Children inherit stdout/stderr, so zig's own progress output reaches the
terminal unchanged. Each call waits for the child to exit.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Callable, Sequence

from labelle_cli.config import LabelleSettings, settings as default_settings
from labelle_cli.core.errors import GeneratorFailedError, LabelleError, OutputNotFoundError

logger = logging.getLogger(__name__)

RunFn = Callable[..., subprocess.CompletedProcess]


class BootstrapRunner:
    """Runs zig in the bootstrap and output directories.

    Parameters
    ----------
    settings:
        Supplies the zig executable.
    run:
        ``subprocess.run``-compatible callable; replaced in tests.
    """

    def __init__(
        self,
        settings: LabelleSettings | None = None,
        run: RunFn = subprocess.run,
    ) -> None:
        self._settings = settings or default_settings
        self._run = run

    def _exec(self, cmd: list[str], cwd: Path) -> int:
        logger.debug("exec %s (cwd=%s)", " ".join(cmd), cwd)
        try:
            result = self._run(cmd, cwd=str(cwd))
        except OSError as exc:
            raise LabelleError(f"Could not run '{cmd[0]}': {exc}") from exc
        return result.returncode

    def run_generator(
        self,
        bootstrap_dir: Path,
        *,
        optimize: str | None = None,
        passthrough: Sequence[str] = (),
    ) -> None:
        """Build and run the engine generator from *bootstrap_dir*.

        *optimize* is a build-mode flag such as ``-Doptimize=ReleaseSafe``;
        *passthrough* arguments reach the generator after ``--``.
        """
        cmd = [self._settings.zig_executable, "build", "run"]
        if optimize:
            cmd.append(optimize)
        if passthrough:
            cmd.append("--")
            cmd.extend(passthrough)

        code = self._exec(cmd, Path(bootstrap_dir))
        if code != 0:
            raise GeneratorFailedError(code)

    def build_project(
        self,
        output_dir: Path,
        *,
        run: bool = False,
        optimize: str | None = None,
    ) -> None:
        """Run ``zig build`` (or ``zig build run``) in the generated output."""
        output_dir = Path(output_dir)
        if not output_dir.is_dir():
            raise OutputNotFoundError(
                f"Output directory {output_dir} not found. Run 'labelle generate' first."
            )

        cmd = [self._settings.zig_executable, "build"]
        if run:
            cmd.append("run")
        if optimize:
            cmd.append(optimize)

        code = self._exec(cmd, output_dir)
        if code != 0:
            raise GeneratorFailedError(code, what="Run" if run else "Build")

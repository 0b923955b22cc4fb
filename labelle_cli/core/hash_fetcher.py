"""Package hash fetching via ``zig fetch``.

``zig fetch <url>`` downloads a source tree into the global package cache
and prints its content hash on stdout. That hash is what pins the engine
release in the bootstrap ``build.zig.zon``; no other checksum is computed
here.
"""

from __future__ import annotations

import logging
import subprocess
from typing import Callable

from labelle_cli.config import LabelleSettings, settings as default_settings
from labelle_cli.core.errors import EmptyHashError, FetchFailedError, HashFetchError

logger = logging.getLogger(__name__)

RunFn = Callable[..., subprocess.CompletedProcess]


def engine_source_url(version: str, settings: LabelleSettings | None = None) -> str:
    """Source location of an engine release, e.g. ``git+https://...?ref=v0.33.0``."""
    cfg = settings or default_settings
    return f"{cfg.engine_git_url}?ref=v{version}"


class PackageHashFetcher:
    """Runs ``zig fetch`` and returns the trimmed hash it prints.

    Parameters
    ----------
    settings:
        Supplies the zig executable and the stdout bound.
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

    def fetch_hash(self, source_url: str, *, version: str | None = None) -> str:
        """Return the package hash for *source_url*.

        *version*, when known, is attached to a ``FetchFailedError`` so the
        caller can name it in its remediation hint.

        Raises
        ------
        FetchFailedError
            ``zig fetch`` exited non-zero.
        EmptyHashError
            It exited zero but printed nothing but whitespace.
        HashFetchError
            zig is missing, or stdout exceeded the configured bound.
        """
        cmd = [self._settings.zig_executable, "fetch", source_url]
        logger.debug("exec %s", " ".join(cmd))
        try:
            result = self._run(cmd, capture_output=True, text=True)
        except OSError as exc:
            raise HashFetchError(
                f"Could not run '{self._settings.zig_executable}': {exc}"
            ) from exc

        stdout = result.stdout or ""
        stderr = (result.stderr or "").strip()
        if stderr:
            logger.debug("zig fetch stderr: %s", stderr)

        if len(stdout.encode("utf-8")) > self._settings.hash_output_limit:
            raise HashFetchError(
                f"zig fetch printed more than {self._settings.hash_output_limit} bytes"
            )

        if result.returncode != 0:
            raise FetchFailedError(source_url, result.returncode, stderr, version=version)

        package_hash = stdout.strip()
        if not package_hash:
            raise EmptyHashError(f"zig fetch printed no hash for {source_url}")

        logger.info("Package hash for %s: %s", source_url, package_hash)
        return package_hash

    def fetch_version_hash(self, version: str) -> str:
        """Fetch the hash of the engine release tagged ``v<version>``."""
        return self.fetch_hash(engine_source_url(version, self._settings), version=version)

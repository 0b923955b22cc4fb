"""CLI settings — env-driven via pydantic-settings.

Every setting can be overridden with a ``LABELLE_*`` environment variable
or a ``.env`` file in the working directory.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class LabelleSettings(BaseSettings):
    """Runtime settings for the labelle CLI.

    Examples
    --------
    Point the resolver at a fork and raise verbosity::

        export LABELLE_ENGINE_ORG=my-fork
        export LABELLE_LOG_LEVEL=DEBUG

    Bound every registry request (the default waits indefinitely)::

        export LABELLE_HTTP_TIMEOUT_SECONDS=30
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="LABELLE_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: str = "WARNING"
    debug: bool = False

    # Release registry
    github_api_base: str = "https://api.github.com"
    git_host: str = "github.com"
    engine_org: str = "labelle-toolkit"
    engine_repo: str = "labelle-engine"
    releases_per_page: int = 100
    http_timeout_seconds: float | None = None

    # Read bounds (bytes)
    latest_response_limit: int = 1024 * 1024
    releases_response_limit: int = 4 * 1024 * 1024
    hash_output_limit: int = 64 * 1024

    # Version suggestions shown when a requested version is unknown
    suggestion_limit: int = 10

    # Toolchain
    zig_executable: str = "zig"
    release_optimize_flag: str = "-Doptimize=ReleaseSafe"

    # Project layout
    project_file: str = "project.labelle"
    bootstrap_dir: Path = Path(".labelle-bootstrap")
    output_dir: Path = Path(".labelle")

    @property
    def latest_release_url(self) -> str:
        """GitHub API endpoint for the newest published release."""
        return (
            f"{self.github_api_base}/repos/{self.engine_org}/"
            f"{self.engine_repo}/releases/latest"
        )

    @property
    def releases_url(self) -> str:
        """GitHub API endpoint listing all releases."""
        return f"{self.github_api_base}/repos/{self.engine_org}/{self.engine_repo}/releases"

    @property
    def engine_git_url(self) -> str:
        """Git source location of the engine, without a ref."""
        return f"git+https://{self.git_host}/{self.engine_org}/{self.engine_repo}"


# Module-level singleton: import as `from labelle_cli.config import settings`
settings = LabelleSettings()

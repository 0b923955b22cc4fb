"""Error taxonomy for version resolution, hash fetching and bootstrapping.

Every failure the CLI can report to a user derives from ``LabelleError``.
Command handlers catch ``LabelleError`` at the top level, print a single
message and exit non-zero. Errors whose details were already rendered
(``already_reported = True``) are not printed again.
"""

from __future__ import annotations


class LabelleError(RuntimeError):
    """Base class for every user-recoverable labelle failure."""

    already_reported: bool = False


# ---------------------------------------------------------------------------
# Registry (transport / parse)
# ---------------------------------------------------------------------------


class RegistryError(LabelleError):
    """The release registry could not be queried or understood."""


class RegistryTransportError(RegistryError):
    """The request could not be issued, failed, or its body could not be read."""


class InvalidResponseError(RegistryError):
    """The registry answered, but no ``tag_name`` value could be extracted."""


class NoReleasesFoundError(RegistryError):
    """The all-releases listing contained no tags."""


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class VersionNotFoundError(LabelleError):
    """A requested version is not in the release catalog.

    Raised only after the suggestion list has been rendered, so callers
    must not print anything further.
    """

    already_reported = True

    def __init__(
        self,
        requested: str,
        suggestions: list[str],
        omitted: int = 0,
    ) -> None:
        self.requested = requested
        self.suggestions = suggestions
        self.omitted = omitted
        super().__init__(f"Version '{requested}' not found")


# ---------------------------------------------------------------------------
# Hash fetching
# ---------------------------------------------------------------------------


class HashFetchError(LabelleError):
    """The package hash for an engine release could not be obtained."""


class FetchFailedError(HashFetchError):
    """``zig fetch`` exited non-zero."""

    def __init__(
        self,
        source_url: str,
        exit_code: int,
        detail: str = "",
        version: str | None = None,
    ) -> None:
        self.source_url = source_url
        self.version = version
        self.exit_code = exit_code
        self.detail = detail
        super().__init__(f"zig fetch exited with code {exit_code} for {source_url}")


class EmptyHashError(HashFetchError):
    """``zig fetch`` succeeded but printed no hash."""


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------


class GeneratorFailedError(LabelleError):
    """A ``zig build`` child process exited non-zero."""

    def __init__(self, exit_code: int, what: str = "Generator") -> None:
        self.exit_code = exit_code
        super().__init__(f"{what} failed with exit code {exit_code}")


# ---------------------------------------------------------------------------
# Project configuration
# ---------------------------------------------------------------------------


class ProjectConfigError(LabelleError):
    """The project configuration is missing or cannot be updated."""


class ProjectNotFoundError(ProjectConfigError):
    """No ``project.labelle`` exists in the project directory."""


class FieldNotFoundError(ProjectConfigError):
    """A field to rewrite is absent from ``project.labelle``."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Field '{field}' not found in project configuration")


class OutputNotFoundError(ProjectConfigError):
    """The generated output directory does not exist."""


class UnsafeOutputDirError(ProjectConfigError):
    """``output_dir`` does not name a subdirectory inside the project."""

    def __init__(self, output_dir: str, project_path: str) -> None:
        self.output_dir = output_dir
        super().__init__(
            f"Refusing to delete output_dir '{output_dir}': "
            f"it must be a subdirectory of {project_path}"
        )


class ScaffoldError(LabelleError):
    """A new project could not be created on disk."""

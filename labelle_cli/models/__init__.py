"""labelle data models — all Pydantic v2, all frozen (immutable)."""

from labelle_cli.models.bootstrap import BootstrapArtifacts
from labelle_cli.models.project import ProjectConfig
from labelle_cli.models.versioning import LATEST, ResolvedVersion

__all__ = [
    # versioning
    "LATEST",
    "ResolvedVersion",
    # project
    "ProjectConfig",
    # bootstrap
    "BootstrapArtifacts",
]

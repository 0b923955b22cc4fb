"""Bootstrap artifact set model."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict


class BootstrapArtifacts(BaseModel):
    """The two descriptors written into a bootstrap directory.

    The directory is disposable: it is regenerated on every run and is not
    part of the persisted project state.
    """

    model_config = ConfigDict(frozen=True)

    directory: Path
    dependency_descriptor: Path
    driver_descriptor: Path
    engine_version: str
    package_hash: str

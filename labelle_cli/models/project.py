"""Project configuration model (``project.labelle``)."""

from pydantic import BaseModel, ConfigDict


class ProjectConfig(BaseModel):
    """The string fields the CLI reads from ``project.labelle``.

    Only known top-level string fields are extracted; everything else in
    the file is kept verbatim in ``raw_content``. Absent fields are ``None``.
    """

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    engine_version: str | None = None
    initial_scene: str | None = None
    output_dir: str | None = None
    raw_content: str = ""

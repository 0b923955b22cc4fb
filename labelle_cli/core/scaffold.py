"""New-project scaffolding for ``labelle init``."""

from __future__ import annotations

import logging
from pathlib import Path

from labelle_cli.config import settings as default_settings
from labelle_cli.core.errors import ScaffoldError

logger = logging.getLogger(__name__)

PROJECT_DIRECTORIES = ("scenes", "prefabs", "components", "scripts", "hooks", "resources")

MAIN_SCENE = """\
.{
    .name = "main",
    .entities = .{},
}
"""


def render_project_file(name: str, engine_version: str) -> str:
    """Render the initial ``project.labelle`` for project *name*."""
    return (
        ".{\n"
        "    .version = 1,\n"
        f'    .name = "{name}",\n'
        f'    .engine_version = "{engine_version}",\n'
        '    .initial_scene = "main",\n'
        f'    .window = .{{ .width = 800, .height = 600, .title = "{name}" }},\n'
        "}\n"
    )


def scaffold_project(parent: Path, name: str, engine_version: str) -> Path:
    """Create project *name* under *parent*, pinned to *engine_version*.

    An existing project directory is reused; its ``project.labelle`` and
    main scene are overwritten.

    Raises
    ------
    ScaffoldError
        The directory tree or its files could not be created, e.g. because
        *name* is an existing file.
    """
    root = Path(parent) / name
    try:
        root.mkdir(parents=True, exist_ok=True)
        (root / default_settings.project_file).write_text(
            render_project_file(name, engine_version), encoding="utf-8"
        )
        for directory in PROJECT_DIRECTORIES:
            (root / directory).mkdir(exist_ok=True)
        (root / "scenes" / "main.zon").write_text(MAIN_SCENE, encoding="utf-8")
    except OSError as exc:
        raise ScaffoldError(f"Could not create project at {root}: {exc}") from exc

    logger.info("Scaffolded project %s at %s", name, root)
    return root

"""``project.labelle`` reader and engine-version rewriter.

The file is ZON, but only a handful of top-level string fields matter here,
so they are pulled out with marker scanning: find ``.field``, then the next
``=``, then the next quoted string. Rewrites splice the new value between
those quotes and leave every other byte untouched.
"""

from __future__ import annotations

import logging
from pathlib import Path

from labelle_cli.config import settings as default_settings
from labelle_cli.core.errors import (
    FieldNotFoundError,
    ProjectConfigError,
    ProjectNotFoundError,
)
from labelle_cli.core.scanning import QuotedValue, find_quoted_value
from labelle_cli.models.project import ProjectConfig

logger = logging.getLogger(__name__)

ENGINE_VERSION_FIELD = "engine_version"
_STRING_FIELDS = ("name", "engine_version", "initial_scene", "output_dir")


def _locate_field(content: str, field: str) -> QuotedValue | None:
    return find_quoted_value(content, f".{field}", delimiter="=")


def extract_string_field(content: str, field: str) -> str | None:
    """Return the quoted value of ``.field = "..."``, or None if absent."""
    found = _locate_field(content, field)
    return found.value if found is not None else None


def replace_string_field(content: str, field: str, value: str) -> str:
    """Return *content* with the quoted value of *field* replaced by *value*.

    Raises
    ------
    FieldNotFoundError
        *field* has no quoted value in *content*.
    """
    found = _locate_field(content, field)
    if found is None:
        raise FieldNotFoundError(field)
    return content[: found.value_start] + value + content[found.value_end :]


def project_file(project_path: Path) -> Path:
    return Path(project_path) / default_settings.project_file


def parse_project_config(content: str) -> ProjectConfig:
    """Build a ``ProjectConfig`` from raw ``project.labelle`` text."""
    fields = {name: extract_string_field(content, name) for name in _STRING_FIELDS}
    return ProjectConfig(raw_content=content, **fields)


def _read_text(path: Path) -> str:
    try:
        return path.read_bytes().decode("utf-8")
    except FileNotFoundError as exc:
        raise ProjectNotFoundError(f"{path} not found") from exc
    except UnicodeDecodeError as exc:
        raise ProjectConfigError(f"{path} is not valid UTF-8: {exc}") from exc
    except OSError as exc:
        raise ProjectConfigError(f"Could not read {path}: {exc}") from exc


def read_project_config(project_path: Path = Path(".")) -> ProjectConfig:
    """Read ``project.labelle`` from *project_path*.

    Raises
    ------
    ProjectNotFoundError
        The file does not exist.
    ProjectConfigError
        The file cannot be read or is not UTF-8.
    """
    return parse_project_config(_read_text(project_file(project_path)))


def update_engine_version(project_path: Path, new_version: str) -> None:
    """Rewrite ``engine_version`` in ``project.labelle`` in place.

    The file is left untouched when the field is missing.
    """
    path = project_file(project_path)
    content = _read_text(path)

    updated = replace_string_field(content, ENGINE_VERSION_FIELD, new_version)
    try:
        path.write_bytes(updated.encode("utf-8"))
    except OSError as exc:
        raise ProjectConfigError(f"Could not write {path}: {exc}") from exc
    logger.info("Set %s to %s in %s", ENGINE_VERSION_FIELD, new_version, path)

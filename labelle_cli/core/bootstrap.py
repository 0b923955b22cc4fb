"""Bootstrap directory synthesis.

A bootstrap directory holds two generated files:

``build.zig.zon``
    Dependency descriptor pinning exactly one ``labelle-engine`` release by
    URL and package hash. The only inputs are the version and the hash; the
    field order and quoting below are what ``zig build`` parses.

``build.zig``
    Driver descriptor. A fixed template: it builds the engine's
    ``labelle-generate`` artifact and runs it in the parent (project)
    directory, forwarding any ``zig build run -- ...`` arguments. Changing
    the pinned version never changes this file.

The directory is disposable and rewritten on every generation.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from labelle_cli.config import LabelleSettings, settings as default_settings
from labelle_cli.core.errors import LabelleError, ProjectConfigError, UnsafeOutputDirError
from labelle_cli.core.hash_fetcher import engine_source_url
from labelle_cli.models.bootstrap import BootstrapArtifacts

logger = logging.getLogger(__name__)

DEPENDENCY_DESCRIPTOR = "build.zig.zon"
DRIVER_DESCRIPTOR = "build.zig"

BOOTSTRAP_FINGERPRINT = 0x3DDA308FA396AD7D
BOOTSTRAP_PACKAGE_NAME = "labelle_bootstrap"
BOOTSTRAP_PACKAGE_VERSION = "0.0.0"
MINIMUM_ZIG_VERSION = "0.15.2"
ENGINE_DEPENDENCY = "labelle-engine"
GENERATOR_ARTIFACT = "labelle-generate"

_DEPENDENCY_TEMPLATE = """\
.{{
    .fingerprint = 0x{fingerprint:016x},
    .name = .{name},
    .version = "{package_version}",
    .minimum_zig_version = "{minimum_zig_version}",
    .dependencies = .{{
        .@"{dependency}" = .{{
            .url = "{url}",
            .hash = "{package_hash}",
        }},
    }},
    .paths = .{{ "{driver}", "{descriptor}" }},
}}
"""

DRIVER_TEMPLATE = f"""\
const std = @import("std");

pub fn build(b: *std.Build) void {{
    const target = b.standardTargetOptions(.{{}});
    const optimize = b.standardOptimizeOption(.{{}});

    const engine_dep = b.dependency("{ENGINE_DEPENDENCY}", .{{
        .target = target,
        .optimize = optimize,
    }});

    // Get the generator executable from the engine
    const generator = engine_dep.artifact("{GENERATOR_ARTIFACT}");

    // Run step that executes the generator
    const run_generator = b.addRunArtifact(generator);
    run_generator.setCwd(b.path(".."));  // Run in project directory

    // Pass through any arguments
    if (b.args) |args| {{
        run_generator.addArgs(args);
    }}

    const run_step = b.step("run", "Run the generator");
    run_step.dependOn(&run_generator.step);
}}
"""


def render_dependency_descriptor(
    version: str,
    package_hash: str,
    settings: LabelleSettings | None = None,
) -> str:
    """Render ``build.zig.zon`` pinning engine *version* at *package_hash*.

    *settings* only overrides where the engine source lives (git host,
    organisation, repository); with the defaults the output depends on
    *version* and *package_hash* alone.
    """
    return _DEPENDENCY_TEMPLATE.format(
        fingerprint=BOOTSTRAP_FINGERPRINT,
        name=BOOTSTRAP_PACKAGE_NAME,
        package_version=BOOTSTRAP_PACKAGE_VERSION,
        minimum_zig_version=MINIMUM_ZIG_VERSION,
        dependency=ENGINE_DEPENDENCY,
        url=engine_source_url(version, settings),
        package_hash=package_hash,
        driver=DRIVER_DESCRIPTOR,
        descriptor=DEPENDENCY_DESCRIPTOR,
    )


def render_driver_descriptor() -> str:
    """Render ``build.zig``; independent of the pinned version."""
    return DRIVER_TEMPLATE


class BootstrapSynthesizer:
    """Writes the bootstrap descriptors into *directory*."""

    def __init__(
        self,
        directory: Path,
        settings: LabelleSettings | None = None,
    ) -> None:
        self.directory = Path(directory)
        self._settings = settings or default_settings

    def write(self, version: str, package_hash: str) -> BootstrapArtifacts:
        """Create the directory if needed and (re)write both descriptors."""
        dependency_path = self.directory / DEPENDENCY_DESCRIPTOR
        driver_path = self.directory / DRIVER_DESCRIPTOR
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            dependency_path.write_text(
                render_dependency_descriptor(version, package_hash, self._settings),
                encoding="utf-8",
            )
            driver_path.write_text(render_driver_descriptor(), encoding="utf-8")
        except OSError as exc:
            raise LabelleError(
                f"Could not write bootstrap project in {self.directory}: {exc}"
            ) from exc
        logger.info("Wrote bootstrap descriptors to %s", self.directory)

        return BootstrapArtifacts(
            directory=self.directory,
            dependency_descriptor=dependency_path,
            driver_descriptor=driver_path,
            engine_version=version,
            package_hash=package_hash,
        )


def generated_state_dirs(
    project_path: Path,
    settings: LabelleSettings | None = None,
    output_dir: Path | None = None,
) -> list[Path]:
    """Return the output and bootstrap directories for *project_path*.

    Raises
    ------
    UnsafeOutputDirError
        A directory resolves to the project root or to a path outside it.
    """
    cfg = settings or default_settings
    root = Path(project_path).resolve()
    paths: list[Path] = []
    for candidate in (output_dir or cfg.output_dir, cfg.bootstrap_dir):
        path = (root / candidate).resolve()
        if root not in path.parents:
            raise UnsafeOutputDirError(str(candidate), str(root))
        paths.append(path)
    return paths


def clear_generated_state(
    project_path: Path,
    settings: LabelleSettings | None = None,
    output_dir: Path | None = None,
) -> list[Path]:
    """Delete the output and bootstrap directories under *project_path*.

    Both are checked before anything is removed. Missing directories are
    skipped. Returns the directories removed.
    """
    removed: list[Path] = []
    for path in generated_state_dirs(project_path, settings, output_dir):
        if path.is_dir():
            try:
                shutil.rmtree(path)
            except OSError as exc:
                raise ProjectConfigError(f"Could not remove {path}: {exc}") from exc
            removed.append(path)
            logger.info("Removed %s", path)
    return removed

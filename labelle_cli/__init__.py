"""labelle-cli: version-resolving bootstrap CLI for labelle-engine projects.

The CLI itself carries no engine logic. It resolves the engine version a
project asks for against the GitHub releases of ``labelle-engine``, pins
that release (with its ``zig fetch`` package hash) in a throwaway bootstrap
directory, and runs the engine's own generator through ``zig build``.
"""

__version__ = "0.4.0"
__description__ = "Version-resolving bootstrap CLI for labelle-engine projects"

from labelle_cli.core.resolver import VersionResolver
from labelle_cli.core.pipeline import EngineBootstrap
from labelle_cli.cli.app import app as cli

__all__ = ["VersionResolver", "EngineBootstrap", "cli", "__version__"]

"""labelle CLI — Typer-based command-line interface.

Provides the ``labelle`` command with subcommands for creating projects,
generating them through the pinned engine, building and running them, and
upgrading the pinned engine version.

All output uses Rich for formatted terminal display.
"""

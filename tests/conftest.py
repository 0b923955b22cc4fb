"""Shared test fixtures for labelle-cli."""

from __future__ import annotations

import io
import json
import subprocess
from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import pytest
from rich.console import Console

from labelle_cli.config import LabelleSettings
from labelle_cli.core.registry import RegistryClient
from labelle_cli.core.scaffold import render_project_file


@pytest.fixture
def settings() -> LabelleSettings:
    """Provide settings that do not depend on the test environment."""
    return LabelleSettings(_env_file=None)


@pytest.fixture
def console_buffer() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def console(console_buffer: io.StringIO) -> Console:
    """A wide, colourless console writing into ``console_buffer``."""
    return Console(file=console_buffer, width=200, color_system=None, highlight=False)


# ---------------------------------------------------------------------------
# Fake release registry
# ---------------------------------------------------------------------------


def render_releases_body(tags: list[str]) -> str:
    """Render an all-releases payload the way GitHub shapes it."""
    return json.dumps(
        [{"id": i, "tag_name": f"v{tag}", "name": f"v{tag}"} for i, tag in enumerate(tags)],
        indent=2,
    )


class FakeRegistry:
    """Serves canned latest/all-releases payloads through ``httpx.MockTransport``."""

    def __init__(
        self,
        catalog: list[str] | None = None,
        latest: str | None = None,
        status_code: int = 200,
        latest_body: str | None = None,
        releases_body: str | None = None,
    ) -> None:
        self.catalog = catalog if catalog is not None else ["0.33.0", "0.32.0", "0.31.0"]
        self.latest = latest if latest is not None else (self.catalog[0] if self.catalog else "")
        self.status_code = status_code
        self.latest_body = latest_body
        self.releases_body = releases_body
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status_code != 200:
            return httpx.Response(self.status_code, json={"message": "API rate limit exceeded"})
        if request.url.path.endswith("/releases/latest"):
            body = self.latest_body
            if body is None:
                body = json.dumps({"tag_name": f"v{self.latest}", "draft": False}, indent=2)
        else:
            body = self.releases_body if self.releases_body is not None else render_releases_body(self.catalog)
        return httpx.Response(200, content=body.encode("utf-8"))

    def client(self, settings: LabelleSettings) -> RegistryClient:
        return RegistryClient(settings, client=httpx.Client(transport=httpx.MockTransport(self.handler)))


@pytest.fixture
def make_registry(settings: LabelleSettings) -> Callable[..., tuple[FakeRegistry, RegistryClient]]:
    """Factory fixture: build a fake registry and a client wired to it."""

    def _factory(
        custom_settings: LabelleSettings | None = None,
        **kwargs: Any,
    ) -> tuple[FakeRegistry, RegistryClient]:
        fake = FakeRegistry(**kwargs)
        return fake, fake.client(custom_settings or settings)

    return _factory


# ---------------------------------------------------------------------------
# Fake subprocess runner
# ---------------------------------------------------------------------------


class FakeRun:
    """``subprocess.run`` stand-in that records calls and answers per subcommand.

    ``responses`` maps the zig subcommand (``"fetch"``, ``"build"``) to a
    ``(returncode, stdout)`` pair.
    """

    def __init__(self, responses: dict[str, tuple[int, str]] | None = None) -> None:
        self.responses = {"fetch": (0, "1220abcdef0123456789\n"), "build": (0, "")}
        self.responses.update(responses or {})
        self.calls: list[tuple[list[str], dict[str, Any]]] = []

    def __call__(self, cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess:
        self.calls.append((list(cmd), kwargs))
        code, stdout = self.responses.get(cmd[1], (0, ""))
        return subprocess.CompletedProcess(cmd, code, stdout=stdout, stderr="")

    def commands(self) -> list[list[str]]:
        return [cmd for cmd, _ in self.calls]


@pytest.fixture
def fake_run() -> FakeRun:
    return FakeRun()


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A project directory pinned to engine 0.32.0."""
    root = tmp_path / "my-game"
    root.mkdir()
    (root / "project.labelle").write_text(
        render_project_file("my-game", "0.32.0"), encoding="utf-8"
    )
    return root

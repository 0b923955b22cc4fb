"""Tests for PackageHashFetcher — zig fetch invocation and failure modes."""

from __future__ import annotations

import subprocess

import pytest

from labelle_cli.config import LabelleSettings
from labelle_cli.core.errors import EmptyHashError, FetchFailedError, HashFetchError
from labelle_cli.core.hash_fetcher import PackageHashFetcher, engine_source_url


def _run_returning(code: int, stdout: str, stderr: str = ""):
    calls: list[list[str]] = []

    def _run(cmd, **kwargs):
        calls.append(list(cmd))
        return subprocess.CompletedProcess(cmd, code, stdout=stdout, stderr=stderr)

    _run.calls = calls
    return _run


class TestEngineSourceUrl:
    def test_default_location(self, settings):
        assert engine_source_url("0.33.0", settings) == (
            "git+https://github.com/labelle-toolkit/labelle-engine?ref=v0.33.0"
        )

    def test_follows_settings(self):
        cfg = LabelleSettings(_env_file=None, git_host="git.example.org", engine_org="me")
        assert engine_source_url("1.0", cfg) == "git+https://git.example.org/me/labelle-engine?ref=v1.0"


class TestFetchHash:
    def test_returns_trimmed_hash(self, settings):
        run = _run_returning(0, "  1220deadbeef\n\n")
        fetcher = PackageHashFetcher(settings, run=run)
        assert fetcher.fetch_hash("git+https://x?ref=v1") == "1220deadbeef"
        assert run.calls == [["zig", "fetch", "git+https://x?ref=v1"]]

    def test_fetch_version_hash_builds_url(self, settings):
        run = _run_returning(0, "1220abc\n")
        PackageHashFetcher(settings, run=run).fetch_version_hash("0.33.0")
        assert run.calls[0][2].endswith("labelle-engine?ref=v0.33.0")

    def test_nonzero_exit_is_fetch_failed(self, settings):
        run = _run_returning(1, "", "error: unable to fetch")
        with pytest.raises(FetchFailedError) as excinfo:
            PackageHashFetcher(settings, run=run).fetch_version_hash("0.0.1")
        assert excinfo.value.exit_code == 1
        assert excinfo.value.version == "0.0.1"
        assert "unable to fetch" in excinfo.value.detail

    @pytest.mark.parametrize("stdout", ["", "   ", "\n\t\n"])
    def test_blank_output_is_empty_hash(self, settings, stdout):
        run = _run_returning(0, stdout)
        with pytest.raises(EmptyHashError):
            PackageHashFetcher(settings, run=run).fetch_hash("u")

    def test_oversized_output_is_rejected(self):
        cfg = LabelleSettings(_env_file=None, hash_output_limit=8)
        run = _run_returning(0, "x" * 9)
        with pytest.raises(HashFetchError):
            PackageHashFetcher(cfg, run=run).fetch_hash("u")

    def test_missing_zig(self, settings):
        def _run(cmd, **kwargs):
            raise FileNotFoundError(2, "No such file or directory", cmd[0])

        with pytest.raises(HashFetchError, match="Could not run 'zig'"):
            PackageHashFetcher(settings, run=_run).fetch_hash("u")

    def test_failures_are_not_fetch_failed_unless_exit_nonzero(self, settings):
        run = _run_returning(0, "")
        with pytest.raises(HashFetchError) as excinfo:
            PackageHashFetcher(settings, run=run).fetch_hash("u")
        assert not isinstance(excinfo.value, FetchFailedError)

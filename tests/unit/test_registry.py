"""Tests for RegistryClient — tag extraction and transport failures."""

from __future__ import annotations

import pytest

from labelle_cli.config import LabelleSettings
from labelle_cli.core.errors import (
    InvalidResponseError,
    NoReleasesFoundError,
    RegistryTransportError,
)
from labelle_cli.core.registry import (
    extract_all_tags,
    extract_tag,
    strip_version_prefix,
)


# ---------------------------------------------------------------------------
# Test: pure extraction
# ---------------------------------------------------------------------------


class TestStripVersionPrefix:
    def test_strips_leading_v(self):
        assert strip_version_prefix("v0.33.0") == "0.33.0"

    def test_leaves_unprefixed_tag(self):
        assert strip_version_prefix("0.33.0") == "0.33.0"

    def test_strips_only_one_v(self):
        assert strip_version_prefix("vv1") == "v1"

    def test_empty_tag(self):
        assert strip_version_prefix("") == ""


class TestExtractTag:
    def test_latest_payload(self):
        body = '{\n  "url": "https://api.github.com/x",\n  "tag_name": "v0.33.0",\n  "name": "v0.33.0"\n}'
        assert extract_tag(body) == "0.33.0"

    def test_compact_payload(self):
        assert extract_tag('{"tag_name":"v1.2.3"}') == "1.2.3"

    def test_missing_field_is_invalid(self):
        with pytest.raises(InvalidResponseError):
            extract_tag('{"message": "Not Found"}')

    def test_unterminated_value_is_invalid(self):
        with pytest.raises(InvalidResponseError):
            extract_tag('{"tag_name": "v0.3')


class TestExtractAllTags:
    def test_preserves_document_order(self):
        body = '[{"tag_name": "v0.31.0"}, {"tag_name": "v0.33.0"}, {"tag_name": "0.32.0"}]'
        assert extract_all_tags(body) == ["0.31.0", "0.33.0", "0.32.0"]

    def test_count_matches_markers(self):
        tags = [f"0.{i}.0" for i in range(40)]
        body = "[" + ", ".join(f'{{"tag_name": "v{t}"}}' for t in tags) + "]"
        assert extract_all_tags(body) == tags

    def test_empty_listing_raises(self):
        with pytest.raises(NoReleasesFoundError):
            extract_all_tags("[]")

    def test_truncated_body_keeps_complete_tags(self):
        body = '[{"tag_name": "v0.33.0"}, {"tag_name": "v0.3'
        assert extract_all_tags(body) == ["0.33.0"]

    def test_extraction_is_repeatable(self):
        body = '[{"tag_name": "v2"}, {"tag_name": "v1"}]'
        assert extract_all_tags(body) == extract_all_tags(body)


# ---------------------------------------------------------------------------
# Test: HTTP client
# ---------------------------------------------------------------------------


class TestRegistryClient:
    def test_fetch_latest_tag(self, make_registry):
        fake, client = make_registry(latest="0.40.1")
        assert client.fetch_latest_tag() == "0.40.1"
        assert len(fake.requests) == 1
        assert fake.requests[0].url.path == "/repos/labelle-toolkit/labelle-engine/releases/latest"

    def test_fetch_all_tags(self, make_registry):
        fake, client = make_registry(catalog=["0.33.0", "0.32.0"])
        assert client.fetch_all_tags() == ["0.33.0", "0.32.0"]
        assert fake.requests[0].url.params["per_page"] == "100"

    def test_sends_github_headers(self, make_registry):
        fake, client = make_registry()
        client.fetch_latest_tag()
        request = fake.requests[0]
        assert request.headers["Accept"] == "application/vnd.github.v3+json"
        assert request.headers["User-Agent"].startswith("labelle-cli/")

    def test_no_caching_between_calls(self, make_registry):
        fake, client = make_registry()
        client.fetch_all_tags()
        client.fetch_all_tags()
        assert len(fake.requests) == 2

    def test_latest_without_tag_is_invalid(self, make_registry):
        _, client = make_registry(latest_body='{"message": "weird"}')
        with pytest.raises(InvalidResponseError):
            client.fetch_latest_tag()

    def test_empty_catalog(self, make_registry):
        _, client = make_registry(catalog=[], latest="x")
        with pytest.raises(NoReleasesFoundError):
            client.fetch_all_tags()

    def test_http_error_is_transport_error(self, make_registry):
        fake, client = make_registry(status_code=403)
        with pytest.raises(RegistryTransportError, match="rate limited"):
            client.fetch_latest_tag()
        assert len(fake.requests) == 1  # no retry

    def test_body_over_limit_is_transport_error(self, make_registry):
        small = LabelleSettings(_env_file=None, latest_response_limit=16)
        _, client = make_registry(custom_settings=small)
        with pytest.raises(RegistryTransportError, match="exceeded 16 bytes"):
            client.fetch_latest_tag()

    def test_custom_repository(self, make_registry):
        fork = LabelleSettings(_env_file=None, engine_org="someone", engine_repo="engine-fork")
        fake, client = make_registry(custom_settings=fork)
        client.fetch_all_tags()
        assert fake.requests[0].url.path == "/repos/someone/engine-fork/releases"

    @pytest.mark.parametrize("tag", ["latest", "vlatest"])
    def test_reserved_latest_tag_is_invalid(self, make_registry, tag):
        _, client = make_registry(latest_body=f'{{"tag_name": "{tag}"}}')
        with pytest.raises(InvalidResponseError, match="reserved tag"):
            client.fetch_latest_tag()

"""Release registry client — reads engine tags from the GitHub releases API.

Only the ``tag_name`` field is consumed. Payloads are scanned with the
marker/quote primitive rather than decoded as JSON, so a truncated or
partially malformed body still yields every complete tag before the damage.

No caching and no retries: each call issues exactly one request.
"""

from __future__ import annotations

import logging

import httpx

from labelle_cli import __version__
from labelle_cli.config import LabelleSettings, settings as default_settings
from labelle_cli.core.errors import (
    InvalidResponseError,
    NoReleasesFoundError,
    RegistryTransportError,
)
from labelle_cli.core.scanning import find_quoted_value, iter_quoted_values
from labelle_cli.models.versioning import LATEST

logger = logging.getLogger(__name__)

TAG_MARKER = '"tag_name":'
VERSION_PREFIX = "v"


# ---------------------------------------------------------------------------
# Tag extraction (pure)
# ---------------------------------------------------------------------------


def strip_version_prefix(tag: str) -> str:
    """Drop a single leading ``v`` from a release tag."""
    return tag[1:] if tag.startswith(VERSION_PREFIX) else tag


def extract_tag(body: str) -> str:
    """Extract the first ``tag_name`` value from a release payload."""
    found = find_quoted_value(body, TAG_MARKER)
    if found is None:
        raise InvalidResponseError("Registry response has no tag_name field")
    return strip_version_prefix(found.value)


def extract_all_tags(body: str) -> list[str]:
    """Extract every ``tag_name`` value in document order."""
    tags = [strip_version_prefix(found.value) for found in iter_quoted_values(body, TAG_MARKER)]
    if not tags:
        raise NoReleasesFoundError("No releases found in registry response")
    return tags


def _http_error_hint(exc: httpx.HTTPError) -> str | None:
    if isinstance(exc, httpx.TimeoutException):
        return "network timeout; try again or raise LABELLE_HTTP_TIMEOUT_SECONDS"
    if isinstance(exc, httpx.ConnectError):
        return "could not connect; check your internet/VPN/firewall"
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        if status in (403, 429):
            return "rate limited by GitHub; wait a bit and retry"
        if status == 404:
            return "release listing not found; check LABELLE_ENGINE_ORG/LABELLE_ENGINE_REPO"
        if status >= 500:
            return "server error; try again later"
    return None


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


class RegistryClient:
    """Queries the latest-release and all-releases endpoints.

    Parameters
    ----------
    settings:
        Endpoint locations and read bounds. Defaults to the process settings.
    client:
        An ``httpx.Client`` to issue requests with. One is created (and owned)
        when omitted; tests inject a client backed by ``httpx.MockTransport``.
    """

    def __init__(
        self,
        settings: LabelleSettings | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._settings = settings or default_settings
        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=self._settings.http_timeout_seconds,
            follow_redirects=True,
        )

    def __enter__(self) -> RegistryClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    def fetch_latest_tag(self) -> str:
        """Return the newest release tag with any ``v`` prefix removed."""
        body = self._get_text(
            self._settings.latest_release_url,
            limit=self._settings.latest_response_limit,
        )
        tag = extract_tag(body)
        if tag == LATEST:
            raise InvalidResponseError(f"Registry returned the reserved tag '{tag}'")
        logger.info("Latest engine release: %s", tag)
        return tag

    def fetch_all_tags(self) -> list[str]:
        """Return every release tag, in the order the registry listed them."""
        body = self._get_text(
            self._settings.releases_url,
            limit=self._settings.releases_response_limit,
            params={"per_page": self._settings.releases_per_page},
        )
        tags = extract_all_tags(body)
        logger.info("Registry listed %d engine releases", len(tags))
        return tags

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _get_text(
        self,
        url: str,
        *,
        limit: int,
        params: dict[str, int] | None = None,
    ) -> str:
        """GET *url* and return its body, reading at most *limit* bytes."""
        headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": f"labelle-cli/{__version__}",
        }
        logger.debug("GET %s", url)
        try:
            with self._client.stream("GET", url, headers=headers, params=params) as response:
                response.raise_for_status()
                chunks: list[bytes] = []
                received = 0
                for chunk in response.iter_bytes():
                    received += len(chunk)
                    if received > limit:
                        raise RegistryTransportError(
                            f"Registry response from {url} exceeded {limit} bytes"
                        )
                    chunks.append(chunk)
                encoding = response.charset_encoding or "utf-8"
        except httpx.HTTPError as exc:
            hint = _http_error_hint(exc)
            message = f"Registry request to {url} failed: {exc}"
            if hint:
                message = f"{message} ({hint})"
            raise RegistryTransportError(message) from exc

        logger.debug("Received %d bytes from %s", received, url)
        return b"".join(chunks).decode(encoding, errors="replace")

"""Retrieval of remote release artifacts.

The release server exposes three objects per version: the SHA256SUMS
manifest, its detached signature and the zip archive for one platform.
``ReleaseTransport`` builds the well-known URL for each of them, sends a
single blocking GET with a kind-appropriate ``Accept`` header and returns
the raw body.

The HTTP layer itself is the narrow :class:`HttpClient` capability so the
pipeline can be driven by synthetic responses in tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol

import requests

from nomadutil.constants import (
    ACCEPT_ARCHIVE,
    ACCEPT_MANIFEST,
    ACCEPT_SIGNATURE,
    DEFAULT_RELEASE_BASE_URL,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_USER_AGENT,
    PRODUCT_NAME,
)
from nomadutil.exceptions import NetworkError
from nomadutil.logger import get_logger

logger = get_logger(__name__)

HTTP_OK_MIN = 200
HTTP_OK_MAX = 299


class ArtifactKind(Enum):
    """Remote objects published for a release."""

    MANIFEST = "manifest"
    SIGNATURE = "signature"
    ARCHIVE = "archive"

    @property
    def accept(self) -> str:
        """Accept header value for this kind."""
        return _ACCEPT_HEADERS[self]


_ACCEPT_HEADERS: dict[ArtifactKind, str] = {
    ArtifactKind.MANIFEST: ACCEPT_MANIFEST,
    ArtifactKind.SIGNATURE: ACCEPT_SIGNATURE,
    ArtifactKind.ARCHIVE: ACCEPT_ARCHIVE,
}


class HttpClient(Protocol):
    """Minimal blocking HTTP capability used by the transport."""

    def request(self, url: str, headers: dict[str, str]) -> tuple[int, bytes]:
        """Perform a GET and return ``(status, body)``.

        Raises:
            NetworkError: If no response could be obtained at all.

        """
        ...


class RequestsHttpClient:
    """``HttpClient`` backed by a cookie-less ``requests.Session``."""

    def __init__(
        self,
        session: requests.Session | None = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        """Create the client.

        Args:
            session: Session to reuse; a fresh one is created when omitted
            timeout_seconds: Fixed budget for each request
            user_agent: User-Agent header sent with every request

        """
        self.session = session or requests.Session()
        self.timeout_seconds = timeout_seconds
        self.user_agent = user_agent

    def request(self, url: str, headers: dict[str, str]) -> tuple[int, bytes]:
        """Perform a GET and return ``(status, body)``."""
        merged = {"User-Agent": self.user_agent, **headers}
        try:
            response = self.session.get(
                url, headers=merged, timeout=self.timeout_seconds
            )
        except requests.RequestException as e:
            logger.debug("Request to %s failed: %s", url, e)
            raise NetworkError(None, url, f"request to {url} failed: {e}") from e

        # Responses never affect later requests
        self.session.cookies.clear()
        return response.status_code, response.content

    def close(self) -> None:
        """Close the underlying session."""
        self.session.close()

    def __enter__(self) -> RequestsHttpClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


@dataclass(frozen=True, slots=True)
class ReleaseEndpoints:
    """URL layout of the release server.

    Attributes:
        base_url: Server root, without trailing slash
        product: Product name used in paths and file names
        os: Target operating system for the archive
        arch: Target architecture for the archive

    """

    os: str
    arch: str
    base_url: str = DEFAULT_RELEASE_BASE_URL
    product: str = PRODUCT_NAME

    def url_for(self, kind: ArtifactKind, version: str) -> str:
        """Build the URL of ``kind`` for ``version``."""
        root = f"{self.base_url.rstrip('/')}/{self.product}/{version}"
        stem = f"{self.product}_{version}"
        if kind is ArtifactKind.MANIFEST:
            return f"{root}/{stem}_SHA256SUMS"
        if kind is ArtifactKind.SIGNATURE:
            return f"{root}/{stem}_SHA256SUMS.sig"
        return f"{root}/{stem}_{self.os}_{self.arch}.zip"


class ReleaseTransport:
    """Fetches release artifacts through an ``HttpClient``."""

    def __init__(self, client: HttpClient, endpoints: ReleaseEndpoints) -> None:
        self.client = client
        self.endpoints = endpoints

    def fetch(self, kind: ArtifactKind, version: str) -> bytes:
        """Fetch one artifact.

        Args:
            kind: Which artifact to retrieve
            version: Release version, e.g. ``1.2.3``

        Returns:
            Raw response body

        Raises:
            NetworkError: On a non-success status or a connection failure

        """
        url = self.endpoints.url_for(kind, version)
        logger.debug("GET %s (Accept: %s)", url, kind.accept)

        status, body = self.client.request(url, {"Accept": kind.accept})
        if not HTTP_OK_MIN <= status <= HTTP_OK_MAX:
            logger.debug("GET %s returned status %d", url, status)
            raise NetworkError(
                status,
                url,
                f"failed to get {kind.value} for version {version}: "
                f"status {status}",
            )

        logger.debug("Fetched %s: %d bytes", kind.value, len(body))
        return body

    def fetch_manifest(self, version: str) -> str:
        """Fetch the SHA256SUMS manifest as text."""
        body = self.fetch(ArtifactKind.MANIFEST, version)
        return body.decode("utf-8", errors="replace")

    def fetch_signature(self, version: str) -> bytes:
        """Fetch the manifest's detached signature."""
        return self.fetch(ArtifactKind.SIGNATURE, version)

    def fetch_archive(self, version: str) -> bytes:
        """Fetch the zip archive for the configured platform."""
        return self.fetch(ArtifactKind.ARCHIVE, version)

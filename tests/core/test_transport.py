"""Tests for release artifact retrieval."""

from unittest.mock import MagicMock

import pytest
import requests

from nomadutil.constants import DEFAULT_USER_AGENT
from nomadutil.core.transport import (
    ArtifactKind,
    ReleaseEndpoints,
    ReleaseTransport,
    RequestsHttpClient,
)
from nomadutil.exceptions import NetworkError
from tests.helpers import FakeHttpClient

BASE = "https://releases.hashicorp.com/nomad/1.2.3"


@pytest.fixture
def endpoints():
    return ReleaseEndpoints(os="linux", arch="amd64")


class TestReleaseEndpoints:
    """Test URL construction."""

    @pytest.mark.parametrize(
        ("kind", "url"),
        [
            (ArtifactKind.MANIFEST, f"{BASE}/nomad_1.2.3_SHA256SUMS"),
            (ArtifactKind.SIGNATURE, f"{BASE}/nomad_1.2.3_SHA256SUMS.sig"),
            (ArtifactKind.ARCHIVE, f"{BASE}/nomad_1.2.3_linux_amd64.zip"),
        ],
    )
    def test_url_for(self, endpoints, kind, url):
        """Each artifact kind has a well-known URL."""
        assert endpoints.url_for(kind, "1.2.3") == url

    def test_custom_base_url(self):
        """A mirror base URL replaces the default server."""
        mirror = ReleaseEndpoints(
            os="linux", arch="arm64", base_url="http://mirror.local/"
        )
        assert mirror.url_for(ArtifactKind.ARCHIVE, "1.0.0") == (
            "http://mirror.local/nomad/1.0.0/nomad_1.0.0_linux_arm64.zip"
        )


class TestReleaseTransport:
    """Test fetching through an HttpClient."""

    def test_accept_headers(self, endpoints):
        """Every kind is requested with its own Accept header."""
        client = FakeHttpClient(
            {
                f"{BASE}/nomad_1.2.3_SHA256SUMS": (200, b"sums"),
                f"{BASE}/nomad_1.2.3_SHA256SUMS.sig": (200, b"sig"),
                f"{BASE}/nomad_1.2.3_linux_amd64.zip": (200, b"zip"),
            }
        )
        transport = ReleaseTransport(client, endpoints)

        assert transport.fetch_manifest("1.2.3") == "sums"
        assert transport.fetch_signature("1.2.3") == b"sig"
        assert transport.fetch_archive("1.2.3") == b"zip"
        assert [headers["Accept"] for _, headers in client.calls] == [
            "text/plain",
            "application/octet-stream",
            "application/zip",
        ]

    @pytest.mark.parametrize("status", [301, 403, 404, 500])
    def test_non_success_status(self, endpoints, status):
        """Any status outside 2xx is a NetworkError with that status."""
        url = f"{BASE}/nomad_1.2.3_SHA256SUMS"
        client = FakeHttpClient({url: (status, b"")})

        with pytest.raises(NetworkError) as exc_info:
            ReleaseTransport(client, endpoints).fetch_manifest("1.2.3")

        assert exc_info.value.status == status
        assert exc_info.value.url == url

    def test_empty_body_is_returned(self, endpoints):
        """An empty 200 body is passed on unchanged."""
        url = f"{BASE}/nomad_1.2.3_SHA256SUMS.sig"
        client = FakeHttpClient({url: (200, b"")})
        assert ReleaseTransport(client, endpoints).fetch_signature("1.2.3") == b""

    def test_invalid_utf8_manifest(self, endpoints):
        """Undecodable bytes are replaced, not fatal."""
        url = f"{BASE}/nomad_1.2.3_SHA256SUMS"
        client = FakeHttpClient({url: (200, b"ab\xffcd")})
        text = ReleaseTransport(client, endpoints).fetch_manifest("1.2.3")
        assert text == "ab\ufffdcd"


class TestRequestsHttpClient:
    """Test the requests-backed client."""

    def test_request_sends_user_agent(self):
        """The User-Agent is added to the caller's headers."""
        session = MagicMock()
        session.get.return_value = MagicMock(status_code=200, content=b"ok")

        client = RequestsHttpClient(session=session, timeout_seconds=7)
        assert client.request("https://x", {"Accept": "text/plain"}) == (
            200,
            b"ok",
        )
        session.get.assert_called_once_with(
            "https://x",
            headers={"User-Agent": DEFAULT_USER_AGENT, "Accept": "text/plain"},
            timeout=7,
        )
        session.cookies.clear.assert_called_once()

    def test_connection_failure(self):
        """A transport failure becomes a NetworkError without a status."""
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("refused")

        with pytest.raises(NetworkError) as exc_info:
            RequestsHttpClient(session=session).request("https://x", {})

        assert exc_info.value.status is None
        assert exc_info.value.url == "https://x"

    def test_context_manager_closes_session(self):
        """Leaving the context closes the session."""
        session = MagicMock()
        with RequestsHttpClient(session=session):
            pass
        session.close.assert_called_once()

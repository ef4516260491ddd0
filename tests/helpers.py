"""Builders and fakes shared by the test modules."""

import hashlib
import io
import zipfile

VERSION = "1.2.3"
BINARY = b"\x7fELF fake nomad binary"


def make_zip(entries: dict[str, bytes]) -> bytes:
    """Build an in-memory zip archive with the given entries."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
        for name, content in entries.items():
            zf.writestr(name, content)
    return buffer.getvalue()


def make_manifest(lines: list[tuple[bytes, str]]) -> str:
    """Render ``(archive bytes, file name)`` pairs as a SHA256SUMS text."""
    return "".join(
        f"{hashlib.sha256(data).hexdigest()}  {name}\n" for data, name in lines
    )


class FakeHttpClient:
    """HttpClient serving canned responses keyed by URL."""

    def __init__(self, responses: dict[str, tuple[int, bytes]]) -> None:
        self.responses = responses
        self.calls: list[tuple[str, dict[str, str]]] = []

    def request(self, url: str, headers: dict[str, str]) -> tuple[int, bytes]:
        self.calls.append((url, dict(headers)))
        return self.responses.get(url, (404, b"not found"))


class FakeSignatureBackend:
    """SignatureBackend accepting one known signature."""

    GOOD_SIGNATURE = b"good-signature"

    def __init__(self, fingerprints: list[str] | None = None) -> None:
        self.fingerprints = (
            ["C874011F0AB405110D02105534365D9472D7468F"]
            if fingerprints is None
            else fingerprints
        )
        self.imported: list[bytes] = []
        self.verified: list[tuple[bytes, bytes]] = []
        self.closed = False

    def import_keys(self, armored: bytes) -> list[str]:
        self.imported.append(armored)
        return list(self.fingerprints)

    def verify_detached(self, signature: bytes, data: bytes) -> bool:
        self.verified.append((signature, data))
        return signature == self.GOOD_SIGNATURE

    def close(self) -> None:
        self.closed = True

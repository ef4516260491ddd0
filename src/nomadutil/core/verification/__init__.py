"""Authentication and integrity checks for release artifacts.

- checksum_parser: select the expected digest from a SHA256SUMS manifest
- signature: verify the manifest's detached OpenPGP signature
- digest: compute and compare SHA-256 digests
"""

from nomadutil.core.verification.checksum_parser import (
    ArtifactName,
    ChecksumEntry,
    decode_digest,
    iter_entries,
    parse_artifact_name,
    parse_line,
    select,
)
from nomadutil.core.verification.digest import DigestVerifier, compare, digest
from nomadutil.core.verification.signature import (
    DirectoryKeyProvider,
    GnupgBackend,
    KeyNotFoundError,
    KeyProvider,
    Keyring,
    MappingKeyProvider,
    SignatureBackend,
    SignatureVerifier,
    load_keyring,
    verify,
)

__all__ = [
    "ArtifactName",
    "ChecksumEntry",
    "DigestVerifier",
    "DirectoryKeyProvider",
    "GnupgBackend",
    "KeyNotFoundError",
    "KeyProvider",
    "Keyring",
    "MappingKeyProvider",
    "SignatureBackend",
    "SignatureVerifier",
    "compare",
    "decode_digest",
    "digest",
    "iter_entries",
    "load_keyring",
    "parse_artifact_name",
    "parse_line",
    "select",
    "verify",
]

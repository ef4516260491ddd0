"""SHA-256 digest computation and comparison for downloaded archives."""

from __future__ import annotations

import hashlib
import hmac
from collections.abc import Callable
from typing import Any

from nomadutil.exceptions import DigestMismatchError
from nomadutil.logger import get_logger

logger = get_logger(__name__)

# hashlib-style constructor, e.g. hashlib.sha256
HashFactory = Callable[..., Any]


def digest(data: bytes, hash_factory: HashFactory = hashlib.sha256) -> bytes:
    """Return the digest of ``data``."""
    return hash_factory(data).digest()


def compare(expected: bytes, actual: bytes) -> None:
    """Require ``actual`` to equal ``expected`` byte for byte.

    Raises:
        DigestMismatchError: With both values as lowercase hex

    """
    if len(expected) != len(actual) or not hmac.compare_digest(
        expected, actual
    ):
        logger.error("Digest verification FAILED")
        logger.error("   Expected: %s", expected.hex())
        logger.error("   Actual:   %s", actual.hex())
        raise DigestMismatchError(expected.hex(), actual.hex())


class DigestVerifier:
    """Checks archive bytes against the digest taken from the manifest."""

    def __init__(self, hash_factory: HashFactory = hashlib.sha256) -> None:
        self.hash_factory = hash_factory

    def digest(self, data: bytes) -> bytes:
        """Compute the digest of ``data``."""
        return digest(data, self.hash_factory)

    def verify(self, data: bytes, expected: bytes) -> None:
        """Compute the digest of ``data`` and compare it to ``expected``.

        Raises:
            DigestMismatchError: If the digests differ

        """
        logger.debug("Computing digest of %d bytes", len(data))
        actual = self.digest(data)
        logger.debug("   Computed: %s", actual.hex())
        compare(expected, actual)
        logger.debug("Digest verification PASSED")

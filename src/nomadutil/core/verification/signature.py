"""Detached OpenPGP signature verification of the checksum manifest.

The signed message is the whole SHA256SUMS text, byte for byte; checking
only the selected digest would leave the rest of the manifest
unauthenticated.

Trusted key material is looked up by name through a :class:`KeyProvider`
and imported into a :class:`Keyring`. The OpenPGP work itself is done by a
:class:`SignatureBackend`; the default one drives GnuPG through
python-gnupg inside a throw-away home directory, so the user's own
keyring is never read or modified.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Protocol

import gnupg

from nomadutil.constants import DEFAULT_KEY_NAME
from nomadutil.exceptions import KeyringLoadError, SignatureInvalidError
from nomadutil.logger import get_logger

logger = get_logger(__name__)

_GNUPG_HOME_MODE = 0o700


class KeyNotFoundError(LookupError):
    """Raised by a key provider when no resource has the requested name."""


class KeyProvider(Protocol):
    """Source of ASCII-armored public key material."""

    def get_bytes_by_name(self, name: str) -> bytes:
        """Return the resource called ``name``.

        Raises:
            KeyNotFoundError: If there is no such resource

        """
        ...


class DirectoryKeyProvider:
    """Reads key resources from files in one directory."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def get_bytes_by_name(self, name: str) -> bytes:
        """Read ``<directory>/<name>``."""
        if not name or Path(name).name != name:
            raise KeyNotFoundError(f"invalid key resource name: {name!r}")

        path = self.directory / name
        try:
            return path.read_bytes()
        except FileNotFoundError as e:
            raise KeyNotFoundError(f"{path} does not exist") from e
        except OSError as e:
            raise KeyNotFoundError(f"cannot read {path}: {e}") from e


class MappingKeyProvider:
    """Serves key resources from memory."""

    def __init__(self, resources: Mapping[str, bytes]) -> None:
        self.resources = dict(resources)

    def get_bytes_by_name(self, name: str) -> bytes:
        """Return the stored resource."""
        try:
            return self.resources[name]
        except KeyError as e:
            raise KeyNotFoundError(f"no key resource named {name!r}") from e


class SignatureBackend(Protocol):
    """OpenPGP primitive: key import and detached verification."""

    def import_keys(self, armored: bytes) -> list[str]:
        """Import armored keys and return their fingerprints."""
        ...

    def verify_detached(self, signature: bytes, data: bytes) -> bool:
        """Return whether ``signature`` is a valid signature of ``data``."""
        ...

    def close(self) -> None:
        """Release any resources held by the backend."""
        ...


class GnupgBackend:
    """``SignatureBackend`` using GnuPG in a private temporary home."""

    def __init__(self, gpg_binary: str = "gpg") -> None:
        """Create the temporary home and start talking to GnuPG.

        Raises:
            OSError: If the home cannot be created or gpg cannot be run
            ValueError: If python-gnupg cannot determine the gpg version

        """
        self.home = Path(tempfile.mkdtemp(prefix="nomadutil-gnupg-"))
        os.chmod(self.home, _GNUPG_HOME_MODE)
        try:
            self.gpg = gnupg.GPG(gpgbinary=gpg_binary, gnupghome=str(self.home))
        except (OSError, ValueError):
            self.close()
            raise

    def import_keys(self, armored: bytes) -> list[str]:
        """Import armored keys and return their fingerprints."""
        result = self.gpg.import_keys(armored)
        return [fp for fp in result.fingerprints if fp]

    def verify_detached(self, signature: bytes, data: bytes) -> bool:
        """Verify a detached signature over ``data``.

        python-gnupg wants the signature as a file, so it is written into
        the private home first.
        """
        fd, sig_path = tempfile.mkstemp(suffix=".sig", dir=self.home)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(signature)
            verified = self.gpg.verify_data(sig_path, data)
        finally:
            Path(sig_path).unlink(missing_ok=True)

        if not verified.valid:
            logger.debug("gpg status: %s", verified.status)
            return False
        logger.debug("Good signature from key %s", verified.fingerprint)
        return True

    def close(self) -> None:
        """Remove the temporary home."""
        shutil.rmtree(self.home, ignore_errors=True)


BackendFactory = Callable[[], SignatureBackend]


class Keyring:
    """Trusted public keys loaded into a backend.

    Never mutated after :func:`load_keyring` returns it. Use as a context
    manager, or call :meth:`close`, to release the backend.
    """

    def __init__(
        self, name: str, fingerprints: list[str], backend: SignatureBackend
    ) -> None:
        self.name = name
        self.fingerprints = tuple(fingerprints)
        self.backend = backend

    def close(self) -> None:
        """Release the backend."""
        self.backend.close()

    def __enter__(self) -> Keyring:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def load_keyring(
    provider: KeyProvider,
    name: str = DEFAULT_KEY_NAME,
    backend_factory: BackendFactory = GnupgBackend,
) -> Keyring:
    """Build a keyring from the key resource called ``name``.

    Raises:
        KeyringLoadError: If the resource is missing, the backend cannot be
            started, or the resource contains no usable key

    """
    try:
        armored = provider.get_bytes_by_name(name)
    except KeyNotFoundError as e:
        raise KeyringLoadError(name, f"failed to load the gpg key: {e}") from e

    try:
        backend = backend_factory()
    except (OSError, ValueError) as e:
        raise KeyringLoadError(
            name, f"failed to start the OpenPGP backend: {e}"
        ) from e

    fingerprints = backend.import_keys(armored)
    if not fingerprints:
        backend.close()
        raise KeyringLoadError(name, "no usable public key found")

    logger.debug("Loaded %d trusted key(s) from %s", len(fingerprints), name)
    return Keyring(name, fingerprints, backend)


def verify(signature: bytes, message_text: str, keyring: Keyring) -> None:
    """Verify a detached signature of the whole manifest text.

    Args:
        signature: Detached signature bytes
        message_text: Manifest text exactly as fetched
        keyring: Trusted keys

    Raises:
        SignatureInvalidError: On any verification failure

    """
    if not signature:
        raise SignatureInvalidError("empty signature")

    if not keyring.backend.verify_detached(
        signature, message_text.encode("utf-8")
    ):
        raise SignatureInvalidError(
            f"checksums signature does not verify against {keyring.name}"
        )


class SignatureVerifier:
    """Loads the trusted keyring and checks manifest signatures.

    A new keyring is built for every verification; nothing is shared
    between calls.
    """

    def __init__(
        self,
        provider: KeyProvider,
        key_name: str = DEFAULT_KEY_NAME,
        backend_factory: BackendFactory = GnupgBackend,
    ) -> None:
        self.provider = provider
        self.key_name = key_name
        self.backend_factory = backend_factory

    def verify(self, signature: bytes, message_text: str) -> None:
        """Verify ``signature`` over ``message_text``.

        Raises:
            KeyringLoadError: If the trusted keyring cannot be built
            SignatureInvalidError: If the signature does not verify

        """
        with load_keyring(
            self.provider, self.key_name, self.backend_factory
        ) as keyring:
            verify(signature, message_text, keyring)

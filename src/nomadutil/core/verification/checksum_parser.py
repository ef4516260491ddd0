"""SHA256SUMS manifest parsing.

A release manifest pairs one hex digest with one archive name per line::

    <64 hex chars>  <product>_<version>_<os>_<arch>.zip

Lines that do not have this shape are errors, never silently ignored.

Selection rule for ``select(text, version, os, arch)``:

- lines for another os/arch pair are skipped
- the first line for the requested pair decides: same version returns its
  digest, any other version raises ``VersionMismatchError`` straight away
  (a later line is never consulted)
- reaching the end without a decision raises ``ChecksumNotFoundError``
"""

from __future__ import annotations

import string
from collections.abc import Iterator
from dataclasses import dataclass

from nomadutil.constants import (
    ARCHIVE_SUFFIX,
    ARTIFACT_NAME_FIELDS,
    ARTIFACT_NAME_SEPARATOR,
    DIGEST_SIZE,
)
from nomadutil.exceptions import (
    ChecksumNotFoundError,
    MalformedDigestError,
    MalformedFilenameError,
    MalformedLineError,
    VersionMismatchError,
)
from nomadutil.logger import get_logger

logger = get_logger(__name__)

_HEX_CHARS = frozenset(string.hexdigits)
_LINE_FIELDS = 2


@dataclass(frozen=True, slots=True)
class ArtifactName:
    """Components of ``<product>_<version>_<os>_<arch>.zip``."""

    product: str
    version: str
    os: str
    arch: str


@dataclass(frozen=True, slots=True)
class ChecksumEntry:
    """One manifest line.

    ``hex_digest`` is kept undecoded: it is only decoded for the line that
    gets selected.
    """

    hex_digest: str
    raw_filename: str
    artifact: ArtifactName


def decode_digest(hex_digest: str, size: int = DIGEST_SIZE) -> bytes:
    """Decode a hex digest of exactly ``size`` bytes.

    Raises:
        MalformedDigestError: If the value is not hex or has another width

    """
    if len(hex_digest) != size * 2:
        raise MalformedDigestError(
            hex_digest,
            f"expected {size * 2} hex characters, got {len(hex_digest)}",
        )
    if not _HEX_CHARS.issuperset(hex_digest):
        raise MalformedDigestError(hex_digest, "not a hex string")
    return bytes.fromhex(hex_digest)


def parse_artifact_name(filename: str) -> ArtifactName:
    """Split an archive file name into its four components.

    Raises:
        MalformedFilenameError: If there are not exactly four components

    """
    fields = filename.removesuffix(ARCHIVE_SUFFIX).split(
        ARTIFACT_NAME_SEPARATOR
    )
    if len(fields) != ARTIFACT_NAME_FIELDS:
        raise MalformedFilenameError(filename)
    product, version, os, arch = fields
    return ArtifactName(product=product, version=version, os=os, arch=arch)


def parse_line(line: str) -> ChecksumEntry:
    """Parse one non-empty manifest line.

    Raises:
        MalformedLineError: If the line is not two whitespace-separated fields
        MalformedFilenameError: If the file name has the wrong shape

    """
    fields = line.split()
    if len(fields) != _LINE_FIELDS:
        raise MalformedLineError(line)
    hex_digest, filename = fields
    return ChecksumEntry(
        hex_digest=hex_digest,
        raw_filename=filename,
        artifact=parse_artifact_name(filename),
    )


def iter_entries(text: str) -> Iterator[ChecksumEntry]:
    """Yield manifest entries in order, skipping empty lines.

    Parsing is lazy: a malformed line raises only once it is reached.
    """
    for line in text.split("\n"):
        if not line:
            logger.debug("empty line, skipping")
            continue
        yield parse_line(line)


def select(text: str, version: str, os: str, arch: str) -> bytes:
    """Select the digest of the archive for ``version`` on ``os``/``arch``.

    Args:
        text: Full manifest text
        version: Requested release version
        os: Target operating system
        arch: Target architecture

    Returns:
        Decoded digest (32 bytes)

    Raises:
        MalformedLineError: A line is not ``<digest> <filename>``
        MalformedFilenameError: A file name is not ``p_v_os_arch.zip``
        MalformedDigestError: The selected digest is not 64 hex characters
        VersionMismatchError: The first line for the platform has another
            version
        ChecksumNotFoundError: No line for the platform exists

    """
    for entry in iter_entries(text):
        logger.debug("parsing sums: %s", entry.raw_filename)
        artifact = entry.artifact

        if artifact.os != os:
            logger.debug("os %s is not %s", artifact.os, os)
            continue
        if artifact.arch != arch:
            logger.debug("arch %s is not %s", artifact.arch, arch)
            continue
        if artifact.version != version:
            raise VersionMismatchError(artifact.version, version)

        logger.debug("found sums, stopping")
        return decode_digest(entry.hex_digest)

    raise ChecksumNotFoundError(version, os, arch)

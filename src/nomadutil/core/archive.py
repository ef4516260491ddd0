"""Extraction of the single binary shipped in a release archive.

A release zip must contain exactly one entry with the expected name.
Anything else is an error; the extractor never guesses which entry to use.
"""

from __future__ import annotations

import io
import lzma
import zipfile
import zlib
from typing import Any, Protocol

from nomadutil.exceptions import (
    EmptyArchiveError,
    EntryNotFoundError,
    MalformedArchiveError,
    MultipleEntriesError,
)
from nomadutil.logger import get_logger

logger = get_logger(__name__)


class ArchiveBackend(Protocol):
    """Archive container capability.

    Implementations raise ``MalformedArchiveError`` for anything they
    cannot parse or decompress.
    """

    def open(self, data: bytes) -> Any:
        """Open an in-memory archive and return a handle."""
        ...

    def list_entries(self, handle: Any) -> list[str]:
        """Return entry names in archive order."""
        ...

    def read_entry(self, handle: Any, name: str) -> bytes:
        """Return the fully decompressed entry ``name``."""
        ...

    def close(self, handle: Any) -> None:
        """Release the handle."""
        ...


class ZipArchiveBackend:
    """``ArchiveBackend`` for zip containers using :mod:`zipfile`."""

    def open(self, data: bytes) -> zipfile.ZipFile:
        """Open ``data`` as a zip archive."""
        try:
            return zipfile.ZipFile(io.BytesIO(data))
        except (
            zipfile.BadZipFile,
            OSError,
            EOFError,
            NotImplementedError,
            OverflowError,
            ValueError,
        ) as e:
            raise MalformedArchiveError(f"not a zip archive: {e}") from e

    def list_entries(self, handle: zipfile.ZipFile) -> list[str]:
        """Return entry names in archive order."""
        return handle.namelist()

    def read_entry(self, handle: zipfile.ZipFile, name: str) -> bytes:
        """Decompress entry ``name`` into memory."""
        try:
            return handle.read(name)
        except (
            zipfile.BadZipFile,
            zlib.error,
            lzma.LZMAError,
            EOFError,
            NotImplementedError,
            OverflowError,
            RuntimeError,
            ValueError,
        ) as e:
            raise MalformedArchiveError(f"cannot read entry {name!r}: {e}") from e

    def close(self, handle: zipfile.ZipFile) -> None:
        """Close the archive."""
        handle.close()


class ArchiveExtractor:
    """Pulls the one expected entry out of an archive."""

    def __init__(self, backend: ArchiveBackend | None = None) -> None:
        self.backend = backend or ZipArchiveBackend()

    def extract_single(self, data: bytes, expected_name: str) -> bytes:
        """Return the content of the archive's only entry.

        Args:
            data: Archive bytes
            expected_name: Name the single entry must have

        Returns:
            Decompressed entry content

        Raises:
            MalformedArchiveError: If the container cannot be parsed
            EmptyArchiveError: If there are no entries
            MultipleEntriesError: If there is more than one entry
            EntryNotFoundError: If the single entry has another name

        """
        handle = self.backend.open(data)
        try:
            names = self.backend.list_entries(handle)

            if not names:
                raise EmptyArchiveError
            if len(names) != 1:
                logger.warning(
                    "zip archive: %d files: %s", len(names), ", ".join(names)
                )
                raise MultipleEntriesError(names)

            (name,) = names
            if name != expected_name:
                raise EntryNotFoundError(name, expected_name)

            content = self.backend.read_entry(handle, name)
        finally:
            self.backend.close(handle)

        logger.debug("Extracted %s: %d bytes", name, len(content))
        return content


def extract_single(data: bytes, expected_name: str) -> bytes:
    """Extract the single entry of a zip archive."""
    return ArchiveExtractor().extract_single(data, expected_name)

"""Tests for single-entry archive extraction."""

import struct
import zipfile
from unittest.mock import MagicMock

import pytest

from nomadutil.core.archive import (
    ArchiveExtractor,
    ZipArchiveBackend,
    extract_single,
)
from nomadutil.exceptions import (
    EmptyArchiveError,
    EntryNotFoundError,
    MalformedArchiveError,
    MultipleEntriesError,
)
from tests.helpers import BINARY, make_zip


def test_extracts_single_entry(archive):
    """The only entry is returned when its name matches."""
    assert extract_single(archive, "nomad") == BINARY


def test_empty_entry_content():
    """A zero-length binary is still a valid single entry."""
    assert extract_single(make_zip({"nomad": b""}), "nomad") == b""


def test_multiple_entries():
    """More than one entry is rejected even if one has the right name."""
    data = make_zip({"nomad": BINARY, "LICENSE": b"MPL"})
    with pytest.raises(MultipleEntriesError) as exc_info:
        extract_single(data, "nomad")
    assert exc_info.value.names == ["nomad", "LICENSE"]


def test_empty_archive():
    """An archive without entries is rejected."""
    with pytest.raises(EmptyArchiveError, match="empty archive"):
        extract_single(make_zip({}), "nomad")


def test_wrong_entry_name():
    """A single entry with another name is rejected."""
    with pytest.raises(EntryNotFoundError) as exc_info:
        extract_single(make_zip({"consul": BINARY}), "nomad")
    assert exc_info.value.actual == "consul"
    assert exc_info.value.expected == "nomad"


@pytest.mark.parametrize("data", [b"", b"definitely not a zip"])
def test_garbage_is_malformed(data):
    """Bytes that are not a zip container are malformed."""
    with pytest.raises(MalformedArchiveError):
        extract_single(data, "nomad")


def test_corrupt_entry_is_malformed():
    """A damaged compressed stream is reported as malformed."""
    data = bytearray(make_zip({"nomad": BINARY * 100}))
    # Local header is 30 bytes plus the name; damage the deflate stream
    offset = 30 + len("nomad") + 4
    data[offset] ^= 0xFF
    with pytest.raises(MalformedArchiveError):
        extract_single(bytes(data), "nomad")


def _bump_extract_version(data: bytearray) -> None:
    central = data.find(b"PK\x01\x02")
    struct.pack_into("<H", data, central + 6, 145)


def _utf8_flag_with_bad_name(data: bytearray) -> None:
    struct.pack_into("<H", data, 6, 0x800)
    data[30] = 0xFF


def _claim_lzma_compression(data: bytearray) -> None:
    central = data.find(b"PK\x01\x02")
    struct.pack_into("<H", data, central + 10, zipfile.ZIP_LZMA)


def _shift_central_directory_offset(data: bytearray) -> None:
    # End of central directory record is the last 22 bytes without comment
    eocd = len(data) - 22
    (offset,) = struct.unpack_from("<I", data, eocd + 16)
    struct.pack_into("<I", data, eocd + 16, offset + 100)


@pytest.mark.parametrize(
    "corrupt",
    [
        _bump_extract_version,
        _utf8_flag_with_bad_name,
        _shift_central_directory_offset,
        _claim_lzma_compression,
    ],
)
def test_corrupt_header_is_malformed(corrupt):
    """Damaged central directory or local headers are malformed."""
    data = bytearray(make_zip({"nomad": BINARY}))
    corrupt(data)
    with pytest.raises(MalformedArchiveError):
        extract_single(bytes(data), "nomad")


def test_backend_closed_on_error():
    """The backend handle is released when extraction fails."""
    backend = MagicMock()
    backend.list_entries.return_value = []
    with pytest.raises(EmptyArchiveError):
        ArchiveExtractor(backend).extract_single(b"data", "nomad")
    backend.close.assert_called_once_with(backend.open.return_value)


def test_multiple_entries_logged(caplog):
    """The unexpected entry names are logged as a warning."""
    data = make_zip({"a": b"1", "b": b"2"})
    with pytest.raises(MultipleEntriesError):
        ArchiveExtractor(ZipArchiveBackend()).extract_single(data, "nomad")
    assert "zip archive: 2 files: a, b" in caplog.text

"""Pytest configuration and fixtures for nomadutil tests."""

import logging
import os
import tempfile
from pathlib import Path

import pytest

from tests.helpers import (
    BINARY,
    VERSION,
    FakeSignatureBackend,
    make_manifest,
    make_zip,
)

# Keep the logger and config away from the real home directory; must run
# before any nomadutil module creates its logger.
_SANDBOX = Path(tempfile.mkdtemp(prefix="nomadutil-tests-"))
os.environ.setdefault("NOMADUTIL_LOG_DIR", str(_SANDBOX / "logs"))
os.environ.setdefault("NOMADUTIL_CONFIG_DIR", str(_SANDBOX / "config"))


@pytest.fixture(autouse=True)
def enable_log_propagation():
    """Enable log propagation for all loggers during tests.

    This allows pytest's caplog fixture to capture logs from all loggers,
    even those created with propagate=False in production code.
    """
    original_propagation = {}
    for name in list(logging.Logger.manager.loggerDict.keys()):
        if name.startswith("nomadutil"):
            logger = logging.getLogger(name)
            original_propagation[name] = logger.propagate
            logger.propagate = True

    yield

    for name, propagate_value in original_propagation.items():
        logger = logging.getLogger(name)
        logger.propagate = propagate_value


@pytest.fixture
def archive() -> bytes:
    """Release archive holding a single ``nomad`` entry."""
    return make_zip({"nomad": BINARY})


@pytest.fixture
def manifest(archive: bytes) -> str:
    """Manifest listing the archive for linux/amd64 among other platforms."""
    return make_manifest(
        [
            (b"darwin build", f"nomad_{VERSION}_darwin_arm64.zip"),
            (archive, f"nomad_{VERSION}_linux_amd64.zip"),
            (b"windows build", f"nomad_{VERSION}_windows_amd64.zip"),
        ]
    )


@pytest.fixture
def fake_backend() -> FakeSignatureBackend:
    """Signature backend that accepts ``GOOD_SIGNATURE`` only."""
    return FakeSignatureBackend()

"""Tests for the install application service."""

from pathlib import Path
from unittest.mock import MagicMock, call

import pytest

from nomadutil.core.checkpoint import CheckResponse
from nomadutil.core.install import InstallResult
from nomadutil.core.release import ReleaseGetOptions
from nomadutil.core.services.install_service import (
    InstallApplicationService,
    InstallOptions,
)
from nomadutil.exceptions import CheckpointError, DigestMismatchError


@pytest.fixture
def checkpoint():
    client = MagicMock()
    client.check.return_value = CheckResponse(
        product="nomad", current_version="1.2.3"
    )
    return client


@pytest.fixture
def acquisition():
    mock = MagicMock()
    mock.get.return_value = b"binary"
    return mock


@pytest.fixture
def installer():
    mock = MagicMock()
    mock.install.return_value = InstallResult(
        binary_path=Path("/usr/local/bin/nomad"), service_path=None
    )
    return mock


@pytest.fixture
def service(acquisition, checkpoint, installer):
    return InstallApplicationService(acquisition, checkpoint, installer)


def test_latest_version_is_installed(service, acquisition, checkpoint, installer):
    """Without a version the checkpoint's current version is used."""
    options = InstallOptions(out=Path("/usr/local/bin"), service_out=None)

    result = service.install(options)

    checkpoint.check.assert_called_once_with(None)
    acquisition.get.assert_called_once_with(
        "1.2.3",
        ReleaseGetOptions(verify_integrity=True, verify_signature=True),
    )
    installer.install.assert_called_once_with(
        b"binary", Path("/usr/local/bin"), None
    )
    assert result.binary_path == Path("/usr/local/bin/nomad")


def test_explicit_version_and_skip_flags(service, acquisition, checkpoint):
    """Flags are forwarded to the acquisition pipeline."""
    options = InstallOptions(
        out=Path("/tmp/nomad"),
        service_out=Path("/tmp"),
        version="1.1.0",
        verify_signature=False,
        ignore_outdated=True,
    )
    checkpoint.check.return_value = CheckResponse(
        product="nomad", current_version="1.2.3", outdated=True
    )

    service.install(options)

    checkpoint.check.assert_called_once_with("1.1.0")
    assert acquisition.get.call_args == call(
        "1.1.0",
        ReleaseGetOptions(verify_integrity=True, verify_signature=False),
    )


def test_outdated_version_refused(service, acquisition, checkpoint, installer):
    """An outdated version stops before anything is downloaded."""
    checkpoint.check.return_value = CheckResponse(
        product="nomad", current_version="1.2.3", outdated=True
    )

    with pytest.raises(CheckpointError):
        service.install(
            InstallOptions(out=Path("/x"), service_out=None, version="1.0.0")
        )
    acquisition.get.assert_not_called()
    installer.install.assert_not_called()


def test_verification_failure_writes_nothing(service, acquisition, installer):
    """Nothing is installed when the pipeline fails."""
    acquisition.get.side_effect = DigestMismatchError("00", "ff")

    with pytest.raises(DigestMismatchError):
        service.install(InstallOptions(out=Path("/x"), service_out=None))
    installer.install.assert_not_called()

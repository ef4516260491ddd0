"""HashiCorp checkpoint lookups.

The checkpoint service reports the newest Nomad version, whether the
queried version is outdated and any security alerts published for it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlencode

import orjson

from nomadutil.constants import ACCEPT_JSON, DEFAULT_CHECKPOINT_URL
from nomadutil.core.transport import HTTP_OK_MAX, HTTP_OK_MIN, HttpClient
from nomadutil.exceptions import CheckpointError, NetworkError
from nomadutil.logger import get_logger

logger = get_logger(__name__)


@dataclass(slots=True, frozen=True)
class CheckAlert:
    """A single alert attached to a checkpoint response."""

    id: int
    date: int
    message: str
    url: str
    level: str

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> CheckAlert:
        """Create a CheckAlert from one element of ``alerts``."""
        return cls(
            id=int(data.get("id", 0)),
            date=int(data.get("date", 0)),
            message=str(data.get("message", "")),
            url=str(data.get("url", "")),
            level=str(data.get("level", "")),
        )

    def __str__(self) -> str:
        return f"[{self.level}] {self.message} ({self.url})"


@dataclass(slots=True, frozen=True)
class CheckResponse:
    """Checkpoint answer for one product/version/platform query.

    Attributes:
        product: Product name
        current_version: Newest released version
        current_release: Release timestamp of the newest version
        current_download_url: Download page of the newest version
        current_changelog_url: Changelog of the newest version
        project_website: Product website
        outdated: Whether the queried version is older than the newest
        alerts: Alerts published for the queried version

    """

    product: str
    current_version: str
    current_release: int = 0
    current_download_url: str = ""
    current_changelog_url: str = ""
    project_website: str = ""
    outdated: bool = False
    alerts: tuple[CheckAlert, ...] = field(default_factory=tuple)

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> CheckResponse:
        """Create a CheckResponse from the decoded JSON body.

        Raises:
            CheckpointError: If required fields are missing or have the
                wrong type

        """
        try:
            product = str(data["product"])
            current_version = str(data["current_version"])
        except KeyError as e:
            msg = f"checkpoint response is missing {e.args[0]!r}"
            raise CheckpointError(msg) from e

        try:
            return cls(
                product=product,
                current_version=current_version,
                current_release=int(data.get("current_release", 0)),
                current_download_url=str(
                    data.get("current_download_url", "")
                ),
                current_changelog_url=str(
                    data.get("current_changelog_url", "")
                ),
                project_website=str(data.get("project_website", "")),
                outdated=bool(data.get("outdated", False)),
                alerts=tuple(
                    CheckAlert.from_api_response(alert)
                    for alert in data.get("alerts") or []
                ),
            )
        except (TypeError, ValueError, AttributeError) as e:
            msg = f"invalid checkpoint response: {e}"
            raise CheckpointError(msg) from e


class CheckpointClient:
    """Queries the checkpoint API for one os/arch pair."""

    def __init__(
        self,
        client: HttpClient,
        os: str,
        arch: str,
        url: str = DEFAULT_CHECKPOINT_URL,
    ) -> None:
        self.client = client
        self.os = os
        self.arch = arch
        self.url = url

    def check(self, version: str | None = None) -> CheckResponse:
        """Ask the checkpoint API about ``version`` (or the newest release).

        Raises:
            NetworkError: If the request fails
            CheckpointError: If the response cannot be decoded

        """
        params = {"arch": self.arch, "os": self.os}
        if version:
            params["version"] = version
        url = f"{self.url}?{urlencode(params)}"

        logger.debug("Checkpoint query: %s", url)
        status, body = self.client.request(url, {"Accept": ACCEPT_JSON})
        if not HTTP_OK_MIN <= status <= HTTP_OK_MAX:
            raise NetworkError(
                status, url, f"checkpoint responded with status {status}"
            )

        try:
            data = orjson.loads(body)
        except orjson.JSONDecodeError as e:
            msg = f"invalid checkpoint response: {e}"
            raise CheckpointError(msg) from e
        if not isinstance(data, dict):
            msg = "invalid checkpoint response: expected a JSON object"
            raise CheckpointError(msg)

        return CheckResponse.from_api_response(data)


def evaluate(
    response: CheckResponse,
    version: str,
    ignore_outdated: bool = False,  # noqa: FBT001, FBT002
    ignore_alerts: bool = False,  # noqa: FBT001, FBT002
) -> None:
    """Reject outdated or alerted versions unless told to ignore them.

    Raises:
        CheckpointError: If the version is outdated or has alerts and the
            matching ignore flag is not set

    """
    if response.outdated:
        if not ignore_outdated:
            msg = (
                f"checkpoint says version {version} is outdated, "
                f"newest is {response.current_version}"
            )
            raise CheckpointError(msg, target=version)
        logger.warning(
            "checkpoint says version %s is outdated, newest is %s, ignoring",
            version,
            response.current_version,
        )
    else:
        logger.info("%s is the latest release", version)

    if response.alerts:
        alerts = "; ".join(str(alert) for alert in response.alerts)
        if not ignore_alerts:
            raise CheckpointError(f"alerts: {alerts}", target=version)
        logger.warning("alerts: %s; ignoring", alerts)

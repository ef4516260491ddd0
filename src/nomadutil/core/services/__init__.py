"""Application services orchestrating core operations."""

from nomadutil.core.services.install_service import (
    InstallApplicationService,
    InstallOptions,
)

__all__ = ["InstallApplicationService", "InstallOptions"]

"""Command handlers for the nomadutil CLI."""

from .base import BaseCommandHandler
from .info import InfoHandler
from .install import InstallCommandHandler

__all__ = ["BaseCommandHandler", "InfoHandler", "InstallCommandHandler"]

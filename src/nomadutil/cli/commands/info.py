"""Info command: tool version and target platform."""

from argparse import Namespace

from nomadutil import __version__

from .base import BaseCommandHandler


class InfoHandler(BaseCommandHandler):
    """Prints the tool version and the configured target platform."""

    def execute(self, args: Namespace) -> None:  # noqa: ARG002
        """Execute info command."""
        target = self.global_config["target"]
        print(f"nomadutil {__version__} {target['os']}/{target['arch']}")

"""CLI argument parser for nomadutil."""

import argparse
from argparse import Namespace
from collections.abc import Sequence

from nomadutil.types import GlobalConfig


class CLIParser:
    """Command-line argument parser for nomadutil."""

    def __init__(self, global_config: GlobalConfig) -> None:
        """Initialize the CLI parser with global configuration.

        Args:
            global_config: Loaded global configuration, used for defaults
                shown in help texts.

        """
        self.global_config = global_config

    def parse_args(self, argv: Sequence[str] | None = None) -> Namespace:
        """Parse command-line arguments.

        Args:
            argv: Arguments to parse (defaults to sys.argv[1:])

        Returns:
            Parsed arguments namespace.

        """
        parser = self.build_parser()
        return parser.parse_args(argv)

    def build_parser(self) -> argparse.ArgumentParser:
        """Build the complete parser with all subcommands."""
        parser = argparse.ArgumentParser(
            prog="nomadutil",
            description="Utility for managing Nomad.",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Install the newest release with all checks
  %(prog)s install

  # Install a specific version to a custom location
  %(prog)s install --version 1.2.3 -o ~/.local/bin --service-out /tmp

  # Show tool version and target platform
  %(prog)s info
            """,
        )
        self._add_global_options(parser)
        subparsers = parser.add_subparsers(dest="command")
        self._add_install_command(subparsers)
        self._add_info_command(subparsers)
        return parser

    def _add_global_options(self, parser: argparse.ArgumentParser) -> None:
        """Add options available before any subcommand."""
        parser.add_argument(
            "--version",
            dest="show_version",
            action="store_true",
            help="Show nomadutil version and exit",
        )
        parser.add_argument(
            "-v",
            "--verbose",
            action="count",
            default=0,
            help="Show debug messages on the console",
        )

    def _add_install_command(self, subparsers) -> None:
        """Add the install subcommand."""
        install_dirs = self.global_config["install"]
        install_parser = subparsers.add_parser(
            "install",
            help="Install Nomad",
            description="Download, verify and install a Nomad release.",
        )
        install_parser.add_argument(
            "--version",
            dest="release_version",
            metavar="VERSION",
            help="Version of Nomad to install (default: latest release)",
        )
        install_parser.add_argument(
            "--skip-sums",
            action="store_true",
            help="Skip checking the sha256sums on the zip archive",
        )
        install_parser.add_argument(
            "--skip-sig",
            action="store_true",
            help=(
                "Skip checking the signature of the sha256sums file. "
                "Has no effect if --skip-sums is used"
            ),
        )
        install_parser.add_argument(
            "-o",
            "--out",
            metavar="PATH",
            help=(
                "Where to place the nomad binary "
                f"(default: {install_dirs['binary_dir']})"
            ),
        )
        install_parser.add_argument(
            "--service-out",
            metavar="PATH",
            help=(
                "Where to place the nomad systemd service file "
                f"(default: {install_dirs['service_dir']})"
            ),
        )
        install_parser.add_argument(
            "--no-service",
            action="store_true",
            help="Do not write a systemd service file",
        )
        install_parser.add_argument(
            "--keys-dir",
            metavar="DIR",
            help=(
                "Directory holding the trusted public key "
                f"(default: {self.global_config['security']['keys_dir']})"
            ),
        )
        install_parser.add_argument(
            "--ignore-alerts",
            action="store_true",
            help="Ignore alerts for a version, if there are any",
        )
        install_parser.add_argument(
            "--ignore-outdated",
            action="store_true",
            help="Ignore whether a version is outdated",
        )

    def _add_info_command(self, subparsers) -> None:
        """Add the info subcommand."""
        subparsers.add_parser("info", help="Get information about nomadutil")

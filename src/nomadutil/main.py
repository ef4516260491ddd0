"""Main CLI entry point for nomadutil."""

import sys

from nomadutil.cli import CLIRunner
from nomadutil.logger import get_logger

logger = get_logger(__name__)


def main() -> None:
    """Run the CLI application.

    Raises:
        SystemExit: Always, with the command's exit code.

    """
    try:
        sys.exit(CLIRunner().run())
    except KeyboardInterrupt:
        logger.info("CLI cancelled by user")
        sys.exit(1)


if __name__ == "__main__":
    main()

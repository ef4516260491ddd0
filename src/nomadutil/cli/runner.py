"""CLI runner for nomadutil.

Routes parsed arguments to the command handlers and turns failures into
exit codes.
"""

from collections.abc import Sequence

from nomadutil import __version__
from nomadutil.config import GlobalConfigManager
from nomadutil.constants import VERBOSE_CONSOLE_LOG_LEVEL
from nomadutil.exceptions import NomadUtilError
from nomadutil.logger import (
    get_logger,
    set_console_level,
    update_logger_from_config,
)

from .commands import BaseCommandHandler, InfoHandler, InstallCommandHandler
from .parser import CLIParser

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


class CLIRunner:
    """CLI command runner and orchestrator."""

    def __init__(
        self, config_manager: GlobalConfigManager | None = None
    ) -> None:
        """Initialize CLI runner with shared dependencies.

        Args:
            config_manager: Configuration manager (defaults to the user's
                settings file)

        """
        self.config_manager = config_manager or GlobalConfigManager()
        self.global_config = self.config_manager.load_global_config()
        self.command_handlers: dict[str, type[BaseCommandHandler]] = {
            "install": InstallCommandHandler,
            "info": InfoHandler,
        }

    def run(self, argv: Sequence[str] | None = None) -> int:
        """Run the CLI application.

        Args:
            argv: Arguments to parse (defaults to sys.argv[1:])

        Returns:
            Process exit code

        """
        args = CLIParser(self.global_config).parse_args(argv)

        if args.show_version:
            print(__version__)
            return EXIT_OK

        if not args.command:
            logger.error("You should probably run $ nomadutil --help.")
            return EXIT_FAILURE

        update_logger_from_config(self.global_config)
        if args.verbose:
            set_console_level(VERBOSE_CONSOLE_LOG_LEVEL)

        handler = self.command_handlers[args.command](self.config_manager)
        try:
            handler.execute(args)
        except NomadUtilError as e:
            logger.error("%s failed: %s", args.command, e)
            return EXIT_FAILURE

        logger.info("done!")
        return EXIT_OK

"""Base command handler for nomadutil CLI commands."""

from abc import ABC, abstractmethod
from argparse import Namespace

from nomadutil.config import GlobalConfigManager
from nomadutil.logger import get_logger

logger = get_logger(__name__)


class BaseCommandHandler(ABC):
    """Abstract base class for all command handlers.

    CLIRunner acts as the composition root and injects the configuration
    manager; concrete handlers implement ``execute``.
    """

    def __init__(self, config_manager: GlobalConfigManager) -> None:
        """Initialize the command handler with shared dependencies.

        Args:
            config_manager: Configuration management instance

        """
        self.config_manager = config_manager
        self.global_config = config_manager.load_global_config()

    @abstractmethod
    def execute(self, args: Namespace) -> None:
        """Execute the command.

        Args:
            args: Parsed command-line arguments

        Raises:
            NomadUtilError: When the command fails

        """

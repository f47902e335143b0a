# device_info/utils/logger.py

import logging
import logging.handlers
from pathlib import Path


class LoggerManager:
    """
    Configures the application-wide logging system.

    Two handlers can be attached to the root logger:
    1. Console Handler: WARNING and above by default, INFO and above in
       verbose mode, so normal command output stays uncluttered.
    2. Rotating File Handler (optional): DEBUG and above, for diagnostics.
       The file rotates at 5MB and keeps five backups.
    """

    def __init__(self, log_file_path: Path | None = None, verbose: bool = False, log_level=logging.DEBUG,
                 logger_name: str | None = None):
        """
        Args:
            log_file_path: Where to write the detailed log, or None for console only.
            verbose: Show INFO messages on the console.
            log_level: The base logging level captured by the logger.
            logger_name: The logger to configure; None means the root logger.
        """
        self.log_file_path = Path(log_file_path) if log_file_path else None
        self.verbose = verbose
        self.log_level = log_level
        self.logger = logging.getLogger(logger_name)

    def setup(self):
        """Attaches the handlers to the logger, once."""
        # Calling this twice (e.g. from tests invoking the CLI repeatedly)
        # must not stack duplicate handlers.
        if self.logger.handlers:
            return

        self.logger.setLevel(self.log_level)
        self.logger.addHandler(self._create_console_handler())

        if self.log_file_path is not None:
            self.logger.addHandler(self._create_file_handler())

        self.logger.debug("Logging configured.")

    def _create_console_handler(self) -> logging.StreamHandler:
        handler = logging.StreamHandler()
        handler.setLevel(logging.INFO if self.verbose else logging.WARNING)
        formatter = logging.Formatter(
            '%(asctime)s - [%(levelname)s] - %(message)s',
            datefmt='%H:%M:%S'
        )
        handler.setFormatter(formatter)
        return handler

    def _create_file_handler(self) -> logging.handlers.RotatingFileHandler:
        self.log_file_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.handlers.RotatingFileHandler(
            self.log_file_path, maxBytes=5*1024*1024, backupCount=5, encoding='utf-8'
        )
        handler.setLevel(logging.DEBUG)
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - [%(levelname)s] - %(filename)s:%(lineno)d - %(message)s'
        )
        handler.setFormatter(formatter)
        return handler


def setup_logging(verbose: bool = False, log_file: Path | None = None):
    """Initializes and configures the application-wide logging system."""
    manager = LoggerManager(log_file_path=log_file, verbose=verbose)
    manager.setup()

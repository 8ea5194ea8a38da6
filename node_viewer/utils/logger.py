# node_viewer/utils/logger.py

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

# The log file sits in the project root unless a path is given.
LOG_FILE_NAME = 'node_viewer.log'
# Rotation: a new file every 5 MB, keeping the five most recent backups.
LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 5


# --- Logging Setup ---
# Modules only ever call logging.getLogger(__name__). Handlers are attached
# once, to the root logger, by the GUI entry point, run_gui().
class LoggerManager:
    """
    Configures the application-wide logging system.

    Two handlers are attached to the root logger:
    1. Console Handler: INFO and above, short timestamped lines for whoever
       is running the app.
    2. Rotating File Handler: DEBUG and above, with logger name, file and
       line number, rotated at 5 MB with five backups.
    """

    def __init__(self, log_file_path: Optional[Path] = None, log_level=logging.DEBUG):
        """
        Args:
            log_file_path: Where to write the log file. Defaults to the project root.
            log_level: The base logging level captured by the root logger.
        """
        self.log_file_path = log_file_path or Path(__file__).resolve().parents[2] / LOG_FILE_NAME
        self.log_level = log_level
        self.root_logger = logging.getLogger()

    def setup(self):
        """Attaches the handlers to the root logger, once."""
        # A second call (or a host that already configured logging) would
        # otherwise print every line twice.
        if self.root_logger.hasHandlers():
            return

        # The root level is the floor; each handler filters further.
        self.root_logger.setLevel(self.log_level)

        self.root_logger.addHandler(self._create_console_handler())
        self.root_logger.addHandler(self._create_file_handler())

        logging.info("Logging configured successfully.")

    def _create_console_handler(self) -> logging.StreamHandler:
        """Creates a handler for logging messages to the console."""
        # INFO and up only: debug chatter such as every loading state change
        # goes to the file.
        handler = logging.StreamHandler()
        handler.setLevel(logging.INFO)
        formatter = logging.Formatter(
            '%(asctime)s - [%(levelname)s] - %(message)s',
            datefmt='%H:%M:%S'
        )
        handler.setFormatter(formatter)
        return handler

    def _create_file_handler(self) -> logging.handlers.RotatingFileHandler:
        """Creates a rotating file handler for persistent logging."""
        # Everything from DEBUG up. When the file reaches LOG_MAX_BYTES it is
        # renamed to node_viewer.log.1 (older backups shift along) and a fresh
        # file is started.
        handler = logging.handlers.RotatingFileHandler(
            self.log_file_path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT, encoding='utf-8'
        )
        handler.setLevel(logging.DEBUG)
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - [%(levelname)s] - %(filename)s:%(lineno)d - %(message)s'
        )
        handler.setFormatter(formatter)
        return handler


# --- Public Entry Point ---
# The only function the rest of the application calls.
def setup_logging(log_file_path: Optional[Path] = None):
    """Initializes and configures the application-wide logging system."""
    manager = LoggerManager(log_file_path)
    manager.setup()

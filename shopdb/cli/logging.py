"""
Logging configuration for the shopdb CLI.
Provides consistent logging setup across all commands.
"""

import logging
import sys

class DebugFormatter(logging.Formatter):
    """Custom formatter for console output."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with timestamp and source."""
        message = f"[{record.created:.3f}] {record.name}: {record.getMessage()}"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        # Add color if output is to terminal
        if sys.stderr.isatty():
            color = '\033[0;31m' if record.levelno >= logging.ERROR else '\033[0;36m'
            reset = '\033[0m'
            return f"{color}{message}{reset}"
        return message

def setup_logging(debug: bool = False) -> None:
    """Setup logging configuration.

    Args:
        debug: Enable debug logging
    """
    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if debug else logging.INFO)

    # Clear any existing handlers
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(DebugFormatter())
    root_logger.addHandler(console_handler)

    # Always keep SQLAlchemy logging at WARNING level
    logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)
    logging.getLogger('sqlalchemy.pool').setLevel(logging.WARNING)

def get_logger(name: str) -> logging.Logger:
    """Get a logger with the specified name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger: Configured logger instance
    """
    return logging.getLogger(name)

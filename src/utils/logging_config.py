"""
Sitekeeper Logging Configuration

Provides centralized logging setup for consistent log formatting
and configuration across the application.

Console output belongs to the UI (rich); the root logger therefore only
writes WARNING and above to stderr, while the rotating debug log file
receives everything at the configured level.

Usage:
    from utils.logging_config import get_logger
    logger = get_logger(__name__)
    logger.info("Message")

Or at startup:
    from utils.logging_config import setup_logging
    setup_logging(level=logging.DEBUG, log_file="~/.config/sitekeeper/logs/sitekeeper.log")
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional
import threading

# Thread-safe initialization
_initialized = False
_lock = threading.Lock()

# Default format
DEFAULT_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
SIMPLE_FORMAT = "%(levelname)s: %(message)s"

LEVEL_COLORS = {
    'DEBUG': '\033[36m',     # Cyan
    'INFO': '\033[32m',      # Green
    'WARNING': '\033[33m',   # Yellow
    'ERROR': '\033[31m',     # Red
    'CRITICAL': '\033[35m',  # Magenta
}
RESET = '\033[0m'


class ColoredFormatter(logging.Formatter):
    """Formatter that adds colors to log levels for terminal output."""

    def __init__(self, fmt=None, datefmt=None, use_colors=True):
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record):
        if self.use_colors:
            levelname = record.levelname
            if levelname in LEVEL_COLORS:
                record = logging.makeLogRecord(record.__dict__)
                record.levelname = f"{LEVEL_COLORS[levelname]}{levelname}{RESET}"
        return super().format(record)


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    log_format: str = DEFAULT_FORMAT,
    console_level: int = logging.WARNING,
    use_colors: bool = True,
    max_bytes: int = 5 * 1024 * 1024,  # 5MB
    backup_count: int = 3,
    force: bool = False,
) -> None:
    """
    Configure the root logger with consistent settings.

    Args:
        level: Logging level for the log file (default INFO)
        log_file: Optional file path for logging
        log_format: Log message format string
        console_level: Minimum level echoed to stderr
        use_colors: Enable colored output in terminal
        max_bytes: Max log file size before rotation
        backup_count: Number of backup files to keep
        force: Reconfigure even if logging was already set up
    """
    global _initialized

    with _lock:
        if _initialized and not force:
            return

        root_logger = logging.getLogger()
        root_logger.setLevel(min(level, console_level))

        # Remove existing handlers
        root_logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(console_level)

        if use_colors:
            console_formatter = ColoredFormatter(SIMPLE_FORMAT)
        else:
            console_formatter = logging.Formatter(SIMPLE_FORMAT)

        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)

        if log_file:
            log_path = Path(log_file).expanduser()
            try:
                log_path.parent.mkdir(parents=True, exist_ok=True)
                file_handler = logging.handlers.RotatingFileHandler(
                    log_path,
                    maxBytes=max_bytes,
                    backupCount=backup_count,
                )
            except OSError as e:
                root_logger.warning(f"Cannot write debug log to {log_path}: {e}")
            else:
                file_handler.setLevel(level)
                file_handler.setFormatter(logging.Formatter(log_format))
                root_logger.addHandler(file_handler)

        # Suppress noisy third-party loggers
        for lib_name in ['urllib3', 'asyncio']:
            logging.getLogger(lib_name).setLevel(logging.WARNING)

        _initialized = True


def get_logger(name: str = None) -> logging.Logger:
    """
    Get a logger instance with the given name.

    This ensures logging is configured before returning the logger.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured Logger instance
    """
    if not _initialized:
        setup_logging()

    return logging.getLogger(name)


def level_from_name(name: str, default: int = logging.INFO) -> int:
    """Translate a LOG_LEVEL string such as 'debug' into a logging level"""
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else default

"""
Logging configuration and utilities for Lyrics Finder
Provides colored console output and file logging with separation between user and diagnostic messages
"""

import logging
import logging.handlers
import re
import sys
import time
from pathlib import Path
from typing import Optional
import colorama
from colorama import Fore, Back, Style
from tqdm import tqdm

from ..config.settings import get_settings


# Initialize colorama for Windows compatibility
colorama.init()

# Libraries whose own logging is never wanted on the console
EXTERNAL_LIBS = ['aiohttp', 'aiohttp.client', 'aiohttp.access', 'asyncio', 'urllib3', 'mutagen']

FILE_FORMAT = '%(asctime)s | %(name)-30s | %(levelname)-8s | %(funcName)-20s | %(message)s'


class ConsoleMessageFilter(logging.Filter):
    """Filter to allow only user-facing messages to console unless debugging"""

    def __init__(self, show_debug: bool = False):
        super().__init__()
        self.show_debug = show_debug

    def filter(self, record):
        # Debug mode shows every diagnostic message
        if self.show_debug:
            return True

        # Allow all WARNING+ messages
        if record.levelno >= logging.WARNING:
            return True

        # Allow messages explicitly marked for console
        if getattr(record, 'console_output', False):
            return True

        return False


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the whole console line by level or by an explicit color"""

    COLORS = {
        'DEBUG': Fore.CYAN,
        'INFO': Fore.GREEN,
        'WARNING': Fore.YELLOW,
        'ERROR': Fore.RED,
        'CRITICAL': Fore.RED + Back.WHITE + Style.BRIGHT,
    }

    def __init__(self, fmt: Optional[str] = None, use_colors: bool = True):
        """
        Initialize colored formatter

        Args:
            fmt: Log format string
            use_colors: Whether to use colored output
        """
        super().__init__(fmt or '%(message)s')
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if not self.use_colors:
            return message

        # A record may carry its own color, e.g. magenta for fallback steps
        color = getattr(record, 'color', None)
        if color:
            color_code = getattr(Fore, str(color).upper(), '')
        else:
            color_code = self.COLORS.get(record.levelname, '')

        if not color_code:
            return message
        return f"{color_code}{message}{Style.RESET_ALL}"


class ProgressHandler(logging.Handler):
    """Console handler that writes through tqdm so progress bars stay intact"""

    def __init__(self, stream=None):
        super().__init__()
        self.stream = stream or sys.stdout

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            tqdm.write(msg, file=self.stream)
            self.flush()
        except Exception:
            self.handleError(record)

    def flush(self) -> None:
        if self.stream and hasattr(self.stream, 'flush'):
            self.stream.flush()


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    console_output: bool = True,
    colored_output: bool = True,
    debug: bool = False,
    max_size: str = "10MB",
    backup_count: int = 3
) -> None:
    """
    Setup application logging configuration with separated console/file output

    Args:
        level: Logging level for the log file (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file (None to disable file logging)
        console_output: Enable console logging
        colored_output: Enable colored console output
        debug: Show every diagnostic message on the console
        max_size: Maximum log file size before rotation
        backup_count: Number of backup log files to keep
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Capture everything, filter at handler level

    # Clear existing handlers
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)

    if console_output:
        console_handler = ProgressHandler(sys.stdout)
        console_handler.setLevel(logging.DEBUG)  # Let filter decide what to show
        console_handler.addFilter(ConsoleMessageFilter(show_debug=debug))
        console_handler.setFormatter(ColoredFormatter(fmt='%(message)s', use_colors=colored_output))
        root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=parse_size(max_size),
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG if debug else numeric_level)
        file_handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        root_logger.addHandler(file_handler)

    for lib in EXTERNAL_LIBS:
        lib_logger = logging.getLogger(lib)
        lib_logger.setLevel(logging.CRITICAL)
        lib_logger.propagate = False

    logging.getLogger('lyrics_finder').debug(
        f"Logging initialized - Level: {level}, Debug: {debug}, File: {log_file}"
    )


def parse_size(size_str: str) -> int:
    """
    Parse size string to bytes

    Args:
        size_str: Size string like "10MB", "1GB", "500KB"

    Returns:
        Size in bytes
    """
    size_str = size_str.upper().strip()

    multipliers = {
        'B': 1,
        'KB': 1024,
        'MB': 1024 ** 2,
        'GB': 1024 ** 3,
    }

    match = re.match(r'^(\d+(?:\.\d+)?)\s*([KMG]?B)$', size_str)
    if not match:
        raise ValueError(f"Invalid size format: {size_str}")

    number, unit = match.groups()
    return int(float(number) * multipliers[unit])


def get_logger(name: str) -> logging.Logger:
    """
    Get logger instance for a module

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance with a `console_info` method for user-facing messages
    """
    logger = logging.getLogger(name)

    def console_info(message: str, color: Optional[str] = None):
        """Log message that should appear on console for user"""
        extra = {'console_output': True}
        if color:
            extra['color'] = color
        logger.info(message, extra=extra)

    logger.console_info = console_info
    return logger


def configure_from_settings(debug: bool = False) -> None:
    """Configure logging from application settings"""
    settings = get_settings()

    log_file_path = None
    if settings.logging.file:
        log_file_path = Path(settings.logging.file).expanduser()
        if not log_file_path.is_absolute():
            log_file_path = settings.get_config_directory() / log_file_path

    setup_logging(
        level=settings.logging.level,
        log_file=str(log_file_path) if log_file_path else None,
        colored_output=settings.logging.colored_output,
        debug=debug,
        max_size=settings.logging.max_size,
        backup_count=settings.logging.backup_count
    )


class OperationLogger:
    """Logger for tracking a long-running operation with an optional progress bar"""

    def __init__(self, logger: logging.Logger, operation_name: str, show_progress: bool = True):
        """
        Initialize operation logger

        Args:
            logger: Base logger instance
            operation_name: Name of the operation
            show_progress: Draw a tqdm progress bar for counted progress
        """
        self.logger = logger
        self.operation_name = operation_name
        self.show_progress = show_progress
        self.start_time = None
        self.progress_bar = None

    def start(self, message: Optional[str] = None) -> None:
        """Start tracking operation"""
        self.start_time = time.time()
        self.logger.debug(message or f"Operation started: {self.operation_name}")

    def progress(self, current: int, total: int) -> None:
        """Advance the progress bar to `current` of `total`"""
        if not self.show_progress:
            return

        if self.progress_bar is None:
            self.progress_bar = tqdm(
                total=total,
                desc="Progress",
                bar_format="{desc}: {n}/{total}",
                file=sys.stdout,
                leave=False
            )

        self.progress_bar.n = current
        self.progress_bar.refresh()

    def complete(self, message: Optional[str] = None) -> None:
        """Mark operation as complete - close progress bar and print the completion marker"""
        self._close_progress_bar()

        if self.start_time:
            duration = time.time() - self.start_time
            self.logger.debug(f"Operation completed: {self.operation_name} in {duration:.2f}s")

        self.logger.console_info(message or f"{self.operation_name} completed.")

    def error(self, message: str, exception: Optional[Exception] = None) -> None:
        """Log operation error - close progress bar first"""
        self._close_progress_bar()
        self.logger.error(f"{self.operation_name} failed: {message}", exc_info=exception)

    def _close_progress_bar(self) -> None:
        if self.progress_bar:
            self.progress_bar.close()
            self.progress_bar = None

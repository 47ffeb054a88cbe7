"""
Logging configuration for sd-rg
Provides a centralized logger with stderr console output and optional file output.
Standard output is reserved for user data (stream mode) and progress messages.
"""
import inspect
import logging
import sys
from pathlib import Path
DEFAULT_LOGGER_NAME = "sdrg"
DEFAULT_FORMAT = "%(asctime)s - %(name)-25s - %(levelname)s - %(message)s"


def setup_logging(level=logging.WARNING, log_file=None, format_string=None, stream=None):
    """
    Setup logging configuration
    Args:
        level: Logging level (default: WARNING)
        log_file: Optional path to log file (default: None, console only)
        format_string: Custom format string (default: uses standard format)
        stream: Console stream (default: sys.stderr)
    """
    if format_string is None:
        format_string = DEFAULT_FORMAT
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(format_string, datefmt=date_format)
    root_logger = logging.getLogger(DEFAULT_LOGGER_NAME)
    root_logger.setLevel(level)
    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()
    console_handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)
    if log_file:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
    return root_logger


def get_logger(name=None):
    """
    Get a logger instance for a module
    Args:
        name: Logger name (default: None, uses calling module name)
    Returns:
        Logger instance
    """
    if name is None:
        frame = inspect.currentframe()
        caller = frame.f_back if frame else None
        if caller:
            name = caller.f_globals.get("__name__", DEFAULT_LOGGER_NAME)
        else:
            name = DEFAULT_LOGGER_NAME
    return logging.getLogger(name)


def resolve_level(level):
    """Translate a level name such as "debug" into a logging constant."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level}")
    return value


def init_logger(level=logging.WARNING, log_file=None):
    """
    Initialize the default logger (called once at startup)
    Args:
        level: Logging level or level name
        log_file: Optional log file path; nothing is written to disk when None
    """
    setup_logging(level=resolve_level(level), log_file=log_file)
    return logging.getLogger(DEFAULT_LOGGER_NAME)

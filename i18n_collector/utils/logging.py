"""Structured logging for the fragment collector."""

import logging
import sys
from typing import Optional
from pathlib import Path
from .colors import Colors

ROOT_LOGGER_NAME = 'i18n_collector'


class ColoredFormatter(logging.Formatter):
    """
    Formatter that colors console output by level.

    File output uses a plain formatter so log files stay free of
    ANSI escape codes.
    """

    LEVEL_COLORS = {
        logging.DEBUG: Colors.OKCYAN,
        logging.INFO: Colors.OKGREEN,
        logging.WARNING: Colors.WARNING,
        logging.ERROR: Colors.FAIL,
        logging.CRITICAL: Colors.FAIL + Colors.BOLD,
    }

    def __init__(self, fmt: Optional[str] = None, use_colors: bool = True):
        """
        Initialize the formatter.

        Args:
            fmt: Format string for log messages
            use_colors: Whether to wrap messages in ANSI colors
        """
        super().__init__(fmt)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)

        if self.use_colors:
            color = self.LEVEL_COLORS.get(record.levelno, '')
            message = f"{color}{message}{Colors.ENDC}"

        return message


class Logger:
    """
    Package logger.

    A single instance owns the handlers of the ``i18n_collector`` logger:
    - colored console output on stderr (stdout is left to CLI output)
    - optional file output with timestamps
    - verbose / quiet levels
    - child loggers per module via get_logger(name)
    """

    _instance: Optional['Logger'] = None
    _initialized: bool = False

    def __new__(cls) -> 'Logger':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if Logger._initialized:
            return

        self._logger = logging.getLogger(ROOT_LOGGER_NAME)
        self._logger.setLevel(logging.DEBUG)
        self._logger.handlers = []

        self._console_handler = self._create_console_handler()
        self._logger.addHandler(self._console_handler)

        self._file_handler: Optional[logging.FileHandler] = None

        Logger._initialized = True

    def _create_console_handler(
        self,
        level: int = logging.INFO,
        use_colors: Optional[bool] = None
    ) -> logging.StreamHandler:
        """
        Create the console handler.

        Args:
            level: Minimum log level for console output
            use_colors: Force colors on or off; None detects a terminal

        Returns:
            Configured StreamHandler
        """
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(level)

        if use_colors is None:
            use_colors = Colors.enabled(sys.stderr)

        handler.setFormatter(ColoredFormatter(fmt='%(message)s', use_colors=use_colors))
        return handler

    def _create_file_handler(
        self,
        file_path: Path,
        level: int = logging.DEBUG
    ) -> logging.FileHandler:
        """
        Create a file handler.

        Args:
            file_path: Path to log file
            level: Minimum log level for file output

        Returns:
            Configured FileHandler
        """
        file_path.parent.mkdir(parents=True, exist_ok=True)

        handler = logging.FileHandler(file_path, encoding='utf-8')
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(
            fmt='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        return handler

    def configure(
        self,
        verbose: bool = False,
        quiet: bool = False,
        log_file: Optional[Path] = None,
        use_colors: Optional[bool] = None
    ) -> None:
        """
        Configure console level, colors and the optional log file.

        Args:
            verbose: Enable DEBUG console output
            quiet: Only WARNING and above on the console
            log_file: Optional file path for logging
            use_colors: Force colors on or off; None detects a terminal
        """
        if quiet:
            console_level = logging.WARNING
        elif verbose:
            console_level = logging.DEBUG
        else:
            console_level = logging.INFO

        self._logger.removeHandler(self._console_handler)
        self._console_handler = self._create_console_handler(
            level=console_level,
            use_colors=use_colors
        )
        self._logger.addHandler(self._console_handler)

        if log_file:
            if self._file_handler:
                self._logger.removeHandler(self._file_handler)
                self._file_handler.close()
            self._file_handler = self._create_file_handler(log_file)
            self._logger.addHandler(self._file_handler)

    def get_logger(self, name: Optional[str] = None) -> logging.Logger:
        """
        Get the root package logger or a child of it.

        Args:
            name: Optional child name, e.g. 'core.collector'

        Returns:
            logging.Logger instance
        """
        if name:
            return logging.getLogger(f'{ROOT_LOGGER_NAME}.{name}')
        return self._logger

    def debug(self, msg: str, *args, **kwargs) -> None:
        self._logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        self._logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        self._logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        self._logger.error(msg, *args, **kwargs)

    def success(self, msg: str) -> None:
        """Log a success line with a check mark."""
        self._logger.info(f"✓ {msg}")

    def fail(self, msg: str) -> None:
        """Log a failure line with a cross mark."""
        self._logger.error(f"✗ {msg}")


_logger: Optional[Logger] = None


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a package logger, creating the shared handlers on first use.

    Args:
        name: Optional child name for hierarchical logging

    Returns:
        logging.Logger instance
    """
    global _logger
    if _logger is None:
        _logger = Logger()
    return _logger.get_logger(name)


def configure_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[Path] = None,
    use_colors: Optional[bool] = None
) -> None:
    """
    Configure the shared package logger.

    Args:
        verbose: Enable DEBUG console output
        quiet: Only WARNING and above on the console
        log_file: Optional file path for logging
        use_colors: Force colors on or off; None detects a terminal
    """
    global _logger
    if _logger is None:
        _logger = Logger()
    _logger.configure(
        verbose=verbose,
        quiet=quiet,
        log_file=log_file,
        use_colors=use_colors
    )


def reset_logger() -> None:
    """Reset the shared logger (mainly for testing)."""
    global _logger
    if _logger is not None:
        for handler in _logger._logger.handlers[:]:
            handler.close()
            _logger._logger.removeHandler(handler)
    _logger = None
    Logger._instance = None
    Logger._initialized = False

"""Centralized logging for kubebench.

Logging is configured once by the application (the CLI or the reconcile
loop embedding the compiler). Builders are library code: they log through
``Logger.component()`` which stays silent until someone configures logging.

Usage:
    from kubebench.utils.logger import Logger

    Logger.configure(level="INFO")
    log = Logger.get("builders.fio")
    log.info("Compiled fio-1")
"""

import logging
import sys
from enum import Enum
from pathlib import Path
from typing import TextIO


class LogLevel(Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def to_logging_level(self) -> int:
        """Convert to Python logging level."""
        level: int = getattr(logging, self.value)
        return level


class LoggerNotConfiguredError(Exception):
    """Raised when Logger.get() is called before Logger.configure()."""

    def __init__(self) -> None:
        super().__init__(
            "Logger not configured. Call Logger.configure() at application startup."
        )


class Logger:
    """Process wide logger setup rooted at ``kubebench``.

    Logs go to stderr by default so that rendered manifests written to
    stdout stay machine readable.
    """

    _configured: bool = False
    _root_name: str = "kubebench"

    @classmethod
    def configure(
        cls,
        level: str | LogLevel = "INFO",
        output: str | Path | TextIO | None = None,
        timestamps: bool = True,
    ) -> None:
        """Configure the root logger. Safe to call again to reconfigure.

        Args:
            level: Log level name or LogLevel value.
            output: None or "stderr" for sys.stderr, "stdout" for sys.stdout,
                a file path, or any object with a write() method.
            timestamps: Prefix messages with the time they were emitted.

        Raises:
            ValueError: If output is not one of the accepted forms.
        """
        if isinstance(level, str):
            level = LogLevel(level.upper())

        logger = logging.getLogger(cls._root_name)
        logger.setLevel(level.to_logging_level())

        for existing_handler in logger.handlers[:]:
            logger.removeHandler(existing_handler)
            existing_handler.close()

        handler: logging.Handler
        if output is None or output == "stderr":
            handler = logging.StreamHandler(sys.stderr)
        elif output == "stdout":
            handler = logging.StreamHandler(sys.stdout)
        elif isinstance(output, str | Path):
            handler = logging.FileHandler(str(output))
        elif hasattr(output, "write"):
            handler = logging.StreamHandler(output)
        else:
            raise ValueError(f"Invalid output: {type(output)}")

        handler.setLevel(level.to_logging_level())
        parts = ["%(asctime)s"] if timestamps else []
        parts += ["%(levelname)s", "[%(name)s]", "%(message)s"]
        handler.setFormatter(logging.Formatter(" ".join(parts)))
        logger.addHandler(handler)
        logger.propagate = False

        cls._configured = True

    @classmethod
    def get(cls, name: str | None = None) -> logging.Logger:
        """Get a configured logger named ``kubebench.<name>``.

        Raises:
            LoggerNotConfiguredError: If configure() hasn't been called.
        """
        if not cls._configured:
            raise LoggerNotConfiguredError()
        return cls._named(name)

    @classmethod
    def component(cls, name: str) -> logging.Logger:
        """Get a logger for library code.

        Unlike get(), never raises: before configure() the returned logger
        discards everything.
        """
        logger = cls._named(name)
        if not cls._configured:
            root = logging.getLogger(cls._root_name)
            if not root.handlers:
                root.addHandler(logging.NullHandler())
            root.propagate = False
        return logger

    @classmethod
    def set_level(cls, level: str | LogLevel) -> None:
        """Change the log level of an already configured logger."""
        if not cls._configured:
            raise LoggerNotConfiguredError()

        if isinstance(level, str):
            level = LogLevel(level.upper())

        logger = logging.getLogger(cls._root_name)
        logger.setLevel(level.to_logging_level())
        for handler in logger.handlers:
            handler.setLevel(level.to_logging_level())

    @classmethod
    def is_configured(cls) -> bool:
        """Check if logger has been configured."""
        return cls._configured

    @classmethod
    def _named(cls, name: str | None) -> logging.Logger:
        if name:
            return logging.getLogger(f"{cls._root_name}.{name}")
        return logging.getLogger(cls._root_name)

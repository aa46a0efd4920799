"""Logging configuration for the NBM archive client."""

import logging
from pathlib import Path

import colorlog

PACKAGE_LOGGER = "src"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _console_handlers(logger: logging.Logger) -> list[logging.Handler]:
    # FileHandler subclasses StreamHandler, so match the exact type
    return [h for h in logger.handlers if type(h) is logging.StreamHandler]


def setup_logger(
    name: str,
    log_file: Path | None = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> logging.Logger:
    """Set up a logger with colored console output and optional file output.

    Module loggers inside the package (``src.*``) get no handlers of their
    own; they propagate to the ``src`` logger, whose handlers are created on
    first use. Calling this again for an already configured logger changes
    its console level and, if given, adds a log file.

    Args:
        name: Logger name (typically __name__ from calling module).
        log_file: Optional path to log file. If None, only logs to console.
        console_level: Logging level for console output (default: INFO).
        file_level: Logging level for file output (default: DEBUG).

    Returns:
        Configured logger instance.

    Example:
        >>> logger = setup_logger(__name__)
        >>> logger.info("Validating request")
        >>> setup_logger("src", console_level=logging.WARNING)
    """
    if name.startswith(PACKAGE_LOGGER + "."):
        if not logging.getLogger(PACKAGE_LOGGER).handlers:
            setup_logger(PACKAGE_LOGGER)
        return logging.getLogger(name)

    logger = logging.getLogger(name)

    if logger.handlers:
        for handler in _console_handlers(logger):
            handler.setLevel(console_level)
    else:
        logger.setLevel(logging.DEBUG)  # Capture all levels, handlers filter

        console_handler = logging.StreamHandler()
        console_handler.setLevel(console_level)
        console_handler.setFormatter(
            colorlog.ColoredFormatter(
                "%(log_color)s" + LOG_FORMAT,
                datefmt=DATE_FORMAT,
                log_colors={
                    "DEBUG": "cyan",
                    "INFO": "green",
                    "WARNING": "yellow",
                    "ERROR": "red",
                    "CRITICAL": "red,bg_white",
                },
            )
        )
        logger.addHandler(console_handler)

    has_file = any(isinstance(h, logging.FileHandler) for h in logger.handlers)
    if log_file is not None and not has_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(file_handler)

        logger.debug(f"File logging enabled: {log_file}")

    return logger

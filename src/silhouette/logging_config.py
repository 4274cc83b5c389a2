"""
Logging configuration for Silhouette.

Library modules only log through ``get_logger``; handlers are installed by
``setup_logging``, which the CLI calls once per command.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_ROOT = "silhouette"


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Configure logging with rich handler for colored output.

    Args:
        verbose: Enable DEBUG level logging
        quiet: Suppress all but ERROR level logging
        log_file: Optional file path to write logs to

    Returns:
        Configured logger instance for silhouette
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    # Logs go to stderr so shapes printed on stdout stay machine-readable
    console = Console(stderr=True)

    handlers: list[logging.Handler] = [
        RichHandler(
            console=console,
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            markup=False,
            show_time=True,
            show_path=verbose,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        handlers.append(file_handler)

    logger = logging.getLogger(_ROOT)
    logger.handlers.clear()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Module name (e.g., 'silhouette.analyzer')
              If None, returns the root silhouette logger

    Returns:
        Logger instance
    """
    if name is None:
        return logging.getLogger(_ROOT)

    if not name.startswith(_ROOT):
        name = f"{_ROOT}.{name}"

    return logging.getLogger(name)

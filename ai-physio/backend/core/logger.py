"""Loguru sinks for the API process. Every record carries the request path ("-" outside a request)."""

import sys

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<magenta>{extra[path]}</magenta> | <cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[path]} | {name}:{function}:{line} - {message}"


def setup_logger(
    level: str = "INFO",
    log_file: str | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    logger.remove()
    logger.configure(extra={"path": "-"})

    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)

    if log_file:
        # loguru creates missing parent directories.
        logger.add(
            log_file,
            format=FILE_FORMAT,
            level=level,
            rotation=rotation,
            retention=retention,
            compression="zip",
        )

    logger.debug(f"Logging at {level}" + (f", file={log_file}" if log_file else ""))

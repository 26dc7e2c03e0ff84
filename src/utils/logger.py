"""Logging configuration using Loguru."""

import sys
from pathlib import Path

from loguru import logger

from src.config import LoggingConfig

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logging(config: LoggingConfig | None = None) -> None:
    """
    Configure Loguru sinks.

    Always logs to stderr with colors. When `config.log_to_file` is set, also
    writes rotating (optionally JSON-serialized) files to `config.log_dir`.

    Args:
        config: Logging configuration (defaults when omitted)
    """
    config = config or LoggingConfig()
    logger.remove()

    logger.add(sys.stderr, level=config.level, format=CONSOLE_FORMAT, colorize=True)

    if config.log_to_file:
        log_path = Path(config.log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_path / "mindloom_{time:YYYY-MM-DD}.log",
            level=config.level,
            format=FILE_FORMAT,
            rotation=config.file_rotation,
            retention=config.file_retention,
            compression=config.compression,
            serialize=config.serialize,
            enqueue=True,
        )


def get_logger(name: str, **context):
    """
    Get a logger for a module.

    Args:
        name: Module name (usually `__name__`)
        **context: Extra fields bound to every record (e.g. session_id)
    """
    return logger.bind(module=name, **context)

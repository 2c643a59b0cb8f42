"""
Stepwise logging setup.

Logging policy:
- logs/system.log: goal and step commands, store writes (INFO+)
- logs/error.log: failed writes and rollbacks, with stack traces (ERROR+)
- console: WARNING+ by default; STEPWISE_LOG_LEVEL or CONSOLE_LOG_LEVEL in
  runtime.yaml lowers it, e.g. DEBUG to see every no-op the tree engine skips
"""
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

from stepwise import paths
from stepwise.config_manager import config
from stepwise.exceptions import ConfigError

ROOT_LOGGER_NAME = "stepwise"
LOG_LEVEL_ENV = "STEPWISE_LOG_LEVEL"

FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
CONSOLE_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def resolve_level(level: Union[int, str, None]) -> int:
    """
    Turn a level name or number into a logging level.

    None falls back to STEPWISE_LOG_LEVEL, then to config.CONSOLE_LOG_LEVEL.
    """
    if level is None:
        level = os.getenv(LOG_LEVEL_ENV) or config.CONSOLE_LOG_LEVEL
    if isinstance(level, int):
        return level

    resolved = logging.getLevelName(str(level).strip().upper())
    if not isinstance(resolved, int):
        raise ConfigError(f"Unknown log level: {level}")
    return resolved


def _rotating_handler(path: Path, level: int) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        path,
        maxBytes=config.LOG_MAX_BYTES,
        backupCount=config.LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def setup_logging(
    log_level: int = logging.INFO,
    console_level: Union[int, str, None] = None,
    logs_dir: Optional[Path] = None,
) -> logging.Logger:
    """
    Initialize the ``stepwise`` logger.

    Args:
        log_level: system.log level (default INFO)
        console_level: console level, name or number (default from env/config)
        logs_dir: directory for log files (default <project_root>/logs)

    Returns:
        The configured ``stepwise`` logger
    """
    target_dir = logs_dir if logs_dir is not None else paths.LOGS_DIR
    target_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)  # handlers do the filtering

    # Repeated setup (tests, uvicorn reload) must not leak open log files
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.addHandler(_rotating_handler(target_dir / "system.log", log_level))
    logger.addHandler(_rotating_handler(target_dir / "error.log", logging.ERROR))

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(resolve_level(console_level))
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console_handler)

    logger.debug("Logging to %s", target_dir)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Return a module logger under the ``stepwise`` namespace.

    Args:
        name: module name, e.g. "mutator", "goal_store"
    """
    if name:
        return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
    return logging.getLogger(ROOT_LOGGER_NAME)

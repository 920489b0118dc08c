"""
Logging setup for the contributor league bot.

Handlers are attached once to a package-level logger; every module logs
through ``logging.getLogger(__name__)`` and propagates up to it.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple

from leaderboard_bot.config import Config

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _build_handlers(log_dir: Optional[str], level: int) -> Tuple[logging.Handler, ...]:
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    if not log_dir:
        return (console_handler,)

    # One log file per day
    path = Path(log_dir)
    path.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(
        path / f'contributor_league_{datetime.now().strftime("%Y%m%d")}.log',
        encoding='utf-8'
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)
    return console_handler, file_handler


def setup_logger(
    name: str = 'leaderboard_bot',
    log_dir: Optional[str] = None,
    library_loggers: Tuple[str, ...] = ('discord',)
) -> logging.Logger:
    """
    Configure the package logger and route library loggers to the same handlers.

    Args:
        name: Logger that receives the handlers; module loggers below it propagate
        log_dir: Directory for the daily log file, Config.LOG_DIR by default.
            An empty value logs to stdout only.
        library_loggers: Third-party loggers sharing the handlers at INFO

    Returns:
        The configured logger. Calling again returns it unchanged.
    """
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    level = logging.DEBUG if Config.DEBUG else logging.INFO
    handlers = _build_handlers(Config.LOG_DIR if log_dir is None else log_dir, level)

    logger.setLevel(level)
    logger.propagate = False
    for handler in handlers:
        logger.addHandler(handler)

    for library in library_loggers:
        library_logger = logging.getLogger(library)
        if library_logger.handlers:
            continue
        library_logger.setLevel(logging.INFO)
        for handler in handlers:
            library_logger.addHandler(handler)

    return logger

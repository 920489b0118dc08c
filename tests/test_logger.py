"""
Tests for the package logging setup.
"""

import logging

import pytest

from leaderboard_bot.utils.logger import setup_logger


@pytest.fixture
def fresh_logger_names():
    names = ["league_test", "league_test_lib"]
    yield names
    for name in names:
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)


def test_module_loggers_reach_the_daily_file(tmp_path, fresh_logger_names):
    package, library = fresh_logger_names
    setup_logger(package, log_dir=str(tmp_path), library_loggers=(library,))

    logging.getLogger(f"{package}.services.fetcher").warning("pull request scan stopped")
    logging.getLogger(library).info("gateway connected")

    for handler in logging.getLogger(package).handlers:
        handler.flush()
    (log_file,) = tmp_path.glob("contributor_league_*.log")
    text = log_file.read_text(encoding="utf-8")
    assert "pull request scan stopped" in text
    assert "gateway connected" in text


def test_setup_is_idempotent(tmp_path, fresh_logger_names):
    package, library = fresh_logger_names
    first = setup_logger(package, log_dir=str(tmp_path), library_loggers=(library,))
    second = setup_logger(package, log_dir=str(tmp_path), library_loggers=(library,))

    assert first is second
    assert len(first.handlers) == 2


def test_empty_log_dir_logs_to_stdout_only(fresh_logger_names):
    package, library = fresh_logger_names
    logger = setup_logger(package, log_dir="", library_loggers=())

    assert [type(h) for h in logger.handlers] == [logging.StreamHandler]

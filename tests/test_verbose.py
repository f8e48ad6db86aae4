"""Tests for logger setup."""

import logging

from checkchain.verbose import setup_logger


def test_logger_creates_debug_log(tmp_path):
    debug_file = tmp_path / "debug.log"
    logger = setup_logger(debug_file=debug_file, verbose=False)

    assert not logger.disabled
    assert logger.level == logging.DEBUG
    assert debug_file.exists()


def test_logger_writes_to_file(tmp_path):
    debug_file = tmp_path / "debug.log"
    logger = setup_logger(debug_file=debug_file, verbose=False)

    logger.debug("test message")

    content = debug_file.read_text()
    assert "test message" in content
    assert "[" in content  # timestamp


def test_module_loggers_reach_file(tmp_path):
    debug_file = tmp_path / "debug.log"
    setup_logger(debug_file=debug_file)

    logging.getLogger("checkchain.suite").debug("from a module")

    assert "from a module" in debug_file.read_text()


def test_verbose_mode_adds_stderr_handler(tmp_path):
    logger = setup_logger(debug_file=tmp_path / "debug.log", verbose=True)

    assert len(logger.handlers) == 2
    handler_types = [type(h).__name__ for h in logger.handlers]
    assert "StreamHandler" in handler_types
    assert "FileHandler" in handler_types


def test_non_verbose_mode_only_file_handler(tmp_path):
    logger = setup_logger(debug_file=tmp_path / "debug.log", verbose=False)

    handler_types = [type(h).__name__ for h in logger.handlers]
    assert handler_types == ["FileHandler"]


def test_no_file_and_not_verbose_has_no_handlers():
    logger = setup_logger()
    assert logger.handlers == []


def test_repeated_setup_replaces_handlers(tmp_path):
    setup_logger(debug_file=tmp_path / "a.log", verbose=True)
    logger = setup_logger(debug_file=tmp_path / "b.log", verbose=False)
    assert len(logger.handlers) == 1


def test_logger_creates_parent_directories(tmp_path):
    debug_file = tmp_path / "nested" / "dir" / "debug.log"
    setup_logger(debug_file=debug_file, verbose=False)

    assert debug_file.exists()


def test_distinct_logger_names_are_isolated(tmp_path):
    log1 = tmp_path / "one.log"
    log2 = tmp_path / "two.log"
    logger1 = setup_logger(log1, logger_name="checkchain_one")
    logger2 = setup_logger(log2, logger_name="checkchain_two")

    logger1.debug("Message one")
    logger2.debug("Message two")

    assert "Message two" not in log1.read_text()
    assert "Message one" not in log2.read_text()

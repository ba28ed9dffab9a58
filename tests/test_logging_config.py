import logging

from mobjectwrapper.logging_config import setup_logging


def test_setup_logging_replaces_handlers(tmp_path):
    log_file = tmp_path / "run.log"
    setup_logging(level=logging.DEBUG, log_file=str(log_file))
    setup_logging(level=logging.DEBUG, log_file=str(log_file))

    logger = logging.getLogger("mobjectwrapper")
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2

    logging.getLogger("mobjectwrapper.model").debug("hello from the model")
    for handler in logger.handlers:
        handler.flush()
    assert "hello from the model" in log_file.read_text(encoding="utf-8")


def test_setup_logging_reports_level_and_file(tmp_path):
    log_file = tmp_path / "cli.log"
    setup_logging(level=logging.DEBUG, log_file=str(log_file))
    for handler in logging.getLogger("mobjectwrapper").handlers:
        handler.flush()
    text = log_file.read_text(encoding="utf-8")
    assert "logging at DEBUG" in text
    assert str(log_file) in text

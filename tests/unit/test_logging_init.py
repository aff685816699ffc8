from __future__ import annotations

import logging

from voucher_ingest.logging.init import (
    APP_LOGGER_NAME,
    LabeledFormatter,
    SUMMARY_LEVEL,
    get_logger,
    log_summary,
    setup_logging,
)


def test_setup_logging_creates_logger_with_labeled_formatter():
    logger = setup_logging()
    assert logger.name == APP_LOGGER_NAME
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, LabeledFormatter)
    assert logger.propagate is False


def test_setup_logging_is_idempotent():
    first = setup_logging()
    second = setup_logging()
    assert first is second
    assert len(second.handlers) == 1
    assert get_logger() is first


def test_debug_flag_lowers_level():
    logger = setup_logging(debug=True)
    assert logger.level == logging.DEBUG


def test_logging_labeled_prefixes(capsys):
    logger = setup_logging()
    logger.info("info message")
    logger.warning("warning message")
    logger.error("error message")
    log_summary("files=1/1")
    out = capsys.readouterr().out.splitlines()
    assert out == [
        "INFO info message",
        "WARN warning message",
        "ERROR error message",
        "SUMMARY files=1/1",
    ]


def test_module_loggers_propagate_to_app_logger(capsys):
    setup_logging()
    logging.getLogger(f"{APP_LOGGER_NAME}.services.pipeline").warning("columns collide")
    assert "WARN columns collide" in capsys.readouterr().out


def test_summary_level_label():
    record = logging.LogRecord(APP_LOGGER_NAME, SUMMARY_LEVEL, __file__, 1, "done", None, None)
    assert LabeledFormatter().format(record) == "SUMMARY done"

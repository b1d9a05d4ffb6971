from __future__ import annotations

import logging

import pytest

from r2skim.utils.logger import (
    LOGGER_NAME,
    configure_logging_levels,
    get_logger,
    setup_logger,
)


@pytest.fixture
def restore_levels():
    r2skim_logger = logging.getLogger(LOGGER_NAME)
    r2pipe_logger = logging.getLogger("r2pipe")
    saved = (r2skim_logger.level, r2pipe_logger.level)
    yield
    r2skim_logger.setLevel(saved[0])
    r2pipe_logger.setLevel(saved[1])


def test_setup_logger_is_idempotent(restore_levels):
    first = setup_logger()
    handlers = list(first.handlers)
    second = setup_logger()
    assert first is second
    assert second.handlers == handlers
    assert handlers


def test_module_loggers_are_children():
    root = get_logger()
    assert root.name == LOGGER_NAME
    assert get_logger("r2skim.rules.base_rule").parent is root


def test_quiet_silences_r2pipe(restore_levels):
    configure_logging_levels(verbose=False, quiet=True)
    assert logging.getLogger("r2pipe").level == logging.CRITICAL
    assert logging.getLogger(LOGGER_NAME).level == logging.ERROR


def test_verbose_and_default_levels(restore_levels):
    configure_logging_levels(verbose=True, quiet=False)
    assert logging.getLogger(LOGGER_NAME).level == logging.INFO

    configure_logging_levels(verbose=False, quiet=False)
    assert logging.getLogger(LOGGER_NAME).level == logging.WARNING

import logging

import pytest

from chip8vm.log import LOG_FORMAT, SETUP_LOGGING


@pytest.fixture
def restore_logger():
    logger = logging.getLogger('chip8vm')
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


def test_setup_logging(restore_logger):
    logger = SETUP_LOGGING(logging.DEBUG)

    assert logger.name == 'chip8vm'
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert logger.handlers[0].formatter._fmt == LOG_FORMAT


def test_setup_logging_twice_keeps_one_handler(restore_logger):
    SETUP_LOGGING()
    logger = SETUP_LOGGING()

    assert len(logger.handlers) == 1

import logging

from streamsplit.core.logging_utils import NOISY_LOGGERS, setup_logging


def test_database_loggers_are_quieted():
    setup_logging("DEBUG")

    for name in NOISY_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING


def test_unknown_level_name_does_not_raise():
    setup_logging("chatty")

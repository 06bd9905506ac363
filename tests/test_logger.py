import logging

from eurofx.utils.logger import get_logger


def test_get_logger_returns_named_logger() -> None:
    logger = get_logger("eurofx.tests")

    assert isinstance(logger, logging.Logger)
    assert logger.name == "eurofx.tests"
    assert get_logger("eurofx.tests") is logger

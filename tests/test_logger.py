import logging

from blogpage.logger import DEFAULT_FORMAT, VERBOSE_FORMAT, setup_logger


def test_setup_logger_does_not_stack_handlers() -> None:
    logger = setup_logger(name="blogpage.test")
    setup_logger(name="blogpage.test")

    assert len(logger.handlers) == 1
    assert logger.handlers[0].formatter._fmt == DEFAULT_FORMAT
    assert logger.level == logging.INFO
    assert logger.propagate is False


def test_verbose_logger_logs_debug_with_module_name() -> None:
    logger = setup_logger(name="blogpage.test", level="WARNING", verbose=True)

    assert logger.level == logging.DEBUG
    assert logger.handlers[0].formatter._fmt == VERBOSE_FORMAT

import logging

import pytest


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Drop the console handler so each test gets one bound to its own stderr."""
    yield
    logger = logging.getLogger('lnextract')
    for h in list(logger.handlers):
        if getattr(h, '_lnextract', False):
            logger.removeHandler(h)
    logger.setLevel(logging.NOTSET)

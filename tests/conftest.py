import logging
from collections.abc import Generator

import pytest

from mrstat.testing.conftest import (  # noqa: F401
    mock_merge_requests,
    sample_blocked_merge_request,
    sample_config,
    sample_merge_request,
)


@pytest.fixture(autouse=True)
def reset_mrstat_loggers() -> Generator[None, None, None]:
    """Undo configure_logging() so handlers and levels don't leak between tests."""
    yield
    for name in ("mrstat", "mrstat.http", "mrstat.config"):
        logger = logging.getLogger(name)
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)

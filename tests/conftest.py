from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest

here = Path(__file__).parent
root_path = here.parent

UUID_BYTES = bytes([95, 131, 49, 101, 176, 212, 77, 86, 178, 31, 80, 13, 41, 189, 148, 174])


@pytest.fixture
def update_params() -> list[object]:
    return [None, UUID_BYTES]


@pytest.fixture
def reset_sqldevlog_logging() -> Generator[None, None, None]:
    logger = logging.getLogger("sqldevlog")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate

import logging
from collections.abc import Generator

import pytest


@pytest.fixture(autouse=True)
def restore_root_logger() -> Generator[None]:
    """The CLI callback reconfigures the root logger; put it back after each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)

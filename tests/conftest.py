from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from tests._fixtures.go_tree import GoTreeBuilder


@pytest.fixture
def go_tree(tmp_path: Path) -> GoTreeBuilder:
    """Provide a reusable Go source tree rooted at the pytest tmp_path."""
    return GoTreeBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _reset_proper_logger() -> Iterator[None]:
    """Undo configure_logging so records keep reaching caplog."""
    yield
    logger = logging.getLogger("proper")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)

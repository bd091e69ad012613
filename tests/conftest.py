import logging

import pytest


@pytest.fixture(autouse=True)
def restore_root_log_level():
    """Engine.initialize() changes the root level; put it back."""
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)

"""Global test fixtures and setup"""

import logging

import pytest

from vaccine_check import store


@pytest.fixture(autouse=True)
def isolated_fs_options():
    """Filesystem options set by one CLI run should not leak into the next test"""
    yield
    store.reset_user_fs_options()


@pytest.fixture(autouse=True)
def isolated_log_level():
    """--verbose changes the root log level, so put it back afterward"""
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)

"""Pytest configuration and shared fixtures."""

import pytest

from timeshift.config import reset_timeshift_config


@pytest.fixture(autouse=True)
def reset_config_for_all_tests():
    """Reset the module configuration before and after each test.

    The configuration is a module-level singleton that persists across
    tests. This fixture ensures each test starts with the defaults.
    """
    reset_timeshift_config()
    yield
    reset_timeshift_config()


"""Pytest configuration and shared fixtures for bassert tests."""

import pytest
from bassert._config import reset_config
from bassert._logging import clear_log_hooks


@pytest.fixture(autouse=True)
def fresh_config():
    """Each test starts from the default, environment-derived configuration."""
    reset_config()
    clear_log_hooks()
    yield
    reset_config()
    clear_log_hooks()


@pytest.fixture
def counter():
    """A call recorder usable inside checked expressions."""

    class Counter:
        def __init__(self) -> None:
            self.calls: list[object] = []

        def __call__(self, value: object = None) -> object:
            self.calls.append(value)
            return value

    return Counter()

"""
Shared pytest fixtures for dynrecord tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import os as _os
import typing as _typing
import unittest.mock as _mock

import pytest as _pytest

import dynrecord.config as config

# Environment keys that should be cleared for isolated tests
ENV_KEYS_TO_CLEAR = [
    "DYNRECORD_IDENTIFIER_PATTERN",
    "DYNRECORD_LOG_DEFAULT_READS",
    "DYNRECORD_ENV_FILE",
]


@_pytest.fixture
def clean_env() -> dict[str, str]:
    """
    Return environment dict with test-related keys removed.

    Use with mock.patch.dict to isolate tests from the actual environment.
    """
    return {k: v for k, v in _os.environ.items() if k not in ENV_KEYS_TO_CLEAR}


@_pytest.fixture
def isolated_env(clean_env: dict[str, str]) -> _typing.Any:
    """
    Context manager that isolates tests from environment variables.

    Usage:
        def test_something(isolated_env):
            with isolated_env:
                settings = config.Settings.construct_without_dotenv()
    """
    return _mock.patch.dict(_os.environ, clean_env, clear=True)


@_pytest.fixture(autouse=True)
def fresh_settings(clean_env: dict[str, str]) -> _typing.Iterator[None]:
    """
    Run every test against default settings loaded from a clean environment.

    Records read settings lazily through config.get_settings(), which is
    cached per process; clear the cache on both sides of each test so
    environment overrides in one test never leak into another.
    """
    with _mock.patch.dict(_os.environ, clean_env, clear=True):
        config.get_settings.cache_clear()
        yield
    config.get_settings.cache_clear()

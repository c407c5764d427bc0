"""Shared fixtures for all tests."""

import pytest

from ruleset_core.config import get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Reset cached settings so environment changes in one test don't leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()

"""Pytest configuration for fieldcache tests."""

import pytest


@pytest.fixture(autouse=True)
def reset_decorator_config():
    """Reset decorator configuration before each test."""
    import fieldcache.decorators

    # Store original value
    original_service = fieldcache.decorators._field_cache

    yield

    # Restore original value after test
    fieldcache.decorators._field_cache = original_service

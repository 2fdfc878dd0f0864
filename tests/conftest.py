"""Pytest configuration and shared fixtures for bailout tests."""

import pytest


@pytest.fixture
def oops():
    """Sample cause for testing."""
    return ValueError('oops')

"""Shared test fixtures."""

import pytest

from stillhouse.core.container import Container
from stillhouse.core.helpers import create_group_token, create_token
from stillhouse.core.module import Module


@pytest.fixture
def container():
    """Create a fresh container for testing."""
    return Container("test")


@pytest.fixture
def module():
    """Create a fresh module for testing."""
    return Module("test")


@pytest.fixture
def token():
    """A single-kind token with a debug name."""
    return create_token(name="service")


@pytest.fixture
def group_token():
    """A group-kind token with a debug name."""
    return create_group_token("plugins")



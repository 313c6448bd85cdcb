"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- The anyio backend used by async tests
"""

import pytest


@pytest.fixture
def anyio_backend() -> str:
    """Run async tests on asyncio only."""
    return "asyncio"

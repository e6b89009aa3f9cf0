"""Pytest configuration and fixtures for envwire tests."""

import pytest

from envwire.log import reset_logging
from envwire.registry import CandidateRegistry


@pytest.fixture(autouse=True)
def clean_logging():
    """Start and finish every test with no log handlers installed."""
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def registry() -> CandidateRegistry:
    return CandidateRegistry()

"""
Test configuration for the stagecraft test suite.
"""

import pytest

from stagecraft.pipeline.config import TRACE_ENV_VAR


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as fast isolated unit tests")


@pytest.fixture(autouse=True)
def _isolate_trace_env(monkeypatch):
    """Keep a developer's STAGECRAFT_TRACE setting from leaking into tests."""
    monkeypatch.delenv(TRACE_ENV_VAR, raising=False)
